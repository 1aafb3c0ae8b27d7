"""
topictree: hierarchical topics and attached content

An in-memory topic/content tree with cascading deletes, title-derived
slugs, and write-through persistence to a key-value blob store.
"""

__version__ = "0.1.0"
