"""
Exceptions raised by topictree.

Missing ids and missing actors are never errors; mutations on them are
silent no-ops. Only misuse of an unopened workspace and corrupt snapshots
are raised.
"""

from __future__ import annotations


class TopicTreeError(Exception):
    """Base class for topictree errors."""


class StoreNotOpenError(TopicTreeError):
    """A store was used before the workspace attached its collections."""

    def __init__(self, what: str = "workspace"):
        super().__init__(f"{what} is not open; call `await Workspace.open()` first")


class SnapshotDecodeError(TopicTreeError):
    """A stored collection blob failed to decode against its schema."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Corrupt snapshot under key {key!r}: {reason}")
