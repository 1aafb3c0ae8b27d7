"""
Slug and identifier generation.
"""

from __future__ import annotations

import re
import uuid

# Word characters are ASCII-only. Whitespace is the ECMAScript set, which
# differs from Python's `\s` (no \x1c-\x1f or \x85, but includes \ufeff).
_SPACE = r"\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
_DISALLOWED = re.compile(rf"[^A-Za-z0-9_{_SPACE}]")
_WHITESPACE_RUN = re.compile(rf"[{_SPACE}]+")


def slugify(title: str) -> str:
    """Derive a lowercase, hyphenated slug from a title.

    Characters other than letters, digits, underscores and whitespace are
    dropped, then each whitespace run becomes a single hyphen. Leading and
    trailing whitespace therefore yields leading and trailing hyphens:

        >>> slugify("My, Topic!")
        'my-topic'
        >>> slugify(" Client A ")
        '-client-a-'
    """
    return _WHITESPACE_RUN.sub("-", _DISALLOWED.sub("", title.lower()))


def new_id() -> str:
    """Return a fresh record identifier. Never derived from a slug."""
    return str(uuid.uuid4())
