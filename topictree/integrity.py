"""
Referential-integrity report for topic and content collections.

Stores trust their inputs and never run this on their own. It is meant
for tests, migrations and the `check` CLI command.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel

from .schemas import Content, Topic


class IssueKind(str, Enum):
    DUPLICATE_TOPIC_ID = "duplicate_topic_id"
    DUPLICATE_CONTENT_ID = "duplicate_content_id"
    DANGLING_PARENT = "dangling_parent"
    CYCLE = "cycle"
    ORPHANED_CONTENT = "orphaned_content"


class IntegrityIssue(BaseModel):
    kind: IssueKind
    record_id: str
    detail: str


def check_integrity(
    topics: Iterable[Topic], contents: Iterable[Content]
) -> list[IntegrityIssue]:
    """Return every integrity problem found; an empty list means consistent."""
    topics = list(topics)
    contents = list(contents)
    issues: list[IntegrityIssue] = []

    for topic_id, n in Counter(t.id for t in topics).items():
        if n > 1:
            issues.append(IntegrityIssue(
                kind=IssueKind.DUPLICATE_TOPIC_ID,
                record_id=topic_id,
                detail=f"{n} topics share this id",
            ))
    for content_id, n in Counter(c.id for c in contents).items():
        if n > 1:
            issues.append(IntegrityIssue(
                kind=IssueKind.DUPLICATE_CONTENT_ID,
                record_id=content_id,
                detail=f"{n} content items share this id",
            ))

    parents = {t.id: t.parent_id for t in topics}

    for topic in topics:
        if topic.parent_id is not None and topic.parent_id not in parents:
            issues.append(IntegrityIssue(
                kind=IssueKind.DANGLING_PARENT,
                record_id=topic.id,
                detail=f"parent {topic.parent_id!r} does not exist",
            ))

    for topic_id in sorted(_cycle_members(parents)):
        issues.append(IntegrityIssue(
            kind=IssueKind.CYCLE,
            record_id=topic_id,
            detail="topic is its own ancestor",
        ))

    for content in contents:
        if content.topic_id not in parents:
            issues.append(IntegrityIssue(
                kind=IssueKind.ORPHANED_CONTENT,
                record_id=content.id,
                detail=f"topic {content.topic_id!r} does not exist",
            ))

    return issues


def _cycle_members(parents: dict[str, str | None]) -> set[str]:
    on_cycle: set[str] = set()
    for start in parents:
        path: list[str] = []
        seen: set[str] = set()
        current: str | None = start
        while current is not None and current in parents and current not in seen:
            seen.add(current)
            path.append(current)
            current = parents[current]
        if current is not None and current in seen:
            on_cycle.update(path[path.index(current):])
    return on_cycle
