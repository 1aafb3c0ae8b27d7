"""
Content store: content items keyed by id, each attached to one topic.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Iterator

import structlog

from .schemas import Content, utcnow
from .slugs import new_id

log = structlog.get_logger()


class ContentStore:
    """Owns the content collection.

    `topic_id` values are trusted: nothing here checks that the topic
    exists. `on_change` receives the whole collection after every
    effective mutation.
    """

    def __init__(
        self,
        contents: Iterable[Content] = (),
        on_change: Callable[[list[Content]], None] | None = None,
    ):
        self._contents: dict[str, Content] = {c.id: c for c in contents}
        self._on_change = on_change

    def __len__(self) -> int:
        return len(self._contents)

    def __iter__(self) -> Iterator[Content]:
        return iter(list(self._contents.values()))

    def all(self) -> list[Content]:
        return list(self._contents.values())

    def by_id(self, content_id: str) -> Content | None:
        return self._contents.get(content_id)

    def by_topic_id(self, topic_id: str) -> list[Content]:
        return [c for c in self._contents.values() if c.topic_id == topic_id]

    def recent(self, limit: int = 5) -> list[Content]:
        """Most recently created items first."""
        ordered = sorted(self._contents.values(), key=lambda c: c.created_at, reverse=True)
        return ordered[:limit]

    # --- Mutations ---

    def create(
        self, topic_id: str, title: str, body: str, actor_id: str | None
    ) -> Content | None:
        if not actor_id:
            log.debug("contents.create_skipped", reason="no_actor", topic_id=topic_id)
            return None

        now = utcnow()
        content = Content(
            id=new_id(),
            topic_id=topic_id,
            title=title,
            body=body,
            created_at=now,
            updated_at=now,
            created_by=actor_id,
        )
        self._contents[content.id] = content
        log.info("contents.created", content_id=content.id, topic_id=topic_id, actor=actor_id)
        self._changed()
        return content

    def update(self, content_id: str, title: str, body: str) -> Content | None:
        content = self._contents.get(content_id)
        if content is None:
            log.debug("contents.update_skipped", content_id=content_id)
            return None

        content.title = title
        content.body = body
        content.updated_at = utcnow()
        log.info("contents.updated", content_id=content_id)
        self._changed()
        return content

    def delete(self, content_id: str) -> bool:
        if self._contents.pop(content_id, None) is None:
            log.debug("contents.delete_skipped", content_id=content_id)
            return False
        log.info("contents.deleted", content_id=content_id)
        self._changed()
        return True

    def delete_by_topic_ids(self, topic_ids: Collection[str]) -> int:
        """Remove every item attached to one of `topic_ids`. Returns the count removed."""
        doomed = [c.id for c in self._contents.values() if c.topic_id in topic_ids]
        for content_id in doomed:
            del self._contents[content_id]
        if doomed:
            log.info("contents.cascade_deleted", count=len(doomed))
            self._changed()
        return len(doomed)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.all())
