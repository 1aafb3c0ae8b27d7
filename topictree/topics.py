"""
Topic store: the topic hierarchy and its cascading delete.

A topic's `parent_id` must name an existing topic when it is created.
That is a precondition on callers, not something checked here. Since
topics cannot be reparented, the hierarchy stays a forest.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

import structlog

from .contents import ContentStore
from .schemas import Topic, utcnow
from .slugs import new_id, slugify
from .tree import TreeIndex

log = structlog.get_logger()


class TopicStore:
    """Owns the topic collection.

    Removing topics also clears their content through the `contents`
    store handle. `on_change` receives the whole topic collection after
    every effective mutation.
    """

    def __init__(
        self,
        topics: Iterable[Topic] = (),
        contents: ContentStore | None = None,
        on_change: Callable[[list[Topic]], None] | None = None,
    ):
        self._topics: dict[str, Topic] = {t.id: t for t in topics}
        self._contents = contents if contents is not None else ContentStore()
        self._on_change = on_change
        self.tree = TreeIndex(self._topics)

    def __len__(self) -> int:
        return len(self._topics)

    def __iter__(self) -> Iterator[Topic]:
        return iter(list(self._topics.values()))

    def all(self) -> list[Topic]:
        return list(self._topics.values())

    def by_id(self, topic_id: str) -> Topic | None:
        return self.tree.by_id(topic_id)

    # --- Mutations ---

    def create(self, title: str, parent_id: str | None, actor_id: str | None) -> Topic | None:
        if not actor_id:
            log.debug("topics.create_skipped", reason="no_actor", title=title)
            return None

        now = utcnow()
        topic = Topic(
            id=new_id(),
            title=title,
            slug=slugify(title),
            parent_id=parent_id,
            created_at=now,
            updated_at=now,
            created_by=actor_id,
        )
        self._topics[topic.id] = topic
        log.info(
            "topics.created",
            topic_id=topic.id,
            slug=topic.slug,
            parent_id=parent_id,
            actor=actor_id,
        )
        self._changed()
        return topic

    def rename(self, topic_id: str, new_title: str) -> Topic | None:
        topic = self._topics.get(topic_id)
        if topic is None:
            log.debug("topics.rename_skipped", topic_id=topic_id)
            return None

        topic.title = new_title
        topic.slug = slugify(new_title)
        topic.updated_at = utcnow()
        log.info("topics.renamed", topic_id=topic_id, slug=topic.slug)
        self._changed()
        return topic

    def delete(self, topic_id: str) -> set[str]:
        """Remove a topic, all topics below it, and their content.

        Returns the ids of the removed topics (empty for an unknown id).
        """
        if topic_id not in self._topics:
            log.debug("topics.delete_skipped", topic_id=topic_id)
            return set()

        # Collect the whole subtree before removing anything; children_of
        # stops seeing grandchildren once their parent is gone.
        doomed = {topic_id} | self.tree.descendants(topic_id)
        for doomed_id in doomed:
            del self._topics[doomed_id]
        log.info("topics.deleted", topic_id=topic_id, cascade=len(doomed) - 1)
        self._changed()

        self._contents.delete_by_topic_ids(doomed)
        return doomed

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.all())
