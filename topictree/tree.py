"""
Read-only structural queries over the live topic collection.

Nothing is cached: every call scans the collection as it is right now,
so results always reflect the latest mutation.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from .schemas import Topic


class TreeIndex:
    """Parent/child view over a `{topic_id: Topic}` mapping owned elsewhere."""

    def __init__(self, topics: Mapping[str, Topic]):
        self._topics = topics

    def by_id(self, topic_id: str) -> Topic | None:
        return self._topics.get(topic_id)

    def children_of(self, parent_id: str | None) -> list[Topic]:
        """Topics whose parent is `parent_id`, in insertion order. `None` gives roots."""
        return [t for t in self._topics.values() if t.parent_id == parent_id]

    def roots(self) -> list[Topic]:
        return self.children_of(None)

    def descendants(self, topic_id: str) -> set[str]:
        """Ids of every topic below `topic_id`, not including itself."""
        found: set[str] = set()
        frontier = [topic_id]
        while frontier:
            current = frontier.pop()
            for child in self.children_of(current):
                if child.id not in found:
                    found.add(child.id)
                    frontier.append(child.id)
        return found

    def ancestors(self, topic_id: str) -> list[Topic]:
        """Parent chain from the immediate parent up to the root.

        Stops early at a parent id that does not resolve.
        """
        chain: list[Topic] = []
        seen = {topic_id}
        topic = self._topics.get(topic_id)
        while topic is not None and topic.parent_id is not None:
            if topic.parent_id in seen:
                break
            seen.add(topic.parent_id)
            topic = self._topics.get(topic.parent_id)
            if topic is not None:
                chain.append(topic)
        return chain

    def walk(self, parent_id: str | None = None, depth: int = 0) -> Iterator[tuple[Topic, int]]:
        """Depth-first, pre-order `(topic, depth)` pairs below `parent_id`."""
        for topic in self.children_of(parent_id):
            yield topic, depth
            yield from self.walk(topic.id, depth + 1)
