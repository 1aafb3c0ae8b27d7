"""
Workspace: one explicit handle over the topic tree and its storage.

A workspace is built once per process or session and passed to whatever
needs it. It must be opened before use:

    async with Workspace(SqliteBlobStore("./data/topictree.db")) as ws:
        topic = ws.topics.create("Clients", None, actor_id)
        ws.contents.create(topic.id, "Notes", "<p>...</p>", actor_id)

All store calls are synchronous and must run on the event loop that
opened the workspace.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, Union

import structlog

from .blobstore import BlobStore, MemoryBlobStore, SqliteBlobStore
from .config import TopicTreeConfig
from .contents import ContentStore
from .errors import StoreNotOpenError
from .integrity import IntegrityIssue, check_integrity
from .metrics import MetricsCollector
from .persistence import PersistenceSynchronizer
from .schemas import Content, Topic
from .topics import TopicStore
from .tree import TreeIndex

log = structlog.get_logger()

ActorProvider = Callable[[], Union[str, None, Awaitable[Union[str, None]]]]


class Workspace:
    def __init__(
        self,
        blobs: BlobStore,
        *,
        topics_key: str = "topics",
        contents_key: str = "contents",
        seed: bool = True,
        actor: ActorProvider | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self.blobs = blobs
        self.metrics = metrics or MetricsCollector()
        self.sync = PersistenceSynchronizer(
            blobs,
            topics_key=topics_key,
            contents_key=contents_key,
            seed=seed,
            metrics=self.metrics,
        )
        self._actor = actor
        self._topics: TopicStore | None = None
        self._contents: ContentStore | None = None

    @classmethod
    def from_config(
        cls, config: TopicTreeConfig, actor: ActorProvider | None = None
    ) -> "Workspace":
        storage = config.storage
        blobs: BlobStore
        if storage.backend == "memory":
            blobs = MemoryBlobStore()
        else:
            blobs = SqliteBlobStore(storage.db_path)
        return cls(
            blobs,
            topics_key=storage.topics_key,
            contents_key=storage.contents_key,
            seed=config.seed.enabled,
            actor=actor,
        )

    # --- Lifecycle ---

    async def open(self) -> None:
        await self.blobs.open()
        try:
            topics, contents = await self.sync.load()
        except Exception:
            await self.blobs.close()
            raise
        self._contents = ContentStore(contents, on_change=self.sync.save_contents)
        self._topics = TopicStore(
            topics, contents=self._contents, on_change=self.sync.save_topics
        )
        log.info("workspace.opened", topics=len(self._topics), contents=len(self._contents))

    async def flush(self) -> None:
        await self.sync.flush()

    async def close(self) -> None:
        await self.sync.flush()
        await self.blobs.close()
        self._topics = None
        self._contents = None
        log.info("workspace.closed")

    async def __aenter__(self) -> "Workspace":
        await self.open()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        return self._topics is not None

    # --- Stores ---

    @property
    def topics(self) -> TopicStore:
        if self._topics is None:
            raise StoreNotOpenError("topic store")
        return self._topics

    @property
    def contents(self) -> ContentStore:
        if self._contents is None:
            raise StoreNotOpenError("content store")
        return self._contents

    @property
    def tree(self) -> TreeIndex:
        return self.topics.tree

    # --- Actor-aware creation ---

    async def current_actor(self) -> str | None:
        """Resolve the acting user, awaiting the provider if it is async."""
        if self._actor is None:
            return None
        actor = self._actor()
        if inspect.isawaitable(actor):
            actor = await actor
        return actor

    async def create_topic(self, title: str, parent_id: str | None = None) -> Topic | None:
        actor = await self.current_actor()
        return self.topics.create(title, parent_id, actor)

    async def create_content(self, topic_id: str, title: str, body: str) -> Content | None:
        actor = await self.current_actor()
        return self.contents.create(topic_id, title, body, actor)

    # --- Reporting ---

    def check(self) -> list[IntegrityIssue]:
        return check_integrity(self.topics.all(), self.contents.all())

    def stats(self) -> dict[str, Any]:
        self.metrics.observe_tree(
            topics=len(self.topics),
            contents=len(self.contents),
            roots=len(self.tree.roots()),
        )
        return self.metrics.to_dict()
