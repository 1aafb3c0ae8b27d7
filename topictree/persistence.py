"""
Write-through persistence for the topic and content collections.

At open, each collection is read from its blob and decoded strictly; a
missing blob installs the seed data instead. After each mutation the
owning store hands over its whole collection, which is serialized at once
and written in the background as a full overwrite of that blob.

Writes are best-effort: a failed write is logged and counted, and the
in-memory collections stay authoritative until the next write succeeds.
The two blobs are written independently, so a crash between them can
leave storage with topics and content from different moments.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TypeVar

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from .blobstore import BlobStore
from .errors import SnapshotDecodeError
from .metrics import MetricsCollector
from .schemas import (
    CONTENT_LIST,
    TOPIC_LIST,
    Content,
    Topic,
    dump_contents,
    dump_topics,
    seed_contents,
    seed_topics,
)

log = structlog.get_logger()

R = TypeVar("R", bound=BaseModel)


class PersistenceSynchronizer:
    """Loads both collections and keeps their blobs in step with memory."""

    def __init__(
        self,
        blobs: BlobStore,
        topics_key: str = "topics",
        contents_key: str = "contents",
        seed: bool = True,
        metrics: MetricsCollector | None = None,
    ):
        self._blobs = blobs
        self.topics_key = topics_key
        self.contents_key = contents_key
        self._seed = seed
        self._metrics = metrics or MetricsCollector()
        self._pending: dict[str, str] = {}
        self._writer: asyncio.Task | None = None

    # --- Loading ---

    async def load(self) -> tuple[list[Topic], list[Content]]:
        """Decode both collections, then schedule writes for any that were seeded.

        Nothing is written unless both collections decode.
        """
        topics, topics_seeded = await self._load_collection(
            self.topics_key, TOPIC_LIST, seed_topics
        )
        contents, contents_seeded = await self._load_collection(
            self.contents_key, CONTENT_LIST, seed_contents
        )
        if topics_seeded:
            self.save_topics(topics)
        if contents_seeded:
            self.save_contents(contents)
        return topics, contents

    async def _load_collection(
        self,
        key: str,
        adapter: TypeAdapter[list[R]],
        seed: Callable[[], list[R]],
    ) -> tuple[list[R], bool]:
        raw = await self._blobs.get(key)
        if raw is None:
            records = seed() if self._seed else []
            log.info("persistence.seeded", key=key, count=len(records))
            return records, True

        try:
            records = adapter.validate_json(raw)
        except ValidationError as exc:
            raise SnapshotDecodeError(key, str(exc)) from exc

        ids = [r.id for r in records]
        if len(set(ids)) != len(ids):
            raise SnapshotDecodeError(key, "duplicate record ids")

        log.info("persistence.loaded", key=key, count=len(records))
        return records, False

    # --- Writing ---

    def save_topics(self, topics: list[Topic]) -> None:
        self._schedule(self.topics_key, dump_topics(topics))

    def save_contents(self, contents: list[Content]) -> None:
        self._schedule(self.contents_key, dump_contents(contents))

    def _schedule(self, key: str, payload: str) -> None:
        # Needs a running loop: stores are only driven from inside one.
        self._pending[key] = payload
        self._metrics.inc(f"{key}_snapshots_total")
        if self._writer is None or self._writer.done():
            self._writer = asyncio.get_running_loop().create_task(self._drain())

    async def _drain(self) -> None:
        while self._pending:
            # Topics are written before contents.
            key = self.topics_key if self.topics_key in self._pending else next(iter(self._pending))
            payload = self._pending.pop(key)
            try:
                await self._blobs.set(key, payload)
            except Exception as exc:
                self._metrics.inc("blob_write_failures_total")
                log.error("persistence.write_failed", key=key, error=str(exc))
            else:
                self._metrics.inc("blob_writes_total")
                log.debug("persistence.written", key=key, size=len(payload))

    @property
    def pending(self) -> bool:
        return bool(self._pending) or (self._writer is not None and not self._writer.done())

    async def flush(self) -> None:
        """Wait until every scheduled write has been attempted."""
        while self._writer is not None and not self._writer.done():
            await self._writer
