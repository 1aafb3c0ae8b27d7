"""
Durable key-value blob stores.

Stores:
- MemoryBlobStore: process-local dict, for tests and throwaway sessions
- SqliteBlobStore: one `blobs` table in an SQLite file, via aiosqlite
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Protocol

import aiosqlite

_SCHEMA = """
CREATE TABLE IF NOT EXISTS blobs (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


class BlobStore(Protocol):
    async def open(self) -> None: ...

    async def close(self) -> None: ...

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class MemoryBlobStore:
    """Dict-backed blob store."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.blobs: dict[str, str] = dict(initial or {})

    async def open(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def get(self, key: str) -> str | None:
        return self.blobs.get(key)

    async def set(self, key: str, value: str) -> None:
        self.blobs[key] = value


class SqliteBlobStore:
    """Async SQLite blob store."""

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def open(self) -> None:
        os.makedirs(os.path.dirname(self._db_path) or ".", exist_ok=True)
        self._db = await aiosqlite.connect(self._db_path)
        self._db.row_factory = aiosqlite.Row
        await self._db.executescript(_SCHEMA)
        await self._db.commit()

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    async def get(self, key: str) -> str | None:
        assert self._db
        cursor = await self._db.execute("SELECT value FROM blobs WHERE key = ?", (key,))
        row = await cursor.fetchone()
        return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        assert self._db
        now = datetime.now(timezone.utc).isoformat()
        await self._db.execute(
            """INSERT INTO blobs (key, value, updated_at)
               VALUES (?, ?, ?)
               ON CONFLICT(key) DO UPDATE SET value=?, updated_at=?""",
            (key, value, now, value, now),
        )
        await self._db.commit()
