"""
Shared fixtures for topictree tests.
"""

from datetime import datetime, timezone

import pytest

from topictree.blobstore import MemoryBlobStore
from topictree.schemas import Content, Topic
from topictree.workspace import Workspace

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def make_topic():
    def _make(topic_id: str, title: str, parent_id: str | None = None) -> Topic:
        return Topic(
            id=topic_id,
            title=title,
            slug=title.lower().replace(" ", "-"),
            parent_id=parent_id,
            created_at=_EPOCH,
            updated_at=_EPOCH,
            created_by="1",
        )

    return _make


@pytest.fixture
def make_content():
    def _make(content_id: str, topic_id: str, title: str = "Notes", body: str = "<p>x</p>") -> Content:
        return Content(
            id=content_id,
            topic_id=topic_id,
            title=title,
            body=body,
            created_at=_EPOCH,
            updated_at=_EPOCH,
            created_by="1",
        )

    return _make


@pytest.fixture
def blobs():
    return MemoryBlobStore()


@pytest.fixture
async def workspace(blobs):
    ws = Workspace(blobs, actor=lambda: "u1")
    await ws.open()
    yield ws
    await ws.close()
