"""Tests for the content store."""

from datetime import datetime, timedelta, timezone

import pytest

from topictree.contents import ContentStore


@pytest.fixture
def store(make_content):
    return ContentStore([
        make_content("a", "t1", "First"),
        make_content("b", "t2", "Second"),
        make_content("c", "t1", "Third"),
    ])


def test_create_attaches_to_topic():
    store = ContentStore()
    content = store.create("t1", "Notes", "<p>hello</p>", "u1")
    assert store.by_id(content.id) is content
    assert content.topic_id == "t1"
    assert content.body == "<p>hello</p>"
    assert content.created_by == "u1"
    assert store.by_topic_id("t1") == [content]


def test_create_does_not_check_topic_exists():
    store = ContentStore()
    assert store.create("no-such-topic", "Notes", "", "u1") is not None


def test_create_without_actor_is_noop():
    calls = []
    store = ContentStore(on_change=calls.append)
    assert store.create("t1", "Notes", "body", None) is None
    assert len(store) == 0
    assert calls == []


def test_by_topic_id_insertion_order(store):
    assert [c.id for c in store.by_topic_id("t1")] == ["a", "c"]
    assert store.by_topic_id("t3") == []


def test_update(store):
    before = store.by_id("b").updated_at
    updated = store.update("b", "Second v2", "<p>new</p>")
    assert updated.title == "Second v2"
    assert updated.body == "<p>new</p>"
    assert updated.updated_at > before
    assert updated.topic_id == "t2"


def test_update_unknown_is_noop(store):
    calls = []
    store._on_change = calls.append
    snapshot = [c.model_dump() for c in store.all()]
    assert store.update("zzz", "x", "y") is None
    assert [c.model_dump() for c in store.all()] == snapshot
    assert calls == []


def test_delete(store):
    assert store.delete("a") is True
    assert store.by_id("a") is None
    assert store.delete("a") is False
    assert [c.id for c in store.all()] == ["b", "c"]


def test_delete_by_topic_ids(store):
    calls = []
    store._on_change = calls.append
    assert store.delete_by_topic_ids({"t1", "t9"}) == 2
    assert [c.id for c in store.all()] == ["b"]
    assert len(calls) == 1

    assert store.delete_by_topic_ids({"t9"}) == 0
    assert len(calls) == 1


def test_recent_newest_first(make_content):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    items = []
    for i in range(7):
        item = make_content(str(i), "t1")
        item.created_at = base + timedelta(days=i)
        items.append(item)
    store = ContentStore(items)
    assert [c.id for c in store.recent()] == ["6", "5", "4", "3", "2"]
    assert [c.id for c in store.recent(limit=2)] == ["6", "5"]
