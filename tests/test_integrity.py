"""Tests for the referential-integrity report."""

from topictree.integrity import IssueKind, check_integrity


def _kinds(issues):
    return sorted((i.kind.value, i.record_id) for i in issues)


def test_consistent_collections(make_topic, make_content):
    topics = [make_topic("1", "Clients"), make_topic("3", "Client A", "1")]
    contents = [make_content("1", "3")]
    assert check_integrity(topics, contents) == []


def test_dangling_parent_and_orphaned_content(make_topic, make_content):
    topics = [make_topic("1", "Clients"), make_topic("2", "Lost", "gone")]
    contents = [make_content("c1", "1"), make_content("c2", "deleted")]
    assert _kinds(check_integrity(topics, contents)) == [
        ("dangling_parent", "2"),
        ("orphaned_content", "c2"),
    ]


def test_cycle_detected(make_topic):
    topics = [
        make_topic("a", "A", "c"),
        make_topic("b", "B", "a"),
        make_topic("c", "C", "b"),
        make_topic("d", "D", "a"),
        make_topic("self", "Self", "self"),
    ]
    issues = check_integrity(topics, [])
    cycle_ids = {i.record_id for i in issues if i.kind == IssueKind.CYCLE}
    assert cycle_ids == {"a", "b", "c", "self"}


def test_duplicate_ids(make_topic, make_content):
    topics = [make_topic("1", "One"), make_topic("1", "Again")]
    contents = [make_content("x", "1"), make_content("x", "1")]
    assert _kinds(check_integrity(topics, contents)) == [
        ("duplicate_content_id", "x"),
        ("duplicate_topic_id", "1"),
    ]


def test_issue_serializes(make_content):
    issues = check_integrity([], [make_content("c", "t")])
    assert issues[0].model_dump(mode="json") == {
        "kind": "orphaned_content",
        "record_id": "c",
        "detail": "topic 't' does not exist",
    }
