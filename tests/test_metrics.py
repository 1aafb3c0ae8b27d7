"""Tests for metrics collection."""

from topictree.metrics import MetricsCollector


def test_counter_increment():
    m = MetricsCollector()
    m.inc("blob_writes_total")
    m.inc("blob_writes_total")
    assert m.get("blob_writes_total") == 2
    assert m.get("never_touched") == 0


def test_gauge_set():
    m = MetricsCollector()
    m.set_gauge("topics", 3)
    assert m.get("topics") == 3


def test_prometheus_format():
    m = MetricsCollector()
    m.inc("blob_write_failures_total", 5)
    m.set_gauge("contents", 2)
    text = m.to_prometheus()
    assert "# TYPE topictree_blob_write_failures_total counter" in text
    assert "topictree_blob_write_failures_total 5" in text
    assert "topictree_contents 2" in text
    assert "topictree_uptime_seconds" in text


def test_observe_tree_sets_gauges():
    m = MetricsCollector()
    m.observe_tree(topics=4, contents=1, roots=2)
    assert m.get("topics") == 4
    assert m.to_dict()["gauges"] == {
        "topictree_topics": 4,
        "topictree_contents": 1,
        "topictree_root_topics": 2,
    }
