"""
Metrics collection and Prometheus-compatible exposition.

Counters track snapshot scheduling and blob writes; gauges track the size
and shape of the tree at the last `observe_tree` call.
"""

from __future__ import annotations

import time
from collections import defaultdict
from typing import Any

PREFIX = "topictree_"


def _full(name: str) -> str:
    return f"{PREFIX}{name}"


class MetricsCollector:
    def __init__(self) -> None:
        self._counters: dict[str, int] = defaultdict(int)
        self._gauges: dict[str, float] = {}
        self._start_time = time.time()

    def inc(self, name: str, value: int = 1) -> None:
        self._counters[_full(name)] += value

    def set_gauge(self, name: str, value: float) -> None:
        self._gauges[_full(name)] = value

    def get(self, name: str) -> int | float:
        """Current value of a gauge or counter; 0 for a counter never incremented."""
        name = _full(name)
        return self._gauges.get(name, self._counters.get(name, 0))

    def observe_tree(self, topics: int, contents: int, roots: int) -> None:
        self.set_gauge("topics", topics)
        self.set_gauge("contents", contents)
        self.set_gauge("root_topics", roots)

    @property
    def uptime(self) -> float:
        return time.time() - self._start_time

    def to_prometheus(self) -> str:
        """Export all metrics in Prometheus text format."""
        lines = []
        for kind, series in (("counter", self._counters), ("gauge", self._gauges)):
            for name, value in sorted(series.items()):
                lines.append(f"# TYPE {name} {kind}")
                lines.append(f"{name} {value}")
        lines.append(f"# TYPE {_full('uptime_seconds')} gauge")
        lines.append(f"{_full('uptime_seconds')} {self.uptime:.1f}")
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict[str, Any]:
        return {
            "counters": dict(self._counters),
            "gauges": dict(self._gauges),
            "uptime_seconds": self.uptime,
        }
