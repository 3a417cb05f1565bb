"""Metrics seam shared by the chunker, summarizers, aggregator and quiz builder.

Nothing here talks to a metrics backend. Callers pass a hook that forwards to
Prometheus, StatsD or whatever the host application runs; the default drops
every observation.
"""

from collections import defaultdict
from typing import Protocol

Labels = dict[str, str]
_LabelKey = tuple[tuple[str, str], ...]


def _label_key(labels: Labels | None) -> _LabelKey:
    return tuple(sorted((labels or {}).items()))


class MetricsHook(Protocol):
    def record_latency(
        self, name: str, value_ms: float, labels: Labels | None = None
    ) -> None:
        """Duration of one operation in milliseconds."""
        ...

    def increment(self, name: str, value: int = 1, labels: Labels | None = None) -> None:
        """Add to a counter (segments, errors, tokens)."""
        ...

    def record_gauge(self, name: str, value: float, labels: Labels | None = None) -> None:
        """Point-in-time reading, e.g. remaining provider quota."""
        ...


class NoOpMetricsHook:
    """Default hook. Accepts everything, keeps nothing."""

    def record_latency(
        self, name: str, value_ms: float, labels: Labels | None = None
    ) -> None:
        return None

    def increment(self, name: str, value: int = 1, labels: Labels | None = None) -> None:
        return None

    def record_gauge(self, name: str, value: float, labels: Labels | None = None) -> None:
        return None


class InMemoryMetricsHook:
    """Keeps every observation in memory.

    Counters are summed per (name, labels). Latencies and gauges keep the full
    history per name regardless of labels.
    """

    def __init__(self) -> None:
        self.latencies: dict[str, list[float]] = defaultdict(list)
        self.gauges: dict[str, list[float]] = defaultdict(list)
        self.counters: dict[tuple[str, _LabelKey], int] = defaultdict(int)

    def record_latency(
        self, name: str, value_ms: float, labels: Labels | None = None
    ) -> None:
        self.latencies[name].append(value_ms)

    def increment(self, name: str, value: int = 1, labels: Labels | None = None) -> None:
        self.counters[(name, _label_key(labels))] += value

    def record_gauge(self, name: str, value: float, labels: Labels | None = None) -> None:
        self.gauges[name].append(value)

    def count(self, name: str, **labels: str) -> int:
        """Counter total for exactly this label set."""
        return self.counters.get((name, _label_key(labels)), 0)
