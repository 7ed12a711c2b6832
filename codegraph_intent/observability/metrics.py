"""
Tool Metrics

Process-local counters, gauges and latency samples for the intent tools.
Nothing is exported; the CLI and tests read a snapshot.
"""

from collections import defaultdict
from threading import Lock
from typing import Any

TOOL_CALLS = "intent_tool_calls_total"
INTENTS_RESOLVED = "intent_resolved_total"
TOOL_LATENCY = "intent_tool_latency_ms"
LAST_CONFIDENCE = "intent_last_overall_confidence"

SeriesKey = tuple[str, ...]

_PERCENTILES = {"p50": 0.50, "p95": 0.95, "p99": 0.99}


def _series_key(name: str, labels: dict[str, str]) -> SeriesKey:
    # label order never changes the series
    return (name, *(f"{key}={labels[key]}" for key in sorted(labels)))


def _interpolate(ordered: list[float], fraction: float) -> float:
    position = fraction * (len(ordered) - 1)
    lower = int(position)
    if lower + 1 >= len(ordered):
        return ordered[-1]
    return ordered[lower] + (position - lower) * (ordered[lower + 1] - ordered[lower])


def summarize(samples: list[float]) -> dict[str, float]:
    """count/sum/min/max/mean plus interpolated p50, p95 and p99."""
    if not samples:
        return dict.fromkeys(("sum", "min", "max", "mean", *_PERCENTILES), 0.0) | {"count": 0}

    ordered = sorted(samples)
    total = sum(ordered)
    summary: dict[str, float] = {
        "count": len(ordered),
        "sum": total,
        "min": ordered[0],
        "max": ordered[-1],
        "mean": total / len(ordered),
    }
    for label, fraction in _PERCENTILES.items():
        summary[label] = _interpolate(ordered, fraction)
    return summary


class MetricsCollector:
    """
    Lock-guarded in-memory store.

    Unlabeled counters and labeled series live apart: ``get_counter("x")``
    never sums the labeled ``x`` series.
    """

    def __init__(self):
        self._lock = Lock()
        self._plain: dict[str, float] = defaultdict(float)
        self._labeled: dict[SeriesKey, float] = defaultdict(float)
        self._gauges: dict[str, float] = {}
        self._samples: dict[str, list[float]] = defaultdict(list)

    def record_counter(self, name: str, value: float = 1.0, labels: dict[str, str] | None = None) -> None:
        """Add ``value`` to a counter, e.g. ``record_counter(TOOL_CALLS, labels={"tool": ..., "status": ...})``."""
        with self._lock:
            if labels:
                self._labeled[_series_key(name, labels)] += value
            else:
                self._plain[name] += value

    def record_gauge(self, name: str, value: float) -> None:
        with self._lock:
            self._gauges[name] = value

    def record_histogram(self, name: str, value: float) -> None:
        with self._lock:
            self._samples[name].append(value)

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> float:
        with self._lock:
            if not labels:
                return self._plain.get(name, 0.0)
            return self._labeled.get(_series_key(name, labels), 0.0)

    def get_gauge(self, name: str) -> float:
        with self._lock:
            return self._gauges.get(name, 0.0)

    def get_histogram_stats(self, name: str) -> dict[str, float]:
        with self._lock:
            samples = self._samples.get(name, [])[:]
        return summarize(samples)

    def get_all_metrics(self) -> dict[str, Any]:
        """
        Everything recorded so far.

        Labeled series are flattened to ``"name|key=value|..."`` strings.
        """
        with self._lock:
            samples = {name: values[:] for name, values in self._samples.items()}
            snapshot: dict[str, Any] = {
                "counters": dict(self._plain),
                "gauges": dict(self._gauges),
                "labeled_counters": {"|".join(key): total for key, total in self._labeled.items()},
            }
        snapshot["histograms"] = {name: summarize(values) for name, values in samples.items()}
        return snapshot

    def reset(self) -> None:
        with self._lock:
            for store in (self._plain, self._labeled, self._gauges, self._samples):
                store.clear()


_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """The process-wide collector shared by the service and the CLI."""
    return _collector


def record_counter(name: str, value: float = 1.0, labels: dict[str, str] | None = None) -> None:
    _collector.record_counter(name, value, labels)


def record_gauge(name: str, value: float) -> None:
    _collector.record_gauge(name, value)


def record_histogram(name: str, value: float) -> None:
    _collector.record_histogram(name, value)
