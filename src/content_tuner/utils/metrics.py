"""
In-memory counters and timers for extraction and tuning runs.

A tuning run evaluates thousands of coefficient vectors, each of which
re-extracts every corpus page. The counters here show how much work that
was and where the time went.
"""

import threading
import time
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass
from typing import ClassVar, Iterator


@dataclass
class TimingStats:
    """Running count, total and range of one timed operation."""

    count: int = 0
    total_ms: float = 0.0
    min_ms: float = 0.0
    max_ms: float = 0.0

    @property
    def avg_ms(self) -> float:
        return self.total_ms / self.count if self.count else 0.0

    def record(self, duration_ms: float) -> None:
        if self.count == 0:
            self.min_ms = self.max_ms = duration_ms
        else:
            self.min_ms = min(self.min_ms, duration_ms)
            self.max_ms = max(self.max_ms, duration_ms)
        self.count += 1
        self.total_ms += duration_ms

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "total_ms": round(self.total_ms, 2),
            "avg_ms": round(self.avg_ms, 2),
            "min_ms": round(self.min_ms, 2),
            "max_ms": round(self.max_ms, 2),
        }


class Metrics:
    """
    Process-wide collector of named counters and timings.

    Metric names in use:
        extractions: extractor runs
        comparisons: expected/source pairs measured
        tuning_trials: coefficient vectors scored
        extraction_latency_ms: time per extractor run

    Example:
        >>> Metrics.get().increment("comparisons")
        >>> with Metrics.get().timer("extraction_latency_ms"):
        ...     nodes = extractor(document)
        >>> print(Metrics.get().summary())
    """

    _instance: ClassVar["Metrics | None"] = None

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: Counter[str] = Counter()
        self._timings: dict[str, TimingStats] = {}

    @classmethod
    def get(cls) -> "Metrics":
        """Return the shared collector, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Forget everything recorded so far."""
        cls._instance = cls()

    def increment(self, name: str, value: int = 1) -> int:
        with self._lock:
            self._counters[name] += value
            return self._counters[name]

    def get_counter(self, name: str) -> int:
        with self._lock:
            return self._counters[name]

    def observe(self, name: str, duration_ms: float) -> None:
        with self._lock:
            self._timings.setdefault(name, TimingStats()).record(duration_ms)

    def get_timing(self, name: str) -> TimingStats | None:
        """Return a copy of a timing, or None if it was never observed."""
        with self._lock:
            stats = self._timings.get(name)
            return None if stats is None else TimingStats(**vars(stats))

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        """Time the enclosed block under name, even if it raises."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.observe(name, (time.perf_counter() - start) * 1000)

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "timings": {name: stats.to_dict() for name, stats in self._timings.items()},
            }

    def summary(self) -> str:
        """Render every metric as indented text, one per line."""
        snap = self.snapshot()
        lines = ["=== Metrics Summary ==="]

        if snap["counters"]:
            lines.append("\nCounters:")
            lines.extend(
                f"  {name}: {value:,}" for name, value in sorted(snap["counters"].items()))

        if snap["timings"]:
            lines.append("\nTimings:")
            lines.extend(
                f"  {name}: {stats['count']} calls, avg={stats['avg_ms']:.1f}ms, "
                f"min={stats['min_ms']:.1f}ms, max={stats['max_ms']:.1f}ms"
                for name, stats in sorted(snap["timings"].items())
            )

        return "\n".join(lines)


def increment_comparisons(count: int = 1) -> None:
    Metrics.get().increment("comparisons", count)


def increment_tuning_trials(count: int = 1) -> None:
    Metrics.get().increment("tuning_trials", count)


@contextmanager
def time_extraction() -> Iterator[None]:
    """Count one extractor run and time it."""
    metrics = Metrics.get()
    metrics.increment("extractions")
    with metrics.timer("extraction_latency_ms"):
        yield
