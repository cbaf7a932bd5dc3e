"""
Fixed-resolution latency histogram.

Works like a counting sort: the bucket index is the latency in whole
milliseconds. A request that takes 2 ms bumps bucket 2. Anything at or above
the ceiling lands in a single overflow counter.
"""

import threading
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .config import DEFAULT_CEILING_MS


@dataclass(frozen=True)
class HistogramSnapshot:
    """
    Read-only copy of a LatencyHistogram.

    Attributes:
        buckets (Tuple[int, ...]): Count per millisecond, index == latency
        overflow (int): Count of latencies >= ceiling
    """

    buckets: Tuple[int, ...]
    overflow: int

    @property
    def ceiling(self) -> int:
        return len(self.buckets)

    @property
    def total(self) -> int:
        """Number of observations, overflow included."""
        return sum(self.buckets) + self.overflow

    def nonzero(self) -> Iterator[Tuple[int, int]]:
        """Yield (latency_ms, count) for every non-empty bucket, fastest first."""
        for latency_ms, count in enumerate(self.buckets):
            if count:
                yield latency_ms, count


class LatencyHistogram:
    """
    Thread-safe millisecond latency counter.

    Every increment happens under one lock, so concurrent producers never
    lose updates. snapshot() does not take the lock for consistency across
    buckets; callers read it only after all producers have finished.
    """

    def __init__(self, ceiling_ms: int = DEFAULT_CEILING_MS):
        if ceiling_ms < 1:
            raise ValueError(f"ceiling_ms must be positive, got {ceiling_ms}")
        self._buckets: List[int] = [0] * ceiling_ms
        self._overflow = 0
        self._lock = threading.Lock()

    @property
    def ceiling(self) -> int:
        return len(self._buckets)

    def record(self, latency_ms: int):
        """
        Count one observation.

        Args:
            latency_ms (int): Non-negative latency in whole milliseconds
        """
        if latency_ms < 0:
            raise ValueError(f"latency must be non-negative, got {latency_ms}")
        with self._lock:
            if latency_ms >= len(self._buckets):
                self._overflow += 1
                return
            self._buckets[latency_ms] += 1

    def snapshot(self) -> HistogramSnapshot:
        return HistogramSnapshot(buckets=tuple(self._buckets), overflow=self._overflow)
