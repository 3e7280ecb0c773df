"""Bounded trend history per tracked entity."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterable

from kmet.constants.defaults import TREND_CAPACITY_DEFAULT
from kmet.models.core.metrics import Trend


class TrendBuffer:
    """Fixed-capacity sliding window of normalized samples.

    Samples are expected to be pre-normalized to ``[0, 1]`` by the caller;
    the buffer stores them as given. Once capacity is reached each append
    drops the oldest sample.
    """

    def __init__(self, capacity: int = TREND_CAPACITY_DEFAULT) -> None:
        if capacity < 1:
            raise ValueError(f"trend capacity must be >= 1, got {capacity}")
        self._samples: deque[float] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._samples.maxlen or 0

    def append(self, sample: float) -> None:
        self._samples.append(float(sample))

    def extend(self, samples: Iterable[float]) -> None:
        self._samples.extend(float(s) for s in samples)

    def samples(self) -> tuple[float, ...]:
        """Return a read-only copy, most recent last."""
        return tuple(self._samples)

    def snapshot(self) -> Trend:
        return Trend(samples=self.samples())

    def __len__(self) -> int:
        return len(self._samples)


class TrendStore:
    """Keyed collection of trend buffers shared by one provider.

    Keys follow ``<namespace>/<pod>``, ``<namespace>/<pod>-mem``,
    ``cpu-<node>`` and ``mem-<node>``. All access goes through a lock so a
    provider polled from worker threads can be read concurrently.
    """

    def __init__(self, capacity: int = TREND_CAPACITY_DEFAULT) -> None:
        if capacity < 1:
            raise ValueError(f"trend capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._buffers: dict[str, TrendBuffer] = {}
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def _buffer(self, key: str) -> TrendBuffer:
        buffer = self._buffers.get(key)
        if buffer is None:
            buffer = TrendBuffer(self._capacity)
            self._buffers[key] = buffer
        return buffer

    def record(self, key: str, sample: float) -> Trend:
        """Append one sample for ``key`` and return the updated window."""
        with self._lock:
            buffer = self._buffer(key)
            buffer.append(sample)
            return buffer.snapshot()

    def seed(self, key: str, samples: Iterable[float]) -> bool:
        """Pre-fill history for a key seen for the first time.

        Returns:
            True if the key was new and has been seeded.
        """
        with self._lock:
            if key in self._buffers:
                return False
            self._buffer(key).extend(samples)
            return True

    def samples(self, key: str) -> tuple[float, ...]:
        with self._lock:
            buffer = self._buffers.get(key)
            return buffer.samples() if buffer is not None else ()

    def retain(self, keys: Iterable[str]) -> None:
        """Drop buffers whose key is not in ``keys``."""
        keep = set(keys)
        with self._lock:
            for key in [k for k in self._buffers if k not in keep]:
                del self._buffers[key]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._buffers

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffers)
