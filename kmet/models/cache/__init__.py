"""In-memory caches owned by data providers."""

from kmet.models.cache.trend_buffer import TrendBuffer, TrendStore

__all__ = [
    "TrendBuffer",
    "TrendStore",
]
