"""Error taxonomy for data providers."""


class ProviderError(Exception):
    """Base exception for metrics and log provider failures."""


class TransientFetchError(ProviderError):
    """A metrics query failed; the next tick may succeed."""


class StreamStartError(ProviderError):
    """A log stream could not be opened."""


class StreamReadError(ProviderError):
    """A log stream failed while producing lines."""


class ConfigurationError(ProviderError):
    """A provider cannot be constructed or reach its cluster."""


__all__ = [
    "ConfigurationError",
    "ProviderError",
    "StreamReadError",
    "StreamStartError",
    "TransientFetchError",
]
