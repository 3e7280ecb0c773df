"""Base controller, provider capabilities and log stream handles."""

from kmet.controllers.base.base_controller import (
    BaseController,
    LogSource,
    MetricsSource,
)
from kmet.controllers.base.errors import (
    ConfigurationError,
    ProviderError,
    StreamReadError,
    StreamStartError,
    TransientFetchError,
)
from kmet.controllers.base.log_stream import LogStream, QueueLogStream

__all__ = [
    "BaseController",
    "ConfigurationError",
    "LogSource",
    "LogStream",
    "MetricsSource",
    "ProviderError",
    "QueueLogStream",
    "StreamReadError",
    "StreamStartError",
    "TransientFetchError",
]
