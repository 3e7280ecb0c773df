"""Base controller and data-provider capabilities for the dashboard.

The dashboard only talks to providers through ``MetricsSource`` and
``LogSource``. Concrete controllers implement both and are resolved once
at startup.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kmet.controllers.base.log_stream import LogStream
    from kmet.models.core.logs import LogsTarget
    from kmet.models.core.metrics import NodeMetric, PodMetric

logger = logging.getLogger(__name__)


class BaseController(ABC):
    """Base controller class.

    Subclasses implement the connection check used at startup to decide
    whether the provider is usable at all.
    """

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if the data source is available.

        Returns:
            True if connection is available, False otherwise
        """
        ...


class MetricsSource(ABC):
    """Metrics capability consumed by the dashboard."""

    @abstractmethod
    async def list_namespaces(self) -> list[str]:
        """Return selectable namespace names."""
        ...

    @abstractmethod
    async def list_pods(self, namespace: str, label_selector: str = "") -> list[PodMetric]:
        """Return pod rows; an empty ``namespace`` means all namespaces.

        Rows whose usage cannot be read carry zero usage instead of failing
        the whole call.
        """
        ...

    @abstractmethod
    async def list_nodes(self) -> list[NodeMetric]:
        """Return node rows with usage as a ratio of allocatable."""
        ...


class LogSource(ABC):
    """Log streaming capability consumed by the dashboard."""

    @abstractmethod
    async def stream_logs(self, target: LogsTarget) -> LogStream:
        """Open a stream for ``target``.

        Raises:
            StreamStartError: the stream could not be opened.
        """
        ...


__all__ = [
    "BaseController",
    "LogSource",
    "MetricsSource",
]
