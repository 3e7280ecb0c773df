"""Controllers module for the kmet dashboard.

This module provides the data providers the dashboard consumes: a live
kubectl-backed cluster controller and a synthetic one.
"""

from __future__ import annotations

# Base classes
from kmet.controllers.base import (
    BaseController,
    ConfigurationError,
    LogSource,
    LogStream,
    MetricsSource,
    ProviderError,
    StreamReadError,
    StreamStartError,
    TransientFetchError,
)

# Cluster domain
from kmet.controllers.cluster.controller import ClusterController

# Synthetic domain
from kmet.controllers.mock.controller import MockController

__all__ = [
    # Base
    "BaseController",
    # Domain Controllers
    "ClusterController",
    # Errors
    "ConfigurationError",
    "LogSource",
    "LogStream",
    "MetricsSource",
    "MockController",
    "ProviderError",
    "StreamReadError",
    "StreamStartError",
    "TransientFetchError",
]
