"""Timeout constants for the dashboard.

All timeout and interval values for kubectl requests, polling, and log streaming.
"""

from typing import Final

# ============================================================================
# API/Cluster timeouts (string format for kubectl)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "30s"

# Process-level command timeout (must be greater than request timeout)
KUBECTL_COMMAND_TIMEOUT: Final = 45

# ============================================================================
# Async operation timeouts (float, in seconds)
# ============================================================================

CLUSTER_CHECK_TIMEOUT: Final = 12.0

# First poll fires right away, later ones follow the refresh interval
INITIAL_TICK_DELAY: Final = 0.0

# Grace period for a kubectl log process to exit after terminate()
LOG_PROCESS_TERMINATE_TIMEOUT: Final = 2.0

# Synthetic provider log cadence
MOCK_LOG_INTERVAL: Final = 0.5

__all__ = [
    "CLUSTER_CHECK_TIMEOUT",
    "CLUSTER_REQUEST_TIMEOUT",
    "INITIAL_TICK_DELAY",
    "KUBECTL_COMMAND_TIMEOUT",
    "LOG_PROCESS_TERMINATE_TIMEOUT",
    "MOCK_LOG_INTERVAL",
]
