"""All enum definitions for the dashboard.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# View Enums
# =============================================================================

class ViewMode(Enum):
    """Entity list shown in the main table."""

    PODS = "pods"
    NODES = "nodes"

    def toggled(self) -> "ViewMode":
        return ViewMode.NODES if self is ViewMode.PODS else ViewMode.PODS


class SortKey(Enum):
    """Metric the main table is sorted by (descending)."""

    CPU = "cpu"
    MEMORY = "mem"

    def toggled(self) -> "SortKey":
        return SortKey.MEMORY if self is SortKey.CPU else SortKey.CPU


# =============================================================================
# Log Enums
# =============================================================================

class LogLevel(Enum):
    """Severity attached to a streamed log line."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @classmethod
    def from_text(cls, text: str) -> "LogLevel":
        """Guess a level from the raw line content."""
        upper = text.upper()
        if "ERROR" in upper:
            return cls.ERROR
        if "WARN" in upper:
            return cls.WARN
        return cls.INFO


class TargetKind(Enum):
    """Kinds of entity a log stream can subscribe to."""

    POD = "Pod"
    DEPLOYMENT = "Deployment"
    STATEFULSET = "StatefulSet"
    DAEMONSET = "DaemonSet"
    NODE = "Node"

    @property
    def is_workload(self) -> bool:
        return self in (
            TargetKind.DEPLOYMENT,
            TargetKind.STATEFULSET,
            TargetKind.DAEMONSET,
        )


__all__ = [
    "LogLevel",
    "SortKey",
    "TargetKind",
    "ViewMode",
]
