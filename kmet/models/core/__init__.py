"""Core snapshot models shared by providers and the dashboard."""

from kmet.models.core.logs import LogLine, LogsTarget
from kmet.models.core.metrics import NodeMetric, PodMetric, Trend

__all__ = [
    "LogLine",
    "LogsTarget",
    "NodeMetric",
    "PodMetric",
    "Trend",
]
