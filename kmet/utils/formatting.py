"""Text formatting helpers shared by the dashboard views."""

from __future__ import annotations

from kmet.constants.values import LOG_LEVEL_WIDTH, LOG_TIME_FORMAT, MIB
from kmet.models.core.logs import LogLine


def format_log_line(line: LogLine) -> str:
    """Render a log line as ``HH:MM:SS.mmm LEVEL text [source]``."""
    stamp = line.timestamp.strftime(LOG_TIME_FORMAT)
    millis = line.timestamp.microsecond // 1000
    level = line.level.value.ljust(LOG_LEVEL_WIDTH)
    text = line.text.rstrip("\n")
    return f"{stamp}.{millis:03d} {level} {text} [{line.source}]"


def bytes_to_mib(value: float) -> float:
    return value / MIB


def format_mib(value: float) -> str:
    return f"{bytes_to_mib(value):6.1f}Mi"


def format_millicores(value: int) -> str:
    return f"{value:4d}m"


def format_percent(ratio: float) -> str:
    return f"{ratio * 100:3.0f}%"


def fit(text: str, width: int) -> str:
    """Truncate with an ellipsis or pad ``text`` to exactly ``width`` cells."""
    if width <= 0:
        return ""
    if len(text) > width:
        return text[: width - 1] + "…" if width > 1 else text[:width]
    return text.ljust(width)


__all__ = [
    "bytes_to_mib",
    "fit",
    "format_log_line",
    "format_mib",
    "format_millicores",
    "format_percent",
]
