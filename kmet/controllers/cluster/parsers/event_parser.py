"""Event parser - turns watched node event lines into log lines."""

from __future__ import annotations

from datetime import datetime

from kmet.constants.enums import LogLevel
from kmet.models.core.logs import LogLine

# Field order of the jsonpath template used by the node event watch
EVENT_FIELD_SEPARATOR = "\t"


class EventParser:
    """Parses ``type<TAB>reason<TAB>message`` event lines."""

    _LEVELS = {
        "normal": LogLevel.INFO,
        "warning": LogLevel.WARN,
        "error": LogLevel.ERROR,
    }

    def parse_event_line(self, line: str, node: str) -> LogLine | None:
        line = line.rstrip("\r\n")
        if not line.strip():
            return None
        parts = line.split(EVENT_FIELD_SEPARATOR, 2)
        if len(parts) < 3:
            return LogLine(
                timestamp=datetime.now(),
                level=LogLevel.from_text(line),
                text=line,
                source=f"event/{node}",
            )
        event_type, reason, message = parts
        level = self._LEVELS.get(event_type.strip().lower(), LogLevel.from_text(message))
        text = f"{reason}: {message}" if reason else message
        return LogLine(
            timestamp=datetime.now(), level=level, text=text, source=f"event/{node}"
        )
