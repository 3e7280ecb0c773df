"""Log stream models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from kmet.constants.enums import LogLevel, TargetKind


class LogsTarget(BaseModel):
    """What a log stream subscribes to.

    Node targets carry an empty namespace and container.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str = ""
    kind: TargetKind = TargetKind.POD
    name: str
    container: str = ""

    @property
    def label(self) -> str:
        if self.kind is TargetKind.NODE:
            return f"node/{self.name}"
        scope = f"{self.namespace}/{self.name}"
        return f"{scope} ({self.container})" if self.container else scope


class LogLine(BaseModel):
    """Single line emitted by a log stream."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    level: LogLevel = LogLevel.INFO
    text: str
    source: str = ""
