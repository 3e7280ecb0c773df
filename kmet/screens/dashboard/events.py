"""Inputs to and outputs from the dashboard presenter.

Events describe something that happened (a key, a tick, a finished fetch).
Effects describe asynchronous work the presenter asks the runner to do;
their outcomes come back as events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from kmet.constants.enums import ViewMode
from kmet.models.core.logs import LogLine, LogsTarget
from kmet.models.core.metrics import NodeMetric, PodMetric
from kmet.models.state.dashboard_state import NamespaceScope

# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class Tick:
    """Refresh timer fired."""


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class NamespacesLoaded:
    names: tuple[str, ...]


@dataclass(frozen=True)
class NamespacesFailed:
    error: str


@dataclass(frozen=True)
class PollSucceeded:
    seq: int
    view: ViewMode
    scope: NamespaceScope
    rows: tuple[PodMetric, ...] | tuple[NodeMetric, ...]


@dataclass(frozen=True)
class PollFailed:
    seq: int
    view: ViewMode
    scope: NamespaceScope
    error: str


@dataclass(frozen=True)
class LogLineReceived:
    sub_id: int
    line: LogLine


@dataclass(frozen=True)
class LogStreamEnded:
    sub_id: int


@dataclass(frozen=True)
class LogStreamFailed:
    sub_id: int
    error: str


DashboardEvent = Union[
    Tick,
    KeyPressed,
    Resized,
    NamespacesLoaded,
    NamespacesFailed,
    PollSucceeded,
    PollFailed,
    LogLineReceived,
    LogStreamEnded,
    LogStreamFailed,
]

# =============================================================================
# Effects
# =============================================================================


@dataclass(frozen=True)
class FetchNamespaces:
    pass


@dataclass(frozen=True)
class Poll:
    seq: int
    view: ViewMode
    scope: NamespaceScope
    label_selector: str = ""


@dataclass(frozen=True)
class ScheduleTick:
    delay: float


@dataclass(frozen=True)
class StartLogStream:
    sub_id: int
    target: LogsTarget


@dataclass(frozen=True)
class ReadNextLogLine:
    sub_id: int


@dataclass(frozen=True)
class CancelLogStream:
    sub_id: int


@dataclass(frozen=True)
class Quit:
    pass


Effect = Union[
    FetchNamespaces,
    Poll,
    ScheduleTick,
    StartLogStream,
    ReadNextLogLine,
    CancelLogStream,
    Quit,
]

__all__ = [
    "CancelLogStream",
    "DashboardEvent",
    "Effect",
    "FetchNamespaces",
    "KeyPressed",
    "LogLineReceived",
    "LogStreamEnded",
    "LogStreamFailed",
    "NamespacesFailed",
    "NamespacesLoaded",
    "Poll",
    "PollFailed",
    "PollSucceeded",
    "Quit",
    "ReadNextLogLine",
    "Resized",
    "ScheduleTick",
    "StartLogStream",
    "Tick",
]
