"""Mutable dashboard state owned by the dashboard presenter.

Only ``DashboardPresenter.dispatch`` mutates these objects. Cached entity
lists are tuples that are replaced wholesale on each applied poll.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from kmet.constants.defaults import LOG_BUFFER_MAX_LINES_DEFAULT, NAMESPACE_DEFAULT
from kmet.constants.enums import SortKey, ViewMode
from kmet.constants.values import ALL_NAMESPACES_LABEL
from kmet.models.core.logs import LogsTarget
from kmet.models.core.metrics import NodeMetric, PodMetric

# =============================================================================
# Namespace scope
# =============================================================================


@dataclass(frozen=True)
class AllNamespaces:
    """Unfiltered scope."""

    @property
    def label(self) -> str:
        return ALL_NAMESPACES_LABEL

    @property
    def provider_value(self) -> str:
        return ""


@dataclass(frozen=True)
class NamedNamespace:
    """Scope limited to one namespace."""

    name: str

    @property
    def label(self) -> str:
        return self.name

    @property
    def provider_value(self) -> str:
        return self.name


NamespaceScope = AllNamespaces | NamedNamespace


def namespace_scope(name: str) -> NamespaceScope:
    """Map a user-facing namespace name to a scope."""
    name = name.strip()
    if not name or name == ALL_NAMESPACES_LABEL:
        return AllNamespaces()
    return NamedNamespace(name)


def candidate_scopes(names: list[str] | tuple[str, ...]) -> tuple[NamespaceScope, ...]:
    """Build the picker list: the unfiltered scope first, then each name once."""
    seen: set[str] = set()
    named: list[NamespaceScope] = []
    for name in names:
        name = name.strip()
        if not name or name == ALL_NAMESPACES_LABEL or name in seen:
            continue
        seen.add(name)
        named.append(NamedNamespace(name))
    if not named:
        return (NamedNamespace(NAMESPACE_DEFAULT),)
    return (AllNamespaces(), *named)


# =============================================================================
# Panes and subscription
# =============================================================================


@dataclass
class Panes:
    info_open: bool = False
    logs_open: bool = False
    namespace_picker_open: bool = False


@dataclass
class LogSubscription:
    """Active log stream plus its display buffer.

    ``scroll_offset`` counts lines up from the bottom; ``follow`` pins the
    view to the newest line.
    """

    sub_id: int
    target: LogsTarget
    max_lines: int = LOG_BUFFER_MAX_LINES_DEFAULT
    lines: deque[str] = field(init=False, default_factory=deque)
    scroll_offset: int = 0
    follow: bool = True
    ended: bool = False

    def __post_init__(self) -> None:
        self.lines = deque(maxlen=self.max_lines)

    def append(self, formatted: str) -> None:
        evicting = len(self.lines) == self.max_lines
        self.lines.append(formatted)
        if self.follow:
            self.scroll_offset = 0
        elif not evicting:
            # Keep a paused window on the same lines; a full buffer already
            # shifts them by dropping the oldest.
            self.scroll_offset += 1

    def scroll(self, delta: int, page: int) -> None:
        """Move the window; positive ``delta`` scrolls towards older lines."""
        top = max(0, len(self.lines) - max(1, page))
        self.scroll_offset = min(top, max(0, self.scroll_offset + delta))
        self.follow = self.scroll_offset == 0

    def scroll_to_top(self, page: int) -> None:
        self.scroll_offset = max(0, len(self.lines) - max(1, page))
        self.follow = self.scroll_offset == 0

    def scroll_to_bottom(self) -> None:
        self.scroll_offset = 0
        self.follow = True

    def window(self, height: int) -> list[str]:
        """Lines visible in a pane ``height`` rows tall."""
        if height <= 0:
            return []
        end = len(self.lines) - self.scroll_offset
        start = max(0, end - height)
        return list(self.lines)[start:end]


# =============================================================================
# Dashboard state
# =============================================================================


@dataclass
class DashboardState:
    view_mode: ViewMode = ViewMode.PODS
    namespace: NamespaceScope = field(
        default_factory=lambda: NamedNamespace(NAMESPACE_DEFAULT)
    )
    namespace_candidates: tuple[NamespaceScope, ...] = field(
        default_factory=lambda: (NamedNamespace(NAMESPACE_DEFAULT),)
    )
    label_selector: str = ""
    sort_key: SortKey = SortKey.CPU
    selection_index: int = 0
    reset_cursor: bool = False
    panes: Panes = field(default_factory=Panes)
    picker_index: int = 0
    cached_pods: tuple[PodMetric, ...] = ()
    cached_nodes: tuple[NodeMetric, ...] = ()
    active_log_subscription: LogSubscription | None = None
    terminal_size: tuple[int, int] = (80, 24)
    last_error: str | None = None
    status_message: str | None = None
    # Poll sequencing: last issued sequence number and, per view, the
    # sequence of the newest applied result and of the in-flight tick poll.
    poll_seq: int = 0
    applied_seq: dict[ViewMode, int] = field(
        default_factory=lambda: {ViewMode.PODS: 0, ViewMode.NODES: 0}
    )
    inflight_seq: dict[ViewMode, int | None] = field(
        default_factory=lambda: {ViewMode.PODS: None, ViewMode.NODES: None}
    )
    next_sub_id: int = 0
    quitting: bool = False

    @property
    def row_count(self) -> int:
        if self.view_mode is ViewMode.PODS:
            return len(self.cached_pods)
        return len(self.cached_nodes)
