"""Dashboard presenter - the event-driven state machine behind the screen.

The presenter owns the single ``DashboardState``. ``dispatch`` applies one
event and returns the effects to run next; it never awaits or performs I/O,
so every frame reflects a fully applied transition.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from kmet.constants.enums import SortKey, TargetKind, ViewMode
from kmet.constants.timeouts import INITIAL_TICK_DELAY
from kmet.models.core.logs import LogsTarget
from kmet.models.core.metrics import NodeMetric, PodMetric
from kmet.models.state.app_settings import AppSettings
from kmet.models.state.dashboard_state import (
    DashboardState,
    LogSubscription,
    NamespaceScope,
    candidate_scopes,
    namespace_scope,
)
from kmet.screens.dashboard.events import (
    CancelLogStream,
    DashboardEvent,
    Effect,
    FetchNamespaces,
    KeyPressed,
    LogLineReceived,
    LogStreamEnded,
    LogStreamFailed,
    NamespacesFailed,
    NamespacesLoaded,
    Poll,
    PollFailed,
    PollSucceeded,
    Quit,
    ReadNextLogLine,
    Resized,
    ScheduleTick,
    StartLogStream,
    Tick,
)
from kmet.screens.dashboard.layout import DashboardLayout, compute_layout
from kmet.utils.formatting import format_log_line

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", PodMetric, NodeMetric)

_POD_SORT_KEYS: dict[SortKey, Callable[[PodMetric], float]] = {
    SortKey.CPU: lambda pod: pod.cpu_millicores,
    SortKey.MEMORY: lambda pod: pod.memory_bytes,
}
_NODE_SORT_KEYS: dict[SortKey, Callable[[NodeMetric], float]] = {
    SortKey.CPU: lambda node: node.cpu_used,
    SortKey.MEMORY: lambda node: node.mem_used,
}


def sort_pods(pods: Sequence[PodMetric], sort_key: SortKey) -> tuple[PodMetric, ...]:
    """Stable descending sort on the active metric."""
    return tuple(sorted(pods, key=_POD_SORT_KEYS[sort_key], reverse=True))


def sort_nodes(nodes: Sequence[NodeMetric], sort_key: SortKey) -> tuple[NodeMetric, ...]:
    """Stable descending sort on the active metric."""
    return tuple(sorted(nodes, key=_NODE_SORT_KEYS[sort_key], reverse=True))


class DashboardPresenter:
    """State machine for the dashboard screen."""

    _PICKER_PAGE = 10
    _TABLE_CHROME_ROWS = 3  # column header + borders
    _LOGS_CHROME_ROWS = 2  # borders

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()
        scope = namespace_scope(self._settings.default_namespace)
        self.state = DashboardState(
            namespace=scope,
            namespace_candidates=(scope,),
            label_selector=self._settings.label_selector,
        )
        self.layout: DashboardLayout = self._compute_layout()

    # ------------------------------------------------------------------
    # Read-only helpers for rendering
    # ------------------------------------------------------------------

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def visible_rows(self) -> tuple[PodMetric, ...] | tuple[NodeMetric, ...]:
        if self.state.view_mode is ViewMode.PODS:
            return self.state.cached_pods
        return self.state.cached_nodes

    @property
    def selected_row(self) -> PodMetric | NodeMetric | None:
        rows = self.visible_rows
        if not rows:
            return None
        return rows[min(self.state.selection_index, len(rows) - 1)]

    @property
    def table_page_size(self) -> int:
        return max(1, self.layout.table_height - self._TABLE_CHROME_ROWS)

    @property
    def logs_page_size(self) -> int:
        return max(1, self.layout.logs_height - self._LOGS_CHROME_ROWS)

    def log_lines_window(self) -> list[str]:
        sub = self.state.active_log_subscription
        if sub is None:
            return []
        return sub.window(self.logs_page_size)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def start(self) -> list[Effect]:
        """Effects to run once when the screen mounts."""
        return [FetchNamespaces(), ScheduleTick(INITIAL_TICK_DELAY)]

    def dispatch(self, event: DashboardEvent) -> list[Effect]:
        """Apply one event and return the effects it triggers, in order."""
        if self.state.quitting:
            return []
        if isinstance(event, Tick):
            return self._on_tick()
        if isinstance(event, KeyPressed):
            return self._on_key(event.key)
        if isinstance(event, Resized):
            return self._on_resize(event.width, event.height)
        if isinstance(event, PollSucceeded):
            return self._on_poll_succeeded(event)
        if isinstance(event, PollFailed):
            return self._on_poll_failed(event)
        if isinstance(event, NamespacesLoaded):
            return self._on_namespaces_loaded(event.names)
        if isinstance(event, NamespacesFailed):
            return self._on_namespaces_failed(event.error)
        if isinstance(event, LogLineReceived):
            return self._on_log_line(event)
        if isinstance(event, LogStreamEnded):
            return self._on_log_ended(event.sub_id)
        if isinstance(event, LogStreamFailed):
            return self._on_log_failed(event.sub_id, event.error)
        logger.debug("Ignoring unknown event %r", event)
        return []

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def _poll(self) -> Poll:
        state = self.state
        state.poll_seq += 1
        state.inflight_seq[state.view_mode] = state.poll_seq
        return Poll(
            seq=state.poll_seq,
            view=state.view_mode,
            scope=state.namespace,
            label_selector=state.label_selector,
        )

    def _on_tick(self) -> list[Effect]:
        effects: list[Effect] = []
        if self.state.inflight_seq[self.state.view_mode] is None:
            effects.append(self._poll())
        effects.append(ScheduleTick(self._settings.refresh_interval))
        return effects

    def _is_stale(self, seq: int, view: ViewMode, scope: NamespaceScope) -> bool:
        if seq <= self.state.applied_seq[view]:
            return True
        return view is ViewMode.PODS and scope != self.state.namespace

    def _finish_inflight(self, seq: int, view: ViewMode) -> None:
        if self.state.inflight_seq[view] == seq:
            self.state.inflight_seq[view] = None

    def _on_poll_succeeded(self, event: PollSucceeded) -> list[Effect]:
        state = self.state
        self._finish_inflight(event.seq, event.view)
        if self._is_stale(event.seq, event.view, event.scope):
            logger.debug("Dropping stale %s poll #%d", event.view.value, event.seq)
            return []

        state.applied_seq[event.view] = event.seq
        if event.view is ViewMode.PODS:
            state.cached_pods = sort_pods(event.rows, state.sort_key)  # type: ignore[arg-type]
        else:
            state.cached_nodes = sort_nodes(event.rows, state.sort_key)  # type: ignore[arg-type]

        if event.view is state.view_mode:
            state.last_error = None
            if state.reset_cursor or state.selection_index >= state.row_count:
                state.selection_index = 0
                state.reset_cursor = False
        return []

    def _on_poll_failed(self, event: PollFailed) -> list[Effect]:
        self._finish_inflight(event.seq, event.view)
        if self._is_stale(event.seq, event.view, event.scope):
            return []
        logger.warning("Poll #%d for %s failed: %s", event.seq, event.view.value, event.error)
        self.state.last_error = event.error
        return []

    # ------------------------------------------------------------------
    # Namespaces
    # ------------------------------------------------------------------

    def _on_namespaces_loaded(self, names: Sequence[str]) -> list[Effect]:
        state = self.state
        state.namespace_candidates = candidate_scopes(list(names))
        state.picker_index = min(state.picker_index, len(state.namespace_candidates) - 1)
        return []

    def _on_namespaces_failed(self, error: str) -> list[Effect]:
        # Keep the previous list; it always holds at least one entry.
        logger.warning("Namespace listing failed: %s", error)
        self.state.last_error = error
        return []

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def _on_key(self, key: str) -> list[Effect]:
        state = self.state
        state.status_message = None
        if key in ("q", "ctrl+c"):
            return self._quit()
        if state.panes.namespace_picker_open:
            return self._on_picker_key(key)

        if key == "esc":
            return self._on_escape()
        if key == "tab":
            return self._toggle_view()
        if key == "n":
            return self._open_picker()
        if key == "i":
            state.panes.info_open = not state.panes.info_open
            self._relayout()
            return []
        if key == "l":
            return self._close_logs() if state.panes.logs_open else self._open_logs()
        if key == "s":
            return self._toggle_sort()
        if key == "r":
            return [FetchNamespaces(), self._poll()]
        if key in ("up", "k"):
            self._move_selection(-1)
        elif key in ("down", "j"):
            self._move_selection(1)
        elif key in ("pgup", "pgdn", "home", "end"):
            self._page(key)
        return []

    def _quit(self) -> list[Effect]:
        effects: list[Effect] = []
        sub = self.state.active_log_subscription
        if sub is not None:
            effects.append(CancelLogStream(sub.sub_id))
            self.state.active_log_subscription = None
        self.state.panes.logs_open = False
        self.state.quitting = True
        effects.append(Quit())
        return effects

    def _on_escape(self) -> list[Effect]:
        panes = self.state.panes
        if panes.info_open:
            panes.info_open = False
            self._relayout()
            return []
        if panes.logs_open:
            return self._close_logs()
        if self._settings.esc_quits:
            return self._quit()
        return []

    def _toggle_view(self) -> list[Effect]:
        state = self.state
        effects = self._close_logs()
        state.panes.info_open = False
        state.view_mode = state.view_mode.toggled()
        state.reset_cursor = True
        state.selection_index = 0
        self._relayout()
        effects.append(self._poll())
        return effects

    def _toggle_sort(self) -> list[Effect]:
        state = self.state
        state.sort_key = state.sort_key.toggled()
        state.cached_pods = sort_pods(state.cached_pods, state.sort_key)
        state.cached_nodes = sort_nodes(state.cached_nodes, state.sort_key)
        return [self._poll()]

    def _move_selection(self, delta: int) -> None:
        count = self.state.row_count
        if count == 0:
            self.state.selection_index = 0
            return
        self.state.selection_index = max(0, min(count - 1, self.state.selection_index + delta))

    def _page(self, key: str) -> None:
        sub = self.state.active_log_subscription
        if self.state.panes.logs_open and sub is not None:
            page = self.logs_page_size
            if key == "pgup":
                sub.scroll(page, page)
            elif key == "pgdn":
                sub.scroll(-page, page)
            elif key == "home":
                sub.scroll_to_top(page)
            else:
                sub.scroll_to_bottom()
            return

        page = self.table_page_size
        if key == "pgup":
            self._move_selection(-page)
        elif key == "pgdn":
            self._move_selection(page)
        elif key == "home":
            self.state.selection_index = 0
        else:
            self.state.selection_index = max(0, self.state.row_count - 1)

    # ------------------------------------------------------------------
    # Namespace picker
    # ------------------------------------------------------------------

    def _open_picker(self) -> list[Effect]:
        state = self.state
        state.panes.namespace_picker_open = True
        try:
            state.picker_index = state.namespace_candidates.index(state.namespace)
        except ValueError:
            state.picker_index = 0
        return []

    def _on_picker_key(self, key: str) -> list[Effect]:
        state = self.state
        last = len(state.namespace_candidates) - 1
        if key in ("esc", "n"):
            state.panes.namespace_picker_open = False
        elif key in ("up", "k"):
            state.picker_index = max(0, state.picker_index - 1)
        elif key in ("down", "j"):
            state.picker_index = min(last, state.picker_index + 1)
        elif key == "pgup":
            state.picker_index = max(0, state.picker_index - self._PICKER_PAGE)
        elif key == "pgdn":
            state.picker_index = min(last, state.picker_index + self._PICKER_PAGE)
        elif key == "home":
            state.picker_index = 0
        elif key == "end":
            state.picker_index = last
        elif key == "enter":
            return self._confirm_picker()
        return []

    def _confirm_picker(self) -> list[Effect]:
        state = self.state
        state.panes.namespace_picker_open = False
        chosen = state.namespace_candidates[state.picker_index]
        if chosen == state.namespace:
            return []

        logger.info("Switching namespace %s -> %s", state.namespace.label, chosen.label)
        # Cancel before the new poll is issued so no old line lands afterwards.
        effects = self._close_logs()
        state.panes.info_open = False
        state.namespace = chosen
        state.reset_cursor = True
        state.selection_index = 0
        state.cached_pods = ()
        self._relayout()
        effects.append(self._poll())
        return effects

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    def _current_log_target(self) -> LogsTarget | None:
        row = self.selected_row
        if isinstance(row, PodMetric):
            return LogsTarget(
                namespace=row.namespace,
                kind=TargetKind.POD,
                name=row.pod_name,
                container=row.container,
            )
        if isinstance(row, NodeMetric):
            return LogsTarget(kind=TargetKind.NODE, name=row.node_name)
        return None

    def _open_logs(self) -> list[Effect]:
        state = self.state
        target = self._current_log_target()
        if target is None:
            state.status_message = "Nothing selected to stream logs from"
            return []

        effects: list[Effect] = []
        if state.active_log_subscription is not None:
            effects.append(CancelLogStream(state.active_log_subscription.sub_id))
        state.next_sub_id += 1
        state.active_log_subscription = LogSubscription(
            sub_id=state.next_sub_id,
            target=target,
            max_lines=self._settings.log_buffer_max_lines,
        )
        state.panes.logs_open = True
        self._relayout()
        effects.append(StartLogStream(state.next_sub_id, target))
        return effects

    def _close_logs(self) -> list[Effect]:
        state = self.state
        effects: list[Effect] = []
        if state.active_log_subscription is not None:
            effects.append(CancelLogStream(state.active_log_subscription.sub_id))
            state.active_log_subscription = None
        if state.panes.logs_open:
            state.panes.logs_open = False
            self._relayout()
        return effects

    def _active_sub(self, sub_id: int) -> LogSubscription | None:
        sub = self.state.active_log_subscription
        if sub is None or sub.sub_id != sub_id:
            return None
        return sub

    def _on_log_line(self, event: LogLineReceived) -> list[Effect]:
        sub = self._active_sub(event.sub_id)
        if sub is None or sub.ended:
            return []
        sub.append(format_log_line(event.line))
        return [ReadNextLogLine(sub.sub_id)]

    def _on_log_ended(self, sub_id: int) -> list[Effect]:
        sub = self._active_sub(sub_id)
        if sub is not None:
            logger.debug("Log stream %d ended", sub_id)
            sub.ended = True
        return []

    def _on_log_failed(self, sub_id: int, error: str) -> list[Effect]:
        if self._active_sub(sub_id) is None:
            return []
        logger.warning("Log stream %d failed: %s", sub_id, error)
        self.state.last_error = error
        return self._close_logs()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _compute_layout(self) -> DashboardLayout:
        width, height = self.state.terminal_size
        return compute_layout(
            width,
            height,
            info_open=self.state.panes.info_open,
            logs_open=self.state.panes.logs_open,
        )

    def _relayout(self) -> None:
        self.layout = self._compute_layout()

    def _on_resize(self, width: int, height: int) -> list[Effect]:
        self.state.terminal_size = (max(0, width), max(0, height))
        self._relayout()
        return []


__all__ = [
    "DashboardPresenter",
    "sort_nodes",
    "sort_pods",
]
