"""Dashboard screen: live pod/node table with info, logs and namespace picker."""

from __future__ import annotations

import logging
from contextlib import suppress

from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.events import Resize
from textual.message import Message
from textual.screen import Screen

from kmet.controllers.base import LogSource, MetricsSource
from kmet.keyboard import DASHBOARD_SCREEN_BINDINGS
from kmet.models.state.app_settings import AppSettings
from kmet.screens.dashboard.events import DashboardEvent, KeyPressed, Resized
from kmet.screens.dashboard.presenter import DashboardPresenter
from kmet.screens.dashboard.runner import EffectRunner
from kmet.screens.dashboard.view import (
    render_footer,
    render_header,
    render_info,
    render_logs,
    render_picker,
    render_table,
)
from kmet.widgets import DashboardPane, PickerOverlay

logger = logging.getLogger(__name__)


class DashboardEventPosted(Message):
    """Carries a provider outcome from the effect runner onto the UI loop."""

    def __init__(self, event: DashboardEvent) -> None:
        super().__init__()
        self.event = event


class DashboardScreen(Screen[None]):
    """Single-screen dashboard driven by ``DashboardPresenter``."""

    BINDINGS = DASHBOARD_SCREEN_BINDINGS

    DEFAULT_CSS = """
    DashboardScreen {
        layers: base overlay;
        layout: vertical;
    }
    #header-pane, #footer-pane {
        height: 1;
    }
    """

    def __init__(
        self,
        metrics: MetricsSource,
        logs: LogSource,
        *,
        settings: AppSettings | None = None,
        context_label: str = "current",
    ) -> None:
        super().__init__()
        self.presenter = DashboardPresenter(settings)
        self._metrics = metrics
        self._logs = logs
        self._context_label = context_label
        self._runner: EffectRunner | None = None

    def compose(self) -> ComposeResult:
        yield DashboardPane(id="header-pane")
        yield DashboardPane(id="table-pane", bordered=True)
        yield DashboardPane(id="info-pane", bordered=True)
        yield DashboardPane(id="logs-pane", bordered=True)
        yield DashboardPane(id="footer-pane")
        yield PickerOverlay(id="picker-pane")

    def on_mount(self) -> None:
        self._runner = EffectRunner(
            self._metrics,
            self._logs,
            post=self._post_event,
            on_quit=self.app.exit,
        )
        self._apply(Resized(self.app.size.width, self.app.size.height))
        self._runner.run(self.presenter.start())

    def on_unmount(self) -> None:
        if self._runner is not None:
            self._runner.shutdown()

    # ------------------------------------------------------------------
    # Event plumbing
    # ------------------------------------------------------------------

    def _post_event(self, event: DashboardEvent) -> None:
        self.post_message(DashboardEventPosted(event))

    def on_dashboard_event_posted(self, message: DashboardEventPosted) -> None:
        self._apply(message.event)

    def on_resize(self, event: Resize) -> None:
        self._apply(Resized(event.size.width, event.size.height))

    def action_press(self, key: str) -> None:
        """Forward a bound key to the presenter."""
        self._apply(KeyPressed(key))

    def _apply(self, event: DashboardEvent) -> None:
        effects = self.presenter.dispatch(event)
        self.refresh_panes()
        if self._runner is not None:
            self._runner.run(effects)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def refresh_panes(self) -> None:
        """Redraw every pane from the current presenter state."""
        with suppress(NoMatches):
            self._refresh_panes()

    def _refresh_panes(self) -> None:
        presenter = self.presenter
        layout = presenter.layout
        panes = presenter.state.panes

        self.query_one("#header-pane", DashboardPane).show(
            render_header(presenter, self._context_label)
        )
        self.query_one("#table-pane", DashboardPane).show(
            render_table(presenter), layout.table_height
        )
        self.query_one("#info-pane", DashboardPane).show(
            render_info(presenter) if panes.info_open else "",
            layout.info_height if panes.info_open else 0,
        )
        self.query_one("#logs-pane", DashboardPane).show(
            render_logs(presenter) if panes.logs_open else "",
            layout.logs_height if panes.logs_open else 0,
        )
        self.query_one("#footer-pane", DashboardPane).show(render_footer(presenter))

        picker = self.query_one("#picker-pane", PickerOverlay)
        picker.display = panes.namespace_picker_open
        if panes.namespace_picker_open:
            picker.show(render_picker(presenter))


__all__ = [
    "DashboardEventPosted",
    "DashboardScreen",
]
