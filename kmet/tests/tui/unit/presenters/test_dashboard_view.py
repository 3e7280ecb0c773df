"""Tests for the rich renderables built from presenter state."""

from __future__ import annotations

from datetime import datetime

import pytest

from kmet.constants.enums import LogLevel
from kmet.constants.values import FOOTER_HINT, PICKER_HINT
from kmet.models.core.logs import LogLine
from kmet.models.core.metrics import NodeMetric, PodMetric, Trend
from kmet.models.state.app_settings import AppSettings
from kmet.screens.dashboard.events import (
    KeyPressed,
    LogLineReceived,
    LogStreamEnded,
    NamespacesLoaded,
    Poll,
    PollFailed,
    PollSucceeded,
    Resized,
    Tick,
)
from kmet.screens.dashboard.presenter import DashboardPresenter
from kmet.screens.dashboard.view import (
    PICKER_TITLE,
    render_footer,
    render_header,
    render_info,
    render_logs,
    render_picker,
    render_table,
    table_window,
)

MIB = 1024**2


def _pod(name: str, cpu: int, requests: bool = True) -> PodMetric:
    return PodMetric(
        namespace="default",
        pod_name=name,
        container="app",
        node_name="node-1",
        cpu_millicores=cpu,
        memory_bytes=300 * MIB,
        cpu_request_millicores=100 if requests else 0,
        memory_request_bytes=256 * MIB if requests else 0,
        ready="1/1",
        phase="Running",
        cpu_trend=Trend(samples=(0.1, 0.5, 0.9)),
    )


def _deliver(presenter: DashboardPresenter, rows: tuple) -> None:
    poll = next(e for e in presenter.dispatch(Tick()) if isinstance(e, Poll))
    presenter.dispatch(PollSucceeded(poll.seq, poll.view, poll.scope, rows))


def _styles(text) -> list[str]:
    return [str(span.style) for span in text.spans]


@pytest.fixture
def presenter() -> DashboardPresenter:
    presenter = DashboardPresenter(AppSettings())
    presenter.dispatch(Resized(120, 40))
    return presenter


class TestHeaderAndFooter:
    """Tests for the header and footer lines."""

    def test_header_fields(self, presenter: DashboardPresenter) -> None:
        text = render_header(presenter, "dev")
        assert text.plain == "kmet v0.3.0 │ ctx: dev │ ns: default │ view: pods │ sort: CPU"

    def test_header_shows_selector_and_sort(self) -> None:
        presenter = DashboardPresenter(AppSettings(label_selector="app=api"))
        presenter.dispatch(KeyPressed("s"))
        text = render_header(presenter, "dev").plain
        assert "sort: MEM" in text
        assert text.endswith("sel: app=api")

    def test_header_shows_error(self, presenter: DashboardPresenter) -> None:
        poll = next(e for e in presenter.dispatch(Tick()) if isinstance(e, Poll))
        presenter.dispatch(PollFailed(poll.seq, poll.view, poll.scope, "connection refused"))
        text = render_header(presenter, "dev")
        assert text.plain.endswith("! connection refused")
        assert "bold red" in _styles(text)

    def test_footer_hint(self, presenter: DashboardPresenter) -> None:
        assert render_footer(presenter).plain == FOOTER_HINT

    def test_footer_status_message(self, presenter: DashboardPresenter) -> None:
        presenter.dispatch(KeyPressed("l"))
        assert render_footer(presenter).plain == "Nothing selected to stream logs from"

    def test_footer_picker_hint(self, presenter: DashboardPresenter) -> None:
        presenter.dispatch(KeyPressed("n"))
        assert render_footer(presenter).plain == PICKER_HINT


class TestTable:
    """Tests for the main table."""

    def test_empty_pods(self, presenter: DashboardPresenter) -> None:
        lines = render_table(presenter).plain.splitlines()
        assert lines[0].startswith("POD (ctr)")
        assert lines[1] == "No pods"

    def test_empty_nodes(self, presenter: DashboardPresenter) -> None:
        presenter.dispatch(KeyPressed("tab"))
        lines = render_table(presenter).plain.splitlines()
        assert lines[0].startswith("NODE")
        assert lines[1] == "No nodes"

    def test_pod_rows_sorted_with_one_selected(self, presenter: DashboardPresenter) -> None:
        _deliver(presenter, (_pod("low", 50), _pod("high", 200)))
        text = render_table(presenter)
        lines = text.plain.splitlines()
        assert lines[1].startswith("high (app)")
        assert lines[2].startswith("low (app)")
        assert " 200m" in lines[1]
        assert _styles(text).count("reverse") == 1

    def test_rows_fill_the_layout_width(self, presenter: DashboardPresenter) -> None:
        _deliver(presenter, (_pod("api", 120),))
        lines = render_table(presenter).plain.splitlines()
        assert len(lines[1]) == presenter.layout.pod_columns.total
        assert len(lines[0]) == presenter.layout.pod_columns.total

    def test_node_rows(self, presenter: DashboardPresenter) -> None:
        presenter.dispatch(KeyPressed("tab"))
        _deliver(
            presenter,
            (NodeMetric(node_name="n1", cpu_used=0.5, mem_used=0.25, pods=17, kubelet_version="v1.29"),),
        )
        line = render_table(presenter).plain.splitlines()[1]
        assert line.startswith("n1")
        assert " 50%" in line
        assert "17" in line
        assert "v1.29" in line

    def test_window_follows_selection(self, presenter: DashboardPresenter) -> None:
        _deliver(presenter, tuple(_pod(f"pod-{i:02d}", 1000 - i) for i in range(50)))
        page = presenter.table_page_size
        assert table_window(presenter) == (0, page)
        presenter.dispatch(KeyPressed("end"))
        assert table_window(presenter) == (50 - page, 50)
        assert len(render_table(presenter).plain.splitlines()) == page + 1


class TestInfo:
    """Tests for the info pane."""

    def test_no_selection(self, presenter: DashboardPresenter) -> None:
        assert render_info(presenter).plain == "No selection"

    def test_pod_with_requests(self, presenter: DashboardPresenter) -> None:
        _deliver(presenter, (_pod("api", 120),))
        text = render_info(presenter).plain
        assert "Pod: api  ns: default  node: node-1  phase: Running" in text
        assert "Requests: cpu=100m mem=256Mi  Ready: 1/1" in text
        assert "Util vs Req: CPU 120%" in text
        assert "Util vs Max: CPU 100%" in text
        assert "Trend CPU: " in text

    def test_pod_without_requests(self, presenter: DashboardPresenter) -> None:
        _deliver(presenter, (_pod("api", 120, requests=False),))
        assert "Util vs Req: n/a (no requests)" in render_info(presenter).plain

    def test_node_info(self, presenter: DashboardPresenter) -> None:
        presenter.dispatch(KeyPressed("tab"))
        _deliver(presenter, (NodeMetric(node_name="n1", pods=3, kubelet_version="v1.29"),))
        lines = render_info(presenter).plain.splitlines()
        assert lines[0] == "Node: n1  k8s: v1.29  pods: 3"
        assert lines[1].startswith("CPU(5m): —")


class TestLogs:
    """Tests for the logs pane."""

    def _open(self, presenter: DashboardPresenter) -> int:
        _deliver(presenter, (_pod("api-1", 120),))
        presenter.dispatch(KeyPressed("l"))
        return presenter.state.active_log_subscription.sub_id

    def test_closed(self, presenter: DashboardPresenter) -> None:
        assert render_logs(presenter).plain == ""

    def test_title_and_levels(self, presenter: DashboardPresenter) -> None:
        sub_id = self._open(presenter)
        for level, text in ((LogLevel.INFO, "ok"), (LogLevel.ERROR, "boom")):
            presenter.dispatch(
                LogLineReceived(
                    sub_id,
                    LogLine(timestamp=datetime(2024, 1, 1, 9, 0), level=level, text=text, source="api"),
                )
            )
        rendered = render_logs(presenter)
        lines = rendered.plain.splitlines()
        assert lines[0] == "Logs: default/api-1 (app)"
        assert lines[1].endswith("ok [api]")
        assert lines[2].endswith("boom [api]")
        assert "red" in _styles(rendered)

    def test_level_word_in_message_does_not_colour_line(
        self, presenter: DashboardPresenter
    ) -> None:
        sub_id = self._open(presenter)
        presenter.dispatch(
            LogLineReceived(
                sub_id,
                LogLine(
                    timestamp=datetime(2024, 1, 1, 9, 0),
                    level=LogLevel.INFO,
                    text="retrying after ERROR from upstream",
                    source="api",
                ),
            )
        )
        rendered = render_logs(presenter)
        assert "ERROR from upstream" in rendered.plain
        assert "red" not in _styles(rendered)
        assert "yellow" not in _styles(rendered)

    def test_warn_line_is_yellow(self, presenter: DashboardPresenter) -> None:
        sub_id = self._open(presenter)
        presenter.dispatch(
            LogLineReceived(
                sub_id,
                LogLine(timestamp=datetime(2024, 1, 1), level=LogLevel.WARN, text="slow", source="api"),
            )
        )
        assert "yellow" in _styles(render_logs(presenter))

    def test_ended_and_scrolled_markers(self, presenter: DashboardPresenter) -> None:
        sub_id = self._open(presenter)
        for i in range(40):
            presenter.dispatch(
                LogLineReceived(sub_id, LogLine(timestamp=datetime(2024, 1, 1), text=f"l{i}"))
            )
        presenter.dispatch(KeyPressed("pgup"))
        presenter.dispatch(LogStreamEnded(sub_id))
        title = render_logs(presenter).plain.splitlines()[0]
        assert title == "Logs: default/api-1 (app) (ended) [scrolled]"


class TestPicker:
    """Tests for the namespace picker overlay."""

    def test_marks_current_and_highlights_cursor(self, presenter: DashboardPresenter) -> None:
        presenter.dispatch(NamespacesLoaded(("default", "staging")))
        presenter.dispatch(KeyPressed("n"))
        presenter.dispatch(KeyPressed("down"))
        text = render_picker(presenter)
        lines = [line.rstrip() for line in text.plain.splitlines()]
        assert lines == [PICKER_TITLE, "  all", "* default", "  staging"]
        assert _styles(text).count("reverse") == 1
