"""Rich renderables for each dashboard pane.

Builders read the presenter and return ``rich.text.Text``; they never
mutate state, so the screen can redraw any pane at any time.
"""

from __future__ import annotations

from rich.text import Text

from kmet.constants.enums import LogLevel, SortKey, ViewMode
from kmet.constants.values import (
    APP_TITLE,
    APP_VERSION,
    EMPTY_TREND_GLYPH,
    FOOTER_HINT,
    HEADER_SEPARATOR,
    PICKER_HINT,
)
from kmet.models.core.metrics import NodeMetric, PodMetric
from kmet.screens.dashboard.presenter import DashboardPresenter
from kmet.utils.charts import bar, sparkline
from kmet.utils.formatting import (
    bytes_to_mib,
    fit,
    format_mib,
    format_millicores,
    format_percent,
)

PICKER_TITLE = "Switch Namespace (↑/↓, Enter, Esc)"
PICKER_WIDTH = 40
PICKER_HEIGHT = 14

INFO_BAR_WIDTH = 12
INFO_POD_TREND_WIDTH = 30
INFO_NODE_TREND_WIDTH = 40

# Request-relative utilization is drawn against a 250% / 300% scale.
CPU_REQUEST_BAR_SCALE = 2.5
MEM_REQUEST_BAR_SCALE = 3.0

_SELECTED_STYLE = "reverse"
_HEADER_STYLE = "bold"
_ERROR_STYLE = "bold red"
_LEVEL_STYLES = {LogLevel.ERROR.value: "red", LogLevel.WARN.value: "yellow"}


def _ratio(value: float, denominator: float) -> float:
    return value / denominator if denominator > 0 else 0.0


def _log_line_style(line: str) -> str:
    """Style for a line formatted as ``HH:MM:SS.mmm LEVEL text [source]``."""
    fields = line.split(None, 2)
    if len(fields) < 2:
        return ""
    return _LEVEL_STYLES.get(fields[1], "")


def _trend_cell(samples: tuple[float, ...], width: int) -> str:
    if not samples:
        return fit(EMPTY_TREND_GLYPH, width)
    return fit(sparkline(samples, width), width)


# =============================================================================
# Header / footer
# =============================================================================


def render_header(presenter: DashboardPresenter, context: str) -> Text:
    state = presenter.state
    sort = "CPU" if state.sort_key is SortKey.CPU else "MEM"
    parts = [
        f"{APP_TITLE} v{APP_VERSION}",
        f"ctx: {context}",
        f"ns: {state.namespace.label}",
        f"view: {state.view_mode.value}",
        f"sort: {sort}",
    ]
    if state.label_selector:
        parts.append(f"sel: {state.label_selector}")
    text = Text(f" {HEADER_SEPARATOR} ".join(parts), style=_HEADER_STYLE)
    if state.last_error:
        text.append(f" {HEADER_SEPARATOR} ")
        text.append(f"! {state.last_error}", style=_ERROR_STYLE)
    return text


def render_footer(presenter: DashboardPresenter) -> Text:
    state = presenter.state
    if state.panes.namespace_picker_open:
        return Text(PICKER_HINT, style="dim")
    if state.status_message:
        return Text(state.status_message, style="yellow")
    return Text(FOOTER_HINT, style="dim")


# =============================================================================
# Main table
# =============================================================================


def _pod_header(presenter: DashboardPresenter) -> str:
    cols = presenter.layout.pod_columns
    return "".join(
        [
            fit("POD (ctr)", cols.pod),
            fit("CPU", cols.cpu),
            fit("", cols.cpu_bar),
            fit("MEM", cols.mem),
            fit("", cols.mem_bar),
            fit("READY", cols.ready),
            fit("NODE", cols.node),
            fit("TREND", cols.trend),
        ]
    )


def _pod_row(
    presenter: DashboardPresenter, pod: PodMetric, max_cpu: int, max_mem: int
) -> str:
    cols = presenter.layout.pod_columns
    name = f"{pod.pod_name} ({pod.container})" if pod.container else pod.pod_name
    cpu_ratio = (
        _ratio(pod.cpu_millicores, pod.cpu_request_millicores)
        if pod.cpu_request_millicores
        else _ratio(pod.cpu_millicores, max_cpu)
    )
    mem_ratio = (
        _ratio(pod.memory_bytes, pod.memory_request_bytes)
        if pod.memory_request_bytes
        else _ratio(pod.memory_bytes, max_mem)
    )
    return "".join(
        [
            fit(name, cols.pod),
            fit(format_millicores(pod.cpu_millicores), cols.cpu),
            fit(bar(cpu_ratio, cols.cpu_bar - 1), cols.cpu_bar),
            fit(format_mib(pod.memory_bytes), cols.mem),
            fit(bar(mem_ratio, cols.mem_bar - 1), cols.mem_bar),
            fit(pod.ready, cols.ready),
            fit(pod.node_name, cols.node),
            _trend_cell(pod.cpu_trend.samples, cols.trend),
        ]
    )


def _node_header(presenter: DashboardPresenter) -> str:
    cols = presenter.layout.node_columns
    return "".join(
        [
            fit("NODE", cols.node),
            fit("CPU", cols.cpu_pct),
            fit("", cols.cpu_bar),
            fit("MEM", cols.mem_pct),
            fit("", cols.mem_bar),
            fit("PODS", cols.pods),
            fit("K8S", cols.k8s),
            fit("TREND", cols.trend),
        ]
    )


def _node_row(presenter: DashboardPresenter, node: NodeMetric) -> str:
    cols = presenter.layout.node_columns
    return "".join(
        [
            fit(node.node_name, cols.node),
            fit(format_percent(node.cpu_used), cols.cpu_pct),
            fit(bar(node.cpu_used, cols.cpu_bar - 1), cols.cpu_bar),
            fit(format_percent(node.mem_used), cols.mem_pct),
            fit(bar(node.mem_used, cols.mem_bar - 1), cols.mem_bar),
            fit(str(node.pods), cols.pods),
            fit(node.kubelet_version, cols.k8s),
            _trend_cell(node.cpu_trend.samples, cols.trend),
        ]
    )


def table_window(presenter: DashboardPresenter) -> tuple[int, int]:
    """Slice ``[start, end)`` of rows that keeps the selection visible."""
    rows = presenter.visible_rows
    visible = presenter.table_page_size
    selection = presenter.state.selection_index
    start = max(0, selection - visible + 1)
    return start, min(len(rows), start + visible)


def render_table(presenter: DashboardPresenter) -> Text:
    state = presenter.state
    pods_view = state.view_mode is ViewMode.PODS
    text = Text(_pod_header(presenter) if pods_view else _node_header(presenter), style=_HEADER_STYLE)

    rows = presenter.visible_rows
    if not rows:
        text.append("\n")
        text.append("No pods" if pods_view else "No nodes", style="dim")
        return text

    start, end = table_window(presenter)
    max_cpu = max_mem = 0
    if pods_view:
        max_cpu = max(pod.cpu_millicores for pod in state.cached_pods)
        max_mem = max(pod.memory_bytes for pod in state.cached_pods)
    for index in range(start, end):
        row = rows[index]
        if isinstance(row, PodMetric):
            line = _pod_row(presenter, row, max_cpu, max_mem)
        else:
            line = _node_row(presenter, row)
        text.append("\n")
        text.append(line, style=_SELECTED_STYLE if index == state.selection_index else "")
    return text


# =============================================================================
# Info pane
# =============================================================================


def _pod_info(pod: PodMetric, max_cpu: int) -> Text:
    text = Text()
    text.append(
        f"Pod: {pod.pod_name}  ns: {pod.namespace}  node: {pod.node_name}  phase: {pod.phase}\n"
    )
    text.append(
        f"Requests: cpu={pod.cpu_request_millicores}m "
        f"mem={int(bytes_to_mib(pod.memory_request_bytes))}Mi  Ready: {pod.ready}\n"
    )
    if pod.cpu_request_millicores and pod.memory_request_bytes:
        cpu_util = _ratio(pod.cpu_millicores, pod.cpu_request_millicores)
        mem_util = _ratio(pod.memory_bytes, pod.memory_request_bytes)
        text.append(
            f"Util vs Req: CPU {format_percent(cpu_util)} "
            f"[{bar(cpu_util / CPU_REQUEST_BAR_SCALE, INFO_BAR_WIDTH)}]  "
            f"MEM {format_percent(mem_util)} "
            f"[{bar(mem_util / MEM_REQUEST_BAR_SCALE, INFO_BAR_WIDTH)}]\n"
        )
    else:
        text.append("Util vs Req: n/a (no requests)\n", style="dim")
    max_util = _ratio(pod.cpu_millicores, max_cpu)
    text.append(
        f"Util vs Max: CPU {format_percent(max_util)} [{bar(max_util, INFO_BAR_WIDTH)}]\n"
    )
    text.append(
        f"Trend CPU: {_trend_cell(pod.cpu_trend.samples, INFO_POD_TREND_WIDTH)}  "
        f"MEM: {_trend_cell(pod.mem_trend.samples, INFO_POD_TREND_WIDTH)}"
    )
    return text


def _node_info(node: NodeMetric) -> Text:
    text = Text()
    text.append(f"Node: {node.node_name}  k8s: {node.kubelet_version}  pods: {node.pods}\n")
    text.append(f"CPU(5m): {_trend_cell(node.cpu_trend.samples, INFO_NODE_TREND_WIDTH)}\n")
    text.append(f"MEM(5m): {_trend_cell(node.mem_trend.samples, INFO_NODE_TREND_WIDTH)}")
    return text


def render_info(presenter: DashboardPresenter) -> Text:
    row = presenter.selected_row
    if row is None:
        return Text("No selection", style="dim")
    if isinstance(row, PodMetric):
        max_cpu = max(pod.cpu_millicores for pod in presenter.state.cached_pods)
        return _pod_info(row, max_cpu)
    return _node_info(row)


# =============================================================================
# Logs pane
# =============================================================================


def render_logs(presenter: DashboardPresenter) -> Text:
    sub = presenter.state.active_log_subscription
    if sub is None:
        return Text("")
    title = f"Logs: {sub.target.label}"
    if sub.ended:
        title += " (ended)"
    if not sub.follow:
        title += " [scrolled]"
    text = Text(title, style=_HEADER_STYLE)
    for line in presenter.log_lines_window():
        style = _log_line_style(line)
        text.append("\n")
        text.append(line, style=style)
    return text


# =============================================================================
# Namespace picker
# =============================================================================


def render_picker(presenter: DashboardPresenter) -> Text:
    state = presenter.state
    candidates = state.namespace_candidates
    visible = PICKER_HEIGHT - 3
    start = max(0, state.picker_index - visible + 1)
    text = Text(PICKER_TITLE, style=_HEADER_STYLE)
    for index in range(start, min(len(candidates), start + visible)):
        scope = candidates[index]
        marker = "*" if scope == state.namespace else " "
        line = fit(f"{marker} {scope.label}", PICKER_WIDTH - 4)
        text.append("\n")
        text.append(line, style=_SELECTED_STYLE if index == state.picker_index else "")
    return text


__all__ = [
    "PICKER_HEIGHT",
    "PICKER_TITLE",
    "PICKER_WIDTH",
    "render_footer",
    "render_header",
    "render_info",
    "render_logs",
    "render_picker",
    "render_table",
    "table_window",
]
