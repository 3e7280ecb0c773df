"""Responsive layout for the dashboard screen.

Pure functions from terminal geometry and pane visibility to pane heights
and table column widths.
"""

from __future__ import annotations

from dataclasses import dataclass

from kmet.constants.limits import (
    BAR_WIDTH_RANGE,
    CONTENT_WIDTH_MARGIN,
    FOOTER_HEIGHT,
    HEADER_HEIGHT,
    LAYOUT_BASE_MIN,
    LAYOUT_CHROME_ROWS,
    LOGS_RATIO_BOTH_PANES,
    MIN_TABLE_HEIGHT,
    NODE_COL_MIN_CPU_PCT,
    NODE_COL_MIN_K8S,
    NODE_COL_MIN_MEM_PCT,
    NODE_COL_MIN_NODE,
    NODE_COL_MIN_PODS,
    NODE_COL_MIN_TREND,
    NODE_COL_NODE_RANGE,
    NODE_REMAIN_MIN,
    POD_COL_MIN_CPU,
    POD_COL_MIN_MEM,
    POD_COL_MIN_NODE,
    POD_COL_MIN_POD,
    POD_COL_MIN_READY,
    POD_COL_MIN_TREND,
    POD_COL_NODE_RANGE,
    POD_COL_POD_RANGE,
    POD_REMAIN_MIN,
    TABLE_RATIO_BOTH_PANES,
    TABLE_RATIO_INFO_ONLY,
    TABLE_RATIO_LOGS_ONLY,
)


def _clamp(value: int, bounds: tuple[int, int]) -> int:
    lo, hi = bounds
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class PodColumnWidths:
    pod: int
    cpu: int
    cpu_bar: int
    mem: int
    mem_bar: int
    ready: int
    node: int
    trend: int

    @property
    def total(self) -> int:
        return (
            self.pod + self.cpu + self.cpu_bar + self.mem
            + self.mem_bar + self.ready + self.node + self.trend
        )


@dataclass(frozen=True)
class NodeColumnWidths:
    node: int
    cpu_pct: int
    cpu_bar: int
    mem_pct: int
    mem_bar: int
    pods: int
    k8s: int
    trend: int

    @property
    def total(self) -> int:
        return (
            self.node + self.cpu_pct + self.cpu_bar + self.mem_pct
            + self.mem_bar + self.pods + self.k8s + self.trend
        )


@dataclass(frozen=True)
class DashboardLayout:
    width: int
    height: int
    content_width: int
    table_height: int
    info_height: int
    logs_height: int
    pod_columns: PodColumnWidths
    node_columns: NodeColumnWidths


def pod_column_widths(total: int) -> PodColumnWidths:
    """Fixed minimums per column; leftover width goes to the two bars.

    Each bar takes a third of the leftover and the pod name column gets
    the rest.
    """
    base = (
        POD_COL_MIN_POD + POD_COL_MIN_CPU + POD_COL_MIN_MEM
        + POD_COL_MIN_READY + POD_COL_MIN_NODE + POD_COL_MIN_TREND
    )
    remain = max(POD_REMAIN_MIN, total - base)
    bar_width = remain // 3
    extra = remain - 2 * bar_width
    return PodColumnWidths(
        pod=_clamp(POD_COL_MIN_POD + extra, POD_COL_POD_RANGE),
        cpu=POD_COL_MIN_CPU,
        cpu_bar=_clamp(bar_width, BAR_WIDTH_RANGE),
        mem=POD_COL_MIN_MEM,
        mem_bar=_clamp(bar_width, BAR_WIDTH_RANGE),
        ready=POD_COL_MIN_READY,
        node=_clamp(POD_COL_MIN_NODE, POD_COL_NODE_RANGE),
        trend=POD_COL_MIN_TREND,
    )


def node_column_widths(total: int) -> NodeColumnWidths:
    """Fixed minimums per column; leftover width is split between the bars."""
    base = (
        NODE_COL_MIN_NODE + NODE_COL_MIN_CPU_PCT + NODE_COL_MIN_MEM_PCT
        + NODE_COL_MIN_PODS + NODE_COL_MIN_K8S + NODE_COL_MIN_TREND
    )
    remain = max(NODE_REMAIN_MIN, total - base)
    cpu_bar = remain // 2
    mem_bar = remain - cpu_bar
    return NodeColumnWidths(
        node=_clamp(NODE_COL_MIN_NODE, NODE_COL_NODE_RANGE),
        cpu_pct=NODE_COL_MIN_CPU_PCT,
        cpu_bar=_clamp(cpu_bar, BAR_WIDTH_RANGE),
        mem_pct=NODE_COL_MIN_MEM_PCT,
        mem_bar=_clamp(mem_bar, BAR_WIDTH_RANGE),
        pods=NODE_COL_MIN_PODS,
        k8s=NODE_COL_MIN_K8S,
        trend=NODE_COL_MIN_TREND,
    )


def compute_layout(
    width: int,
    height: int,
    *,
    info_open: bool,
    logs_open: bool,
    header_height: int = HEADER_HEIGHT,
    footer_height: int = FOOTER_HEIGHT,
) -> DashboardLayout:
    """Derive pane heights and column widths for one terminal size.

    The table never drops below ``MIN_TABLE_HEIGHT`` rows, even when the
    ratio for the open panes would give it less.
    """
    base = max(LAYOUT_BASE_MIN, height - header_height - footer_height - LAYOUT_CHROME_ROWS)

    if info_open and logs_open:
        table_height = int(base * TABLE_RATIO_BOTH_PANES)
        logs_height = int(base * LOGS_RATIO_BOTH_PANES)
    elif logs_open:
        table_height = int(base * TABLE_RATIO_LOGS_ONLY)
        logs_height = base - table_height
    elif info_open:
        table_height = int(base * TABLE_RATIO_INFO_ONLY)
        logs_height = 0
    else:
        table_height = base
        logs_height = 0

    table_height = max(MIN_TABLE_HEIGHT, table_height)
    logs_height = max(0, logs_height)
    info_height = max(0, base - table_height - logs_height) if info_open else 0

    content_width = max(0, width - CONTENT_WIDTH_MARGIN)
    return DashboardLayout(
        width=width,
        height=height,
        content_width=content_width,
        table_height=table_height,
        info_height=info_height,
        logs_height=logs_height,
        pod_columns=pod_column_widths(content_width),
        node_columns=node_column_widths(content_width),
    )


__all__ = [
    "DashboardLayout",
    "NodeColumnWidths",
    "PodColumnWidths",
    "compute_layout",
    "node_column_widths",
    "pod_column_widths",
]
