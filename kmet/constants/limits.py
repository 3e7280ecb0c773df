"""Limit constants for the dashboard.

Layout floors, column minimums and clamps, and validation bounds.
"""

from typing import Final

# ============================================================================
# Vertical layout
# ============================================================================

HEADER_HEIGHT: Final = 1
FOOTER_HEIGHT: Final = 1
LAYOUT_CHROME_ROWS: Final = 2  # borders around the table
LAYOUT_BASE_MIN: Final = 10
MIN_TABLE_HEIGHT: Final = 8
CONTENT_WIDTH_MARGIN: Final = 4

# Pane split ratios (fraction of base height given to the table / logs)
TABLE_RATIO_BOTH_PANES: Final = 0.5
LOGS_RATIO_BOTH_PANES: Final = 0.3
TABLE_RATIO_LOGS_ONLY: Final = 0.55
TABLE_RATIO_INFO_ONLY: Final = 0.65

# ============================================================================
# Pod table columns
# ============================================================================

POD_COL_MIN_POD: Final = 24
POD_COL_MIN_CPU: Final = 6
POD_COL_MIN_MEM: Final = 8
POD_COL_MIN_READY: Final = 6
POD_COL_MIN_NODE: Final = 12
POD_COL_MIN_TREND: Final = 8
POD_REMAIN_MIN: Final = 10
POD_COL_POD_RANGE: Final = (16, 60)
POD_COL_NODE_RANGE: Final = (10, 30)

# ============================================================================
# Node table columns
# ============================================================================

NODE_COL_MIN_NODE: Final = 16
NODE_COL_MIN_CPU_PCT: Final = 6
NODE_COL_MIN_MEM_PCT: Final = 6
NODE_COL_MIN_PODS: Final = 5
NODE_COL_MIN_K8S: Final = 6
NODE_COL_MIN_TREND: Final = 8
NODE_REMAIN_MIN: Final = 8
NODE_COL_NODE_RANGE: Final = (12, 40)

BAR_WIDTH_RANGE: Final = (6, 40)

# ============================================================================
# Log streaming
# ============================================================================

LOG_TAIL_LINES: Final = 200
LOG_MAX_CONCURRENT_REQUESTS: Final = 10

# ============================================================================
# Settings validation
# ============================================================================

REFRESH_INTERVAL_MIN: Final = 0.25
TREND_CAPACITY_MIN: Final = 1
LOG_BUFFER_MIN_LINES: Final = 10

__all__ = [
    "BAR_WIDTH_RANGE",
    "CONTENT_WIDTH_MARGIN",
    "FOOTER_HEIGHT",
    "HEADER_HEIGHT",
    "LAYOUT_BASE_MIN",
    "LAYOUT_CHROME_ROWS",
    "LOGS_RATIO_BOTH_PANES",
    "LOG_BUFFER_MIN_LINES",
    "LOG_MAX_CONCURRENT_REQUESTS",
    "LOG_TAIL_LINES",
    "MIN_TABLE_HEIGHT",
    "NODE_COL_MIN_CPU_PCT",
    "NODE_COL_MIN_K8S",
    "NODE_COL_MIN_MEM_PCT",
    "NODE_COL_MIN_NODE",
    "NODE_COL_MIN_PODS",
    "NODE_COL_MIN_TREND",
    "NODE_COL_NODE_RANGE",
    "NODE_REMAIN_MIN",
    "POD_COL_MIN_CPU",
    "POD_COL_MIN_MEM",
    "POD_COL_MIN_NODE",
    "POD_COL_MIN_POD",
    "POD_COL_MIN_READY",
    "POD_COL_MIN_TREND",
    "POD_COL_NODE_RANGE",
    "POD_COL_POD_RANGE",
    "POD_REMAIN_MIN",
    "REFRESH_INTERVAL_MIN",
    "TABLE_RATIO_BOTH_PANES",
    "TABLE_RATIO_INFO_ONLY",
    "TABLE_RATIO_LOGS_ONLY",
    "TREND_CAPACITY_MIN",
]
