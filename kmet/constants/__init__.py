"""Constants module for the kmet dashboard.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (strings, glyphs, ceilings with Final)
- timeouts.py: Timeout values (seconds)
- limits.py: Layout floors, column widths and validation bounds
- defaults.py: Default values for settings

Note: Keyboard bindings are defined in kmet.keyboard module.
"""

from kmet.constants.defaults import (
    LOG_BUFFER_MAX_LINES_DEFAULT,
    NAMESPACE_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
    TREND_CAPACITY_DEFAULT,
)
from kmet.constants.enums import (
    LogLevel,
    SortKey,
    TargetKind,
    ViewMode,
)
from kmet.constants.limits import (
    MIN_TABLE_HEIGHT,
    REFRESH_INTERVAL_MIN,
)
from kmet.constants.timeouts import (
    CLUSTER_CHECK_TIMEOUT,
    CLUSTER_REQUEST_TIMEOUT,
)
from kmet.constants.values import (
    APP_TITLE,
    APP_VERSION,
    SPARK_GLYPHS,
)

__all__ = [
    # Application
    "APP_TITLE",
    "APP_VERSION",
    # Timeouts
    "CLUSTER_CHECK_TIMEOUT",
    "CLUSTER_REQUEST_TIMEOUT",
    # Defaults
    "LOG_BUFFER_MAX_LINES_DEFAULT",
    # Limits
    "MIN_TABLE_HEIGHT",
    "NAMESPACE_DEFAULT",
    "REFRESH_INTERVAL_DEFAULT",
    "REFRESH_INTERVAL_MIN",
    "SPARK_GLYPHS",
    "TREND_CAPACITY_DEFAULT",
    # Enums
    "LogLevel",
    "SortKey",
    "TargetKind",
    "ViewMode",
]
