"""Scalar value constants for the dashboard.

Strings, glyphs and normalization ceilings annotated with Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "kmet"
APP_VERSION: Final = "0.3.0"

# ============================================================================
# Glyphs
# ============================================================================

SPARK_GLYPHS: Final = "▁▂▃▄▅▆▇█"
BAR_FILL_GLYPH: Final = "█"
BAR_EMPTY_GLYPH: Final = " "
EMPTY_TREND_GLYPH: Final = "—"
HEADER_SEPARATOR: Final = "│"

# ============================================================================
# Namespaces
# ============================================================================

ALL_NAMESPACES_LABEL: Final = "all"
MOCK_NAMESPACES: Final = ("default", "staging", "kube-system")

# ============================================================================
# Trend normalization ceilings
# ============================================================================

CPU_TREND_CEILING_MILLICORES: Final = 500.0
MEM_TREND_CEILING_BYTES: Final = 1.2 * 1024**3
MIB: Final = 1024**2

# Trend key suffix used for the memory series of a pod
MEM_TREND_SUFFIX: Final = "-mem"

# ============================================================================
# Log formatting
# ============================================================================

LOG_TIME_FORMAT: Final = "%H:%M:%S"
LOG_LEVEL_WIDTH: Final = 5

# ============================================================================
# Footer / hints
# ============================================================================

FOOTER_HINT: Final = (
    "↑/↓ move • [Tab] switch view • [n] namespace • [i] info • "
    "[l] logs • [s] sort • [r] refresh • [q] quit"
)
PICKER_HINT: Final = "↑/↓ select • [Enter] switch • [Esc] cancel"

__all__ = [
    "ALL_NAMESPACES_LABEL",
    "APP_TITLE",
    "APP_VERSION",
    "BAR_EMPTY_GLYPH",
    "BAR_FILL_GLYPH",
    "CPU_TREND_CEILING_MILLICORES",
    "EMPTY_TREND_GLYPH",
    "FOOTER_HINT",
    "HEADER_SEPARATOR",
    "LOG_LEVEL_WIDTH",
    "LOG_TIME_FORMAT",
    "MEM_TREND_CEILING_BYTES",
    "MEM_TREND_SUFFIX",
    "MIB",
    "MOCK_NAMESPACES",
    "PICKER_HINT",
    "SPARK_GLYPHS",
]
