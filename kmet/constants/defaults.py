"""Default values for application settings.

These are the fallbacks used when no settings file exists or a key is missing.
"""

from typing import Final

# ============================================================================
# Namespace / query defaults
# ============================================================================

NAMESPACE_DEFAULT: Final = "default"
LABEL_SELECTOR_DEFAULT: Final = ""

# ============================================================================
# Refresh / buffer defaults
# ============================================================================

REFRESH_INTERVAL_DEFAULT: Final = 2.0  # seconds
TREND_CAPACITY_DEFAULT: Final = 90
LOG_BUFFER_MAX_LINES_DEFAULT: Final = 2000
ESC_QUITS_DEFAULT: Final = True

# ============================================================================
# Connection / file defaults
# ============================================================================

KUBECONFIG_DEFAULT: Final = "~/.kube/config"
SETTINGS_PATH_DEFAULT: Final = "~/.config/kmet/settings.yaml"
LOG_FILE_DEFAULT: Final = "~/.cache/kmet/kmet.log"
LOG_LEVEL_DEFAULT: Final = "INFO"

__all__ = [
    "ESC_QUITS_DEFAULT",
    "KUBECONFIG_DEFAULT",
    "LABEL_SELECTOR_DEFAULT",
    "LOG_BUFFER_MAX_LINES_DEFAULT",
    "LOG_FILE_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "NAMESPACE_DEFAULT",
    "REFRESH_INTERVAL_DEFAULT",
    "SETTINGS_PATH_DEFAULT",
    "TREND_CAPACITY_DEFAULT",
]
