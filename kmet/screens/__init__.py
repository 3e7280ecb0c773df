"""kmet screens.

Domain Structure:
    - dashboard/ - Live pod/node table with info, logs and namespace picker

Note: Keybindings are in the keyboard/ package:
    - kmet.keyboard.DASHBOARD_SCREEN_BINDINGS

Example Usage:
    from kmet.screens.dashboard import DashboardScreen
"""

from __future__ import annotations

from kmet.keyboard import DASHBOARD_SCREEN_BINDINGS
from kmet.screens.dashboard import DashboardScreen

__all__ = [
    "DASHBOARD_SCREEN_BINDINGS",
    "DashboardScreen",
]
