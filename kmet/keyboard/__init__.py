"""Keyboard bindings module.

This module provides all keyboard bindings for the kmet dashboard.
Bindings are organized into two categories:

- app: App-level bindings (APP_BINDINGS)
- dashboard: Dashboard screen bindings (DASHBOARD_SCREEN_BINDINGS)
"""

from kmet.keyboard.app import APP_BINDINGS
from kmet.keyboard.dashboard import DASHBOARD_SCREEN_BINDINGS, KEY_ALIASES

__all__ = [
    "APP_BINDINGS",
    "DASHBOARD_SCREEN_BINDINGS",
    "KEY_ALIASES",
]
