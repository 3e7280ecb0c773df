"""Widgets module for the kmet dashboard.

- panes: Layout-driven static panes (DashboardPane, PickerOverlay)
"""

from kmet.widgets.panes import DashboardPane, PickerOverlay

__all__ = [
    "DashboardPane",
    "PickerOverlay",
]
