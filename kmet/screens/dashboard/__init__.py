"""Dashboard screen module exports."""

from kmet.screens.dashboard.dashboard_screen import DashboardEventPosted, DashboardScreen
from kmet.screens.dashboard.layout import DashboardLayout, compute_layout
from kmet.screens.dashboard.presenter import DashboardPresenter
from kmet.screens.dashboard.runner import EffectRunner

__all__ = [
    "DashboardEventPosted",
    "DashboardLayout",
    "DashboardPresenter",
    "DashboardScreen",
    "EffectRunner",
    "compute_layout",
]
