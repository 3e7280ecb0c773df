"""Pane widgets for the dashboard screen.

Standard Wrapper Pattern:
- Wraps Textual's Static with a fixed row height controlled by the layout
- Content is a pre-built rich renderable; panes hold no state of their own

CSS Classes: widget-dashboard-pane
"""

from __future__ import annotations

from rich.console import RenderableType
from textual.widgets import Static


class DashboardPane(Static):
    """Static pane whose height is driven by the dashboard layout.

    A height of zero hides the pane.

    Example:
        >>> pane = DashboardPane(id="table-pane")
        >>> pane.show(Text("hello"), rows=8)
    """

    DEFAULT_CSS = """
    DashboardPane {
        width: 1fr;
        padding: 0 1;
    }
    DashboardPane.bordered {
        border: round $primary;
    }
    """

    def __init__(self, *, bordered: bool = False, **kwargs) -> None:
        classes = kwargs.pop("classes", "")
        classes = f"widget-dashboard-pane {classes}".strip()
        if bordered:
            classes += " bordered"
        super().__init__("", classes=classes, **kwargs)

    def show(self, renderable: RenderableType, rows: int | None = None) -> None:
        """Replace the content and, when given, the row height."""
        if rows is not None:
            self.display = rows > 0
            if rows > 0:
                self.styles.height = rows
        self.update(renderable)


class PickerOverlay(DashboardPane):
    """Centered namespace picker drawn above the other panes."""

    DEFAULT_CSS = """
    PickerOverlay {
        layer: overlay;
        width: 40;
        height: 14;
        offset: 4 2;
        border: round $accent;
        background: $surface;
    }
    """


__all__ = [
    "DashboardPane",
    "PickerOverlay",
]
