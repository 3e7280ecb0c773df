"""Dashboard screen keyboard bindings.

Every binding forwards a normalized key name to the dashboard presenter
through ``action_press``, so the presenter alone decides what a key does
in the current pane state.
"""

from textual.binding import Binding

# ============================================================================
# Textual key name -> presenter key name
# ============================================================================

KEY_ALIASES: dict[str, str] = {
    "escape": "esc",
    "pageup": "pgup",
    "pagedown": "pgdn",
}


def _press(key: str, description: str = "", show: bool = False) -> Binding:
    name = KEY_ALIASES.get(key, key)
    return Binding(key, f"press('{name}')", description, show=show, priority=True)


# ============================================================================
# Textual Binding objects for the dashboard screen
# ============================================================================

DASHBOARD_SCREEN_BINDINGS: list[Binding] = [
    _press("up"),
    _press("down"),
    _press("k"),
    _press("j"),
    _press("pageup"),
    _press("pagedown"),
    _press("home"),
    _press("end"),
    _press("enter"),
    _press("escape"),
    _press("tab", "Switch view", show=True),
    _press("n", "Namespace", show=True),
    _press("i", "Info", show=True),
    _press("l", "Logs", show=True),
    _press("s", "Sort", show=True),
    _press("r", "Refresh", show=True),
    _press("q", "Quit", show=True),
    _press("ctrl+c"),
]

__all__ = [
    "DASHBOARD_SCREEN_BINDINGS",
    "KEY_ALIASES",
]
