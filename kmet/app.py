"""Main application class for the kmet dashboard."""

from __future__ import annotations

from pathlib import Path

from textual.app import App
from textual.binding import Binding

from kmet.constants import APP_TITLE
from kmet.constants.defaults import KUBECONFIG_DEFAULT
from kmet.controllers import ClusterController, ConfigurationError, MockController
from kmet.keyboard.app import APP_BINDINGS
from kmet.models.state.app_settings import (
    AppSettings,
    ConfigLoadError,
    ConfigManager,
)
from kmet.screens.dashboard import DashboardScreen


def create_controller(settings: AppSettings) -> ClusterController | MockController:
    """Build the data provider selected by ``settings.use_mock``.

    Raises:
        ConfigurationError: an explicit kubeconfig path does not exist.
    """
    if settings.use_mock:
        return MockController(trend_capacity=settings.trend_capacity)
    kubeconfig = settings.kubeconfig
    if kubeconfig == KUBECONFIG_DEFAULT:
        # Let kubectl honor $KUBECONFIG and its own default.
        kubeconfig_path = None
    else:
        path = Path(kubeconfig).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"kubeconfig not found: {path}")
        kubeconfig_path = str(path)
    return ClusterController(
        context=settings.context or None,
        kubeconfig=kubeconfig_path,
        trend_capacity=settings.trend_capacity,
    )


def context_label(settings: AppSettings) -> str:
    if settings.use_mock:
        return "mock"
    return settings.context or "current"


class KmetApp(App[None]):
    """Main TUI application for kmet."""

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = APP_BINDINGS

    # Type hint for settings attribute
    settings: AppSettings

    def __init__(
        self,
        settings: AppSettings | None = None,
        controller: ClusterController | MockController | None = None,
        settings_path: Path | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.settings_path = settings_path
        if settings is None:
            self._load_settings()
        else:
            self.settings = settings
        self.controller = controller or create_controller(self.settings)

    def _load_settings(self) -> None:
        """Load application settings from persistent storage."""
        try:
            self.settings = ConfigManager.load(self.settings_path)
        except ConfigLoadError:
            # Use defaults if loading fails
            self.settings = AppSettings()

    def on_mount(self) -> None:
        self.push_screen(
            DashboardScreen(
                self.controller,
                self.controller,
                settings=self.settings,
                context_label=context_label(self.settings),
            )
        )


__all__ = [
    "KmetApp",
    "context_label",
    "create_controller",
]
