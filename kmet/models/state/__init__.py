"""Application and dashboard state models."""

from kmet.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigManager,
    ConfigSaveError,
)
from kmet.models.state.dashboard_state import (
    AllNamespaces,
    DashboardState,
    LogSubscription,
    NamedNamespace,
    NamespaceScope,
    Panes,
    candidate_scopes,
    namespace_scope,
)

__all__ = [
    "AllNamespaces",
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "DashboardState",
    "LogSubscription",
    "NamedNamespace",
    "NamespaceScope",
    "Panes",
    "candidate_scopes",
    "namespace_scope",
]
