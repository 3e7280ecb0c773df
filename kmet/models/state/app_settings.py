"""Application settings models and YAML-backed persistence."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from kmet.constants.defaults import (
    ESC_QUITS_DEFAULT,
    KUBECONFIG_DEFAULT,
    LABEL_SELECTOR_DEFAULT,
    LOG_BUFFER_MAX_LINES_DEFAULT,
    LOG_FILE_DEFAULT,
    LOG_LEVEL_DEFAULT,
    NAMESPACE_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
    SETTINGS_PATH_DEFAULT,
    TREND_CAPACITY_DEFAULT,
)
from kmet.constants.limits import (
    LOG_BUFFER_MIN_LINES,
    REFRESH_INTERVAL_MIN,
    TREND_CAPACITY_MIN,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Connection
    kubeconfig: str = KUBECONFIG_DEFAULT
    context: str = ""
    use_mock: bool = False

    # Query scope
    default_namespace: str = NAMESPACE_DEFAULT
    label_selector: str = LABEL_SELECTOR_DEFAULT

    # Refresh and buffers
    refresh_interval: float = Field(
        default=REFRESH_INTERVAL_DEFAULT, ge=REFRESH_INTERVAL_MIN
    )  # seconds
    trend_capacity: int = Field(default=TREND_CAPACITY_DEFAULT, ge=TREND_CAPACITY_MIN)
    log_buffer_max_lines: int = Field(
        default=LOG_BUFFER_MAX_LINES_DEFAULT, ge=LOG_BUFFER_MIN_LINES
    )

    # Keys
    esc_quits: bool = ESC_QUITS_DEFAULT

    # Diagnostics
    log_level: str = LOG_LEVEL_DEFAULT
    log_file: str = LOG_FILE_DEFAULT

    @field_validator("default_namespace")
    @classmethod
    def _namespace_not_blank(cls, value: str) -> str:
        value = value.strip()
        return value or NAMESPACE_DEFAULT

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return normalized


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""


class ConfigManager:
    """Loads and saves AppSettings as YAML."""

    DEFAULT_PATH = Path(SETTINGS_PATH_DEFAULT).expanduser()

    @classmethod
    def resolve_path(cls, path: str | Path | None = None) -> Path:
        return Path(path).expanduser() if path else cls.DEFAULT_PATH

    @classmethod
    def load(cls, path: str | Path | None = None) -> AppSettings:
        """Load settings from disk.

        A missing file yields defaults. Unreadable YAML, a non-mapping
        document or values that fail validation raise ConfigLoadError.
        """
        settings_path = cls.resolve_path(path)
        if not settings_path.exists():
            logger.debug("No settings file at %s, using defaults", settings_path)
            return AppSettings()

        try:
            raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoadError(f"Cannot read {settings_path}: {e}") from e

        if raw is None:
            return AppSettings()
        if not isinstance(raw, dict):
            raise ConfigLoadError(f"{settings_path} must contain a mapping")

        try:
            return AppSettings.model_validate(raw)
        except ValidationError as e:
            raise ConfigLoadError(f"Invalid settings in {settings_path}: {e}") from e

    @classmethod
    def save(cls, settings: AppSettings, path: str | Path | None = None) -> Path:
        settings_path = cls.resolve_path(path)
        data: dict[str, Any] = settings.model_dump()
        try:
            settings_path.parent.mkdir(parents=True, exist_ok=True)
            settings_path.write_text(
                yaml.safe_dump(data, sort_keys=True), encoding="utf-8"
            )
        except OSError as e:
            raise ConfigSaveError(f"Cannot write {settings_path}: {e}") from e
        return settings_path


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
]
