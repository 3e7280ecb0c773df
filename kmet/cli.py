"""Command-line entry point for kmet."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

from kmet.app import KmetApp, create_controller
from kmet.constants.values import APP_VERSION
from kmet.controllers.base import BaseController, ConfigurationError
from kmet.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigManager,
)

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kmet",
        description="Live terminal dashboard for Kubernetes pod and node usage.",
    )
    parser.add_argument("--version", action="version", version=f"kmet {APP_VERSION}")
    parser.add_argument(
        "--mock",
        action="store_true",
        default=None,
        help="Use synthetic data instead of a cluster",
    )
    parser.add_argument("--kubeconfig", metavar="PATH", help="Path to a kubeconfig file")
    parser.add_argument("--context", help="Kubernetes context to use")
    parser.add_argument(
        "-n",
        "--namespace",
        help="Initial namespace; 'all' for every namespace",
    )
    parser.add_argument("-l", "--selector", help="Label selector for the pod view")
    parser.add_argument(
        "--interval",
        type=float,
        metavar="SECONDS",
        help="Seconds between refreshes (default: 2.0)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Path to YAML settings file",
    )
    parser.add_argument("--log-file", metavar="PATH", help="Diagnostics log file")
    parser.add_argument("--log-level", help="Diagnostics log level (default: INFO)")
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write the effective settings to the settings file and exit",
    )
    return parser


def resolve_settings(args: argparse.Namespace) -> AppSettings:
    """Load the settings file and apply command-line overrides.

    Raises:
        ConfigError: the file or an override is invalid.
    """
    settings = ConfigManager.load(args.config)
    overrides: dict[str, Any] = {
        "use_mock": args.mock,
        "kubeconfig": args.kubeconfig,
        "context": args.context,
        "default_namespace": args.namespace,
        "label_selector": args.selector,
        "refresh_interval": args.interval,
        "log_file": args.log_file,
        "log_level": args.log_level,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if not overrides:
        return settings
    try:
        return AppSettings.model_validate({**settings.model_dump(), **overrides})
    except ValueError as e:
        raise ConfigLoadError(f"Invalid command-line option: {e}") from e


def configure_logging(settings: AppSettings) -> None:
    """Send diagnostics to a file; the terminal belongs to the UI."""
    log_path = Path(settings.log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_path,
        level=settings.log_level,
        format=_LOG_FORMAT,
        force=True,
    )


def check_provider(controller: BaseController) -> bool:
    return asyncio.run(controller.check_connection())


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_settings(args)
    except ConfigError as e:
        print(f"kmet: {e}", file=sys.stderr)
        return 2

    if args.init_config:
        try:
            path = ConfigManager.save(settings, args.config)
        except ConfigError as e:
            print(f"kmet: {e}", file=sys.stderr)
            return 2
        print(f"Wrote settings to {path}")
        return 0

    try:
        configure_logging(settings)
    except OSError as e:
        print(f"kmet: cannot open log file: {e}", file=sys.stderr)
        return 2

    try:
        controller = create_controller(settings)
    except ConfigurationError as e:
        logger.error("Cannot build provider: %s", e)
        print(f"kmet: {e}", file=sys.stderr)
        return 1
    if not check_provider(controller):
        logger.error("Cluster unreachable; context=%r", settings.context)
        print(
            "kmet: cannot reach the cluster with kubectl "
            "(check --context/--kubeconfig, or run with --mock)",
            file=sys.stderr,
        )
        return 1

    logger.info(
        "Starting kmet %s (mock=%s, namespace=%s)",
        APP_VERSION,
        settings.use_mock,
        settings.default_namespace,
    )
    try:
        KmetApp(settings=settings, controller=controller, settings_path=args.config).run()
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
