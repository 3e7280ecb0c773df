"""Synthetic provider used with --mock."""

from kmet.controllers.mock.controller import MockController, matches_selector

__all__ = [
    "MockController",
    "matches_selector",
]
