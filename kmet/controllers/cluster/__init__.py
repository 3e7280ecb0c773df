"""Init file for cluster module."""

from kmet.controllers.cluster.controller import ClusterController
from kmet.controllers.cluster.fetchers import (
    EventFetcher,
    NodeFetcher,
    PodFetcher,
)
from kmet.controllers.cluster.parsers import EventParser, NodeParser, PodParser

__all__ = [
    "ClusterController",
    "EventFetcher",
    "EventParser",
    "NodeFetcher",
    "NodeParser",
    "PodFetcher",
    "PodParser",
]
