"""Parsers for kubectl JSON payloads."""

from kmet.controllers.cluster.parsers.event_parser import EventParser
from kmet.controllers.cluster.parsers.node_parser import NodeParser
from kmet.controllers.cluster.parsers.pod_parser import PodParser

__all__ = ["EventParser", "NodeParser", "PodParser"]
