"""Fetchers wrapping kubectl queries."""

from kmet.controllers.cluster.fetchers.event_fetcher import EventFetcher
from kmet.controllers.cluster.fetchers.node_fetcher import NodeFetcher
from kmet.controllers.cluster.fetchers.pod_fetcher import PodFetcher, parse_items

__all__ = ["EventFetcher", "NodeFetcher", "PodFetcher", "parse_items"]
