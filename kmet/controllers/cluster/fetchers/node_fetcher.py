"""Node fetcher for cluster controller - fetches nodes and their live usage."""

from __future__ import annotations

import logging
from typing import Any

from kmet.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from kmet.controllers.cluster.fetchers.pod_fetcher import parse_items

logger = logging.getLogger(__name__)


class NodeFetcher:
    """Fetches node objects and metrics.k8s.io node usage."""

    _NODE_METRICS_PATH = "/apis/metrics.k8s.io/v1beta1/nodes"

    def __init__(self, run_kubectl_func: Any) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
        """
        self._run_kubectl = run_kubectl_func

    async def fetch_nodes_raw(self) -> list[dict[str, Any]]:
        output = await self._run_kubectl(
            ("get", "nodes", "-o", "json", f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}")
        )
        return parse_items(output)

    async def fetch_node_usage_raw(self) -> list[dict[str, Any]]:
        """Fetch NodeMetrics items; failures degrade to an empty list."""
        try:
            output = await self._run_kubectl(
                (
                    "get",
                    "--raw",
                    self._NODE_METRICS_PATH,
                    f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}",
                )
            )
            return parse_items(output)
        except Exception as exc:
            logger.warning("Node metrics unavailable, showing zero usage: %s", exc)
            return []
