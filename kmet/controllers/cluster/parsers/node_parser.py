"""Node parser for cluster controller - turns kubectl node JSON into NodeMetric rows."""

from __future__ import annotations

from typing import Any

from kmet.models.core.metrics import NodeMetric
from kmet.utils.charts import clamp01
from kmet.utils.resource_parser import cpu_str_to_millicores, memory_str_to_bytes


class NodeParser:
    """Parses node data into NodeMetric rows."""

    _UNKNOWN_VERSION = "?"

    def parse_allocatable(self, node: dict[str, Any]) -> tuple[int, int]:
        """Return allocatable (millicores, bytes) for a node."""
        allocatable = node.get("status", {}).get("allocatable", {})
        return (
            cpu_str_to_millicores(allocatable.get("cpu", "0")),
            memory_str_to_bytes(allocatable.get("memory", "0")),
        )

    def parse_usage(self, item: dict[str, Any]) -> tuple[int, int]:
        """Return (millicores, bytes) from a metrics.k8s.io NodeMetrics item."""
        usage = item.get("usage", {})
        return (
            cpu_str_to_millicores(usage.get("cpu", "0")),
            memory_str_to_bytes(usage.get("memory", "0")),
        )

    def parse_node_metric(
        self,
        node: dict[str, Any],
        usage: tuple[int, int] | None = None,
        pod_count: int = 0,
    ) -> NodeMetric:
        """Parse a single node into a NodeMetric without trends.

        Args:
            node: Raw node dictionary from the API
            usage: (millicores, bytes) in use, or None when metrics are missing
            pod_count: Pods scheduled on this node

        Returns:
            NodeMetric with usage as a clamped ratio of allocatable.
        """
        metadata = node.get("metadata", {})
        status = node.get("status", {})
        alloc_cpu, alloc_mem = self.parse_allocatable(node)
        used_cpu, used_mem = usage or (0, 0)

        return NodeMetric(
            node_name=metadata.get("name", "unknown"),
            cpu_used=clamp01(used_cpu / max(1, alloc_cpu)),
            mem_used=clamp01(used_mem / max(1, alloc_mem)),
            pods=max(0, pod_count),
            kubelet_version=status.get("nodeInfo", {}).get(
                "kubeletVersion", self._UNKNOWN_VERSION
            ),
        )
