"""Pod parser for cluster controller - turns kubectl pod JSON into PodMetric rows."""

from __future__ import annotations

from typing import Any

from kmet.models.core.metrics import PodMetric
from kmet.utils.resource_parser import cpu_str_to_millicores, memory_str_to_bytes


class PodParser:
    """Parses pod and pod-metrics data."""

    @staticmethod
    def ready_string(container_statuses: list[dict[str, Any]]) -> str:
        """Render ``ready/total``; a pod without statuses counts as one container."""
        ready = sum(1 for status in container_statuses if status.get("ready"))
        total = len(container_statuses) or 1
        return f"{ready}/{total}"

    def parse_usage(self, item: dict[str, Any]) -> tuple[int, int]:
        """Sum container usage of a metrics.k8s.io PodMetrics item.

        Returns:
            (millicores, bytes)
        """
        cpu = 0
        mem = 0
        for container in item.get("containers", []):
            usage = container.get("usage", {})
            cpu += cpu_str_to_millicores(usage.get("cpu", "0"))
            mem += memory_str_to_bytes(usage.get("memory", "0"))
        return cpu, mem

    def parse_pod_metric(
        self, pod: dict[str, Any], usage: tuple[int, int] | None = None
    ) -> PodMetric:
        """Parse a single pod into a PodMetric without trends.

        Container name and requests come from the first container in the
        spec. Missing usage yields zero usage.
        """
        metadata = pod.get("metadata", {})
        spec = pod.get("spec", {})
        status = pod.get("status", {})
        containers = spec.get("containers", [])
        first = containers[0] if containers else {}
        requests = first.get("resources", {}).get("requests", {})
        cpu, mem = usage or (0, 0)

        return PodMetric(
            namespace=metadata.get("namespace", ""),
            pod_name=metadata.get("name", "unknown"),
            container=first.get("name", ""),
            node_name=spec.get("nodeName", ""),
            cpu_millicores=cpu,
            memory_bytes=mem,
            cpu_request_millicores=cpu_str_to_millicores(requests.get("cpu", "0")),
            memory_request_bytes=memory_str_to_bytes(requests.get("memory", "0")),
            ready=self.ready_string(status.get("containerStatuses", [])),
            phase=status.get("phase", "Unknown"),
        )
