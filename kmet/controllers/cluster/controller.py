"""Cluster controller for live metrics and log streaming.

This module serves as the main orchestrator for cluster data operations,
delegating kubectl queries to fetchers and payload parsing to parsers.
"""

from __future__ import annotations

import asyncio
import json
import logging
import subprocess
from typing import Any

from kmet.constants.defaults import TREND_CAPACITY_DEFAULT
from kmet.constants.enums import TargetKind
from kmet.constants.limits import LOG_MAX_CONCURRENT_REQUESTS, LOG_TAIL_LINES
from kmet.constants.timeouts import (
    CLUSTER_CHECK_TIMEOUT,
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
)
from kmet.constants.values import (
    CPU_TREND_CEILING_MILLICORES,
    MEM_TREND_CEILING_BYTES,
    MEM_TREND_SUFFIX,
)
from kmet.controllers.base import (
    BaseController,
    LogSource,
    LogStream,
    MetricsSource,
    StreamStartError,
    TransientFetchError,
)
from kmet.controllers.cluster.fetchers import EventFetcher, NodeFetcher, PodFetcher
from kmet.controllers.cluster.log_streamer import (
    open_process_stream,
    plain_line_parser,
    prefixed_line_parser,
)
from kmet.controllers.cluster.parsers import EventParser, NodeParser, PodParser
from kmet.models.cache.trend_buffer import TrendStore
from kmet.models.core.logs import LogsTarget
from kmet.models.core.metrics import NodeMetric, PodMetric
from kmet.utils.charts import clamp01

logger = logging.getLogger(__name__)


class ClusterController(BaseController, MetricsSource, LogSource):
    """Live cluster data through the kubectl binary.

    Delegates to:
    - PodFetcher: pod objects, pod usage and per-node pod counts
    - NodeFetcher: node objects and node usage
    - EventFetcher: node event watch queries
    """

    _WORKLOAD_RESOURCES = {
        TargetKind.DEPLOYMENT: "deployment",
        TargetKind.STATEFULSET: "statefulset",
        TargetKind.DAEMONSET: "daemonset",
    }

    def __init__(
        self,
        context: str | None = None,
        kubeconfig: str | None = None,
        trend_capacity: int = TREND_CAPACITY_DEFAULT,
    ) -> None:
        """Initialize the cluster controller.

        Args:
            context: Optional Kubernetes context name.
            kubeconfig: Optional kubeconfig path; kubectl's default otherwise.
            trend_capacity: Samples kept per trend series.
        """
        self.context = context
        self.kubeconfig = kubeconfig

        self._pod_trends = TrendStore(trend_capacity)
        self._node_trends = TrendStore(trend_capacity)

        # Initialize fetchers
        self._pod_fetcher = PodFetcher(self._run_kubectl)
        self._node_fetcher = NodeFetcher(self._run_kubectl)
        self._event_fetcher = EventFetcher()

        # Initialize parsers
        self._pod_parser = PodParser()
        self._node_parser = NodeParser()
        self._event_parser = EventParser()

    # ------------------------------------------------------------------
    # kubectl plumbing
    # ------------------------------------------------------------------

    def _base_command(self) -> list[str]:
        cmd = ["kubectl"]
        if self.kubeconfig:
            cmd.extend(["--kubeconfig", self.kubeconfig])
        if self.context:
            cmd.extend(["--context", self.context])
        return cmd

    def _run_kubectl_sync(
        self,
        args: tuple[str, ...],
        timeout: float = KUBECTL_COMMAND_TIMEOUT,
    ) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target)."""
        cmd = [*self._base_command(), *args]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        except subprocess.TimeoutExpired as e:
            raise TransientFetchError(f"kubectl timed out after {timeout:g}s") from e
        except OSError as e:
            raise TransientFetchError(f"cannot run kubectl: {e}") from e
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise TransientFetchError(stderr or "kubectl command failed")
        return result.stdout

    async def _run_kubectl(self, args: tuple[str, ...]) -> str:
        return await asyncio.to_thread(self._run_kubectl_sync, args)

    async def check_connection(self) -> bool:
        """Check that kubectl can reach the API server."""
        try:
            await asyncio.wait_for(
                asyncio.to_thread(
                    self._run_kubectl_sync,
                    ("version", "-o", "json", f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}"),
                    CLUSTER_CHECK_TIMEOUT,
                ),
                timeout=CLUSTER_CHECK_TIMEOUT + 1,
            )
        except (TransientFetchError, asyncio.TimeoutError) as e:
            logger.warning("Cluster connection check failed: %s", e)
            return False
        return True

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    async def list_namespaces(self) -> list[str]:
        output = await self._run_kubectl(
            ("get", "namespaces", "-o", "json", f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}")
        )
        data = self._loads(output)
        names = [
            item.get("metadata", {}).get("name", "").strip()
            for item in data.get("items", [])
        ]
        return sorted(name for name in names if name)

    async def list_pods(self, namespace: str, label_selector: str = "") -> list[PodMetric]:
        pods_raw, usage_raw = await asyncio.gather(
            self._pod_fetcher.fetch_pods_raw(namespace, label_selector),
            self._pod_fetcher.fetch_pod_usage_raw(namespace, label_selector),
        )
        usage = {
            self._object_key(item): self._pod_parser.parse_usage(item) for item in usage_raw
        }

        rows: list[PodMetric] = []
        for pod in pods_raw:
            key = self._object_key(pod)
            row = self._pod_parser.parse_pod_metric(pod, usage.get(key))
            rows.append(
                row.model_copy(
                    update={
                        "cpu_trend": self._pod_trends.record(
                            key, clamp01(row.cpu_millicores / CPU_TREND_CEILING_MILLICORES)
                        ),
                        "mem_trend": self._pod_trends.record(
                            key + MEM_TREND_SUFFIX,
                            clamp01(row.memory_bytes / MEM_TREND_CEILING_BYTES),
                        ),
                    }
                )
            )

        if not namespace and not label_selector:
            self._pod_trends.retain(
                k for row in rows for k in (row.key, row.key + MEM_TREND_SUFFIX)
            )
        return rows

    async def list_nodes(self) -> list[NodeMetric]:
        nodes_raw, usage_raw, pod_counts = await asyncio.gather(
            self._node_fetcher.fetch_nodes_raw(),
            self._node_fetcher.fetch_node_usage_raw(),
            self._safe_pod_counts(),
        )
        usage = {
            item.get("metadata", {}).get("name", ""): self._node_parser.parse_usage(item)
            for item in usage_raw
        }

        rows: list[NodeMetric] = []
        for node in nodes_raw:
            name = node.get("metadata", {}).get("name", "")
            row = self._node_parser.parse_node_metric(
                node, usage.get(name), pod_counts.get(name, 0)
            )
            rows.append(
                row.model_copy(
                    update={
                        "cpu_trend": self._node_trends.record(f"cpu-{name}", row.cpu_used),
                        "mem_trend": self._node_trends.record(f"mem-{name}", row.mem_used),
                    }
                )
            )

        self._node_trends.retain(
            k for row in rows for k in (f"cpu-{row.node_name}", f"mem-{row.node_name}")
        )
        return rows

    async def _safe_pod_counts(self) -> dict[str, int]:
        try:
            return await self._pod_fetcher.fetch_pod_counts_by_node()
        except TransientFetchError as e:
            logger.warning("Pod counts per node unavailable: %s", e)
            return {}

    @staticmethod
    def _object_key(item: dict[str, Any]) -> str:
        metadata = item.get("metadata", {})
        return f"{metadata.get('namespace', '')}/{metadata.get('name', '')}"

    @staticmethod
    def _loads(output: str) -> dict[str, Any]:
        if not output:
            return {}
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise TransientFetchError(f"unexpected kubectl output: {e}") from e

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    async def _workload_selector(self, target: LogsTarget) -> str:
        resource = self._WORKLOAD_RESOURCES[target.kind]
        try:
            output = await self._run_kubectl(
                (
                    "get",
                    resource,
                    target.name,
                    "-n",
                    target.namespace,
                    "-o",
                    "json",
                    f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}",
                )
            )
            data = self._loads(output)
        except TransientFetchError as e:
            raise StreamStartError(f"cannot resolve {resource}/{target.name}: {e}") from e
        labels = data.get("spec", {}).get("selector", {}).get("matchLabels", {})
        if not labels:
            raise StreamStartError(f"{resource}/{target.name} has no matchLabels selector")
        return ",".join(f"{key}={value}" for key, value in sorted(labels.items()))

    async def stream_logs(self, target: LogsTarget) -> LogStream:
        if not target.name:
            raise StreamStartError("log target has no name")

        if target.kind is TargetKind.NODE:
            args = self._event_fetcher.build_node_watch_args(target.name)
            return await open_process_stream(
                [*self._base_command(), *args],
                lambda raw: self._event_parser.parse_event_line(raw, target.name),
                name=f"events:{target.name}",
            )

        if target.kind.is_workload:
            selector = await self._workload_selector(target)
            args = (
                "logs",
                "-f",
                "-n",
                target.namespace,
                "-l",
                selector,
                "--all-containers",
                "--prefix",
                f"--max-log-requests={LOG_MAX_CONCURRENT_REQUESTS}",
                f"--tail={LOG_TAIL_LINES}",
            )
            return await open_process_stream(
                [*self._base_command(), *args],
                prefixed_line_parser(target.name),
                name=f"logs:{target.label}",
            )

        args = ("logs", "-f", target.name, "-n", target.namespace, f"--tail={LOG_TAIL_LINES}")
        if target.container:
            args += ("-c", target.container)
        return await open_process_stream(
            [*self._base_command(), *args],
            plain_line_parser(f"{target.name}/{target.container}"),
            name=f"logs:{target.label}",
        )


__all__ = [
    "ClusterController",
]
