"""Pod fetcher for cluster controller - fetches pods and their live usage."""

from __future__ import annotations

import json
import logging
from collections import Counter
from typing import Any
from urllib.parse import quote

from kmet.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from kmet.controllers.base.errors import TransientFetchError

logger = logging.getLogger(__name__)


def parse_items(output: str) -> list[dict[str, Any]]:
    """Return the ``items`` of a kubectl JSON list; empty output is an empty list."""
    if not output:
        return []
    try:
        return json.loads(output).get("items", [])
    except (json.JSONDecodeError, AttributeError) as e:
        raise TransientFetchError(f"unexpected kubectl output: {e}") from e


class PodFetcher:
    """Fetches pod objects and metrics.k8s.io pod usage."""

    _METRICS_API = "/apis/metrics.k8s.io/v1beta1"

    def __init__(self, run_kubectl_func: Any) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
        """
        self._run_kubectl = run_kubectl_func

    @staticmethod
    def _scope_args(namespace: str) -> tuple[str, ...]:
        return ("-n", namespace) if namespace else ("-A",)

    async def fetch_pods_raw(self, namespace: str, label_selector: str = "") -> list[dict[str, Any]]:
        """Fetch pod objects; an empty namespace lists every namespace."""
        args: tuple[str, ...] = ("get", "pods", *self._scope_args(namespace))
        if label_selector:
            args += ("-l", label_selector)
        args += ("-o", "json", f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}")
        output = await self._run_kubectl(args)
        return parse_items(output)

    def _usage_path(self, namespace: str, label_selector: str) -> str:
        path = f"{self._METRICS_API}/namespaces/{namespace}/pods" if namespace else f"{self._METRICS_API}/pods"
        if label_selector:
            path += f"?labelSelector={quote(label_selector, safe='')}"
        return path

    async def fetch_pod_usage_raw(
        self, namespace: str, label_selector: str = ""
    ) -> list[dict[str, Any]]:
        """Fetch PodMetrics items.

        Metrics are optional: any failure is logged and yields an empty list
        so pods still render with zero usage.
        """
        args = (
            "get",
            "--raw",
            self._usage_path(namespace, label_selector),
            f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}",
        )
        try:
            output = await self._run_kubectl(args)
            return parse_items(output)
        except Exception as exc:
            logger.warning("Pod metrics unavailable, showing zero usage: %s", exc)
            return []

    async def fetch_pod_counts_by_node(self) -> dict[str, int]:
        """Count scheduled pods per node with a single cluster-wide query."""
        output = await self._run_kubectl(
            (
                "get",
                "pods",
                "-A",
                "-o",
                "jsonpath={range .items[*]}{.spec.nodeName}{\"\\n\"}{end}",
                f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}",
            )
        )
        names = (line.strip() for line in (output or "").splitlines())
        return dict(Counter(name for name in names if name))
