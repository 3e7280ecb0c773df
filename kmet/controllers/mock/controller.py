"""Synthetic metrics and log provider.

Generates plausible, slowly wobbling usage for a fixed set of nodes and
pods so the dashboard can run without a cluster.
"""

from __future__ import annotations

import asyncio
import logging
import math
import random
import time
from collections.abc import Callable
from datetime import datetime

from kmet.constants.defaults import NAMESPACE_DEFAULT, TREND_CAPACITY_DEFAULT
from kmet.constants.enums import LogLevel
from kmet.constants.timeouts import MOCK_LOG_INTERVAL
from kmet.constants.values import (
    CPU_TREND_CEILING_MILLICORES,
    MEM_TREND_CEILING_BYTES,
    MEM_TREND_SUFFIX,
    MIB,
    MOCK_NAMESPACES,
)
from kmet.controllers.base import (
    BaseController,
    LogSource,
    LogStream,
    MetricsSource,
    QueueLogStream,
)
from kmet.controllers.base.log_stream import Emit
from kmet.models.cache.trend_buffer import TrendStore
from kmet.models.core.logs import LogLine, LogsTarget
from kmet.models.core.metrics import NodeMetric, PodMetric, Trend
from kmet.utils.charts import clamp01

logger = logging.getLogger(__name__)

_SELECTOR_NAME_KEYS = frozenset({"app", "component", "name"})


def matches_selector(pod_name: str, container: str, selector: str) -> bool:
    """Loose label-selector emulation over pod and container names.

    Comma-separated terms must all match. ``app=``, ``component=`` and
    ``name=`` match the container name exactly (case-insensitive) or the pod
    name by substring; other ``key=value`` terms and bare terms match either
    name by substring.
    """
    for part in selector.split(","):
        term = part.strip()
        if not term:
            continue
        if "=" in term:
            key, _, value = term.partition("=")
            key, value = key.strip(), value.strip()
            if key in _SELECTOR_NAME_KEYS:
                if not (container.lower() == value.lower() or value in pod_name):
                    return False
            elif not (value in pod_name or value in container):
                return False
        elif not (term in pod_name or term in container):
            return False
    return True


class MockController(BaseController, MetricsSource, LogSource):
    """Synthetic cluster with five nodes and four pods."""

    _NODES = ("ip-10-0-1-5", "ip-10-0-1-12", "ip-10-0-2-3", "ip-10-0-2-7", "ip-10-0-3-2")
    _PODS = (
        ("api-7cfb9d9c9c-9tghd", "api", "ip-10-0-1-5"),
        ("api-7cfb9d9c9c-sj2lq", "api", "ip-10-0-1-12"),
        ("worker-5f7dcbffd6-2jqkz", "worker", "ip-10-0-2-3"),
        ("cart-6d79f8b5f7-m2x8l", "cart", "ip-10-0-2-7"),
    )
    _KUBELET_VERSION = "1.29"
    _POD_CPU_REQUEST_MILLICORES = 100
    _POD_MEM_REQUEST_BYTES = 256 * MIB
    _PINNED_CPU_MILLICORES = 120
    _PINNED_MEM_BYTES = 612 * MIB
    _WARMUP_SAMPLES = 60
    _WALK_STEP = 0.05
    _WARN_EVERY = 13
    _ERROR_EVERY = 37

    def __init__(
        self,
        rng: random.Random | None = None,
        log_interval: float = MOCK_LOG_INTERVAL,
        trend_capacity: int = TREND_CAPACITY_DEFAULT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._rng = rng or random.Random()
        self._log_interval = log_interval
        self._clock = clock
        self._start = clock()
        self._pod_trends = TrendStore(trend_capacity)
        self._node_trends = TrendStore(trend_capacity)

    async def check_connection(self) -> bool:
        return True

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    async def list_namespaces(self) -> list[str]:
        return list(MOCK_NAMESPACES)

    async def list_nodes(self) -> list[NodeMetric]:
        nodes: list[NodeMetric] = []
        for i, name in enumerate(self._NODES):
            cpu = clamp01(0.45 + 0.25 * self._noise(i))
            mem = clamp01(0.42 + 0.28 * self._noise(i + 10))
            nodes.append(
                NodeMetric(
                    node_name=name,
                    cpu_used=cpu,
                    mem_used=mem,
                    pods=70 + i * 5 + int(10 * self._rng.random()),
                    kubelet_version=self._KUBELET_VERSION,
                    cpu_trend=self._record(self._node_trends, f"cpu-{name}", cpu),
                    mem_trend=self._record(self._node_trends, f"mem-{name}", mem),
                )
            )
        return nodes

    async def list_pods(self, namespace: str, label_selector: str = "") -> list[PodMetric]:
        namespace = namespace or NAMESPACE_DEFAULT
        pods: list[PodMetric] = []
        for i, (pod_name, container, node_name) in enumerate(self._PODS):
            if not matches_selector(pod_name, container, label_selector):
                continue
            if i == 0:
                cpu = self._PINNED_CPU_MILLICORES
                mem = self._PINNED_MEM_BYTES
            else:
                cpu = int(80 + 60 * self._rng.random())
                mem = int(500 * MIB + 300 * MIB * self._rng.random())
            key = f"{namespace}/{pod_name}"
            pods.append(
                PodMetric(
                    namespace=namespace,
                    pod_name=pod_name,
                    container=container,
                    node_name=node_name,
                    cpu_millicores=cpu,
                    memory_bytes=mem,
                    cpu_request_millicores=self._POD_CPU_REQUEST_MILLICORES,
                    memory_request_bytes=self._POD_MEM_REQUEST_BYTES,
                    ready="1/1",
                    phase="Running",
                    cpu_trend=self._record(
                        self._pod_trends, key, cpu / CPU_TREND_CEILING_MILLICORES
                    ),
                    mem_trend=self._record(
                        self._pod_trends,
                        key + MEM_TREND_SUFFIX,
                        mem / MEM_TREND_CEILING_BYTES,
                    ),
                )
            )
        return pods

    def _noise(self, seed: int) -> float:
        elapsed = int(self._clock() - self._start)
        return math.sin(elapsed) + (seed % 3) * 0.1 + self._rng.random() * 0.2

    def _walk(self, base: float, count: int) -> list[float]:
        value = clamp01(base)
        samples = []
        for _ in range(count):
            value = clamp01(value + (self._rng.random() - 0.5) * self._WALK_STEP)
            samples.append(value)
        return samples

    def _record(self, store: TrendStore, key: str, sample: float) -> Trend:
        sample = clamp01(sample)
        if key not in store:
            store.seed(key, self._walk(sample, self._WARMUP_SAMPLES))
        return store.record(key, sample)

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    async def stream_logs(self, target: LogsTarget) -> LogStream:
        source = f"{target.name}/{target.container or 'api'}"

        async def produce(emit: Emit) -> None:
            count = 0
            while True:
                await asyncio.sleep(self._log_interval)
                count += 1
                level, text = LogLevel.INFO, "request ok"
                if count % self._WARN_EVERY == 0:
                    level, text = LogLevel.WARN, "queue lag=233ms"
                if count % self._ERROR_EVERY == 0:
                    level, text = LogLevel.ERROR, "db timeout op=save_order retry=1"
                await emit(
                    LogLine(timestamp=datetime.now(), level=level, text=text, source=source)
                )

        logger.debug("Starting synthetic log stream for %s", target.label)
        return QueueLogStream(produce, name=f"mock-logs:{target.label}")


__all__ = [
    "MockController",
    "matches_selector",
]
