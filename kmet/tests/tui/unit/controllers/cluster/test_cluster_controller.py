"""Tests for ClusterController with kubectl replaced by canned output."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from kmet.constants.enums import TargetKind
from kmet.controllers.base import StreamStartError, TransientFetchError
from kmet.controllers.cluster import ClusterController
from kmet.models.core.logs import LogsTarget

_USAGE_PREFIX = "/apis/metrics.k8s.io/v1beta1"


def _pod(name: str, namespace: str = "default", node: str = "n1") -> dict:
    return {
        "metadata": {"name": name, "namespace": namespace},
        "spec": {
            "nodeName": node,
            "containers": [
                {
                    "name": "app",
                    "resources": {"requests": {"cpu": "100m", "memory": "256Mi"}},
                }
            ],
        },
        "status": {
            "phase": "Running",
            "containerStatuses": [{"ready": True}],
        },
    }


def _pod_usage(name: str, cpu: str, memory: str, namespace: str = "default") -> dict:
    return {
        "metadata": {"name": name, "namespace": namespace},
        "containers": [{"name": "app", "usage": {"cpu": cpu, "memory": memory}}],
    }


def _node(name: str) -> dict:
    return {
        "metadata": {"name": name},
        "status": {
            "allocatable": {"cpu": "4", "memory": "8Gi"},
            "nodeInfo": {"kubeletVersion": "v1.29.3"},
        },
    }


class FakeKubectl:
    """Answers kubectl argument tuples from a small routing table."""

    def __init__(self, usage_fails: bool = False) -> None:
        self.usage_fails = usage_fails
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, args: tuple[str, ...], timeout: float = 0) -> str:
        self.calls.append(args)
        if args[:2] == ("get", "namespaces"):
            return json.dumps(
                {"items": [{"metadata": {"name": n}} for n in ("staging", "default", " ")]}
            )
        if args[:2] == ("get", "--raw"):
            if self.usage_fails:
                raise TransientFetchError("metrics API not available")
            if args[2].endswith("/nodes"):
                return json.dumps(
                    {
                        "items": [
                            {"metadata": {"name": "n1"}, "usage": {"cpu": "1", "memory": "2Gi"}}
                        ]
                    }
                )
            return json.dumps(
                {
                    "items": [
                        _pod_usage("api", "250m", "612Mi"),
                        _pod_usage("worker", "50m", "128Mi"),
                    ]
                }
            )
        if args[:2] == ("get", "pods") and any(a.startswith("jsonpath") for a in args):
            return "n1\nn1\nn2\n\n"
        if args[:2] == ("get", "pods"):
            return json.dumps({"items": [_pod("api"), _pod("worker", node="n2")]})
        if args[:2] == ("get", "nodes"):
            return json.dumps({"items": [_node("n1"), _node("n2")]})
        if args[:2] == ("get", "deployment"):
            return json.dumps(
                {"spec": {"selector": {"matchLabels": {"tier": "web", "app": "api"}}}}
            )
        raise AssertionError(f"unexpected kubectl call: {args}")


@pytest.fixture
def kubectl() -> FakeKubectl:
    return FakeKubectl()


@pytest.fixture
def controller(kubectl: FakeKubectl) -> ClusterController:
    ctrl = ClusterController(context="dev", kubeconfig="/tmp/kubeconfig")
    ctrl._run_kubectl_sync = kubectl  # type: ignore[method-assign]
    return ctrl


class TestBaseCommand:
    """Tests for kubectl command assembly."""

    def test_includes_kubeconfig_and_context(self) -> None:
        ctrl = ClusterController(context="dev", kubeconfig="/tmp/kubeconfig")
        assert ctrl._base_command() == [
            "kubectl",
            "--kubeconfig",
            "/tmp/kubeconfig",
            "--context",
            "dev",
        ]

    def test_defaults_to_plain_kubectl(self) -> None:
        assert ClusterController()._base_command() == ["kubectl"]

    def test_nonzero_exit_becomes_transient_error(self) -> None:
        result = MagicMock(returncode=1, stderr="Unauthorized\n", stdout="")
        with patch("subprocess.run", return_value=result):
            with pytest.raises(TransientFetchError, match="Unauthorized"):
                ClusterController()._run_kubectl_sync(("get", "pods"))

    def test_missing_binary_becomes_transient_error(self) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError("kubectl")):
            with pytest.raises(TransientFetchError, match="cannot run kubectl"):
                ClusterController()._run_kubectl_sync(("get", "pods"))


class TestConnection:
    """Tests for check_connection."""

    @pytest.mark.asyncio
    async def test_reachable(self, controller: ClusterController) -> None:
        controller._run_kubectl_sync = MagicMock(return_value="{}")  # type: ignore[method-assign]
        assert await controller.check_connection() is True

    @pytest.mark.asyncio
    async def test_unreachable(self, controller: ClusterController) -> None:
        controller._run_kubectl_sync = MagicMock(  # type: ignore[method-assign]
            side_effect=TransientFetchError("connection refused")
        )
        assert await controller.check_connection() is False


class TestMetrics:
    """Tests for namespace, pod and node listings."""

    @pytest.mark.asyncio
    async def test_namespaces_sorted_without_blanks(self, controller: ClusterController) -> None:
        assert await controller.list_namespaces() == ["default", "staging"]

    @pytest.mark.asyncio
    async def test_pods_join_usage_and_requests(self, controller: ClusterController) -> None:
        pods = await controller.list_pods("default")
        api = next(p for p in pods if p.pod_name == "api")
        assert api.namespace == "default"
        assert api.container == "app"
        assert api.node_name == "n1"
        assert api.cpu_millicores == 250
        assert api.memory_bytes == 612 * 1024**2
        assert api.cpu_request_millicores == 100
        assert api.memory_request_bytes == 256 * 1024**2
        assert api.ready == "1/1"
        assert api.phase == "Running"

    @pytest.mark.asyncio
    async def test_pod_trends_normalized_against_ceilings(
        self, controller: ClusterController
    ) -> None:
        await controller.list_pods("default")
        pods = await controller.list_pods("default")
        api = next(p for p in pods if p.pod_name == "api")
        assert len(api.cpu_trend) == 2
        assert api.cpu_trend.latest == pytest.approx(0.5)
        assert api.mem_trend.latest == pytest.approx(612 / (1.2 * 1024))

    @pytest.mark.asyncio
    async def test_pods_scope_arguments(
        self, controller: ClusterController, kubectl: FakeKubectl
    ) -> None:
        await controller.list_pods("", "app=api")
        pod_call = next(c for c in kubectl.calls if c[:2] == ("get", "pods"))
        assert "-A" in pod_call
        assert pod_call[pod_call.index("-l") + 1] == "app=api"
        usage_call = next(c for c in kubectl.calls if c[:2] == ("get", "--raw"))
        assert usage_call[2] == f"{_USAGE_PREFIX}/pods?labelSelector=app%3Dapi"

    @pytest.mark.asyncio
    async def test_missing_usage_degrades_to_zero(self) -> None:
        ctrl = ClusterController()
        ctrl._run_kubectl_sync = FakeKubectl(usage_fails=True)  # type: ignore[method-assign]
        pods = await ctrl.list_pods("default")
        assert [p.cpu_millicores for p in pods] == [0, 0]
        nodes = await ctrl.list_nodes()
        assert [n.cpu_used for n in nodes] == [0.0, 0.0]

    @pytest.mark.asyncio
    async def test_nodes_ratios_and_pod_counts(self, controller: ClusterController) -> None:
        nodes = {n.node_name: n for n in await controller.list_nodes()}
        assert nodes["n1"].cpu_used == pytest.approx(0.25)
        assert nodes["n1"].mem_used == pytest.approx(0.25)
        assert nodes["n1"].pods == 2
        assert nodes["n2"].pods == 1
        assert nodes["n2"].cpu_used == 0.0
        assert nodes["n1"].kubelet_version == "v1.29.3"
        assert nodes["n1"].cpu_trend.samples == (pytest.approx(0.25),)

    @pytest.mark.asyncio
    async def test_invalid_json_is_transient(self, controller: ClusterController) -> None:
        controller._run_kubectl_sync = MagicMock(return_value="not json")  # type: ignore[method-assign]
        with pytest.raises(TransientFetchError):
            await controller.list_namespaces()


class TestStreamLogs:
    """Tests for log stream argument building."""

    @pytest.mark.asyncio
    async def test_empty_name_rejected(self, controller: ClusterController) -> None:
        with pytest.raises(StreamStartError):
            await controller.stream_logs(LogsTarget(namespace="default", name=""))

    @pytest.mark.asyncio
    async def test_pod_logs_command(self, controller: ClusterController) -> None:
        opener = AsyncMock(return_value=MagicMock())
        with patch("kmet.controllers.cluster.controller.open_process_stream", opener):
            await controller.stream_logs(
                LogsTarget(namespace="shop", name="api-1", container="app")
            )
        cmd = opener.call_args.args[0]
        assert cmd[:5] == ["kubectl", "--kubeconfig", "/tmp/kubeconfig", "--context", "dev"]
        assert cmd[5:] == ["logs", "-f", "api-1", "-n", "shop", "--tail=200", "-c", "app"]

    @pytest.mark.asyncio
    async def test_workload_logs_use_selector(self, controller: ClusterController) -> None:
        opener = AsyncMock(return_value=MagicMock())
        with patch("kmet.controllers.cluster.controller.open_process_stream", opener):
            await controller.stream_logs(
                LogsTarget(namespace="shop", kind=TargetKind.DEPLOYMENT, name="api")
            )
        cmd = opener.call_args.args[0]
        assert "app=api,tier=web" in cmd
        assert "--all-containers" in cmd
        assert "--prefix" in cmd
        assert "--max-log-requests=10" in cmd

    @pytest.mark.asyncio
    async def test_workload_without_selector_fails(self, controller: ClusterController) -> None:
        controller._run_kubectl_sync = MagicMock(return_value="{}")  # type: ignore[method-assign]
        with pytest.raises(StreamStartError, match="matchLabels"):
            await controller.stream_logs(
                LogsTarget(namespace="shop", kind=TargetKind.STATEFULSET, name="db")
            )

    @pytest.mark.asyncio
    async def test_node_target_watches_events(self, controller: ClusterController) -> None:
        opener = AsyncMock(return_value=MagicMock())
        with patch("kmet.controllers.cluster.controller.open_process_stream", opener):
            await controller.stream_logs(LogsTarget(kind=TargetKind.NODE, name="n1"))
        cmd = opener.call_args.args[0]
        assert "--watch" in cmd
        assert "involvedObject.kind=Node,involvedObject.name=n1" in cmd
        assert opener.call_args.kwargs["name"] == "events:n1"
