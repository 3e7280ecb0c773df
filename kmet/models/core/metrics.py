"""Pod and node usage snapshot models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Trend(BaseModel):
    """Read-only window of normalized usage samples, most recent last."""

    model_config = ConfigDict(frozen=True)

    samples: tuple[float, ...] = ()

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def latest(self) -> float | None:
        return self.samples[-1] if self.samples else None


class PodMetric(BaseModel):
    """One pod row: identity, current usage, requests and trends."""

    model_config = ConfigDict(frozen=True)

    namespace: str
    pod_name: str
    container: str = ""
    node_name: str = ""
    cpu_millicores: int = Field(default=0, ge=0)
    memory_bytes: int = Field(default=0, ge=0)
    cpu_request_millicores: int = Field(default=0, ge=0)
    memory_request_bytes: int = Field(default=0, ge=0)
    ready: str = "0/1"
    phase: str = "Unknown"
    cpu_trend: Trend = Trend()
    mem_trend: Trend = Trend()

    @property
    def key(self) -> str:
        """Stable identity used for trend buffers and selection."""
        return f"{self.namespace}/{self.pod_name}"


class NodeMetric(BaseModel):
    """One node row; usage is a ratio of allocatable capacity."""

    model_config = ConfigDict(frozen=True)

    node_name: str
    cpu_used: float = Field(default=0.0, ge=0.0, le=1.0)
    mem_used: float = Field(default=0.0, ge=0.0, le=1.0)
    pods: int = Field(default=0, ge=0)
    kubelet_version: str = ""
    cpu_trend: Trend = Trend()
    mem_trend: Trend = Trend()

    @property
    def key(self) -> str:
        return self.node_name
