from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MemoryUsage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rss: int = Field(..., ge=0, description="Resident set size in bytes")
    heap_used: int = Field(..., ge=0, alias="heapUsed")
    heap_total: int = Field(..., ge=0, alias="heapTotal")


class KubernetesIdentity(BaseModel):
    namespace: str
    pod_name: str
    service_account: str


class KubernetesInfo(BaseModel):
    namespace: str
    pod_name: str
    node_name: str
    cluster: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str
    hostname: str
    uptime: float
    memory: MemoryUsage
    environment: str
    project: str
    kubernetes: KubernetesIdentity


class ReadinessResponse(BaseModel):
    status: str
    timestamp: str
    uptime: float
    message: Optional[str] = None


class LivenessResponse(BaseModel):
    status: str
    timestamp: str
    pid: int
    uptime: float


class RootResponse(BaseModel):
    message: str
    hostname: str
    timestamp: str
    version: str
    project: str
    features: list[str]
    kubernetes_info: KubernetesInfo


class LoadResponse(BaseModel):
    message: str
    intensity: int
    iterations: int
    duration_ms: int
    result: str
    hostname: str
    timestamp: str
