"""
Health, readiness and liveness checks.

- Liveness: is the process able to respond at all?
- Readiness: has the process been up long enough to take traffic?
- Health: a diagnostic snapshot for operators (version, memory, pod identity)

None of these probe real dependencies. Readiness is a pure function of
process uptime.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from probe_service.config import ServiceConfig
from probe_service.introspection import Introspector, isoformat_utc

log = logging.getLogger("probe_service.health")

PROJECT_NAME = "DevOps Kubernetes"
CLUSTER_NAME = "devops-project-3"
GREETING = "Hello from DevOps Project 3 - Kubernetes!"
FEATURES = (
    "EKS cluster deployment",
    "Kubernetes pods and services",
    "Helm package management",
    "Horizontal Pod Autoscaling",
    "Ingress controller",
    "Rolling deployments",
)

# Not ready until strictly more than this many seconds have elapsed.
READY_AFTER_SECONDS = 10.0
STARTING_UP_MESSAGE = "Application is starting up"


class ProbeStatus(str, Enum):
    """Status values reported by the probe endpoints."""

    HEALTHY = "healthy"
    READY = "ready"
    NOT_READY = "not_ready"
    ALIVE = "alive"


@dataclass
class ReadinessResult:
    """Outcome of a readiness check."""

    ready: bool
    uptime: float
    timestamp: str
    message: Optional[str] = None

    @property
    def status(self) -> ProbeStatus:
        return ProbeStatus.READY if self.ready else ProbeStatus.NOT_READY

    @property
    def http_status(self) -> int:
        return 200 if self.ready else 503

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "status": self.status.value,
            "timestamp": self.timestamp,
            "uptime": self.uptime,
        }
        if self.message is not None:
            body["message"] = self.message
        return body


def is_ready(uptime_seconds: float) -> bool:
    return uptime_seconds > READY_AFTER_SECONDS


class HealthChecker:
    """Builds probe payloads from configuration and process state."""

    def __init__(self, config: ServiceConfig, introspector: Introspector):
        self.config = config
        self.introspector = introspector

    def _timestamp(self) -> str:
        return isoformat_utc(self.introspector.now())

    def check_health(self) -> dict[str, Any]:
        return {
            "status": ProbeStatus.HEALTHY.value,
            "timestamp": self._timestamp(),
            "version": self.config.version,
            "hostname": self.introspector.hostname(),
            "uptime": self.introspector.uptime(),
            "memory": self.introspector.memory().to_dict(),
            "environment": self.config.environment,
            "project": PROJECT_NAME,
            "kubernetes": {
                "namespace": self.config.namespace,
                "pod_name": self.config.pod_name,
                "service_account": self.config.service_account,
            },
        }

    def check_readiness(self) -> ReadinessResult:
        uptime = self.introspector.uptime()
        ready = is_ready(uptime)
        if not ready:
            log.debug("Readiness probe failed: uptime=%.3fs", uptime)
        return ReadinessResult(
            ready=ready,
            uptime=uptime,
            timestamp=self._timestamp(),
            message=None if ready else STARTING_UP_MESSAGE,
        )

    def check_liveness(self) -> dict[str, Any]:
        return {
            "status": ProbeStatus.ALIVE.value,
            "timestamp": self._timestamp(),
            "pid": self.introspector.pid(),
            "uptime": self.introspector.uptime(),
        }

    def describe(self) -> dict[str, Any]:
        """Service greeting with cluster metadata."""
        return {
            "message": GREETING,
            "hostname": self.introspector.hostname(),
            "timestamp": self._timestamp(),
            "version": self.config.version,
            "project": PROJECT_NAME,
            "features": list(FEATURES),
            "kubernetes_info": {
                "namespace": self.config.namespace,
                "pod_name": self.config.pod_name,
                "node_name": self.config.node_name,
                "cluster": CLUSTER_NAME,
            },
        }
