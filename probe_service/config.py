"""Service configuration.

Loaded once from environment variables into an immutable structure.
"""

from __future__ import annotations

import logging
import os
import socket
from dataclasses import dataclass
from functools import lru_cache

log = logging.getLogger("probe_service.config")

DEFAULT_PORT = 3000
DEFAULT_VERSION = "3.0.0"
DEFAULT_ENVIRONMENT = "production"
BIND_HOST = "0.0.0.0"


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    return v.strip()


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    try:
        return int(v)
    except ValueError:
        log.warning("Ignoring non-numeric %s=%r, using %s", name, v, default)
        return default


def resolve_environment() -> tuple[str, str]:
    """Return (environment name, source variable)."""
    canonical = os.getenv("APP_ENV")
    legacy = os.getenv("NODE_ENV")

    if canonical and canonical.strip():
        return canonical.strip(), "APP_ENV"

    if legacy and legacy.strip():
        return legacy.strip(), "NODE_ENV"

    return DEFAULT_ENVIRONMENT, "default"


@dataclass(frozen=True)
class ServiceConfig:
    """Configuration from environment variables.

    Environment Variables:
        PORT: Listen port (default: 3000)
        APP_VERSION: Reported version (default: 3.0.0)
        APP_ENV / NODE_ENV: Runtime environment name (default: production)
        KUBERNETES_NAMESPACE: Namespace (default: default)
        HOSTNAME: Pod name (default: OS hostname)
        KUBERNETES_SERVICE_ACCOUNT: Service account (default: default)
        KUBERNETES_NODE_NAME: Node name (default: unknown)
        LOG_LEVEL: Log level (default: INFO)
    """

    port: int = DEFAULT_PORT
    version: str = DEFAULT_VERSION
    environment: str = DEFAULT_ENVIRONMENT
    environment_source: str = "default"
    namespace: str = "default"
    pod_name: str = "localhost"
    service_account: str = "default"
    node_name: str = "unknown"
    log_level: str = "INFO"
    host: str = BIND_HOST

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not 1 <= self.port <= 65535:
            errors.append(f"Invalid PORT={self.port}. Must be between 1 and 65535.")
        if not self.version:
            errors.append("APP_VERSION must not be empty.")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            errors.append(f"Invalid LOG_LEVEL='{self.log_level}'.")
        return errors


@lru_cache(maxsize=1)
def load_config() -> ServiceConfig:
    environment, source = resolve_environment()
    return ServiceConfig(
        port=_env_int("PORT", DEFAULT_PORT),
        version=_env_str("APP_VERSION", DEFAULT_VERSION),
        environment=environment,
        environment_source=source,
        namespace=_env_str("KUBERNETES_NAMESPACE", "default"),
        pod_name=_env_str("HOSTNAME", socket.gethostname()),
        service_account=_env_str("KUBERNETES_SERVICE_ACCOUNT", "default"),
        node_name=_env_str("KUBERNETES_NODE_NAME", "unknown"),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )


def reset_config() -> None:
    load_config.cache_clear()
