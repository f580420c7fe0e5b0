"""Probe Service - FastAPI Application.

Health, readiness, liveness, metrics and synthetic load endpoints for a
container orchestrated deployment.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from probe_service.config import ServiceConfig, load_config
from probe_service.health import HealthChecker
from probe_service.introspection import Introspector, ProcessIntrospector
from probe_service.metrics import MetricsExporter, RandomSource
from probe_service.middleware import AccessLogMiddleware
from probe_service.routes import router

SERVICE_NAME = "probe-service"

log = logging.getLogger("probe_service")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def startup_banner(config: ServiceConfig) -> list[str]:
    base = f"http://localhost:{config.port}"
    return [
        f"DevOps Project 3 - Kubernetes server running on port {config.port}",
        f"Health: {base}/health",
        f"Ready: {base}/ready",
        f"Live: {base}/live",
        f"Metrics: {base}/metrics",
        f"Load test: {base}/load/5",
        f"Main: {base}",
    ]


def build_app(
    config: Optional[ServiceConfig] = None,
    introspector: Optional[Introspector] = None,
    rng: Optional[RandomSource] = None,
) -> FastAPI:
    """Build and configure the FastAPI application."""
    config = config or load_config()

    config_errors = config.validate()
    if config_errors:
        error_msg = "; ".join(config_errors)
        log.error("Configuration validation failed: %s", error_msg)
        raise RuntimeError(f"Configuration validation failed: {error_msg}")

    introspector = introspector or ProcessIntrospector()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        for line in startup_banner(config):
            log.info(line)
        log.info(
            "Environment %s (from %s), version %s",
            config.environment,
            config.environment_source,
            config.version,
        )
        yield
        log.info("Stopping %s", SERVICE_NAME)

    app = FastAPI(
        title="Probe Service",
        description="Kubernetes probe targets and synthetic CPU load.",
        version=config.version,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Orchestrator probes"},
            {"name": "meta", "description": "Service metadata"},
            {"name": "load", "description": "Synthetic CPU load"},
            {"name": "metrics", "description": "Prometheus-style metrics"},
        ],
    )

    app.add_middleware(AccessLogMiddleware)

    app.state.service = SERVICE_NAME
    app.state.config = config
    app.state.introspector = introspector
    app.state.health_checker = HealthChecker(config, introspector)
    app.state.metrics_exporter = MetricsExporter(introspector, rng)

    app.include_router(router)

    return app
