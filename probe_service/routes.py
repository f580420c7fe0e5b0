from __future__ import annotations

from fastapi import APIRouter, Request, Response

from probe_service.health import HealthChecker
from probe_service.introspection import isoformat_utc
from probe_service.load import parse_intensity, run_cpu_load
from probe_service.metrics import METRICS_CONTENT_TYPE
from probe_service.schemas import (
    HealthResponse,
    LivenessResponse,
    LoadResponse,
    ReadinessResponse,
    RootResponse,
)

router = APIRouter()

LOAD_COMPLETED_MESSAGE = "Load test completed"


def _checker(request: Request) -> HealthChecker:
    return request.app.state.health_checker


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health(request: Request):
    """Diagnostic snapshot. Always 200."""
    return _checker(request).check_health()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    response_model_exclude_none=True,
    tags=["health"],
    responses={503: {"model": ReadinessResponse, "description": "Still starting up"}},
)
async def ready(request: Request, response: Response):
    """Readiness probe, 503 until the process has been up for more than 10s."""
    result = _checker(request).check_readiness()
    response.status_code = result.http_status
    return result.to_dict()


@router.get("/live", response_model=LivenessResponse, tags=["health"])
async def live(request: Request):
    """Liveness probe. Always 200."""
    return _checker(request).check_liveness()


@router.get("/", response_model=RootResponse, tags=["meta"])
async def root(request: Request):
    return _checker(request).describe()


def _load_response(request: Request, raw_intensity: str | None) -> dict:
    introspector = request.app.state.introspector
    result = run_cpu_load(parse_intensity(raw_intensity))
    return {
        "message": LOAD_COMPLETED_MESSAGE,
        "intensity": result.intensity,
        "iterations": result.iterations,
        "duration_ms": result.duration_ms,
        "result": result.result,
        "hostname": introspector.hostname(),
        "timestamp": isoformat_utc(introspector.now()),
    }


# The load handlers are coroutines on purpose: the loop runs on the event
# loop thread and holds it until done.
@router.get("/load", response_model=LoadResponse, tags=["load"])
@router.get("/load/", response_model=LoadResponse, tags=["load"], include_in_schema=False)
async def load_default(request: Request):
    return _load_response(request, None)


@router.get("/load/{intensity}", response_model=LoadResponse, tags=["load"])
async def load_with_intensity(request: Request, intensity: str):
    """Burn CPU proportional to ``intensity`` (10000 iterations per unit)."""
    return _load_response(request, intensity)


@router.get("/metrics", tags=["metrics"])
async def metrics(request: Request) -> Response:
    return Response(
        content=request.app.state.metrics_exporter.render(),
        media_type=METRICS_CONTENT_TYPE,
    )
