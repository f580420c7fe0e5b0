"""Access logging keyed by route kind.

Orchestrator probes hit /live and /ready every few seconds, so their
successful responses are logged at DEBUG. Everything else, including a
503 from /ready, is logged at INFO. Load requests carry the parsed
intensity so CPU spikes can be matched to the request that caused them.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from probe_service.load import parse_intensity

REQUEST_ID_HEADER = "X-Request-Id"
LOAD_PREFIX = "/load"

ROUTE_KINDS = {
    "/": "main",
    "/health": "health",
    "/ready": "readiness",
    "/live": "liveness",
    "/metrics": "metrics",
}
POLLED_KINDS = {"liveness", "readiness"}

log = logging.getLogger("probe_service.access")


def route_kind(path: str) -> str:
    if path == LOAD_PREFIX or path.startswith(LOAD_PREFIX + "/"):
        return "load"
    return ROUTE_KINDS.get(path, "other")


def load_segment(path: str) -> Optional[str]:
    """The raw intensity segment of a /load path, if any."""
    rest = path[len(LOAD_PREFIX) + 1 :]
    return rest or None


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One structured log line per request, tagged with a request ID."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        path = request.url.path
        kind = route_kind(path)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id

        fields: dict[str, Any] = {
            "request_id": request_id,
            "kind": kind,
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }
        if kind == "load":
            fields["intensity"] = parse_intensity(load_segment(path))

        quiet = kind in POLLED_KINDS and response.status_code < 400
        log.log(
            logging.DEBUG if quiet else logging.INFO,
            "%s %s %s %s",
            kind,
            request.method,
            path,
            response.status_code,
            extra=fields,
        )
        return response
