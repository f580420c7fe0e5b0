"""ASGI entrypoint.

Use this in uvicorn/gunicorn:  probe_service.asgi:app

Signals are then handled by the ASGI server, not by the immediate-exit
handler in ``probe_service.server``.
"""

from __future__ import annotations

from probe_service.config import load_config
from probe_service.main import build_app, configure_logging

configure_logging(load_config().log_level)

app = build_app()
