"""Process entrypoint: run the app under uvicorn on 0.0.0.0:PORT."""

from __future__ import annotations

import contextlib
import logging
import threading
from typing import Iterator, Optional

import uvicorn

from probe_service.config import ServiceConfig, load_config
from probe_service.main import build_app, configure_logging
from probe_service.shutdown import ShutdownManager, get_shutdown_manager

log = logging.getLogger("probe_service.server")


class ProbeServer(uvicorn.Server):
    """uvicorn server whose signal handling exits immediately.

    uvicorn's own handler would stop accepting connections and wait for
    in-flight requests. This one installs the shutdown manager's handlers
    for the lifetime of ``serve()`` instead.
    """

    def __init__(self, config: uvicorn.Config, shutdown: ShutdownManager):
        super().__init__(config)
        self.shutdown = shutdown

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        if threading.current_thread() is not threading.main_thread():
            yield
            return
        previous = self.shutdown.install()
        try:
            yield
        finally:
            self.shutdown.restore(previous)


def build_server(
    config: ServiceConfig,
    shutdown: Optional[ShutdownManager] = None,
) -> ProbeServer:
    app = build_app(config)
    uv_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        log_config=None,
    )
    return ProbeServer(uv_config, shutdown or get_shutdown_manager())


def main() -> None:
    config = load_config()
    configure_logging(config.log_level)
    server = build_server(config)
    log.info("Listening on %s:%d", config.host, config.port)
    server.run()


if __name__ == "__main__":
    main()
