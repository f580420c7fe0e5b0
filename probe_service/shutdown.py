"""
Shutdown handling for Kubernetes/Docker.

On SIGTERM or SIGINT the process logs and exits with status 0 right away.
In-flight requests are NOT drained: a request being served when the signal
arrives is aborted. The log line still says "gracefully".

Handlers are installed with ``signal.signal`` so they run in the main thread
between bytecodes, even while a handler is hogging the event loop.
"""

from __future__ import annotations

import logging
import os
import signal
from types import FrameType
from typing import Any, Callable, Optional

log = logging.getLogger("probe_service.shutdown")

HANDLED_SIGNALS = (signal.SIGTERM, signal.SIGINT)
EXIT_CODE = 0


def _hard_exit(code: int) -> None:
    # Flush handlers first; os._exit skips interpreter cleanup and worker joins.
    logging.shutdown()
    os._exit(code)


class ShutdownManager:
    """
    Turns termination signals into an immediate process exit.

    Usage:
        manager = ShutdownManager()
        previous = manager.install()
        ...
        manager.restore(previous)
    """

    def __init__(self, exit_func: Callable[[int], None] = _hard_exit):
        self._exit = exit_func

    def install(self) -> dict[signal.Signals, Any]:
        """Register handlers for SIGTERM and SIGINT. Main thread only.

        Returns the handlers that were replaced.
        """
        previous = {}
        for sig in HANDLED_SIGNALS:
            previous[sig] = signal.signal(sig, self.handle_signal)
            log.debug("Registered signal handler for %s", sig.name)
        return previous

    def restore(self, previous: dict[signal.Signals, Any]) -> None:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    def handle_signal(self, sig: int, frame: Optional[FrameType] = None) -> None:
        log.info("%s received, shutting down gracefully", signal.Signals(sig).name)
        self._exit(EXIT_CODE)


_shutdown_manager: Optional[ShutdownManager] = None


def get_shutdown_manager() -> ShutdownManager:
    global _shutdown_manager
    if _shutdown_manager is None:
        _shutdown_manager = ShutdownManager()
    return _shutdown_manager


__all__ = [
    "EXIT_CODE",
    "HANDLED_SIGNALS",
    "ShutdownManager",
    "get_shutdown_manager",
]
