"""Read-only view of the running process.

Handlers never touch the OS directly; they go through a
``ProcessIntrospector`` so tests can substitute fixed values.
"""

from __future__ import annotations

import os
import socket
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

import psutil


@dataclass(frozen=True)
class MemorySnapshot:
    """Process memory counters in bytes."""

    rss: int
    heap_used: int
    heap_total: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "rss": self.rss,
            "heapUsed": self.heap_used,
            "heapTotal": self.heap_total,
        }


class Introspector(Protocol):
    def uptime(self) -> float: ...

    def pid(self) -> int: ...

    def hostname(self) -> str: ...

    def memory(self) -> MemorySnapshot: ...

    def now(self) -> datetime: ...


def isoformat_utc(moment: datetime) -> str:
    """ISO-8601 with millisecond precision and a ``Z`` suffix."""
    return (
        moment.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class ProcessIntrospector:
    """Introspection of the current OS process backed by psutil."""

    def __init__(self, process: Optional[psutil.Process] = None):
        self._process = process or psutil.Process(os.getpid())
        self._started_at = self._process.create_time()

    def uptime(self) -> float:
        """Seconds since the process was started."""
        return max(0.0, time.time() - self._started_at)

    def pid(self) -> int:
        return self._process.pid

    def hostname(self) -> str:
        return socket.gethostname()

    def memory(self) -> MemorySnapshot:
        # "data" is the heap-bearing data segment; not every platform reports it
        info = self._process.memory_info()
        heap_total = info.vms
        heap_used = min(getattr(info, "data", info.rss), heap_total)
        return MemorySnapshot(rss=info.rss, heap_used=heap_used, heap_total=heap_total)

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
