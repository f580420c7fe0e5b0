"""Synthetic CPU load for autoscaler testing."""

from __future__ import annotations

import logging
import math
import re
import time
from dataclasses import dataclass
from typing import Callable, Optional

log = logging.getLogger("probe_service.load")

ITERATIONS_PER_INTENSITY = 10_000
DEFAULT_INTENSITY = 1
RESULT_PREFIX_LEN = 10

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_intensity(raw: Optional[str]) -> int:
    """
    Parse the intensity path segment.

    Takes the leading integer of the segment ("7abc" -> 7). Missing,
    non-numeric, zero and negative values all become the default.
    """
    if raw is None:
        return DEFAULT_INTENSITY
    m = _LEADING_INT_RE.match(raw)
    if not m:
        return DEFAULT_INTENSITY
    value = int(m.group(1))
    return value if value > 0 else DEFAULT_INTENSITY


@dataclass(frozen=True)
class LoadResult:
    intensity: int
    iterations: int
    duration_ms: int
    result: str


def run_cpu_load(
    intensity: int,
    timer: Callable[[], float] = time.perf_counter,
) -> LoadResult:
    """Sum sqrt(i) over intensity * 10000 integers and time it.

    Runs to completion without yielding.
    """
    iterations = intensity * ITERATIONS_PER_INTENSITY
    total = 0.0
    start = timer()
    for i in range(iterations):
        total += math.sqrt(i)
    duration_ms = int((timer() - start) * 1000)

    log.info(
        "Load test completed: intensity=%d iterations=%d duration_ms=%d",
        intensity,
        iterations,
        duration_ms,
    )
    return LoadResult(
        intensity=intensity,
        iterations=iterations,
        duration_ms=duration_ms,
        result=str(total)[:RESULT_PREFIX_LEN],
    )
