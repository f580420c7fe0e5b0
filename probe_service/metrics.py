"""
Prometheus-style metrics exposition.

The request counters are NOT measured: every scrape draws fresh values from
the injected random source. Uptime and memory gauges come from process
introspection. Metric names are kept stable for existing dashboards.
"""

from __future__ import annotations

import random
from typing import Iterator, Optional, Protocol

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric

from probe_service.introspection import Introspector

METRICS_CONTENT_TYPE = CONTENT_TYPE_LATEST

# (endpoint, exclusive upper bound of the random value)
REQUEST_COUNTER_RANGES = (
    ("/", 1000),
    ("/health", 100),
)


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class ProbeMetricsCollector:
    """Custom collector yielding the service's metric families on each scrape."""

    def __init__(self, introspector: Introspector, rng: RandomSource):
        self.introspector = introspector
        self.rng = rng

    def collect(self) -> Iterator[Metric]:
        requests = CounterMetricFamily(
            "http_requests",
            "Total HTTP requests",
            labels=["method", "endpoint"],
        )
        for endpoint, upper in REQUEST_COUNTER_RANGES:
            requests.add_metric(["GET", endpoint], self.rng.randrange(upper))
        yield requests

        yield GaugeMetricFamily(
            "process_uptime_seconds",
            "Process uptime in seconds",
            value=self.introspector.uptime(),
        )

        mem = self.introspector.memory()
        memory = GaugeMetricFamily(
            "nodejs_memory_usage_bytes",
            "Node.js memory usage",
            labels=["type"],
        )
        memory.add_metric(["rss"], mem.rss)
        memory.add_metric(["heapUsed"], mem.heap_used)
        memory.add_metric(["heapTotal"], mem.heap_total)
        yield memory


class MetricsExporter:
    """Renders the exposition text from a private registry."""

    def __init__(self, introspector: Introspector, rng: Optional[RandomSource] = None):
        self.registry = CollectorRegistry(auto_describe=False)
        self.collector = ProbeMetricsCollector(introspector, rng or random.Random())
        self.registry.register(self.collector)

    def render(self) -> bytes:
        return generate_latest(self.registry)
