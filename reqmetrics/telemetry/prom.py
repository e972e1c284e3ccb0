"""Prometheus reporter.

Folds each request's counters and sub-measurement durations into process
level prometheus_client metrics. Properties are not exported.
"""
from __future__ import annotations

import re
import weakref
from typing import TYPE_CHECKING, Dict, Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

from .logging import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from ..core.request_metrics import RequestMetrics


_NANOS_PER_SECOND = 1e9

_log = get_logger(__name__)


class _RegistryMetrics:
    """Metrics already created in one registry, plus the event name behind each."""

    def __init__(self) -> None:
        self.counters: Dict[str, Counter] = {}
        self.hists: Dict[str, Histogram] = {}
        self.sources: Dict[str, str] = {}

    def note_source(self, full: str, name: str) -> None:
        first = self.sources.setdefault(full, name)
        if first != name:
            _log.debug("event names %r and %r share metric %s", first, name, full)


# Cache created metrics to avoid duplicate registration errors when several
# reporters share one registry (e.g., one reporter per client instance).
# Entries go away with their registry.
_BY_REGISTRY: "weakref.WeakKeyDictionary[CollectorRegistry, _RegistryMetrics]" = (
    weakref.WeakKeyDictionary()
)


def _metrics_for(registry: CollectorRegistry) -> _RegistryMetrics:
    held = _BY_REGISTRY.get(registry)
    if held is None:
        held = _RegistryMetrics()
        _BY_REGISTRY[registry] = held
    return held


def metric_name(name: str) -> str:
    """CamelCase / free-form event name -> prometheus-safe snake_case.

    Names are case-folded, so "Retries" and "retries" feed one metric, and a
    run of capitals stays together ("AWSErrorCode" -> "awserror_code").
    """
    snake = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name).lower()
    snake = re.sub(r"[^a-z0-9_]", "_", snake)
    if snake and snake[0].isdigit():
        snake = "_" + snake
    return snake


class PrometheusReporter:
    def __init__(
        self,
        namespace: str = "reqmetrics",
        registry: Optional[CollectorRegistry] = None,
        buckets: Optional[list[float]] = None,
    ) -> None:
        self._namespace = namespace
        self._registry = registry if registry is not None else REGISTRY
        self._buckets = buckets

    def _counter(self, name: str) -> Counter:
        full = f"{self._namespace}_{metric_name(name)}"
        held = _metrics_for(self._registry)
        held.note_source(full, name)
        if full not in held.counters:
            held.counters[full] = Counter(full, f"Per-request counter {name}", registry=self._registry)
        return held.counters[full]

    def _histogram(self, name: str) -> Histogram:
        full = f"{self._namespace}_{metric_name(name)}_seconds"
        held = _metrics_for(self._registry)
        held.note_source(full, name)
        if full not in held.hists:
            if self._buckets is not None:
                h = Histogram(full, f"Duration of {name}", buckets=self._buckets, registry=self._registry)
            else:
                h = Histogram(full, f"Duration of {name}", registry=self._registry)
            held.hists[full] = h
        return held.hists[full]

    def report(self, metrics: "RequestMetrics") -> None:
        timing = metrics.timing_info
        for name, value in timing.counters.items():
            if value < 0:
                _log.debug("skipping negative counter %s=%s", name, value)
                continue
            self._counter(name).inc(value)
        for name, entries in timing.sub_measurements.items():
            hist = self._histogram(name)
            for child in entries:
                nanos = child.interval.elapsed_nanos
                if nanos is not None:
                    hist.observe(nanos / _NANOS_PER_SECOND)
