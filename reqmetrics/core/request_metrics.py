"""Per-request metrics accumulator.

One ``RequestMetrics`` lives for one request/response cycle. The owning
client starts and ends named events, bumps counters and attaches
properties, then calls ``log()`` once so the configured reporter can emit
everything.

Timing and counters are gated by the profiling flag (read once, at
construction). Properties are always recorded.

Known limitation: events do not nest. Starting an event that is already in
flight overwrites the first start, so only the last start is measured.
Repeated start/end cycles under one name are all kept, in call order.
"""
from __future__ import annotations

import time
from contextlib import contextmanager
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Union

from ..config import ProfilingConfig
from ..telemetry.reporters import MetricsReporter, NullReporter
from .errors import IllegalStateError
from .timing import Number, TimingInfo


class Field(str, Enum):
    """Predefined metric names used by the HTTP client."""

    StatusCode = "StatusCode"
    AWSErrorCode = "AWSErrorCode"
    AWSRequestID = "AWSRequestID"
    BytesProcessed = "BytesProcessed"
    AttemptCount = "AttemptCount"
    ResponseProcessingTime = "ResponseProcessingTime"
    ClientExecuteTime = "ClientExecuteTime"
    RequestSigningTime = "RequestSigningTime"
    HttpRequestTime = "HttpRequestTime"
    RequestMarshallTime = "RequestMarshallTime"
    RetryPauseTime = "RetryPauseTime"
    RedirectLocation = "RedirectLocation"
    Exception = "Exception"
    CredentialsRequestTime = "CredentialsRequestTime"
    ServiceEndpoint = "ServiceEndpoint"
    ServiceName = "ServiceName"

    def __str__(self) -> str:
        return self.value


Name = Union[str, Field]


def _key(name: Name) -> str:
    return name.value if isinstance(name, Field) else name


class RequestMetrics:
    def __init__(
        self,
        reporter: MetricsReporter,
        config: Optional[ProfilingConfig] = None,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        cfg = config if config is not None else ProfilingConfig.from_env()
        self._enabled = cfg.enabled
        self._clock = clock
        self._timing_info = TimingInfo.start_with_nanos(clock())
        self._properties: Dict[str, List[object]] = {}
        self._events_in_flight: Dict[str, int] = {}
        self._reporter: MetricsReporter = reporter if self._enabled else NullReporter()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def reporter(self) -> MetricsReporter:
        return self._reporter

    @property
    def timing_info(self) -> TimingInfo:
        return self._timing_info

    @property
    def properties(self) -> Mapping[str, List[object]]:
        return MappingProxyType(self._properties)

    @property
    def events_in_flight(self) -> List[str]:
        return list(self._events_in_flight)

    def start_event(self, name: Name) -> None:
        """Start timing ``name``; overwrites an unfinished start of the same name."""
        if not self._enabled:
            return
        self._events_in_flight[_key(name)] = self._clock()

    def end_event(self, name: Name) -> None:
        """End ``name`` and record it as a sub-measurement of the root timing.

        Raises IllegalStateError if the event was never started.
        """
        if not self._enabled:
            return
        key = _key(name)
        start = self._events_in_flight.get(key)
        if start is None:
            raise IllegalStateError(f"Trying to end an event which was never started: {key}")
        end = self._clock()
        self._timing_info.add_sub_measurement(key, TimingInfo.closed(start, end))
        del self._events_in_flight[key]

    @contextmanager
    def timed(self, name: Name) -> Iterator["RequestMetrics"]:
        self.start_event(name)
        try:
            yield self
        finally:
            self.end_event(name)

    def increment_counter(self, name: Name) -> None:
        if self._enabled:
            self._timing_info.increment_counter(_key(name))

    def set_counter(self, name: Name, value: Number) -> None:
        if self._enabled:
            self._timing_info.set_counter(_key(name), value)

    def add_property(self, name: Name, value: object) -> None:
        self._properties.setdefault(_key(name), []).append(value)

    def get_property(self, name: Name) -> List[object]:
        return list(self._properties.get(_key(name), ()))

    def log(self) -> None:
        self._reporter.report(self)
