"""Reporters that emit an accumulated ``RequestMetrics``.

A reporter is anything with ``report(metrics)``; there is no base class.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Protocol, Tuple

from ..config import DEFAULT_LATENCY_LOGGER, ProfilingConfig
from .logging import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from ..core.request_metrics import RequestMetrics


KEY_VALUE_SEPARATOR = "="
COMMA_SEPARATOR = ", "


class MetricsReporter(Protocol):
    def report(self, metrics: "RequestMetrics") -> None:
        ...


class NullReporter:
    """Drops everything. Used whenever profiling is off."""

    def report(self, metrics: "RequestMetrics") -> None:
        _ = metrics


def _format_value(value: object) -> str:
    if isinstance(value, (list, tuple)):
        if len(value) == 1:
            return str(value[0])
        return "[" + COMMA_SEPARATOR.join(str(v) for v in value) + "]"
    return str(value)


def format_line(entries: Iterable[Tuple[str, object]]) -> str:
    """Render ``key=value, `` pairs into one line, trailing separator kept."""
    parts: List[str] = []
    for key, value in entries:
        parts.append(f"{key}{KEY_VALUE_SEPARATOR}{_format_value(value)}{COMMA_SEPARATOR}")
    return "".join(parts)


class LoggingReporter:
    """Writes properties, counters and sub-measurements as a single INFO line."""

    def __init__(self, logger_name: str = DEFAULT_LATENCY_LOGGER) -> None:
        self._log = get_logger(logger_name)

    @classmethod
    def from_config(cls, config: ProfilingConfig) -> "LoggingReporter":
        return cls(config.latency_logger)

    def report(self, metrics: "RequestMetrics") -> None:
        timing = metrics.timing_info
        entries: List[Tuple[str, object]] = []
        entries.extend(metrics.properties.items())
        entries.extend(timing.counters.items())
        entries.extend(timing.sub_measurements.items())
        self._log.info(format_line(entries))
