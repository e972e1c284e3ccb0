"""Telemetry subpackage.

Exposes the reporters and the logger helper. The Prometheus reporter lives in
``reqmetrics.telemetry.prom``.
"""

from .logging import get_logger
from .reporters import LoggingReporter, MetricsReporter, NullReporter

__all__ = [
    "get_logger",
    "LoggingReporter",
    "MetricsReporter",
    "NullReporter",
]
