"""Request-scoped timing, counters and properties for a network client."""

from .config import ProfilingConfig
from .core.errors import IllegalStateError, ReqMetricsError
from .core.request_metrics import Field, RequestMetrics
from .core.timing import TimingInfo, TimingInterval
from .telemetry.reporters import LoggingReporter, MetricsReporter, NullReporter

__all__ = [
    "Field",
    "IllegalStateError",
    "LoggingReporter",
    "MetricsReporter",
    "NullReporter",
    "ProfilingConfig",
    "ReqMetricsError",
    "RequestMetrics",
    "TimingInfo",
    "TimingInterval",
]
