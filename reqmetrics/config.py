"""Configuration for request profiling.

The enable flag is process-wide: it is read from the environment (or passed
in explicitly) once per ``RequestMetrics`` instance.

Environment variables:
- REQMETRICS_ENABLE_PROFILING: 1|true|yes|on enables timing and counters
- REQMETRICS_LATENCY_LOGGER: logger name used by the logging reporter
"""
from __future__ import annotations

from dataclasses import dataclass

from .utils.env import env_bool, env_str


PROFILING_ENV = "REQMETRICS_ENABLE_PROFILING"
LATENCY_LOGGER_ENV = "REQMETRICS_LATENCY_LOGGER"
DEFAULT_LATENCY_LOGGER = "reqmetrics.latency"


@dataclass(slots=True, frozen=True)
class ProfilingConfig:
    enabled: bool = False
    latency_logger: str = DEFAULT_LATENCY_LOGGER

    @classmethod
    def from_env(cls) -> "ProfilingConfig":
        return cls(
            enabled=env_bool(PROFILING_ENV, False),
            latency_logger=env_str(LATENCY_LOGGER_ENV, DEFAULT_LATENCY_LOGGER),
        )
