"""Walk one simulated request through RequestMetrics.

Run with profiling on to see the latency line:

    REQMETRICS_ENABLE_PROFILING=1 python examples/request_lifecycle_demo.py
"""
from __future__ import annotations

import time

from reqmetrics import Field, LoggingReporter, ProfilingConfig, RequestMetrics


def main() -> int:
    cfg = ProfilingConfig.from_env()
    metrics = RequestMetrics(LoggingReporter.from_config(cfg), cfg)
    metrics.add_property(Field.ServiceName, "S3")
    metrics.add_property(Field.ServiceEndpoint, "https://s3.amazonaws.com")

    with metrics.timed(Field.ClientExecuteTime):
        with metrics.timed(Field.RequestMarshallTime):
            time.sleep(0.001)
        for attempt in range(2):
            metrics.increment_counter(Field.AttemptCount)
            with metrics.timed(Field.HttpRequestTime):
                time.sleep(0.005 * (attempt + 1))
        metrics.add_property(Field.StatusCode, 200)

    metrics.log()
    if not metrics.enabled:
        print("profiling disabled; set REQMETRICS_ENABLE_PROFILING=1")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
