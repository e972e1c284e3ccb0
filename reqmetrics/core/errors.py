"""Common exceptions for reqmetrics."""
from __future__ import annotations


class ReqMetricsError(Exception):
    pass


class IllegalStateError(ReqMetricsError, RuntimeError):
    """An operation was called in a state that does not allow it."""
