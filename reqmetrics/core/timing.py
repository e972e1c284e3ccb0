"""Timing records for a single request.

``TimingInterval`` is an immutable start/end pair in nanoseconds.
``TimingInfo`` owns a root interval plus named counters and named lists of
nested ``TimingInfo`` sub-measurements.
"""
from __future__ import annotations

import functools
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Union

Number = Union[int, float]

_NANOS_PER_MILLI = 1_000_000


@functools.total_ordering
@dataclass(frozen=True)
class TimingInterval:
    start_nanos: int
    end_nanos: Optional[int] = None

    def __post_init__(self) -> None:
        if self.end_nanos is not None and self.end_nanos < self.start_nanos:
            raise ValueError(
                f"interval ends before it starts: {self.start_nanos} > {self.end_nanos}"
            )

    @classmethod
    def open(cls, start_nanos: int) -> "TimingInterval":
        return cls(start_nanos)

    @classmethod
    def closed(cls, start_nanos: int, end_nanos: int) -> "TimingInterval":
        return cls(start_nanos, end_nanos)

    def close(self, end_nanos: int) -> "TimingInterval":
        return TimingInterval(self.start_nanos, end_nanos)

    @property
    def is_closed(self) -> bool:
        return self.end_nanos is not None

    @property
    def elapsed_nanos(self) -> Optional[int]:
        if self.end_nanos is None:
            return None
        return self.end_nanos - self.start_nanos

    @property
    def elapsed_millis(self) -> Optional[float]:
        nanos = self.elapsed_nanos
        return None if nanos is None else nanos / _NANOS_PER_MILLI

    def _sort_key(self) -> tuple:
        # open intervals sort after closed ones with the same start
        return (self.start_nanos, self.end_nanos is None, self.end_nanos or 0)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TimingInterval):
            return NotImplemented
        return self._sort_key() < other._sort_key()


class TimingInfo:
    """Root interval with counters and nested sub-measurements."""

    def __init__(self, interval: TimingInterval) -> None:
        self._interval = interval
        self._counters: Dict[str, Number] = {}
        self._sub_measurements: Dict[str, List[TimingInfo]] = {}

    @classmethod
    def start_with_nanos(cls, start_nanos: int) -> "TimingInfo":
        return cls(TimingInterval.open(start_nanos))

    @classmethod
    def closed(cls, start_nanos: int, end_nanos: int) -> "TimingInfo":
        return cls(TimingInterval.closed(start_nanos, end_nanos))

    # -- root interval ---------------------------------------------------
    @property
    def interval(self) -> TimingInterval:
        return self._interval

    @property
    def start_nanos(self) -> int:
        return self._interval.start_nanos

    @property
    def end_nanos(self) -> Optional[int]:
        return self._interval.end_nanos

    @property
    def is_end_time_known(self) -> bool:
        return self._interval.is_closed

    @property
    def time_taken_millis(self) -> Optional[float]:
        return self._interval.elapsed_millis

    def end_timing(self, end_nanos: int) -> "TimingInfo":
        """Close the root interval; returns self for chaining."""
        self._interval = self._interval.close(end_nanos)
        return self

    # -- counters --------------------------------------------------------
    def increment_counter(self, name: str) -> None:
        self._counters[name] = self._counters.get(name, 0) + 1

    def set_counter(self, name: str, value: Number) -> None:
        self._counters[name] = value

    def get_counter(self, name: str) -> Optional[Number]:
        return self._counters.get(name)

    @property
    def counters(self) -> Mapping[str, Number]:
        return MappingProxyType(self._counters)

    # -- sub-measurements ------------------------------------------------
    def add_sub_measurement(self, name: str, child: "TimingInfo") -> None:
        self._sub_measurements.setdefault(name, []).append(child)

    def get_sub_measurement(self, name: str, index: int = 0) -> Optional["TimingInfo"]:
        entries = self._sub_measurements.get(name)
        if not entries or not 0 <= index < len(entries):
            return None
        return entries[index]

    def get_last_sub_measurement(self, name: str) -> Optional["TimingInfo"]:
        entries = self._sub_measurements.get(name)
        return entries[-1] if entries else None

    @property
    def sub_measurement_names(self) -> List[str]:
        return list(self._sub_measurements)

    @property
    def sub_measurements(self) -> Mapping[str, List["TimingInfo"]]:
        return MappingProxyType(self._sub_measurements)

    def __repr__(self) -> str:
        return (
            f"TimingInfo(interval={self._interval!r}, counters={self._counters!r}, "
            f"sub_measurements={sorted(self._sub_measurements)!r})"
        )

    def __str__(self) -> str:
        return str(self.time_taken_millis)
