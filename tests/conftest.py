from __future__ import annotations

import pytest


class FakeClock:
    """Monotonic nanosecond clock that advances only when told to."""

    def __init__(self, start: int = 1_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, nanos: int) -> int:
        self.now += nanos
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
