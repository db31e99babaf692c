"""
Pytest configuration for auction tests.

Provides a controllable clock so auction end times can be crossed without
sleeping.
"""

from datetime import datetime, timedelta

import pytest


class FakeClock:
    """Callable clock that only moves when advanced"""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: float = 0, seconds: float = 0):
        self.now += timedelta(minutes=minutes, seconds=seconds)


@pytest.fixture
def clock():
    """Fixture that provides a fresh fake clock"""
    return FakeClock()
