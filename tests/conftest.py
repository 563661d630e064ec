"""Shared fixtures for the jumpweather test suite."""

from datetime import datetime, timedelta, timezone

import pytest

from jumpweather.models.weather import Observation


@pytest.fixture
def now():
    """Fixed reference time."""
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_obs(now):
    """Factory for observations ``minutes_ago`` before ``now``."""

    def _make(direction=270.0, speed=4.0, gust=6.0, minutes_ago=0, **kwargs):
        return Observation(
            time=now - timedelta(minutes=minutes_ago),
            direction=direction,
            speed=speed,
            gust=gust,
            **kwargs,
        )

    return _make
