"""
Fixed observation window for trying out the wind variation indicators.

A light wind with 6 m/s gusts that swings from 270° to 200°.
"""

from datetime import datetime
from typing import List

from jumpweather.models.weather import Observation, ObservationSource

MOCK_SPEEDS = [1]
MOCK_GUSTS = [6]
MOCK_DIRECTIONS = [270, 270, 270, 270, 200, 200]


def mock_wind_variation_window(now: datetime) -> List[Observation]:
    """Mock observations, all stamped at ``now``."""
    return [
        Observation(
            time=now,
            direction=direction,
            speed=MOCK_SPEEDS[idx % len(MOCK_SPEEDS)],
            gust=MOCK_GUSTS[idx % len(MOCK_GUSTS)],
            source=ObservationSource.MOCK,
        )
        for idx, direction in enumerate(MOCK_DIRECTIONS)
    ]
