"""
Cloud base estimate from the surface temperature and dew point spread.

Rising air cools roughly 1 °C per 125 m faster than its dew point, so the
spread times 125 gives the saturation altitude above the station. The estimate
only means something when clouds actually form over the measurement site; a
dry air mass yields a number without a cloud.

https://en.wikipedia.org/wiki/Cloud_base
"""

import math
from typing import Optional

from jumpweather import config
from jumpweather.models.weather import Observation


def estimate_cloud_base(
    temperature: float,
    dew_point: float,
    round_to: Optional[int] = config.CLOUD_BASE_ROUND_TO_M,
) -> float:
    """
    Estimate the cloud base altitude above the station.

    :param temperature: Surface temperature in Celsius
    :param dew_point: Dew point in Celsius
    :param round_to: Rounding step in meters; None or 0 returns the raw estimate
    :return: Altitude in meters
    """
    altitude = float(config.CLOUD_BASE_M_PER_DEGREE * (temperature - dew_point))
    if not round_to:
        return altitude
    # Halves round up: 1250 m is shown as 1300 m
    return float(math.floor(altitude / round_to + 0.5) * round_to)


def cloud_base_for(
    observation: Optional[Observation],
    round_to: Optional[int] = config.CLOUD_BASE_ROUND_TO_M,
) -> Optional[float]:
    """Cloud base for an observation, None when temperature or dew point is missing."""
    if (
        observation is None
        or observation.temperature is None
        or observation.dew_point is None
    ):
        return None
    return estimate_cloud_base(observation.temperature, observation.dew_point, round_to)
