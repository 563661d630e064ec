"""
Selection of the observations that feed the wind indicators.

The "now" timestamp is always passed in so that results depend only on the
arguments.
"""

from dataclasses import replace
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from jumpweather import config
from jumpweather.models.weather import Metar, Observation, ObservationSource
from jumpweather.utils.log_util import app_logger
from jumpweather.utils.weather_utils import knots_to_ms

logger = app_logger(__name__)


def select_recent_valid(
    observations: Sequence[Observation],
    now: datetime,
    window: timedelta = config.OBSERVATION_WINDOW,
    ignore_recency: bool = False,
) -> List[Observation]:
    """
    Keep observations with complete wind data measured within the window.

    :param observations: Observations in any order
    :param now: Reference time for the window
    :param window: How far back from now observations are accepted
    :param ignore_recency: Debug override that skips the time filter
    :return: Matching observations in input order, possibly empty
    """
    if ignore_recency:
        logger.warning("Recency filter disabled, using all valid observations")
        return [obs for obs in observations if obs.has_valid_wind_data]

    cutoff = now - window
    return [
        obs
        for obs in observations
        if obs.has_valid_wind_data and obs.time >= cutoff
    ]


def has_wind_observations(observations: Sequence[Observation]) -> bool:
    """True when at least two observations carry valid wind data."""
    count = 0
    for obs in observations:
        if obs.has_valid_wind_data:
            count += 1
        if count > 1:
            return True
    return False


def metar_to_observation(
    metar: Metar, station: Optional[Observation] = None
) -> Observation:
    """
    Convert a METAR message into an Observation in m/s.

    Temperature and dew point prefer the station reading when one exists.
    """
    return Observation(
        time=metar.time,
        direction=metar.wind_direction,
        speed=knots_to_ms(metar.wind_speed_kt),
        gust=knots_to_ms(metar.wind_gust_kt),
        temperature=(
            station.temperature
            if station is not None and station.temperature is not None
            else metar.temperature
        ),
        dew_point=(
            station.dew_point
            if station is not None and station.dew_point is not None
            else metar.dew_point
        ),
        source=ObservationSource.METAR,
    )


def latest_observation(
    observations: Sequence[Observation], metars: Sequence[Metar] = ()
) -> Optional[Observation]:
    """
    Return the newest observation usable as "current wind".

    Falls back to the newest METAR when the newest station observation has no
    valid wind data.

    :param observations: Station observations in any order
    :param metars: METAR messages in any order
    :return: Observation or None when neither source has valid wind data
    """
    newest = max(observations, key=lambda obs: obs.time, default=None)
    if newest is not None and newest.has_valid_wind_data:
        return newest

    newest_metar = max(metars, key=lambda m: m.time, default=None)
    if newest_metar is None:
        logger.debug("No valid station observation and no METAR available")
        return None

    metar_obs = metar_to_observation(newest_metar, station=newest)
    if metar_obs.has_valid_wind_data:
        logger.debug(f"Using METAR from {newest_metar.time} as latest observation")
        return metar_obs

    return None


def override_latest(
    observations: Sequence[Observation],
    gust: Optional[float] = None,
    speed: Optional[float] = None,
    direction: Optional[float] = None,
) -> List[Observation]:
    """
    Return a copy of the observations with the newest one's wind replaced.

    Used for trying out the indicators with hand-picked values. Arguments left
    as None keep the measured value.
    """
    result = list(observations)
    if not result:
        return result

    idx = max(range(len(result)), key=lambda i: result[i].time)
    original = result[idx]
    result[idx] = replace(
        original,
        gust=gust if gust is not None else original.gust,
        speed=speed if speed is not None else original.speed,
        direction=direction if direction is not None else original.direction,
    )
    logger.info(f"Overrode latest observation at {original.time}")
    return result
