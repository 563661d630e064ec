"""
open_meteo_client.py: Lightweight interface for the Open-Meteo forecast API
using direct requests.

Functions:
- get_surface_forecast(latitude, longitude)
- get_upper_air(latitude, longitude)

Failures are logged and returned as empty results so that a missing forecast
never stops the observation indicators from being shown.
"""

from pprint import pprint
from typing import Dict, List, Optional, Tuple

import pandas as pd
import requests

from jumpweather import config
from jumpweather.core.data_processing import observations_from_frame
from jumpweather.core.upper_air import direction_column, speed_column
from jumpweather.models.weather import Observation, ObservationSource
from jumpweather.utils.log_util import app_logger

logger = app_logger(__name__)

BASE_URL = config.OPEN_METEO_ENDPOINT

SURFACE_COLUMNS = {
    "wind_speed_10m": "speed",
    "wind_direction_10m": "direction",
    "wind_gusts_10m": "gust",
    "temperature_2m": "temperature",
    "dew_point_2m": "dew_point",
}


def parse_coordinates(coordinates: str) -> Tuple[float, float]:
    """
    Parse a "lat,lon" string.

    :param coordinates: e.g. "61.4481,23.8521"
    :return: (latitude, longitude)
    :raises ValueError: If the string is not two comma-separated numbers
    """
    parts = coordinates.split(",")
    if len(parts) != 2:
        raise ValueError(f"Expected 'lat,lon', got {coordinates!r}")
    return float(parts[0]), float(parts[1])


def get_forecast_raw(
    latitude: float, longitude: float, hourly: List[str], **params
) -> Dict:
    """
    Fetch raw hourly forecast JSON.

    :param latitude: Site latitude
    :param longitude: Site longitude
    :param hourly: Open-Meteo hourly variable names
    :param params: Extra query parameters
    :return: Response dict, or {} on failure
    """
    query = {
        "latitude": latitude,
        "longitude": longitude,
        "hourly": ",".join(hourly),
        "wind_speed_unit": "ms",
        **params,
    }
    logger.info(f"Fetching Open-Meteo forecast: {latitude},{longitude} ({len(hourly)} fields)")

    try:
        resp = requests.get(BASE_URL, params=query, timeout=config.OPEN_METEO_TIMEOUT_S)
        if resp.status_code != 200:
            logger.error(f"Forecast fetch failed: {resp.status_code} {resp.text}")
            return {}
        return resp.json()
    except requests.RequestException as e:
        logger.error(f"Request error while fetching forecast: {e}")
        return {}


def hourly_frame(raw: Dict) -> pd.DataFrame:
    """Normalize the ``hourly`` block of a response into a DataFrame."""
    hourly = raw.get("hourly") or {}
    if not hourly.get("time"):
        return pd.DataFrame()
    return pd.DataFrame(hourly)


def get_surface_forecast(
    latitude: float, longitude: float, forecast_days: int = 2
) -> List[Observation]:
    """
    Fetch the hourly 10 m wind and 2 m temperature forecast.

    :return: Forecast points as Observations (UTC), or [] on failure
    """
    raw = get_forecast_raw(
        latitude,
        longitude,
        config.SURFACE_FORECAST_FIELDS,
        timezone="UTC",
        forecast_days=forecast_days,
    )
    df = hourly_frame(raw)
    if df.empty:
        logger.warning("No surface forecast data returned.")
        return []

    df = df.rename(columns=SURFACE_COLUMNS)
    return observations_from_frame(df, source=ObservationSource.OPEN_METEO)


def get_upper_air(
    latitude: float,
    longitude: float,
    timezone: str = config.SITE_TIMEZONE,
    forecast_days: int = 2,
) -> pd.DataFrame:
    """
    Fetch hourly pressure-level winds.

    Times are returned in the site's local time, as expected by
    jumpweather.core.upper_air.

    :return: DataFrame with ``time`` and per-level speed/direction columns,
        empty on failure
    """
    fields = []
    for level in config.PRESSURE_LEVELS:
        fields.append(speed_column(level["pressure"]))
        fields.append(direction_column(level["pressure"]))

    raw = get_forecast_raw(
        latitude, longitude, fields, timezone=timezone, forecast_days=forecast_days
    )
    df = hourly_frame(raw)
    if df.empty:
        logger.warning("No upper air data returned.")
        return df

    df["time"] = pd.to_datetime(df["time"])
    return df


def main(coordinates: Optional[str] = None):
    lat, lon = parse_coordinates(coordinates or "61.4481,23.8521")

    forecast = get_surface_forecast(lat, lon, forecast_days=1)
    if not forecast:
        print("❌ No forecast returned.")
        return

    print(f"✅ {len(forecast)} forecast points, first:")
    pprint(forecast[0])


if __name__ == "__main__":
    main()
