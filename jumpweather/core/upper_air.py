"""
Upper-air wind table from pressure-level forecasts.

Input is an hourly DataFrame with a local-time ``time`` column and
``wind_speed_<p>hPa`` / ``wind_direction_<p>hPa`` columns (m/s, degrees) for the
levels in config.PRESSURE_LEVELS. Each table slot averages the slot hour and
the two following 3-hourly hours; for late slots those run into the next
day.
"""

from datetime import date, timedelta
from typing import Dict, List, Sequence

import pandas as pd

from jumpweather import config
from jumpweather.core.angle_math import mean_direction
from jumpweather.models.weather import UpperAirWind
from jumpweather.utils.log_util import app_logger

logger = app_logger(__name__)

UPPER_AIR_COLUMNS = [
    "day_offset",
    "slot",
    "pressure_hpa",
    "height_m",
    "speed",
    "direction",
    "speed_class",
]


def speed_column(pressure: int) -> str:
    return f"wind_speed_{pressure}hPa"


def direction_column(pressure: int) -> str:
    return f"wind_direction_{pressure}hPa"


def upper_air_speed_class(speed: float, height_m: int) -> str:
    """
    Classify an upper-air wind speed for its altitude.

    Canopy heights (110 m, 800 m) tolerate less wind than free-fall heights.

    :param speed: Wind speed in m/s
    :param height_m: Approximate altitude of the pressure level
    :return: One of config.UPPER_AIR_SPEED_CLASSES, or "" for other heights
    """
    if height_m in config.CANOPY_HEIGHTS_M:
        limits = config.CANOPY_SPEED_CLASSES
    elif height_m in config.FREE_FALL_HEIGHTS_M:
        limits = config.FREE_FALL_SPEED_CLASSES
    else:
        return ""

    for limit, css_class in zip(limits, config.UPPER_AIR_SPEED_CLASSES):
        if speed < limit:
            return css_class
    return config.UPPER_AIR_SPEED_CLASSES[-1]


def average_levels(df: pd.DataFrame, day: date, slot: int) -> List[UpperAirWind]:
    """
    Average each pressure level over one slot.

    :param df: Hourly pressure-level frame
    :param day: Local calendar day
    :param slot: Starting local hour of the slot
    :return: One UpperAirWind per level with data, highest level first
    """
    start = pd.Timestamp(day) + pd.Timedelta(hours=slot)
    targets = [start + pd.Timedelta(hours=3 * i) for i in range(3)]
    times = pd.to_datetime(df["time"])
    if times.dt.tz is not None:
        times = times.dt.tz_localize(None)
    # Hours past midnight come from the next day
    rows = df[times.isin(targets)]
    if rows.empty:
        return []

    winds = []
    for level in config.PRESSURE_LEVELS:
        pressure = level["pressure"]
        if speed_column(pressure) not in rows or direction_column(pressure) not in rows:
            continue
        speeds = rows[speed_column(pressure)].dropna()
        directions = rows[direction_column(pressure)].dropna()
        if speeds.empty or directions.empty:
            continue
        winds.append(
            UpperAirWind(
                pressure_hpa=pressure,
                height_m=level["height"],
                speed=float(speeds.mean()),
                direction=mean_direction(directions.tolist()),
            )
        )
    return winds


def summarize_upper_air(
    df: pd.DataFrame,
    day: date,
    slots: Sequence[int] = config.UPPER_AIR_TIME_SLOTS,
) -> Dict[int, List[UpperAirWind]]:
    """
    Build the slot -> level winds mapping for one day.

    Slots without data are left out.
    """
    if df.empty:
        return {}

    summary = {}
    for slot in slots:
        winds = average_levels(df, day, slot)
        if winds:
            summary[slot] = winds
    return summary


def build_upper_air_table(
    df: pd.DataFrame, today: date, days: int = 2
) -> pd.DataFrame:
    """
    Flatten today's and the following days' summaries into one table.

    :param df: Hourly pressure-level frame
    :param today: Local calendar day for offset 0
    :param days: Number of days, 2 for today and tomorrow
    :return: DataFrame with UPPER_AIR_COLUMNS
    """
    records = []
    for offset in range(days):
        day = today + timedelta(days=offset)
        for slot, winds in summarize_upper_air(df, day).items():
            for wind in winds:
                records.append(
                    {
                        "day_offset": offset,
                        "slot": slot,
                        "pressure_hpa": wind.pressure_hpa,
                        "height_m": wind.height_m,
                        "speed": wind.speed,
                        "direction": wind.direction,
                        "speed_class": upper_air_speed_class(wind.speed, wind.height_m),
                    }
                )

    logger.debug(f"Upper air table: {len(records)} rows for {days} days from {today}")
    return pd.DataFrame(records, columns=UPPER_AIR_COLUMNS)
