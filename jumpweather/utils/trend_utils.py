"""
Trend calculation utilities for wind data.

This module provides the short-term gust trend: how the near-term forecast
gusts compare to the latest observed gust.
"""

from datetime import datetime, timedelta
from typing import Sequence

from jumpweather import config
from jumpweather.models.weather import Observation
from jumpweather.utils.log_util import app_logger

logger = app_logger(__name__)


def calculate_gust_trend(
    latest_gust: float,
    forecasts: Sequence[Observation],
    now: datetime,
    horizon: timedelta = config.GUST_TREND_HORIZON,
) -> float:
    """
    Calculate the gust trend as forecast average minus latest observed gust.

    Forecast entries from ``now`` up to ``now + horizon`` are averaged; past
    entries and entries without a gust value are skipped.

    :param latest_gust: Latest observed gust in m/s
    :param forecasts: Forecast points in any order
    :param now: Reference time
    :param horizon: How far ahead forecast points are used
    :return: Signed m/s, positive when gusts are strengthening, 0 without forecasts
    """
    cutoff = now + horizon
    gusts = [
        f.gust for f in forecasts if now <= f.time <= cutoff and f.gust is not None
    ]

    if not gusts:
        logger.debug("No forecast gusts within the trend horizon")
        return 0.0

    forecast_avg = sum(gusts) / len(gusts)
    trend = forecast_avg - latest_gust
    logger.debug(
        f"Gust trend: latest {latest_gust:.1f} m/s vs forecast avg {forecast_avg:.1f} m/s "
        f"over {len(gusts)} points (diff: {trend:+.1f})"
    )
    return trend


def gust_trend_arrow(trend: float) -> str:
    """
    Convert a gust trend to an arrow.

    :param trend: Gust trend in m/s
    :return: Trend arrow: "↑" (strengthening), "↓" (weakening), or "→" (steady)
    """
    threshold = config.GUST_TREND_STEADY_MS

    if trend > threshold:
        return "↑"
    elif trend < -threshold:
        return "↓"
    return "→"
