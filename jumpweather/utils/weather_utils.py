"""
Weather utility functions for formatting and unit conversions.

This module provides reusable weather-related conversions and classifications
that can be used across the application.
"""

from typing import Optional

from jumpweather import config


def format_wind_direction(degrees: float) -> str:
    """
    Convert wind direction in degrees to cardinal direction.

    :param degrees: Wind direction in degrees (0-360)
    :return: Cardinal direction string (N, NE, E, SE, S, SW, W, NW)
    """
    degrees = degrees % 360
    if 337.5 <= degrees or degrees < 22.5:
        return "N"
    elif degrees < 67.5:
        return "NE"
    elif degrees < 112.5:
        return "E"
    elif degrees < 157.5:
        return "SE"
    elif degrees < 202.5:
        return "S"
    elif degrees < 247.5:
        return "SW"
    elif degrees < 292.5:
        return "W"
    else:
        return "NW"


def gust_warning_level(gust: Optional[float]) -> str:
    """
    Classify the latest gust for display.

    :param gust: Gust speed in m/s
    :return: "ok", "warning" (>= 8 m/s) or "danger" (>= 11 m/s)
    """
    if gust is None:
        return "ok"
    if gust >= config.GUST_DANGER:
        return "danger"
    elif gust >= config.GUST_WARNING:
        return "warning"
    return "ok"


def knots_to_ms(knots: Optional[float]) -> Optional[float]:
    """Convert knots to meters/second, passing None through."""
    if knots is None:
        return None
    return knots * config.KNOTS_TO_MS


def to_meters(value: float, unit: str) -> float:
    """
    Convert an altitude to meters.

    :param value: Altitude value
    :param unit: "hft" (hundreds of feet, as in METAR cloud bases), "ft" or "m"
    :return: Altitude in meters
    """
    if unit == "hft":
        return value * 30.48
    if unit == "ft":
        return value * 0.3048
    return value
