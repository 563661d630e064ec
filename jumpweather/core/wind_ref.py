"""
Wind reference grading.

Maps average speed, max gust and direction variation to a discrete grade 0-4
(calm to severe). Each threshold is one row in an ordered table; rows are
checked top to bottom and the first match wins.

    grade = clamp(round(base + gust_excess_increment + variation_increment), 0, 4)
"""

import math
from typing import Dict, List

from jumpweather import config
from jumpweather.utils.log_util import app_logger

logger = app_logger(__name__)

_GUST = config.GUST_THRESHOLDS
_SPEED = config.SPEED_THRESHOLDS
_EXCESS = config.GUST_EXCESS_THRESHOLDS

BASE_GRADE_TABLE: List[Dict[str, float]] = [
    {"gust": _GUST["very_high"], "speed": 0, "grade": 4},
    {"gust": _GUST["high"], "speed": _SPEED["high"], "grade": 3},
    {"gust": _GUST["medium"], "speed": _SPEED["medium"], "grade": 2},
    {"gust": _GUST["medium"], "speed": 0, "grade": 2},
    {"gust": _GUST["low"], "speed": 0, "grade": 1},
    {"gust": 0, "speed": 0, "grade": 0},
]

# Keyed by gust - average speed
GUST_EXCESS_TABLE: List[Dict[str, float]] = [
    {"excess": _EXCESS["very_high"], "increment": 1},
    {"excess": _EXCESS["high"], "increment": 0.5},
    {"excess": _EXCESS["medium"], "increment": 0.25},
    {"excess": 0, "increment": 0},
]

DIRECTION_VARIATION_TABLE: List[Dict[str, float]] = [
    {"gust": _GUST["very_high"], "variation": 180, "increment": 1},
    {"gust": _GUST["high"], "variation": 90, "increment": 1},
    {"gust": _GUST["high"], "variation": 45, "increment": 0.5},
    {"gust": _GUST["medium"], "variation": 90, "increment": 0.5},
    {"gust": _GUST["medium"], "variation": 45, "increment": 0.25},
    {"gust": _GUST["low"], "variation": 90, "increment": 0.25},
    {"gust": 0, "variation": 0, "increment": 0},
]


def base_grade(average_speed: float, max_gust: float) -> int:
    for row in BASE_GRADE_TABLE:
        if max_gust >= row["gust"] and average_speed >= row["speed"]:
            return row["grade"]
    return 0


def gust_excess_increment(excess: float) -> float:
    for row in GUST_EXCESS_TABLE:
        if excess >= row["excess"]:
            return row["increment"]
    return 0


def direction_variation_increment(variation: float, max_gust: float) -> float:
    for row in DIRECTION_VARIATION_TABLE:
        if max_gust >= row["gust"] and variation >= row["variation"]:
            return row["increment"]
    return 0


def wind_ref_grade(average_speed: float, max_gust: float, variation: float) -> int:
    """
    Grade wind conditions on the 0-4 wind reference scale.

    :param average_speed: Mean wind speed in m/s
    :param max_gust: Highest gust in m/s
    :param variation: Direction variation range in degrees
    :return: Integer grade, 0 (calm) to 4 (severe)
    """
    score = (
        base_grade(average_speed, max_gust)
        + gust_excess_increment(max_gust - average_speed)
        + direction_variation_increment(variation, max_gust)
    )
    # Halves round up: 2.5 is grade 3
    grade = min(max(math.floor(score + 0.5), 0), config.WIND_REF_MAX_GRADE)
    logger.debug(
        f"wind_ref_grade: speed={average_speed:.1f} gust={max_gust:.1f} "
        f"variation={variation:.0f} score={score} grade={grade}"
    )
    return grade


def grade_color(grade: int) -> str:
    """Palette color for a grade; out-of-range grades are clamped."""
    grade = min(max(grade, 0), config.WIND_REF_MAX_GRADE)
    return config.WIND_REF_COLORS[grade]


def extra_width(average_speed: float, max_gust: float) -> int:
    """Visual width hint growing with the gust excess, 0 to 30."""
    width = math.floor((max_gust - average_speed) * config.EXTRA_WIDTH_MULTIPLIER + 0.5)
    return min(max(width, 0), config.MAX_EXTRA_WIDTH)
