"""
Circular statistics for wind directions.

Directions are meteorological degrees in [0, 360). Averages are computed with
unit vectors so that 350° and 10° average to 0°, not 180°.
"""

from itertools import combinations
from typing import Sequence

import numpy as np

from jumpweather.utils.log_util import app_logger

logger = app_logger(__name__)


def mean_direction(directions: Sequence[float]) -> float:
    """
    Circular mean of wind directions.

    :param directions: Directions in degrees, at least one
    :return: Mean direction in [0, 360)
    :raises ValueError: If directions is empty
    """
    if len(directions) == 0:
        raise ValueError("mean_direction requires at least one direction")

    radians = np.deg2rad(np.asarray(directions, dtype=float))
    result = float(
        np.rad2deg(np.arctan2(np.sin(radians).sum(), np.cos(radians).sum())) % 360.0
    )

    # Modulo of a tiny negative angle rounds up to exactly 360
    if result >= 360.0:
        result = 0.0

    logger.debug(f"mean_direction: {list(directions)} -> {result:.1f}")
    return result


def angular_difference(a: float, b: float) -> float:
    """
    Smallest angle between two directions.

    :return: Difference in degrees, in [0, 180]
    """
    diff = abs(a % 360.0 - b % 360.0)
    return min(diff, 360.0 - diff)


def variation_range(directions: Sequence[float]) -> float:
    """
    Largest pairwise angular difference in a set of directions.

    Windows are bounded by time and hold tens of points, so the pairwise scan
    is fine.

    :param directions: Directions in degrees
    :return: Spread in degrees, in [0, 180]; 0 for fewer than two directions
    """
    spread = 0.0
    for a, b in combinations(directions, 2):
        spread = max(spread, angular_difference(a, b))
    return spread
