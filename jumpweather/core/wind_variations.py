"""
Wind variation indicators for the current observation window.

Two severity schemes exist and are kept side by side:

- ``gust_ratio``: color from the max gust / average speed ratio, overridden by
  large direction variation.
- ``wind_ref``: table-driven 0-4 grade (see ``jumpweather.core.wind_ref``).

Both take an already filtered window and return None when it is empty, so that
"no data" is never rendered as calm.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Dict, Optional, Sequence, Tuple

from jumpweather import config
from jumpweather.core import angle_math, wind_ref
from jumpweather.core.observation_window import select_recent_valid
from jumpweather.models.weather import Observation, WindVariationResult
from jumpweather.utils.log_util import app_logger

logger = app_logger(__name__)

GREEN, YELLOW, ORANGE, RED = config.GUST_RATIO_PALETTE


def summarize_window(
    window: Sequence[Observation],
) -> Optional[Tuple[float, float, float, float]]:
    """
    Reduce a window to (average_direction, variation_range, average_speed, max_gust).

    Observations without valid wind data are skipped.

    :return: Tuple of floats, or None when nothing valid remains
    """
    valid = [obs for obs in window if obs.has_valid_wind_data]
    if not valid:
        return None

    directions = [obs.direction for obs in valid]
    speeds = [obs.speed for obs in valid]

    average_direction = angle_math.mean_direction(directions)
    variation = angle_math.variation_range(directions)
    average_speed = sum(speeds) / len(speeds)
    max_gust = max(obs.gust for obs in valid)
    return average_direction, variation, average_speed, max_gust


class SeverityClassifier(ABC):
    """Common interface of the severity schemes."""

    name: str = ""

    @abstractmethod
    def classify(self, window: Sequence[Observation]) -> Optional[WindVariationResult]:
        """Classify a filtered observation window, None when it is empty."""
        ...


class GustRatioClassifier(SeverityClassifier):
    """Color from gust-to-mean ratio and direction spread; most severe wins."""

    name = "gust_ratio"

    @staticmethod
    def gust_speed_ratio(max_gust: float, average_speed: float) -> Optional[float]:
        """Ratio of max gust to average speed, None when the speed is zero."""
        if average_speed <= 0:
            return None
        return max_gust / average_speed

    @staticmethod
    def decide(
        max_gust: float, ratio: Optional[float], variation: float
    ) -> Tuple[str, int]:
        """
        Apply the color rules in order.

        :return: (color, extra_width)
        """
        color = GREEN
        if ratio is not None and max_gust > config.GUST_RATIO_MIN_GUST:
            if ratio >= config.GUST_RATIO_RED:
                color = RED
            elif ratio >= config.GUST_RATIO_ORANGE:
                color = ORANGE
        extra_width = config.GUST_RATIO_EXTRA_WIDTH[color]

        # Direction spread can raise the color but never the width
        if variation > config.VARIATION_RED:
            color = RED
        elif variation >= config.VARIATION_ORANGE and color != RED:
            color = ORANGE

        return color, extra_width

    def classify(self, window: Sequence[Observation]) -> Optional[WindVariationResult]:
        summary = summarize_window(window)
        if summary is None:
            return None
        average_direction, variation, average_speed, max_gust = summary

        ratio = self.gust_speed_ratio(max_gust, average_speed)
        color, extra_width = self.decide(max_gust, ratio, variation)
        return WindVariationResult(
            variation_range=variation,
            average_direction=average_direction,
            color=color,
            extra_width=extra_width,
            average_speed=average_speed,
            max_gust=max_gust,
            scheme=self.name,
        )


class WindRefClassifier(SeverityClassifier):
    """Color from the 0-4 wind reference grade."""

    name = "wind_ref"

    def classify(self, window: Sequence[Observation]) -> Optional[WindVariationResult]:
        summary = summarize_window(window)
        if summary is None:
            return None
        average_direction, variation, average_speed, max_gust = summary

        grade = wind_ref.wind_ref_grade(average_speed, max_gust, variation)
        return WindVariationResult(
            variation_range=variation,
            average_direction=average_direction,
            color=wind_ref.grade_color(grade),
            extra_width=wind_ref.extra_width(average_speed, max_gust),
            average_speed=average_speed,
            max_gust=max_gust,
            scheme=self.name,
            grade=grade,
        )


CLASSIFIERS: Dict[str, type] = {
    GustRatioClassifier.name: GustRatioClassifier,
    WindRefClassifier.name: WindRefClassifier,
}


def get_classifier(name: Optional[str] = None) -> SeverityClassifier:
    """
    Instantiate a severity scheme by name.

    :param name: "gust_ratio" or "wind_ref"; defaults to config.SEVERITY_SCHEME
    :raises ValueError: For unknown scheme names
    """
    name = name or config.SEVERITY_SCHEME
    try:
        return CLASSIFIERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown severity scheme: {name!r} (expected one of {sorted(CLASSIFIERS)})"
        ) from None


def calculate_wind_variations(
    observations: Sequence[Observation],
    now: datetime,
    scheme: Optional[str] = None,
    window: timedelta = config.OBSERVATION_WINDOW,
    ignore_recency: bool = False,
) -> Optional[WindVariationResult]:
    """
    Filter observations to the recent window and classify them.

    :param observations: Observations in any order
    :param now: Reference time for the window
    :param scheme: Severity scheme name, defaults to configuration
    :param window: Observation window length
    :param ignore_recency: Debug override, see select_recent_valid
    :return: WindVariationResult or None when no recent valid observations exist
    """
    classifier = get_classifier(scheme)
    recent = select_recent_valid(observations, now, window, ignore_recency)
    if not recent:
        logger.warning("No recent observations with wind data available")
        return None

    result = classifier.classify(recent)
    logger.debug(f"Wind variations ({classifier.name}): {result}")
    return result
