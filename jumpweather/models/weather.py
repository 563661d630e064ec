"""
Weather data models and type definitions.

This module provides type-safe data structures for the observations, forecasts
and derived wind indicators used throughout the application. Units are fixed:
degrees for directions, meters/second for speeds, Celsius for temperatures.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


class ObservationSource:
    """Provenance tags. Display only, never used for branching in the core."""

    FMI = "fmi"
    FORECAST = "forecast"
    METAR = "metar"
    ROAD = "road"
    OPEN_METEO = "open_meteo"
    MOCK = "mock"


@dataclass(frozen=True)
class Observation:
    """One measurement (or forecast point) at an instant."""

    time: datetime
    direction: Optional[float] = None
    speed: Optional[float] = None
    gust: Optional[float] = None
    temperature: Optional[float] = None
    dew_point: Optional[float] = None
    source: str = ObservationSource.FMI

    @property
    def has_valid_wind_data(self) -> bool:
        return (
            self.direction is not None
            and self.speed is not None
            and self.gust is not None
        )


@dataclass(frozen=True)
class WindVariationResult:
    """Wind indicators derived from a recent observation window."""

    variation_range: float
    average_direction: float
    color: str
    extra_width: int
    average_speed: float
    max_gust: float
    scheme: str
    grade: Optional[int] = None


@dataclass(frozen=True)
class CloudLayer:
    """One reported cloud layer, e.g. BKN015."""

    amount: str  # FEW, SCT, BKN, OVC
    base: float
    unit: str = "hft"


@dataclass(frozen=True)
class Metar:
    """Parsed METAR message. Wind values are in knots as reported."""

    time: datetime
    wind_direction: Optional[float] = None  # None for VRB
    wind_speed_kt: Optional[float] = None
    wind_gust_kt: Optional[float] = None
    temperature: Optional[float] = None
    dew_point: Optional[float] = None
    raw: str = ""
    clouds: Tuple[CloudLayer, ...] = ()


@dataclass(frozen=True)
class UpperAirWind:
    """Averaged wind at one pressure level."""

    pressure_hpa: int
    height_m: int
    speed: float
    direction: float
