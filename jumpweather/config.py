# config.py
"""
Configurations for the jumpweather drop zone weather tooling.

This module contains the time windows, wind thresholds and color palettes that
are shared across the application, such as the severity scheme selection and
the upper-air pressure levels.
"""

import os
from datetime import timedelta

# Observations newer than this feed the wind variation indicators
OBSERVATION_WINDOW = timedelta(minutes=30)

# Forecast entries up to this far ahead feed the gust trend
GUST_TREND_HORIZON = timedelta(hours=1)
GUST_TREND_STEADY_MS = 1.0  # trends within ±1 m/s show as steady

# "gust_ratio" or "wind_ref"
SEVERITY_SCHEME = os.environ.get("JUMPWEATHER_SEVERITY_SCHEME", "gust_ratio")

# Legacy "unknown" marker found in older observation exports
UNKNOWN_SENTINEL = -1

KNOTS_TO_MS = 0.514444

# Gust ratio scheme
GUST_RATIO_MIN_GUST = 4.0  # m/s, gust must exceed this
GUST_RATIO_RED = 2.0
GUST_RATIO_ORANGE = 1.5
VARIATION_RED = 90.0  # degrees, strictly greater
VARIATION_ORANGE = 45.0

GUST_RATIO_PALETTE = ["green", "yellow", "orange", "red"]
GUST_RATIO_EXTRA_WIDTH = {
    "green": 0,
    "orange": 10,
    "red": 20,
}

# Wind reference scheme
WIND_REF_COLORS = ["#E6DB00", "#2CF000", "orange", "red", "#AC0000"]
WIND_REF_MAX_GRADE = 4
EXTRA_WIDTH_MULTIPLIER = 3
MAX_EXTRA_WIDTH = 30

SPEED_THRESHOLDS = {
    "low": 2,
    "medium": 6,
    "high": 8,
}

GUST_THRESHOLDS = {
    "low": 3,
    "medium": 4,
    "high": 7,
    "very_high": 11,
}

GUST_EXCESS_THRESHOLDS = {
    "medium": 4,
    "high": 5.5,
    "very_high": 7,
}

# Latest gust display levels (m/s)
GUST_WARNING = 8
GUST_DANGER = 11

# Cloud base
CLOUD_BASE_M_PER_DEGREE = 125
CLOUD_BASE_ROUND_TO_M = 100

# METAR cloud layers
CLOUD_AMOUNTS = {
    "FEW": "Few",
    "SCT": "Scattered",
    "BKN": "Broken",
    "OVC": "Overcast",
}
CAVOK_MESSAGE = "No clouds below 1500 m (CAVOK)"
NO_CLOUD_DATA_MESSAGE = "No cloud data"

# Upper air (pressure level, approximate height)
PRESSURE_LEVELS = [
    {"pressure": 600, "height": 4200},
    {"pressure": 700, "height": 3000},
    {"pressure": 850, "height": 1500},
    {"pressure": 925, "height": 800},
    {"pressure": 1000, "height": 110},
]
UPPER_AIR_TIME_SLOTS = [6, 9, 12, 15, 18, 21]
CANOPY_HEIGHTS_M = [110, 800]
FREE_FALL_HEIGHTS_M = [1500, 3000, 4200]
CANOPY_SPEED_CLASSES = [8, 11, 13]
FREE_FALL_SPEED_CLASSES = [8, 13, 18]
UPPER_AIR_SPEED_CLASSES = ["wind-low", "wind-medium", "wind-high", "wind-very-high"]

# Open-Meteo
OPEN_METEO_ENDPOINT = os.environ.get(
    "OPEN_METEO_ENDPOINT", "https://api.open-meteo.com/v1/forecast"
)
OPEN_METEO_TIMEOUT_S = 20
SURFACE_FORECAST_FIELDS = [
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
    "temperature_2m",
    "dew_point_2m",
]

# Local time zone used for the upper-air day tables
SITE_TIMEZONE = os.environ.get("JUMPWEATHER_TIMEZONE", "Europe/Helsinki")
