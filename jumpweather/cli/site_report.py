#!/usr/bin/env python3
"""
site_report.py: Print the wind indicators for one drop zone.

Reads station observations from CSV, optionally a forecast (CSV or Open-Meteo
by coordinates) and METAR messages, and prints the latest gust, wind
variations, cloud base, gust trend, METAR cloud layers and the upper-air table.

Usage:
    python -m jumpweather.cli.site_report --observations obs.csv [--forecast fc.csv]
        [--metars metars.csv]
        [--coordinates 61.44,23.85] [--scheme gust_ratio|wind_ref] [--now 2024-05-01T12:00Z]
    python -m jumpweather.cli.site_report --mock
"""

import argparse
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
import pytz

from jumpweather import config
from jumpweather.api import open_meteo_client
from jumpweather.core.cloud_base import cloud_base_for
from jumpweather.core.data_processing import load_metars_csv, load_observations_csv
from jumpweather.core.metar import describe_clouds, latest_metar
from jumpweather.core.mock_data import mock_wind_variation_window
from jumpweather.core.observation_window import (
    has_wind_observations,
    latest_observation,
    override_latest,
)
from jumpweather.core.upper_air import build_upper_air_table
from jumpweather.core.wind_variations import CLASSIFIERS, calculate_wind_variations
from jumpweather.models.weather import Metar, Observation, ObservationSource
from jumpweather.utils.date_util import to_date, utc_now
from jumpweather.utils.log_util import app_logger
from jumpweather.utils.trend_utils import calculate_gust_trend, gust_trend_arrow
from jumpweather.utils.weather_utils import format_wind_direction, gust_warning_level

logger = app_logger(__name__)


def build_report(
    observations: Sequence[Observation],
    forecasts: Sequence[Observation],
    now: datetime,
    scheme: Optional[str] = None,
    ignore_recency: bool = False,
    metars: Sequence[Metar] = (),
) -> Dict[str, Any]:
    """
    Compute every indicator for one site.

    :param observations: Station observations
    :param forecasts: Forecast points
    :param now: Reference time
    :param scheme: Severity scheme name, defaults to configuration
    :param ignore_recency: Use all observations for the wind variations
    :param metars: METAR messages, used for clouds and as latest-wind fallback
    :return: Report dict, values are None where data is insufficient
    """
    latest = latest_observation(observations, metars)
    metar = latest_metar(metars)
    latest_gust = latest.gust if latest is not None else None

    gust_trend = None
    if latest_gust is not None:
        gust_trend = calculate_gust_trend(latest_gust, forecasts, now)

    return {
        "latest": latest,
        "warning_level": gust_warning_level(latest_gust),
        "has_wind_observations": has_wind_observations(observations),
        "wind_variations": calculate_wind_variations(
            observations, now, scheme=scheme, ignore_recency=ignore_recency
        ),
        "cloud_base": cloud_base_for(latest),
        "gust_trend": gust_trend,
        "trend_arrow": gust_trend_arrow(gust_trend) if gust_trend is not None else "",
        "metar": metar,
        "clouds": describe_clouds(metar) if metar is not None else None,
    }


def format_report(report: Dict[str, Any], name: str = "") -> List[str]:
    """Render a report dict as text lines."""
    lines = [f"📍 {name}"] if name else []

    latest = report["latest"]
    if latest is None:
        lines.append("❌ No wind observations.")
    else:
        lines.append(
            f"💨 Gust {latest.gust:.1f} m/s ({report['warning_level']}), "
            f"wind {latest.speed:.1f} m/s from {latest.direction:.0f}° "
            f"{format_wind_direction(latest.direction)} at {latest.time:%H:%M} ({latest.source})"
        )

    variations = report["wind_variations"]
    if variations is None:
        lines.append("🧭 Wind variations: no data")
    else:
        grade = f", grade {variations.grade}" if variations.grade is not None else ""
        lines.append(
            f"🧭 Wind variations: {variations.average_direction:.0f}° "
            f"±{variations.variation_range / 2:.0f}° (range {variations.variation_range:.0f}°), "
            f"color {variations.color}, width +{variations.extra_width}"
            f" [{variations.scheme}{grade}]"
        )

    if report["cloud_base"] is not None:
        lines.append(f"☁️  Cloud base ~{report['cloud_base']:.0f} m")

    if report["gust_trend"] is not None:
        lines.append(f"📈 Gust trend {report['trend_arrow']} {report['gust_trend']:+.1f} m/s")

    if report["clouds"] is not None:
        lines.append(f"🌥️  Clouds ({report['metar'].time:%H:%M}): " + ", ".join(report["clouds"]))

    return lines


def format_upper_air(table: pd.DataFrame) -> List[str]:
    """Render the upper-air table, one line per day and slot."""
    if table.empty:
        return ["🎈 Upper air: no data"]

    lines = ["🎈 Upper air (m/s @ direction)"]
    for (offset, slot), rows in table.groupby(["day_offset", "slot"]):
        day = "today" if offset == 0 else f"+{offset}d"
        cells = [
            f"{row.height_m}m {row.speed:.0f}@{row.direction:.0f}"
            for row in rows.itertuples(index=False)
        ]
        lines.append(f"  {day} {slot:02d}:00  " + "  ".join(cells))
    return lines


def load_inputs(args) -> tuple:
    """Load observations, forecasts and METARs according to the CLI arguments."""
    now = to_date(args.now) if args.now else utc_now()

    if args.mock:
        observations = mock_wind_variation_window(now)
    else:
        observations = load_observations_csv(args.observations)

    if args.gust is not None or args.speed is not None or args.direction is not None:
        observations = override_latest(observations, args.gust, args.speed, args.direction)

    forecasts: List[Observation] = []
    if args.forecast:
        forecasts = load_observations_csv(args.forecast, source=ObservationSource.FORECAST)
    elif args.coordinates:
        lat, lon = open_meteo_client.parse_coordinates(args.coordinates)
        forecasts = open_meteo_client.get_surface_forecast(lat, lon)

    metars: List[Metar] = load_metars_csv(args.metars) if args.metars else []

    return observations, forecasts, metars, now


def main(argv=None):
    parser = argparse.ArgumentParser(description="Drop zone wind indicators")
    parser.add_argument("--observations", type=str, help="Observation CSV file")
    parser.add_argument("--forecast", type=str, help="Forecast CSV file")
    parser.add_argument("--metars", type=str, help="METAR CSV file")
    parser.add_argument("--coordinates", type=str, help="Site 'lat,lon' for Open-Meteo data")
    parser.add_argument("--name", type=str, default="", help="Site name for the header")
    parser.add_argument(
        "--scheme",
        choices=sorted(CLASSIFIERS),
        default=config.SEVERITY_SCHEME,
        help="Severity scheme",
    )
    parser.add_argument("--now", type=str, help="Reference time (default: current UTC time)")
    parser.add_argument(
        "--all-observations",
        action="store_true",
        help="Debug: ignore the 30 minute window for wind variations",
    )
    parser.add_argument("--mock", action="store_true", help="Use the mock wind variation window")
    parser.add_argument("--gust", type=float, help="Override the latest gust (m/s)")
    parser.add_argument("--speed", type=float, help="Override the latest wind speed (m/s)")
    parser.add_argument("--direction", type=float, help="Override the latest direction (degrees)")
    args = parser.parse_args(argv)

    if not args.observations and not args.mock:
        parser.error("--observations is required unless --mock is given")

    try:
        observations, forecasts, metars, now = load_inputs(args)
        report = build_report(
            observations,
            forecasts,
            now,
            scheme=args.scheme,
            ignore_recency=args.all_observations,
            metars=metars,
        )
        lines = format_report(report, args.name)

        if args.coordinates:
            lat, lon = open_meteo_client.parse_coordinates(args.coordinates)
            upper = open_meteo_client.get_upper_air(lat, lon)
            today = now.astimezone(pytz.timezone(config.SITE_TIMEZONE)).date()
            lines.extend(format_upper_air(build_upper_air_table(upper, today)))
    except Exception as e:
        logger.exception(f"Failed to build site report: {e}")
        print(f"❌ Error: {e}")
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
