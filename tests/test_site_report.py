"""
Tests for the site report CLI.
"""

import unittest.mock as mock
from datetime import timedelta

import pandas as pd
import pytest

from jumpweather.cli.site_report import (
    build_report,
    format_report,
    format_upper_air,
    main,
)
from jumpweather.models.weather import CloudLayer, Metar, Observation, ObservationSource

OBSERVATIONS_CSV = (
    "time,direction,speed,gust,temperature,dew_point\n"
    "2024-06-01T12:00:00Z,265,4.0,10.0,18.0,10.0\n"
    "2024-06-01T11:50:00Z,275,4.0,8.0,17.5,10.0\n"
    "2024-06-01T10:00:00Z,90,2.0,3.0,15.0,10.0\n"
)


@pytest.fixture
def observations_csv(tmp_path):
    path = tmp_path / "obs.csv"
    path.write_text(OBSERVATIONS_CSV)
    return str(path)


class TestBuildReport:
    """Test build_report."""

    def test_full_report(self, now, make_obs):
        observations = [
            make_obs(direction=265, speed=4.0, gust=10.0, temperature=18.0, dew_point=10.0),
            make_obs(direction=275, speed=4.0, gust=8.0, minutes_ago=10),
        ]
        forecasts = [
            Observation(
                time=now + timedelta(minutes=30), gust=12.0, source=ObservationSource.FORECAST
            )
        ]

        report = build_report(observations, forecasts, now, scheme="gust_ratio")

        assert report["latest"] == observations[0]
        assert report["warning_level"] == "warning"
        assert report["has_wind_observations"]
        assert report["wind_variations"].color == "red"
        assert report["wind_variations"].extra_width == 20
        assert report["cloud_base"] == 1000
        assert report["gust_trend"] == 2.0
        assert report["trend_arrow"] == "↑"

    def test_no_data(self, now):
        report = build_report([], [], now)
        assert report["latest"] is None
        assert report["wind_variations"] is None
        assert report["cloud_base"] is None
        assert report["gust_trend"] is None
        assert report["warning_level"] == "ok"

    def test_metar_fallback_and_clouds(self, now, make_obs):
        """Without valid station wind the newest METAR supplies wind and clouds."""
        station = make_obs(direction=None, temperature=14.0, dew_point=10.0)
        metar = Metar(
            time=now,
            wind_direction=240,
            wind_speed_kt=10,
            wind_gust_kt=20,
            raw="METAR EFTP 011200Z 24010G20KT 9999 SCT015 15/10 Q1012",
            clouds=(CloudLayer("SCT", 15.0),),
        )

        report = build_report([station], [], now, metars=[metar])

        assert report["latest"].source == ObservationSource.METAR
        assert report["metar"] == metar
        assert report["clouds"] == ["Scattered 457 m"]
        assert report["cloud_base"] == 500
        lines = format_report(report)
        assert "🌥️  Clouds (12:00): Scattered 457 m" in lines

    def test_no_metars(self, now, make_obs):
        report = build_report([make_obs()], [], now)
        assert report["metar"] is None
        assert report["clouds"] is None
        assert not any("Clouds" in line for line in format_report(report))

    def test_no_data_lines(self, now):
        lines = format_report(build_report([], [], now))
        assert "❌ No wind observations." in lines
        assert "🧭 Wind variations: no data" in lines


class TestFormatReport:
    """Test format_report."""

    def test_lines(self, now, make_obs):
        report = build_report([make_obs(temperature=14.0, dew_point=10.0)], [], now, scheme="wind_ref")
        lines = format_report(report, name="Test DZ")

        assert lines[0] == "📍 Test DZ"
        assert "Gust 6.0 m/s (ok)" in lines[1]
        assert "W at 12:00" in lines[1]
        assert "[wind_ref, grade" in lines[2]
        assert lines[3] == "☁️  Cloud base ~500 m"
        assert lines[4] == "📈 Gust trend → +0.0 m/s"


class TestFormatUpperAir:
    """Test format_upper_air."""

    def test_empty(self):
        assert format_upper_air(pd.DataFrame()) == ["🎈 Upper air: no data"]

    def test_rows(self):
        table = pd.DataFrame(
            [
                {"day_offset": 0, "slot": 9, "pressure_hpa": 850, "height_m": 1500,
                 "speed": 9.6, "direction": 250.2, "speed_class": "wind-medium"},
                {"day_offset": 1, "slot": 9, "pressure_hpa": 850, "height_m": 1500,
                 "speed": 4.0, "direction": 180.0, "speed_class": "wind-low"},
            ]
        )
        lines = format_upper_air(table)
        assert lines[1] == "  today 09:00  1500m 10@250"
        assert lines[2] == "  +1d 09:00  1500m 4@180"


class TestMain:
    """Test the CLI entry point."""

    def test_observations_file(self, observations_csv, capsys):
        code = main(
            ["--observations", observations_csv, "--now", "2024-06-01T12:05:00Z", "--name", "Utti"]
        )
        out = capsys.readouterr().out

        assert code == 0
        assert "📍 Utti" in out
        assert "Gust 10.0 m/s (warning)" in out
        # The 10:00 observation is outside the window
        assert "range 10°" in out
        assert "color red" in out
        assert "Cloud base ~1000 m" in out
        assert "Gust trend" in out

    def test_mock(self, capsys):
        code = main(["--mock", "--scheme", "wind_ref"])
        out = capsys.readouterr().out
        assert code == 0
        assert "grade 3" in out

    def test_override(self, observations_csv, capsys):
        main(
            [
                "--observations", observations_csv,
                "--now", "2024-06-01T12:05:00Z",
                "--gust", "12",
            ]
        )
        assert "Gust 12.0 m/s (danger)" in capsys.readouterr().out

    def test_forecast_file(self, observations_csv, tmp_path, capsys):
        forecast = tmp_path / "fc.csv"
        forecast.write_text("time,gust\n2024-06-01T12:30:00Z,7.0\n")
        main(
            [
                "--observations", observations_csv,
                "--forecast", str(forecast),
                "--now", "2024-06-01T12:05:00Z",
            ]
        )
        assert "Gust trend ↓ -3.0 m/s" in capsys.readouterr().out

    def test_metars_file(self, observations_csv, tmp_path, capsys):
        metars = tmp_path / "metars.csv"
        metars.write_text(
            "time,wind_direction,wind_speed_kt,wind_gust_kt,raw\n"
            "2024-06-01T11:50:00Z,270,8,,METAR EFTP 011150Z 27008KT CAVOK 18/10 Q1012\n"
        )
        code = main(
            [
                "--observations", observations_csv,
                "--metars", str(metars),
                "--now", "2024-06-01T12:05:00Z",
            ]
        )
        assert code == 0
        assert "Clouds (11:50): No clouds below 1500 m (CAVOK)" in capsys.readouterr().out

    @mock.patch("jumpweather.cli.site_report.open_meteo_client.get_upper_air")
    @mock.patch("jumpweather.cli.site_report.open_meteo_client.get_surface_forecast")
    def test_coordinates(self, mock_surface, mock_upper, observations_csv, capsys):
        mock_surface.return_value = []
        mock_upper.return_value = pd.DataFrame()

        code = main(
            [
                "--observations", observations_csv,
                "--coordinates", "61.44,23.85",
                "--now", "2024-06-01T12:05:00Z",
            ]
        )

        assert code == 0
        mock_surface.assert_called_once_with(61.44, 23.85)
        mock_upper.assert_called_once_with(61.44, 23.85)
        assert "Upper air: no data" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        code = main(["--observations", str(tmp_path / "nope.csv")])
        assert code == 1
        assert "❌ Error" in capsys.readouterr().out

    def test_requires_input(self):
        with pytest.raises(SystemExit):
            main([])
