"""
Tests for cloud base estimation.
"""

import pytest

from jumpweather.core.cloud_base import cloud_base_for, estimate_cloud_base


class TestEstimateCloudBase:
    """Test estimate_cloud_base."""

    def test_saturated(self):
        """No spread means cloud at the surface."""
        assert estimate_cloud_base(10, 10) == 0

    def test_rounded_default(self):
        """125 m per degree, 1250 m shows as 1300 m."""
        assert estimate_cloud_base(20, 10) == 1300

    def test_raw(self):
        assert estimate_cloud_base(20, 10, round_to=None) == 1250
        assert estimate_cloud_base(20, 10, round_to=0) == 1250

    def test_fractional_spread(self):
        assert estimate_cloud_base(15.3, 11.1, round_to=None) == pytest.approx(525)
        assert estimate_cloud_base(15.3, 11.1) == 500

    def test_custom_rounding(self):
        assert estimate_cloud_base(20, 10, round_to=50) == 1250
        assert estimate_cloud_base(21, 10, round_to=500) == 1500

    def test_negative_spread(self):
        """Dew point above temperature is not an error."""
        assert estimate_cloud_base(5, 6, round_to=None) == -125


class TestCloudBaseFor:
    """Test cloud_base_for."""

    def test_from_observation(self, make_obs):
        obs = make_obs(temperature=18.0, dew_point=10.0)
        assert cloud_base_for(obs) == 1000

    def test_missing_values(self, make_obs):
        assert cloud_base_for(make_obs(temperature=18.0)) is None
        assert cloud_base_for(make_obs(dew_point=10.0)) is None
        assert cloud_base_for(None) is None
