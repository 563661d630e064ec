"""
Tests for METAR cloud layers.
"""

from datetime import timedelta

from jumpweather import config
from jumpweather.core.metar import describe_clouds, latest_metar, parse_cloud_layers
from jumpweather.models.weather import CloudLayer, Metar


class TestParseCloudLayers:
    """Test parse_cloud_layers."""

    def test_layers_in_order(self):
        raw = "METAR EFTP 011220Z 27010KT 9999 FEW015 SCT025 BKN040 15/08 Q1012"
        assert parse_cloud_layers(raw) == (
            CloudLayer("FEW", 15.0, "hft"),
            CloudLayer("SCT", 25.0, "hft"),
            CloudLayer("BKN", 40.0, "hft"),
        )

    def test_convective_suffix(self):
        raw = "METAR EFUT 011220Z 25015G25KT 9999 OVC008 BKN020CB 12/10 Q1005"
        assert [layer.amount for layer in parse_cloud_layers(raw)] == ["OVC", "BKN"]
        assert parse_cloud_layers(raw)[1].base == 20.0

    def test_no_clouds(self):
        assert parse_cloud_layers("METAR EFTP 011220Z 27010KT CAVOK 15/08 Q1012") == ()
        assert parse_cloud_layers("") == ()

    def test_station_id_not_matched(self):
        """Four-letter groups that only start like a cloud amount are skipped."""
        assert parse_cloud_layers("METAR SCTX 011220Z 27010KT NSC 15/08") == ()


class TestDescribeClouds:
    """Test describe_clouds."""

    def test_layers_in_meters(self, now):
        metar = Metar(
            time=now,
            raw="METAR EFTP 011220Z 27010KT 9999 FEW015 BKN040 15/08 Q1012",
            clouds=(CloudLayer("FEW", 15.0), CloudLayer("BKN", 40.0)),
        )
        assert describe_clouds(metar) == ["Few 457 m", "Broken 1219 m"]

    def test_unknown_amount_kept(self, now):
        metar = Metar(time=now, raw="METAR", clouds=(CloudLayer("VV", 2.0),))
        assert describe_clouds(metar) == ["VV 61 m"]

    def test_cavok(self, now):
        metar = Metar(time=now, raw="METAR EFTP 011220Z 27010KT CAVOK 15/08 Q1012")
        assert describe_clouds(metar) == [config.CAVOK_MESSAGE]

    def test_no_cloud_data(self, now):
        metar = Metar(time=now, raw="SPECI EFTP 011225Z 27010KT 15/08")
        assert describe_clouds(metar) == [config.NO_CLOUD_DATA_MESSAGE]


class TestLatestMetar:
    """Test latest_metar."""

    def test_newest(self, now):
        older = Metar(time=now - timedelta(minutes=30))
        newer = Metar(time=now)
        assert latest_metar([newer, older]) == newer

    def test_empty(self):
        assert latest_metar([]) is None
