"""
METAR cloud layers.

Cloud groups are read from the raw message (``BKN015`` is a broken layer at
1500 ft) and rendered in meters.
"""

import re
from typing import List, Optional, Sequence, Tuple

from jumpweather import config
from jumpweather.models.weather import CloudLayer, Metar
from jumpweather.utils.log_util import app_logger
from jumpweather.utils.weather_utils import to_meters

logger = app_logger(__name__)

CLOUD_GROUP = re.compile(r"\b(FEW|SCT|BKN|OVC)(\d{3})(?:CB|TCU)?(?=\s|$)")


def parse_cloud_layers(raw: str) -> Tuple[CloudLayer, ...]:
    """
    Extract the cloud layers of a raw METAR message.

    :param raw: METAR text, e.g. "METAR EFTP 011220Z 27010KT 9999 FEW015 BKN040 15/08 Q1012"
    :return: Layers in message order, bases in hundreds of feet
    """
    if not raw:
        return ()
    return tuple(
        CloudLayer(amount=amount, base=float(base), unit="hft")
        for amount, base in CLOUD_GROUP.findall(raw)
    )


def latest_metar(metars: Sequence[Metar]) -> Optional[Metar]:
    """Newest METAR, None for an empty sequence."""
    return max(metars, key=lambda m: m.time, default=None)


def describe_clouds(metar: Metar) -> List[str]:
    """
    Describe the cloud layers of one METAR for display.

    A METAR without cloud groups means no significant cloud below 1500 m.
    Other messages without layers (SPECI or unparsed text) carry no cloud data.

    :param metar: Parsed METAR
    :return: One line per layer, e.g. "Broken 457 m", or a single message line
    """
    if not metar.clouds:
        if "METAR" in metar.raw:
            return [config.CAVOK_MESSAGE]
        return [config.NO_CLOUD_DATA_MESSAGE]

    lines = []
    for layer in metar.clouds:
        name = config.CLOUD_AMOUNTS.get(layer.amount, layer.amount)
        lines.append(f"{name} {to_meters(layer.base, layer.unit):.0f} m")
    logger.debug(f"Clouds for METAR at {metar.time}: {lines}")
    return lines
