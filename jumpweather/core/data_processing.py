"""data_processing.py
Conversions between observation tables (pandas DataFrames, CSV files) and
Observation lists used by the indicator functions.
"""

from pathlib import Path
from typing import List, Sequence, Union

import numpy as np
import pandas as pd

from jumpweather import config
from jumpweather.core.metar import parse_cloud_layers
from jumpweather.models.weather import Metar, Observation, ObservationSource
from jumpweather.utils.log_util import app_logger

logger = app_logger(__name__)

OBSERVATION_COLUMNS = [
    "time",
    "direction",
    "speed",
    "gust",
    "temperature",
    "dew_point",
    "source",
]
NUMERIC_COLUMNS = ["direction", "speed", "gust", "temperature", "dew_point"]
WIND_COLUMNS = ["direction", "speed", "gust"]

METAR_COLUMNS = [
    "time",
    "wind_direction",
    "wind_speed_kt",
    "wind_gust_kt",
    "temperature",
    "dew_point",
    "raw",
]

# Column spellings found in upstream exports
COLUMN_ALIASES = {
    "dewPoint": "dew_point",
    "winddir": "direction",
    "windspeed": "speed",
    "windgust": "gust",
}


def _optional(value) -> Union[float, None]:
    return None if pd.isna(value) else float(value)


def normalize_observation_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Clean an observation table.

    Renames known column aliases, parses ``time`` as UTC, coerces numeric
    columns and turns the legacy -1 "unknown" marker in wind columns into NaN.

    :param df: Raw observation table with at least a ``time`` column
    :return: New DataFrame with every column of OBSERVATION_COLUMNS except source
    :raises ValueError: If the ``time`` column is missing
    """
    frame = df.rename(columns=COLUMN_ALIASES)
    if "time" not in frame.columns:
        raise ValueError("Missing required columns: ['time']")

    frame = frame.copy()
    frame["time"] = pd.to_datetime(frame["time"], utc=True)

    for col in NUMERIC_COLUMNS:
        if col not in frame.columns:
            frame[col] = np.nan
        frame[col] = pd.to_numeric(frame[col], errors="coerce").astype(float)

    for col in WIND_COLUMNS:
        frame[col] = frame[col].mask(frame[col] == config.UNKNOWN_SENTINEL)

    return frame


def observations_from_frame(
    df: pd.DataFrame, source: str = ObservationSource.FMI
) -> List[Observation]:
    """
    Convert an observation table to Observation objects.

    :param df: Observation table, see normalize_observation_frame
    :param source: Provenance tag for rows without a ``source`` value
    :return: Observations in table order
    """
    if df.empty:
        return []

    frame = normalize_observation_frame(df)
    has_source = "source" in frame.columns

    observations = []
    for row in frame.itertuples(index=False):
        row_source = row.source if has_source else None
        observations.append(
            Observation(
                time=row.time.to_pydatetime(),
                direction=_optional(row.direction),
                speed=_optional(row.speed),
                gust=_optional(row.gust),
                temperature=_optional(row.temperature),
                dew_point=_optional(row.dew_point),
                source=row_source if isinstance(row_source, str) else source,
            )
        )
    return observations


def observations_to_frame(observations: Sequence[Observation]) -> pd.DataFrame:
    """
    Convert observations to a DataFrame, newest first.

    :param observations: Observations in any order
    :return: DataFrame with OBSERVATION_COLUMNS
    """
    if not observations:
        return pd.DataFrame(columns=OBSERVATION_COLUMNS)

    df = pd.DataFrame(
        [
            {
                "time": obs.time,
                "direction": obs.direction,
                "speed": obs.speed,
                "gust": obs.gust,
                "temperature": obs.temperature,
                "dew_point": obs.dew_point,
                "source": obs.source,
            }
            for obs in observations
        ],
        columns=OBSERVATION_COLUMNS,
    )
    df["time"] = pd.to_datetime(df["time"], utc=True)
    return df.sort_values("time", ascending=False).reset_index(drop=True)


def load_observations_csv(
    path: Union[str, Path], source: str = ObservationSource.FMI
) -> List[Observation]:
    """
    Read observations from a CSV file.

    :param path: CSV path with a ``time`` column and any of the numeric columns
    :param source: Provenance tag for rows without a ``source`` value
    :return: Observations in file order
    """
    df = pd.read_csv(path)
    observations = observations_from_frame(df, source=source)
    logger.info(f"Loaded {len(observations)} observations from {path}")
    return observations


def metars_from_frame(df: pd.DataFrame) -> List[Metar]:
    """
    Convert a METAR table to Metar objects.

    Wind columns are in knots; a missing direction means variable wind. Cloud
    layers are parsed from the ``raw`` message text.

    :param df: Table with a ``time`` column and any of METAR_COLUMNS
    :return: Metars in table order
    :raises ValueError: If the ``time`` column is missing
    """
    if df.empty:
        return []
    if "time" not in df.columns:
        raise ValueError("Missing required columns: ['time']")

    frame = df.copy()
    frame["time"] = pd.to_datetime(frame["time"], utc=True)
    for col in METAR_COLUMNS[1:-1]:
        if col not in frame.columns:
            frame[col] = np.nan
        frame[col] = pd.to_numeric(frame[col], errors="coerce").astype(float)
    frame["raw"] = frame["raw"].fillna("").astype(str) if "raw" in frame.columns else ""

    return [
        Metar(
            time=row.time.to_pydatetime(),
            wind_direction=_optional(row.wind_direction),
            wind_speed_kt=_optional(row.wind_speed_kt),
            wind_gust_kt=_optional(row.wind_gust_kt),
            temperature=_optional(row.temperature),
            dew_point=_optional(row.dew_point),
            raw=row.raw,
            clouds=parse_cloud_layers(row.raw),
        )
        for row in frame[METAR_COLUMNS].itertuples(index=False)
    ]


def load_metars_csv(path: Union[str, Path]) -> List[Metar]:
    """Read METAR messages from a CSV file, see metars_from_frame."""
    df = pd.read_csv(path)
    metars = metars_from_frame(df)
    logger.info(f"Loaded {len(metars)} METAR messages from {path}")
    return metars
