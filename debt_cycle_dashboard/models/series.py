"""Data models for cached FRED series."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

import pandas as pd


@dataclass(frozen=True)
class Observation:
    """Single (date, value) sample from a series."""

    date: date
    value: float

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "value": self.value}


@dataclass
class SeriesMetadata:
    """Metadata for a FRED series."""

    series_id: str
    name: str
    description: str
    unit: str
    frequency: str


@dataclass
class FreshnessRecord:
    """When a series was last fetched and stored successfully."""

    series_id: str
    last_fetched_at: datetime


def to_series(observations: Iterable[Observation]) -> pd.Series:
    """
    Convert observations to a float Series with a DatetimeIndex.

    Duplicate dates keep the last value; the index is sorted ascending.
    """
    observations = list(observations)
    if not observations:
        return pd.Series(dtype=float, index=pd.DatetimeIndex([]), name="value")

    series = pd.Series(
        [obs.value for obs in observations],
        index=pd.to_datetime([obs.date for obs in observations]),
        dtype=float,
        name="value",
    )
    series = series[~series.index.duplicated(keep="last")]
    return series.sort_index()


def from_series(series: pd.Series) -> list[Observation]:
    """Convert a date-indexed Series back to ascending observations."""
    series = series.dropna().sort_index()
    return [
        Observation(date=pd.Timestamp(idx).date(), value=float(val))
        for idx, val in series.items()
    ]


def sort_observations(observations: Iterable[Observation]) -> list[Observation]:
    """Ascending by date with unique dates (last value wins)."""
    return from_series(to_series(observations))
