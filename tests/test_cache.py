from __future__ import annotations

import sqlite3
from datetime import date, datetime
from pathlib import Path

import pytest

from debt_cycle_dashboard.data.cache import DataCache
from debt_cycle_dashboard.models.series import Observation, SeriesMetadata


def _metadata(series_id: str = "UNRATE") -> SeriesMetadata:
    return SeriesMetadata(
        series_id=series_id,
        name="Unemployment Rate",
        description="Civilian Unemployment Rate",
        unit="%",
        frequency="Monthly",
    )


def test_put_then_get_returns_exactly_the_new_observations(tmp_path: Path) -> None:
    cache = DataCache(tmp_path / "cache.db")
    first = [
        Observation(date(2020, 1, 1), 3.5),
        Observation(date(2020, 2, 1), 3.6),
        Observation(date(2020, 3, 1), 4.4),
    ]
    second = [
        Observation(date(2021, 2, 1), 6.2),
        Observation(date(2021, 1, 1), 6.4),
    ]

    cache.put("UNRATE", first, _metadata())
    assert cache.get("UNRATE") == first
    assert cache.count("UNRATE") == 3

    cache.put("UNRATE", second, _metadata())
    assert cache.get("UNRATE") == [
        Observation(date(2021, 1, 1), 6.4),
        Observation(date(2021, 2, 1), 6.2),
    ]
    assert cache.count("UNRATE") == 2


def test_get_unknown_series_is_none(tmp_path: Path) -> None:
    cache = DataCache(tmp_path / "cache.db")

    assert cache.get("NOPE") is None
    assert cache.count("NOPE") == 0
    assert cache.get_last_fetched("NOPE") is None
    assert cache.get_freshness("NOPE") is None
    assert cache.get_metadata("NOPE") is None


def test_put_records_metadata_and_fetch_time(tmp_path: Path) -> None:
    cache = DataCache(tmp_path / "cache.db")
    fetched_at = datetime(2024, 5, 1, 12, 30)

    cache.put("UNRATE", [Observation(date(2024, 4, 1), 3.9)], _metadata(), fetched_at)

    assert cache.get_last_fetched("UNRATE") == fetched_at
    assert cache.get_freshness("UNRATE").last_fetched_at == fetched_at
    meta = cache.get_metadata("UNRATE")
    assert meta.name == "Unemployment Rate"
    assert meta.unit == "%"


def test_series_are_isolated_and_duplicates_collapse(tmp_path: Path) -> None:
    cache = DataCache(tmp_path / "cache.db")
    cache.put("UNRATE", [Observation(date(2020, 1, 1), 3.5)], _metadata())
    cache.put(
        "DFF",
        [Observation(date(2020, 1, 1), 1.5), Observation(date(2020, 1, 1), 1.55)],
        _metadata("DFF"),
    )

    assert cache.get("DFF") == [Observation(date(2020, 1, 1), 1.55)]
    assert cache.get("UNRATE") == [Observation(date(2020, 1, 1), 3.5)]


def test_get_filters_by_date_range(tmp_path: Path) -> None:
    cache = DataCache(tmp_path / "cache.db")
    cache.put(
        "UNRATE",
        [Observation(date(2020, m, 1), float(m)) for m in range(1, 7)],
        _metadata(),
    )

    subset = cache.get("UNRATE", start_date=date(2020, 2, 1), end_date=date(2020, 4, 1))

    assert [obs.date.month for obs in subset] == [2, 3, 4]


def test_cache_status_summarises_series(tmp_path: Path) -> None:
    cache = DataCache(tmp_path / "cache.db")
    cache.put(
        "UNRATE",
        [Observation(date(2020, 1, 1), 3.5), Observation(date(2020, 2, 1), 3.6)],
        _metadata(),
    )

    status = cache.get_cache_status()

    assert status["UNRATE"]["observation_count"] == 2
    assert status["UNRATE"]["first_date"] == "2020-01-01"
    assert status["UNRATE"]["last_date"] == "2020-02-01"
    assert status["UNRATE"]["name"] == "Unemployment Rate"


def test_failed_put_keeps_previous_contents(tmp_path: Path) -> None:
    cache = DataCache(tmp_path / "cache.db")
    first_fetch = datetime(2024, 1, 1)
    cache.put("UNRATE", [Observation(date(2020, 1, 1), 1.0)], _metadata(), first_fetch)

    broken = _metadata()
    broken.name = object()

    with pytest.raises(sqlite3.Error):
        cache.put(
            "UNRATE",
            [Observation(date(2021, 1, 1), 2.0), Observation(date(2021, 2, 1), 3.0)],
            broken,
            datetime(2024, 2, 1),
        )

    assert cache.get("UNRATE") == [Observation(date(2020, 1, 1), 1.0)]
    assert cache.count("UNRATE") == 1
    assert cache.get_last_fetched("UNRATE") == first_fetch
    assert cache.get_metadata("UNRATE").name == "Unemployment Rate"
