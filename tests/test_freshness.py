from __future__ import annotations

from datetime import date, datetime, timedelta
from pathlib import Path

from debt_cycle_dashboard.data.cache import DataCache
from debt_cycle_dashboard.data.freshness import FreshnessPolicy
from debt_cycle_dashboard.models.series import Observation, SeriesMetadata

FETCHED_AT = datetime(2024, 6, 1, 8, 0)
META = SeriesMetadata("GS10", "10-Year Treasury Rate", "", "%", "Monthly")


def _policy(tmp_path: Path) -> FreshnessPolicy:
    return FreshnessPolicy(DataCache(tmp_path / "cache.db"), ttl=timedelta(hours=24))


def test_never_fetched_requires_fetch(tmp_path: Path) -> None:
    policy = _policy(tmp_path)

    assert policy.should_fetch("GS10") is True


def test_recent_fetch_with_data_is_fresh(tmp_path: Path) -> None:
    policy = _policy(tmp_path)
    policy.cache.put("GS10", [Observation(date(2024, 5, 1), 4.5)], META, FETCHED_AT)

    now = FETCHED_AT + timedelta(hours=23)
    assert policy.should_fetch("GS10", now) is False
    assert policy.should_fetch("GS10", now) is False
    assert policy.is_fresh("GS10", now) is True


def test_expired_ttl_requires_fetch(tmp_path: Path) -> None:
    policy = _policy(tmp_path)
    policy.cache.put("GS10", [Observation(date(2024, 5, 1), 4.5)], META, FETCHED_AT)

    assert policy.should_fetch("GS10", FETCHED_AT + timedelta(hours=25)) is True


def test_timestamp_without_observations_requires_fetch(tmp_path: Path) -> None:
    policy = _policy(tmp_path)
    policy.cache.put("GS10", [], META, FETCHED_AT)

    assert policy.cache.get_last_fetched("GS10") == FETCHED_AT
    assert policy.should_fetch("GS10", FETCHED_AT + timedelta(minutes=5)) is True


def test_ttl_is_configurable(tmp_path: Path) -> None:
    policy = FreshnessPolicy(DataCache(tmp_path / "cache.db"), ttl=timedelta(hours=1))
    policy.cache.put("GS10", [Observation(date(2024, 5, 1), 4.5)], META, FETCHED_AT)

    assert policy.should_fetch("GS10", FETCHED_AT + timedelta(minutes=30)) is False
    assert policy.should_fetch("GS10", FETCHED_AT + timedelta(hours=2)) is True
