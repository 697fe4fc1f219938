from __future__ import annotations

from datetime import date

import numpy as np
import pytest

from debt_cycle_dashboard.metrics.catalog import METRIC_DEFINITIONS, get_definition
from debt_cycle_dashboard.metrics.synthetic import generate_example_data
from debt_cycle_dashboard.models.metrics import MetricDefinition, MetricKind

TODAY = date(2024, 6, 15)


@pytest.mark.parametrize("definition", METRIC_DEFINITIONS, ids=lambda d: d.id)
def test_values_stay_in_band(definition: MetricDefinition) -> None:
    data = generate_example_data(definition, rng=np.random.default_rng(7), today=TODAY)
    low, high = definition.band

    assert data
    assert all(low <= obs.value <= high for obs in data)
    assert all(round(obs.value, 2) == obs.value for obs in data)


def test_same_seed_same_series() -> None:
    definition = get_definition("unemployment")

    first = generate_example_data(definition, rng=np.random.default_rng(42), today=TODAY)
    second = generate_example_data(definition, rng=np.random.default_rng(42), today=TODAY)

    assert first == second


def test_monthly_window_is_ascending_and_ends_today() -> None:
    data = generate_example_data(
        get_definition("unemployment"), rng=np.random.default_rng(1), today=TODAY
    )
    dates = [obs.date for obs in data]

    assert dates[0] == date(2014, 1, 1)
    assert dates[-1] == date(2024, 6, 1)
    assert dates == sorted(set(dates))


def test_quarterly_metrics_use_quarter_starts() -> None:
    data = generate_example_data(
        get_definition("debt-to-gdp"), rng=np.random.default_rng(1), today=TODAY
    )

    assert {obs.date.month for obs in data} == {1, 4, 7, 10}
    assert data[-1].date == date(2024, 4, 1)


def test_up_pattern_trends_upward() -> None:
    definition = MetricDefinition(
        id="rising",
        title="Rising",
        description="",
        unit="",
        category="financial",
        kind=MetricKind.DIRECT,
        band=(0, 1000),
        pattern="up",
    )

    data = generate_example_data(definition, rng=np.random.default_rng(3), today=TODAY)

    assert data[-1].value > data[0].value + 500
