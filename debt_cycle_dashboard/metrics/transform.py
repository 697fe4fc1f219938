"""Post-process raw series into the representation a metric displays."""

from datetime import date
from typing import Iterable

import pandas as pd

from debt_cycle_dashboard.metrics.catalog import get_definition
from debt_cycle_dashboard.models.metrics import MetricDefinition, Transform
from debt_cycle_dashboard.models.series import Observation, sort_observations


TIMEFRAME_YEARS: dict[str, int | None] = {
    "all": None,
    "1y": 1,
    "5y": 5,
    "10y": 10,
    "20y": 20,
}


def annual_percent_change(observations: Iterable[Observation]) -> list[Observation]:
    """
    Year-over-year percent change.

    Each observation is compared with the one at the same month and day one
    year earlier. Pairs without a prior-year value, or whose prior value is
    zero, are skipped. Values are rounded to 2 decimals.
    """
    ordered = sort_observations(observations)
    if len(ordered) < 2:
        return []

    by_date = {obs.date: obs.value for obs in ordered}
    results = []

    for current_date, current in by_date.items():
        try:
            prior_date = current_date.replace(year=current_date.year - 1)
        except ValueError:
            # Feb 29 has no counterpart in the prior year
            continue

        prior = by_date.get(prior_date)
        if prior is None or prior == 0:
            continue

        change = (current - prior) / prior * 100
        results.append(Observation(current_date, round(change, 2)))

    return results


def transform(
    observations: Iterable[Observation], metric: MetricDefinition | str
) -> list[Observation]:
    """Apply the metric's transform; identity for level metrics."""
    definition = get_definition(metric) if isinstance(metric, str) else metric

    if definition is not None and definition.transform is Transform.YOY_PERCENT:
        return annual_percent_change(observations)

    return sort_observations(observations)


def filter_timeframe(
    observations: Iterable[Observation], timeframe: str = "all", today: date | None = None
) -> list[Observation]:
    """Keep observations within the trailing timeframe ("all", "1y", "5y", ...)."""
    if timeframe not in TIMEFRAME_YEARS:
        raise ValueError(
            f"Unknown timeframe {timeframe!r}, expected one of {list(TIMEFRAME_YEARS)}"
        )

    ordered = sort_observations(observations)
    years = TIMEFRAME_YEARS[timeframe]
    if years is None:
        return ordered

    cutoff = (pd.Timestamp(today or date.today()) - pd.DateOffset(years=years)).date()
    return [obs for obs in ordered if obs.date >= cutoff]
