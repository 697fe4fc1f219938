"""Example data shown when a metric cannot be loaded from FRED."""

from datetime import date

import numpy as np

from debt_cycle_dashboard.models.metrics import MetricDefinition
from debt_cycle_dashboard.models.series import Observation


TRAILING_YEARS = 10

# Noise amplitude added on top of each pattern's shape
NOISE = {
    "up": 2.5,
    "down": 2.5,
    "cycle": 1.5,
}


def _period_starts(start_year: int, end_year: int, frequency: str) -> list[date]:
    months = (1, 4, 7, 10) if frequency == "quarterly" else range(1, 13)
    return [date(year, month, 1) for year in range(start_year, end_year + 1) for month in months]


def generate_example_data(
    definition: MetricDefinition,
    rng: np.random.Generator | None = None,
    today: date | None = None,
    years: int = TRAILING_YEARS,
) -> list[Observation]:
    """
    Bounded pseudo-random series in the metric's band.

    Covers the trailing ``years`` whole years up to ``today``, quarterly or
    monthly depending on the metric. Every value is clipped to
    ``definition.band`` and rounded to 2 decimals. Pass a seeded ``rng`` for
    reproducible output.
    """
    rng = rng or np.random.default_rng()
    today = today or date.today()
    low, high = definition.band
    span = high - low

    dates = [
        d for d in _period_starts(today.year - years, today.year, definition.frequency)
        if d <= today
    ]
    n = len(dates)
    periods_per_year = 4 if definition.frequency == "quarterly" else 12
    progress = np.arange(n) / periods_per_year / (years + 1)

    noise = rng.uniform(-1, 1, size=n) * NOISE.get(definition.pattern, 0.0)
    if definition.pattern == "up":
        values = low + span * progress + noise
    elif definition.pattern == "down":
        values = high - span * progress + noise
    elif definition.pattern == "cycle":
        values = low + span / 2 + span / 2 * np.sin(progress * np.pi * 4) + noise
    else:
        values = rng.uniform(low, high, size=n)

    values = np.clip(values, low, high)
    return [Observation(d, round(float(v), 2)) for d, v in zip(dates, values)]
