"""Derive composite metrics from several FRED series aligned on date."""

import logging
import math
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Mapping

import pandas as pd

from debt_cycle_dashboard.data.fred_fetcher import FredFetcher
from debt_cycle_dashboard.metrics.formulas import Formula, get_formula
from debt_cycle_dashboard.models.series import Observation, to_series


logger = logging.getLogger(__name__)


def align_and_apply(
    dependency_data: Mapping[str, list[Observation]], formula: Formula
) -> list[Observation]:
    """
    Evaluate ``formula`` on every date where all dependencies have a value.

    Dates covered by only some dependencies are dropped; nothing is
    interpolated or carried forward. A date whose evaluation fails or yields
    a non-finite number is skipped. Values are rounded to 2 decimals.
    """
    frame = pd.concat(
        {sid: to_series(dependency_data.get(sid, [])) for sid in formula.dependencies},
        axis=1,
        join="inner",
    ).dropna(how="any")

    results = []
    for idx, row in frame.sort_index().iterrows():
        values = {sid: float(row[sid]) for sid in formula.dependencies}
        try:
            value = formula(values)
        except Exception as e:
            logger.debug(f"{formula.name} skipped {idx.date()}: {e}")
            continue

        if not math.isfinite(value):
            logger.debug(f"{formula.name} skipped {idx.date()}: non-finite result")
            continue

        results.append(Observation(idx.date(), round(value, 2)))

    return results


class CompositeEngine:
    """Fetches a formula's dependencies concurrently and combines them."""

    def __init__(self, fetcher: FredFetcher, max_workers: int = 4) -> None:
        self.fetcher = fetcher
        self.max_workers = max_workers

    def fetch_dependencies(self, formula: Formula) -> dict[str, list[Observation]]:
        """
        Fetch every dependency, waiting for all of them to settle.

        A dependency whose fetch fails contributes an empty series; it does
        not cancel the others.
        """
        results: dict[str, list[Observation]] = {}

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self.fetcher.fetch, sid): sid
                for sid in formula.dependencies
            }

            for future in as_completed(futures):
                series_id = futures[future]
                try:
                    results[series_id] = future.result()
                except Exception as e:
                    logger.error(f"Error fetching dependency {series_id}: {e}")
                    results[series_id] = []

        return results

    def compute(self, formula: Formula | str) -> list[Observation]:
        """Composite series for a formula (or registered formula name)."""
        if isinstance(formula, str):
            formula = get_formula(formula)

        dependency_data = self.fetch_dependencies(formula)
        missing = [sid for sid in formula.dependencies if not dependency_data.get(sid)]
        if missing:
            logger.warning(f"{formula.name}: no data for {missing}")
            return []

        result = align_and_apply(dependency_data, formula)
        logger.info(f"{formula.name}: {len(result)} aligned points")
        return result
