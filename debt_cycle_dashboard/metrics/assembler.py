"""Resolve dashboard metrics to data, falling back to example data."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from debt_cycle_dashboard.config import Settings
from debt_cycle_dashboard.data.fred_fetcher import FredFetcher
from debt_cycle_dashboard.metrics.catalog import METRIC_DEFINITIONS
from debt_cycle_dashboard.metrics.composite import CompositeEngine
from debt_cycle_dashboard.metrics.synthetic import generate_example_data
from debt_cycle_dashboard.metrics.transform import transform
from debt_cycle_dashboard.models.metrics import ComputedMetric, MetricDefinition, Provenance


logger = logging.getLogger(__name__)

FRED_SOURCE = "Federal Reserve Economic Data (FRED)"
CALCULATED_SOURCE = "Calculated from FRED Data"
NO_MAPPING_SOURCE = "Example Data (No FRED mapping available)"
UNAVAILABLE_SOURCE = "Example Data (FRED API data unavailable)"
ERROR_SOURCE = "Example Data (Error fetching FRED data)"


class MetricAssembler:
    """
    Entry point for consumers: one ComputedMetric per metric ID.

    Composite metrics go through the CompositeEngine, direct metrics through
    the fetcher and their transform. Anything that yields no data, or fails,
    is replaced by example data tagged ``Provenance.SYNTHETIC_FALLBACK``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        fetcher: FredFetcher | None = None,
        rng: np.random.Generator | None = None,
        definitions: list[MetricDefinition] | None = None,
        max_workers: int = 4,
    ) -> None:
        self.settings = settings or Settings()
        self.fetcher = fetcher or FredFetcher(self.settings)
        self.engine = CompositeEngine(self.fetcher, max_workers=max_workers)
        self.definitions = definitions if definitions is not None else METRIC_DEFINITIONS
        self.max_workers = max_workers
        self._by_id = {d.id: d for d in self.definitions}
        self._rng = rng or np.random.default_rng()
        self._rng_lock = threading.Lock()

    def _fallback(self, definition: MetricDefinition, source: str) -> ComputedMetric:
        logger.warning(f"Using example data for {definition.id}: {source}")
        with self._rng_lock:
            data = generate_example_data(definition, rng=self._rng)
        return ComputedMetric(definition, data, Provenance.SYNTHETIC_FALLBACK, source)

    def _resolve(self, definition: MetricDefinition) -> ComputedMetric:
        if definition.is_composite:
            data = self.engine.compute(definition.formula)
            if not data:
                return self._fallback(definition, UNAVAILABLE_SOURCE)
            return ComputedMetric(definition, data, Provenance.CALCULATED, CALCULATED_SOURCE)

        if not definition.series_id:
            return self._fallback(definition, NO_MAPPING_SOURCE)

        result = self.fetcher.fetch_result(definition.series_id)
        data = transform(result.observations, definition)
        if not data:
            return self._fallback(definition, UNAVAILABLE_SOURCE)

        return ComputedMetric(
            definition, data, result.provenance, f"{FRED_SOURCE} - {definition.series_id}"
        )

    def get_metric(self, metric_id: str) -> ComputedMetric | None:
        """Resolve one metric; None only for IDs outside the catalog."""
        definition = self._by_id.get(metric_id)
        if definition is None:
            logger.warning(f"Unknown metric {metric_id}")
            return None

        try:
            return self._resolve(definition)
        except Exception as e:
            logger.error(f"Error fetching data for metric {metric_id}: {e}")
            return self._fallback(definition, ERROR_SOURCE)

    def get_all_metrics(self) -> list[ComputedMetric]:
        """Resolve every catalog metric, in catalog order."""
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(self.get_metric, [d.id for d in self.definitions]))


def main() -> None:
    """CLI entry point: print a summary line per metric."""
    import argparse

    from debt_cycle_dashboard.metrics.catalog import CATEGORIES, metrics_by_category
    from debt_cycle_dashboard.metrics.transform import TIMEFRAME_YEARS, filter_timeframe

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Show debt cycle metrics")
    parser.add_argument("--metric", type=str, help="Show a single metric")
    parser.add_argument("--category", choices=CATEGORIES, help="Filter by category")
    parser.add_argument(
        "--timeframe", choices=list(TIMEFRAME_YEARS), default="all",
        help="Trailing window to summarise",
    )
    args = parser.parse_args()

    definitions = metrics_by_category(args.category) if args.category else None
    assembler = MetricAssembler(definitions=definitions)

    try:
        if args.metric:
            metric = assembler.get_metric(args.metric)
            if metric is None:
                print(f"Unknown metric: {args.metric}")
                print(f"Available: {', '.join(d.id for d in assembler.definitions)}")
                return
            metrics = [metric]
        else:
            metrics = assembler.get_all_metrics()

        print(f"\n{'Metric':30} | {'Provenance':18} | {'Points':>6} | Latest")
        print("-" * 80)
        for metric in metrics:
            data = filter_timeframe(metric.observations, args.timeframe)
            latest = f"{data[-1].value:.2f} ({data[-1].date})" if data else "N/A"
            print(f"{metric.id:30} | {metric.provenance.value:18} | {len(data):6} | {latest}")
    finally:
        assembler.fetcher.close()


if __name__ == "__main__":
    main()
