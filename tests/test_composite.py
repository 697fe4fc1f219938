from __future__ import annotations

import threading
from datetime import date

import pytest

from debt_cycle_dashboard.metrics.composite import CompositeEngine, align_and_apply
from debt_cycle_dashboard.metrics.formulas import FORMULAS, Formula, get_formula
from debt_cycle_dashboard.models.series import Observation


def _obs(*pairs: tuple[str, float]) -> list[Observation]:
    return [Observation(date.fromisoformat(d), v) for d, v in pairs]


class _StubFetcher:
    def __init__(self, data: dict[str, list[Observation]], failing: set[str] | None = None) -> None:
        self.data = data
        self.failing = failing or set()
        self.calls: list[str] = []

    def fetch(self, series_id: str) -> list[Observation]:
        self.calls.append(series_id)
        if series_id in self.failing:
            raise RuntimeError(f"{series_id} exploded")
        return self.data.get(series_id, [])


class _BarrierFetcher(_StubFetcher):
    """Blocks each fetch until every dependency fetch has started."""

    def __init__(self, data: dict[str, list[Observation]]) -> None:
        super().__init__(data)
        self.barrier = threading.Barrier(len(data))

    def fetch(self, series_id: str) -> list[Observation]:
        self.barrier.wait(timeout=5)
        return super().fetch(series_id)


def test_worked_example_formulas() -> None:
    assert get_formula("debt_to_revenue")({"GFDEBTN": 25_000_000, "FGRECPT": 4000}) == 6.25
    assert get_formula("debt_service_to_revenue")(
        {"A091RC1Q027SBEA": 500, "FGRECPT": 4000}
    ) == 12.5
    assert get_formula("rate_vs_growth")({"GS10": 4.5, "A191RP1Q027SBEA": 3.5}) == 1.0
    assert get_formula("debt_to_reserves")({"GFDEBTN": 30_000_000, "TOTRESNS": 40_000}) == 750.0


def test_formula_checks_arity() -> None:
    formula = get_formula("debt_to_revenue")

    with pytest.raises(ValueError):
        formula({"GFDEBTN": 1.0})
    with pytest.raises(ValueError):
        formula({"GFDEBTN": 1.0, "FGRECPT": 2.0, "GS10": 3.0})


def test_unknown_formula_raises() -> None:
    with pytest.raises(KeyError):
        get_formula("nope")


def test_every_formula_has_at_least_two_dependencies() -> None:
    assert set(FORMULAS) == {
        "debt_to_revenue",
        "debt_service_to_revenue",
        "rate_vs_growth",
        "debt_to_reserves",
    }
    assert all(len(f.dependencies) >= 2 for f in FORMULAS.values())


def test_full_coverage_yields_computed_point() -> None:
    result = align_and_apply(
        {
            "GFDEBTN": _obs(("2020-01-01", 25_000_000)),
            "FGRECPT": _obs(("2020-01-01", 4000)),
        },
        get_formula("debt_to_revenue"),
    )

    assert result == _obs(("2020-01-01", 6.25))


def test_partial_coverage_excludes_date() -> None:
    result = align_and_apply(
        {
            "GFDEBTN": _obs(("2020-01-01", 25_000_000)),
            "FGRECPT": _obs(("2020-04-01", 4000)),
        },
        get_formula("debt_to_revenue"),
    )

    assert result == []


def test_alignment_keeps_only_common_dates_sorted() -> None:
    result = align_and_apply(
        {
            "GS10": _obs(("2020-07-01", 0.6), ("2020-01-01", 1.8), ("2020-02-01", 1.5), ("2020-04-01", 0.7)),
            "A191RP1Q027SBEA": _obs(("2020-04-01", -30.1), ("2020-01-01", -3.4), ("2020-07-01", 37.9)),
        },
        get_formula("rate_vs_growth"),
    )

    assert result == _obs(("2020-01-01", 5.2), ("2020-04-01", 30.8), ("2020-07-01", -37.3))


def test_failing_evaluation_skips_only_that_date() -> None:
    result = align_and_apply(
        {
            "GFDEBTN": _obs(("2020-01-01", 25_000_000), ("2020-04-01", 26_000_000)),
            "FGRECPT": _obs(("2020-01-01", 0), ("2020-04-01", 4000)),
        },
        get_formula("debt_to_revenue"),
    )

    assert result == _obs(("2020-04-01", 6.5))


def test_missing_dependency_key_yields_nothing() -> None:
    result = align_and_apply(
        {"GFDEBTN": _obs(("2020-01-01", 25_000_000))},
        get_formula("debt_to_revenue"),
    )

    assert result == []


def test_results_are_rounded_to_two_decimals() -> None:
    formula = Formula("thirds", ("A", "B"), lambda v: v["A"] / v["B"])

    result = align_and_apply(
        {"A": _obs(("2021-01-01", 1)), "B": _obs(("2021-01-01", 3))}, formula
    )

    assert result == _obs(("2021-01-01", 0.33))


def test_engine_fetches_every_dependency() -> None:
    fetcher = _StubFetcher(
        {
            "A091RC1Q027SBEA": _obs(("2020-01-01", 500)),
            "FGRECPT": _obs(("2020-01-01", 4000)),
        }
    )

    result = CompositeEngine(fetcher).compute("debt_service_to_revenue")

    assert result == _obs(("2020-01-01", 12.5))
    assert sorted(fetcher.calls) == ["A091RC1Q027SBEA", "FGRECPT"]


def test_engine_survives_a_failing_dependency() -> None:
    fetcher = _StubFetcher({"GFDEBTN": _obs(("2020-01-01", 25_000_000))}, failing={"FGRECPT"})

    result = CompositeEngine(fetcher).compute(get_formula("debt_to_revenue"))

    assert result == []
    assert sorted(fetcher.calls) == ["FGRECPT", "GFDEBTN"]


def test_engine_fetches_dependencies_concurrently() -> None:
    fetcher = _BarrierFetcher(
        {
            "GFDEBTN": _obs(("2020-01-01", 25_000_000)),
            "FGRECPT": _obs(("2020-01-01", 4000)),
        }
    )

    result = CompositeEngine(fetcher).compute("debt_to_revenue")

    assert not fetcher.barrier.broken
    assert result == _obs(("2020-01-01", 6.25))
