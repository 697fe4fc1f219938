"""Named formulas for composite metrics.

Each formula declares the FRED series it depends on and is evaluated on one
date at a time with a mapping of series ID to value. Units follow FRED:
GFDEBTN and TOTRESNS are in millions of dollars, FGRECPT and A091RC1Q027SBEA
in billions, GS10 and A191RP1Q027SBEA in percent.
"""

from dataclasses import dataclass
from typing import Callable, Mapping


@dataclass(frozen=True)
class Formula:
    """A pure function over a fixed, ordered set of dependency series."""

    name: str
    dependencies: tuple[str, ...]
    func: Callable[[Mapping[str, float]], float]

    def __call__(self, values: Mapping[str, float]) -> float:
        if set(values) != set(self.dependencies):
            raise ValueError(
                f"Formula {self.name} expects {list(self.dependencies)}, "
                f"got {sorted(values)}"
            )
        return float(self.func(values))


FORMULAS: dict[str, Formula] = {}


def register_formula(name: str, dependencies: tuple[str, ...]):
    """Decorator adding a formula to the registry."""
    if len(dependencies) < 2:
        raise ValueError(f"Formula {name} needs at least two dependencies")

    def decorator(func: Callable[[Mapping[str, float]], float]) -> Formula:
        formula = Formula(name=name, dependencies=tuple(dependencies), func=func)
        FORMULAS[name] = formula
        return formula

    return decorator


def get_formula(name: str) -> Formula:
    try:
        return FORMULAS[name]
    except KeyError:
        raise KeyError(f"Unknown formula: {name}") from None


@register_formula("debt_to_revenue", ("GFDEBTN", "FGRECPT"))
def debt_to_revenue(v: Mapping[str, float]) -> float:
    """Federal debt as a multiple of annual receipts."""
    return (v["GFDEBTN"] / 1000) / v["FGRECPT"]


@register_formula("debt_service_to_revenue", ("A091RC1Q027SBEA", "FGRECPT"))
def debt_service_to_revenue(v: Mapping[str, float]) -> float:
    """Interest payments as a percent of receipts."""
    return v["A091RC1Q027SBEA"] / v["FGRECPT"] * 100


@register_formula("rate_vs_growth", ("GS10", "A191RP1Q027SBEA"))
def rate_vs_growth(v: Mapping[str, float]) -> float:
    """10-year rate minus nominal GDP growth (r - g)."""
    return v["GS10"] - v["A191RP1Q027SBEA"]


@register_formula("debt_to_reserves", ("GFDEBTN", "TOTRESNS"))
def debt_to_reserves(v: Mapping[str, float]) -> float:
    return v["GFDEBTN"] / v["TOTRESNS"]
