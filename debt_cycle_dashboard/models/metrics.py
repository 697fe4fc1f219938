"""Metric definitions and computed metric results."""

from dataclasses import dataclass, field
from enum import Enum

from debt_cycle_dashboard.models.series import Observation


class MetricKind(str, Enum):
    DIRECT = "direct"
    COMPOSITE = "composite"


class Transform(str, Enum):
    LEVEL = "level"
    YOY_PERCENT = "yoy_percent"


class Provenance(str, Enum):
    """Which path produced a computed metric's data."""

    LIVE_FETCH = "live-fetch"
    CACHE_HIT = "cache-hit"
    CALCULATED = "calculated-from-dependencies"
    SYNTHETIC_FALLBACK = "synthetic-fallback"


PATTERNS = ("up", "down", "cycle", "random")


@dataclass(frozen=True)
class MetricDefinition:
    """
    Static description of one dashboard metric.

    A direct metric is bound to a single FRED series (or to none, in which
    case it is always shown with example data); a composite metric is bound
    to a named formula whose dependencies are resolved from the formula
    registry. ``band`` and ``pattern`` shape the synthetic data
    shown when real data is unavailable.
    """

    id: str
    title: str
    description: str
    unit: str
    category: str
    kind: MetricKind
    band: tuple[float, float]
    pattern: str = "cycle"
    frequency: str = "monthly"
    series_id: str | None = None
    transform: Transform = Transform.LEVEL
    formula: str | None = None
    source: str = "Federal Reserve Economic Data (FRED)"
    trend_status: str = "neutral"
    trend_description: str = ""
    is_percentage: bool = False

    def __post_init__(self) -> None:
        if self.kind is MetricKind.DIRECT and self.formula:
            raise ValueError(f"Direct metric {self.id} cannot have a formula")
        if self.kind is MetricKind.COMPOSITE and not self.formula:
            raise ValueError(f"Composite metric {self.id} needs a formula")
        if self.band[0] >= self.band[1]:
            raise ValueError(f"Metric {self.id} has an empty band {self.band}")
        if self.pattern not in PATTERNS:
            raise ValueError(f"Metric {self.id} has unknown pattern {self.pattern!r}")

    @property
    def is_composite(self) -> bool:
        return self.kind is MetricKind.COMPOSITE


@dataclass
class ComputedMetric:
    """A metric definition resolved to data for one request."""

    definition: MetricDefinition
    observations: list[Observation] = field(default_factory=list)
    provenance: Provenance = Provenance.SYNTHETIC_FALLBACK
    source: str = ""

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def latest(self) -> Observation | None:
        return self.observations[-1] if self.observations else None

    @property
    def is_synthetic(self) -> bool:
        return self.provenance is Provenance.SYNTHETIC_FALLBACK

    def to_dict(self) -> dict:
        d = self.definition
        return {
            "id": d.id,
            "title": d.title,
            "description": d.description,
            "unit": d.unit,
            "category": d.category,
            "frequency": d.frequency,
            "trendStatus": d.trend_status,
            "trendDescription": d.trend_description,
            "isPercentage": d.is_percentage,
            "data": [obs.to_dict() for obs in self.observations],
            "provenance": self.provenance.value,
            "source": self.source,
        }
