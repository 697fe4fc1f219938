"""Metric catalog, transforms, composites and assembly."""

from debt_cycle_dashboard.metrics.assembler import MetricAssembler
from debt_cycle_dashboard.metrics.composite import CompositeEngine

__all__ = ["MetricAssembler", "CompositeEngine"]
