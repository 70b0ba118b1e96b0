"""Shared metric result types."""

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    HIGHER_IS_BETTER = "higher_is_better"
    LOWER_IS_BETTER = "lower_is_better"


class MetricStatus(Enum):
    """How a reported value was obtained.

    Calculators return 0 for "cannot compute"; reports tag the value so a
    measured zero and missing data are never confused.
    """

    MEASURED = "measured"
    INSUFFICIENT = "insufficient"  # not enough records, value is a sentinel
    ESTIMATED = "estimated"  # fallback estimate, low confidence
    DEFAULT = "default"  # fixed placeholder (e.g. 365-day calving interval)


@dataclass(frozen=True)
class DerivedMetric:
    """A computed KPI, built on demand and never persisted."""

    metric_name: str
    value: float
    unit: str
    target: float
    direction: Direction = Direction.HIGHER_IS_BETTER
    status: MetricStatus = MetricStatus.MEASURED
    mortality: bool = False  # scored on the stricter mortality bands

    @property
    def has_data(self) -> bool:
        return self.status is not MetricStatus.INSUFFICIENT
