"""
Performance scoring against targets.

Every metric is scored the same way: a percentage of target (inverted for
lower-is-better metrics) mapped to a three-band rating. Mortality uses its
own, stricter bands on the raw value-to-target ratio.
"""

from typing import Literal

from herdmetrics.metrics.types import DerivedMetric, Direction, MetricStatus

Band = Literal["good", "warning", "poor"]

# Generic bands on the scored percentage
GOOD_THRESHOLD = 90.0
WARNING_THRESHOLD = 70.0

# Mortality bands on value / target * 100
MORTALITY_POOR_ABOVE = 150.0
MORTALITY_WARNING_ABOVE = 100.0


def band_for_percentage(percentage: float) -> Band:
    if percentage >= GOOD_THRESHOLD:
        return "good"
    elif percentage >= WARNING_THRESHOLD:
        return "warning"
    else:
        return "poor"


def score_percentage(value: float, target: float, direction: Direction) -> float:
    """
    Percentage of target achieved.

    Higher-is-better: value / target * 100, not capped at 100.
    Lower-is-better: 100 - value / target * 100, floored at 0. A zero value
    always scores 100; a zero target (impossible to meet) always scores 0.
    """
    if direction is Direction.LOWER_IS_BETTER:
        if value == 0:
            return 100.0
        if target == 0:
            return 0.0
        return max(0.0, 100 - (value / target * 100))

    if target == 0:
        return 0.0
    return value / target * 100


def score(value: float, target: float, direction: Direction) -> tuple[float, Band]:
    """
    Score a metric value against its target.

    Args:
        value: Metric value
        target: Target value
        direction: Whether higher or lower values are better

    Returns:
        Tuple of (percentage, band)
    """
    percentage = score_percentage(value, target, direction)
    return percentage, band_for_percentage(percentage)


def mortality_band(value: float, target: float) -> Band:
    """
    Rate a mortality figure against its target.

    More than 150% of target is poor, more than 100% is a warning. With a
    zero target any mortality is poor.
    """
    if target == 0:
        return "poor" if value > 0 else "good"

    ratio = value / target * 100
    if ratio > MORTALITY_POOR_ABOVE:
        return "poor"
    elif ratio > MORTALITY_WARNING_ABOVE:
        return "warning"
    else:
        return "good"


def score_metric(metric: DerivedMetric) -> tuple[float, Band] | None:
    """
    Score a DerivedMetric.

    Mortality metrics keep the lower-is-better percentage but take their band
    from mortality_band.

    Placeholders (MetricStatus.DEFAULT) are conventions, not measurements,
    so they are not rated either.

    Returns:
        Tuple of (percentage, band), or None when the metric has no data or
        only a placeholder value
    """
    if metric.status in (MetricStatus.INSUFFICIENT, MetricStatus.DEFAULT):
        return None

    percentage, band = score(metric.value, metric.target, metric.direction)
    if metric.mortality:
        band = mortality_band(metric.value, metric.target)
    return percentage, band
