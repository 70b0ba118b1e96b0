"""
Herd-level aggregation of per-animal metrics.

Naive averaging over the whole herd would pull every headline KPI towards
zero ("no data" sentinels) or towards absurd values (data-entry typos), so
every herd average goes through a plausibility range first.

When no animal has enough recent weigh records, herd weight gain falls back
to a per-head default and is flagged as an estimate.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from typing import TypedDict

from herdmetrics.core.config import settings
from herdmetrics.data.records import Animal, FeedIntakeObservation, WeightObservation
from herdmetrics.metrics.feed import feed_conversion_ratio
from herdmetrics.metrics.growth import (
    daily_live_weight_gain,
    days_between,
    observations_in_window,
    total_weight_gain,
    trailing_window,
    weight_gain_metric,
)

# -----------------------------------------------------------------------------
# Plausibility ranges (exclusive bounds)
# -----------------------------------------------------------------------------

# Values outside these are treated as instrumentation noise or "no data"
FCR_VALID_RANGE = (0.0, 50.0)  # kg feed / kg gain
DLWG_VALID_RANGE = (0.0, 3.0)  # kg/day
ADG_VALID_RANGE = (0.0, 3.0)  # kg/day
WGM_VALID_RANGE = (0.0, 10.0)  # ratio


class HerdWeightGain(TypedDict):
    """Herd weight gain over a trailing window."""

    total_kg: float
    animals_measured: int
    window_start: date
    window_end: date
    is_estimate: bool  # True when the per-head fallback was used


def average_herd_metric(per_animal_values: Iterable[float], valid_range: tuple[float, float]) -> float:
    """
    Average per-animal values that fall strictly inside a plausibility range.

    Args:
        per_animal_values: One value per animal (may contain 0 sentinels)
        valid_range: (min, max), both exclusive

    Returns:
        Mean of the values inside the range, 0 if none are
    """
    low, high = valid_range
    valid = [v for v in per_animal_values if low < v < high]
    if not valid:
        return 0.0
    return sum(valid) / len(valid)


def group_by_animal(observations: Iterable[WeightObservation]) -> dict[str, list[WeightObservation]]:
    """Weigh records keyed by animal id, each list oldest first."""
    grouped: dict[str, list[WeightObservation]] = defaultdict(list)
    for o in observations:
        grouped[o.animal_id].append(o)
    for history in grouped.values():
        history.sort(key=lambda o: o.observation_date)
    return dict(grouped)


# -----------------------------------------------------------------------------
# Herd Averages
# -----------------------------------------------------------------------------


def herd_average_dlwg(
    animals: Iterable[Animal],
    weight_observations: Iterable[WeightObservation],
    as_of: date | None = None,
) -> float:
    """Mean DLWG (kg/day) over animals with a plausible value."""
    by_animal = group_by_animal(weight_observations)
    values = [daily_live_weight_gain(a, by_animal.get(a.animal_id, []), as_of) for a in animals]
    return average_herd_metric(values, DLWG_VALID_RANGE)


def herd_average_wgm(
    animals: Iterable[Animal],
    weight_observations: Iterable[WeightObservation],
    as_of: date | None = None,
) -> float:
    """Mean Weight Gain Metric over animals with a plausible value."""
    by_animal = group_by_animal(weight_observations)
    values = [weight_gain_metric(a, by_animal.get(a.animal_id, []), as_of) for a in animals]
    return average_herd_metric(values, WGM_VALID_RANGE)


def herd_average_fcr(
    animals: Iterable[Animal],
    weight_observations: Iterable[WeightObservation],
    feed_intake_observations: Iterable[FeedIntakeObservation],
    as_of: date,
    period_months: int | None = None,
) -> float:
    """
    Mean FCR over the trailing period.

    Args:
        animals: Herd roster
        weight_observations: All weigh records
        feed_intake_observations: All feed intake records
        as_of: End of the period
        period_months: Length of the period. If None, uses settings.fcr_period_months.

    Returns:
        Mean FCR of animals inside FCR_VALID_RANGE, 0 if none
    """
    if period_months is None:
        period_months = settings.fcr_period_months
    start, end = trailing_window(as_of, period_months)

    weights = list(weight_observations)
    feed = list(feed_intake_observations)
    values = [feed_conversion_ratio(a.animal_id, start, end, weights, feed) for a in animals]
    return average_herd_metric(values, FCR_VALID_RANGE)


# -----------------------------------------------------------------------------
# Herd Weight Gain
# -----------------------------------------------------------------------------


def estimate_herd_weight_gain_fallback(herd_size: int, default_daily_gain_kg: float, days: int) -> float:
    """Coarse herd weight gain estimate: head count x per-head daily gain x days."""
    if herd_size <= 0 or default_daily_gain_kg <= 0 or days <= 0:
        return 0.0
    return herd_size * default_daily_gain_kg * days


def herd_weight_gain(
    animals: Iterable[Animal],
    weight_observations: Iterable[WeightObservation],
    as_of: date,
    window_months: int | None = None,
    default_daily_gain_kg: float | None = None,
) -> HerdWeightGain:
    """
    Total herd weight gain over a trailing window.

    Sums last-minus-first gain for every animal with at least two weighs in
    the window. If no animal qualifies, falls back to
    estimate_herd_weight_gain_fallback and sets ``is_estimate``.

    Args:
        animals: Herd roster (its size drives the fallback)
        weight_observations: All weigh records
        as_of: End of the window
        window_months: Window length. If None, uses settings.weight_gain_window_months.
        default_daily_gain_kg: Fallback gain per head.
            If None, uses settings.default_daily_gain_kg.

    Returns:
        HerdWeightGain
    """
    if window_months is None:
        window_months = settings.weight_gain_window_months
    if default_daily_gain_kg is None:
        default_daily_gain_kg = settings.default_daily_gain_kg

    roster = list(animals)
    start, end = trailing_window(as_of, window_months)
    in_window = group_by_animal(observations_in_window(weight_observations, start, end))

    total = 0.0
    measured = 0
    for animal in roster:
        history = in_window.get(animal.animal_id, [])
        if len({o.observation_date for o in history if o.weight_kg > 0}) < 2:
            continue
        total += total_weight_gain(history)
        measured += 1

    if measured == 0:
        return HerdWeightGain(
            total_kg=estimate_herd_weight_gain_fallback(len(roster), default_daily_gain_kg, days_between(start, end)),
            animals_measured=0,
            window_start=start,
            window_end=end,
            is_estimate=True,
        )

    return HerdWeightGain(
        total_kg=total,
        animals_measured=measured,
        window_start=start,
        window_end=end,
        is_estimate=False,
    )
