"""
Feed Conversion Ratio (FCR).

FCR = kg of feed consumed / kg of live weight gained. Lower is better.

FCR is undefined when the animal lost or held weight; that case is returned
as 0. Callers must treat FCR = 0 as "no data", not as perfect conversion.
"""

from collections.abc import Iterable
from datetime import date
from typing import Literal

from herdmetrics.data.records import FeedIntakeObservation, WeightObservation
from herdmetrics.metrics.growth import observations_in_window

# FCR quality bands for individual animals (kg feed / kg gain)
FCR_GOOD_MAX = 6.0
FCR_AVERAGE_MAX = 8.0

FCRBand = Literal["good", "warning", "poor", "no_data"]


def feed_consumed_in_window(
    feed_intake_observations: Iterable[FeedIntakeObservation],
    animal_id: str,
    period_start: date,
    period_end: date,
) -> float:
    """Total feed (kg) recorded for one animal inside [period_start, period_end]."""
    return sum(
        f.amount_consumed_kg
        for f in feed_intake_observations
        if f.animal_id == animal_id and period_start <= f.intake_date <= period_end
    )


def feed_conversion_ratio(
    animal_id: str,
    period_start: date,
    period_end: date,
    weight_observations: Iterable[WeightObservation],
    feed_intake_observations: Iterable[FeedIntakeObservation],
) -> float:
    """
    Calculate FCR for one animal over a period.

    The first weigh in the window is the induction weight and the last is the
    final weight. Feed is the sum of intake records in the same window.

    Args:
        animal_id: Animal to calculate for
        period_start: First day of the period (inclusive)
        period_end: Last day of the period (inclusive)
        weight_observations: Weigh records (may include other animals)
        feed_intake_observations: Feed intake records (may include other animals)

    Returns:
        total_feed / weight_gain when weight_gain > 0, else 0
    """
    in_window = [
        o for o in observations_in_window(weight_observations, period_start, period_end, animal_id) if o.weight_kg > 0
    ]

    weight_gain = 0.0
    if len(in_window) >= 2:
        induction_weight = in_window[0].weight_kg
        final_weight = in_window[-1].weight_kg
        weight_gain = final_weight - induction_weight

    if weight_gain <= 0:
        return 0.0

    total_feed = feed_consumed_in_window(feed_intake_observations, animal_id, period_start, period_end)
    return total_feed / weight_gain


def fcr_from_weight_records(weight_observations: Iterable[WeightObservation]) -> float:
    """
    Calculate FCR from feed logged on the weigh records themselves.

    Uses the two most recent weighs: the gain between them, and the feed the
    latest record says was consumed since the previous weigh.

    Returns:
        feed / gain when gain > 0, else 0
    """
    history = sorted((o for o in weight_observations if o.weight_kg > 0), key=lambda o: o.observation_date)
    if len(history) < 2:
        return 0.0

    previous, latest = history[-2], history[-1]
    weight_gain = latest.weight_kg - previous.weight_kg
    feed_consumed = latest.feed_consumed_kg or 0.0

    return feed_consumed / weight_gain if weight_gain > 0 else 0.0


def fcr_band(fcr: float) -> FCRBand:
    """Classify an individual animal's FCR."""
    if fcr <= 0:
        return "no_data"
    elif fcr <= FCR_GOOD_MAX:
        return "good"
    elif fcr <= FCR_AVERAGE_MAX:
        return "warning"
    else:
        return "poor"
