"""
Per-animal growth metrics.

- DLWG (Daily Live Weight Gain): gain per day of age, from the first and last
  weigh against the date of birth.
- Period ADG (Average Daily Gain): gain per elapsed day between the first and
  last weigh, independent of age.
- WGM (Weight Gain Metric): DLWG / period ADG. Near 1.0 means steady growth,
  drifting below 1.0 means the animal is slowing down.
- Calf ADG: birth-to-weaning gain averaged over the calf register.

Every function is pure. "Cannot compute" is returned as 0, never raised.
"""

import calendar
from collections.abc import Iterable
from datetime import date

from herdmetrics.data.records import Animal, CalfRecord, WeightObservation

# Calf register ages are in months; the farm convention is 30 days per month
DAYS_PER_MONTH = 30


# -----------------------------------------------------------------------------
# Date Helpers
# -----------------------------------------------------------------------------


def days_between(start: date, end: date) -> int:
    """Absolute number of days between two dates."""
    return abs((end - start).days)


def months_before(d: date, months: int) -> date:
    """Same day-of-month ``months`` earlier, clamped to the month's last day."""
    month_index = d.year * 12 + (d.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def trailing_window(as_of: date, months: int) -> tuple[date, date]:
    """(start, end) of the ``months`` leading up to and including ``as_of``."""
    return months_before(as_of, months), as_of


def observations_in_window(
    observations: Iterable[WeightObservation],
    start: date,
    end: date,
    animal_id: str | None = None,
) -> list[WeightObservation]:
    """Weigh records inside [start, end], oldest first.

    Args:
        observations: Weigh records (any order, any animals)
        start: First day of the window (inclusive)
        end: Last day of the window (inclusive)
        animal_id: Restrict to one animal (optional)

    Returns:
        Matching records sorted by observation date
    """
    return sorted(
        (
            o
            for o in observations
            if start <= o.observation_date <= end and (animal_id is None or o.animal_id == animal_id)
        ),
        key=lambda o: o.observation_date,
    )


def _usable(observations: Iterable[WeightObservation], as_of: date | None = None) -> list[WeightObservation]:
    """Positive-weight records (on/before ``as_of`` if given), oldest first."""
    return sorted(
        (o for o in observations if o.weight_kg > 0 and (as_of is None or o.observation_date <= as_of)),
        key=lambda o: o.observation_date,
    )


def _first_and_last(observations: list[WeightObservation]) -> tuple[WeightObservation, WeightObservation] | None:
    """Oldest and newest records, or None without two distinct dates."""
    if len(observations) < 2:
        return None
    first, last = observations[0], observations[-1]
    if first.observation_date == last.observation_date:
        return None
    return first, last


# -----------------------------------------------------------------------------
# Per-Animal Metrics
# -----------------------------------------------------------------------------


def total_weight_gain(weight_observations: Iterable[WeightObservation]) -> float:
    """Last weight minus first weight (kg); 0 with fewer than two distinct dates."""
    pair = _first_and_last(_usable(weight_observations))
    if pair is None:
        return 0.0
    first, last = pair
    return last.weight_kg - first.weight_kg


def daily_live_weight_gain(
    animal: Animal,
    weight_observations: Iterable[WeightObservation],
    as_of_date: date | None = None,
) -> float:
    """
    Calculate Daily Live Weight Gain (kg/day).

    Uses the first and last weigh and the animal's age at the last weigh:
    ``(last.weight - first.weight) / |last.date - date_of_birth|``.

    Args:
        animal: The animal (needs date_of_birth)
        weight_observations: Its weigh records, any order
        as_of_date: Ignore weighs after this date (optional)

    Returns:
        DLWG in kg/day. Negative means weight loss. 0 when there are fewer
        than two distinct weigh dates, no date of birth, or zero age.
    """
    pair = _first_and_last(_usable(weight_observations, as_of_date))
    if pair is None or animal.date_of_birth is None:
        return 0.0

    first, last = pair
    age_days = days_between(animal.date_of_birth, last.observation_date)
    if age_days == 0:
        return 0.0

    return (last.weight_kg - first.weight_kg) / age_days


def period_average_daily_gain(weight_observations: Iterable[WeightObservation]) -> float:
    """
    Calculate ADG over the elapsed time between first and last weigh (kg/day).

    Returns:
        ADG in kg/day, 0 with fewer than two distinct weigh dates
    """
    pair = _first_and_last(_usable(weight_observations))
    if pair is None:
        return 0.0

    first, last = pair
    return (last.weight_kg - first.weight_kg) / days_between(first.observation_date, last.observation_date)


def weight_gain_metric(
    animal: Animal,
    weight_observations: Iterable[WeightObservation],
    as_of_date: date | None = None,
) -> float:
    """
    Calculate the Weight Gain Metric: lifetime DLWG relative to period ADG.

    Returns:
        DLWG / ADG when ADG > 0, else 0
    """
    observations = _usable(weight_observations, as_of_date)
    adg = period_average_daily_gain(observations)
    if adg <= 0:
        return 0.0
    return daily_live_weight_gain(animal, observations) / adg


# -----------------------------------------------------------------------------
# Calf Register
# -----------------------------------------------------------------------------


def calf_gain_rate(calf: CalfRecord) -> float | None:
    """Birth-to-weaning gain (kg/day), or None if the calf does not qualify.

    A calf qualifies with a birth weight, a weaning weight, a weaning date
    and a positive age.
    """
    if calf.birth_weight_kg <= 0 or calf.weaning_weight_kg <= 0 or calf.weaning_date is None:
        return None
    if calf.age_months <= 0:
        return None
    return (calf.weaning_weight_kg - calf.birth_weight_kg) / (calf.age_months * DAYS_PER_MONTH)


def average_daily_gain(calf_records: Iterable[CalfRecord]) -> float:
    """
    Average birth-to-weaning daily gain across the calf register (kg/day).

    Calves missing weights, weaning date or age are left out entirely
    (not counted as zero).

    Returns:
        Mean gain of qualifying calves, 0 if none qualify
    """
    rates = []
    for calf in calf_records:
        rate = calf_gain_rate(calf)
        if rate is not None:
            rates.append(rate)

    if not rates:
        return 0.0
    return sum(rates) / len(rates)
