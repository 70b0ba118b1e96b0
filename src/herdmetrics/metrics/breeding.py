"""
Reproduction metrics from breeding cycle records.

Each BreedingEvent is one cycle for one cow: last service, up to three
pregnancy diagnoses (PD), and the actual calving date. All rates are
percentages and return 0 instead of dividing by zero.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from typing import Literal

from herdmetrics.data.records import Animal, BreedingEvent, CalfRecord
from herdmetrics.metrics.growth import days_between

# Placeholder calving interval when fewer than two calvings are recorded.
# This is a convention, not a measurement.
CALVING_INTERVAL_DEFAULT_DAYS = 365.0

IN_CALF_42_DAYS = 42
IN_CALF_100_DAYS = 100

PDField = Literal["first_pd_date", "second_pd_date", "third_pd_date"]


def _percentage(numerator: float, denominator: float) -> float:
    return numerator / denominator * 100 if denominator > 0 else 0.0


def events_for_year(events: Iterable[BreedingEvent], year: int) -> list[BreedingEvent]:
    """Breeding cycles belonging to a reporting year.

    A cycle belongs to the year of its service date, or of its calving date
    when no service was recorded.
    """
    selected = []
    for event in events:
        anchor = event.last_service_date or event.actual_calving_date
        if anchor is not None and anchor.year == year:
            selected.append(event)
    return selected


def breeding_females(animals: Iterable[Animal]) -> int:
    """Number of female animals on the roster."""
    return sum(1 for a in animals if a.sex == "female")


# -----------------------------------------------------------------------------
# Conception and In-Calf Rates
# -----------------------------------------------------------------------------


def conception_rate(events: Iterable[BreedingEvent], served_count: int | None = None) -> float:
    """
    Percentage of served females confirmed pregnant.

    Args:
        events: Breeding cycles; a cycle with a first PD date counts as pregnant
        served_count: Denominator. If None, every cycle counts as served.

    Returns:
        pregnant / served * 100, 0 when nothing was served
    """
    events = list(events)
    pregnant = sum(1 for e in events if e.first_pd_date is not None)
    if served_count is None:
        served_count = len(events)
    return _percentage(pregnant, served_count)


def in_calf_rate(events: Iterable[BreedingEvent], window_days: int, pd_field: PDField = "first_pd_date") -> float:
    """
    Percentage of served females confirmed in calf within ``window_days`` of service.

    A cycle counts when both the service date and the chosen PD date are
    recorded and ``|pd - service| <= window_days``.

    Returns:
        in_count / served_count * 100, 0 when nothing was served
    """
    events = list(events)
    in_count = 0
    for event in events:
        pd_date = getattr(event, pd_field)
        if event.last_service_date is None or pd_date is None:
            continue
        if days_between(event.last_service_date, pd_date) <= window_days:
            in_count += 1
    return _percentage(in_count, len(events))


def in_calf_rate_42(events: Iterable[BreedingEvent]) -> float:
    """42-day in-calf rate, from the first pregnancy diagnosis."""
    return in_calf_rate(events, IN_CALF_42_DAYS, "first_pd_date")


def in_calf_rate_100(events: Iterable[BreedingEvent]) -> float:
    """100-day in-calf rate, from the second pregnancy diagnosis."""
    return in_calf_rate(events, IN_CALF_100_DAYS, "second_pd_date")


# -----------------------------------------------------------------------------
# Calving Interval
# -----------------------------------------------------------------------------


def _mean_gap_days(dates: list[date]) -> float | None:
    dates = sorted(dates)
    if len(dates) < 2:
        return None
    gaps = [days_between(dates[i - 1], dates[i]) for i in range(1, len(dates))]
    return sum(gaps) / len(gaps)


def calving_interval(events: Iterable[BreedingEvent]) -> float:
    """
    Mean days between consecutive calvings across the herd's history.

    Returns:
        Mean gap in days, or CALVING_INTERVAL_DEFAULT_DAYS with fewer than
        two calving dates
    """
    dates = [e.actual_calving_date for e in events if e.actual_calving_date is not None]
    mean_gap = _mean_gap_days(dates)
    return CALVING_INTERVAL_DEFAULT_DAYS if mean_gap is None else mean_gap


def calving_interval_by_animal(events: Iterable[BreedingEvent]) -> float:
    """
    Mean calving-to-calving gap measured within each cow.

    Returns:
        Mean of every per-cow gap, or CALVING_INTERVAL_DEFAULT_DAYS when no
        cow has calved twice
    """
    by_cow: dict[str, list[date]] = defaultdict(list)
    for e in events:
        if e.actual_calving_date is not None:
            by_cow[e.animal_id].append(e.actual_calving_date)

    gaps = []
    for dates in by_cow.values():
        dates.sort()
        gaps.extend(days_between(dates[i - 1], dates[i]) for i in range(1, len(dates)))

    if not gaps:
        return CALVING_INTERVAL_DEFAULT_DAYS
    return sum(gaps) / len(gaps)


# -----------------------------------------------------------------------------
# Calf Crop and Weaning
# -----------------------------------------------------------------------------


def calf_crop_percentage(calves_born: int, breeding_female_count: int) -> float:
    """Calves born per breeding female, as a percentage."""
    return _percentage(calves_born, breeding_female_count)


def calving_percentage(calves: Iterable[CalfRecord], breeding_female_count: int, year: int) -> float:
    """Calves born in ``year`` per breeding female, as a percentage."""
    born = sum(1 for c in calves if c.birth_date is not None and c.birth_date.year == year)
    return _percentage(born, breeding_female_count)


def weaning_rate(calves: Iterable[CalfRecord]) -> float:
    """Percentage of registered calves with a weaning date."""
    calves = list(calves)
    weaned = sum(1 for c in calves if c.weaning_date is not None)
    return _percentage(weaned, len(calves))
