"""
Herd health metrics: mortality, body condition, stock classification.
"""

import re
from collections.abc import Iterable
from datetime import date

from herdmetrics.data.records import Animal, HealthRecord, MortalityRecord

# Average BCS reported when no usable score is on record (1-5 scale)
DEFAULT_BCS = 3.5
BCS_MIN = 1.0
BCS_MAX = 5.0

# Animals younger than this count as calves for calf mortality
CALF_MAX_AGE_YEARS = 1

# Heifers/steers become cows/bulls at this age
MATURE_AGE_YEARS = 2

_BCS_KEYWORDS = ("bcs", "body condition")
_NUMBER = re.compile(r"(\d+\.?\d*)")


def age_years(date_of_birth: date, as_of: date) -> int:
    """Completed years of age on ``as_of``."""
    age = as_of.year - date_of_birth.year
    if (as_of.month, as_of.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def stock_type(sex: str | None, date_of_birth: date, as_of: date) -> str:
    """Classify an animal as heifer, cow, steer or bull."""
    young = age_years(date_of_birth, as_of) < MATURE_AGE_YEARS
    if sex == "female":
        return "heifer" if young else "cow"
    return "steer" if young else "bull"


def mortality_rate(herd_size: int, mortalities: Iterable[MortalityRecord]) -> float:
    """Deaths and culls as a percentage of the herd."""
    deaths = sum(1 for _ in mortalities)
    return deaths / herd_size * 100 if herd_size > 0 else 0.0


def calf_mortality_rate(
    mortalities: Iterable[MortalityRecord],
    animals: Iterable[Animal],
    total_calves: int,
    as_of: date,
) -> float:
    """
    Deaths of animals under one year old as a percentage of calves registered.

    Deaths of animals not on the roster, or without a date of birth, are not
    counted as calf deaths.
    """
    if total_calves <= 0:
        return 0.0

    birth_dates = {a.animal_id: a.date_of_birth for a in animals if a.date_of_birth is not None}
    calf_deaths = 0
    for record in mortalities:
        dob = birth_dates.get(record.animal_id)
        if dob is None:
            continue
        if age_years(dob, record.event_date or as_of) < CALF_MAX_AGE_YEARS:
            calf_deaths += 1

    return calf_deaths / total_calves * 100


def parse_bcs(diagnosis: str | None) -> float | None:
    """Extract a body condition score from a free-text diagnosis.

    Returns:
        The first number in a diagnosis mentioning BCS / body condition when
        it lies on the 1-5 scale, else None
    """
    if not diagnosis:
        return None
    text = diagnosis.lower()
    if not any(k in text for k in _BCS_KEYWORDS):
        return None
    match = _NUMBER.search(text)
    if not match:
        return None
    value = float(match.group(1))
    return value if BCS_MIN <= value <= BCS_MAX else None


def average_body_condition_score(health_records: Iterable[HealthRecord]) -> float:
    """Mean body condition score, or DEFAULT_BCS when none is recorded."""
    scores = [s for s in (parse_bcs(r.diagnosis) for r in health_records) if s is not None]
    if not scores:
        return DEFAULT_BCS
    return sum(scores) / len(scores)
