"""
Herd records for metric calculation.

Typed, read-only records built once from a farm export snapshot:
- Animals (herd roster: breed, sex, date of birth)
- Weigh records (with optional feed consumed since the previous weigh)
- Feed intake records
- Breeding cycles (service, pregnancy diagnoses, calving)
- Calf, mortality and health registers

Shapes are checked here, at the boundary, so calculators can trust field
types. Plausibility is not checked here: dirty values (zero weights, absurd
feed amounts) load fine and are filtered at aggregation time.
"""

import json
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path

from herdmetrics.core import get_cache_dir, settings
from herdmetrics.core.units import to_kg


class RecordValidationError(ValueError):
    """Raised when a record is missing required fields or has bad values."""

    pass


# =============================================================================
# Record Types
# =============================================================================


@dataclass(frozen=True)
class Animal:
    """Herd roster entry. Age is always derived, never stored."""

    animal_id: str
    date_of_birth: date | None = None
    breed: str | None = None
    sex: str | None = None


@dataclass(frozen=True)
class WeightObservation:
    animal_id: str
    observation_date: date
    weight_kg: float
    feed_consumed_kg: float | None = None  # feed since the previous weigh


@dataclass(frozen=True)
class FeedIntakeObservation:
    animal_id: str
    intake_date: date
    amount_consumed_kg: float
    feed_type: str | None = None


@dataclass(frozen=True)
class BreedingEvent:
    """One breeding cycle for a cow. PD = pregnancy diagnosis."""

    animal_id: str
    last_service_date: date | None = None
    first_pd_date: date | None = None
    second_pd_date: date | None = None
    third_pd_date: date | None = None
    actual_calving_date: date | None = None


@dataclass(frozen=True)
class CalfRecord:
    calf_id: str
    dam_id: str | None = None
    sex: str | None = None
    birth_date: date | None = None
    age_months: float = 0.0
    birth_weight_kg: float = 0.0
    weaning_weight_kg: float = 0.0
    weaning_date: date | None = None


@dataclass(frozen=True)
class MortalityRecord:
    animal_id: str
    event_date: date | None = None
    cause: str | None = None


@dataclass(frozen=True)
class HealthRecord:
    animal_id: str
    record_date: date | None = None
    diagnosis: str | None = None


@dataclass(frozen=True)
class HerdSnapshot:
    """In-memory snapshot of every record the engine reads.

    ``version`` identifies the export; callers that want to memoize reports
    can key on ``(snapshot.version, as_of)``.
    """

    animals: list[Animal] = field(default_factory=list)
    weights: list[WeightObservation] = field(default_factory=list)
    feed_intake: list[FeedIntakeObservation] = field(default_factory=list)
    breeding: list[BreedingEvent] = field(default_factory=list)
    calves: list[CalfRecord] = field(default_factory=list)
    mortalities: list[MortalityRecord] = field(default_factory=list)
    health: list[HealthRecord] = field(default_factory=list)
    version: str = ""

    def get_animal(self, animal_id: str) -> Animal | None:
        for animal in self.animals:
            if animal.animal_id == animal_id:
                return animal
        return None

    def weights_for(self, animal_id: str) -> list[WeightObservation]:
        """Weigh records for one animal, oldest first."""
        return sorted(
            (w for w in self.weights if w.animal_id == animal_id),
            key=lambda w: w.observation_date,
        )

    def feed_for(self, animal_id: str) -> list[FeedIntakeObservation]:
        return [f for f in self.feed_intake if f.animal_id == animal_id]


# =============================================================================
# Field Parsing
# =============================================================================


def parse_date(value) -> date | None:
    """Parse a record date.

    Dates might be epoch ms (as in API exports), ISO strings, or already
    date/datetime objects. Empty values mean "not recorded".

    Raises:
        RecordValidationError: If the value cannot be read as a date
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        raise RecordValidationError(f"Invalid date: {value!r}")
    try:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value / 1000).date()
        return datetime.fromisoformat(str(value).replace("Z", "")).date()
    except (ValueError, TypeError, OverflowError, OSError) as e:
        raise RecordValidationError(f"Invalid date: {value!r}") from e


def _require_date(raw: dict, *keys: str) -> date:
    for key in keys:
        parsed = parse_date(raw.get(key))
        if parsed is not None:
            return parsed
    raise RecordValidationError(f"Missing date ({' / '.join(keys)}) in record: {raw!r}")


def _require_id(raw: dict, *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if value not in (None, ""):
            return str(value)
    raise RecordValidationError(f"Missing id ({' / '.join(keys)}) in record: {raw!r}")


def _number(value, name: str, default: float | None = None) -> float | None:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise RecordValidationError(f"Invalid {name}: {value!r}")
    try:
        number = float(value)
    except (ValueError, TypeError) as e:
        raise RecordValidationError(f"Invalid {name}: {value!r}") from e
    if not math.isfinite(number):
        raise RecordValidationError(f"Invalid {name}: {value!r}")
    return number


def _lower(value) -> str | None:
    return str(value).strip().lower() if value not in (None, "") else None


def _mass_kg(raw: dict, kg_key: str, nested_key: str, default: float | None = None) -> float | None:
    """Read a mass given either as ``<kg_key>`` or ``{nested_key: {value, unit}}``."""
    if raw.get(kg_key) not in (None, ""):
        return _number(raw[kg_key], kg_key)

    nested = raw.get(nested_key)
    if isinstance(nested, dict):
        value = _number(nested.get("value"), nested_key)
        if value is None:
            return default
        try:
            return to_kg(value, nested.get("unit") or "kg")
        except ValueError as e:
            raise RecordValidationError(str(e)) from e
    if nested not in (None, ""):
        return _number(nested, nested_key)
    return default


# =============================================================================
# Record Builders
# =============================================================================


def animal_from_dict(raw: dict) -> Animal:
    return Animal(
        animal_id=_require_id(raw, "animal_id", "tag_number", "id"),
        date_of_birth=parse_date(raw.get("date_of_birth") or raw.get("birthDate")),
        breed=raw.get("breed"),
        sex=_lower(raw.get("sex")),
    )


def weight_from_dict(raw: dict) -> WeightObservation:
    weight_kg = _mass_kg(raw, "weight_kg", "weight")
    if weight_kg is None:
        raise RecordValidationError(f"Missing weight in record: {raw!r}")
    return WeightObservation(
        animal_id=_require_id(raw, "animal_id", "animal_tag"),
        observation_date=_require_date(raw, "observation_date", "weight_date", "observationDate"),
        weight_kg=weight_kg,
        feed_consumed_kg=_mass_kg(raw, "feed_consumed_kg", "feed_consumed"),
    )


def feed_intake_from_dict(raw: dict) -> FeedIntakeObservation:
    amount = _mass_kg(raw, "amount_consumed_kg", "amount_consumed")
    if amount is None:
        raise RecordValidationError(f"Missing amount consumed in record: {raw!r}")
    return FeedIntakeObservation(
        animal_id=_require_id(raw, "animal_id", "animal_tag"),
        intake_date=_require_date(raw, "intake_date", "date"),
        amount_consumed_kg=amount,
        feed_type=raw.get("feed_type"),
    )


def breeding_from_dict(raw: dict) -> BreedingEvent:
    return BreedingEvent(
        animal_id=_require_id(raw, "animal_id", "animal_tag"),
        last_service_date=parse_date(raw.get("last_service_date")),
        first_pd_date=parse_date(raw.get("first_pd_date") or raw.get("first_pd")),
        second_pd_date=parse_date(raw.get("second_pd_date") or raw.get("second_pd")),
        third_pd_date=parse_date(raw.get("third_pd_date") or raw.get("third_pd")),
        actual_calving_date=parse_date(raw.get("actual_calving_date")),
    )


def calf_from_dict(raw: dict) -> CalfRecord:
    return CalfRecord(
        calf_id=_require_id(raw, "calf_id", "tag_number"),
        dam_id=raw.get("dam_id") or raw.get("parent_tag"),
        sex=_lower(raw.get("sex")),
        birth_date=parse_date(raw.get("birth_date")),
        age_months=_number(raw.get("age_months", raw.get("age")), "age_months", default=0.0),
        birth_weight_kg=_mass_kg(raw, "birth_weight_kg", "birth_weight", default=0.0),
        weaning_weight_kg=_mass_kg(raw, "weaning_weight_kg", "weaning_weight", default=0.0),
        weaning_date=parse_date(raw.get("weaning_date")),
    )


def mortality_from_dict(raw: dict) -> MortalityRecord:
    return MortalityRecord(
        animal_id=_require_id(raw, "animal_id", "animal_tag"),
        event_date=parse_date(raw.get("event_date") or raw.get("date")),
        cause=raw.get("cause"),
    )


def health_from_dict(raw: dict) -> HealthRecord:
    return HealthRecord(
        animal_id=_require_id(raw, "animal_id", "animal_tag"),
        record_date=parse_date(raw.get("record_date") or raw.get("date")),
        diagnosis=raw.get("diagnosis"),
    )


# Snapshot key -> record builder
RECORD_BUILDERS = {
    "animals": animal_from_dict,
    "weights": weight_from_dict,
    "feed_intake": feed_intake_from_dict,
    "breeding": breeding_from_dict,
    "calves": calf_from_dict,
    "mortalities": mortality_from_dict,
    "health": health_from_dict,
}


# =============================================================================
# Snapshot Loading
# =============================================================================


def snapshot_from_dict(data: dict, strict: bool = True) -> HerdSnapshot:
    """Build a HerdSnapshot from an export dict.

    Args:
        data: Export with lists under the RECORD_BUILDERS keys
        strict: If True, raise on the first malformed record.
            If False, skip malformed records with a warning.

    Returns:
        HerdSnapshot with all records typed

    Raises:
        RecordValidationError: On a malformed record (strict mode only)
    """
    collections: dict[str, list] = {}
    skipped = 0

    for key, builder in RECORD_BUILDERS.items():
        records = []
        for raw in data.get(key) or []:
            try:
                records.append(builder(raw))
            except RecordValidationError as e:
                if strict:
                    raise RecordValidationError(f"{key}: {e}") from e
                skipped += 1
                print(f"  Warning: skipping {key} record: {e}")
        collections[key] = records

    if skipped:
        print(f"  Skipped {skipped} malformed records")

    return HerdSnapshot(**collections, version=str(data.get("exported_at") or ""))


def load_snapshot(path: Path | None = None, strict: bool = True) -> HerdSnapshot:
    """Load a herd snapshot from a JSON export.

    Args:
        path: Snapshot file (default: settings.snapshot_file in the cache dir)
        strict: See snapshot_from_dict

    Returns:
        HerdSnapshot
    """
    if path is None:
        path = get_cache_dir() / settings.snapshot_file

    with open(path) as f:
        data = json.load(f)

    return snapshot_from_dict(data, strict=strict)
