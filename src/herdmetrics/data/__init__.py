"""Data modules - typed herd records and snapshot loading."""

from herdmetrics.data import records
from herdmetrics.data.records import (
    Animal,
    BreedingEvent,
    CalfRecord,
    FeedIntakeObservation,
    HealthRecord,
    HerdSnapshot,
    MortalityRecord,
    RecordValidationError,
    WeightObservation,
    load_snapshot,
    parse_date,
    snapshot_from_dict,
)

__all__ = [
    "records",
    "Animal",
    "WeightObservation",
    "FeedIntakeObservation",
    "BreedingEvent",
    "CalfRecord",
    "MortalityRecord",
    "HealthRecord",
    "HerdSnapshot",
    "RecordValidationError",
    "parse_date",
    "snapshot_from_dict",
    "load_snapshot",
]
