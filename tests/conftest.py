"""Shared test fixtures."""

import json
import sys
from datetime import date
from pathlib import Path

import pytest

# Add src/ to path so tests can import herdmetrics
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from herdmetrics.data.records import Animal, HerdSnapshot, snapshot_from_dict  # noqa: E402


@pytest.fixture
def heifer():
    """Female born 2022-01-01."""
    return Animal(animal_id="0042", date_of_birth=date(2022, 1, 1), breed="Angus", sex="female")


@pytest.fixture
def sample_snapshot_data():
    """Sample herd export in snapshot JSON format."""
    return {
        "exported_at": "2024-07-02T08:00:00",
        "farm_id": "test-farm",
        "animals": [
            {"animal_id": "0042", "breed": "Angus", "sex": "female", "date_of_birth": "2022-01-01"},
            {"animal_id": "0043", "breed": "Hereford", "sex": "male", "date_of_birth": "2023-03-01"},
        ],
        "weights": [
            {"animal_id": "0042", "observation_date": "2024-07-01", "weight_kg": 260},
            {"animal_id": "0042", "observation_date": "2024-01-01", "weight_kg": 200},
            {"animal_id": "0043", "observation_date": "2024-05-01", "weight": {"value": 440, "unit": "lb"}},
        ],
        "feed_intake": [
            {"animal_id": "0042", "intake_date": "2024-02-01", "feed_type": "silage", "amount_consumed_kg": 300},
            {"animal_id": "0042", "intake_date": "2024-04-01", "feed_type": "silage", "amount_consumed_kg": 300},
            {"animal_id": "0042", "intake_date": "2024-06-01", "feed_type": "hay", "amount_consumed_kg": 300},
        ],
        "breeding": [
            {
                "animal_id": "0042",
                "last_service_date": "2022-04-01",
                "first_pd_date": "2022-05-10",
                "actual_calving_date": "2023-01-01",
            },
            {
                "animal_id": "0042",
                "last_service_date": "2023-04-01",
                "first_pd_date": "2023-05-05",
                "second_pd_date": "2023-06-20",
                "actual_calving_date": "2024-01-01",
            },
        ],
        "calves": [
            {
                "calf_id": "C1",
                "dam_id": "0042",
                "sex": "male",
                "birth_date": "2023-01-01",
                "age_months": 6,
                "birth_weight_kg": 35,
                "weaning_weight_kg": 215,
                "weaning_date": "2023-07-01",
            },
            {
                "calf_id": "C2",
                "dam_id": "0042",
                "sex": "female",
                "birth_date": "2024-01-01",
                "age_months": 5,
                "birth_weight_kg": 40,
            },
        ],
        "mortalities": [],
        "health": [{"animal_id": "0042", "record_date": "2024-05-01", "diagnosis": "BCS 3.5"}],
    }


@pytest.fixture
def sample_snapshot(sample_snapshot_data) -> HerdSnapshot:
    """Sample herd export as a HerdSnapshot."""
    return snapshot_from_dict(sample_snapshot_data)


@pytest.fixture
def snapshot_file(tmp_path, sample_snapshot_data) -> Path:
    """Sample herd export written to a JSON file."""
    path = tmp_path / "herd_snapshot.json"
    path.write_text(json.dumps(sample_snapshot_data))
    return path
