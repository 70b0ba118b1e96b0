"""Tests for per-animal growth metrics."""

from datetime import date

import pytest

from herdmetrics.data.records import Animal, CalfRecord, WeightObservation
from herdmetrics.metrics.growth import (
    average_daily_gain,
    calf_gain_rate,
    daily_live_weight_gain,
    days_between,
    months_before,
    observations_in_window,
    period_average_daily_gain,
    total_weight_gain,
    trailing_window,
    weight_gain_metric,
)


def make_weight(day: str, weight_kg: float, animal_id: str = "0042") -> WeightObservation:
    """Create a weigh record from an ISO date string."""
    return WeightObservation(animal_id=animal_id, observation_date=date.fromisoformat(day), weight_kg=weight_kg)


def make_calf(
    calf_id: str = "C1",
    age_months: float = 6,
    birth_weight_kg: float = 35,
    weaning_weight_kg: float = 215,
    weaning_date: date | None = date(2023, 7, 1),
) -> CalfRecord:
    return CalfRecord(
        calf_id=calf_id,
        age_months=age_months,
        birth_weight_kg=birth_weight_kg,
        weaning_weight_kg=weaning_weight_kg,
        weaning_date=weaning_date,
    )


class TestDateHelpers:
    """Tests for day counts and windows."""

    def test_days_between_is_absolute(self):
        assert days_between(date(2024, 1, 1), date(2024, 7, 1)) == 182
        assert days_between(date(2024, 7, 1), date(2024, 1, 1)) == 182

    def test_months_before_same_day(self):
        assert months_before(date(2024, 7, 1), 6) == date(2024, 1, 1)
        assert months_before(date(2024, 1, 15), 12) == date(2023, 1, 15)

    def test_months_before_crosses_year(self):
        assert months_before(date(2024, 1, 15), 1) == date(2023, 12, 15)

    def test_months_before_clamps_to_month_end(self):
        """March 31 minus one month is the last day of February."""
        assert months_before(date(2024, 3, 31), 1) == date(2024, 2, 29)
        assert months_before(date(2023, 3, 31), 1) == date(2023, 2, 28)

    def test_trailing_window(self):
        assert trailing_window(date(2024, 7, 1), 12) == (date(2023, 7, 1), date(2024, 7, 1))

    def test_observations_in_window_is_inclusive_and_sorted(self):
        observations = [
            make_weight("2024-07-01", 260),
            make_weight("2023-12-31", 195),
            make_weight("2024-01-01", 200),
            make_weight("2024-03-01", 220, animal_id="other"),
        ]
        result = observations_in_window(observations, date(2024, 1, 1), date(2024, 7, 1), animal_id="0042")
        assert [o.weight_kg for o in result] == [200, 260]


class TestDailyLiveWeightGain:
    """Tests for DLWG."""

    def test_worked_example(self, heifer):
        """200 kg -> 260 kg, born 2022-01-01: 60 kg over 912 days of age."""
        observations = [make_weight("2024-01-01", 200), make_weight("2024-07-01", 260)]

        assert days_between(heifer.date_of_birth, date(2024, 7, 1)) == 912
        assert daily_live_weight_gain(heifer, observations) == pytest.approx(60 / 912)
        assert daily_live_weight_gain(heifer, observations) == pytest.approx(0.0658, abs=1e-4)

    def test_order_of_records_does_not_matter(self, heifer):
        observations = [make_weight("2024-07-01", 260), make_weight("2024-01-01", 200)]
        assert daily_live_weight_gain(heifer, observations) == pytest.approx(60 / 912)

    def test_weight_loss_is_negative(self, heifer):
        observations = [make_weight("2024-01-01", 260), make_weight("2024-07-01", 240)]
        assert daily_live_weight_gain(heifer, observations) < 0

    def test_no_records_returns_zero(self, heifer):
        assert daily_live_weight_gain(heifer, []) == 0

    def test_single_record_returns_zero(self, heifer):
        assert daily_live_weight_gain(heifer, [make_weight("2024-01-01", 200)]) == 0

    def test_same_day_records_return_zero(self, heifer):
        """Two weighs on one day are not two distinct observations."""
        observations = [make_weight("2024-01-01", 200), make_weight("2024-01-01", 205)]
        assert daily_live_weight_gain(heifer, observations) == 0

    def test_zero_age_returns_zero(self):
        animal = Animal(animal_id="0042", date_of_birth=date(2024, 7, 1))
        observations = [make_weight("2024-01-01", 200), make_weight("2024-07-01", 260)]
        assert daily_live_weight_gain(animal, observations) == 0

    def test_missing_birth_date_returns_zero(self):
        animal = Animal(animal_id="0042")
        observations = [make_weight("2024-01-01", 200), make_weight("2024-07-01", 260)]
        assert daily_live_weight_gain(animal, observations) == 0

    def test_as_of_date_ignores_later_weighs(self, heifer):
        observations = [
            make_weight("2024-01-01", 200),
            make_weight("2024-07-01", 260),
            make_weight("2024-10-01", 300),
        ]
        assert daily_live_weight_gain(heifer, observations, as_of_date=date(2024, 7, 1)) == pytest.approx(60 / 912)

    def test_non_positive_weights_are_ignored(self, heifer):
        """A zero weight is a data-entry gap, not a real weigh."""
        observations = [
            make_weight("2023-12-01", 0),
            make_weight("2024-01-01", 200),
            make_weight("2024-07-01", 260),
        ]
        assert daily_live_weight_gain(heifer, observations) == pytest.approx(60 / 912)


class TestPeriodAverageDailyGain:
    """Tests for elapsed-time ADG."""

    def test_gain_over_elapsed_days(self):
        observations = [make_weight("2024-01-01", 200), make_weight("2024-07-01", 260)]
        assert period_average_daily_gain(observations) == pytest.approx(60 / 182)

    def test_single_record_returns_zero(self):
        assert period_average_daily_gain([make_weight("2024-01-01", 200)]) == 0

    def test_total_weight_gain(self):
        observations = [make_weight("2024-07-01", 260), make_weight("2024-03-01", 230), make_weight("2024-01-01", 200)]
        assert total_weight_gain(observations) == 60
        assert total_weight_gain(observations[:1]) == 0


class TestWeightGainMetric:
    """Tests for WGM (DLWG / period ADG)."""

    def test_ratio_of_lifetime_to_period_gain(self, heifer):
        observations = [make_weight("2024-01-01", 200), make_weight("2024-07-01", 260)]
        # (60 / 912) / (60 / 182)
        assert weight_gain_metric(heifer, observations) == pytest.approx(182 / 912)

    def test_weight_loss_returns_zero(self, heifer):
        observations = [make_weight("2024-01-01", 260), make_weight("2024-07-01", 240)]
        assert weight_gain_metric(heifer, observations) == 0

    def test_insufficient_records_return_zero(self, heifer):
        assert weight_gain_metric(heifer, [make_weight("2024-01-01", 200)]) == 0


class TestCalfAverageDailyGain:
    """Tests for birth-to-weaning ADG across the calf register."""

    def test_gain_rate_uses_thirty_day_months(self):
        assert calf_gain_rate(make_calf(age_months=6, birth_weight_kg=35, weaning_weight_kg=215)) == pytest.approx(1.0)

    def test_average_over_qualifying_calves(self):
        calves = [
            make_calf("C1", age_months=6, birth_weight_kg=35, weaning_weight_kg=215),  # 1.0
            make_calf("C2", age_months=5, birth_weight_kg=40, weaning_weight_kg=220),  # 1.2
        ]
        assert average_daily_gain(calves) == pytest.approx(1.1)

    def test_incomplete_calves_are_excluded_not_zero_filled(self):
        calves = [
            make_calf("C1", age_months=6, birth_weight_kg=35, weaning_weight_kg=215),
            make_calf("C2", weaning_date=None),
            make_calf("C3", birth_weight_kg=0),
            make_calf("C4", weaning_weight_kg=0),
            make_calf("C5", age_months=0),
        ]
        assert average_daily_gain(calves) == pytest.approx(1.0)

    def test_no_qualifying_calves_returns_zero(self):
        assert average_daily_gain([make_calf(weaning_date=None)]) == 0
        assert average_daily_gain([]) == 0
