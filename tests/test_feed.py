"""Tests for feed conversion ratio."""

from datetime import date

import pytest

from herdmetrics.data.records import FeedIntakeObservation, WeightObservation
from herdmetrics.metrics.feed import (
    FCR_AVERAGE_MAX,
    FCR_GOOD_MAX,
    fcr_band,
    fcr_from_weight_records,
    feed_consumed_in_window,
    feed_conversion_ratio,
)

PERIOD_START = date(2024, 1, 1)
PERIOD_END = date(2024, 7, 1)


def make_weight(
    day: str, weight_kg: float, animal_id: str = "0042", feed_consumed_kg: float | None = None
) -> WeightObservation:
    return WeightObservation(
        animal_id=animal_id,
        observation_date=date.fromisoformat(day),
        weight_kg=weight_kg,
        feed_consumed_kg=feed_consumed_kg,
    )


def make_feed(day: str, amount_kg: float, animal_id: str = "0042") -> FeedIntakeObservation:
    return FeedIntakeObservation(
        animal_id=animal_id,
        intake_date=date.fromisoformat(day),
        amount_consumed_kg=amount_kg,
        feed_type="silage",
    )


@pytest.fixture
def weights():
    return [make_weight("2024-01-01", 200), make_weight("2024-07-01", 260)]


@pytest.fixture
def feed():
    return [make_feed("2024-02-01", 300), make_feed("2024-04-01", 300), make_feed("2024-06-01", 300)]


class TestFeedConversionRatio:
    """Tests for window-based FCR."""

    def test_worked_example(self, weights, feed):
        """900 kg feed for 60 kg gain."""
        assert feed_conversion_ratio("0042", PERIOD_START, PERIOD_END, weights, feed) == pytest.approx(15.0)

    def test_feed_outside_window_is_ignored(self, weights, feed):
        feed = feed + [make_feed("2023-12-31", 500), make_feed("2024-07-02", 500)]
        assert feed_conversion_ratio("0042", PERIOD_START, PERIOD_END, weights, feed) == pytest.approx(15.0)

    def test_other_animals_are_ignored(self, weights, feed):
        weights = weights + [make_weight("2024-03-01", 100, animal_id="0043")]
        feed = feed + [make_feed("2024-03-01", 1000, animal_id="0043")]
        assert feed_conversion_ratio("0042", PERIOD_START, PERIOD_END, weights, feed) == pytest.approx(15.0)

    def test_uses_first_and_last_weigh_in_window(self, feed):
        weights = [
            make_weight("2023-06-01", 150),  # before window
            make_weight("2024-01-15", 210),  # induction weight
            make_weight("2024-04-01", 230),
            make_weight("2024-06-15", 240),  # final weight
        ]
        assert feed_conversion_ratio("0042", PERIOD_START, PERIOD_END, weights, feed) == pytest.approx(900 / 30)

    def test_weight_loss_returns_zero(self, feed):
        weights = [make_weight("2024-01-01", 260), make_weight("2024-07-01", 240)]
        assert feed_conversion_ratio("0042", PERIOD_START, PERIOD_END, weights, feed) == 0

    def test_no_gain_returns_zero(self, feed):
        weights = [make_weight("2024-01-01", 250), make_weight("2024-07-01", 250)]
        assert feed_conversion_ratio("0042", PERIOD_START, PERIOD_END, weights, feed) == 0

    def test_single_weigh_returns_zero(self, feed):
        weights = [make_weight("2024-03-01", 250)]
        assert feed_conversion_ratio("0042", PERIOD_START, PERIOD_END, weights, feed) == 0

    def test_no_feed_returns_zero(self, weights):
        assert feed_conversion_ratio("0042", PERIOD_START, PERIOD_END, weights, []) == 0

    def test_never_negative(self, feed):
        for final in (100, 199, 200, 201, 400):
            weights = [make_weight("2024-01-01", 200), make_weight("2024-07-01", final)]
            assert feed_conversion_ratio("0042", PERIOD_START, PERIOD_END, weights, feed) >= 0

    def test_feed_consumed_in_window(self, feed):
        assert feed_consumed_in_window(feed, "0042", PERIOD_START, PERIOD_END) == 900
        assert feed_consumed_in_window(feed, "0043", PERIOD_START, PERIOD_END) == 0


class TestFCRFromWeightRecords:
    """Tests for FCR from feed logged on weigh records."""

    def test_uses_two_latest_weighs(self):
        weights = [
            make_weight("2023-12-01", 180),
            make_weight("2024-01-01", 200),
            make_weight("2024-02-01", 230, feed_consumed_kg=150),
        ]
        assert fcr_from_weight_records(weights) == pytest.approx(5.0)

    def test_weight_loss_returns_zero(self):
        weights = [make_weight("2024-01-01", 230), make_weight("2024-02-01", 220, feed_consumed_kg=150)]
        assert fcr_from_weight_records(weights) == 0

    def test_missing_feed_returns_zero(self):
        weights = [make_weight("2024-01-01", 200), make_weight("2024-02-01", 230)]
        assert fcr_from_weight_records(weights) == 0

    def test_single_weigh_returns_zero(self):
        assert fcr_from_weight_records([make_weight("2024-02-01", 230, feed_consumed_kg=150)]) == 0


class TestFCRBand:
    """Tests for individual FCR classification."""

    def test_zero_is_no_data_not_perfect(self):
        assert fcr_band(0) == "no_data"

    def test_bands(self):
        assert fcr_band(5.0) == "good"
        assert fcr_band(FCR_GOOD_MAX) == "good"
        assert fcr_band(7.0) == "warning"
        assert fcr_band(FCR_AVERAGE_MAX) == "warning"
        assert fcr_band(15.0) == "poor"
