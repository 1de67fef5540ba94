"""Tests for DividendEstimator: weighted average, jitter and payout dates."""

import random
from datetime import date
from decimal import Decimal

import pytest

from divtracker.config import EstimationSettings
from divtracker.dividends.estimator import DividendEstimator
from divtracker.models import Provenance


@pytest.fixture
def ramp_series(record_factory):
    """Amounts 60..10, newest-first."""
    amounts = ["60", "50", "40", "30", "20", "10"]
    return [
        record_factory(2025, 6 - i, amount) for i, amount in enumerate(amounts)
    ]


class TestBaseExpectation:
    """Tests for the recency-weighted average."""

    def test_full_window(self, estimation_settings: EstimationSettings, ramp_series) -> None:
        """(60*6 + 50*5 + 40*4 + 30*3 + 20*2 + 10*1) / 21 = 910/21."""
        estimator = DividendEstimator(estimation_settings, random.Random(1))
        assert estimator.base_expectation(ramp_series) == Decimal("910") / Decimal("21")

    def test_only_newest_six_count(
        self, estimation_settings: EstimationSettings, ramp_series, record_factory
    ) -> None:
        older = ramp_series + [record_factory(2024, 12, "1000")]
        estimator = DividendEstimator(estimation_settings, random.Random(1))
        assert estimator.base_expectation(older) == Decimal("910") / Decimal("21")

    def test_short_series_shrinks_window(
        self, estimation_settings: EstimationSettings, record_factory
    ) -> None:
        """Two records -> weights 2, 1."""
        series = [record_factory(2025, 2, "10"), record_factory(2025, 1, "20")]
        estimator = DividendEstimator(estimation_settings, random.Random(1))
        assert estimator.base_expectation(series) == Decimal("40") / Decimal("3")

    def test_empty_series_is_zero(self, estimation_settings: EstimationSettings) -> None:
        estimator = DividendEstimator(estimation_settings, random.Random(1))
        assert estimator.base_expectation([]) == Decimal("0")


class TestExpectedAmount:
    """Tests for jittered estimates."""

    def test_within_thirty_percent_of_base(
        self, estimation_settings: EstimationSettings, ramp_series
    ) -> None:
        estimator = DividendEstimator(estimation_settings, random.Random(42))
        base = Decimal("910") / Decimal("21")

        for _ in range(200):
            amount = estimator.expected_amount(ramp_series, 7, 2025)
            assert base * Decimal("0.7") <= amount <= base * Decimal("1.3")
            assert Decimal("30.33") <= amount <= Decimal("56.34")

    def test_low_draw_gives_low_bound(
        self, estimation_settings: EstimationSettings, ramp_series, scripted_rng
    ) -> None:
        estimator = DividendEstimator(estimation_settings, scripted_rng(0.0))
        base = Decimal("910") / Decimal("21")
        assert estimator.expected_amount(ramp_series, 7, 2025) == base * Decimal("0.7")

    def test_same_seed_same_estimate(
        self, estimation_settings: EstimationSettings, ramp_series
    ) -> None:
        first = DividendEstimator(estimation_settings, random.Random(7))
        second = DividendEstimator(estimation_settings, random.Random(7))
        assert first.expected_amount(ramp_series, 7, 2025) == second.expected_amount(
            ramp_series, 7, 2025
        )


class TestExpectedPayoutDates:
    """Tests for ex-dividend / payment date generation."""

    def test_ranges_hold_over_many_draws(self, estimation_settings: EstimationSettings) -> None:
        estimator = DividendEstimator(estimation_settings, random.Random(3))
        seen_days: set[int] = set()

        for _ in range(200):
            ex_date, pay_date = estimator.expected_payout_dates(2025, 7)
            assert ex_date.year == 2025 and ex_date.month == 7
            assert 5 <= ex_date.day <= 8
            assert pay_date >= ex_date
            assert (pay_date - ex_date).days in (1, 2)
            seen_days.add(ex_date.day)

        assert seen_days == {5, 6, 7, 8}

    def test_low_draw_gives_earliest_dates(
        self, estimation_settings: EstimationSettings, scripted_rng
    ) -> None:
        estimator = DividendEstimator(estimation_settings, scripted_rng(0.0))
        assert estimator.expected_payout_dates(2025, 12) == (
            date(2025, 12, 5),
            date(2025, 12, 6),
        )


class TestEstimateRecord:
    """Tests for full synthetic record construction."""

    def test_record_fields(
        self, estimation_settings: EstimationSettings, ramp_series, scripted_rng
    ) -> None:
        estimator = DividendEstimator(estimation_settings, scripted_rng(0.0))

        record = estimator.estimate_record(
            ramp_series, 2025, 7, Decimal("25"), Provenance.ESTIMATED
        )

        # 910/21 * 0.7 = 30.3333... -> 30.3333
        assert record.amount == Decimal("30.3333")
        # 30.3333 / 25 * 100 = 121.3332 -> 121.33
        assert record.yield_percent == Decimal("121.33")
        assert (record.year, record.month) == (2025, 7)
        assert record.provenance is Provenance.ESTIMATED
        assert record.early_announcement is False
        assert record.ex_dividend_date == date(2025, 7, 5)
        assert record.payment_date == date(2025, 7, 6)

    def test_does_not_touch_input(
        self, estimation_settings: EstimationSettings, ramp_series
    ) -> None:
        before = list(ramp_series)
        estimator = DividendEstimator(estimation_settings, random.Random(5))

        estimator.estimate_record(ramp_series, 2025, 7, Decimal("25"), Provenance.ANNOUNCED)

        assert ramp_series == before

    def test_zero_price_gives_zero_yield(
        self, estimation_settings: EstimationSettings, ramp_series
    ) -> None:
        estimator = DividendEstimator(estimation_settings, random.Random(5))
        record = estimator.estimate_record(
            ramp_series, 2025, 7, Decimal("0"), Provenance.UPDATED
        )
        assert record.yield_percent == Decimal("0")
        assert record.amount > 0
