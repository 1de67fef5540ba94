"""Shared test fixtures for the dividend tracker."""

import random
from datetime import date
from decimal import Decimal

import pytest

from divtracker.config import AppSettings, DataSourceSettings, EstimationSettings
from divtracker.data.fallback import fallback_dividend_history
from divtracker.models import DividendRecord, Provenance


class ScriptedRandom(random.Random):
    """Random source whose random() always returns the same value.

    uniform(), randint() and probability gates are all derived from
    random(), so a single value pins every draw:
      0.0  -> jitter at the low bound, ex-day 5, +1 day, gates always pass
      0.99 -> gates always fail
    """

    def __init__(self, value: float) -> None:
        super().__init__()
        self._value = value

    def random(self) -> float:
        return self._value


def make_record(
    year: int,
    month: int,
    amount: str,
    provenance: Provenance = Provenance.CONFIRMED,
) -> DividendRecord:
    """Build a confirmed-style record with plausible payout dates."""
    return DividendRecord(
        month=month,
        year=year,
        amount=Decimal(amount),
        yield_percent=Decimal("0"),
        ex_dividend_date=date(year, month, 6),
        payment_date=date(year, month, 7),
        provenance=provenance,
    )


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults (dummy API key)."""
    return AppSettings(
        log_level="DEBUG",
        data=DataSourceSettings(
            finnhub_api_key="test-api-key",  # type: ignore[arg-type]
            finnhub_base_url="https://finnhub.test/api/v1",
            polygon_base_url="https://polygon.test",
            dividend_history_url="https://dividends.test/dividends",
            request_timeout_seconds=1.0,
        ),
    )


@pytest.fixture
def estimation_settings() -> EstimationSettings:
    """Default estimation heuristics."""
    return EstimationSettings()


@pytest.fixture
def history() -> list[DividendRecord]:
    """Static 15-month history ending Jun 2025, newest-first."""
    return fallback_dividend_history()


@pytest.fixture
def scripted_rng() -> type[ScriptedRandom]:
    """Factory for random sources that always draw the given value."""
    return ScriptedRandom


@pytest.fixture
def record_factory():
    """Factory for DividendRecord test data."""
    return make_record
