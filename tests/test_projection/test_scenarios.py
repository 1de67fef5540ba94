"""Tests for dividend scenario presets and reset."""

from decimal import Decimal

from divtracker.config import ProjectionSettings
from divtracker.dividends.yields import average_monthly_dividend
from divtracker.projection.scenarios import (
    NO_SCENARIO,
    bearish_scenario,
    bullish_scenario,
    custom_scenario,
    effective_dividend,
    peak_scenario,
    reset_scenario,
    trough_scenario,
)


class TestPresets:
    """Preset constructors derive their amount from the history."""

    def test_bullish_is_one_and_a_half_mean(self, history) -> None:
        scenario = bullish_scenario(history)
        assert scenario.is_custom
        assert scenario.name == "Bullish"
        assert scenario.monthly_dividend_amount == average_monthly_dividend(history) * Decimal("1.5")

    def test_bearish_is_half_mean(self, history) -> None:
        scenario = bearish_scenario(history)
        assert scenario.is_custom
        assert scenario.monthly_dividend_amount == average_monthly_dividend(history) * Decimal("0.5")

    def test_multipliers_from_settings(self, history) -> None:
        settings = ProjectionSettings(bullish_multiplier=Decimal("2"))
        scenario = bullish_scenario(history, settings)
        assert scenario.monthly_dividend_amount == average_monthly_dividend(history) * Decimal("2")

    def test_default_settings_read_at_call_time(self, history, monkeypatch) -> None:
        monkeypatch.setenv("PROJECTION_BULLISH_MULTIPLIER", "3")
        scenario = bullish_scenario(history)
        assert scenario.monthly_dividend_amount == average_monthly_dividend(history) * Decimal("3")

    def test_peak_and_trough(self, history) -> None:
        assert peak_scenario(history).monthly_dividend_amount == Decimal("4.4213")
        assert trough_scenario(history).monthly_dividend_amount == Decimal("1.3356")

    def test_peak_of_empty_series(self) -> None:
        assert peak_scenario([]).monthly_dividend_amount == Decimal("0")
        assert trough_scenario([]).monthly_dividend_amount == Decimal("0")

    def test_custom(self) -> None:
        scenario = custom_scenario(Decimal("2.75"), name="Mine")
        assert scenario.is_custom
        assert scenario.name == "Mine"
        assert scenario.monthly_dividend_amount == Decimal("2.75")


class TestReset:
    """Resetting drops back to the historical mean."""

    def test_bullish_then_reset(self, history) -> None:
        scenario = bullish_scenario(history)
        assert effective_dividend(history, scenario) != average_monthly_dividend(history)

        scenario = reset_scenario()

        assert scenario.is_custom is False
        assert scenario == NO_SCENARIO
        assert effective_dividend(history, scenario) == average_monthly_dividend(history)

    def test_no_scenario_means_mean(self, history) -> None:
        assert effective_dividend(history, None) == average_monthly_dividend(history)
