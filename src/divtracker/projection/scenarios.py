"""Preset and custom dividend scenarios for income projections.

Presets are derived from the historical series:
  bullish = 1.5 x mean    bearish = 0.5 x mean
  peak    = max amount    trough  = min amount
Resetting returns NO_SCENARIO, which projections treat as "use the mean".
"""

from collections.abc import Sequence
from decimal import Decimal

from divtracker.config import ProjectionSettings
from divtracker.dividends.yields import average_monthly_dividend
from divtracker.models import DividendRecord, Scenario

NO_SCENARIO = Scenario(name="", monthly_dividend_amount=Decimal("0"), is_custom=False)


def custom_scenario(amount: Decimal, name: str = "Custom") -> Scenario:
    return Scenario(name=name, monthly_dividend_amount=amount, is_custom=True)


def bullish_scenario(
    series: Sequence[DividendRecord],
    settings: ProjectionSettings | None = None,
) -> Scenario:
    """Historical mean scaled up by the bullish multiplier."""
    if settings is None:
        settings = ProjectionSettings()
    amount = average_monthly_dividend(series) * settings.bullish_multiplier
    return custom_scenario(amount, name="Bullish")


def bearish_scenario(
    series: Sequence[DividendRecord],
    settings: ProjectionSettings | None = None,
) -> Scenario:
    """Historical mean scaled down by the bearish multiplier."""
    if settings is None:
        settings = ProjectionSettings()
    amount = average_monthly_dividend(series) * settings.bearish_multiplier
    return custom_scenario(amount, name="Bearish")


def peak_scenario(series: Sequence[DividendRecord]) -> Scenario:
    """Largest historical payout (0 for an empty series)."""
    amount = max((record.amount for record in series), default=Decimal("0"))
    return custom_scenario(amount, name="Peak")


def trough_scenario(series: Sequence[DividendRecord]) -> Scenario:
    """Smallest historical payout (0 for an empty series)."""
    amount = min((record.amount for record in series), default=Decimal("0"))
    return custom_scenario(amount, name="Trough")


def reset_scenario() -> Scenario:
    return NO_SCENARIO


def effective_dividend(
    series: Sequence[DividendRecord],
    scenario: Scenario | None = None,
) -> Decimal:
    """Monthly dividend a projection should use.

    The scenario's flat amount when a custom scenario is active,
    otherwise the unweighted historical mean.
    """
    if scenario is not None and scenario.is_custom:
        return scenario.monthly_dividend_amount
    return average_monthly_dividend(series)
