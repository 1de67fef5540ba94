"""Income projection for an investment amount.

Core formulas:
  shares_owned            = investment / price
  expected_monthly_income = effective_dividend * shares_owned
  expected_annual_income  = expected_monthly_income * 12
  effective_annual_yield  = effective_dividend * 12 / price * 100
  trailing_12m_return     = sum(newest <= 12 amounts) * shares_owned

All values are full-precision Decimal; rounding is left to display code.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from divtracker.dividends.yields import yield_percent
from divtracker.models import DividendRecord, MonthlyReturn, ProjectionResult, Scenario
from divtracker.months import add_months, month_name
from divtracker.projection.scenarios import effective_dividend

_MONTHS_PER_YEAR = 12


def compute_projection(
    investment_amount: Decimal,
    price: Decimal,
    series: Sequence[DividendRecord],
    scenario: Scenario | None = None,
    as_of: date | None = None,
    projected_months: int = _MONTHS_PER_YEAR,
) -> ProjectionResult | None:
    """Project dividend income for ``investment_amount`` at ``price``.

    Args:
        investment_amount: Cash invested.
        price: Current share price.
        series: Dividend history, newest-first.
        scenario: Active scenario; a custom one overrides the historical mean.
        as_of: First projected month for a custom scenario (today by default).
        projected_months: Number of forward months produced for a scenario.

    Returns:
        ProjectionResult, or None when price <= 0.
    """
    if price <= 0:
        return None

    shares_owned = investment_amount / price
    monthly_dividend = effective_dividend(series, scenario)

    expected_monthly_income = monthly_dividend * shares_owned
    annual_dividend = monthly_dividend * Decimal(_MONTHS_PER_YEAR)

    trailing_total = sum(
        (record.amount for record in series[:_MONTHS_PER_YEAR]), Decimal("0")
    )

    per_month = [
        MonthlyReturn(
            label=record.label,
            month=record.month,
            year=record.year,
            dividend=record.amount,
            amount=record.amount * shares_owned,
        )
        for record in series
    ]

    if scenario is not None and scenario.is_custom:
        start = as_of or date.today()
        for offset in range(projected_months):
            year, month = add_months(start.year, start.month, offset)
            per_month.append(
                MonthlyReturn(
                    label=f"{month_name(month)} {year}",
                    month=month,
                    year=year,
                    dividend=scenario.monthly_dividend_amount,
                    amount=scenario.monthly_dividend_amount * shares_owned,
                    is_projected=True,
                )
            )

    return ProjectionResult(
        shares_owned=shares_owned,
        effective_monthly_dividend=monthly_dividend,
        expected_monthly_income=expected_monthly_income,
        expected_annual_income=expected_monthly_income * Decimal(_MONTHS_PER_YEAR),
        effective_annual_yield_percent=yield_percent(annual_dividend, price),
        trailing_12_month_return=trailing_total * shares_owned,
        per_month_returns=tuple(per_month),
    )
