"""Dividend yield arithmetic.

Pure Decimal functions. Non-positive prices and empty series produce a
zero yield rather than raising, so callers can render neutral values.

Formulas:
  yield_percent = amount / price * 100
  annualized    = sum(newest <= 12 amounts) * (12 / count) / price * 100
"""

from collections.abc import Sequence
from decimal import Decimal

from divtracker.models import DividendRecord

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")
_MONTHS_PER_YEAR = 12


def yield_percent(amount: Decimal, price: Decimal) -> Decimal:
    """Return a single dividend as a percentage of price (0 if price <= 0)."""
    if price <= 0:
        return _ZERO
    return amount / price * _HUNDRED


def annualized_yield(series: Sequence[DividendRecord], price: Decimal) -> Decimal:
    """Annualize the trailing dividends against the current price.

    Uses up to the 12 most recent records. A partial year is scaled
    linearly to twelve months.

    Args:
        series: Dividend records, newest-first.
        price: Current share price.

    Returns:
        Annualized yield percentage, or 0 for an empty series or price <= 0.
    """
    if not series or price <= 0:
        return _ZERO

    recent = series[:_MONTHS_PER_YEAR]
    total = sum((record.amount for record in recent), _ZERO)
    annual_factor = Decimal(_MONTHS_PER_YEAR) / Decimal(len(recent))
    return total * annual_factor / price * _HUNDRED


def average_monthly_dividend(series: Sequence[DividendRecord]) -> Decimal:
    """Unweighted mean of every amount in the series (0 when empty)."""
    if not series:
        return _ZERO
    total = sum((record.amount for record in series), _ZERO)
    return total / Decimal(len(series))
