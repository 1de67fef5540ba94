"""Dividend series logic -- yields, estimation, and gap reconciliation."""

from divtracker.dividends.estimator import DividendEstimator
from divtracker.dividends.reconciliation import ReconciliationPolicy, has_record
from divtracker.dividends.yields import (
    annualized_yield,
    average_monthly_dividend,
    yield_percent,
)

__all__ = [
    "DividendEstimator",
    "ReconciliationPolicy",
    "annualized_yield",
    "average_monthly_dividend",
    "has_record",
    "yield_percent",
]
