"""Per-refresh reconciliation of the dividend series against today's date.

Decides whether the current (or next) month's dividend is missing and,
if so, prepends a synthesized record from the DividendEstimator.

Evaluation order for one refresh:
  1. Current month present            -> nothing to do for this month
  2. On or after the cutoff (12th)    -> always estimate, tag ESTIMATED (terminal)
  3. Inside the announcement window   -> 30% chance, tag ANNOUNCED (terminal)
  4. Day >= 25 and next month missing -> 25% chance inside next month's
                                         window, tag ANNOUNCED + early marker

Expected ex-dividend date is approximated as the 6th; the announcement
window runs from 12 to 3 days before it. The heuristic is kept as-is even
though real ex-dates can drift outside the 5th-8th.
"""

from collections.abc import Sequence
from datetime import date, timedelta
from decimal import Decimal

from divtracker.config import EstimationSettings
from divtracker.dividends.estimator import DividendEstimator
from divtracker.logging import get_logger
from divtracker.models import DividendRecord, Provenance
from divtracker.months import Clock, add_months, month_name, system_clock

logger = get_logger(__name__)


def has_record(series: Sequence[DividendRecord], year: int, month: int) -> bool:
    """True if the series already holds a record for (year, month)."""
    return any(record.is_for(year, month) for record in series)


class ReconciliationPolicy:
    """Fills detected gaps in the newest months of a dividend series.

    Pure apart from the estimator's random source and the injected clock.
    Always returns a new tuple; the input series is never modified.

    Args:
        estimator: Produces synthetic records (and owns the random source).
        settings: Cutoff day, window offsets and announcement odds.
        clock: Returns today's date. Defaults to the system clock.
    """

    def __init__(
        self,
        estimator: DividendEstimator,
        settings: EstimationSettings,
        clock: Clock = system_clock,
    ) -> None:
        self._estimator = estimator
        self._settings = settings
        self._clock = clock

    # ──────────────────────────────────────────────
    # Date-window tests
    # ──────────────────────────────────────────────

    def is_in_announcement_period(self, today: date, year: int, month: int) -> bool:
        """Whether ``today`` falls in the announcement window for (year, month).

        The window includes its start day but not its end day.
        """
        expected_ex = date(year, month, self._settings.assumed_ex_day)
        start = expected_ex - timedelta(days=self._settings.announcement_start_days_before)
        end = expected_ex - timedelta(days=self._settings.announcement_end_days_before)
        return start <= today < end

    def should_have_paid(self, today: date, year: int, month: int) -> bool:
        """Whether the payment cutoff day for (year, month) has been reached."""
        return today >= date(year, month, self._settings.payment_cutoff_day)

    # ──────────────────────────────────────────────
    # Public operations
    # ──────────────────────────────────────────────

    def reconcile(
        self,
        series: Sequence[DividendRecord],
        current_price: Decimal,
    ) -> tuple[DividendRecord, ...]:
        """Return the series with at most one synthesized record prepended.

        An empty series is returned unchanged since there is nothing to
        estimate from. Any unexpected error is logged and the input is
        returned as-is.
        """
        current = tuple(series)
        if not current:
            logger.warning("reconcile_skipped_empty_series")
            return current

        try:
            return self._reconcile(current, current_price)
        except Exception:
            logger.error("reconcile_failed", exc_info=True)
            return current

    def force_update_current_month(
        self,
        series: Sequence[DividendRecord],
        current_price: Decimal,
    ) -> tuple[DividendRecord, ...]:
        """Replace the current month's record(s) with a fresh estimate.

        Removes every record for the current (month, year), estimates from
        what remains, tags the result UPDATED and prepends it.
        """
        today = self._clock()
        remaining = tuple(
            record for record in series if not record.is_for(today.year, today.month)
        )
        removed = len(series) - len(remaining)

        record = self._estimator.estimate_record(
            remaining, today.year, today.month, current_price, Provenance.UPDATED
        )
        logger.info(
            "dividend_force_updated",
            month=record.label,
            amount=str(record.amount),
            removed=removed,
        )
        return (record, *remaining)

    # ──────────────────────────────────────────────
    # Internal
    # ──────────────────────────────────────────────

    def _reconcile(
        self,
        series: tuple[DividendRecord, ...],
        current_price: Decimal,
    ) -> tuple[DividendRecord, ...]:
        today = self._clock()
        year, month = today.year, today.month

        if not has_record(series, year, month):
            if self.should_have_paid(today, year, month):
                logger.info(
                    "dividend_missing_adding_estimate",
                    month=month_name(month),
                    year=year,
                )
                return self._prepend(series, year, month, current_price, Provenance.ESTIMATED)

            if self.is_in_announcement_period(today, year, month) and self._chance(
                self._settings.announcement_probability
            ):
                logger.info(
                    "dividend_announcement_simulated",
                    month=month_name(month),
                    year=year,
                )
                return self._prepend(series, year, month, current_price, Provenance.ANNOUNCED)

        next_year, next_month = add_months(year, month, 1)
        if today.day >= self._settings.early_check_day and not has_record(
            series, next_year, next_month
        ):
            if self.is_in_announcement_period(today, next_year, next_month) and self._chance(
                self._settings.early_announcement_probability
            ):
                logger.info(
                    "dividend_early_announcement_simulated",
                    month=month_name(next_month),
                    year=next_year,
                )
                return self._prepend(
                    series,
                    next_year,
                    next_month,
                    current_price,
                    Provenance.ANNOUNCED,
                    early_announcement=True,
                )

        return series

    def _prepend(
        self,
        series: tuple[DividendRecord, ...],
        year: int,
        month: int,
        price: Decimal,
        provenance: Provenance,
        early_announcement: bool = False,
    ) -> tuple[DividendRecord, ...]:
        record = self._estimator.estimate_record(
            series, year, month, price, provenance, early_announcement
        )
        return (record, *series)

    def _chance(self, probability: Decimal) -> bool:
        return self._estimator.rng.random() < float(probability)
