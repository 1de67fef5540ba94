"""Dividend estimation for months without official data.

The fund's distributions swing widely month to month, so the estimate is
a recency-weighted average of the last few payouts with a random
multiplicative jitter on top. It is a placeholder for display, not a
forecast.

Randomness comes from an injected ``random.Random`` so tests can seed or
script the outcome.
"""

import random
from collections.abc import Sequence
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from divtracker.config import EstimationSettings
from divtracker.dividends.yields import yield_percent
from divtracker.models import DividendRecord, Provenance

_AMOUNT_QUANTIZE = Decimal("0.0001")
_YIELD_QUANTIZE = Decimal("0.01")


class DividendEstimator:
    """Synthesizes a plausible DividendRecord for a target month.

    Never mutates the series it is given; callers decide where the new
    record goes and which provenance it carries.

    Args:
        settings: Window size, jitter bounds and payout-day ranges.
        rng: Random source for jitter and payout dates.
    """

    def __init__(
        self,
        settings: EstimationSettings,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings
        self._rng = rng if rng is not None else random.Random()

    @property
    def rng(self) -> random.Random:
        return self._rng

    def base_expectation(self, series: Sequence[DividendRecord]) -> Decimal:
        """Weighted average of the newest ``window_size`` amounts.

        Position 0 (newest) gets weight ``window``, the next ``window - 1``
        and so on. With fewer records the window shrinks to fit.
        Returns 0 for an empty series.
        """
        recent = series[: self._settings.window_size]
        if not recent:
            return Decimal("0")

        window = len(recent)
        weighted_sum = Decimal("0")
        total_weight = Decimal("0")
        for i, record in enumerate(recent):
            weight = Decimal(window - i)
            weighted_sum += record.amount * weight
            total_weight += weight
        return weighted_sum / total_weight

    def expected_amount(
        self,
        series: Sequence[DividendRecord],
        target_month: int,
        target_year: int,
    ) -> Decimal:
        """Weighted base expectation scaled by a uniform jitter factor.

        The target month/year currently have no effect on the amount.
        """
        base = self.base_expectation(series)
        jitter = self._rng.uniform(
            float(self._settings.jitter_low), float(self._settings.jitter_high)
        )
        return base * Decimal(str(jitter))

    def expected_payout_dates(self, year: int, month: int) -> tuple[date, date]:
        """Draw an ex-dividend date and a payment date one or two days later.

        Returns:
            (ex_dividend_date, payment_date)
        """
        ex_day = self._rng.randint(self._settings.ex_day_min, self._settings.ex_day_max)
        offset = self._rng.randint(
            self._settings.payment_offset_min_days,
            self._settings.payment_offset_max_days,
        )
        ex_date = date(year, month, ex_day)
        return ex_date, ex_date + timedelta(days=offset)

    def estimate_record(
        self,
        series: Sequence[DividendRecord],
        year: int,
        month: int,
        price: Decimal,
        provenance: Provenance,
        early_announcement: bool = False,
    ) -> DividendRecord:
        """Build a complete synthetic record for (year, month).

        Amount is rounded to 4 places and yield to 2, matching the
        precision providers report.
        """
        amount = self.expected_amount(series, month, year).quantize(
            _AMOUNT_QUANTIZE, rounding=ROUND_HALF_UP
        )
        ex_date, pay_date = self.expected_payout_dates(year, month)
        return DividendRecord(
            month=month,
            year=year,
            amount=amount,
            yield_percent=yield_percent(amount, price).quantize(
                _YIELD_QUANTIZE, rounding=ROUND_HALF_UP
            ),
            ex_dividend_date=ex_date,
            payment_date=pay_date,
            provenance=provenance,
            early_announcement=early_announcement,
        )
