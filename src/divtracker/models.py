"""Shared data models for the dividend tracker.

CRITICAL: All monetary values use Decimal. Never use float for prices,
dividend amounts, or yields.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from divtracker.months import month_name


class Provenance(str, Enum):
    """How a dividend record was obtained."""

    CONFIRMED = "confirmed"
    ESTIMATED = "estimated"  # overdue, synthesized after the payment cutoff
    ANNOUNCED = "announced"  # simulated announcement inside the window
    UPDATED = "updated"  # manual force-update
    EARLY_ANNOUNCEMENT = "early_announcement"


class PriceSource(str, Enum):
    """Where a price snapshot came from."""

    LIVE = "live"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class DividendRecord:
    """One monthly distribution. Series are ordered newest-first."""

    month: int  # 1-12
    year: int
    amount: Decimal
    yield_percent: Decimal
    ex_dividend_date: date
    payment_date: date
    provenance: Provenance = Provenance.CONFIRMED
    early_announcement: bool = False

    @property
    def month_name(self) -> str:
        return month_name(self.month)

    @property
    def label(self) -> str:
        return f"{self.month_name} {self.year}"

    @property
    def status(self) -> Provenance:
        """Provenance for display, folding in the early-announcement marker."""
        if self.early_announcement:
            return Provenance.EARLY_ANNOUNCEMENT
        return self.provenance

    def is_for(self, year: int, month: int) -> bool:
        return self.year == year and self.month == month


@dataclass(frozen=True)
class PriceSnapshot:
    """Quote for the tracked fund at a point in time."""

    current_price: Decimal
    previous_close: Decimal
    day_high: Decimal
    day_low: Decimal
    timestamp: datetime
    source: PriceSource = PriceSource.LIVE

    @property
    def change(self) -> Decimal:
        return self.current_price - self.previous_close

    @property
    def percent_change(self) -> Decimal:
        if self.previous_close <= 0:
            return Decimal("0")
        return self.change / self.previous_close * Decimal("100")


@dataclass(frozen=True)
class Scenario:
    """User-chosen monthly dividend assumption for projections."""

    name: str
    monthly_dividend_amount: Decimal
    is_custom: bool


@dataclass(frozen=True)
class MonthlyReturn:
    """Income for one month: historical or projected from a scenario."""

    label: str
    month: int
    year: int
    dividend: Decimal
    amount: Decimal
    is_projected: bool = False


@dataclass(frozen=True)
class ProjectionResult:
    """Derived income figures for an investment amount. Never persisted."""

    shares_owned: Decimal
    effective_monthly_dividend: Decimal
    expected_monthly_income: Decimal
    expected_annual_income: Decimal
    effective_annual_yield_percent: Decimal
    trailing_12_month_return: Decimal
    per_month_returns: tuple[MonthlyReturn, ...] = ()


@dataclass(frozen=True)
class DividendSnapshot:
    """Result of one refresh cycle, replaced wholesale on each refresh."""

    price: PriceSnapshot
    dividends: tuple[DividendRecord, ...]
    annualized_yield_percent: Decimal
    average_monthly_dividend: Decimal
    refreshed_at: datetime = field(default_factory=datetime.now)
    used_fallback_history: bool = False
