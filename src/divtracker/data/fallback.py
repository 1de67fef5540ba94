"""Static last-known-good data used when every provider is unreachable."""

from datetime import date, datetime
from decimal import Decimal

from divtracker.models import DividendRecord, PriceSnapshot, PriceSource
from divtracker.months import month_index

# (month, year, dividend, yield %, ex-date, pay-date), newest-first
_HISTORY_ROWS = [
    ("Jun", 2025, "1.8967", "7.55", "2025-06-06", "2025-06-09"),
    ("May", 2025, "2.3734", "9.45", "2025-05-08", "2025-05-09"),
    ("Apr", 2025, "1.3356", "5.32", "2025-04-10", "2025-04-11"),
    ("Mar", 2025, "1.3775", "5.48", "2025-03-13", "2025-03-14"),
    ("Feb", 2025, "2.0216", "8.05", "2025-02-13", "2025-02-14"),
    ("Jan", 2025, "2.2792", "9.07", "2025-01-16", "2025-01-17"),
    ("Dec", 2024, "3.0821", "12.27", "2024-12-19", "2024-12-20"),
    ("Nov", 2024, "4.4213", "17.60", "2024-11-21", "2024-11-22"),
    ("Oct", 2024, "4.1981", "16.71", "2024-10-24", "2024-10-25"),
    ("Sep", 2024, "1.8541", "7.38", "2024-09-06", "2024-09-09"),
    ("Aug", 2024, "1.9405", "7.72", "2024-08-07", "2024-08-08"),
    ("Jul", 2024, "2.3320", "9.28", "2024-07-05", "2024-07-08"),
    ("Jun", 2024, "3.0300", "12.06", "2024-06-06", "2024-06-07"),
    ("May", 2024, "2.5239", "10.05", "2024-05-06", "2024-05-08"),
    ("Apr", 2024, "4.1286", "16.44", "2024-04-04", "2024-04-08"),
]

FALLBACK_PRICE = Decimal("25.12")
FALLBACK_PREVIOUS_CLOSE = Decimal("24.70")
FALLBACK_DAY_HIGH = Decimal("25.45")
FALLBACK_DAY_LOW = Decimal("24.65")


def fallback_price() -> PriceSnapshot:
    """Last known quote, tagged as fallback and stamped with the current time."""
    return PriceSnapshot(
        current_price=FALLBACK_PRICE,
        previous_close=FALLBACK_PREVIOUS_CLOSE,
        day_high=FALLBACK_DAY_HIGH,
        day_low=FALLBACK_DAY_LOW,
        timestamp=datetime.now(),
        source=PriceSource.FALLBACK,
    )


def fallback_dividend_history() -> list[DividendRecord]:
    """Static confirmed history, newest-first."""
    return [
        DividendRecord(
            month=month_index(month),
            year=year,
            amount=Decimal(amount),
            yield_percent=Decimal(yield_pct),
            ex_dividend_date=date.fromisoformat(ex_date),
            payment_date=date.fromisoformat(pay_date),
        )
        for month, year, amount, yield_pct, ex_date, pay_date in _HISTORY_ROWS
    ]
