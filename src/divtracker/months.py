"""Month naming, month arithmetic and the injectable clock."""

from collections.abc import Callable
from datetime import date

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

#: Returns "today". Reconciliation takes one so tests can pin the date.
Clock = Callable[[], date]


def system_clock() -> date:
    """Today's date from the local wall clock."""
    return date.today()


def month_name(month: int) -> str:
    """Return the 3-letter name for a 1-12 month index."""
    return MONTH_NAMES[month - 1]


def month_index(month: int | str) -> int:
    """Normalize a 3-letter month name or 1-12 index to an int index.

    Raises:
        ValueError: If the value is not a recognised month.
    """
    if isinstance(month, int):
        if 1 <= month <= 12:
            return month
        raise ValueError(f"month index out of range: {month}")

    text = str(month).strip()
    if text.isdigit():
        return month_index(int(text))
    try:
        return MONTH_NAMES.index(text[:3].title()) + 1
    except ValueError:
        raise ValueError(f"unknown month: {month!r}") from None


def add_months(year: int, month: int, count: int) -> tuple[int, int]:
    """Shift (year, month) by ``count`` months, rolling the year over."""
    offset = year * 12 + (month - 1) + count
    return offset // 12, offset % 12 + 1
