"""Market data service that never fails a refresh.

Wraps a DividendDataSource and recovers every FetchError locally:
the last value that was fetched successfully is reused, and before the
first success the static fallback tables are used instead.
"""

from dataclasses import replace

from divtracker.data.fallback import fallback_dividend_history, fallback_price
from divtracker.data.sources import DividendDataSource
from divtracker.exceptions import FetchError
from divtracker.logging import get_logger
from divtracker.models import DividendRecord, PriceSnapshot, PriceSource

logger = get_logger(__name__)


class MarketDataService:
    """Price and dividend access with last-known-good fallback.

    Args:
        source: The provider to query on each call.
    """

    def __init__(self, source: DividendDataSource) -> None:
        self._source = source
        self._last_price: PriceSnapshot | None = None
        self._last_history: tuple[DividendRecord, ...] | None = None

    @property
    def source(self) -> DividendDataSource:
        return self._source

    async def get_price(self) -> PriceSnapshot:
        """Latest quote, or a FALLBACK-tagged substitute if the fetch fails."""
        try:
            price = await self._source.fetch_price()
        except FetchError as exc:
            if self._last_price is not None:
                logger.warning("price_fetch_failed_using_last_known", error=str(exc))
                return self._as_fallback(self._last_price)
            logger.warning("price_fetch_failed_using_static_fallback", error=str(exc))
            return fallback_price()

        self._last_price = price
        return price

    async def get_dividend_history(self) -> tuple[tuple[DividendRecord, ...], bool]:
        """Dividend history plus a flag that is True when fallback data was used."""
        try:
            history = tuple(await self._source.fetch_dividend_history())
        except FetchError as exc:
            if self._last_history is not None:
                logger.warning("dividend_fetch_failed_using_last_known", error=str(exc))
                return self._last_history, True
            logger.warning("dividend_fetch_failed_using_static_fallback", error=str(exc))
            return tuple(fallback_dividend_history()), True

        self._last_history = history
        return history, False

    @staticmethod
    def _as_fallback(price: PriceSnapshot) -> PriceSnapshot:
        return replace(price, source=PriceSource.FALLBACK)
