"""Abstract market data source interface.

Defines the contract for price and dividend providers. Core and refresh
code depend only on this interface, keeping provider-specific details in
the concrete implementation.
"""

from abc import ABC, abstractmethod

from divtracker.models import DividendRecord, PriceSnapshot


class DividendDataSource(ABC):
    """Abstract base class for price and dividend-history providers."""

    @abstractmethod
    async def fetch_price(self) -> PriceSnapshot:
        """Fetch the latest quote.

        Raises:
            FetchError: If every configured price provider fails.
        """
        ...

    @abstractmethod
    async def fetch_dividend_history(self) -> list[DividendRecord]:
        """Fetch the dividend history, newest-first.

        Raises:
            FetchError: If the provider fails or returns malformed rows.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
        ...
