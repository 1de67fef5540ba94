"""Market data layer -- providers, static fallback, and fallback-aware access."""

from divtracker.data.finnhub_client import FinnhubDataSource
from divtracker.data.market_data import MarketDataService
from divtracker.data.sources import DividendDataSource

__all__ = ["DividendDataSource", "FinnhubDataSource", "MarketDataService"]
