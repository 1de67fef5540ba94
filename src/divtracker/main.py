"""Entry point for the dividend tracker.

Wires all components together, runs one refresh immediately, logs the
headline figures and a projection for the default investment, then keeps
refreshing on the configured interval until SIGINT/SIGTERM.

Component wiring order (in _build_components):
1. FinnhubDataSource (HTTP providers)
2. MarketDataService (last-known-good / static fallback)
3. DividendEstimator (weighted average + jitter)
4. ReconciliationPolicy (gap detection against today's date)
5. DividendRefresher (periodic snapshot replacement)
"""

import asyncio
import random
import signal
from typing import Any

import structlog

from divtracker.config import AppSettings
from divtracker.data.finnhub_client import FinnhubDataSource
from divtracker.data.market_data import MarketDataService
from divtracker.dividends.estimator import DividendEstimator
from divtracker.dividends.reconciliation import ReconciliationPolicy
from divtracker.logging import get_logger, setup_logging
from divtracker.models import DividendSnapshot
from divtracker.projection.calculator import compute_projection
from divtracker.refresher import DividendRefresher

logger = get_logger("divtracker.main")


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build the data source, estimation and refresh components from settings."""
    source = FinnhubDataSource(settings.data)
    market_data = MarketDataService(source)
    estimator = DividendEstimator(settings.estimation, random.Random())
    policy = ReconciliationPolicy(estimator, settings.estimation)

    def _log_projection(snapshot: DividendSnapshot) -> None:
        projection = compute_projection(
            settings.projection.default_investment,
            snapshot.price.current_price,
            snapshot.dividends,
            projected_months=settings.projection.projected_months,
        )
        if projection is None:
            logger.warning("projection_unavailable", price=str(snapshot.price.current_price))
            return
        latest = snapshot.dividends[0] if snapshot.dividends else None
        logger.info(
            "income_projection",
            investment=str(settings.projection.default_investment),
            shares=f"{projection.shares_owned:.2f}",
            monthly_income=f"{projection.expected_monthly_income:.2f}",
            annual_income=f"{projection.expected_annual_income:.2f}",
            trailing_12m=f"{projection.trailing_12_month_return:.2f}",
            latest=latest.label if latest else None,
            latest_status=latest.status.value if latest else None,
        )

    refresher = DividendRefresher(
        market_data,
        policy,
        interval_seconds=settings.refresh.interval_seconds,
        on_refresh=_log_projection,
    )

    return {
        "source": source,
        "market_data": market_data,
        "estimator": estimator,
        "policy": policy,
        "refresher": refresher,
    }


def _setup_signal_handlers(stop_event: asyncio.Event) -> None:
    """Register SIGINT/SIGTERM to request a graceful shutdown."""
    loop = asyncio.get_running_loop()

    def _graceful_handler() -> None:
        logger.info("graceful_shutdown_signal")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _graceful_handler)


async def run() -> None:
    """Run the dividend tracker until a shutdown signal arrives."""
    settings = AppSettings()
    setup_logging(settings.log_level)
    structlog.contextvars.bind_contextvars(symbol=settings.data.symbol)

    components = _build_components(settings)
    refresher: DividendRefresher = components["refresher"]

    stop_event = asyncio.Event()
    _setup_signal_handlers(stop_event)

    logger.info(
        "dividend_tracker_starting",
        symbol=settings.data.symbol,
        refresh_interval=settings.refresh.interval_seconds,
    )

    try:
        if settings.refresh.enabled:
            await refresher.start()
            await stop_event.wait()
        else:
            await refresher.refresh_once()
    finally:
        await refresher.stop()
        await components["source"].close()
        logger.info("dividend_tracker_stopped")


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
