"""Dividend refresher -- periodically rebuilds the dividend snapshot.

A timer (default every 5 minutes) and manual triggers both run the same
refresh: fetch price and history, reconcile missing months, recompute
yields, then replace the stored snapshot wholesale.

Refreshes are not locked against each other. They are idempotent reads
followed by a full-state replace, so overlapping runs just mean the last
one to finish wins.
"""

import asyncio
import itertools
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

import structlog

from divtracker.data.market_data import MarketDataService
from divtracker.dividends.reconciliation import ReconciliationPolicy
from divtracker.dividends.yields import annualized_yield, average_monthly_dividend
from divtracker.logging import get_logger
from divtracker.models import DividendSnapshot

logger = get_logger(__name__)

_TWO_PLACES = Decimal("0.01")


class DividendRefresher:
    """Owns the current DividendSnapshot and the periodic refresh task.

    Args:
        market_data: Fallback-aware price and dividend access.
        policy: Reconciliation policy applied to each fetched series.
        interval_seconds: Delay between periodic refreshes.
        on_refresh: Optional callback receiving every new snapshot.
    """

    def __init__(
        self,
        market_data: MarketDataService,
        policy: ReconciliationPolicy,
        interval_seconds: float = 300.0,
        on_refresh: Callable[[DividendSnapshot], None] | None = None,
    ) -> None:
        self._market_data = market_data
        self._policy = policy
        self._interval = interval_seconds
        self._on_refresh = on_refresh
        self._snapshot: DividendSnapshot | None = None
        self._running = False
        self._stopped = False
        self._task: asyncio.Task | None = None  # type: ignore[type-arg]

    @property
    def snapshot(self) -> DividendSnapshot | None:
        """The most recently stored snapshot (None before the first refresh)."""
        return self._snapshot

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Begin periodic refreshes in the background."""
        if self._running:
            logger.warning("dividend_refresher_already_running")
            return
        self._running = True
        self._stopped = False
        self._task = asyncio.create_task(self._refresh_loop())
        logger.info("dividend_refresher_started", interval=self._interval)

    async def stop(self) -> None:
        """Clear the timer. Results of fetches still in flight are discarded."""
        self._running = False
        self._stopped = True
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("dividend_refresher_stopped")

    async def refresh_once(self) -> DividendSnapshot:
        """Run one full refresh and store the result.

        Returns:
            The freshly built snapshot (also returned when it was discarded
            because the refresher was stopped mid-fetch).
        """
        price = await self._market_data.get_price()
        history, used_fallback = await self._market_data.get_dividend_history()

        dividends = self._policy.reconcile(history, price.current_price)
        snapshot = DividendSnapshot(
            price=price,
            dividends=dividends,
            annualized_yield_percent=annualized_yield(dividends, price.current_price),
            average_monthly_dividend=average_monthly_dividend(dividends),
            refreshed_at=datetime.now(),
            used_fallback_history=used_fallback,
        )

        if self._stopped:
            logger.debug("dividend_refresh_discarded_after_stop")
            return snapshot

        self._store(snapshot)
        logger.info(
            "dividend_snapshot_refreshed",
            price=str(price.current_price),
            price_source=price.source.value,
            records=len(dividends),
            annualized_yield=str(snapshot.annualized_yield_percent.quantize(_TWO_PLACES)),
            fallback_history=used_fallback,
        )
        return snapshot

    def force_update(self) -> DividendSnapshot | None:
        """Re-estimate the current month on the stored snapshot.

        Returns:
            The replacement snapshot, or None if nothing has been loaded yet.
        """
        current = self._snapshot
        if current is None:
            logger.warning("force_update_without_snapshot")
            return None

        price = current.price.current_price
        dividends = self._policy.force_update_current_month(current.dividends, price)
        snapshot = DividendSnapshot(
            price=current.price,
            dividends=dividends,
            annualized_yield_percent=annualized_yield(dividends, price),
            average_monthly_dividend=average_monthly_dividend(dividends),
            refreshed_at=datetime.now(),
            used_fallback_history=current.used_fallback_history,
        )
        self._store(snapshot)
        return snapshot

    def _store(self, snapshot: DividendSnapshot) -> None:
        self._snapshot = snapshot
        if self._on_refresh is not None:
            self._on_refresh(snapshot)

    async def _refresh_loop(self) -> None:
        """Main loop: refresh, then sleep for the interval.

        Each cycle binds ``refresh_cycle`` into the logging context.
        """
        for cycle in itertools.count(1):
            if not self._running:
                break
            structlog.contextvars.bind_contextvars(refresh_cycle=cycle)
            try:
                await self.refresh_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.warning("dividend_refresh_error", exc_info=True)
            if self._running:
                await asyncio.sleep(self._interval)

