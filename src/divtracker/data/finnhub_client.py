"""HTTP data source: Finnhub quotes with a Polygon backup, plus dividend history.

Price lookup order:
  1. Finnhub /quote              (c = current, pc = previous close, h, l)
  2. Polygon previous-day aggs   (results[0]: c, o, h, l; open stands in
                                  for previous close)
Both failing raises FetchError; the static fallback is applied one layer
up by MarketDataService.

All requests share one httpx.AsyncClient with a bounded timeout, so no
fetch can block a refresh indefinitely.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from divtracker.config import DataSourceSettings
from divtracker.data.sources import DividendDataSource
from divtracker.exceptions import FetchError
from divtracker.logging import get_logger
from divtracker.models import DividendRecord, PriceSnapshot, PriceSource, Provenance
from divtracker.months import month_index

logger = get_logger(__name__)


def _to_decimal(raw: Any, field_name: str) -> Decimal:
    if raw is None:
        raise FetchError(f"missing field: {field_name}")
    try:
        return Decimal(str(raw))
    except InvalidOperation as exc:
        raise FetchError(f"invalid number for {field_name}: {raw!r}") from exc


def parse_dividend_row(row: dict[str, Any]) -> DividendRecord:
    """Convert one provider row into a DividendRecord.

    Expected keys: month ("Jun" or 6), year, dividend, yield, exDate, payDate.

    Raises:
        FetchError: On missing or malformed fields.
    """
    try:
        month = month_index(row["month"])
        year = int(row["year"])
        ex_date = date.fromisoformat(str(row["exDate"]))
        pay_date = date.fromisoformat(str(row["payDate"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise FetchError(f"malformed dividend row: {row!r}") from exc

    if pay_date < ex_date:
        raise FetchError(f"payment date before ex-dividend date: {row!r}")

    return DividendRecord(
        month=month,
        year=year,
        amount=_to_decimal(row.get("dividend"), "dividend"),
        yield_percent=_to_decimal(row.get("yield", "0"), "yield"),
        ex_dividend_date=ex_date,
        payment_date=pay_date,
        provenance=Provenance.CONFIRMED,
    )


class FinnhubDataSource(DividendDataSource):
    """Concrete data source backed by Finnhub, Polygon and a dividend endpoint.

    Args:
        settings: Symbol, API keys, base URLs and request timeout.
        client: Optional preconfigured httpx client (tests inject a
            MockTransport-backed one).
    """

    def __init__(
        self,
        settings: DataSourceSettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout_seconds)
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_price(self) -> PriceSnapshot:
        try:
            logger.debug("fetching_price", provider="finnhub", symbol=self._settings.symbol)
            return await self._fetch_finnhub_quote()
        except FetchError as exc:
            logger.warning("finnhub_price_failed", error=str(exc))

        try:
            logger.debug("fetching_price", provider="polygon", symbol=self._settings.symbol)
            return await self._fetch_polygon_previous()
        except FetchError as exc:
            logger.warning("polygon_price_failed", error=str(exc))
            raise FetchError("all price providers failed") from exc

    async def fetch_dividend_history(self) -> list[DividendRecord]:
        url = f"{self._settings.dividend_history_url.rstrip('/')}/{self._settings.symbol}"
        payload = await self._get_json(url)

        rows = payload.get("dividends") if isinstance(payload, dict) else None
        if not isinstance(rows, list):
            raise FetchError("dividend response has no 'dividends' list")

        records: list[DividendRecord] = []
        seen: set[tuple[int, int]] = set()
        for row in rows:
            record = parse_dividend_row(row)
            key = (record.year, record.month)
            if key in seen:
                logger.warning("duplicate_dividend_month_dropped", month=record.label)
                continue
            seen.add(key)
            records.append(record)
        records.sort(key=lambda r: (r.year, r.month), reverse=True)
        logger.debug("dividend_history_fetched", count=len(records))
        return records

    # ──────────────────────────────────────────────
    # Providers
    # ──────────────────────────────────────────────

    async def _fetch_finnhub_quote(self) -> PriceSnapshot:
        url = f"{self._settings.finnhub_base_url.rstrip('/')}/quote"
        data = await self._get_json(
            url,
            params={
                "symbol": self._settings.symbol,
                "token": self._settings.finnhub_api_key.get_secret_value(),
            },
        )
        if not isinstance(data, dict):
            raise FetchError("finnhub quote is not an object")
        if data.get("error"):
            raise FetchError(f"finnhub error: {data['error']}")

        current = _to_decimal(data.get("c"), "c")
        if current <= 0:
            # Finnhub answers unknown symbols with an all-zero quote
            raise FetchError("finnhub returned no price")

        return PriceSnapshot(
            current_price=current,
            previous_close=_to_decimal(data.get("pc"), "pc"),
            day_high=_to_decimal(data.get("h", current), "h"),
            day_low=_to_decimal(data.get("l", current), "l"),
            timestamp=datetime.now(),
            source=PriceSource.LIVE,
        )

    async def _fetch_polygon_previous(self) -> PriceSnapshot:
        url = (
            f"{self._settings.polygon_base_url.rstrip('/')}"
            f"/v2/aggs/ticker/{self._settings.symbol}/prev"
        )
        data = await self._get_json(
            url, params={"apiKey": self._settings.polygon_api_key.get_secret_value()}
        )
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list) or not results:
            raise FetchError("polygon returned no results")

        bar = results[0]
        if not isinstance(bar, dict):
            raise FetchError("polygon result is not an object")
        current = _to_decimal(bar.get("c"), "c")
        return PriceSnapshot(
            current_price=current,
            previous_close=_to_decimal(bar.get("o"), "o"),
            day_high=_to_decimal(bar.get("h", current), "h"),
            day_low=_to_decimal(bar.get("l", current), "l"),
            timestamp=datetime.now(),
            source=PriceSource.LIVE,
        )

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise FetchError(f"request to {url} failed: {exc}") from exc

        if response.status_code >= 400:
            raise FetchError(f"{url} returned HTTP {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"{url} returned invalid JSON") from exc
