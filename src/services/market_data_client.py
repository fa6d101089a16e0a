# coding: utf-8
"""
CoinGecko API client for the market dashboard
"""
from typing import Any, Dict, List, Optional, Sequence, Union
from urllib.parse import quote

import aiohttp
from loguru import logger
from pydantic import ValidationError

from config.config import (
    COINGECKO_API_KEY,
    COINGECKO_BASE_URL,
    COINGECKO_MAX_RETRIES,
    COINGECKO_MIN_INTERVAL_MS,
    COINGECKO_RETRY_BASE_DELAY_MS,
    COINGECKO_TIMEOUT_MS,
    PRIORITY_COIN_ID,
)
from src.core.enums import HistoryDays
from src.services.errors import (
    ClientError,
    InvalidRequestError,
    MarketDataError,
    NotFoundError,
    error_for_status,
)
from src.services.fallback_synthesizer import FallbackSynthesizer
from src.services.models import CoinDetail, MarketListOptions, MarketSnapshot, PriceSeries
from src.services.request_pacer import RequestPacer
from src.services.retry_policy import RetryPolicy


HISTORY_INTERVALS = ("daily", "hourly")


def _flag(value: bool) -> str:
    return "true" if value else "false"


class MarketDataClient:
    """
    Client for fetching cryptocurrency data from CoinGecko API

    Features:
    - Market listings, coin details and historical series
    - Simple price lookup, search, trending and global stats
    - Request pacing shared across all callers
    - Automatic retry with exponential backoff for 429 and 5xx
    - Synthetic fallback for listing, detail and history
    """

    def __init__(
        self,
        pacer: Optional[RequestPacer] = None,
        retry_policy: Optional[RetryPolicy] = None,
        synthesizer: Optional[FallbackSynthesizer] = None,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ):
        """
        Initialize client

        Args:
            pacer: Shared request pacer (one per process in production)
            retry_policy: Retry policy for transient failures
            synthesizer: Offline data source
            base_url: API base URL (default: COINGECKO_BASE_URL)
            api_key: Demo API key, sent as a header when set
            timeout_ms: Timeout for a single HTTP call
        """
        self.base_url = (base_url or COINGECKO_BASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else COINGECKO_API_KEY
        self.timeout = aiohttp.ClientTimeout(
            total=(COINGECKO_TIMEOUT_MS if timeout_ms is None else timeout_ms) / 1000
        )

        self.pacer = pacer or RequestPacer(min_interval=COINGECKO_MIN_INTERVAL_MS / 1000)
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=COINGECKO_MAX_RETRIES,
            base_delay=COINGECKO_RETRY_BASE_DELAY_MS / 1000,
        )
        self.synthesizer = synthesizer or FallbackSynthesizer(priority_coin_id=PRIORITY_COIN_ID)

        logger.info(
            f"Market data client initialized for {self.base_url} "
            f"(min interval: {self.pacer.min_interval:.2f}s, "
            f"retries: {self.retry_policy.max_attempts}, "
            f"API key: {'configured' if self.has_api_key() else 'not configured'})"
        )

    def has_api_key(self) -> bool:
        """Check if API key is configured"""
        return bool(self.api_key)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-cg-demo-api-key"] = self.api_key
        return headers

    async def _fetch(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Perform one HTTP GET against the API

        Raises:
            MarketDataError: Classified non-success status
            aiohttp.ClientError, asyncio.TimeoutError: Transport failures
            json.JSONDecodeError: Body is not JSON (classified as ClientError)
        """
        url = f"{self.base_url}{endpoint}"

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.get(url, params=params or {}, headers=self._headers()) as response:
                if response.status == 200:
                    return await response.json()

                detail = (await response.text())[:200]
                raise error_for_status(response.status, response.headers, detail)

    async def _request(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Paced, retried request

        The pacer is acquired before every attempt, retries included.

        Raises:
            MarketDataError: Classified failure after retries
        """

        async def attempt() -> Any:
            await self.pacer.acquire()
            logger.debug(f"GET {endpoint} {params or {}}")
            return await self._fetch(endpoint, params)

        return await self.retry_policy.execute(attempt)

    # ------------------------------------------------------------------
    # Fallback-backed endpoints
    # ------------------------------------------------------------------

    async def list_markets(
        self, options: Optional[MarketListOptions] = None, **overrides: Any
    ) -> List[MarketSnapshot]:
        """
        Get market data for cryptocurrencies (/coins/markets)

        Args:
            options: Query options
            **overrides: Individual option overrides (vs_currency, order,
                per_page, page, sparkline, price_change_percentage)

        Returns:
            Rows sorted per the requested order. Falls back to the synthetic
            listing when the API is unavailable.

        Raises:
            InvalidRequestError: Malformed options
        """
        opts = MarketListOptions.build(options, **overrides)

        try:
            data = await self._request("/coins/markets", opts.to_params())
            if not isinstance(data, list):
                raise ClientError(f"Unexpected /coins/markets payload: {type(data).__name__}")

            rows: List[MarketSnapshot] = []
            seen = set()
            for row in data:
                snapshot = MarketSnapshot.model_validate(row)
                if snapshot.id in seen:
                    continue
                seen.add(snapshot.id)
                rows.append(snapshot)
        except (MarketDataError, ValidationError) as e:
            logger.error(f"Error fetching coins markets: {e}. Falling back to synthetic data")
            return self.synthesizer.listing(opts.per_page)

        return rows

    async def get_detail(
        self,
        coin_id: str,
        localization: bool = False,
        tickers: bool = False,
        market_data: bool = True,
        community_data: bool = True,
        developer_data: bool = True,
        sparkline: bool = False,
    ) -> CoinDetail:
        """
        Get detailed information about a coin (/coins/{id})

        Args:
            coin_id: Coin ID (e.g., 'bitcoin')
            localization: Include localized names/descriptions
            tickers: Include exchange tickers
            market_data: Include market data
            community_data: Include community statistics
            developer_data: Include developer statistics
            sparkline: Include 7d sparkline

        Returns:
            CoinDetail

        Raises:
            NotFoundError: Unknown coin (live 404, or no synthetic record
                when the API is unavailable)
        """
        if not coin_id:
            raise InvalidRequestError("coin_id is required")

        params = {
            "localization": _flag(localization),
            "tickers": _flag(tickers),
            "market_data": _flag(market_data),
            "community_data": _flag(community_data),
            "developer_data": _flag(developer_data),
            "sparkline": _flag(sparkline),
        }

        try:
            data = await self._request(f"/coins/{quote(coin_id, safe='')}", params)
            detail = CoinDetail.model_validate(data)
        except NotFoundError:
            logger.warning(f"Coin '{coin_id}' not found")
            raise
        except (MarketDataError, ValidationError) as e:
            logger.error(f"Error fetching coin detail for {coin_id}: {e}. Falling back to synthetic data")
            detail = self.synthesizer.detail(coin_id)
            if detail is None:
                raise NotFoundError(f"Coin '{coin_id}' not found in synthetic catalog") from e
            return detail

        return detail

    async def get_history(
        self,
        coin_id: str,
        vs_currency: str = "usd",
        days: Union[HistoryDays, str, int] = HistoryDays.ONE_WEEK,
        interval: Optional[str] = "daily",
    ) -> PriceSeries:
        """
        Get historical market data (/coins/{id}/market_chart)

        Args:
            coin_id: Coin ID
            vs_currency: Currency to compare against
            days: 1, 7, 14, 30, 90, 180, 365 or "max"
            interval: "daily", "hourly" or None for automatic granularity

        Returns:
            PriceSeries with aligned prices, volumes and market caps

        Raises:
            InvalidRequestError: Unsupported days/interval
            NotFoundError: Live 404 for a coin outside the synthetic catalog
        """
        if not coin_id:
            raise InvalidRequestError("coin_id is required")

        raw_days = days.value if isinstance(days, HistoryDays) else str(days).strip().lower()
        try:
            horizon = HistoryDays(raw_days)
        except ValueError as e:
            allowed = ", ".join(d.value for d in HistoryDays)
            raise InvalidRequestError(f"Unsupported days '{days}' (allowed: {allowed})") from e

        if interval and interval not in HISTORY_INTERVALS:
            raise InvalidRequestError(f"Unsupported interval '{interval}'")

        params = {"vs_currency": vs_currency.lower(), "days": horizon.value}
        if interval:
            params["interval"] = interval

        try:
            data = await self._request(f"/coins/{quote(coin_id, safe='')}/market_chart", params)
            if not isinstance(data, dict):
                raise ClientError(f"Unexpected market_chart payload: {type(data).__name__}")
            series = PriceSeries.from_payload(data)
        except NotFoundError:
            if not self.synthesizer.has_coin(coin_id):
                raise
            logger.warning(f"History for {coin_id} not found upstream, using synthetic series")
            return self.synthesizer.history(coin_id, horizon)
        except (MarketDataError, ValidationError) as e:
            logger.error(f"Error fetching coin history for {coin_id}: {e}. Falling back to synthetic data")
            return self.synthesizer.history(coin_id, horizon)

        return series

    # ------------------------------------------------------------------
    # Pass-through endpoints (errors propagate)
    # ------------------------------------------------------------------

    async def get_simple_prices(
        self,
        coin_ids: Sequence[str],
        vs_currencies: Sequence[str] = ("usd",),
        include_market_cap: bool = False,
        include_24hr_vol: bool = False,
        include_24hr_change: bool = False,
        include_last_updated_at: bool = False,
    ) -> Dict[str, Dict[str, Any]]:
        """
        Get current prices for multiple coins in one request (/simple/price)

        Returns:
            {"bitcoin": {"usd": 45000, "usd_market_cap": ..., "usd_24h_vol": ...,
                         "usd_24h_change": ..., "last_updated_at": ...}}

        Raises:
            MarketDataError: Classified failure (no fallback)
        """
        if not coin_ids:
            return {}

        params = {
            "ids": ",".join(coin_ids),
            "vs_currencies": ",".join(vs_currencies),
            "include_market_cap": _flag(include_market_cap),
            "include_24hr_vol": _flag(include_24hr_vol),
            "include_24hr_change": _flag(include_24hr_change),
            "include_last_updated_at": _flag(include_last_updated_at),
        }

        return await self._request("/simple/price", params) or {}

    async def search(self, query: str) -> Dict[str, Any]:
        """
        Search for coins, exchanges and categories by name or symbol (/search)
        """
        if not query or not query.strip():
            raise InvalidRequestError("query is required")

        return await self._request("/search", {"query": query.strip()})

    async def get_trending(self) -> Dict[str, Any]:
        """Get trending coins (/search/trending)"""
        return await self._request("/search/trending")

    async def get_global_stats(self) -> Dict[str, Any]:
        """Get global cryptocurrency statistics (/global)"""
        return await self._request("/global")

    async def get_coins_list(self, include_platform: bool = False) -> List[Dict[str, Any]]:
        """Get list of supported coins with id, symbol and name (/coins/list)"""
        return await self._request("/coins/list", {"include_platform": _flag(include_platform)})

    async def get_supported_currencies(self) -> List[str]:
        """Get supported vs currencies (/simple/supported_vs_currencies)"""
        return await self._request("/simple/supported_vs_currencies")

    def get_usage_stats(self) -> Dict[str, Any]:
        """
        Get current API usage statistics

        Example:
            {
                "rate_limiter": {
                    "last_request_time": 1234.5,
                    "time_until_next_request": 0.8,
                    "is_rate_limited": True,
                    "min_interval": 1.5
                },
                "max_retries": 3,
                "api_key_configured": False
            }
        """
        return {
            "rate_limiter": self.pacer.get_status().as_dict(),
            "max_retries": self.retry_policy.max_attempts,
            "api_key_configured": self.has_api_key(),
        }
