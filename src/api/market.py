"""
Market API Endpoints
Provides cryptocurrency market data for the dashboard
"""

from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger

from src.core.enums import MarketOrder
from src.services.errors import InvalidRequestError, MarketDataError
from src.services.market_data_client import MarketDataClient
from src.services.models import CoinDetail, MarketSnapshot, PriceSeries
from src.services.priority_composer import PriorityComposer

# Create router
router = APIRouter(prefix="/market", tags=["market"])

# One client per process: every endpoint shares its request pacer
_market_client: Optional[MarketDataClient] = None
_priority_composer: Optional[PriorityComposer] = None


def get_market_client() -> MarketDataClient:
    global _market_client
    if _market_client is None:
        _market_client = MarketDataClient()
    return _market_client


def get_priority_composer(
    client: MarketDataClient = Depends(get_market_client),
) -> PriorityComposer:
    global _priority_composer
    if _priority_composer is None or _priority_composer.client is not client:
        _priority_composer = PriorityComposer(client)
    return _priority_composer


def _to_http_error(error: Union[InvalidRequestError, MarketDataError]) -> HTTPException:
    """Render a failure as an HTTP error with a user-safe message"""
    if isinstance(error, InvalidRequestError):
        return HTTPException(status_code=422, detail=str(error))

    logger.warning(f"Market data error ({error.kind.value}): {error}")
    return HTTPException(status_code=error.api_status, detail=error.user_message)


@router.get("/coins", response_model=List[MarketSnapshot])
async def get_coins(
    vs_currency: str = "usd",
    order: MarketOrder = MarketOrder.MARKET_CAP_DESC,
    per_page: int = Query(100, ge=1),
    page: int = Query(1, ge=1),
    sparkline: bool = False,
    price_change_percentage: Optional[str] = None,
    composer: PriorityComposer = Depends(get_priority_composer),
) -> List[MarketSnapshot]:
    """
    Get market listing with the priority coin first (public endpoint)
    """
    try:
        return await composer.list_markets_with_priority(
            vs_currency=vs_currency,
            order=order,
            per_page=per_page,
            page=page,
            sparkline=sparkline,
            price_change_percentage=price_change_percentage,
        )
    except (InvalidRequestError, MarketDataError) as e:
        raise _to_http_error(e)


@router.get("/coins/{coin_id}", response_model=CoinDetail)
async def get_coin_detail(
    coin_id: str,
    client: MarketDataClient = Depends(get_market_client),
) -> CoinDetail:
    """
    Get detailed information about a coin

    Returns 404 with "Coin not found. Please check the coin ID." for unknown coins.
    """
    try:
        return await client.get_detail(coin_id)
    except (InvalidRequestError, MarketDataError) as e:
        raise _to_http_error(e)


@router.get("/coins/{coin_id}/history", response_model=PriceSeries)
async def get_coin_history(
    coin_id: str,
    vs_currency: str = "usd",
    days: str = "7",
    interval: Optional[str] = "daily",
    client: MarketDataClient = Depends(get_market_client),
) -> PriceSeries:
    """
    Get price, volume and market cap history for a coin
    """
    try:
        return await client.get_history(coin_id, vs_currency, days, interval)
    except (InvalidRequestError, MarketDataError) as e:
        raise _to_http_error(e)


@router.get("/search")
async def search_coins(
    query: str,
    client: MarketDataClient = Depends(get_market_client),
) -> Dict[str, Any]:
    """Search coins by name or symbol"""
    try:
        return await client.search(query)
    except (InvalidRequestError, MarketDataError) as e:
        raise _to_http_error(e)


@router.get("/trending")
async def get_trending(
    client: MarketDataClient = Depends(get_market_client),
) -> Dict[str, Any]:
    """Get trending coins"""
    try:
        return await client.get_trending()
    except MarketDataError as e:
        raise _to_http_error(e)


@router.get("/global")
async def get_global(
    client: MarketDataClient = Depends(get_market_client),
) -> Dict[str, Any]:
    """Get global market statistics"""
    try:
        return await client.get_global_stats()
    except MarketDataError as e:
        raise _to_http_error(e)


@router.get("/rate-limit")
async def get_rate_limit_status(
    client: MarketDataClient = Depends(get_market_client),
) -> Dict[str, Any]:
    """
    Get current pacing status

    Returns:
        {
            "rate_limiter": {"time_until_next_request": 0.8, "is_rate_limited": true, ...},
            "max_retries": 3,
            "api_key_configured": false
        }
    """
    return client.get_usage_stats()
