"""
Unit tests for PriorityComposer
"""
import json
from unittest.mock import AsyncMock, patch

import pytest

from src.services.errors import InvalidRequestError, NetworkError, ServerError
from src.services.models import UNRANKED, MarketSnapshot
from src.services.priority_composer import PriorityComposer


def snapshot(coin_id, rank):
    return MarketSnapshot(id=coin_id, symbol=coin_id[:3], name=coin_id.title(),
                          current_price=float(rank), market_cap_rank=rank)


VANRY_PRICES = {
    "vanry": {
        "usd": 0.02,
        "usd_market_cap": 40000000,
        "usd_24h_vol": 1200000,
        "usd_24h_change": 1.8,
        "last_updated_at": 1704067200,
    }
}


@pytest.fixture
def composer(client):
    return PriorityComposer(client)


@pytest.mark.asyncio
async def test_priority_first_and_unique(client, composer):
    """Priority coin leads the listing even when upstream ranks it lower"""
    listing = [snapshot(f"coin-{i}", i) for i in range(1, 5)]
    listing.append(snapshot("vanry", 5))
    listing += [snapshot(f"coin-{i}", i) for i in range(6, 10)]

    with patch.object(client, "get_simple_prices", AsyncMock(return_value=VANRY_PRICES)) as prices, \
            patch.object(client, "list_markets", AsyncMock(return_value=listing)) as list_markets:
        result = await composer.list_markets_with_priority(per_page=10)

    ids = [row.id for row in result]
    assert ids[0] == "vanry"
    assert ids.count("vanry") == 1
    assert len(ids) == 9
    assert result[0].current_price == 0.02
    assert result[0].market_cap == 40000000

    # One slot is kept for the priority row
    assert list_markets.await_args.args[0].per_page == 9

    args, kwargs = prices.await_args
    assert args[0] == ["vanry"]
    assert kwargs["include_market_cap"] is True
    assert kwargs["include_last_updated_at"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize("listing_ids", [
    [],
    ["bitcoin", "ethereum"],
    ["vanry"],
    ["vanry", "bitcoin", "vanry"],
    ["bitcoin", "vanry", "ethereum", "vanry"],
])
async def test_priority_never_duplicated(client, composer, listing_ids):
    """Priority coin appears exactly once whatever upstream returns"""
    listing = [snapshot(coin_id, i + 1) for i, coin_id in enumerate(listing_ids)]

    with patch.object(client, "get_simple_prices", AsyncMock(return_value=VANRY_PRICES)), \
            patch.object(client, "list_markets", AsyncMock(return_value=listing)):
        result = await composer.list_markets_with_priority(per_page=10)

    ids = [row.id for row in result]
    assert ids[0] == "vanry"
    assert ids.count("vanry") == 1


def test_build_priority_record_defaults(composer):
    """Missing numbers default to zero and rank to the sentinel"""
    record = composer.build_priority_record({"vanry": {"usd": 0.02}}, "usd")

    assert record.id == "vanry"
    assert record.symbol == "vanry"
    assert record.name == "Vanry"
    assert record.image
    assert record.current_price == 0.02
    assert record.market_cap == 0
    assert record.total_volume == 0
    assert record.price_change_percentage_24h == 0
    assert record.market_cap_rank == UNRANKED
    assert record.high_24h == 0.02
    assert record.low_24h == 0.02
    assert record.sparkline_in_7d == {"price": []}


def test_build_priority_record_timestamp(composer):
    """last_updated comes from the upstream timestamp"""
    record = composer.build_priority_record(VANRY_PRICES, "usd")

    assert record.last_updated == "2024-01-01T00:00:00.000Z"
    assert record.total_volume == 1200000
    assert record.price_change_percentage_24h == 1.8


def test_build_priority_record_other_currency(composer):
    """Currency-specific keys are read for the requested currency"""
    prices = {"vanry": {"eur": 0.018, "eur_market_cap": 36000000}}
    record = composer.build_priority_record(prices, "eur")

    assert record.current_price == 0.018
    assert record.market_cap == 36000000


def test_build_priority_record_missing(composer):
    assert composer.build_priority_record({}, "usd") is None
    assert composer.build_priority_record({"bitcoin": {"usd": 1}}, "usd") is None
    assert composer.build_priority_record({"vanry": [0.02]}, "usd") is None
    assert composer.build_priority_record({"vanry": "0.02"}, "usd") is None
    assert composer.build_priority_record(["vanry"], "usd") is None


@pytest.mark.asyncio
async def test_probe_failure_returns_listing_without_priority(client, composer):
    """Priority row is omitted, not synthesized, when the probe fails"""
    listing = [snapshot("bitcoin", 1), snapshot("vanry", 150), snapshot("ethereum", 2)]

    with patch.object(client, "get_simple_prices", AsyncMock(side_effect=ServerError("HTTP 503"))), \
            patch.object(client, "list_markets", AsyncMock(return_value=listing)):
        result = await composer.list_markets_with_priority(per_page=10)

    assert [row.id for row in result] == ["bitcoin", "ethereum"]


@pytest.mark.asyncio
async def test_probe_without_data_returns_listing_without_priority(client, composer):
    listing = [snapshot("bitcoin", 1)]

    with patch.object(client, "get_simple_prices", AsyncMock(return_value={})), \
            patch.object(client, "list_markets", AsyncMock(return_value=listing)):
        result = await composer.list_markets_with_priority(per_page=10)

    assert [row.id for row in result] == ["bitcoin"]


@pytest.mark.asyncio
@pytest.mark.parametrize("prices", [
    {"vanry": [0.02]},
    {"vanry": {"usd": "not-a-number"}},
])
async def test_unusable_price_data_returns_listing_without_priority(client, composer, prices):
    """Malformed price data for the priority coin drops only that row"""
    listing = [snapshot("bitcoin", 1), snapshot("ethereum", 2)]

    with patch.object(client, "get_simple_prices", AsyncMock(return_value=prices)), \
            patch.object(client, "list_markets", AsyncMock(return_value=listing)):
        result = await composer.list_markets_with_priority(per_page=10)

    assert [row.id for row in result] == ["bitcoin", "ethereum"]


@pytest.mark.asyncio
async def test_malformed_upstream_body(client, composer):
    """Non-JSON bodies end in the synthetic listing instead of an exception"""
    fetch = AsyncMock(side_effect=json.JSONDecodeError("Expecting value", "<html>", 0))

    with patch.object(client, "_fetch", fetch):
        result = await composer.list_markets_with_priority(per_page=5)

    ids = [row.id for row in result]
    assert ids == ["bitcoin", "ethereum", "binancecoin", "solana"]
    assert fetch.await_count == 2


@pytest.mark.asyncio
async def test_unexpected_listing_payload(client, composer):
    """A listing body that is not an array still renders the priority row first"""
    fetch = AsyncMock(side_effect=[VANRY_PRICES, {"status": {"error_code": 429}}])

    with patch.object(client, "_fetch", fetch):
        result = await composer.list_markets_with_priority(per_page=5)

    ids = [row.id for row in result]
    assert ids[0] == "vanry"
    assert ids.count("vanry") == 1
    assert len(ids) == 5


@pytest.mark.asyncio
async def test_listing_failure_uses_synthetic_priority_listing(client, composer):
    """A failing listing falls back to the synthetic priority listing"""
    with patch.object(client, "get_simple_prices", AsyncMock(return_value=VANRY_PRICES)), \
            patch.object(client, "list_markets", AsyncMock(side_effect=ServerError("HTTP 500"))):
        result = await composer.list_markets_with_priority(per_page=5)

    ids = [row.id for row in result]
    assert ids[0] == "vanry"
    assert ids.count("vanry") == 1
    assert len(ids) == 5


@pytest.mark.asyncio
async def test_single_row_page_skips_listing(client, composer):
    """per_page=1 leaves room only for the priority row"""
    list_markets = AsyncMock()

    with patch.object(client, "get_simple_prices", AsyncMock(return_value=VANRY_PRICES)), \
            patch.object(client, "list_markets", list_markets):
        result = await composer.list_markets_with_priority(per_page=1)

    assert [row.id for row in result] == ["vanry"]
    list_markets.assert_not_awaited()


@pytest.mark.asyncio
async def test_full_outage(client, composer):
    """With upstream unreachable the listing still renders from synthetic data"""
    with patch.object(client, "_fetch", AsyncMock(side_effect=NetworkError("refused"))):
        result = await composer.list_markets_with_priority(per_page=10)

    ids = [row.id for row in result]
    assert len(ids) == 9
    assert len(set(ids)) == len(ids)
    assert "vanry" not in ids
    assert ids[0] == "bitcoin"


@pytest.mark.asyncio
async def test_invalid_options(composer):
    with pytest.raises(InvalidRequestError):
        await composer.list_markets_with_priority(per_page=0)
