# coding: utf-8
"""
Synthetic market data for offline operation

Produces listings, coin details and price histories shaped exactly like the
live CoinGecko responses, so the dashboard renders the same way whether or
not the upstream API is reachable. Output depends only on the inputs and the
injected clock: no hidden randomness.
"""
import copy
import math
import random
import time
import zlib
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

from loguru import logger

from src.core.enums import HistoryDays
from src.services.fallback_data import FALLBACK_COINS, FALLBACK_PRIORITY_COIN
from src.services.models import UNRANKED, CoinDetail, MarketSnapshot, PriceSeries
from src.utils.coin_names import get_display_name

DAY_MS = 24 * 60 * 60 * 1000

# Mock multipliers of the 24h change for the other detail windows
CHANGE_WINDOW_FACTORS = {
    "price_change_percentage_1h": 0.1,
    "price_change_percentage_7d": 0.8,
    "price_change_percentage_14d": 1.5,
    "price_change_percentage_30d": 2.5,
    "price_change_percentage_200d": 8,
    "price_change_percentage_1y": 12,
}


class FallbackSynthesizer:
    """
    Deterministic stand-in for the CoinGecko API

    Features:
    - Fixed catalog of major coins in market cap rank order
    - Detail records with derived description, links and statistics
    - Smooth price histories anchored to the catalog price
    - Priority-first listing for the dashboard home page
    """

    def __init__(
        self,
        priority_coin_id: str = FALLBACK_PRIORITY_COIN["id"],
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            priority_coin_id: Coin shown first in priority listings
            clock: Wall clock in epoch seconds (synthetic "now")
        """
        self.priority_coin_id = priority_coin_id
        self._clock = clock

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _now_iso(self) -> str:
        now = datetime.fromtimestamp(self._clock(), tz=timezone.utc)
        return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def _find(self, coin_id: str) -> Optional[Dict[str, Any]]:
        for coin in FALLBACK_COINS:
            if coin["id"] == coin_id:
                return coin
        if coin_id == FALLBACK_PRIORITY_COIN["id"]:
            return FALLBACK_PRIORITY_COIN
        return None

    def _snapshot(self, coin: Dict[str, Any]) -> MarketSnapshot:
        data = copy.deepcopy(coin)
        data["last_updated"] = self._now_iso()
        return MarketSnapshot(**data)

    def has_coin(self, coin_id: str) -> bool:
        return self._find(coin_id) is not None

    # ------------------------------------------------------------------
    # listing
    # ------------------------------------------------------------------

    def listing(self, per_page: int = 100) -> List[MarketSnapshot]:
        """
        Synthetic /coins/markets page

        Args:
            per_page: Maximum number of rows

        Returns:
            Catalog rows in market cap rank order
        """
        rows = FALLBACK_COINS[:max(0, per_page)]
        logger.warning(f"Using SYNTHETIC market listing ({len(rows)} coins)")
        return [self._snapshot(coin) for coin in rows]

    def priority_record(self) -> MarketSnapshot:
        """Synthetic row for the priority coin"""
        coin = self._find(self.priority_coin_id)
        if coin is not None:
            return self._snapshot(coin)

        # Unknown to the catalog: empty but well-formed row
        return MarketSnapshot(
            id=self.priority_coin_id,
            symbol=self.priority_coin_id,
            name=get_display_name(self.priority_coin_id),
            current_price=0,
            market_cap=0,
            market_cap_rank=UNRANKED,
            total_volume=0,
            price_change_percentage_24h=0,
            last_updated=self._now_iso(),
        )

    def priority_listing(self, per_page: int = 100) -> List[MarketSnapshot]:
        """
        Synthetic listing with the priority coin first and exactly once

        Args:
            per_page: Total number of rows including the priority row
        """
        others = [
            coin for coin in FALLBACK_COINS if coin["id"] != self.priority_coin_id
        ][:max(0, per_page - 1)]
        logger.warning(
            f"Using SYNTHETIC priority listing ({len(others) + 1} coins, "
            f"priority: {self.priority_coin_id})"
        )
        return [self.priority_record()] + [self._snapshot(coin) for coin in others]

    # ------------------------------------------------------------------
    # detail
    # ------------------------------------------------------------------

    def detail(self, coin_id: str) -> Optional[CoinDetail]:
        """
        Synthetic /coins/{id} payload

        Returns:
            CoinDetail or None if the coin is not in the catalog
        """
        coin = self._find(coin_id)
        if coin is None:
            return None

        symbol = coin["symbol"].upper()
        change_24h = coin["price_change_percentage_24h"]
        # Stable per-coin seed so statistics never change between calls
        rng = random.Random(zlib.crc32(coin_id.encode("utf-8")))

        market_data: Dict[str, Any] = {
            "current_price": {"usd": coin["current_price"]},
            "market_cap": {"usd": coin["market_cap"]},
            "market_cap_rank": coin["market_cap_rank"],
            "fully_diluted_valuation": {"usd": coin["fully_diluted_valuation"]},
            "total_volume": {"usd": coin["total_volume"]},
            "high_24h": {"usd": coin["high_24h"]},
            "low_24h": {"usd": coin["low_24h"]},
            "price_change_24h": coin["price_change_24h"],
            "price_change_percentage_24h": change_24h,
            "market_cap_change_24h": coin["market_cap_change_24h"],
            "market_cap_change_percentage_24h": coin["market_cap_change_percentage_24h"],
            "circulating_supply": coin["circulating_supply"],
            "total_supply": coin["total_supply"],
            "max_supply": coin["max_supply"],
            "ath": {"usd": coin["ath"]},
            "ath_change_percentage": {"usd": coin["ath_change_percentage"]},
            "ath_date": {"usd": coin["ath_date"]},
            "atl": {"usd": coin["atl"]},
            "atl_change_percentage": {"usd": coin["atl_change_percentage"]},
            "atl_date": {"usd": coin["atl_date"]},
            "last_updated": self._now_iso(),
        }
        for key, factor in CHANGE_WINDOW_FACTORS.items():
            market_data[key] = round(change_24h * factor, 4)

        return CoinDetail(
            id=coin["id"],
            symbol=coin["symbol"],
            name=coin["name"],
            image={"large": coin["image"], "small": coin["image"], "thumb": coin["image"]},
            market_cap_rank=coin["market_cap_rank"],
            market_data=market_data,
            description={
                "en": (
                    f"{coin['name']} ({symbol}) is a cryptocurrency with a current market cap of "
                    f"${coin['market_cap'] / 1e9:.2f}B. It has a circulating supply of "
                    f"{coin['circulating_supply']:,} {symbol} tokens."
                )
            },
            links={
                "homepage": [f"https://{coin_id}.com"],
                "blockchain_site": [f"https://explorer.{coin_id}.com"],
                "official_forum_url": [f"https://forum.{coin_id}.com"],
                "subreddit_url": f"https://reddit.com/r/{coin_id}",
                "repos_url": {"github": [f"https://github.com/{coin_id}"]},
            },
            community_data={
                "facebook_likes": rng.randrange(100000),
                "twitter_followers": rng.randrange(1000000),
                "reddit_average_posts_48h": rng.randrange(100),
                "reddit_average_comments_48h": rng.randrange(1000),
                "reddit_subscribers": rng.randrange(500000),
            },
            developer_data={
                "forks": rng.randrange(10000),
                "stars": rng.randrange(50000),
                "subscribers": rng.randrange(5000),
                "total_issues": rng.randrange(1000),
                "closed_issues": rng.randrange(800),
                "pull_requests_merged": rng.randrange(500),
                "pull_request_contributors": rng.randrange(100),
            },
        )

    # ------------------------------------------------------------------
    # history
    # ------------------------------------------------------------------

    def history(
        self,
        coin_id: str,
        days: Union[HistoryDays, str, int] = HistoryDays.ONE_WEEK,
        now_ms: Optional[int] = None,
    ) -> PriceSeries:
        """
        Synthetic /coins/{id}/market_chart payload

        N days produce N+1 daily points ending at "now". The price starts 20%
        below the catalog price, follows a mild upward trend with a smooth
        oscillation and never drops below half of that starting level.

        Args:
            coin_id: Coin ID
            days: History horizon
            now_ms: Timestamp of the last point (defaults to the clock)

        Returns:
            PriceSeries (empty for coins outside the catalog)
        """
        coin = self._find(coin_id)
        if coin is None:
            return PriceSeries()

        num_days = HistoryDays(str(days.value if isinstance(days, HistoryDays) else days)).day_count
        end = self._now_ms() if now_ms is None else now_ms

        current_price = coin["current_price"]
        base_price = current_price * 0.8
        price_range = current_price * 0.4
        supply = coin["market_cap"] / current_price if current_price else 0

        prices, total_volumes, market_caps = [], [], []
        for i in range(num_days, -1, -1):
            timestamp = end - i * DAY_MS
            progress = (num_days - i) / num_days

            volatility = math.sin(progress * math.pi * 4) * 0.1
            trend = progress * 0.2
            price = max(base_price + price_range * (trend + volatility), base_price * 0.5)
            volume_factor = 0.75 + 0.25 * math.sin(progress * math.pi * 6)

            prices.append((timestamp, price))
            total_volumes.append((timestamp, coin["total_volume"] * volume_factor))
            market_caps.append((timestamp, price * supply))

        logger.warning(f"Using SYNTHETIC history for {coin_id} ({num_days}d, {len(prices)} points)")
        return PriceSeries(prices=prices, total_volumes=total_volumes, market_caps=market_caps)
