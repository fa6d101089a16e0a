# coding: utf-8
"""
Priority asset composition for market listings

Guarantees the configured priority coin is the first row of every listing
the dashboard receives, and that it appears only once.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import ValidationError

from src.services.errors import MarketDataError
from src.services.fallback_synthesizer import FallbackSynthesizer
from src.services.market_data_client import MarketDataClient
from src.services.models import UNRANKED, MarketListOptions, MarketSnapshot


class PriorityComposer:
    """
    Wraps MarketDataClient.list_markets() with a priority-first guarantee
    """

    def __init__(
        self,
        client: MarketDataClient,
        synthesizer: Optional[FallbackSynthesizer] = None,
    ):
        """
        Args:
            client: Client used for the price probe and the listing
            synthesizer: Offline data source, also defines the priority coin
                (default: the client's synthesizer)
        """
        self.client = client
        self.synthesizer = synthesizer or client.synthesizer
        self.priority_coin_id = self.synthesizer.priority_coin_id

    def _template(self) -> Dict[str, Any]:
        """Static fields (symbol, name, image) for the priority row"""
        record = self.synthesizer.priority_record()
        return {"symbol": record.symbol, "name": record.name, "image": record.image}

    def build_priority_record(
        self, prices: Dict[str, Dict[str, Any]], vs_currency: str
    ) -> Optional[MarketSnapshot]:
        """
        Build a listing row from a /simple/price response

        Missing numbers default to 0 and a missing rank to UNRANKED so the row
        stays sortable next to live rows.

        Returns:
            MarketSnapshot or None when the response has no data for the coin
        """
        data = prices.get(self.priority_coin_id) if isinstance(prices, dict) else None
        if not data or not isinstance(data, dict):
            return None

        cur = vs_currency
        price = data.get(cur) or 0
        now = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        last_updated_at = data.get("last_updated_at")
        if last_updated_at:
            last_updated = (
                datetime.fromtimestamp(last_updated_at, tz=timezone.utc)
                .isoformat(timespec="milliseconds")
                .replace("+00:00", "Z")
            )
        else:
            last_updated = now

        return MarketSnapshot(
            id=self.priority_coin_id,
            **self._template(),
            current_price=price,
            market_cap=data.get(f"{cur}_market_cap") or 0,
            market_cap_rank=data.get(f"{cur}_market_cap_rank") or UNRANKED,
            total_volume=data.get(f"{cur}_24h_vol") or 0,
            price_change_percentage_24h=data.get(f"{cur}_24h_change") or 0,
            fully_diluted_valuation=None,
            high_24h=price,
            low_24h=price,
            price_change_24h=0,
            market_cap_change_24h=0,
            market_cap_change_percentage_24h=0,
            circulating_supply=0,
            total_supply=0,
            max_supply=None,
            ath=0,
            ath_change_percentage=0,
            ath_date=now,
            atl=0,
            atl_change_percentage=0,
            atl_date=now,
            roi=None,
            last_updated=last_updated,
            sparkline_in_7d={"price": []},
        )

    async def _fetch_priority_record(self, vs_currency: str) -> Optional[MarketSnapshot]:
        try:
            prices = await self.client.get_simple_prices(
                [self.priority_coin_id],
                [vs_currency],
                include_market_cap=True,
                include_24hr_vol=True,
                include_24hr_change=True,
                include_last_updated_at=True,
            )
        except MarketDataError as e:
            logger.warning(f"Could not fetch {self.priority_coin_id} data: {e}")
            return None

        try:
            record = self.build_priority_record(prices, vs_currency)
        except ValidationError as e:
            logger.warning(f"Unusable price data for {self.priority_coin_id}: {e}")
            return None

        if record is None:
            logger.warning(f"No price data returned for {self.priority_coin_id}")
        return record

    async def list_markets_with_priority(
        self, options: Optional[MarketListOptions] = None, **overrides: Any
    ) -> List[MarketSnapshot]:
        """
        Get a market listing with the priority coin first

        Args:
            options: Query options (per_page counts the priority row)
            **overrides: Individual option overrides

        Returns:
            Listing with the priority coin at index 0 (when obtainable) and
            no other occurrence of it

        Raises:
            InvalidRequestError: Malformed options
        """
        opts = MarketListOptions.build(options, **overrides)

        priority = await self._fetch_priority_record(opts.vs_currency)

        # Leave room for the priority row
        remaining = opts.per_page - 1
        try:
            if remaining > 0:
                market = await self.client.list_markets(opts.model_copy(update={"per_page": remaining}))
            else:
                market = []
        except MarketDataError as e:
            logger.error(f"Error fetching listing with priority: {e}. Falling back to synthetic data")
            return self.synthesizer.priority_listing(opts.per_page)

        filtered = [coin for coin in market if coin.id != self.priority_coin_id]

        if priority is not None:
            return [priority] + filtered

        return filtered
