"""
Market data models - Pydantic models for upstream payloads.

Shapes mirror the CoinGecko v3 responses so the dashboard can consume live
and synthetic data the same way.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from src.core.enums import MarketOrder
from src.services.errors import InvalidRequestError


# Rank used when upstream has none, keeps listings sortable
UNRANKED = 999

MAX_PER_PAGE = 250

PRICE_CHANGE_WINDOWS = ("1h", "24h", "7d", "14d", "30d", "200d", "1y")


# =============================================================================
# Listing
# =============================================================================


class MarketSnapshot(BaseModel):
    """One row of /coins/markets."""

    model_config = ConfigDict(extra="allow")

    id: str
    symbol: str = ""
    name: str = ""
    image: Optional[str] = None
    current_price: Optional[float] = None
    market_cap: Optional[float] = None
    market_cap_rank: int = UNRANKED
    fully_diluted_valuation: Optional[float] = None
    total_volume: Optional[float] = None
    high_24h: Optional[float] = None
    low_24h: Optional[float] = None
    price_change_24h: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None
    market_cap_change_24h: Optional[float] = None
    market_cap_change_percentage_24h: Optional[float] = None
    circulating_supply: Optional[float] = None
    total_supply: Optional[float] = None
    max_supply: Optional[float] = None
    ath: Optional[float] = None
    ath_change_percentage: Optional[float] = None
    ath_date: Optional[str] = None
    atl: Optional[float] = None
    atl_change_percentage: Optional[float] = None
    atl_date: Optional[str] = None
    roi: Optional[Dict[str, Any]] = None
    last_updated: Optional[str] = None
    sparkline_in_7d: Optional[Dict[str, List[float]]] = None

    @field_validator("market_cap_rank", mode="before")
    @classmethod
    def _rank_or_sentinel(cls, value: Any) -> Any:
        if value is None:
            return UNRANKED
        if isinstance(value, (int, float)) and value <= 0:
            return UNRANKED
        return value


class MarketListOptions(BaseModel):
    """Query options for /coins/markets."""

    vs_currency: str = "usd"
    order: MarketOrder = MarketOrder.MARKET_CAP_DESC
    per_page: int = Field(100, ge=1)
    page: int = Field(1, ge=1)
    sparkline: bool = False
    price_change_percentage: Optional[str] = ",".join(PRICE_CHANGE_WINDOWS)

    @field_validator("vs_currency")
    @classmethod
    def _normalize_currency(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("vs_currency must not be empty")
        return value

    @field_validator("per_page")
    @classmethod
    def _clamp_per_page(cls, value: int) -> int:
        return min(value, MAX_PER_PAGE)

    @field_validator("price_change_percentage")
    @classmethod
    def _check_windows(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        windows = [w.strip() for w in value.split(",") if w.strip()]
        unknown = [w for w in windows if w not in PRICE_CHANGE_WINDOWS]
        if unknown:
            raise ValueError(f"unsupported price change windows: {', '.join(unknown)}")
        return ",".join(windows)

    @classmethod
    def build(cls, options: Optional["MarketListOptions"] = None, **overrides: Any) -> "MarketListOptions":
        """
        Merge base options with overrides, raising InvalidRequestError on bad input
        """
        data = options.model_dump() if options is not None else {}
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**data)
        except ValidationError as e:
            raise InvalidRequestError(f"Invalid market list options: {e}") from e

    def to_params(self) -> Dict[str, Any]:
        params = {
            "vs_currency": self.vs_currency,
            "order": self.order.value,
            "per_page": self.per_page,
            "page": self.page,
            "sparkline": str(self.sparkline).lower(),
        }
        if self.price_change_percentage:
            params["price_change_percentage"] = self.price_change_percentage
        return params


# =============================================================================
# Detail
# =============================================================================


class CoinDetail(BaseModel):
    """Payload of /coins/{id}."""

    model_config = ConfigDict(extra="allow")

    id: str
    symbol: str = ""
    name: str = ""
    image: Dict[str, Optional[str]] = Field(default_factory=dict)
    market_cap_rank: Optional[int] = None
    market_data: Dict[str, Any] = Field(default_factory=dict)
    description: Dict[str, Any] = Field(default_factory=dict)
    links: Dict[str, Any] = Field(default_factory=dict)
    community_data: Optional[Dict[str, Any]] = None
    developer_data: Optional[Dict[str, Any]] = None

    def _in_currency(self, key: str, vs_currency: str) -> Any:
        value = self.market_data.get(key)
        if isinstance(value, dict):
            return value.get(vs_currency)
        return value

    def to_snapshot(self, vs_currency: str = "usd") -> MarketSnapshot:
        """Flatten the nested market data into a listing row"""
        md = self.market_data
        return MarketSnapshot(
            id=self.id,
            symbol=self.symbol,
            name=self.name,
            image=self.image.get("large") or self.image.get("small") or self.image.get("thumb"),
            current_price=self._in_currency("current_price", vs_currency),
            market_cap=self._in_currency("market_cap", vs_currency),
            market_cap_rank=self.market_cap_rank or md.get("market_cap_rank"),
            fully_diluted_valuation=self._in_currency("fully_diluted_valuation", vs_currency),
            total_volume=self._in_currency("total_volume", vs_currency),
            high_24h=self._in_currency("high_24h", vs_currency),
            low_24h=self._in_currency("low_24h", vs_currency),
            price_change_24h=md.get("price_change_24h"),
            price_change_percentage_24h=md.get("price_change_percentage_24h"),
            market_cap_change_24h=md.get("market_cap_change_24h"),
            market_cap_change_percentage_24h=md.get("market_cap_change_percentage_24h"),
            circulating_supply=md.get("circulating_supply"),
            total_supply=md.get("total_supply"),
            max_supply=md.get("max_supply"),
            ath=self._in_currency("ath", vs_currency),
            ath_change_percentage=self._in_currency("ath_change_percentage", vs_currency),
            ath_date=self._in_currency("ath_date", vs_currency),
            atl=self._in_currency("atl", vs_currency),
            atl_change_percentage=self._in_currency("atl_change_percentage", vs_currency),
            atl_date=self._in_currency("atl_date", vs_currency),
            last_updated=md.get("last_updated"),
        )


# =============================================================================
# History
# =============================================================================


Point = Tuple[int, float]


class PriceSeries(BaseModel):
    """Payload of /coins/{id}/market_chart.

    All three series share the same strictly increasing timestamps.
    """

    prices: List[Point] = Field(default_factory=list)
    total_volumes: List[Point] = Field(default_factory=list)
    market_caps: List[Point] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_alignment(self) -> "PriceSeries":
        if not (len(self.prices) == len(self.total_volumes) == len(self.market_caps)):
            raise ValueError("price, volume and market cap series must have equal length")
        for series in (self.prices, self.total_volumes, self.market_caps):
            for previous, current in zip(series, series[1:]):
                if current[0] <= previous[0]:
                    raise ValueError("series timestamps must be strictly increasing")
        return self

    @property
    def timestamps(self) -> List[int]:
        return [ts for ts, _ in self.prices]

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PriceSeries":
        """
        Build a series from a live market_chart response

        Upstream occasionally returns unsorted, duplicated or null points and
        series of slightly different lengths. Points are sorted, duplicate
        timestamps keep the last value, and only timestamps present in all
        three series are kept.
        """
        cleaned = {}
        for key in ("prices", "total_volumes", "market_caps"):
            points = {}
            for point in payload.get(key) or []:
                if len(point) < 2 or point[0] is None or point[1] is None:
                    continue
                points[int(point[0])] = float(point[1])
            cleaned[key] = points

        common = sorted(
            set(cleaned["prices"]) & set(cleaned["total_volumes"]) & set(cleaned["market_caps"])
        )
        return cls(
            prices=[(ts, cleaned["prices"][ts]) for ts in common],
            total_volumes=[(ts, cleaned["total_volumes"][ts]) for ts in common],
            market_caps=[(ts, cleaned["market_caps"][ts]) for ts in common],
        )
