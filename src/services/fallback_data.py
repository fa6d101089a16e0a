# coding: utf-8
"""
Static catalog used when the CoinGecko API is unreachable

Approximate but realistic market rows for the largest coins, in market cap
rank order, plus the priority asset. Time-dependent fields (last_updated)
are filled in by FallbackSynthesizer.
"""
from typing import Any, Dict, List


# ============================================================================
# STATIC FALLBACK CATALOG (rank order)
# ============================================================================

FALLBACK_COINS: List[Dict[str, Any]] = [
    {
        "id": "bitcoin",
        "symbol": "btc",
        "name": "Bitcoin",
        "image": "https://assets.coingecko.com/coins/images/1/large/bitcoin.png",
        "current_price": 43250.50,
        "market_cap": 847500000000,
        "market_cap_rank": 1,
        "fully_diluted_valuation": 908000000000,
        "total_volume": 28500000000,
        "high_24h": 44100.00,
        "low_24h": 42800.00,
        "price_change_24h": 1250.50,
        "price_change_percentage_24h": 2.98,
        "market_cap_change_24h": 24500000000,
        "market_cap_change_percentage_24h": 2.98,
        "circulating_supply": 19600000,
        "total_supply": 19600000,
        "max_supply": 21000000,
        "ath": 69045,
        "ath_change_percentage": -37.35,
        "ath_date": "2021-11-10T14:24:11.849Z",
        "atl": 67.81,
        "atl_change_percentage": 63650.12,
        "atl_date": "2013-07-06T00:00:00.000Z",
        "roi": None,
        "sparkline_in_7d": {"price": [42000, 42500, 43000, 42800, 43200, 43500, 43250]},
    },
    {
        "id": "ethereum",
        "symbol": "eth",
        "name": "Ethereum",
        "image": "https://assets.coingecko.com/coins/images/279/large/ethereum.png",
        "current_price": 2650.75,
        "market_cap": 318500000000,
        "market_cap_rank": 2,
        "fully_diluted_valuation": 318500000000,
        "total_volume": 15200000000,
        "high_24h": 2680.00,
        "low_24h": 2620.00,
        "price_change_24h": 45.75,
        "price_change_percentage_24h": 1.75,
        "market_cap_change_24h": 5500000000,
        "market_cap_change_percentage_24h": 1.75,
        "circulating_supply": 120000000,
        "total_supply": 120000000,
        "max_supply": None,
        "ath": 4878.26,
        "ath_change_percentage": -45.65,
        "ath_date": "2021-11-10T14:24:19.604Z",
        "atl": 0.432979,
        "atl_change_percentage": 612345.67,
        "atl_date": "2015-10-20T00:00:00.000Z",
        "roi": {"times": 85.2, "currency": "btc", "percentage": 8520.0},
        "sparkline_in_7d": {"price": [2600, 2620, 2640, 2630, 2650, 2670, 2650]},
    },
    {
        "id": "binancecoin",
        "symbol": "bnb",
        "name": "BNB",
        "image": "https://assets.coingecko.com/coins/images/825/large/bnb-icon2_2x.png",
        "current_price": 315.20,
        "market_cap": 47500000000,
        "market_cap_rank": 3,
        "fully_diluted_valuation": 47500000000,
        "total_volume": 1200000000,
        "high_24h": 318.50,
        "low_24h": 312.00,
        "price_change_24h": 8.20,
        "price_change_percentage_24h": 2.67,
        "market_cap_change_24h": 1200000000,
        "market_cap_change_percentage_24h": 2.67,
        "circulating_supply": 150000000,
        "total_supply": 150000000,
        "max_supply": 200000000,
        "ath": 686.31,
        "ath_change_percentage": -54.08,
        "ath_date": "2021-05-10T07:24:17.097Z",
        "atl": 0.0398177,
        "atl_change_percentage": 791234.56,
        "atl_date": "2017-10-19T00:00:00.000Z",
        "roi": None,
        "sparkline_in_7d": {"price": [310, 312, 315, 313, 316, 318, 315]},
    },
    {
        "id": "solana",
        "symbol": "sol",
        "name": "Solana",
        "image": "https://assets.coingecko.com/coins/images/4128/large/solana.png",
        "current_price": 98.45,
        "market_cap": 42500000000,
        "market_cap_rank": 4,
        "fully_diluted_valuation": 55000000000,
        "total_volume": 2800000000,
        "high_24h": 100.20,
        "low_24h": 96.80,
        "price_change_24h": 2.45,
        "price_change_percentage_24h": 2.55,
        "market_cap_change_24h": 1050000000,
        "market_cap_change_percentage_24h": 2.55,
        "circulating_supply": 432000000,
        "total_supply": 559000000,
        "max_supply": None,
        "ath": 259.96,
        "ath_change_percentage": -62.13,
        "ath_date": "2021-11-06T21:54:35.825Z",
        "atl": 0.500801,
        "atl_change_percentage": 19567.89,
        "atl_date": "2020-05-11T19:35:23.449Z",
        "roi": None,
        "sparkline_in_7d": {"price": [96, 97, 98, 97.5, 99, 100, 98.45]},
    },
    {
        "id": "ripple",
        "symbol": "xrp",
        "name": "XRP",
        "image": "https://assets.coingecko.com/coins/images/44/large/xrp-symbol-white-128.png",
        "current_price": 0.625,
        "market_cap": 35000000000,
        "market_cap_rank": 5,
        "fully_diluted_valuation": 62500000000,
        "total_volume": 1800000000,
        "high_24h": 0.632,
        "low_24h": 0.618,
        "price_change_24h": 0.012,
        "price_change_percentage_24h": 1.96,
        "market_cap_change_24h": 675000000,
        "market_cap_change_percentage_24h": 1.96,
        "circulating_supply": 56000000000,
        "total_supply": 99987950793,
        "max_supply": 100000000000,
        "ath": 3.40,
        "ath_change_percentage": -81.62,
        "ath_date": "2018-01-07T00:00:00.000Z",
        "atl": 0.00268621,
        "atl_change_percentage": 23156.78,
        "atl_date": "2014-05-22T00:00:00.000Z",
        "roi": None,
        "sparkline_in_7d": {"price": [0.62, 0.625, 0.63, 0.628, 0.632, 0.63, 0.625]},
    },
    {
        "id": "cardano",
        "symbol": "ada",
        "name": "Cardano",
        "image": "https://assets.coingecko.com/coins/images/975/large/cardano.png",
        "current_price": 0.485,
        "market_cap": 17000000000,
        "market_cap_rank": 6,
        "fully_diluted_valuation": 21800000000,
        "total_volume": 450000000,
        "high_24h": 0.492,
        "low_24h": 0.478,
        "price_change_24h": 0.008,
        "price_change_percentage_24h": 1.68,
        "market_cap_change_24h": 280000000,
        "market_cap_change_percentage_24h": 1.68,
        "circulating_supply": 35000000000,
        "total_supply": 45000000000,
        "max_supply": 45000000000,
        "ath": 3.09,
        "ath_change_percentage": -84.30,
        "ath_date": "2021-09-02T06:00:10.474Z",
        "atl": 0.01925275,
        "atl_change_percentage": 2418.45,
        "atl_date": "2020-03-13T02:22:55.044Z",
        "roi": None,
        "sparkline_in_7d": {"price": [0.48, 0.485, 0.49, 0.488, 0.492, 0.49, 0.485]},
    },
    {
        "id": "dogecoin",
        "symbol": "doge",
        "name": "Dogecoin",
        "image": "https://assets.coingecko.com/coins/images/5/large/dogecoin.png",
        "current_price": 0.085,
        "market_cap": 12000000000,
        "market_cap_rank": 7,
        "fully_diluted_valuation": 12000000000,
        "total_volume": 380000000,
        "high_24h": 0.087,
        "low_24h": 0.083,
        "price_change_24h": 0.002,
        "price_change_percentage_24h": 2.41,
        "market_cap_change_24h": 280000000,
        "market_cap_change_percentage_24h": 2.41,
        "circulating_supply": 141000000000,
        "total_supply": 141000000000,
        "max_supply": None,
        "ath": 0.731578,
        "ath_change_percentage": -88.38,
        "ath_date": "2021-05-08T05:08:23.458Z",
        "atl": 0.0000869,
        "atl_change_percentage": 97678.90,
        "atl_date": "2015-05-06T00:00:00.000Z",
        "roi": None,
        "sparkline_in_7d": {"price": [0.083, 0.084, 0.085, 0.0845, 0.086, 0.087, 0.085]},
    },
    {
        "id": "avalanche-2",
        "symbol": "avax",
        "name": "Avalanche",
        "image": "https://assets.coingecko.com/coins/images/12559/large/Avalanche_Circle_RedWhite_Trans.png",
        "current_price": 35.20,
        "market_cap": 13000000000,
        "market_cap_rank": 8,
        "fully_diluted_valuation": 25300000000,
        "total_volume": 450000000,
        "high_24h": 35.80,
        "low_24h": 34.50,
        "price_change_24h": 0.80,
        "price_change_percentage_24h": 2.33,
        "market_cap_change_24h": 295000000,
        "market_cap_change_percentage_24h": 2.33,
        "circulating_supply": 370000000,
        "total_supply": 720000000,
        "max_supply": 720000000,
        "ath": 144.96,
        "ath_change_percentage": -75.72,
        "ath_date": "2021-11-21T14:18:56.538Z",
        "atl": 2.8,
        "atl_change_percentage": 1157.14,
        "atl_date": "2020-12-31T13:15:21.540Z",
        "roi": None,
        "sparkline_in_7d": {"price": [34.5, 35, 35.2, 35.1, 35.5, 35.8, 35.2]},
    },
    {
        "id": "chainlink",
        "symbol": "link",
        "name": "Chainlink",
        "image": "https://assets.coingecko.com/coins/images/877/large/chainlink-new-logo.png",
        "current_price": 14.25,
        "market_cap": 8000000000,
        "market_cap_rank": 9,
        "fully_diluted_valuation": 14250000000,
        "total_volume": 320000000,
        "high_24h": 14.50,
        "low_24h": 14.00,
        "price_change_24h": 0.35,
        "price_change_percentage_24h": 2.52,
        "market_cap_change_24h": 195000000,
        "market_cap_change_percentage_24h": 2.52,
        "circulating_supply": 560000000,
        "total_supply": 1000000000,
        "max_supply": 1000000000,
        "ath": 52.70,
        "ath_change_percentage": -72.96,
        "ath_date": "2021-05-10T00:13:57.214Z",
        "atl": 0.148183,
        "atl_change_percentage": 9512.45,
        "atl_date": "2017-11-29T00:00:00.000Z",
        "roi": None,
        "sparkline_in_7d": {"price": [14, 14.1, 14.2, 14.15, 14.3, 14.4, 14.25]},
    },
    {
        "id": "matic-network",
        "symbol": "matic",
        "name": "Polygon",
        "image": "https://assets.coingecko.com/coins/images/4713/large/matic-token-icon.png",
        "current_price": 0.825,
        "market_cap": 7500000000,
        "market_cap_rank": 10,
        "fully_diluted_valuation": 8250000000,
        "total_volume": 280000000,
        "high_24h": 0.835,
        "low_24h": 0.815,
        "price_change_24h": 0.015,
        "price_change_percentage_24h": 1.85,
        "market_cap_change_24h": 135000000,
        "market_cap_change_percentage_24h": 1.85,
        "circulating_supply": 9100000000,
        "total_supply": 10000000000,
        "max_supply": 10000000000,
        "ath": 2.92,
        "ath_change_percentage": -71.75,
        "ath_date": "2021-12-27T02:08:34.307Z",
        "atl": 0.00314376,
        "atl_change_percentage": 26145.67,
        "atl_date": "2019-05-10T00:00:00.000Z",
        "roi": {"times": 312.5, "currency": "usd", "percentage": 31250.0},
        "sparkline_in_7d": {"price": [0.815, 0.82, 0.825, 0.822, 0.83, 0.835, 0.825]},
    },
]

# Priority asset row, shown first in the synthetic priority listing
FALLBACK_PRIORITY_COIN: Dict[str, Any] = {
    "id": "vanry",
    "symbol": "vanry",
    "name": "Vanry",
    "image": "https://assets.coingecko.com/coins/images/24484/large/4eL9gKU.png",
    "current_price": 0.125,
    "market_cap": 25000000,
    "market_cap_rank": 150,
    "fully_diluted_valuation": 50000000,
    "total_volume": 1500000,
    "high_24h": 0.128,
    "low_24h": 0.122,
    "price_change_24h": 0.003,
    "price_change_percentage_24h": 2.46,
    "market_cap_change_24h": 600000,
    "market_cap_change_percentage_24h": 2.46,
    "circulating_supply": 200000000,
    "total_supply": 400000000,
    "max_supply": 1000000000,
    "ath": 0.45,
    "ath_change_percentage": -72.22,
    "ath_date": "2021-11-15T00:00:00.000Z",
    "atl": 0.001,
    "atl_change_percentage": 12400.0,
    "atl_date": "2020-03-13T00:00:00.000Z",
    "roi": None,
    "sparkline_in_7d": {"price": [0.122, 0.123, 0.124, 0.1235, 0.125, 0.126, 0.125]},
}
