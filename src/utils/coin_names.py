# coding: utf-8
"""
Utility for turning CoinGecko coin IDs into display names
"""


# Preferred display names where title-casing the ID reads wrong
COIN_NAME_MAPPING = {
    "bitcoin": "Bitcoin",
    "ethereum": "Ethereum",
    "binancecoin": "BNB",
    "solana": "Solana",
    "ripple": "XRP",
    "cardano": "Cardano",
    "polkadot": "Polkadot",
    "dogecoin": "Dogecoin",
    "avalanche-2": "Avalanche",
    "chainlink": "Chainlink",
    "matic-network": "Polygon",
    "polygon": "Polygon",
    "litecoin": "Litecoin",
    "bitcoin-cash": "Bitcoin Cash",
    "stellar": "Stellar",
    "uniswap": "Uniswap",
    "ethereum-classic": "Ethereum Classic",
    "vanry": "Vanry",
}


def format_coin_name(coin_id: str) -> str:
    """
    Format a coin ID as a human-readable name

    Examples:
        "bitcoin-cash" -> "Bitcoin Cash"
        "ethereum" -> "Ethereum"
        "" -> "Bitcoin"
    """
    if not coin_id:
        return "Bitcoin"

    return " ".join(word[:1].upper() + word[1:] for word in coin_id.split("-"))


def get_display_name(coin_id: str) -> str:
    """
    Get the preferred display name for a coin ID

    Uses the curated mapping first, then falls back to format_coin_name()
    """
    return COIN_NAME_MAPPING.get(coin_id.lower(), format_coin_name(coin_id))
