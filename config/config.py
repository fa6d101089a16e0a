"""
Configuration module for the market data access layer

Loads configuration from environment variables using python-dotenv
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load .env file (override=True ensures .env has priority over shell environment)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path, override=True)


# CoinGecko API
# Demo API (free) and Public API share one URL
COINGECKO_BASE_URL: str = os.getenv(
    "COINGECKO_BASE_URL", "https://api.coingecko.com/api/v3"
)
COINGECKO_API_KEY: Optional[str] = os.getenv("COINGECKO_API_KEY") or None

# Request timeout for a single HTTP call (milliseconds)
COINGECKO_TIMEOUT_MS: int = int(os.getenv("COINGECKO_TIMEOUT_MS", "10000"))

# Minimum spacing between outbound calls (milliseconds)
# Free tier allows ~30 calls/min, 1.5s keeps us comfortably below it
COINGECKO_MIN_INTERVAL_MS: int = int(os.getenv("COINGECKO_MIN_INTERVAL_MS", "1500"))

# Retries after the first attempt (total attempts = retries + 1)
COINGECKO_MAX_RETRIES: int = int(os.getenv("COINGECKO_MAX_RETRIES", "3"))

# Base delay for exponential backoff (milliseconds): 1s, 2s, 4s, ...
COINGECKO_RETRY_BASE_DELAY_MS: int = int(
    os.getenv("COINGECKO_RETRY_BASE_DELAY_MS", "1000")
)

# Asset that is always shown first in market listings
PRIORITY_COIN_ID: str = os.getenv("PRIORITY_COIN_ID", "vanry")

# Environment
ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Error reporting (optional)
SENTRY_DSN: str = os.getenv("SENTRY_DSN", "")

# Dashboard URL (CORS origin for the API server)
WEBAPP_URL: str = os.getenv("WEBAPP_URL", "http://localhost:3000")


def validate_config() -> bool:
    """Validate required configuration variables"""
    errors = []

    if not COINGECKO_BASE_URL.startswith(("http://", "https://")):
        errors.append("COINGECKO_BASE_URL must be a valid http(s) URL")

    if COINGECKO_TIMEOUT_MS <= 0:
        errors.append("COINGECKO_TIMEOUT_MS must be a positive number")

    if COINGECKO_MIN_INTERVAL_MS < 0:
        errors.append("COINGECKO_MIN_INTERVAL_MS must be a non-negative number")

    if COINGECKO_MAX_RETRIES < 0:
        errors.append("COINGECKO_MAX_RETRIES must be a non-negative number")

    if COINGECKO_RETRY_BASE_DELAY_MS <= 0:
        errors.append("COINGECKO_RETRY_BASE_DELAY_MS must be a positive number")

    if not PRIORITY_COIN_ID:
        errors.append("PRIORITY_COIN_ID is required")

    if errors:
        error_message = "\n".join(f"  - {error}" for error in errors)
        raise ValueError(
            f"Configuration validation failed:\n{error_message}\n\n"
            "Please check your .env file and ensure all required variables are set."
        )

    return True
