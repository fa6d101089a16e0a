# coding: utf-8
"""
Sentry configuration for error monitoring and tracking
"""
import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.aiohttp import AioHttpIntegration
from loguru import logger

from config.config import SENTRY_DSN, ENVIRONMENT


# Headers that must never reach Sentry
SENSITIVE_HEADERS = ("Authorization", "x-cg-demo-api-key", "x-cg-pro-api-key")


def init_sentry() -> bool:
    """
    Initialize Sentry SDK for error monitoring

    Returns:
        True if Sentry was initialized
    """
    if not SENTRY_DSN:
        logger.warning("SENTRY_DSN not configured - error monitoring disabled")
        return False

    try:
        sentry_sdk.init(
            dsn=SENTRY_DSN,
            environment=ENVIRONMENT,
            integrations=[
                AsyncioIntegration(),
                AioHttpIntegration(),  # Outbound CoinGecko calls
            ],
            traces_sample_rate=0.1 if ENVIRONMENT == "production" else 1.0,
            sample_rate=1.0,
            attach_stacktrace=True,
            send_default_pii=False,
            max_breadcrumbs=50,
            before_send=before_send_hook,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}")
        return False

    logger.info(f"Sentry initialized successfully (Environment: {ENVIRONMENT})")
    return True


def before_send_hook(event, hint):
    """
    Filter events before sending to Sentry

    Drops KeyboardInterrupt and masks API key headers.
    """
    if 'exc_info' in hint:
        exc_type, exc_value, tb = hint['exc_info']
        if isinstance(exc_value, KeyboardInterrupt):
            return None

    if event.get('request'):
        headers = event['request'].get('headers', {})
        for name in list(headers):
            if name.lower() in (h.lower() for h in SENSITIVE_HEADERS):
                headers[name] = '[Filtered]'

    return event
