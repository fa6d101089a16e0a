# coding: utf-8
"""
Logging configuration with loguru for the market data service

Sinks:
- stdout, coloured, at LOG_LEVEL
- logs/api_{date}.log, everything at DEBUG
- logs/upstream_{date}.log, only records from the market data services
  (pacing, retries, fallback), for checking how often CoinGecko was unreachable
- logs/error_{date}.log, errors only
- Sentry, errors only, when SENTRY_DSN is configured
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger
import sentry_sdk

from config.config import LOG_LEVEL, ENVIRONMENT
from config.sentry import init_sentry


LOGS_DIR = Path(__file__).parent.parent / "logs"

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"

# Records emitted by these modules go to the upstream log
UPSTREAM_MODULES = "src.services."

# Stdlib loggers that only matter when something is wrong
QUIET_LOGGERS = ("aiohttp", "asyncio", "uvicorn.access")


def _is_upstream(record) -> bool:
    return record["name"].startswith(UPSTREAM_MODULES)


def setup_logging(
    level: Optional[str] = None,
    logs_dir: Optional[Path] = None,
    file_sinks: bool = True,
) -> None:
    """
    Replace the default loguru handler with the service sinks

    Args:
        level: Console level (default: LOG_LEVEL)
        logs_dir: Directory for log files (default: <project>/logs)
        file_sinks: Write log files in addition to stdout
    """
    level = level or LOG_LEVEL
    logger.remove()

    logger.add(
        sys.stdout,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
            "<level>{message}</level>"
        ),
        level=level,
        colorize=True,
    )

    if file_sinks:
        logs_dir = logs_dir or LOGS_DIR
        logs_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            logs_dir / "api_{time:YYYY-MM-DD}.log",
            format=FILE_FORMAT,
            level="DEBUG",
            rotation="00:00",
            retention="7 days",
            compression="zip",
            encoding="utf-8",
        )
        logger.add(
            logs_dir / "upstream_{time:YYYY-MM-DD}.log",
            format=FILE_FORMAT,
            level="DEBUG",
            filter=_is_upstream,
            rotation="00:00",
            retention="14 days",
            encoding="utf-8",
        )
        logger.add(
            logs_dir / "error_{time:YYYY-MM-DD}.log",
            format=FILE_FORMAT,
            level="ERROR",
            rotation="00:00",
            retention="30 days",
            compression="zip",
            encoding="utf-8",
        )

    if init_sentry():
        logger.add(sentry_sink, level="ERROR", format="{message}")

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info(f"Market data API logging ready | Environment: {ENVIRONMENT} | Level: {level}")


def sentry_sink(message):
    """
    Forward ERROR and CRITICAL records to Sentry

    Upstream records are tagged so outages can be filtered in Sentry.
    """
    record = message.record

    with sentry_sdk.push_scope() as scope:
        scope.set_tag("component", "upstream" if _is_upstream(record) else "api")
        scope.set_extra("function", record["function"])
        scope.set_extra("file", record["file"].path)
        scope.set_extra("line", record["line"])

        if record["exception"]:
            sentry_sdk.capture_exception(record["exception"].value)
        else:
            level = "fatal" if record["level"].name == "CRITICAL" else "error"
            sentry_sdk.capture_message(record["message"], level=level)
