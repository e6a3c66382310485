"""
Logging configuration for the shopping pricing service.

The engine logs under the "shopping_pricing" logger tree. Amounts and prices
are only logged at DEBUG; INFO carries counts and lookups so production logs
never hold a shopper's basket.

Usage:
    from shopping_pricing.logging_config import setup_logging
    setup_logging()  # once, before create_app()

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
"""
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Raised to WARNING unless running at DEBUG. slowapi logs every rejected
# request, which the 429 response already reports.
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "slowapi")


def resolve_level(level: str = None) -> str:
    """Normalize a level name, falling back to LOG_LEVEL and then INFO."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.strip().upper()
    return level if level in VALID_LEVELS else "INFO"


def setup_logging(level: str = None) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level name. If not provided, reads LOG_LEVEL, defaults to INFO.
    """
    level = resolve_level(level)
    numeric_level = getattr(logging, level)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
    )

    logging.getLogger("shopping_pricing").setLevel(numeric_level)

    if level != "DEBUG":
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured at %s level", level)
