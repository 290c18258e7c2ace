"""
Logging Setup

Every module logs through the "ansscraper" logger hierarchy configured here,
never through print().

Usage:
    from core.logging import logger, get_logger

    logger.info("Scrape started")                    # application logger
    log = get_logger(__name__)                       # "ansscraper.core.ranking"
    log.warning("Pool 42 dropped: contract registration failed")

What goes where:
    DEBUG    - HTTP requests/responses, individual registrations
    INFO     - Documents fetched, per-pass summaries
    WARNING  - Per-item failures a run survives (asset not found, pool dropped)
    ERROR    - A whole exchange run failed (e.g. pool list unreachable)

The level comes from LOG_LEVEL (see core.config) and can be changed at
runtime with set_log_level().
"""

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.schemas import AssetReport, IngestionReport


ROOT_LOGGER_NAME = "ansscraper"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(message)s"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(log_level: str = "INFO", log_format: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    Configure stdout logging and return the application logger.

    Example:
        >>> logger = setup_logging(log_level="DEBUG")
        >>> logger.info("Scrape started")
        2024-01-01 12:00:00 [INFO] ansscraper Scrape started
    """
    logging.basicConfig(
        level=_level(log_level),
        format=log_format,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True
    )

    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    app_logger.setLevel(_level(log_level))
    return app_logger


# ============================================
# Application Logger
# ============================================

try:
    from core.config import settings
    log_level = settings.log_level
except ImportError:
    log_level = "INFO"

logger = setup_logging(log_level=log_level)


def get_logger(name: str) -> logging.Logger:
    """
    Child logger for a module (pass __name__).

    Example:
        # In exchanges/osmosis/api_client.py:
        logger = get_logger(__name__)  # "ansscraper.exchanges.osmosis.api_client"
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_log_level(level: str) -> None:
    """Change the application and root log level at runtime."""
    logger.setLevel(_level(level))
    logging.getLogger().setLevel(_level(level))


# ============================================
# Log Helpers
# ============================================

def log_api_request(source: str, url: str, attempt: int = 1) -> None:
    """
    Example:
        [DEBUG] API Request: osmosis https://lcd.osmosis.zone/... | Attempt: 1
    """
    logger.debug(f"API Request: {source} {url} | Attempt: {attempt}")


def log_api_response(source: str, url: str, status: int, response_time: float = None) -> None:
    """
    Example:
        [DEBUG] API Response: osmosis https://lcd.osmosis.zone/... | Status: 200 | Time: 0.342s
    """
    time_str = f" | Time: {response_time:.3f}s" if response_time else ""
    logger.debug(f"API Response: {source} {url} | Status: {status}{time_str}")


def log_asset_summary(report: "AssetReport") -> None:
    """
    Example:
        [INFO] Assets: osmosis on osmosis-1 | registered=12 known=140 failed=2
    """
    logger.info(
        f"Assets: {report.exchange} on {report.network_id} | "
        f"registered={len(report.registered)} known={len(report.known)} "
        f"failed={len(report.failed)}"
    )


def log_ingestion_summary(report: "IngestionReport") -> None:
    """
    Logged at WARNING when any pool was dropped, INFO otherwise.

    Example:
        [INFO] Pools: osmosis on osmosis-1 | committed=70 pending=3 dropped=0 skipped=2
    """
    level = logging.WARNING if report.dropped_count else logging.INFO
    logger.log(
        level,
        f"Pools: {report.exchange} on {report.network_id} | "
        f"committed={report.committed_count} pending={report.pending_count} "
        f"dropped={report.dropped_count} skipped={report.skipped_count}"
    )
