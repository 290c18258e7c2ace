"""
JSON HTTP Client

Async HTTP client shared by every upstream data source (exchange pool lists,
volume feeds, chain asset lists). It handles:
- aiohttp session lifecycle (async context manager)
- Bounded retry with backoff on rate limits (429, 418, 503) and timeouts
- Request/response logging

Anything that still fails after the last attempt surfaces as a
TransportError; callers treat that as fatal to the current run.

Usage:
    async with JSONHttpClient() as client:
        document = await client.fetch_json("https://lcd.osmosis.zone/...")
"""

import asyncio
import time
from typing import Any, Optional

import aiohttp

from core.errors import TransportError
from core.logging import get_logger, log_api_request, log_api_response


RETRYABLE_STATUSES = (429, 418, 503)


class JSONHttpClient:
    """
    Async JSON fetcher with retry logic.

    Attributes:
        source: Short name used in log lines (e.g., "osmosis", "assetlist")
        timeout: Total request timeout in seconds
        max_attempts: Attempts per request before giving up
        session: aiohttp ClientSession for HTTP requests

    Example:
        >>> async with JSONHttpClient(source="osmosis") as client:
        ...     pools = await client.fetch_json(pool_url)
    """

    def __init__(self, source: str = "http", timeout: Optional[int] = None, max_attempts: int = 3):
        if timeout is None:
            from core.config import settings
            timeout = settings.request_timeout

        self.source = source
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.logger = get_logger(__name__)
        self.session: Optional[aiohttp.ClientSession] = None

    # ============================================
    # Context Manager for Session Management
    # ============================================

    async def __aenter__(self):
        self.session = aiohttp.ClientSession()
        self.logger.debug(f"{self.__class__.__name__} session created")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()
            self.session = None
            self.logger.debug(f"{self.__class__.__name__} session closed")

    # ============================================
    # HTTP Request Handler with Retry Logic
    # ============================================

    async def fetch_json(self, url: str) -> Any:
        """
        GET a URL and decode the JSON body.

        Args:
            url: Absolute URL of the document

        Returns:
            Decoded JSON document

        Raises:
            TransportError: If the request fails after all retries, returns
                            a non-retryable error status or a body that is
                            not JSON

        Retry delay (none after the last attempt):
            - Rate limited: 1.5s * (attempt + 1)
            - Timeout / connection error: 1.0s * (attempt + 1)
        """
        if not self.session:
            raise RuntimeError("Client session not initialized. Use 'async with' statement.")

        for attempt in range(self.max_attempts):
            log_api_request(self.source, url, attempt + 1)
            started = time.monotonic()
            try:
                async with self.session.get(
                    url,
                    headers={"Accept": "application/json"},
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as resp:
                    log_api_response(self.source, url, resp.status, time.monotonic() - started)

                    if resp.status == 200:
                        # Raw GitHub content is served as text/plain
                        try:
                            return await resp.json(content_type=None)
                        except ValueError as e:
                            self.logger.error(f"Invalid JSON from {url}: {e}")
                            raise TransportError(f"Invalid JSON from {url}", url=url) from e

                    elif resp.status in RETRYABLE_STATUSES:
                        self.logger.warning(
                            f"Rate limited (HTTP {resp.status}) on {url} "
                            f"(attempt {attempt + 1}/{self.max_attempts})"
                        )
                        await self._backoff(attempt, 1.5)
                        continue

                    else:
                        text = await resp.text()
                        self.logger.error(f"HTTP {resp.status} on {url}: {text[:200]}")
                        raise TransportError(f"HTTP {resp.status} fetching {url}", url=url)

            except asyncio.TimeoutError:
                self.logger.error(f"Timeout on {url} (attempt {attempt + 1}/{self.max_attempts})")
                await self._backoff(attempt, 1.0)

            except aiohttp.ClientError as e:
                self.logger.error(f"Request failed on {url}: {e} (attempt {attempt + 1}/{self.max_attempts})")
                await self._backoff(attempt, 1.0)

        raise TransportError(f"Failed to fetch {url} after {self.max_attempts} attempts", url=url)

    async def _backoff(self, attempt: int, step: float) -> None:
        """Sleep before the next attempt; the last attempt goes straight to failure."""
        if attempt == self.max_attempts - 1:
            return
        delay = step * (attempt + 1)
        self.logger.debug(f"Retrying in {delay:.1f}s...")
        await asyncio.sleep(delay)
