"""
Async wordlist download client with throttling backoff and retry.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from ..config import (
    BACKOFF_MULTIPLIER,
    DEFAULT_WORDLIST_URL,
    INITIAL_BACKOFF_SECONDS,
    MAX_BACKOFF_SECONDS,
    MAX_RETRIES,
    REQUEST_TIMEOUT_SECONDS,
)
from ..generators.models import Wordlist

logger = logging.getLogger("m365_passgen.wordlist")


class WordlistFetchError(Exception):
    """Raised when a wordlist cannot be downloaded or parsed."""
    def __init__(self, status_code: int, message: str, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Wordlist download failed ({status_code}) for {url}: {message}")


class WordlistClient:
    """
    Async wordlist downloader.
    Features:
      - HTTPS-only GET requests
      - Exponential backoff on 429/503/504, honouring Retry-After
      - Retries on timeouts and connection errors
    Use as `async with WordlistClient() as client`.
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_retries: int = MAX_RETRIES,
        initial_backoff: float = INITIAL_BACKOFF_SECONDS,
    ):
        self._transport = transport
        self.max_retries = max_retries
        self.initial_backoff = initial_backoff
        self._request_count = 0
        self._throttle_count = 0
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(REQUEST_TIMEOUT_SECONDS, connect=10.0),
            follow_redirects=True,
            headers={"Accept": "text/plain"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str = DEFAULT_WORDLIST_URL) -> Wordlist:
        """Download *url* and parse it into a Wordlist."""
        if not url.lower().startswith("https://"):
            raise WordlistFetchError(0, "only https:// sources are allowed", url)

        text = await self._get_with_retry(url)
        wordlist = Wordlist.from_text(text, source=url)
        if not wordlist:
            raise WordlistFetchError(200, "no words found in response", url)

        logger.info(f"Downloaded {len(wordlist)} words from {url}")
        return wordlist

    async def _get_with_retry(self, url: str) -> str:
        """GET with exponential backoff on throttling and transport errors."""
        if not self._client:
            raise RuntimeError("WordlistClient not initialized. Use 'async with' context.")

        backoff = self.initial_backoff

        for attempt in range(self.max_retries + 1):
            try:
                response = await self._client.get(url)
                self._request_count += 1

                if response.status_code == 200:
                    return response.text

                if response.status_code in (429, 503, 504) and attempt < self.max_retries:
                    self._throttle_count += 1
                    try:
                        retry_after = float(response.headers.get("Retry-After", backoff))
                    except ValueError:
                        retry_after = backoff
                    wait_time = min(max(retry_after, backoff), MAX_BACKOFF_SECONDS)
                    logger.warning(
                        f"Throttled ({response.status_code}) on {url}. "
                        f"Retry {attempt + 1}/{self.max_retries} in {wait_time:.1f}s"
                    )
                    await asyncio.sleep(wait_time)
                    backoff = min(backoff * BACKOFF_MULTIPLIER, MAX_BACKOFF_SECONDS)
                    continue

                raise WordlistFetchError(response.status_code, response.reason_phrase, url)

            except (httpx.TimeoutException, httpx.ConnectError) as e:
                logger.warning(
                    f"{type(e).__name__} on {url}, attempt {attempt + 1}/{self.max_retries + 1}"
                )
                if attempt == self.max_retries:
                    raise WordlistFetchError(0, f"{type(e).__name__}: {e}", url) from e
                await asyncio.sleep(backoff)
                backoff = min(backoff * BACKOFF_MULTIPLIER, MAX_BACKOFF_SECONDS)

        raise WordlistFetchError(0, "retries exhausted", url)

    def get_stats(self) -> dict:
        """Return client statistics."""
        return {
            "total_requests": self._request_count,
            "throttle_events": self._throttle_count,
        }
