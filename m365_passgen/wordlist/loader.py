"""
Caller-held, lazily loaded wordlist.

The presentation layer owns one WordlistLoader, starts acquisition when the
user switches to passphrase mode, cancels it if they switch away, and hands
the loaded Wordlist to PassphraseGenerator on every call.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from ..cache.store import WordlistCache
from ..config import WordlistConfig
from ..generators.models import Wordlist
from .client import WordlistClient, WordlistFetchError

logger = logging.getLogger("m365_passgen.wordlist")


class WordlistLoader:
    """
    Resolves a wordlist once and keeps it for reuse.

    Resolution order: local file (config.local_path), cache, download.
    Only one acquisition task runs at a time; start() returns the in-flight
    task when called again.
    """

    def __init__(
        self,
        config: Optional[WordlistConfig] = None,
        cache: Optional[WordlistCache] = None,
        client_factory: Callable[[], WordlistClient] = WordlistClient,
    ):
        self.config = config or WordlistConfig()
        self.cache = cache
        self._client_factory = client_factory
        self._wordlist: Optional[Wordlist] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def wordlist(self) -> Optional[Wordlist]:
        return self._wordlist

    @property
    def is_loaded(self) -> bool:
        return self._wordlist is not None

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Schedule acquisition on the running loop, or return the existing task."""
        if self._task is None or (self._task.done() and not self.is_loaded):
            self._task = asyncio.get_running_loop().create_task(self._acquire())
        return self._task

    async def get(self) -> Wordlist:
        """Return the wordlist, loading it first if needed."""
        if self._wordlist is not None:
            return self._wordlist
        return await self.start()

    def cancel(self) -> bool:
        """Cancel an in-flight acquisition. Returns True if one was cancelled."""
        if not self.in_flight:
            return False
        logger.debug("Cancelling wordlist acquisition")
        self._task.cancel()
        self._task = None
        return True

    def reset(self):
        """Drop the held wordlist and any in-flight acquisition."""
        self.cancel()
        self._task = None
        self._wordlist = None

    async def _acquire(self) -> Wordlist:
        if self.config.local_path:
            path = self.config.local_path
            try:
                wordlist = await asyncio.to_thread(Wordlist.from_file, path)
            except UnicodeDecodeError as e:
                raise WordlistFetchError(0, "file is not UTF-8 text", path) from e
            if not wordlist:
                raise WordlistFetchError(0, "no words found in file", wordlist.source)
            logger.info(f"Loaded {len(wordlist)} words from {wordlist.source}")
            self._wordlist = wordlist
            return wordlist

        url = self.config.url
        if self.cache:
            cached = self.cache.get(url)
            if cached:
                self._wordlist = cached
                return cached

        async with self._client_factory() as client:
            wordlist = await client.fetch(url)

        if self.cache:
            self.cache.put(wordlist, url)
        self._wordlist = wordlist
        return wordlist


def build_loader(config: WordlistConfig, use_cache: bool = True) -> WordlistLoader:
    """Create a loader with a cache when both config and caller allow it."""
    cache = None
    if use_cache and config.cache_enabled and not config.local_path:
        cache = WordlistCache(config.cache_dir, ttl_hours=config.cache_ttl_hours)
    return WordlistLoader(config=config, cache=cache)
