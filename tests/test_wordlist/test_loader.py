"""wordlist/loader.py tests"""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import pytest

from m365_passgen.cache.store import WordlistCache
from m365_passgen.config import WordlistConfig
from m365_passgen.wordlist.client import WordlistClient, WordlistFetchError
from m365_passgen.wordlist.loader import WordlistLoader, build_loader

URL = "https://example.org/words.txt"


class CountingHandler:
    """MockTransport handler that serves a fixed body and counts requests"""

    def __init__(self, text: str = "alpha\nbravo\ncharlie\n", status: int = 200):
        self.text = text
        self.status = status
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        return httpx.Response(self.status, text=self.text)

    def factory(self):
        return lambda: WordlistClient(
            transport=httpx.MockTransport(self), max_retries=0, initial_backoff=0
        )


@pytest.fixture
def wl_config(tmp_path: Path) -> WordlistConfig:
    return WordlistConfig(url=URL, cache_dir=str(tmp_path / "cache"))


class TestWordlistLoader:
    """WordlistLoader"""

    @pytest.mark.asyncio
    async def test_downloads_once_and_holds(self, wl_config: WordlistConfig) -> None:
        handler = CountingHandler()
        loader = WordlistLoader(wl_config, client_factory=handler.factory())

        assert loader.wordlist is None
        first = await loader.get()
        second = await loader.get()

        assert first is second
        assert first.words == ("alpha", "bravo", "charlie")
        assert loader.is_loaded
        assert handler.calls == 1

    @pytest.mark.asyncio
    async def test_cache_shared_between_loaders(self, wl_config: WordlistConfig) -> None:
        handler = CountingHandler()
        cache = WordlistCache(wl_config.cache_dir)

        await WordlistLoader(wl_config, cache=cache, client_factory=handler.factory()).get()
        cached = await WordlistLoader(wl_config, cache=cache, client_factory=handler.factory()).get()

        assert cached.words == ("alpha", "bravo", "charlie")
        assert handler.calls == 1

    @pytest.mark.asyncio
    async def test_local_file_skips_network(self, wl_config: WordlistConfig, tmp_path: Path) -> None:
        path = tmp_path / "words.txt"
        path.write_text("delta\necho\n", encoding="utf-8")
        wl_config.local_path = str(path)
        handler = CountingHandler()

        wordlist = await WordlistLoader(wl_config, client_factory=handler.factory()).get()

        assert wordlist.words == ("delta", "echo")
        assert handler.calls == 0

    @pytest.mark.asyncio
    async def test_empty_local_file_rejected(self, wl_config: WordlistConfig, tmp_path: Path) -> None:
        path = tmp_path / "empty.txt"
        path.write_text("\n", encoding="utf-8")
        wl_config.local_path = str(path)

        with pytest.raises(WordlistFetchError):
            await WordlistLoader(wl_config).get()

    @pytest.mark.asyncio
    async def test_non_utf8_local_file_rejected(self, wl_config: WordlistConfig, tmp_path: Path) -> None:
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"caf\xe9\nriver\n")
        wl_config.local_path = str(path)

        with pytest.raises(WordlistFetchError) as exc:
            await WordlistLoader(wl_config).get()
        assert exc.value.status_code == 0
        assert exc.value.url == str(path)

    @pytest.mark.asyncio
    async def test_start_returns_in_flight_task(self, wl_config: WordlistConfig) -> None:
        loader = WordlistLoader(wl_config, client_factory=CountingHandler().factory())
        task = loader.start()
        assert loader.start() is task
        await task
        assert loader.is_loaded

    @pytest.mark.asyncio
    async def test_cancel_in_flight_acquisition(self, wl_config: WordlistConfig) -> None:
        release = asyncio.Event()

        async def slow_handler(request: httpx.Request) -> httpx.Response:
            await release.wait()
            return httpx.Response(200, text="late\n")

        loader = WordlistLoader(
            wl_config,
            client_factory=lambda: WordlistClient(transport=httpx.MockTransport(slow_handler)),
        )
        task = loader.start()
        await asyncio.sleep(0)
        assert loader.in_flight

        assert loader.cancel() is True
        with pytest.raises(asyncio.CancelledError):
            await task
        assert not loader.is_loaded
        assert loader.cancel() is False

    @pytest.mark.asyncio
    async def test_failed_acquisition_can_be_retried(self, wl_config: WordlistConfig) -> None:
        handler = CountingHandler(status=500)
        loader = WordlistLoader(wl_config, client_factory=handler.factory())

        with pytest.raises(WordlistFetchError):
            await loader.get()

        handler.status = 200
        wordlist = await loader.get()
        assert len(wordlist) == 3
        assert handler.calls == 2

    @pytest.mark.asyncio
    async def test_reset_drops_wordlist(self, wl_config: WordlistConfig) -> None:
        loader = WordlistLoader(wl_config, client_factory=CountingHandler().factory())
        await loader.get()
        loader.reset()
        assert loader.wordlist is None


class TestBuildLoader:
    """build_loader"""

    def test_cache_attached_by_default(self, wl_config: WordlistConfig) -> None:
        assert isinstance(build_loader(wl_config).cache, WordlistCache)

    def test_cache_disabled_by_caller(self, wl_config: WordlistConfig) -> None:
        assert build_loader(wl_config, use_cache=False).cache is None

    def test_no_cache_for_local_files(self, wl_config: WordlistConfig) -> None:
        wl_config.local_path = "/tmp/words.txt"
        assert build_loader(wl_config).cache is None
