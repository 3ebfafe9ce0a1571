"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from m365_passgen.generators.models import Wordlist
from m365_passgen.generators.random_source import RandomSource


FRUIT_WORDS = ["apple", "river", "stone", "cloud", "light"]

EFF_SAMPLE = """\
11111\tabacus
11112\tabdomen
11113\tabdominal
11114\tabide
11115\tabiding
11116\tability
"""


class ScriptedRandbelow:
    """Replays a fixed list of draws, each reduced modulo n; then repeats."""

    def __init__(self, values: list[int]):
        self.values = values
        self.calls: list[int] = []

    def __call__(self, n: int) -> int:
        value = self.values[len(self.calls) % len(self.values)]
        self.calls.append(n)
        return value % n


@pytest.fixture
def fruit_words() -> list[str]:
    """Five-word wordlist"""
    return list(FRUIT_WORDS)


@pytest.fixture
def eff_text() -> str:
    """EFF dice-format wordlist body"""
    return EFF_SAMPLE


@pytest.fixture
def eff_wordlist() -> Wordlist:
    """Small wordlist in EFF dice format"""
    return Wordlist.from_text(EFF_SAMPLE, source="eff-sample")


@pytest.fixture
def scripted_source() -> Callable[[list[int]], RandomSource]:
    """Build a RandomSource with scripted draws"""
    def _make(values: list[int]) -> RandomSource:
        return RandomSource(randbelow=ScriptedRandbelow(values))
    return _make


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point presets and the cache at a temporary directory"""
    home = tmp_path / "passgen_home"
    monkeypatch.setenv("M365_PASSGEN_HOME", str(home))
    return home
