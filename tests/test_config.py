"""config.py tests"""

from __future__ import annotations

import json
from pathlib import Path

from m365_passgen.config import (
    DEFAULT_WORDLIST_URL,
    GeneratorConfig,
    WordlistConfig,
    home_dir,
)


class TestHomeDir:

    def test_env_override(self, isolated_home: Path) -> None:
        assert home_dir() == isolated_home

    def test_default_under_user_home(self, monkeypatch) -> None:
        monkeypatch.delenv("M365_PASSGEN_HOME", raising=False)
        assert home_dir() == Path.home() / ".m365_passgen"


class TestWordlistConfig:

    def test_default_values(self, isolated_home: Path) -> None:
        c = WordlistConfig()
        assert c.url == DEFAULT_WORDLIST_URL
        assert c.local_path == ""
        assert c.cache_enabled is True
        assert c.cache_ttl_hours == 168
        assert c.cache_dir == str(isolated_home / "cache")


class TestGeneratorConfig:

    def test_defaults(self, isolated_home: Path) -> None:
        config = GeneratorConfig()
        assert config.password.length == 16
        assert config.passphrase.word_count == 4
        assert config.verbose is False

    def test_from_file(self, tmp_path: Path, isolated_home: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "password": {"length": 24, "exclude_ambiguous": True, "bogus": 1},
            "passphrase": {"separator": "."},
            "wordlist": {"cache_enabled": False},
            "verbose": True,
        }), encoding="utf-8")

        config = GeneratorConfig.from_file(path)

        assert config.password.length == 24
        assert config.password.exclude_ambiguous is True
        assert not hasattr(config.password, "bogus")
        assert config.passphrase.separator == "."
        assert config.wordlist.cache_enabled is False
        assert config.verbose is True

    def test_load_missing_path_uses_defaults(self, tmp_path: Path, isolated_home: Path) -> None:
        config = GeneratorConfig.load(tmp_path / "absent.json")
        assert config.password.length == 16
        assert GeneratorConfig.load(None).passphrase.separator == "-"

    def test_from_file_skips_properties_and_methods(self, tmp_path: Path, isolated_home: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "password": {"minimum_length": 3, "to_dict": 1, "length": 20},
        }), encoding="utf-8")

        config = GeneratorConfig.from_file(path)

        assert config.password.length == 20
        assert config.password.minimum_length == 6
        assert callable(config.password.to_dict)
