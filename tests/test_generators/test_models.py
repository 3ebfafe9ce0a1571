"""generators/models.py tests"""

from __future__ import annotations

from pathlib import Path

import pytest

from m365_passgen.generators.errors import InvalidArgument
from m365_passgen.generators.models import (
    DEFAULT_SYMBOLS,
    CharacterPool,
    PassphraseRequest,
    PasswordRequest,
    Wordlist,
)


class TestPasswordRequest:
    """PasswordRequest"""

    def test_default_values(self) -> None:
        r = PasswordRequest()
        assert r.length == 16
        assert r.lowercase is True
        assert r.uppercase is True
        assert r.digits == 2
        assert r.symbols == 2
        assert r.exclude_ambiguous is False
        assert r.custom_symbols == ""

    def test_minimum_length(self) -> None:
        assert PasswordRequest(digits=3, symbols=1).minimum_length == 6
        assert PasswordRequest(lowercase=False, uppercase=False, digits=0, symbols=0).minimum_length == 0

    def test_from_dict_roundtrip(self) -> None:
        r = PasswordRequest(length=20, symbols=0, custom_symbols="#")
        assert PasswordRequest.from_dict(r.to_dict()) == r

    def test_from_dict_rejects_unknown_keys(self) -> None:
        with pytest.raises(InvalidArgument, match="word_count"):
            PasswordRequest.from_dict({"length": 8, "word_count": 3})


class TestPassphraseRequest:
    """PassphraseRequest"""

    def test_default_values(self) -> None:
        r = PassphraseRequest()
        assert r.word_count == 4
        assert r.separator == "-"
        assert r.capitalize is True
        assert r.digits == 1
        assert r.symbols == 0

    def test_from_dict_partial(self) -> None:
        r = PassphraseRequest.from_dict({"word_count": 6, "separator": " "})
        assert r.word_count == 6
        assert r.separator == " "
        assert r.capitalize is True


class TestCharacterPool:
    """CharacterPool"""

    def test_default_resolution(self) -> None:
        pool = CharacterPool.for_request(PasswordRequest())
        assert len(pool.lowercase) == 26
        assert len(pool.uppercase) == 26
        assert pool.digit == "0123456789"
        assert pool.symbol == DEFAULT_SYMBOLS

    def test_ambiguous_removed_from_letters_and_digits(self) -> None:
        pool = CharacterPool.for_request(PasswordRequest(exclude_ambiguous=True))
        assert "l" not in pool.lowercase and len(pool.lowercase) == 25
        assert "I" not in pool.uppercase and "O" not in pool.uppercase
        assert pool.digit == "23456789"

    def test_custom_symbols_deduplicated(self) -> None:
        pool = CharacterPool.for_request(PasswordRequest(custom_symbols="#!#! ~"))
        assert pool.symbol == "#!~"

    def test_fill_pool_only_included_categories(self) -> None:
        request = PasswordRequest(lowercase=False, uppercase=True, digits=0, symbols=1)
        pool = CharacterPool.for_request(request)
        assert set(pool.included(request)) == {"uppercase", "symbol"}
        assert pool.fill_pool(request) == pool.uppercase + pool.symbol


class TestWordlist:
    """Wordlist parsing"""

    def test_eff_format(self, eff_wordlist: Wordlist) -> None:
        assert eff_wordlist.words[:2] == ("abacus", "abdomen")
        assert len(eff_wordlist) == 6
        assert eff_wordlist.source == "eff-sample"

    def test_plain_format_with_comments_and_duplicates(self) -> None:
        text = "# words\nApple\n\nriver\napple\n  stone  \n"
        wl = Wordlist.from_text(text)
        assert wl.words == ("apple", "river", "stone")

    def test_sequence_behaviour(self) -> None:
        wl = Wordlist(words=("a", "b"))
        assert wl[1] == "b"
        assert list(wl) == ["a", "b"]
        assert bool(wl)
        assert not Wordlist()

    def test_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "words.txt"
        path.write_text("one\ntwo\nthree\n", encoding="utf-8")
        wl = Wordlist.from_file(path)
        assert wl.words == ("one", "two", "three")
        assert wl.source == str(path)
