"""
Generator data models — requests, resolved character pools, and the wordlist.
All of these are transient values built and discarded per generation call,
except the Wordlist, which the caller holds and reuses.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any, ClassVar, Iterator

from .errors import InvalidArgument


# ─── Character Sets ─────────────────────────────────────────────────────────

LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"
DEFAULT_SYMBOLS = "!@#$%^&*()-_=+[]{}<>?"

# Glyphs that read alike in most fonts (l/1/I, O/0)
AMBIGUOUS_CHARACTERS = "l1IO0"

# Passphrase extras use a smaller set that survives most password fields
PASSPHRASE_SYMBOLS = "!#$%&*+=?@"


def _from_mapping(cls, data: dict[str, Any]):
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidArgument(
            f"Unknown {cls.__name__} option(s): {', '.join(unknown)}"
        )
    return cls(**data)


# ─── Requests ───────────────────────────────────────────────────────────────

@dataclass
class PasswordRequest:
    """Options for a character password."""
    length: int = 16
    lowercase: bool = True            # Include at least one a-z
    uppercase: bool = True            # Include at least one A-Z
    digits: int = 2                   # Exact number of guaranteed digits
    symbols: int = 2                  # Exact number of guaranteed symbols
    exclude_ambiguous: bool = False   # Drop l, 1, I, O, 0
    custom_symbols: str = ""          # Replaces DEFAULT_SYMBOLS when non-empty

    @property
    def minimum_length(self) -> int:
        return self.digits + self.symbols + int(self.lowercase) + int(self.uppercase)

    @property
    def anything_selected(self) -> bool:
        return self.lowercase or self.uppercase or self.digits > 0 or self.symbols > 0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PasswordRequest":
        return _from_mapping(cls, data)


@dataclass
class PassphraseRequest:
    """Options for a wordlist passphrase."""
    word_count: int = 4
    separator: str = "-"
    capitalize: bool = True           # Upper-case the first letter of each word
    digits: int = 1                   # Digits inserted next to words
    symbols: int = 0                  # Symbols inserted next to words

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PassphraseRequest":
        return _from_mapping(cls, data)


# ─── Character Pool ─────────────────────────────────────────────────────────

@dataclass
class CharacterPool:
    """
    Allowed characters per category after symbol override and
    ambiguous-glyph filtering. Each category keeps its base order.
    """
    lowercase: str = ""
    uppercase: str = ""
    digit: str = ""
    symbol: str = ""

    CATEGORIES: ClassVar[tuple[str, ...]] = ("lowercase", "uppercase", "digit", "symbol")

    @classmethod
    def for_request(cls, request: PasswordRequest) -> "CharacterPool":
        """Resolve every category for *request*, whether or not it is included."""
        symbols = "".join(
            dict.fromkeys(ch for ch in request.custom_symbols if not ch.isspace())
        )
        pool = cls(
            lowercase=LOWERCASE,
            uppercase=UPPERCASE,
            digit=DIGITS,
            symbol=symbols or DEFAULT_SYMBOLS,
        )
        if request.exclude_ambiguous:
            # Symbols are never filtered
            pool.lowercase = _strip(pool.lowercase, AMBIGUOUS_CHARACTERS)
            pool.uppercase = _strip(pool.uppercase, AMBIGUOUS_CHARACTERS)
            pool.digit = _strip(pool.digit, AMBIGUOUS_CHARACTERS)
        return pool

    def included(self, request: PasswordRequest) -> dict[str, str]:
        """Categories the request asks for, mapped to their characters."""
        flags = {
            "lowercase": request.lowercase,
            "uppercase": request.uppercase,
            "digit": request.digits > 0,
            "symbol": request.symbols > 0,
        }
        return {name: getattr(self, name) for name in self.CATEGORIES if flags[name]}

    def fill_pool(self, request: PasswordRequest) -> str:
        """Concatenation of every included category."""
        return "".join(self.included(request).values())


def _strip(chars: str, remove: str) -> str:
    return "".join(ch for ch in chars if ch not in remove)


# ─── Wordlist ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Wordlist:
    """
    Ordered, read-only word sequence for passphrases.

    Accepts plain one-word-per-line text and the EFF dice format
    ("11111<TAB>abacus"). Blank lines and '#' comments are skipped,
    words are lowercased, duplicates keep their first position.
    """
    words: tuple[str, ...] = field(default_factory=tuple)
    source: str = ""

    @classmethod
    def from_text(cls, text: str, source: str = "") -> "Wordlist":
        words: dict[str, None] = {}
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            word = parts[-1] if len(parts) >= 2 and parts[0].isdigit() else parts[0]
            words.setdefault(word.lower(), None)
        return cls(words=tuple(words), source=source)

    @classmethod
    def from_file(cls, path: str | Path) -> "Wordlist":
        p = Path(path).expanduser()
        return cls.from_text(p.read_text(encoding="utf-8"), source=str(p))

    def __len__(self) -> int:
        return len(self.words)

    def __getitem__(self, index):
        return self.words[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def __bool__(self) -> bool:
        return bool(self.words)
