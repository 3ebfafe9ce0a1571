"""
Wordlist passphrase generator.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .errors import InvalidArgument, ValidationError, require_count
from .models import DIGITS, PASSPHRASE_SYMBOLS, PassphraseRequest, Wordlist
from .random_source import RandomSource, default_source

logger = logging.getLogger("m365_passgen.generators")


def distinct_words(wordlist: Sequence[str]) -> Sequence[str]:
    """Drop repeated entries, keeping first-seen order. Wordlist objects are already unique."""
    if isinstance(wordlist, Wordlist):
        return wordlist
    return list(dict.fromkeys(wordlist))


class PassphraseGenerator:
    """
    Joins distinct words drawn from a caller-held wordlist.

    Digits and symbols are attached directly to words (before or after,
    on a coin flip), one per word in order; any left over go on the end.
    The wordlist is only read, never modified or stored.
    """

    def __init__(self, source: Optional[RandomSource] = None):
        self.source = source or default_source

    def check_request(self, request: PassphraseRequest) -> None:
        """Structural checks that need no wordlist."""
        require_count("word_count", request.word_count, minimum=1)
        require_count("digits", request.digits)
        require_count("symbols", request.symbols)
        if not isinstance(request.separator, str):
            raise InvalidArgument("separator must be a string")

    def validate(self, request: PassphraseRequest, wordlist: Sequence[str]) -> Sequence[str]:
        """Check the request against *wordlist* and return its distinct words."""
        self.check_request(request)
        if wordlist is None or len(wordlist) == 0:
            raise ValidationError(
                ValidationError.WORDLIST_EMPTY,
                "Wordlist is empty or not loaded yet",
            )
        words = distinct_words(wordlist)
        if request.word_count > len(words):
            raise ValidationError(
                ValidationError.TOO_MANY_WORDS,
                f"Requested {request.word_count} words but the wordlist "
                f"only has {len(words)} distinct words",
            )
        return words

    def generate(self, request: PassphraseRequest, wordlist: Sequence[str]) -> str:
        candidates = self.validate(request, wordlist)
        rng = self.source

        words = rng.sample(candidates, request.word_count)
        if request.capitalize:
            words = [w[:1].upper() + w[1:] for w in words]

        extras = [rng.choice(DIGITS) for _ in range(request.digits)]
        extras += [rng.choice(PASSPHRASE_SYMBOLS) for _ in range(request.symbols)]
        extras = rng.shuffle(extras)

        parts = []
        for word in words:
            if extras:
                extra = extras.pop(0)
                word = extra + word if rng.uniform_index(2) == 0 else word + extra
            parts.append(word)

        logger.debug(
            f"Generated passphrase: words={request.word_count}, "
            f"wordlist={len(candidates)}, trailing_extras={len(extras)}"
        )
        return request.separator.join(parts) + "".join(extras)


def generate_passphrase(
    wordlist: Sequence[str],
    request: Optional[PassphraseRequest] = None,
    source: Optional[RandomSource] = None,
) -> str:
    """Generate one passphrase; defaults to PassphraseRequest()."""
    return PassphraseGenerator(source).generate(request or PassphraseRequest(), wordlist)
