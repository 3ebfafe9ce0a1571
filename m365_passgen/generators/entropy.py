"""
Entropy estimates for generated secrets.

The figures describe the generator's search space, not a particular output.
They validate the request the same way the generators do, so a request that
cannot be generated cannot be scored either.
"""

from __future__ import annotations

import math
from typing import Sequence

from .models import DIGITS, PASSPHRASE_SYMBOLS, PassphraseRequest, PasswordRequest
from .passphrase import PassphraseGenerator
from .password import CharacterPasswordGenerator

# Upper bounds of each rating band, in bits
RATING_BANDS = [
    (40.0, "weak"),
    (64.0, "fair"),
    (96.0, "strong"),
]


def password_entropy_bits(request: PasswordRequest) -> float:
    """
    length * log2(distinct fill characters).

    Slight overestimate: mandatory slots draw from one category.
    """
    pool = CharacterPasswordGenerator().validate(request)
    size = len(set(pool.fill_pool(request)))
    return request.length * math.log2(size) if size else 0.0


def passphrase_entropy_bits(request: PassphraseRequest, wordlist: Sequence[str]) -> float:
    n = len(PassphraseGenerator().validate(request, wordlist))
    bits = sum(math.log2(n - i) for i in range(request.word_count))
    bits += request.digits * math.log2(len(DIGITS))
    bits += request.symbols * math.log2(len(PASSPHRASE_SYMBOLS))
    # One coin flip per extra that lands next to a word
    bits += min(request.digits + request.symbols, request.word_count)
    return bits


def rate(bits: float) -> str:
    for upper, label in RATING_BANDS:
        if bits < upper:
            return label
    return "very strong"
