"""
Character password generator.

Builds a fixed-length string with guaranteed digit/symbol counts and at least
one lower/upper case letter when requested, fills the rest from the combined
pool, then shuffles so the guaranteed characters land at random offsets.
"""

from __future__ import annotations

import logging
from typing import Optional

from .errors import InvalidArgument, ValidationError, require_count
from .models import CharacterPool, PasswordRequest
from .random_source import RandomSource, default_source

logger = logging.getLogger("m365_passgen.generators")


class CharacterPasswordGenerator:
    """Generates character passwords from a PasswordRequest."""

    def __init__(self, source: Optional[RandomSource] = None):
        self.source = source or default_source

    def validate(self, request: PasswordRequest) -> CharacterPool:
        """
        Check *request* without drawing randomness.
        Returns the resolved pool; raises InvalidArgument or ValidationError.
        """
        require_count("length", request.length)
        require_count("digits", request.digits)
        require_count("symbols", request.symbols)
        if not isinstance(request.custom_symbols, str):
            raise InvalidArgument("custom_symbols must be a string")

        pool = CharacterPool.for_request(request)

        for name, count in (("digit", request.digits), ("symbol", request.symbols)):
            if count > 0 and not getattr(pool, name):
                raise ValidationError(
                    ValidationError.CATEGORY_EMPTY,
                    f"No {name} characters left to choose from",
                )

        if request.length < request.minimum_length:
            raise ValidationError(
                ValidationError.LENGTH_TOO_SHORT,
                f"Length {request.length} is too short; the selected options "
                f"need at least {request.minimum_length} characters",
            )

        if not request.anything_selected:
            raise ValidationError(
                ValidationError.NOTHING_SELECTED,
                "Select at least one character category",
            )

        for name, chars in pool.included(request).items():
            if not chars:
                raise ValidationError(
                    ValidationError.CATEGORY_EMPTY,
                    f"No {name} characters left to choose from",
                )

        if request.length > request.minimum_length and not pool.fill_pool(request):
            raise ValidationError(
                ValidationError.FILL_POOL_EMPTY,
                "No characters available to fill the remaining length",
            )

        return pool

    def generate(self, request: PasswordRequest) -> str:
        pool = self.validate(request)
        rng = self.source

        chars = [rng.choice(pool.digit) for _ in range(request.digits)]
        chars += [rng.choice(pool.symbol) for _ in range(request.symbols)]
        if request.lowercase:
            chars.append(rng.choice(pool.lowercase))
        if request.uppercase:
            chars.append(rng.choice(pool.uppercase))

        fill = pool.fill_pool(request)
        remaining = request.length - len(chars)
        chars += [rng.choice(fill) for _ in range(remaining)]

        logger.debug(
            f"Generated password: length={request.length}, "
            f"mandatory={len(chars) - remaining}, pool={len(fill)}"
        )
        return "".join(rng.shuffle(chars))


def generate_password(
    request: Optional[PasswordRequest] = None,
    source: Optional[RandomSource] = None,
) -> str:
    """Generate one password; defaults to PasswordRequest()."""
    return CharacterPasswordGenerator(source).generate(request or PasswordRequest())
