"""
Error taxonomy for the generators.

InvalidArgument means the request can never be satisfied as written (negative
length, zero words). ValidationError means the request is well formed but
cannot be met with the current character sets or wordlist.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for generator failures."""
    pass


class InvalidArgument(GenerationError, ValueError):
    """Raised when a request is structurally impossible."""
    pass


class ValidationError(GenerationError):
    """Raised when a request is valid but unsatisfiable."""

    CATEGORY_EMPTY = "category_empty"
    LENGTH_TOO_SHORT = "length_too_short"
    NOTHING_SELECTED = "nothing_selected"
    FILL_POOL_EMPTY = "fill_pool_empty"
    WORDLIST_EMPTY = "wordlist_empty"
    TOO_MANY_WORDS = "too_many_words"

    def __init__(self, reason: str, message: str):
        self.reason = reason
        super().__init__(message)


def require_count(name: str, value, minimum: int = 0) -> int:
    """Reject non-integers and values below *minimum* with InvalidArgument."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidArgument(f"{name} must be at least {minimum}, got {value}")
    return value
