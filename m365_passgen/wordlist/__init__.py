"""Wordlist package — download, cache-aware loading, and the caller-held loader."""

from .client import WordlistClient, WordlistFetchError
from .loader import WordlistLoader, build_loader

__all__ = [
    "WordlistClient",
    "WordlistFetchError",
    "WordlistLoader",
    "build_loader",
]
