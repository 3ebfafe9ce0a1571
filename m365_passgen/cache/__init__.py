"""Cache package — on-disk wordlist cache."""

from .store import WordlistCache

__all__ = ["WordlistCache"]
