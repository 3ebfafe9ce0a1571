"""
SQLite-based cache for downloaded passphrase wordlists.
Keeps one row per source URL so repeat runs skip the download.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Optional

from ..generators.models import Wordlist

logger = logging.getLogger("m365_passgen.cache")


class WordlistCache:
    """
    Persistent wordlist cache backed by SQLite.
    Features:
      - TTL-based expiration
      - Connection-per-call, safe to use from async code
      - Stores the word array as JSON keyed by source
    """

    def __init__(self, cache_dir: str, ttl_hours: int = 168):
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = self.cache_dir / "wordlist_cache.db"
        self.ttl_seconds = ttl_hours * 3600
        self._init_db()

    def _init_db(self):
        """Initialize the cache database schema."""
        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS wordlists (
                    source TEXT PRIMARY KEY,
                    words TEXT NOT NULL,
                    timestamp REAL NOT NULL,
                    word_count INTEGER DEFAULT 0
                )
            """)
            conn.commit()

    def get(self, source: str) -> Optional[Wordlist]:
        """
        Return the cached wordlist for *source* if present and fresh.
        Returns None if not found or expired.
        """
        with sqlite3.connect(str(self.db_path)) as conn:
            row = conn.execute(
                "SELECT words, timestamp FROM wordlists WHERE source = ?",
                (source,),
            ).fetchone()

        if row is None:
            logger.debug(f"Cache miss for wordlist: {source}")
            return None

        words_json, timestamp = row
        if time.time() - timestamp > self.ttl_seconds:
            logger.debug(f"Cache expired for wordlist: {source}")
            return None

        logger.debug(f"Cache hit for wordlist: {source}")
        return Wordlist(words=tuple(json.loads(words_json)), source=source)

    def put(self, wordlist: Wordlist, source: Optional[str] = None):
        """Store *wordlist* under *source* (defaults to wordlist.source)."""
        key = source or wordlist.source
        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO wordlists (source, words, timestamp, word_count)
                VALUES (?, ?, ?, ?)
                """,
                (key, json.dumps(list(wordlist.words)), time.time(), len(wordlist)),
            )
            conn.commit()
        logger.debug(f"Cached {len(wordlist)} words for: {key}")

    def entries(self) -> list[dict]:
        """List cached sources with their size and age."""
        with sqlite3.connect(str(self.db_path)) as conn:
            rows = conn.execute(
                "SELECT source, word_count, timestamp FROM wordlists ORDER BY source"
            ).fetchall()
        now = time.time()
        return [
            {
                "source": r[0],
                "word_count": r[1],
                "age_hours": round((now - r[2]) / 3600, 1),
                "expired": now - r[2] > self.ttl_seconds,
            }
            for r in rows
        ]

    def clear_expired(self) -> int:
        """Remove all expired entries. Returns the number removed."""
        cutoff = time.time() - self.ttl_seconds
        with sqlite3.connect(str(self.db_path)) as conn:
            deleted = conn.execute(
                "DELETE FROM wordlists WHERE timestamp < ?",
                (cutoff,),
            ).rowcount
            conn.commit()
        if deleted:
            logger.info(f"Cleared {deleted} expired wordlist(s).")
        return deleted

    def clear(self) -> int:
        """Remove every cached wordlist."""
        with sqlite3.connect(str(self.db_path)) as conn:
            deleted = conn.execute("DELETE FROM wordlists").rowcount
            conn.commit()
        logger.info(f"Cleared {deleted} cached wordlist(s).")
        return deleted
