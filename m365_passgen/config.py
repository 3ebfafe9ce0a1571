"""
Configuration module for the M365 admin password generator.
Defines the wordlist source, retry settings, local state paths and the JSON config loader.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from .generators.models import PassphraseRequest, PasswordRequest


# ─── Wordlist Source ────────────────────────────────────────────────────────

DEFAULT_WORDLIST_URL = "https://www.eff.org/files/2016/07/18/eff_large_wordlist.txt"

# Retry / backoff for the wordlist download
MAX_RETRIES = 3                   # Retry count for throttled or failed requests
INITIAL_BACKOFF_SECONDS = 1.0     # First retry delay
MAX_BACKOFF_SECONDS = 30.0        # Cap on exponential backoff
BACKOFF_MULTIPLIER = 2.0          # Exponential factor
REQUEST_TIMEOUT_SECONDS = 30.0


# ─── Local State ────────────────────────────────────────────────────────────

def home_dir() -> Path:
    """Directory holding presets and the wordlist cache."""
    override = os.environ.get("M365_PASSGEN_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".m365_passgen"


@dataclass
class WordlistConfig:
    """Where the passphrase wordlist comes from and how it is cached."""
    url: str = DEFAULT_WORDLIST_URL
    local_path: str = ""              # Read this file instead of downloading
    cache_enabled: bool = True
    cache_ttl_hours: int = 168        # One week
    cache_dir: str = ""

    def __post_init__(self):
        if not self.cache_dir:
            self.cache_dir = str(home_dir() / "cache")


# ─── Master Configuration ───────────────────────────────────────────────────

@dataclass
class GeneratorConfig:
    """Top-level configuration: default requests plus wordlist settings."""
    password: PasswordRequest = field(default_factory=PasswordRequest)
    passphrase: PassphraseRequest = field(default_factory=PassphraseRequest)
    wordlist: WordlistConfig = field(default_factory=WordlistConfig)
    verbose: bool = False

    @classmethod
    def from_file(cls, path: str | Path) -> "GeneratorConfig":
        """Load configuration from a JSON file. Unknown keys are ignored."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        config = cls()
        for section in ("password", "passphrase", "wordlist"):
            target = getattr(config, section)
            known = {f.name for f in fields(target)}
            for k, v in data.get(section, {}).items():
                if k in known:
                    setattr(target, k, v)
        config.verbose = data.get("verbose", False)
        return config

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "GeneratorConfig":
        """Load from *path* when given and present, else return defaults."""
        if path and Path(path).exists():
            return cls.from_file(path)
        return cls()
