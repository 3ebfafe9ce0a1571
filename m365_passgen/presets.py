"""
Preset Manager — Named generation presets.

Presets are stored in:
    ~/.m365_passgen/presets.json   (or $M365_PASSGEN_HOME/presets.json)

Each preset holds a mode ("password" or "passphrase") and the request
options for that mode. Helpdesk admins keep one per use case (temporary
user passwords, service account secrets, spoken passphrases) and pick
one with `--preset <name>`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from .config import home_dir
from .generators.errors import InvalidArgument
from .generators.models import PassphraseRequest, PasswordRequest
from .generators.passphrase import PassphraseGenerator
from .generators.password import CharacterPasswordGenerator

logger = logging.getLogger("m365_passgen.presets")

MODES = ("password", "passphrase")


def presets_file() -> Path:
    return home_dir() / "presets.json"


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

@dataclass
class GeneratorPreset:
    """A single named preset."""
    name: str                                       # Unique short name (e.g. "temp-user")
    mode: str = "password"                          # "password" or "passphrase"
    options: dict[str, Any] = field(default_factory=dict)
    notes: str = ""

    def __post_init__(self):
        if self.mode not in MODES:
            raise InvalidArgument(f"Unknown preset mode: {self.mode!r}")

    def to_request(self) -> Union[PasswordRequest, PassphraseRequest]:
        """Build the request for this preset's mode."""
        if self.mode == "passphrase":
            return PassphraseRequest.from_dict(self.options)
        return PasswordRequest.from_dict(self.options)


@dataclass
class PresetStore:
    """Manages the collection of presets on disk."""
    presets: dict[str, GeneratorPreset] = field(default_factory=dict)
    default_preset: str = ""
    path: Optional[Path] = None

    # --- Persistence ---

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "PresetStore":
        """Load presets from disk. Returns an empty store if the file doesn't exist."""
        path = path or presets_file()
        if not path.exists():
            return cls(path=path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            store = cls(path=path)
            store.default_preset = data.get("default_preset", "")
            for name, pdata in data.get("presets", {}).items():
                store.presets[name] = GeneratorPreset(
                    name=name,
                    mode=pdata.get("mode", "password"),
                    options=pdata.get("options", {}),
                    notes=pdata.get("notes", ""),
                )
            return store
        except (json.JSONDecodeError, AttributeError, InvalidArgument) as e:
            logger.warning(f"Failed to parse {path}: {e}")
            return cls(path=path)

    def save(self) -> None:
        """Persist presets to disk."""
        path = self.path or presets_file()
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "default_preset": self.default_preset,
            "presets": {
                name: {
                    "mode": p.mode,
                    "options": p.options,
                    "notes": p.notes,
                }
                for name, p in self.presets.items()
            },
        }
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")

    # --- CRUD ---

    def add(self, preset: GeneratorPreset, set_default: bool = False) -> None:
        """Add or overwrite a preset. Options are checked before saving."""
        request = preset.to_request()
        if preset.mode == "passphrase":
            PassphraseGenerator().check_request(request)
        else:
            CharacterPasswordGenerator().validate(request)
        self.presets[preset.name] = preset
        if set_default or not self.default_preset:
            self.default_preset = preset.name
        self.save()

    def remove(self, name: str) -> bool:
        """Remove a preset by name. Returns True if it existed."""
        if name not in self.presets:
            return False
        del self.presets[name]
        if self.default_preset == name:
            self.default_preset = next(iter(self.presets), "")
        self.save()
        return True

    def get(self, name: str) -> Optional[GeneratorPreset]:
        """Get a preset by name (case-insensitive)."""
        key = name.lower()
        for pname, preset in self.presets.items():
            if pname.lower() == key:
                return preset
        return None

    def get_default(self) -> Optional[GeneratorPreset]:
        """Get the default preset, or None if no presets exist."""
        if self.default_preset:
            return self.presets.get(self.default_preset)
        if self.presets:
            return next(iter(self.presets.values()))
        return None

    def set_default(self, name: str) -> bool:
        """Set the default preset. Returns True if the preset exists."""
        if name not in self.presets:
            return False
        self.default_preset = name
        self.save()
        return True

    def list_presets(self) -> list[GeneratorPreset]:
        """Return all presets sorted by name."""
        return sorted(self.presets.values(), key=lambda p: p.name)


# ---------------------------------------------------------------------------
# Convenience: resolve a preset for a generation run
# ---------------------------------------------------------------------------

def resolve_preset(
    preset_name: Optional[str] = None,
    path: Optional[Path] = None,
) -> Optional[GeneratorPreset]:
    """
    Look up a preset by name.
    If no name given, returns the default preset.
    Returns None if no presets are configured.
    """
    store = PresetStore.load(path)
    if preset_name:
        return store.get(preset_name)
    return store.get_default()
