"""Generators package — character passwords and wordlist passphrases."""

from .errors import GenerationError, InvalidArgument, ValidationError
from .models import CharacterPool, PassphraseRequest, PasswordRequest, Wordlist
from .random_source import RandomSource, default_source
from .password import CharacterPasswordGenerator, generate_password
from .passphrase import PassphraseGenerator, generate_passphrase
from .entropy import passphrase_entropy_bits, password_entropy_bits, rate

__all__ = [
    "GenerationError",
    "InvalidArgument",
    "ValidationError",
    "CharacterPool",
    "PassphraseRequest",
    "PasswordRequest",
    "Wordlist",
    "RandomSource",
    "default_source",
    "CharacterPasswordGenerator",
    "generate_password",
    "PassphraseGenerator",
    "generate_passphrase",
    "passphrase_entropy_bits",
    "password_entropy_bits",
    "rate",
]
