"""
principal_core/seed.py — BIP-39 mnemonic generation and seed derivation.

Seed = PBKDF2-HMAC-SHA512(NFKD(mnemonic), "mnemonic", 2048 rounds), 64
bytes, empty passphrase. Wordlists, checksum validation and the secure
random source come from the `mnemonic` package.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from mnemonic import Mnemonic

from .config import DEFAULT_CONFIG, DerivationConfig
from .errors import InvalidMnemonicError

SEED_LENGTH = 64


@lru_cache(maxsize=None)
def _wordlist(language: str) -> Mnemonic:
    return Mnemonic(language)


def generate_mnemonic(config: DerivationConfig = DEFAULT_CONFIG) -> str:
    """Generate a fresh mnemonic (24 words under the default config)."""
    return _wordlist(config.mnemonic_language).generate(
        strength=config.mnemonic_strength
    )


def validate_mnemonic(
    words: str, config: DerivationConfig = DEFAULT_CONFIG
) -> None:
    """Raise InvalidMnemonicError unless words form a valid mnemonic."""
    if not words or not words.strip():
        raise InvalidMnemonicError("Mnemonic must not be empty")
    if not _wordlist(config.mnemonic_language).check(words.strip()):
        raise InvalidMnemonicError(
            f"Mnemonic has unknown words or a bad checksum "
            f"({len(words.split())} words, language "
            f"{config.mnemonic_language!r})"
        )


def mnemonic_to_seed(
    words: str, config: DerivationConfig = DEFAULT_CONFIG
) -> bytes:
    """Derive the 64-byte BIP-39 seed (empty passphrase).

    Deterministic: identical words always give an identical seed. Runs
    of whitespace collapse to single spaces before validation and
    stretching, so padded input yields the same seed.
    """
    words = " ".join(words.split())
    if config.validate_mnemonic:
        validate_mnemonic(words, config)
    return Mnemonic.to_seed(words, passphrase="")


def resolve_mnemonic(
    mnemonic: Optional[str], config: DerivationConfig = DEFAULT_CONFIG
) -> str:
    """Use the given mnemonic (trimmed) or generate one if blank."""
    if mnemonic is not None and mnemonic.strip():
        return mnemonic.strip()
    return generate_mnemonic(config)
