"""
principal_core/config.py — Derivation settings.

The core reads no environment variables or files. Settings travel
explicitly as an immutable DerivationConfig; DEFAULT_CONFIG reproduces
the reference tooling (English wordlist, 24-word mnemonics, dfx path).
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .bip32 import parse_path

# dfx-compatible BIP-44 path for secp256k1 identities (coin type 223).
DEFAULT_SECP256K1_PATH = "m/44'/223'/0'/0/0"

# Entropy sizes accepted by BIP-39.
MNEMONIC_STRENGTHS = (128, 160, 192, 224, 256)


class DerivationConfig(BaseModel):
    """Settings shared by mnemonic generation and key derivation."""

    model_config = ConfigDict(frozen=True)

    mnemonic_language: str = Field(
        default="english",
        description="BIP-39 wordlist used to generate and validate mnemonics.",
    )
    mnemonic_strength: int = Field(
        default=256,
        description="Entropy bits for generated mnemonics (256 = 24 words).",
    )
    secp256k1_path: str = Field(
        default=DEFAULT_SECP256K1_PATH,
        description="BIP-32 path for secp256k1 keys. Changing it breaks "
                    "compatibility with the reference tooling.",
    )
    validate_mnemonic: bool = Field(
        default=True,
        description="Reject mnemonics with unknown words or a bad checksum.",
    )

    @field_validator("mnemonic_strength")
    @classmethod
    def validate_strength(cls, v: int) -> int:
        if v not in MNEMONIC_STRENGTHS:
            raise ValueError(
                f"mnemonic_strength must be one of {MNEMONIC_STRENGTHS}, got {v}"
            )
        return v

    @field_validator("secp256k1_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        parse_path(v)
        return v.strip()


DEFAULT_CONFIG = DerivationConfig()
