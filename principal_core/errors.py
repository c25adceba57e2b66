"""
principal_core/errors.py — Error taxonomy for identity derivation.

Three failure families, each surfaced immediately and never downgraded
to a default value:

- Invalid input shape (wrong key length, malformed DER, bad mnemonic)
- Corrupted derivation result (fatal, never retried)
- Malformed principal text (user-facing format error)

Shape and format errors also subclass ValueError so callers that only
know about ValueError keep working.
"""

from __future__ import annotations

from typing import Optional


class PrincipalCoreError(Exception):
    """Base for every error raised by principal_core."""


class UnsupportedAlgorithmError(PrincipalCoreError, ValueError):
    """Algorithm tag is not one of the supported key algorithms."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Unsupported key algorithm: {value!r} "
            f"(expected 'ed25519' or 'secp256k1')"
        )


class KeyLengthError(PrincipalCoreError, ValueError):
    """Raw key bytes have the wrong length or the wrong point tag."""

    def __init__(
        self,
        algorithm: str,
        expected: int,
        actual: int,
        detail: Optional[str] = None,
    ) -> None:
        self.algorithm = algorithm
        self.expected = expected
        self.actual = actual
        message = (
            f"{algorithm} public key must be {expected} bytes, got {actual}"
        )
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DerEncodingError(PrincipalCoreError, ValueError):
    """DER SubjectPublicKeyInfo bytes could not be parsed."""


class InvalidMnemonicError(PrincipalCoreError, ValueError):
    """Mnemonic sentence failed wordlist or checksum validation."""


class DerivationError(PrincipalCoreError, RuntimeError):
    """Key derivation produced an unusable result.

    The secp256k1 path is fixed and always valid for a 64-byte seed, so
    this indicates corrupted input. It is fatal: retrying an identical
    call cannot change the outcome.
    """


class PrincipalFormatError(PrincipalCoreError, ValueError):
    """Principal text failed to decode or validate."""

    INVALID_CHARACTER = "invalid_character"
    TOO_SHORT = "too_short"
    CHECKSUM_MISMATCH = "checksum_mismatch"

    def __init__(
        self,
        reason: str,
        message: str,
        character: Optional[str] = None,
        position: Optional[int] = None,
    ) -> None:
        self.reason = reason
        self.character = character
        self.position = position
        super().__init__(f"Invalid principal: {message}")
