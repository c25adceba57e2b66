"""
principal_core/der.py — DER SubjectPublicKeyInfo for raw public keys.

The two supported SPKI layouts have fixed-length bodies, so encoding is
a constant prefix followed by the raw key bytes:

Ed25519 (RFC 8410), 44 bytes total:
    30 2a                         SEQUENCE (42)
       30 05                      SEQUENCE (5)
          06 03 2b6570            OID 1.3.101.112 (Ed25519)
       03 21 00                   BIT STRING (33), 0 unused bits
          <32-byte key>

secp256k1 (RFC 5480), 88 bytes total:
    30 56                         SEQUENCE (86)
       30 10                      SEQUENCE (16)
          06 07 2a8648ce3d0201    OID 1.2.840.10045.2.1 (ecPublicKey)
          06 05 2b8104000a        OID 1.3.132.0.10 (secp256k1)
       03 42 00                   BIT STRING (66), 0 unused bits
          04 <X:32> <Y:32>        uncompressed point

These bytes are an interop format. Do not alter them.
"""

from __future__ import annotations

from .errors import DerEncodingError, KeyLengthError
from .record import (
    PUBLIC_KEY_LENGTHS,
    UNCOMPRESSED_POINT_TAG,
    KeyAlgorithm,
    normalize_secp256k1_point,
)

ED25519_DER_PREFIX = bytes.fromhex("302a300506032b6570032100")
SECP256K1_DER_PREFIX = bytes.fromhex("3056301006072a8648ce3d020106052b8104000a034200")

_PREFIXES = {
    KeyAlgorithm.ED25519: ED25519_DER_PREFIX,
    KeyAlgorithm.SECP256K1: SECP256K1_DER_PREFIX,
}

# Total encoded lengths: 44 (Ed25519) and 88 (secp256k1).
DER_LENGTHS = {
    alg: len(prefix) + PUBLIC_KEY_LENGTHS[alg] for alg, prefix in _PREFIXES.items()
}


def validate_public_key(algorithm: KeyAlgorithm, public_key: bytes) -> bytes:
    """Check raw key shape for algorithm; return the (normalized) key.

    secp256k1 keys given as a bare 64-byte X || Y are normalized to the
    65-byte tagged form before validation. This is a convenience for
    callers that drop the tag, not a relaxation of the format: the
    encoded output is always the standard uncompressed point.
    """
    algorithm = KeyAlgorithm.parse(algorithm)
    public_key = bytes(public_key)
    expected = PUBLIC_KEY_LENGTHS[algorithm]

    if algorithm == KeyAlgorithm.ED25519:
        if len(public_key) != expected:
            raise KeyLengthError(algorithm.value, expected, len(public_key))
        return public_key

    if algorithm == KeyAlgorithm.SECP256K1:
        public_key = normalize_secp256k1_point(public_key)
        if len(public_key) != expected:
            raise KeyLengthError(
                algorithm.value,
                expected,
                len(public_key),
                "expected an uncompressed point (64 bytes accepted without tag)",
            )
        if public_key[0] != UNCOMPRESSED_POINT_TAG:
            raise KeyLengthError(
                algorithm.value,
                expected,
                len(public_key),
                f"first byte must be 0x04, got 0x{public_key[0]:02x}",
            )
        return public_key

    raise AssertionError(f"unhandled algorithm {algorithm!r}")


def encode_spki(algorithm: KeyAlgorithm, public_key: bytes) -> bytes:
    """Wrap a raw public key in DER SubjectPublicKeyInfo."""
    algorithm = KeyAlgorithm.parse(algorithm)
    public_key = validate_public_key(algorithm, public_key)
    return _PREFIXES[algorithm] + public_key


def decode_spki(der: bytes) -> tuple[KeyAlgorithm, bytes]:
    """Inverse of encode_spki for the two supported layouts.

    Returns (algorithm, raw_public_key). Raises DerEncodingError when
    the prefix is unknown or the length does not match it.
    """
    der = bytes(der)
    for algorithm, prefix in _PREFIXES.items():
        if not der.startswith(prefix):
            continue
        if len(der) != DER_LENGTHS[algorithm]:
            raise DerEncodingError(
                f"{algorithm.value} SubjectPublicKeyInfo must be "
                f"{DER_LENGTHS[algorithm]} bytes, got {len(der)}"
            )
        public_key = der[len(prefix):]
        if (
            algorithm == KeyAlgorithm.SECP256K1
            and public_key[0] != UNCOMPRESSED_POINT_TAG
        ):
            raise DerEncodingError(
                "secp256k1 SubjectPublicKeyInfo must hold an uncompressed point"
            )
        return algorithm, public_key
    raise DerEncodingError(
        f"Unrecognized SubjectPublicKeyInfo prefix: {der[:12].hex() or '(empty)'}"
    )
