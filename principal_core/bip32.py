"""
principal_core/bip32.py — BIP-32 private derivation on secp256k1.

The secp256k1 identity is the node at a fixed path below the master key
of the 64-byte BIP-39 seed. Path parsing and CKDpriv come from
`bip_utils`; the compressed public key of the final node is expanded to
the uncompressed SEC1 point with `cryptography`.

Reference: https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki
"""

from __future__ import annotations

from dataclasses import dataclass

from bip_utils import (
    Bip32KeyError,
    Bip32PathError,
    Bip32PathParser,
    Bip32Slip10Secp256k1,
)
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from .errors import DerivationError


@dataclass(frozen=True)
class ExtendedPrivateKey:
    """A derived node: private key, compressed public key and chain code."""

    private_key: bytes
    public_key: bytes
    chain_code: bytes
    depth: int = 0


def parse_path(path: str) -> list[int]:
    """Parse "m/44'/223'/0'/0/0" into child indices.

    Hardened levels may be marked with ' or h. Only absolute paths are
    accepted. Raises ValueError on a malformed path.
    """
    path = path.strip()
    parts = path.split("/")
    if parts[0] != "m" or "" in parts[1:]:
        raise ValueError(f"Derivation path must be absolute ('m/...'): {path!r}")
    try:
        return Bip32PathParser.Parse(path).ToList()
    except Bip32PathError as exc:
        raise ValueError(f"Invalid derivation path {path!r}: {exc}") from exc


def decompress_point(compressed: bytes) -> bytes:
    """Expand a 33-byte compressed point to 65-byte 0x04 || X || Y."""
    try:
        public_key = ec.EllipticCurvePublicKey.from_encoded_point(
            ec.SECP256K1(), compressed
        )
    except ValueError as exc:
        raise DerivationError(
            f"Cannot decompress secp256k1 point: {exc}"
        ) from exc
    return public_key.public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )


def derive_path(seed: bytes, path: str) -> ExtendedPrivateKey:
    """Derive the node at `path` from a BIP-32 seed (16 to 64 bytes)."""
    if not 16 <= len(seed) <= 64:
        raise DerivationError(
            f"BIP-32 seed must be 16 to 64 bytes, got {len(seed)}"
        )
    parse_path(path)
    try:
        node = Bip32Slip10Secp256k1.FromSeed(seed).DerivePath(path.strip())
    except (Bip32KeyError, ValueError) as exc:
        raise DerivationError(f"BIP-32 derivation failed at {path}: {exc}") from exc

    return ExtendedPrivateKey(
        private_key=node.PrivateKey().Raw().ToBytes(),
        public_key=node.PublicKey().RawCompressed().ToBytes(),
        chain_code=node.ChainCode().ToBytes(),
        depth=node.Depth().ToInt(),
    )


def master_key(seed: bytes) -> ExtendedPrivateKey:
    """Master node of a BIP-32 seed."""
    return derive_path(seed, "m")
