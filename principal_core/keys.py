"""
principal_core/keys.py — Key derivation from BIP-39 seeds.

Ed25519:    signing seed = BIP-39 seed[:32]; standard Ed25519 expansion.
secp256k1:  BIP-32 node at m/44'/223'/0'/0/0; public key exported as the
            65-byte uncompressed SEC1 point.

Uses the `cryptography` library for all curve operations. Every function
here is deterministic for a fixed mnemonic; only generation of a fresh
mnemonic draws randomness.
"""

from __future__ import annotations

import logging
from typing import Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from . import bip32
from .config import DEFAULT_CONFIG, DerivationConfig
from .der import validate_public_key
from .errors import DerivationError
from .principal import principal_text
from .record import KeyAlgorithm, KeypairMaterial, KeypairRecord
from .seed import SEED_LENGTH, mnemonic_to_seed, resolve_mnemonic

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Seed → key material
# ---------------------------------------------------------------------------

def _derive_ed25519(seed: bytes) -> KeypairMaterial:
    private_bytes = seed[:32]
    public_bytes = Ed25519PrivateKey.from_private_bytes(
        private_bytes
    ).public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
    return KeypairMaterial(
        algorithm=KeyAlgorithm.ED25519,
        public_key=public_bytes,
        private_key=private_bytes,
    )


def _derive_secp256k1(seed: bytes, path: str) -> KeypairMaterial:
    node = bip32.derive_path(seed, path)
    if not node.private_key:
        raise DerivationError(
            f"Derived secp256k1 node at {path} is missing a private key"
        )
    uncompressed = bip32.decompress_point(node.public_key)
    return KeypairMaterial(
        algorithm=KeyAlgorithm.SECP256K1,
        public_key=uncompressed,
        private_key=node.private_key,
    )


def derive(
    algorithm: KeyAlgorithm,
    seed: bytes,
    config: DerivationConfig = DEFAULT_CONFIG,
) -> KeypairMaterial:
    """Derive raw key material for algorithm from a 64-byte BIP-39 seed."""
    algorithm = KeyAlgorithm.parse(algorithm)
    seed = bytes(seed)
    if len(seed) != SEED_LENGTH:
        raise DerivationError(
            f"Seed must be {SEED_LENGTH} bytes, got {len(seed)}"
        )

    if algorithm == KeyAlgorithm.ED25519:
        material = _derive_ed25519(seed)
    elif algorithm == KeyAlgorithm.SECP256K1:
        material = _derive_secp256k1(seed, config.secp256k1_path)
        logger.debug("Derived secp256k1 key at %s", config.secp256k1_path)
    else:
        raise AssertionError(f"unhandled algorithm {algorithm!r}")
    return material


# ---------------------------------------------------------------------------
# End-to-end generation
# ---------------------------------------------------------------------------

def resolve_label(label: Optional[str], keypair_count: Optional[int] = None) -> str:
    """Trimmed label, else "Keypair N" from a count, else "New keypair"."""
    if label is not None and label.strip():
        return label.strip()
    if keypair_count is not None:
        return f"Keypair {keypair_count + 1}"
    return "New keypair"


def derive_keypair(
    algorithm: KeyAlgorithm,
    mnemonic: Optional[str] = None,
    label: Optional[str] = None,
    keypair_count: Optional[int] = None,
    config: DerivationConfig = DEFAULT_CONFIG,
) -> KeypairRecord:
    """Mnemonic → seed → keys → KeypairRecord (with principal text).

    A blank or missing mnemonic generates a fresh one. Re-running with
    the same algorithm and mnemonic reproduces identical keys and
    principal; only `id` and `created_at` differ.
    """
    algorithm = KeyAlgorithm.parse(algorithm)
    words = resolve_mnemonic(mnemonic, config)
    seed = mnemonic_to_seed(words, config)
    material = derive(algorithm, seed, config)

    record = KeypairRecord(
        label=resolve_label(label, keypair_count),
        material=material,
        mnemonic=words,
        principal=principal_text(algorithm, material.public_key),
    )
    logger.debug("Created %s keypair %s (%s)", algorithm.value, record.id, record.principal)
    return record


def generate_keypair(
    algorithm: KeyAlgorithm = KeyAlgorithm.ED25519,
    label: Optional[str] = None,
    keypair_count: Optional[int] = None,
    config: DerivationConfig = DEFAULT_CONFIG,
) -> KeypairRecord:
    """Create a keypair from a newly generated mnemonic."""
    return derive_keypair(
        algorithm, None, label=label, keypair_count=keypair_count, config=config
    )


# ---------------------------------------------------------------------------
# PEM serialization
# ---------------------------------------------------------------------------

def _private_key_object(material: KeypairMaterial):
    if material.algorithm == KeyAlgorithm.ED25519:
        return Ed25519PrivateKey.from_private_bytes(material.private_key)
    if material.algorithm == KeyAlgorithm.SECP256K1:
        return ec.derive_private_key(
            int.from_bytes(material.private_key, "big"), ec.SECP256K1()
        )
    raise AssertionError(f"unhandled algorithm {material.algorithm!r}")


def _public_key_object(algorithm: KeyAlgorithm, public_key: bytes):
    public_key = validate_public_key(algorithm, public_key)
    if algorithm == KeyAlgorithm.ED25519:
        return Ed25519PublicKey.from_public_bytes(public_key)
    if algorithm == KeyAlgorithm.SECP256K1:
        return ec.EllipticCurvePublicKey.from_encoded_point(
            ec.SECP256K1(), public_key
        )
    raise AssertionError(f"unhandled algorithm {algorithm!r}")


def private_key_to_pem(material: KeypairMaterial) -> bytes:
    """Serialize the private key to unencrypted PKCS#8 PEM."""
    return _private_key_object(material).private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def public_key_to_pem(material: KeypairMaterial) -> bytes:
    """Serialize the public key to SubjectPublicKeyInfo PEM."""
    return _public_key_object(material.algorithm, material.public_key).public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def public_key_to_der(algorithm: KeyAlgorithm, public_key: bytes) -> bytes:
    """SubjectPublicKeyInfo DER as produced by `cryptography` itself."""
    algorithm = KeyAlgorithm.parse(algorithm)
    return _public_key_object(algorithm, public_key).public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
