"""
principal_core/record.py — Keypair data model.

KeypairMaterial is the raw output of the Key Deriver: algorithm plus
raw public/private key bytes, with algorithm-fixed lengths validated at
construction. KeypairRecord packages material with its mnemonic and
metadata; it is the opaque record handed to whatever persists keys.

Both models are frozen. Relabelling a record produces a copy.
"""

import base64
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import UnsupportedAlgorithmError


# ---------------------------------------------------------------------------
# Algorithm
# ---------------------------------------------------------------------------

class KeyAlgorithm(str, Enum):
    """Closed set of signature algorithms an identity can be derived for."""
    ED25519 = "ed25519"
    SECP256K1 = "secp256k1"

    @classmethod
    def parse(cls, value: Any) -> "KeyAlgorithm":
        """Parse an algorithm tag, raising UnsupportedAlgorithmError."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedAlgorithmError(value)


# Raw key lengths in bytes. secp256k1 public keys are SEC1 uncompressed.
PRIVATE_KEY_LENGTH = 32
PUBLIC_KEY_LENGTHS = {
    KeyAlgorithm.ED25519: 32,
    KeyAlgorithm.SECP256K1: 65,
}
UNCOMPRESSED_POINT_TAG = 0x04


def normalize_secp256k1_point(public_key: bytes) -> bytes:
    """Prepend the 0x04 tag to a bare 64-byte X || Y point.

    Convenience for callers that strip the tag; any other length is
    returned unchanged and left to length validation.
    """
    if len(public_key) == 64:
        return bytes([UNCOMPRESSED_POINT_TAG]) + bytes(public_key)
    return bytes(public_key)


# ---------------------------------------------------------------------------
# Key material
# ---------------------------------------------------------------------------

class KeypairMaterial(BaseModel):
    """Raw keypair produced by one derivation call. Never mutated."""

    model_config = ConfigDict(frozen=True)

    algorithm: KeyAlgorithm
    public_key: bytes = Field(
        ...,
        description="Raw public key: 32 bytes (Ed25519) or 65-byte "
                    "uncompressed point (secp256k1).",
    )
    private_key: bytes = Field(
        ...,
        repr=False,
        description="Raw 32-byte private key / seed.",
    )

    @model_validator(mode="before")
    @classmethod
    def normalize_public_key(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("algorithm") == KeyAlgorithm.SECP256K1:
            public_key = data.get("public_key")
            if isinstance(public_key, (bytes, bytearray)):
                data = {**data, "public_key": normalize_secp256k1_point(public_key)}
        return data

    @model_validator(mode="after")
    def validate_lengths(self) -> "KeypairMaterial":
        expected = PUBLIC_KEY_LENGTHS[self.algorithm]
        if len(self.public_key) != expected:
            raise ValueError(
                f"{self.algorithm.value} public key must be {expected} bytes, "
                f"got {len(self.public_key)}"
            )
        if (
            self.algorithm == KeyAlgorithm.SECP256K1
            and self.public_key[0] != UNCOMPRESSED_POINT_TAG
        ):
            raise ValueError(
                "secp256k1 public key must be an uncompressed point "
                "starting with 0x04"
            )
        if len(self.private_key) != PRIVATE_KEY_LENGTH:
            raise ValueError(
                f"{self.algorithm.value} private key must be "
                f"{PRIVATE_KEY_LENGTH} bytes, got {len(self.private_key)}"
            )
        return self


# ---------------------------------------------------------------------------
# Keypair record
# ---------------------------------------------------------------------------

class KeypairRecord(BaseModel):
    """A derived keypair with its seed phrase and metadata.

    Equality and hashing use `id` only: two records with the same id
    are the same keypair, whatever their label.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Opaque unique identifier (UUID v4).",
    )
    label: str = Field(
        ...,
        min_length=1,
        description="User-facing name, e.g. 'Laptop' or 'Keypair 2'.",
    )
    material: KeypairMaterial
    mnemonic: str = Field(
        ...,
        min_length=1,
        repr=False,
        description="BIP-39 seed phrase. Sensitive.",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC creation time.",
    )
    principal: Optional[str] = Field(
        default=None,
        description="Principal text computed at derivation time.",
    )

    @field_validator("label")
    @classmethod
    def validate_label(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("label must not be blank")
        return v

    @property
    def algorithm(self) -> KeyAlgorithm:
        return self.material.algorithm

    @property
    def public_key(self) -> bytes:
        return self.material.public_key

    @property
    def private_key(self) -> bytes:
        return self.material.private_key

    def with_label(self, label: str) -> "KeypairRecord":
        """Return a copy carrying a new label. The original is untouched."""
        return self.model_validate({**dict(self), "label": label})

    def export_details(self) -> Dict[str, str]:
        """Backup view of the sensitive fields."""
        return {
            "Mnemonic": self.mnemonic,
            "Public key (base64)": _b64encode(self.public_key),
            "Private key (base64)": _b64encode(self.private_key),
        }

    def to_json_dict(self) -> Dict[str, Any]:
        """camelCase JSON form with base64 keys, as stored by key stores."""
        d = {
            "id": self.id,
            "label": self.label,
            "algorithm": self.algorithm.value,
            "publicKey": _b64encode(self.public_key),
            "privateKey": _b64encode(self.private_key),
            "mnemonic": self.mnemonic,
            "createdAt": self.created_at.isoformat(),
        }
        if self.principal is not None:
            d["principal"] = self.principal
        return d

    @classmethod
    def from_json_dict(cls, data: Dict[str, Any]) -> "KeypairRecord":
        """Inverse of to_json_dict()."""
        created_at = data["createdAt"]
        if isinstance(created_at, str) and created_at.endswith("Z"):
            created_at = created_at[:-1] + "+00:00"
        return cls(
            id=data["id"],
            label=data["label"],
            material=KeypairMaterial(
                algorithm=KeyAlgorithm.parse(data["algorithm"]),
                public_key=base64.b64decode(data["publicKey"], validate=True),
                private_key=base64.b64decode(data["privateKey"], validate=True),
            ),
            mnemonic=data["mnemonic"],
            created_at=created_at,
            principal=data.get("principal"),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeypairRecord):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
