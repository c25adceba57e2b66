"""
principal_core/principal.py — Self-authenticating principals.

Digest:   principal = SHA-224(DER SubjectPublicKeyInfo) || 0x02   (29 bytes)
Text:     base32(CRC32_be(principal) || principal), lowercase, no
          padding, dash after every 5 characters

    yhnve-5y5qy-svqjc-aiobw-3a53m-n2gzt-xlrvn-s7kld-r5xid-td2ef-iae

The text codec is algorithm-agnostic: it works on any non-empty byte
string. All functions are pure; the CRC table is built once at import
and only read afterwards.
"""

from __future__ import annotations

import logging

from .der import encode_spki
from .errors import PrincipalFormatError
from .record import KeyAlgorithm, KeypairRecord
from .sha224 import sha224

logger = logging.getLogger(__name__)

SELF_AUTHENTICATING_TAG = 0x02
PRINCIPAL_LENGTH = 29
CHECKSUM_LENGTH = 4

BASE32_ALPHABET = "abcdefghijklmnopqrstuvwxyz234567"
_BASE32_INDEX = {ch: i for i, ch in enumerate(BASE32_ALPHABET)}

GROUP_SIZE = 5


# ---------------------------------------------------------------------------
# CRC-32 (IEEE 802.3, reflected, poly 0xEDB88320)
# ---------------------------------------------------------------------------

def _make_crc_table() -> tuple[int, ...]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            if c & 1:
                c = 0xEDB88320 ^ (c >> 1)
            else:
                c >>= 1
        table.append(c)
    return tuple(table)


_CRC_TABLE = _make_crc_table()


def crc32(data: bytes) -> int:
    """CRC-32 with initial register and final XOR of 0xFFFFFFFF."""
    c = 0xFFFFFFFF
    for byte in data:
        c = _CRC_TABLE[(c ^ byte) & 0xFF] ^ (c >> 8)
    return c ^ 0xFFFFFFFF


# ---------------------------------------------------------------------------
# Base-32 (RFC 4648 alphabet, lowercase, MSB-first, no padding)
# ---------------------------------------------------------------------------

def _base32_encode(data: bytes) -> str:
    buffer = 0
    bits = 0
    out = []
    for byte in data:
        buffer = ((buffer << 8) | byte) & 0xFFFF
        bits += 8
        while bits >= 5:
            bits -= 5
            out.append(BASE32_ALPHABET[(buffer >> bits) & 0x1F])
    if bits > 0:
        out.append(BASE32_ALPHABET[(buffer << (5 - bits)) & 0x1F])
    return "".join(out)


def _base32_decode(text: str) -> bytes:
    buffer = 0
    bits = 0
    out = bytearray()
    for position, ch in enumerate(text):
        value = _BASE32_INDEX.get(ch)
        if value is None:
            raise PrincipalFormatError(
                PrincipalFormatError.INVALID_CHARACTER,
                f"invalid base32 character {ch!r} at position {position}",
                character=ch,
                position=position,
            )
        buffer = ((buffer << 5) | value) & 0xFFFF
        bits += 5
        if bits >= 8:
            bits -= 8
            out.append((buffer >> bits) & 0xFF)
    # Leftover bits (< 8) are padding from the final character.
    return bytes(out)


def _group(text: str) -> str:
    return "-".join(
        text[i:i + GROUP_SIZE] for i in range(0, len(text), GROUP_SIZE)
    )


# ---------------------------------------------------------------------------
# Text codec
# ---------------------------------------------------------------------------

def to_text(principal_bytes: bytes) -> str:
    """Encode raw principal bytes as dashed base-32 text."""
    principal_bytes = bytes(principal_bytes)
    checksum = crc32(principal_bytes).to_bytes(CHECKSUM_LENGTH, "big")
    return _group(_base32_encode(checksum + principal_bytes))


def from_text(text: str) -> bytes:
    """Decode and validate principal text; return the raw principal bytes.

    Dashes and surrounding whitespace are ignored and case is folded.
    Raises PrincipalFormatError on an invalid character, a payload
    shorter than 5 bytes, or a checksum mismatch.
    """
    compact = text.strip().replace("-", "").lower()
    decoded = _base32_decode(compact)
    if len(decoded) < CHECKSUM_LENGTH + 1:
        raise PrincipalFormatError(
            PrincipalFormatError.TOO_SHORT,
            f"too short ({len(decoded)} decoded bytes, need at least "
            f"{CHECKSUM_LENGTH + 1})",
        )

    received = int.from_bytes(decoded[:CHECKSUM_LENGTH], "big")
    body = decoded[CHECKSUM_LENGTH:]
    expected = crc32(body)
    if received != expected:
        raise PrincipalFormatError(
            PrincipalFormatError.CHECKSUM_MISMATCH,
            f"checksum mismatch (received 0x{received:08x}, "
            f"computed 0x{expected:08x})",
        )
    return body


# ---------------------------------------------------------------------------
# Digest
# ---------------------------------------------------------------------------

def principal_from_der(der: bytes) -> bytes:
    """29-byte self-authenticating principal: SHA-224(der) || 0x02."""
    return sha224(der) + bytes([SELF_AUTHENTICATING_TAG])


def principal_from_public_key(algorithm: KeyAlgorithm, public_key: bytes) -> bytes:
    """Raw principal bytes for a raw public key."""
    return principal_from_der(encode_spki(algorithm, public_key))


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def principal_text(algorithm: KeyAlgorithm, public_key: bytes) -> str:
    """DER-encode, digest and format a raw public key as principal text."""
    algorithm = KeyAlgorithm.parse(algorithm)
    text = to_text(principal_from_public_key(algorithm, public_key))
    logger.debug("Derived %s principal %s", algorithm.value, text)
    return text


def decode_principal_text(text: str) -> bytes:
    """Validate externally supplied principal text; return its raw bytes."""
    return from_text(text)


def principal_text_from_record(record: KeypairRecord) -> str:
    """Stored principal text if present, else derived from the public key."""
    if record.principal:
        return record.principal
    return principal_text(record.algorithm, record.public_key)
