"""
principal_core/sha224.py — SHA-224 per FIPS 180-4.

Self-contained and stateless: bytes in, 28-byte digest out. SHA-224 is
SHA-256 with a different initial hash value and the output truncated to
seven words. Padding, message schedule and round constants are shared
with SHA-256.

All word arithmetic is masked to 32 bits.
"""

from __future__ import annotations

DIGEST_SIZE = 28
BLOCK_SIZE = 64

_MASK = 0xFFFFFFFF

# First 32 bits of the fractional parts of the cube roots of the first
# 64 primes.
_K = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5,
    0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7,
    0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3,
    0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5,
    0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

# SHA-224 initial hash value (FIPS 180-4 §5.3.2).
_H0 = (
    0xC1059ED8, 0x367CD507, 0x3070DD17, 0xF70E5939,
    0xFFC00B31, 0x68581511, 0x64F98FA7, 0xBEFA4FA4,
)


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK


def _pad(message: bytes) -> bytes:
    """Append 0x80, zero-fill to 56 mod 64, then the 64-bit bit length."""
    bit_length = (len(message) * 8) & 0xFFFFFFFFFFFFFFFF
    zeros = (BLOCK_SIZE - 8 - 1 - len(message)) % BLOCK_SIZE
    return (
        message
        + b"\x80"
        + b"\x00" * zeros
        + bit_length.to_bytes(8, byteorder="big")
    )


def _compress(state: list[int], block: bytes) -> None:
    """Process one 64-byte block, updating state in place."""
    w = [int.from_bytes(block[i:i + 4], "big") for i in range(0, 64, 4)]
    for t in range(16, 64):
        s0 = _rotr(w[t - 15], 7) ^ _rotr(w[t - 15], 18) ^ (w[t - 15] >> 3)
        s1 = _rotr(w[t - 2], 17) ^ _rotr(w[t - 2], 19) ^ (w[t - 2] >> 10)
        w.append((w[t - 16] + s0 + w[t - 7] + s1) & _MASK)

    a, b, c, d, e, f, g, h = state

    for t in range(64):
        big_s1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
        ch = (e & f) ^ (~e & g)
        t1 = (h + big_s1 + ch + _K[t] + w[t]) & _MASK
        big_s0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        t2 = (big_s0 + maj) & _MASK

        h = g
        g = f
        f = e
        e = (d + t1) & _MASK
        d = c
        c = b
        b = a
        a = (t1 + t2) & _MASK

    for i, value in enumerate((a, b, c, d, e, f, g, h)):
        state[i] = (state[i] + value) & _MASK


def sha224(data: bytes) -> bytes:
    """Compute the SHA-224 digest of data. Total over any byte input."""
    padded = _pad(bytes(data))
    state = list(_H0)
    for offset in range(0, len(padded), BLOCK_SIZE):
        _compress(state, padded[offset:offset + BLOCK_SIZE])
    # Drop H7: SHA-224 keeps the first seven words.
    return b"".join(word.to_bytes(4, "big") for word in state[:7])


def sha224_hex(data: bytes) -> str:
    """SHA-224 digest as lowercase hex."""
    return sha224(data).hex()
