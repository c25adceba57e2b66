"""
test/test_der.py — DER SubjectPublicKeyInfo encoding.

Run: pytest test/test_der.py -v
  or: python test/test_der.py
"""

import base64
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from principal_core import (
    DerEncodingError,
    KeyAlgorithm,
    KeyLengthError,
    UnsupportedAlgorithmError,
    decode_spki,
    encode_spki,
    public_key_to_der,
)
from principal_core.der import ED25519_DER_PREFIX, SECP256K1_DER_PREFIX


ED25519_PUBLIC = base64.b64decode("HeNS5EzTM2clk/IzSnMOGAqvKQ3omqFtSA3llONOKWE=")
SECP256K1_PUBLIC = base64.b64decode(
    "BBz+IZWfHzq8STHpP6u3hU/DOJS6Fy5m3ewbQautk0Vd3u79WEhh0/0gvh886bxxFK9et89Fi2sBc4LDysmVe4g="
)


def test_ed25519_layout():
    der = encode_spki(KeyAlgorithm.ED25519, ED25519_PUBLIC)
    assert len(der) == 44
    assert der[:12] == bytes.fromhex("302a300506032b6570032100")
    assert der[12:] == ED25519_PUBLIC
    print("  PASS: test_ed25519_layout")


def test_secp256k1_layout():
    der = encode_spki(KeyAlgorithm.SECP256K1, SECP256K1_PUBLIC)
    assert len(der) == 88
    assert der.startswith(SECP256K1_DER_PREFIX)
    assert der[len(SECP256K1_DER_PREFIX)] == 0x04
    assert der.endswith(SECP256K1_PUBLIC)
    print("  PASS: test_secp256k1_layout")


def test_lengths_are_fixed():
    for _ in range(5):
        assert len(encode_spki(KeyAlgorithm.ED25519, os.urandom(32))) == 44
        assert len(encode_spki(KeyAlgorithm.SECP256K1, b"\x04" + os.urandom(64))) == 88
    print("  PASS: test_lengths_are_fixed")


def test_matches_cryptography_spki():
    """Our fixed prefixes agree with cryptography's own DER output."""
    assert encode_spki(KeyAlgorithm.ED25519, ED25519_PUBLIC) == public_key_to_der(
        KeyAlgorithm.ED25519, ED25519_PUBLIC
    )
    assert encode_spki(KeyAlgorithm.SECP256K1, SECP256K1_PUBLIC) == public_key_to_der(
        KeyAlgorithm.SECP256K1, SECP256K1_PUBLIC
    )
    print("  PASS: test_matches_cryptography_spki")


def test_secp256k1_64_byte_normalization():
    untagged = SECP256K1_PUBLIC[1:]
    assert len(untagged) == 64
    assert encode_spki(KeyAlgorithm.SECP256K1, untagged) == encode_spki(
        KeyAlgorithm.SECP256K1, SECP256K1_PUBLIC
    )
    print("  PASS: test_secp256k1_64_byte_normalization")


def test_rejects_wrong_ed25519_length():
    for n in [0, 31, 33, 64]:
        try:
            encode_spki(KeyAlgorithm.ED25519, b"\x01" * n)
            assert False, f"Should reject {n}-byte Ed25519 key"
        except KeyLengthError as e:
            assert e.expected == 32
            assert e.actual == n
            assert "32" in str(e) and str(n) in str(e)
    print("  PASS: test_rejects_wrong_ed25519_length")


def test_rejects_bad_secp256k1_keys():
    compressed = b"\x02" + SECP256K1_PUBLIC[1:33]
    for bad in [compressed, SECP256K1_PUBLIC[:-2], SECP256K1_PUBLIC + b"\x00"]:
        try:
            encode_spki(KeyAlgorithm.SECP256K1, bad)
            assert False, f"Should reject {len(bad)}-byte key"
        except KeyLengthError as e:
            assert e.expected == 65
    # 65 bytes but wrong tag
    try:
        encode_spki(KeyAlgorithm.SECP256K1, b"\x03" + SECP256K1_PUBLIC[1:])
        assert False, "Should reject tag 0x03"
    except KeyLengthError as e:
        assert "0x04" in str(e)
    print("  PASS: test_rejects_bad_secp256k1_keys")


def test_rejects_unknown_algorithm():
    try:
        encode_spki("rsa", ED25519_PUBLIC)
        assert False, "Should reject unknown algorithm"
    except UnsupportedAlgorithmError:
        pass
    print("  PASS: test_rejects_unknown_algorithm")


def test_decode_spki_inverse():
    for alg, key in [
        (KeyAlgorithm.ED25519, ED25519_PUBLIC),
        (KeyAlgorithm.SECP256K1, SECP256K1_PUBLIC),
    ]:
        assert decode_spki(encode_spki(alg, key)) == (alg, key)
    print("  PASS: test_decode_spki_inverse")


def test_decode_spki_rejects_malformed():
    bad_inputs = [
        b"",
        b"\x30\x00",
        ED25519_DER_PREFIX + ED25519_PUBLIC[:-1],
        SECP256K1_DER_PREFIX + SECP256K1_PUBLIC + b"\x00",
        SECP256K1_DER_PREFIX + b"\x02" + SECP256K1_PUBLIC[1:],
    ]
    for der in bad_inputs:
        try:
            decode_spki(der)
            assert False, f"Should reject {der.hex()}"
        except DerEncodingError:
            pass
    print("  PASS: test_decode_spki_rejects_malformed")


def run_all():
    print("=" * 60)
    print("DER Encoder Test Suite")
    print("=" * 60)
    test_ed25519_layout()
    test_secp256k1_layout()
    test_lengths_are_fixed()
    test_matches_cryptography_spki()
    test_secp256k1_64_byte_normalization()
    test_rejects_wrong_ed25519_length()
    test_rejects_bad_secp256k1_keys()
    test_rejects_unknown_algorithm()
    test_decode_spki_inverse()
    test_decode_spki_rejects_malformed()
    print("\nALL TESTS PASSED")


if __name__ == "__main__":
    run_all()
