#!/usr/bin/env python3
"""
Principal Derivation Demo

Walks the reference mnemonic through every stage of the pipeline and
prints the intermediate bytes, for both key algorithms:

  1. Mnemonic → 64-byte BIP-39 seed
  2. Seed → raw keypair (Ed25519 seed prefix / secp256k1 BIP-32 node)
  3. Public key → DER SubjectPublicKeyInfo
  4. DER → SHA-224 || 0x02 (29-byte principal)
  5. Principal → CRC32 + base32 dashed text, then decoded back

Run:
    python examples/demo_identity.py
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from principal_core import (
    DEFAULT_CONFIG,
    KeyAlgorithm,
    decode_principal_text,
    derive,
    encode_spki,
    mnemonic_to_seed,
    principal_from_der,
    to_text,
)


MNEMONIC = " ".join(["abandon"] * 23 + ["art"])


def show(label: str, data: bytes) -> None:
    print(f"    {label:<12} ({len(data):2d} B) {data.hex()}")


def main():
    print("=" * 72)
    print("  Principal Derivation Demo")
    print("=" * 72)
    print(f"\n  Mnemonic: {MNEMONIC[:40]}... ({len(MNEMONIC.split())} words)")

    seed = mnemonic_to_seed(MNEMONIC)
    show("seed", seed)

    for algorithm in KeyAlgorithm:
        print(f"\n━━━ {algorithm.value} ━━━")
        if algorithm == KeyAlgorithm.SECP256K1:
            print(f"    path         {DEFAULT_CONFIG.secp256k1_path}")

        material = derive(algorithm, seed)
        show("public key", material.public_key)

        der = encode_spki(algorithm, material.public_key)
        show("DER", der)

        raw = principal_from_der(der)
        show("principal", raw)

        text = to_text(raw)
        print(f"    text         {text}")
        assert decode_principal_text(text) == raw
        print("    ✓ decodes back to the same 29 bytes")


if __name__ == "__main__":
    main()
