#!/usr/bin/env python3
"""
Principal CLI — derive keypairs and principals from seed phrases.

Usage:
    python -m tools.principal_cli generate [--algorithm secp256k1] [--label L] [--json]
    python -m tools.principal_cli derive --mnemonic "abandon ... art" [--algorithm A] [--json]
    python -m tools.principal_cli principal --algorithm ed25519 --public-key <base64>
    python -m tools.principal_cli decode <principal-text>

Commands:
    generate   — New mnemonic + keypair + principal
    derive     — Keypair + principal from an existing mnemonic
    principal  — Principal text for a raw base64 public key
    decode     — Validate principal text, print raw bytes as hex

Output of generate/derive includes the mnemonic and private key.
"""

import argparse
import base64
import binascii
import json
import logging
import os
import sys

# Ensure project root is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from principal_core.errors import PrincipalCoreError
from principal_core.keys import derive_keypair, generate_keypair
from principal_core.principal import decode_principal_text, principal_text
from principal_core.record import KeyAlgorithm, KeypairRecord


# ============================================================
# Output
# ============================================================

def print_record(record: KeypairRecord, as_json: bool = False) -> None:
    """Render a keypair record for the terminal."""
    if as_json:
        print(json.dumps(record.to_json_dict(), indent=2))
        return

    print(f"━━━ {record.label} ({record.algorithm.value}) ━━━")
    print(f"{'Principal:':<22} {record.principal}")
    for name, value in record.export_details().items():
        print(f"{name + ':':<22} {value}")
    print(f"{'Created:':<22} {record.created_at.isoformat()}")


# ============================================================
# Commands
# ============================================================

def cmd_generate(args: argparse.Namespace) -> None:
    record = generate_keypair(
        KeyAlgorithm.parse(args.algorithm),
        label=args.label,
    )
    print_record(record, as_json=args.json)


def cmd_derive(args: argparse.Namespace) -> None:
    record = derive_keypair(
        KeyAlgorithm.parse(args.algorithm),
        args.mnemonic,
        label=args.label,
    )
    print_record(record, as_json=args.json)


def cmd_principal(args: argparse.Namespace) -> None:
    try:
        public_key = base64.b64decode(args.public_key, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Public key is not valid base64: {exc}") from exc
    print(principal_text(KeyAlgorithm.parse(args.algorithm), public_key))


def cmd_decode(args: argparse.Namespace) -> None:
    raw = decode_principal_text(args.text)
    print(f"  ✓ valid principal ({len(raw)} bytes)")
    print(f"  {raw.hex()}")


# ============================================================
# Main
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Principal CLI — keypairs and principals from seed phrases",
        prog="python -m tools.principal_cli",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    algorithms = [a.value for a in KeyAlgorithm]

    p_gen = sub.add_parser("generate", help="Generate a new mnemonic and keypair")
    p_gen.add_argument("--algorithm", "-a", choices=algorithms, default="ed25519")
    p_gen.add_argument("--label", "-l", default=None)
    p_gen.add_argument("--json", action="store_true", help="Output JSON record")
    p_gen.set_defaults(func=cmd_generate)

    p_der = sub.add_parser("derive", help="Derive a keypair from a mnemonic")
    p_der.add_argument("--mnemonic", "-m", required=True)
    p_der.add_argument("--algorithm", "-a", choices=algorithms, default="ed25519")
    p_der.add_argument("--label", "-l", default=None)
    p_der.add_argument("--json", action="store_true", help="Output JSON record")
    p_der.set_defaults(func=cmd_derive)

    p_pri = sub.add_parser("principal", help="Principal text for a public key")
    p_pri.add_argument("--algorithm", "-a", choices=algorithms, required=True)
    p_pri.add_argument("--public-key", "-k", required=True, help="Raw key, base64")
    p_pri.set_defaults(func=cmd_principal)

    p_dec = sub.add_parser("decode", help="Validate principal text")
    p_dec.add_argument("text")
    p_dec.set_defaults(func=cmd_decode)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        args.func(args)
    except (PrincipalCoreError, ValueError) as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
