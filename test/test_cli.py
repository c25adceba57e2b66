"""
test/test_cli.py — Principal CLI commands.

Run: pytest test/test_cli.py -v
  or: python test/test_cli.py
"""

import io
import json
import os
import sys
from contextlib import redirect_stderr, redirect_stdout

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tools.principal_cli import main


MNEMONIC = " ".join(["abandon"] * 23 + ["art"])
ED25519_PUBLIC_B64 = "HeNS5EzTM2clk/IzSnMOGAqvKQ3omqFtSA3llONOKWE="
ED25519_PRINCIPAL = "yhnve-5y5qy-svqjc-aiobw-3a53m-n2gzt-xlrvn-s7kld-r5xid-td2ef-iae"
SECP256K1_PRINCIPAL = "m7bn6-s5er4-xouui-ymkqf-azncv-qfche-3qghk-2fvpm-atfyh-ozg2w-iqe"


def run_cli(*argv: str) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(list(argv))
    return code, out.getvalue(), err.getvalue()


def test_derive_json():
    code, out, _ = run_cli(
        "derive", "--mnemonic", MNEMONIC, "--algorithm", "secp256k1",
        "--label", "Laptop", "--json",
    )
    assert code == 0
    d = json.loads(out)
    assert d["label"] == "Laptop"
    assert d["algorithm"] == "secp256k1"
    assert d["principal"] == SECP256K1_PRINCIPAL
    print("  PASS: test_derive_json")


def test_derive_text():
    code, out, _ = run_cli("derive", "-m", MNEMONIC)
    assert code == 0
    assert ED25519_PRINCIPAL in out
    assert ED25519_PUBLIC_B64 in out
    print("  PASS: test_derive_text")


def test_generate():
    code, out, _ = run_cli("generate", "--json")
    assert code == 0
    d = json.loads(out)
    assert len(d["mnemonic"].split()) == 24
    assert d["label"] == "New keypair"
    print("  PASS: test_generate")


def test_principal_command():
    code, out, _ = run_cli("principal", "-a", "ed25519", "-k", ED25519_PUBLIC_B64)
    assert code == 0
    assert out.strip() == ED25519_PRINCIPAL
    print("  PASS: test_principal_command")


def test_principal_rejects_short_key():
    code, _, err = run_cli("principal", "-a", "ed25519", "-k", "AAAA")
    assert code == 1
    assert "32 bytes" in err
    print("  PASS: test_principal_rejects_short_key")


def test_decode_command():
    code, out, _ = run_cli("decode", "2vxsx-fae")
    assert code == 0
    assert "04" in out

    code, _, err = run_cli("decode", "2vxsx-fa1")
    assert code == 1
    assert "invalid base32 character" in err
    print("  PASS: test_decode_command")


def test_invalid_mnemonic_reports_error():
    code, _, err = run_cli("derive", "-m", " ".join(["abandon"] * 24))
    assert code == 1
    assert "ERROR" in err
    print("  PASS: test_invalid_mnemonic_reports_error")


def run_all():
    print("=" * 60)
    print("Principal CLI Test Suite")
    print("=" * 60)
    test_derive_json()
    test_derive_text()
    test_generate()
    test_principal_command()
    test_principal_rejects_short_key()
    test_decode_command()
    test_invalid_mnemonic_reports_error()
    print("\nALL TESTS PASSED")


if __name__ == "__main__":
    run_all()
