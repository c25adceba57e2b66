"""
Principal Core — deterministic identity derivation for self-authenticating
principals.

Pipeline:
    mnemonic → BIP-39 seed → keypair → DER SPKI → SHA-224 || 0x02 → text

__version__ is the package version. The principal text format itself is
fixed by the ledger platform and never versioned here.
"""

__version__ = "0.1.0"

from .errors import (
    PrincipalCoreError,
    UnsupportedAlgorithmError,
    KeyLengthError,
    DerEncodingError,
    InvalidMnemonicError,
    DerivationError,
    PrincipalFormatError,
)
from .config import DerivationConfig, DEFAULT_CONFIG, DEFAULT_SECP256K1_PATH
from .record import KeyAlgorithm, KeypairMaterial, KeypairRecord
from .seed import generate_mnemonic, mnemonic_to_seed, validate_mnemonic
from .der import encode_spki, decode_spki
from .sha224 import sha224
from .principal import (
    crc32,
    to_text,
    from_text,
    principal_from_der,
    principal_from_public_key,
    principal_text,
    decode_principal_text,
    principal_text_from_record,
)
from .keys import (
    derive,
    derive_keypair,
    generate_keypair,
    private_key_to_pem,
    public_key_to_pem,
    public_key_to_der,
)
