"""EdDSA signatures on Baby Jubjub with Poseidon, compatible with circomlib."""

from .eddsa import (
    EdDSAPoseidon,
    Signature,
    derive_public_key,
    derive_secret_scalar,
    pack_public_key,
    pack_signature,
    sign_message,
    unpack_public_key,
    unpack_signature,
    verify_signature,
)
from .exceptions import (
    EdDSAPoseidonError,
    InvalidPointError,
    InvalidPublicKeyError,
    InvalidSignatureError,
    LengthError,
    TypeCoercionError,
)

__version__ = "0.1.0"

__all__ = [
    "EdDSAPoseidon",
    "EdDSAPoseidonError",
    "InvalidPointError",
    "InvalidPublicKeyError",
    "InvalidSignatureError",
    "LengthError",
    "Signature",
    "TypeCoercionError",
    "derive_public_key",
    "derive_secret_scalar",
    "pack_public_key",
    "pack_signature",
    "sign_message",
    "unpack_public_key",
    "unpack_signature",
    "verify_signature",
]
