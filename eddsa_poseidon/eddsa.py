"""EdDSA over Baby Jubjub with a Poseidon challenge.

Compatible with circomlib's ``prv2pub`` / ``signPoseidon`` /
``verifyPoseidon``: BLAKE-512 expands the private key, the low half is
clamped into the secret scalar and the high half seeds the nonce, and the
challenge is ``Poseidon(R8.x, R8.y, A.x, A.y, message)``.

Public keys and signature components are decimal strings at this boundary.
Verification reports malformed input as ``False``; packing raises.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Optional, Tuple

from .babyjub import Base8, add_point, cofactor, in_curve, mul_point_escalar, sub_order
from .blake512 import blake512
from .codec import pack_point, pack_scalar, unpack_point, unpack_scalar
from .conversions import (
    le_bytes_to_int,
    le_int_to_bytes,
    require_bignumberish,
    to_message,
    to_private_key_bytes,
)
from .exceptions import (
    InvalidPointError,
    InvalidPublicKeyError,
    InvalidSignatureError,
    LengthError,
    TypeCoercionError,
)
from .poseidon import poseidon5

logger = logging.getLogger(__name__)

PublicKey = Tuple[str, str]

PRIVATE_KEY_SIZE = 32
PACKED_SIGNATURE_SIZE = 64


@dataclass(frozen=True)
class Signature:
    R8: Tuple[str, str]
    S: str


def _parse_point(point) -> Tuple[int, int]:
    x, y = point
    return require_bignumberish(x, "point"), require_bignumberish(y, "point")


def _prune(buffer: bytes) -> int:
    """Clamp the low half of a digest into a scalar (multiple of 8, bit 254 set)."""
    clamped = bytearray(buffer[:32])
    clamped[0] &= 0xF8
    clamped[31] &= 0x7F
    clamped[31] |= 0x40
    return le_bytes_to_int(clamped)


def derive_secret_scalar(private_key) -> int:
    digest = blake512(to_private_key_bytes(private_key))
    return (_prune(digest) >> 3) % sub_order


def derive_public_key(private_key) -> PublicKey:
    x, y = mul_point_escalar(Base8, derive_secret_scalar(private_key))
    return str(x), str(y)


def sign_message(private_key, message) -> Signature:
    private_key = to_private_key_bytes(private_key)
    message = to_message(message)

    digest = blake512(private_key)
    s = _prune(digest)
    A = mul_point_escalar(Base8, s >> 3)

    # deterministic nonce from the upper half of the key digest
    r = le_bytes_to_int(blake512(digest[32:] + le_int_to_bytes(message, 32))) % sub_order
    R8 = mul_point_escalar(Base8, r)

    h = poseidon5([R8[0], R8[1], A[0], A[1], message])
    S = (r + h * s) % sub_order

    return Signature(R8=(str(R8[0]), str(R8[1])), S=str(S))


def verify_signature(message, signature, public_key) -> bool:
    message = to_message(message)

    try:
        R8 = _parse_point(signature.R8)
        S = require_bignumberish(signature.S, "S")
        A = _parse_point(public_key)
    except (AttributeError, TypeError, ValueError) as err:
        logger.debug("Malformed signature or public key: %s", err)
        return False

    if not in_curve(R8):
        logger.debug("Signature point R8 is not on the curve")
        return False
    if not in_curve(A):
        logger.debug("Public key is not on the curve")
        return False
    if S >= sub_order:
        logger.debug("Signature scalar S is not below the subgroup order")
        return False

    h = poseidon5([R8[0], R8[1], A[0], A[1], message])

    left = mul_point_escalar(Base8, S)
    right = add_point(R8, mul_point_escalar(A, cofactor * h))
    return left == right


def pack_public_key(public_key) -> str:
    try:
        return str(pack_point(_parse_point(public_key)))
    except (TypeError, ValueError) as err:
        raise InvalidPublicKeyError("Invalid public key") from err


def unpack_public_key(public_key) -> PublicKey:
    if isinstance(public_key, (bytes, bytearray, memoryview)):
        packed = bytes(public_key)
    else:
        packed = require_bignumberish(public_key, "public_key")

    try:
        x, y = unpack_point(packed)
    except InvalidPointError as err:
        raise InvalidPublicKeyError("Invalid public key") from err
    return str(x), str(y)


def pack_signature(signature) -> bytes:
    try:
        R8 = _parse_point(signature.R8)
        S = require_bignumberish(signature.S, "S")
    except (AttributeError, TypeError, ValueError) as err:
        raise InvalidSignatureError("Invalid signature") from err

    if not in_curve(R8) or S >= sub_order:
        raise InvalidSignatureError("Invalid signature")

    return le_int_to_bytes(pack_point(R8), 32) + pack_scalar(S)


def unpack_signature(packed_signature) -> Signature:
    """Split 64 bytes into R8 and S.

    The scalar is not range checked here, only on verification.
    """
    if not isinstance(packed_signature, (bytes, bytearray, memoryview)):
        raise TypeCoercionError("Parameter 'packed_signature' is not a buffer")

    data = bytes(packed_signature)
    if len(data) != PACKED_SIGNATURE_SIZE:
        raise LengthError(f"Packed signature must be {PACKED_SIGNATURE_SIZE} bytes")

    try:
        x, y = unpack_point(data[:32])
    except InvalidPointError as err:
        raise InvalidPointError(f"Invalid packed signature point {data[:32].hex()}.") from err

    return Signature(R8=(str(x), str(y)), S=str(unpack_scalar(data[32:])))


class EdDSAPoseidon:
    """A private key bundled with its derived scalar and public key.

    Everything is computed once in the constructor.  Without a private key,
    32 random bytes are drawn from :mod:`secrets`.
    """

    __slots__ = ("_private_key", "_secret_scalar", "_public_key", "_packed_public_key")

    def __init__(self, private_key: Optional[object] = None) -> None:
        if private_key is None:
            private_key = secrets.token_bytes(PRIVATE_KEY_SIZE)

        self._private_key = to_private_key_bytes(private_key)
        self._secret_scalar = derive_secret_scalar(self._private_key)
        x, y = mul_point_escalar(Base8, self._secret_scalar)
        self._public_key = (str(x), str(y))
        self._packed_public_key = pack_public_key(self._public_key)

    @property
    def private_key(self) -> bytes:
        return self._private_key

    @property
    def secret_scalar(self) -> int:
        return self._secret_scalar

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    @property
    def packed_public_key(self) -> str:
        return self._packed_public_key

    def sign_message(self, message) -> Signature:
        return sign_message(self._private_key, message)

    def verify_signature(self, message, signature) -> bool:
        return verify_signature(message, signature, self._public_key)

    def __repr__(self) -> str:
        return f"EdDSAPoseidon(public_key={self._public_key!r})"
