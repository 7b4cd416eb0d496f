"""Input coercion and integer/byte conversions.

Keys and messages arrive in several surface forms (raw bytes, integers,
decimal or ``0x`` hex strings, free text).  Every value is classified into
exactly one :class:`InputKind` and each kind has a single normalizer, so
there is no guessing based on what an object happens to support.

Messages are reduced modulo the field prime before anything else sees them,
the way circomlibjs' ``signPoseidon`` takes its message as a field element.
For ``p <= m < 2**256`` the nonce is therefore derived from ``m mod p``, not
from the raw 32 bytes zk-kit would hash; signing ``m`` and ``m mod p`` gives
the same signature.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Union

from .exceptions import TypeCoercionError
from .field import p

BytesLike = Union[bytes, bytearray, memoryview]

_DECIMAL = re.compile(r"[0-9]+")
_HEX = re.compile(r"0[xX][0-9a-fA-F]+")


class InputKind(Enum):
    BYTES = "bytes"
    INTEGER = "integer"
    DECIMAL = "decimal"
    HEX = "hex"
    TEXT = "text"


def classify(value) -> InputKind | None:
    """Return the kind of ``value`` or ``None`` when it is not supported."""
    # bool is an int subclass, but True/False are never keys or messages
    if isinstance(value, bool):
        return None
    if isinstance(value, (bytes, bytearray, memoryview)):
        return InputKind.BYTES
    if isinstance(value, int):
        return InputKind.INTEGER if value >= 0 else None
    if isinstance(value, str):
        if _DECIMAL.fullmatch(value):
            return InputKind.DECIMAL
        if _HEX.fullmatch(value):
            return InputKind.HEX
        return InputKind.TEXT
    return None


def le_bytes_to_int(data: BytesLike) -> int:
    return int.from_bytes(bytes(data), "little")


def le_int_to_bytes(number: int, size: int = 32) -> bytes:
    return number.to_bytes(size, "little")


def be_bytes_to_int(data: BytesLike) -> int:
    return int.from_bytes(bytes(data), "big")


def be_int_to_bytes(number: int) -> bytes:
    """Minimal big-endian encoding, never shorter than one byte."""
    return number.to_bytes(max(1, (number.bit_length() + 7) // 8), "big")


_TO_INT = {
    InputKind.BYTES: be_bytes_to_int,
    InputKind.INTEGER: lambda value: value,
    InputKind.DECIMAL: lambda value: int(value, 10),
    InputKind.HEX: lambda value: int(value, 16),
    InputKind.TEXT: lambda value: be_bytes_to_int(value.encode("utf-8")),
}

_TO_BYTES = {
    InputKind.BYTES: bytes,
    InputKind.INTEGER: be_int_to_bytes,
    InputKind.DECIMAL: lambda value: be_int_to_bytes(int(value, 10)),
    InputKind.HEX: lambda value: be_int_to_bytes(int(value, 16)),
    InputKind.TEXT: lambda value: value.encode("utf-8"),
}


def _none_of(name: str) -> TypeCoercionError:
    return TypeCoercionError(
        f"Parameter '{name}' is none of the following types: bignumber-ish, string"
    )


def to_private_key_bytes(value, name: str = "private_key") -> bytes:
    kind = classify(value)
    if kind is None:
        raise _none_of(name)
    return _TO_BYTES[kind](value)


def to_message(value, name: str = "message") -> int:
    """Normalize a message to an element of the BN254 scalar field."""
    kind = classify(value)
    if kind is None:
        raise _none_of(name)
    return _TO_INT[kind](value) % p


def require_bignumberish(value, name: str) -> int:
    kind = classify(value)
    if kind not in (InputKind.INTEGER, InputKind.DECIMAL, InputKind.HEX):
        raise TypeCoercionError(f"Parameter '{name}' is not a bignumber-ish")
    return _TO_INT[kind](value)
