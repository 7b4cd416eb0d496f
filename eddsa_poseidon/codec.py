"""Canonical point compression and scalar encoding.

A packed point is 32 little-endian bytes: the y coordinate in the low 254
bits and the sign of x in the top bit of the last byte.  x counts as
negative when it lies in the upper half of the field, i.e. ``x > (p-1)/2``.
"""

from __future__ import annotations

import logging
from typing import Union

import numpy as np

from .babyjub import Point, in_curve, x_squared
from .conversions import BytesLike, le_bytes_to_int, le_int_to_bytes
from .exceptions import InvalidPointError, LengthError
from .field import is_negative, p

logger = logging.getLogger(__name__)

PACKED_SIZE = 32
SIGN_BIT = 0x80


def pack_point(point: Point) -> int:
    if not in_curve(point):
        raise InvalidPointError("Point is not on the Baby Jubjub curve")

    x, y = point
    buffer = bytearray(le_int_to_bytes(y, PACKED_SIZE))
    if is_negative(x):
        buffer[31] |= SIGN_BIT
    return le_bytes_to_int(buffer)


def unpack_point(packed: Union[int, BytesLike]) -> Point:
    """Inverse of :func:`pack_point`, from the integer or the 32 raw bytes."""
    if isinstance(packed, (bytes, bytearray, memoryview)):
        if len(packed) != PACKED_SIZE:
            raise InvalidPointError(f"Packed point must be {PACKED_SIZE} bytes")
        buffer = bytearray(packed)
    else:
        if not 0 <= packed < 1 << (8 * PACKED_SIZE):
            raise InvalidPointError("Packed point does not fit in 32 bytes")
        buffer = bytearray(le_int_to_bytes(packed, PACKED_SIZE))

    sign = bool(buffer[31] & SIGN_BIT)
    buffer[31] &= 0x7F
    y = le_bytes_to_int(buffer)
    if y >= p:
        raise InvalidPointError("Packed point y coordinate is not a field element")

    x2 = x_squared(y)
    if not x2.is_square():
        logger.debug("No x coordinate for y=%d", y)
        raise InvalidPointError("Packed point is not on the Baby Jubjub curve")

    # galois' Tonelli-Shanks path cannot take 0-d arrays
    x = int(np.sqrt(x2.reshape(1))[0])
    if is_negative(x):
        x = p - x
    if sign:
        if x == 0:
            raise InvalidPointError("Packed point has a sign bit but x is zero")
        x = p - x

    point = (x, y)
    if not in_curve(point):
        raise InvalidPointError("Packed point is not on the Baby Jubjub curve")
    return point


def pack_scalar(scalar: int) -> bytes:
    """32-byte little-endian encoding; the subgroup bound is the caller's business."""
    if not 0 <= scalar < 1 << (8 * PACKED_SIZE):
        raise ValueError("Scalar does not fit in 32 bytes")
    return le_int_to_bytes(scalar, PACKED_SIZE)


def unpack_scalar(data: BytesLike) -> int:
    if len(data) != PACKED_SIZE:
        raise LengthError(f"Packed scalar must be {PACKED_SIZE} bytes")
    return le_bytes_to_int(data)
