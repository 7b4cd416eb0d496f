"""Baby Jubjub twisted Edwards curve over the BN254 scalar field.

    a*x^2 + y^2 = 1 + d*x^2*y^2,   a = 168700, d = 168696

Points are ``(x, y)`` tuples of Python ints at the module boundary; the
arithmetic itself runs on ``galois`` field elements.
"""

from __future__ import annotations

from typing import Tuple

from .field import FP, p, to_fp

Point = Tuple[int, int]

A = 168700
D = 168696

order = 21888242871839275222246405745257275088614511777268538073601725287587578984328
sub_order = order >> 3
cofactor = 8

Generator = (
    995203441582195749578291179787384436505546430278305826713579947235728471134,
    5472060717959818805561601436314318772137091100104008585924551046643952123905,
)
# 8 * Generator, generates the prime order subgroup
Base8 = (
    5299619240641551281634865583518297030282874472190772894086521144482721001553,
    16950150798460657717958625567821834550301663161624707787222815936182638968203,
)
IDENTITY = (0, 1)

_A = FP(A)
_D = FP(D)
_ONE = FP(1)


def _lift(point: Point):
    x, y = point
    return to_fp(x), to_fp(y)


def _add(a, b):
    x1, y1 = a
    x2, y2 = b
    x1x2 = x1 * x2
    y1y2 = y1 * y2
    dxy = _D * x1x2 * y1y2

    # the addition law is complete on Baby Jubjub, denominators never vanish
    x3 = (x1 * y2 + y1 * x2) / (_ONE + dxy)
    y3 = (y1y2 - _A * x1x2) / (_ONE - dxy)
    return x3, y3


def add_point(a: Point, b: Point) -> Point:
    x, y = _add(_lift(a), _lift(b))
    return int(x), int(y)


def mul_point_escalar(base: Point, e: int) -> Point:
    if e < 0:
        raise ValueError("Scalar multiplication expects non-negative scalars")

    result = _lift(IDENTITY)
    addend = _lift(base)
    k = e
    while k:
        if k & 1:
            result = _add(result, addend)
        k >>= 1
        if k:
            addend = _add(addend, addend)

    return int(result[0]), int(result[1])


def x_squared(y: int):
    """Solve the curve equation for x^2 given y."""
    y2 = FP(y) ** 2
    # a - d*y^2 is never zero, a/d is not a square
    return (_ONE - y2) / (_A - _D * y2)


def in_curve(point: Point) -> bool:
    x, y = point
    if not (0 <= x < p and 0 <= y < p):
        return False

    x2 = FP(x) ** 2
    y2 = FP(y) ** 2
    return bool(_A * x2 + y2 == _ONE + _D * x2 * y2)
