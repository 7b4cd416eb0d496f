"""The BN254 scalar field, which is the base field of Baby Jubjub."""

from __future__ import annotations

import os
import tempfile

cache_dir = os.path.join(tempfile.gettempdir(), "numba_cache")
os.makedirs(cache_dir, exist_ok=True)
os.environ.setdefault("NUMBA_CACHE_DIR", cache_dir)

import galois  # noqa: E402
from py_ecc.bn128 import curve_order  # noqa: E402

# p = 21888242871839275222246405745257275088548364400416034343698204186575808495617
p = curve_order
FP = galois.GF(p)

# elements above this are "negative" for point compression
HALF = (p - 1) // 2


def to_fp(value: int) -> galois.FieldArray:
    return FP(int(value) % p)


def is_negative(value: int) -> bool:
    return int(value) > HALF
