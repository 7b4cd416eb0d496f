"""Poseidon hash over the BN254 scalar field, circomlib flavour.

Round constants and the MDS matrix are not stored; they are regenerated
from the Grain LFSR exactly like the reference parameter script does
(prime field, x^5 S-box, 254-bit elements), once per state width.
"""

from __future__ import annotations

import logging
from collections import deque
from functools import lru_cache
from typing import Iterator, List, Sequence, Tuple

import galois
import numpy as np

from .field import FP, p

logger = logging.getLogger(__name__)

N_ROUNDS_F = 8
# partial rounds for t = 2 .. 17
N_ROUNDS_P = (56, 57, 56, 60, 60, 63, 64, 63, 60, 66, 60, 65, 70, 60, 64, 68)

FIELD_BITS = 254
MAX_INPUTS = len(N_ROUNDS_P)


def _to_bits(value: int, width: int) -> List[int]:
    return [int(b) for b in bin(value)[2:].zfill(width)]


def grain_bits(t: int, n_rounds_f: int, n_rounds_p: int) -> Iterator[int]:
    """Self-shrinking Grain LFSR seeded with the instance parameters."""
    state = deque(
        _to_bits(1, 2)  # prime field
        + _to_bits(0, 4)  # x^alpha S-box
        + _to_bits(FIELD_BITS, 12)
        + _to_bits(t, 12)
        + _to_bits(n_rounds_f, 10)
        + _to_bits(n_rounds_p, 10)
        + [1] * 30
    )

    def step() -> int:
        bit = state[62] ^ state[51] ^ state[38] ^ state[23] ^ state[13] ^ state[0]
        state.popleft()
        state.append(bit)
        return bit

    for _ in range(160):
        step()

    while True:
        bit = step()
        while bit == 0:
            step()
            bit = step()
        yield step()


def _take(bits: Iterator[int], count: int) -> int:
    value = 0
    for _ in range(count):
        value = (value << 1) | next(bits)
    return value


def _round_constants(bits: Iterator[int], count: int) -> List[int]:
    constants = []
    while len(constants) < count:
        value = _take(bits, FIELD_BITS)
        if value < p:
            constants.append(value)
    return constants


def _cauchy_matrix(bits: Iterator[int], t: int) -> List[List[int]]:
    while True:
        values = [_take(bits, FIELD_BITS) % p for _ in range(2 * t)]
        if len(set(values)) != len(values):
            continue
        xs, ys = values[:t], values[t:]
        if any((x + y) % p == 0 for x in xs for y in ys):
            continue
        return [[pow(x + y, p - 2, p) for y in ys] for x in xs]


@lru_cache(maxsize=None)
def parameters(t: int) -> Tuple[galois.FieldArray, galois.FieldArray]:
    """Round constants (one row per round) and MDS matrix for width ``t``."""
    if not 2 <= t <= MAX_INPUTS + 1:
        raise ValueError(f"Unsupported Poseidon width {t}")

    n_rounds_p = N_ROUNDS_P[t - 2]
    bits = grain_bits(t, N_ROUNDS_F, n_rounds_p)

    n_rounds = N_ROUNDS_F + n_rounds_p
    constants = _round_constants(bits, n_rounds * t)
    mds = _cauchy_matrix(bits, t)
    logger.debug("Generated Poseidon parameters for t=%d (%d rounds)", t, n_rounds)

    C = FP([constants[r * t:(r + 1) * t] for r in range(n_rounds)])
    M = FP(mds)
    return C, M


def poseidon(inputs: Sequence[int]) -> int:
    """Hash 1..16 field elements to a single field element."""
    if not 1 <= len(inputs) <= MAX_INPUTS:
        raise ValueError(f"Poseidon takes 1 to {MAX_INPUTS} inputs, got {len(inputs)}")

    t = len(inputs) + 1
    n_rounds_p = N_ROUNDS_P[t - 2]
    C, M = parameters(t)

    half = N_ROUNDS_F // 2
    state = FP([0] + [int(x) % p for x in inputs])
    for r in range(N_ROUNDS_F + n_rounds_p):
        state = state + C[r]
        if r < half or r >= half + n_rounds_p:
            state = state ** 5
        else:
            state[0] = state[0] ** 5
        state = np.matmul(M, state)

    return int(state[0])


def poseidon5(inputs: Sequence[int]) -> int:
    if len(inputs) != 5:
        raise ValueError("poseidon5 takes exactly 5 inputs")
    return poseidon(inputs)
