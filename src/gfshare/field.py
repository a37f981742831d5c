"""Arithmetic over GF(2^8) using precomputed log/exp tables.

Field: GF(2)[x] / (x^8 + x^4 + x^3 + x^2 + 1), generator 0x02. The tables
are built once at import and frozen, so readers never need a lock.

Scalar operations take and return ints in [0, 255]. Vector operations work
on numpy uint8 arrays, one element per secret byte.
"""

from __future__ import annotations

import numpy as np

from gfshare.errors import FieldDivisionError

PRIMITIVE_POLYNOMIAL = 0x11D
GENERATOR = 0x02
ORDER = 255  # size of the multiplicative group


def _build_tables() -> tuple[np.ndarray, np.ndarray]:
    """Walk the powers of GENERATOR to fill EXP and its inverse LOG."""
    exp = np.zeros(256, dtype=np.uint8)
    log = np.zeros(256, dtype=np.uint8)

    x = 1
    for i in range(ORDER):
        exp[i] = x
        log[x] = i
        # multiply by the generator (x) and reduce
        x <<= 1
        if x & 0x100:
            x ^= PRIMITIVE_POLYNOMIAL
    exp[ORDER] = exp[0]

    exp.setflags(write=False)
    log.setflags(write=False)
    return exp, log


EXP, LOG = _build_tables()

# Plain-int copies for the scalar path.
_exp = tuple(int(v) for v in EXP)
_log = tuple(int(v) for v in LOG)


def _check(a: int) -> None:
    if not 0 <= a <= 255:
        raise ValueError(f"Field element must be in [0, 255], got {a}")


def add(a: int, b: int) -> int:
    _check(a)
    _check(b)
    return a ^ b


# Characteristic 2: subtraction is addition.
sub = add


def mul(a: int, b: int) -> int:
    _check(a)
    _check(b)
    if a == 0 or b == 0:
        return 0
    return _exp[(_log[a] + _log[b]) % ORDER]


def div(a: int, b: int) -> int:
    """a / b. Raises FieldDivisionError when b is 0."""
    _check(a)
    _check(b)
    if b == 0:
        raise FieldDivisionError(f"Division by zero in GF(256): {a} / 0")
    if a == 0:
        return 0
    return _exp[(_log[a] - _log[b]) % ORDER]


def inverse(a: int) -> int:
    """Multiplicative inverse. Raises FieldDivisionError when a is 0."""
    _check(a)
    if a == 0:
        raise FieldDivisionError("Zero has no multiplicative inverse in GF(256)")
    return _exp[ORDER - _log[a]]


def pow_(a: int, e: int) -> int:
    """a**e for e >= 0, with 0**0 == 1."""
    _check(a)
    if e < 0:
        raise ValueError(f"Exponent must be non-negative, got {e}")
    if e == 0:
        return 1
    if a == 0:
        return 0
    return _exp[(_log[a] * e) % ORDER]


def scale(vec: np.ndarray, c: int) -> np.ndarray:
    """Multiply every element of a uint8 vector by the scalar c."""
    _check(c)
    out = np.zeros(vec.shape, dtype=np.uint8)
    if c == 0:
        return out
    nonzero = vec != 0
    idx = (LOG[vec[nonzero]].astype(np.intp) + _log[c]) % ORDER
    out[nonzero] = EXP[idx]
    return out


def horner(coeffs: np.ndarray, x: int) -> np.ndarray:
    """Evaluate every column of coeffs at x.

    Args:
        coeffs: (degree + 1, width) uint8 matrix; row i holds the x^i
            coefficient of each of the width polynomials.
        x: Evaluation point.

    Returns:
        uint8 vector of length width.
    """
    acc = coeffs[-1].copy()
    for row in coeffs[:-1][::-1]:
        acc = scale(acc, x) ^ row
    return acc
