"""
Transform module for the hashing package.

Computes the two-dimensional type-II DCT of a square grayscale matrix:

    F(v, u) = 0.25 * a(u) * a(v) * sum_y sum_x f(y, x)
              * cos((2x + 1) u pi / 2N) * cos((2y + 1) v pi / 2N)

with a(0) = 1/sqrt(2) and a(k > 0) = 1. Rows of the result index vertical
frequency, columns horizontal frequency, so F[0, 0] is the DC term.

Four interchangeable strategies are provided. They agree with the formula
up to floating-point rounding:

- naive: separable row/column sums evaluated directly with math.cos
- butterfly: closed-form 8-point even/odd butterfly, 8x8 only
- lookup: separable matrix product against a cached cosine table
- aan: Arai-Agui-Nakajima 8-point kernel, extended to 16/32/64 by
  even/odd (Lee) recursion
"""

from __future__ import annotations

import logging
import math
import threading
from typing import Callable, Optional

import numpy as np

from ..config import AAN_SIZES, BUTTERFLY_SIZE
from ..errors import InvalidArgumentError, MemoryAllocationError, UnsupportedOperationError
from ..models import TransformMethod

logger = logging.getLogger(__name__)

DCT_SCALE = 0.25

# Coefficients within this fraction of the largest magnitude are rounding
# noise and are set to exactly 0.0
SNAP_EPSILON = 1e-11

# cos(k * pi / 16)
_C1 = math.cos(1 * math.pi / 16)
_C2 = math.cos(2 * math.pi / 16)
_C3 = math.cos(3 * math.pi / 16)
_C4 = math.cos(4 * math.pi / 16)
_C5 = math.cos(5 * math.pi / 16)
_C6 = math.cos(6 * math.pi / 16)
_C7 = math.cos(7 * math.pi / 16)

# AAN rotation constants and output descaling (out[k] = X[k] * 2cos(k pi/16), k > 0)
_AAN_Z2 = _C2 - _C6
_AAN_Z4 = _C2 + _C6
_AAN_DESCALE = np.array(
    [1.0] + [1.0 / (2.0 * math.cos(k * math.pi / 16)) for k in range(1, 8)]
)[:, None]


class CosineTableCache:
    """
    Size-keyed store of cosine basis tables for the lookup strategy.

    Tables are built lazily under a lock and are read-only once stored, so
    concurrent readers never see a partially built table. Dropping the
    cache is always safe; tables are rebuilt on next use.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._tables: dict[int, np.ndarray] = {}

    def get(self, size: int) -> np.ndarray:
        """
        Return the (size, size) table T[u, x] = cos((2x + 1) u pi / 2size).

        Args:
            size: Transform size

        Returns:
            Read-only float64 array
        """
        table = self._tables.get(size)
        if table is not None:
            return table

        with self._lock:
            table = self._tables.get(size)
            if table is None:
                table = build_cosine_table(size)
                self._tables[size] = table
                logger.debug(f"Built {size}x{size} cosine table")
        return table

    def clear(self) -> None:
        """Drop every cached table."""
        with self._lock:
            self._tables.clear()

    @property
    def sizes(self) -> list[int]:
        """Sizes that currently have a cached table."""
        return sorted(self._tables)

    def __contains__(self, size: int) -> bool:
        return size in self._tables

    def __len__(self) -> int:
        return len(self._tables)


def build_cosine_table(size: int) -> np.ndarray:
    """Compute the unscaled DCT-II cosine table for one transform size."""
    u = np.arange(size, dtype=np.float64)[:, None]
    x = np.arange(size, dtype=np.float64)[None, :]
    table = np.cos((2.0 * x + 1.0) * u * math.pi / (2.0 * size))
    table.setflags(write=False)
    return table


# Process-wide cache used when callers do not pass their own
_default_cache = CosineTableCache()


def get_cosine_cache() -> CosineTableCache:
    """Get the global CosineTableCache instance."""
    return _default_cache


def clear_cosine_cache() -> None:
    """Release the global cosine tables."""
    _default_cache.clear()


def _scale_matrix(size: int) -> np.ndarray:
    """0.25 * a(v) * a(u) for every output position."""
    alpha = np.ones(size, dtype=np.float64)
    alpha[0] = math.sqrt(0.5)
    return DCT_SCALE * np.outer(alpha, alpha)


def _naive_1d(values: list[float]) -> list[float]:
    n = len(values)
    return [
        sum(values[x] * math.cos((2 * x + 1) * k * math.pi / (2 * n)) for x in range(n))
        for k in range(n)
    ]


def dct2d_naive(matrix: np.ndarray, cache: Optional[CosineTableCache] = None) -> np.ndarray:
    """Separable DCT evaluated term by term, without any table."""
    n = matrix.shape[0]
    rows = [_naive_1d(row) for row in matrix.tolist()]
    out = np.empty((n, n), dtype=np.float64)
    for u in range(n):
        out[:, u] = _naive_1d([rows[y][u] for y in range(n)])
    return out * _scale_matrix(n)


def dct2d_lookup(matrix: np.ndarray, cache: Optional[CosineTableCache] = None) -> np.ndarray:
    """Separable DCT as T @ f @ T.T against a cached cosine table."""
    n = matrix.shape[0]
    table = (cache if cache is not None else _default_cache).get(n)
    return _scale_matrix(n) * (table @ matrix @ table.T)


def _butterfly_1d(a: np.ndarray) -> np.ndarray:
    """Unscaled 8-point DCT-II along axis 0, all columns at once."""
    s0, d0 = a[0] + a[7], a[0] - a[7]
    s1, d1 = a[1] + a[6], a[1] - a[6]
    s2, d2 = a[2] + a[5], a[2] - a[5]
    s3, d3 = a[3] + a[4], a[3] - a[4]

    # Even half: a 4-point DCT of the sums
    e0, e1 = s0 + s3, s1 + s2
    e2, e3 = s0 - s3, s1 - s2

    return np.stack([
        e0 + e1,
        _C1 * d0 + _C3 * d1 + _C5 * d2 + _C7 * d3,
        _C2 * e2 + _C6 * e3,
        _C3 * d0 - _C7 * d1 - _C1 * d2 - _C5 * d3,
        _C4 * (e0 - e1),
        _C5 * d0 - _C1 * d1 + _C7 * d2 + _C3 * d3,
        _C6 * e2 - _C2 * e3,
        _C7 * d0 - _C5 * d1 + _C3 * d2 - _C1 * d3,
    ])


def dct2d_butterfly(matrix: np.ndarray, cache: Optional[CosineTableCache] = None) -> np.ndarray:
    """Closed-form 8x8 DCT: butterfly over rows, then over columns."""
    coeffs = _butterfly_1d(_butterfly_1d(matrix.T).T)
    return coeffs * _scale_matrix(BUTTERFLY_SIZE)


def _aan_kernel_8(a: np.ndarray) -> np.ndarray:
    """Unscaled 8-point DCT-II along axis 0 via the AAN flow graph."""
    tmp0, tmp7 = a[0] + a[7], a[0] - a[7]
    tmp1, tmp6 = a[1] + a[6], a[1] - a[6]
    tmp2, tmp5 = a[2] + a[5], a[2] - a[5]
    tmp3, tmp4 = a[3] + a[4], a[3] - a[4]

    tmp10, tmp13 = tmp0 + tmp3, tmp0 - tmp3
    tmp11, tmp12 = tmp1 + tmp2, tmp1 - tmp2
    z1 = (tmp12 + tmp13) * _C4

    out = np.empty_like(a)
    out[0] = tmp10 + tmp11
    out[4] = tmp10 - tmp11
    out[2] = tmp13 + z1
    out[6] = tmp13 - z1

    tmp10 = tmp4 + tmp5
    tmp11 = tmp5 + tmp6
    tmp12 = tmp6 + tmp7
    z5 = (tmp10 - tmp12) * _C6
    z2 = _AAN_Z2 * tmp10 + z5
    z4 = _AAN_Z4 * tmp12 + z5
    z3 = tmp11 * _C4
    z11 = tmp7 + z3
    z13 = tmp7 - z3

    out[5] = z13 + z2
    out[3] = z13 - z2
    out[1] = z11 + z4
    out[7] = z11 - z4

    return out * _AAN_DESCALE


def _aan_1d(a: np.ndarray) -> np.ndarray:
    """Unscaled DCT-II along axis 0 for power-of-two lengths >= 8."""
    n = a.shape[0]
    if n == 8:
        return _aan_kernel_8(a)

    half = n // 2
    front = a[:half]
    back = a[::-1][:half]
    twiddle = 2.0 * np.cos((np.arange(half) + 0.5) * math.pi / n)[:, None]

    even = _aan_1d(front + back)
    odd = _aan_1d((front - back) / twiddle)

    out = np.empty_like(a)
    out[0::2] = even
    out[1:-1:2] = odd[:-1] + odd[1:]
    out[-1] = odd[-1]
    return out


def dct2d_aan(matrix: np.ndarray, cache: Optional[CosineTableCache] = None) -> np.ndarray:
    """AAN DCT for sizes 8, 16, 32 and 64."""
    n = matrix.shape[0]
    coeffs = _aan_1d(_aan_1d(matrix.T).T)
    return coeffs * _scale_matrix(n)


Strategy = Callable[[np.ndarray, Optional[CosineTableCache]], np.ndarray]

STRATEGIES: dict[TransformMethod, Strategy] = {
    TransformMethod.NAIVE: dct2d_naive,
    TransformMethod.BUTTERFLY: dct2d_butterfly,
    TransformMethod.LOOKUP: dct2d_lookup,
    TransformMethod.AAN: dct2d_aan,
}


def select_method(size: int, method: TransformMethod = TransformMethod.AUTO) -> TransformMethod:
    """
    Resolve the strategy that will run for a transform size.

    AUTO picks the closed-form butterfly at size 8 and the cached lookup
    strategy otherwise.

    Raises:
        UnsupportedOperationError: If the method cannot run at this size
    """
    method = TransformMethod.parse(method)
    if method is TransformMethod.AUTO:
        return TransformMethod.BUTTERFLY if size == BUTTERFLY_SIZE else TransformMethod.LOOKUP
    if method is TransformMethod.BUTTERFLY and size != BUTTERFLY_SIZE:
        raise UnsupportedOperationError(f"Butterfly transform requires size {BUTTERFLY_SIZE}, got {size}")
    if method is TransformMethod.AAN and size not in AAN_SIZES:
        raise UnsupportedOperationError(f"AAN transform requires size in {sorted(AAN_SIZES)}, got {size}")
    return method


def dct2d(
    matrix,
    method: TransformMethod = TransformMethod.AUTO,
    cache: Optional[CosineTableCache] = None,
) -> np.ndarray:
    """
    Apply the 2D type-II DCT to a square matrix.

    Args:
        matrix: Square array of intensities (converted to float64)
        method: Strategy to use, AUTO by default
        cache: Cosine table cache for the lookup strategy (global if None)

    Returns:
        New float64 coefficient matrix of the same shape, with rounding
        residue (see snap_noise) set to exactly 0.0

    Raises:
        InvalidArgumentError: If matrix is not a non-empty square 2D array
        UnsupportedOperationError: If method cannot run at this size
        MemoryAllocationError: If the coefficient matrix cannot be allocated
    """
    try:
        data = np.asarray(matrix, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Matrix must be numeric: {e}") from e

    if data.ndim != 2 or data.shape[0] != data.shape[1] or data.shape[0] == 0:
        raise InvalidArgumentError(f"Matrix must be square and non-empty, got shape {data.shape}")

    size = data.shape[0]
    resolved = select_method(size, method)
    logger.debug(f"DCT {size}x{size} using {resolved.value} strategy")

    try:
        coeffs = STRATEGIES[resolved](data, cache)
    except MemoryError as e:
        raise MemoryAllocationError(f"Cannot allocate {size}x{size} coefficient matrix: {e}") from e
    return snap_noise(coeffs)


def snap_noise(coeffs: np.ndarray) -> np.ndarray:
    """
    Zero coefficients that are rounding residue rather than signal.

    A flat block has exactly zero AC energy, but table and summation based
    strategies leave residues around 1e-13 of the DC term. Left in place,
    the mean threshold turns them into fingerprint bits.
    """
    scale = max(1.0, float(np.abs(coeffs).max()))
    coeffs[np.abs(coeffs) <= SNAP_EPSILON * scale] = 0.0
    return coeffs


__all__ = [
    'CosineTableCache',
    'build_cosine_table',
    'get_cosine_cache',
    'clear_cosine_cache',
    'dct2d_naive',
    'dct2d_lookup',
    'dct2d_butterfly',
    'dct2d_aan',
    'STRATEGIES',
    'select_method',
    'dct2d',
    'snap_noise',
]
