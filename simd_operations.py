"""
Vectorized helpers for the trial-division layer.

Trial division tries every candidate 2, 3, 4, ... in turn. While the number
being divided fits in a signed 64-bit word, a whole block of consecutive
candidates can be tested with one NumPy remainder operation; the first hit in
the block is the same divisor the scalar loop would reach.
"""

import numpy as np

_INT64_MAX: int = np.iinfo(np.int64).max

# Candidates tested per NumPy remainder call
_SIMD_BLOCK_SIZE: int = 4096


def fits_int64(n: int) -> bool:
    """Whether n can be handled by the vectorized search."""
    return 0 <= n <= _INT64_MAX


def _first_divisor_simd(n: int, start: int, stop: int, block_size: int = _SIMD_BLOCK_SIZE) -> int | None:
    """
    Smallest d in [start, stop) dividing n, scanning NumPy blocks.

    Args:
        n: Number to divide (must satisfy fits_int64)
        start: First candidate (>= 1)
        stop: End of the candidate range (exclusive, <= n + 1)
        block_size: Candidates per vectorized remainder

    Returns:
        The smallest divisor in range, or None
    """
    if not fits_int64(n) or stop - 1 > _INT64_MAX:
        raise ValueError("vectorized divisor search requires int64 operands")

    n_arr = np.int64(n)
    lo = start
    while lo < stop:
        hi = min(lo + block_size, stop)
        candidates = np.arange(lo, hi, dtype=np.int64)
        hits = np.flatnonzero(n_arr % candidates == 0)
        if hits.size:
            return int(candidates[hits[0]])
        lo = hi
    return None


def _first_divisor_scalar(n: int, start: int, stop: int) -> int | None:
    """Pure Python counterpart of _first_divisor_simd for arbitrary n."""
    for d in range(start, stop):
        if n % d == 0:
            return d
    return None
