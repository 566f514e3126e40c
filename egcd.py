"""
Extended Euclidean algorithm returning the gcd and unsigned Bezout coefficients.

The coefficients are reported as non-negative integers together with a sign
flag, so that for the sorted inputs a <= n:

    negative=True   ->  -a * a_coeff + n * n_coeff == d
    negative=False  ->   a * a_coeff - n * n_coeff == d

Back-substitution walks the quotient sequence with a two-term continuant
recurrence, so only the quotients and the last two remainders are kept.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class GCDResult:
    d: int
    # Coefficient of the smaller input
    a_coeff: int
    # Coefficient of the larger input
    n_coeff: int
    negative: bool


def egcd(a: int, b: int) -> GCDResult:
    """
    Compute gcd(a, b) and its Bezout coefficients.

    The inputs may be given in any order; the result always refers to the
    smaller one as `a` and the larger one as `n`.

    Args:
        a, b: Non-negative integers

    Returns:
        GCDResult for (min(a, b), max(a, b))
    """
    if a < 0 or b < 0:
        raise ValueError(f"egcd expects non-negative integers, got {a} and {b}")
    if a <= b:
        return _egcd_sorted(a, b)
    return _egcd_sorted(b, a)


def _egcd_sorted(a: int, n: int) -> GCDResult:
    if a == 0:
        return GCDResult(d=n, a_coeff=0, n_coeff=1, negative=True)
    if n % a == 0:
        return GCDResult(d=a, a_coeff=1, n_coeff=0, negative=False)
    return _egcd_typical(a, n)


def _egcd_typical(a: int, n: int) -> GCDResult:
    """General path: 0 < a < n and a does not divide n."""
    assert 0 < a < n, "a must be smaller than n"
    assert n % a != 0, "n must not be a multiple of a"

    quotients: list[int] = []
    prev, curr = n, a
    steps = 1
    while True:
        q, r = divmod(prev, curr)
        if r == 0:
            break
        quotients.append(q)
        prev, curr = curr, r
        steps += 1

    # Continuants, consumed from the last recorded quotient backwards
    c, k = 1, quotients[-1]
    for q in reversed(quotients[:-1]):
        c, k = k, c + k * q

    return GCDResult(d=curr, a_coeff=k, n_coeff=c, negative=steps % 2 == 0)
