"""
Miller-Rabin primality testing.

Two modes share the same per-witness step:
- probabilistic: `rounds` witnesses drawn uniformly from [2, n)
- deterministic: when `rounds` would cover the whole witness space
  (rounds >= n - 3) every witness in [2, n - 1) is tried instead, and a
  number passing all of them is reported as a certain prime.

Every outcome is an ordinary return value (see Verdict); only malformed
input (negative n) raises.
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

logger = logging.getLogger(__name__)


class Verdict(Enum):
    CERTAIN_PRIME = "certain_prime"
    POSSIBLE_PRIME = "possible_prime"
    COMPOSITE_WITNESS = "composite_witness"
    COMPOSITE_EVEN = "composite_even"
    ZERO = "zero"
    ONE = "one"


@dataclass(frozen=True)
class MillerRabinResult:
    verdict: Verdict
    # Only set for COMPOSITE_WITNESS
    witness: int | None = None

    def is_composite(self) -> bool:
        return self.verdict not in (Verdict.CERTAIN_PRIME, Verdict.POSSIBLE_PRIME)

    def is_prime(self) -> bool:
        """True for certain and possible primes."""
        return not self.is_composite()

    @classmethod
    def composite_witness(cls, a: int) -> "MillerRabinResult":
        return cls(Verdict.COMPOSITE_WITNESS, a)


CERTAIN_PRIME = MillerRabinResult(Verdict.CERTAIN_PRIME)
POSSIBLE_PRIME = MillerRabinResult(Verdict.POSSIBLE_PRIME)
COMPOSITE_EVEN = MillerRabinResult(Verdict.COMPOSITE_EVEN)
ZERO = MillerRabinResult(Verdict.ZERO)
ONE = MillerRabinResult(Verdict.ONE)


@lru_cache(maxsize=128)
def rewrite_n(n: int) -> tuple[int, int]:
    """
    Write n - 1 as 2^s * d with d odd.

    Args:
        n: Odd integer >= 3

    Returns:
        (s, d)
    """
    if n < 3 or (n & 1) == 0:
        raise ValueError(f"rewrite_n expects an odd integer >= 3, got {n}")
    d = n - 1
    s = 0
    while (d & 1) == 0:
        d >>= 1
        s += 1
    return s, d


def _edge_case(n: int) -> MillerRabinResult | None:
    if n < 0:
        raise ValueError(f"primality of negative numbers is undefined, got {n}")
    if n == 0:
        return ZERO
    if n == 1:
        return ONE
    if n == 2:
        return CERTAIN_PRIME
    if (n & 1) == 0:
        return COMPOSITE_EVEN
    return None


def _witness_step(n: int, s: int, d: int, a: int) -> MillerRabinResult:
    x = pow(a, d, n)
    if x == 1 or x == n - 1:
        return POSSIBLE_PRIME
    for _ in range(s - 1):
        x = pow(x, 2, n)
        if x == n - 1:
            return POSSIBLE_PRIME
    return MillerRabinResult.composite_witness(a)


def miller_rabin_step(n: int, a: int) -> MillerRabinResult:
    """
    Run a single Miller-Rabin round on n with witness a.

    A POSSIBLE_PRIME result only means the round was inconclusive.
    """
    trivial = _edge_case(n)
    if trivial is not None:
        return trivial
    s, d = rewrite_n(n)
    return _witness_step(n, s, d, a)


def miller_rabin(n: int, rounds: int, rng=None) -> MillerRabinResult:
    """
    Classify n with up to `rounds` Miller-Rabin rounds.

    Args:
        n: Non-negative integer to test
        rounds: Number of random witnesses to try
        rng: Random source exposing randrange(start, stop); defaults to `random`

    Returns:
        MillerRabinResult; COMPOSITE_WITNESS carries the witness that proved
        compositeness
    """
    trivial = _edge_case(n)
    if trivial is not None:
        return trivial

    s, d = rewrite_n(n)

    if rounds >= n - 3:
        # The random draws would cover [2, n) anyway, try every witness once
        for a in range(2, n - 1):
            result = _witness_step(n, s, d, a)
            if result.is_composite():
                return result
        return CERTAIN_PRIME

    if rng is None:
        rng = random
    for _ in range(rounds):
        a = rng.randrange(2, n)
        result = _witness_step(n, s, d, a)
        if result.is_composite():
            logger.debug("witness %d proves %d composite", a, n)
            return result
    return POSSIBLE_PRIME


def is_probable_prime(n: int, rounds: int, rng=None) -> bool:
    return miller_rabin(n, rounds, rng).is_prime()
