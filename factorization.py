"""
Integer factorization using trial division and Pollard's rho (Floyd cycle detection).

LAYERS:
1. Trial division: tries every candidate 2, 3, 4, ... (not only primes)
   - Candidate blocks are scanned with NumPy while the quotient fits in int64
   - Memoized with an LRU cache
2. Pollard's rho: one randomized attempt, x -> x^2 + b (mod n)
   - Returns None when the cycle closes without a proper factor
3. Retry wrapper: bounded number of rho attempts
4. Orchestrator: Miller-Rabin, then trial division below a bound, then rho
   - Iterative work stack, no recursion per extracted factor
   - All-or-nothing: None as soon as one rho budget is exhausted

Every tuning knob of the orchestrator lives in an explicit FactorizationConfig.
"""
import logging
import math
import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache

from primality import miller_rabin, rewrite_n
from simd_operations import _first_divisor_scalar, _first_divisor_simd, fits_int64

logger = logging.getLogger(__name__)

# Ranges shorter than this are not worth a NumPy round trip
_SIMD_MIN_RANGE = 64


class Factorization(Mapping):
    """
    Immutable mapping from prime divisor to multiplicity.

    Divisor 1 is dropped, divisor 0, duplicates and non-positive
    multiplicities are rejected.
    """

    __slots__ = ("_factors",)

    def __init__(self, pairs: Iterable[tuple[int, int]] | Mapping = ()):
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        factors: dict[int, int] = {}
        for divisor, multiplicity in pairs:
            if divisor == 0:
                raise ValueError("Zero not allowed in factorization")
            if divisor < 0:
                raise ValueError(f"Negative divisor {divisor} not allowed in factorization")
            if divisor == 1:
                continue
            if multiplicity <= 0:
                raise ValueError(f"Multiplicity of {divisor} must be positive, got {multiplicity}")
            if divisor in factors:
                raise ValueError(f"Duplicate divisor {divisor} in factorization")
            factors[divisor] = multiplicity
        self._factors = dict(sorted(factors.items()))

    def __getitem__(self, divisor: int) -> int:
        return self._factors[divisor]

    def __iter__(self):
        return iter(self._factors)

    def __len__(self) -> int:
        return len(self._factors)

    def __repr__(self) -> str:
        return f"Factorization({self._factors!r})"

    def __str__(self) -> str:
        if not self._factors:
            return "1"
        return " * ".join(
            str(p) if e == 1 else f"{p}^{e}" for p, e in self._factors.items()
        )

    @property
    def value(self) -> int:
        """The integer this factorization reconstructs."""
        result = 1
        for divisor, multiplicity in self._factors.items():
            result *= divisor ** multiplicity
        return result

    def merge(self, other: "Factorization") -> "Factorization":
        """Factorization of the product; multiplicities of shared divisors add up."""
        merged = dict(self._factors)
        for divisor, multiplicity in other.items():
            merged[divisor] = merged.get(divisor, 0) + multiplicity
        return Factorization(merged)


@dataclass(frozen=True)
class FactorizationConfig:
    """
    Parameters of the factorize() orchestrator.

    Attributes:
        trial_bound: Numbers strictly below this use trial division
        rho_rounds: Pollard rho attempts per extracted factor
        miller_rabin_rounds: Witnesses per primality check
    """
    trial_bound: int
    rho_rounds: int
    miller_rabin_rounds: int

    def __post_init__(self):
        if self.trial_bound < 0:
            raise ValueError(f"trial_bound must be non-negative, got {self.trial_bound}")
        if self.rho_rounds < 0:
            raise ValueError(f"rho_rounds must be non-negative, got {self.rho_rounds}")
        if self.miller_rabin_rounds < 1:
            raise ValueError(
                f"miller_rabin_rounds must be at least 1, got {self.miller_rabin_rounds}"
            )


def clear_caches():
    """Clear all memoization caches. Useful between independent factorization runs."""
    trial_factorization.cache_clear()
    rewrite_n.cache_clear()


def _first_divisor(n: int, start: int, stop: int) -> int | None:
    if stop - start >= _SIMD_MIN_RANGE and fits_int64(n):
        return _first_divisor_simd(n, start, stop)
    return _first_divisor_scalar(n, start, stop)


# trial division by every integer candidate (memoized)
@lru_cache(maxsize=64)
def trial_factorization(n: int) -> Factorization:
    """
    Factor n by dividing out the smallest untried candidate, one at a time.

    Candidates are 2, 3, 4, ... regardless of primality; composite candidates
    never divide because their prime factors were removed earlier. Once the
    candidate passes sqrt of the remaining quotient, that quotient is prime.

    Args:
        n: Integer >= 1

    Returns:
        Factorization of n (empty for n == 1)
    """
    if n < 1:
        raise ValueError(f"trial_factorization expects n >= 1, got {n}")

    counts: dict[int, int] = {}
    candidate = 2
    while n != 1:
        d = _first_divisor(n, candidate, math.isqrt(n) + 1)
        if d is None:
            d = n
        counts[d] = counts.get(d, 0) + 1
        n //= d
        candidate = d

    return Factorization(counts)


def pollard_rho_attempt(n: int, rng=None) -> int | None:
    """
    Single Pollard rho attempt with Floyd's two-speed iteration.

    Args:
        n: Composite integer >= 4
        rng: Random source exposing randrange(start, stop); defaults to `random`

    Returns:
        A divisor of n strictly between 1 and n, or None if the sequences
        met before exposing one
    """
    if n < 4:
        raise ValueError(f"pollard rho expects n >= 4, got {n}")
    if rng is None:
        rng = random

    start: int = rng.randrange(0, n)
    shift: int = rng.randrange(1, n - 1)

    x: int = start
    y: int = start
    while True:
        x = (x * x + shift) % n
        y = (y * y + shift) % n
        y = (y * y + shift) % n
        g = math.gcd(x - y, n)
        if g == 1:
            continue
        if g == n:
            return None
        return g


def pollard_rho(n: int, rounds: int, rng=None) -> int | None:
    """
    Repeat pollard_rho_attempt up to `rounds` times.

    Returns:
        The first proper divisor found, or None once the budget is spent
    """
    for attempt in range(rounds):
        d = pollard_rho_attempt(n, rng)
        if d is not None:
            logger.debug("pollard rho split %d after %d attempt(s): %d", n, attempt + 1, d)
            return d
    logger.debug("pollard rho found no factor of %d in %d attempt(s)", n, rounds)
    return None


def factorize(n: int, config: FactorizationConfig, rng=None) -> Factorization | None:
    """
    Factor n into primes.

    Each pending number is (a) accepted as prime when Miller-Rabin does not
    report it composite, (b) trial-divided when below config.trial_bound, or
    (c) split at its smallest divisor below config.trial_bound, else by
    Pollard rho, with both parts pushed back on the work stack.

    Args:
        n: Integer >= 1
        config: Orchestrator parameters
        rng: Random source shared by Miller-Rabin and Pollard rho

    Returns:
        Factorization of n, or None if some rho budget was exhausted
    """
    if n < 1:
        raise ValueError(f"factorize expects n >= 1, got {n}")

    result = Factorization()
    pending: list[int] = [n]
    while pending:
        m = pending.pop()
        if m == 1:
            continue

        if miller_rabin(m, config.miller_rabin_rounds, rng).is_prime():
            result = result.merge(Factorization([(m, 1)]))
        elif m < config.trial_bound:
            result = result.merge(trial_factorization(m))
        else:
            # remove small factors; rho cannot split powers of 2
            d = _first_divisor(m, 2, min(config.trial_bound, math.isqrt(m) + 1))
            if d is not None:
                pending.append(d)
                pending.append(m // d)
                continue
            d = pollard_rho(m, config.rho_rounds, rng)
            if d is None:
                logger.debug("giving up on %d: rho budget exhausted on %d", n, m)
                return None
            pending.append(d)
            pending.append(m // d)

    return result
