"""
Generic double-and-add over any associative operation.

The same routine drives integer multiples in an additive group (operation is
addition, inversion is negation), powers in a multiplicative group (operation
is multiplication, inversion is field inversion) and scalar multiplication of
elliptic curve points.
"""
from typing import Callable, TypeVar

T = TypeVar("T")


def positive_double_and_add(
    base: T,
    exponent: int,
    operation: Callable[[T, T], T],
    identity: Callable[[], T],
) -> T:
    """
    Fold `operation` over `base` exactly `exponent` times.

    Scans the exponent from the least significant bit, doubling the base at
    every step and combining it into the accumulator on set bits.

    Args:
        base: Element to repeat
        exponent: Non-negative repetition count
        operation: Associative binary operation
        identity: Zero-argument callable producing the neutral element

    Returns:
        base (op) base (op) ... (op) base, or identity() for exponent 0
    """
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")
    if exponent == 0:
        return identity()

    # Skip trailing zero bits, the accumulator starts at the lowest set bit
    while (exponent & 1) == 0:
        base = operation(base, base)
        exponent >>= 1

    acc = base
    exponent >>= 1
    while exponent:
        base = operation(base, base)
        if exponent & 1:
            acc = operation(acc, base)
        exponent >>= 1

    return acc


def double_and_add(
    base: T,
    exponent: int,
    operation: Callable[[T, T], T],
    identity: Callable[[], T],
    inversion: Callable[[T], T],
) -> T:
    """Signed variant: a negative exponent inverts the base first."""
    if exponent == 0:
        return identity()
    if exponent < 0:
        base = inversion(base)
        exponent = -exponent
    return positive_double_and_add(base, exponent, operation, identity)
