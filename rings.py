"""
Ring and field capability sets, and integers modulo n.

Structures (Ring, Field) know how to build their distinguished elements and
sample random ones; elements (RingElement, FieldElement) carry their parent
structure and implement the arithmetic. The derived operations (scale,
positive_pow, pow, integer_embed) are written once here on top of
double_and_add and inherited by every concrete instance.

Concrete instances are parameterized by a runtime modulus:

    F = PrimeField(4999)
    x = F(1234)
    x * x.invert() == F.one()

The modulus of a PrimeField is expected to be prime; nothing checks it.
"""
import operator
import random
from abc import ABC, abstractmethod

from double_and_add import double_and_add, positive_double_and_add
from egcd import egcd


class Ring(ABC):
    """A commutative ring with identity."""

    @abstractmethod
    def zero(self) -> "RingElement":
        ...

    @abstractmethod
    def one(self) -> "RingElement":
        ...

    @abstractmethod
    def random(self, rng=None) -> "RingElement":
        """Uniformly random element; rng must expose randrange(start, stop)."""

    @abstractmethod
    def __call__(self, value) -> "RingElement":
        """Coerce an integer (or an element of this ring) into the ring."""

    def random_non_zero(self, rng=None) -> "RingElement":
        while True:
            sample = self.random(rng)
            if not sample.is_zero():
                return sample

    def integer_embed(self, k: int) -> "RingElement":
        """Image of k under the ring homomorphism Z -> R."""
        return self.one().scale(k)


class Field(Ring):

    @abstractmethod
    def characteristic(self) -> int:
        ...


class RingElement(ABC):
    __slots__ = ()

    @property
    @abstractmethod
    def parent(self) -> Ring:
        ...

    @abstractmethod
    def __add__(self, other):
        ...

    @abstractmethod
    def __neg__(self):
        ...

    @abstractmethod
    def __mul__(self, other):
        ...

    @abstractmethod
    def __eq__(self, other):
        ...

    def __radd__(self, other):
        return self + other

    def _operand(self, other):
        """other coerced into the parent ring, or None for foreign types."""
        if isinstance(other, (int, RingElement)):
            return self.parent(other)
        return None

    def __sub__(self, other):
        other = self._operand(other)
        if other is None:
            return NotImplemented
        return self + -other

    def __rsub__(self, other):
        other = self._operand(other)
        if other is None:
            return NotImplemented
        return other - self

    def __rmul__(self, other):
        return self * other

    def __pow__(self, exponent: int):
        return self.positive_pow(exponent)

    def is_zero(self) -> bool:
        return self == self.parent.zero()

    def is_one(self) -> bool:
        return self == self.parent.one()

    def scale(self, k: int):
        """k-fold sum of self; negative k scales the negation."""
        return double_and_add(self, k, operator.add, self.parent.zero, operator.neg)

    def positive_pow(self, exponent: int):
        if exponent < 0:
            raise ValueError(f"positive_pow expects a non-negative exponent, got {exponent}")
        if exponent > 0 and self.is_zero():
            return self.parent.zero()
        return positive_double_and_add(self, exponent, operator.mul, self.parent.one)

    def square(self):
        return self.positive_pow(2)


class FieldElement(RingElement):
    __slots__ = ()

    @abstractmethod
    def invert(self):
        """Multiplicative inverse, or None for zero."""

    def _checked_inverse(self):
        inverse = self.invert()
        if inverse is None:
            raise ZeroDivisionError(f"{self!r} has no multiplicative inverse")
        return inverse

    def pow(self, exponent: int):
        """Integer power; negative exponents invert first."""
        if self.is_zero():
            if exponent < 0:
                raise ZeroDivisionError("zero cannot be raised to a negative power")
            return self.parent.one() if exponent == 0 else self.parent.zero()
        return double_and_add(
            self, exponent, operator.mul, self.parent.one, FieldElement._checked_inverse
        )

    def __pow__(self, exponent: int):
        return self.pow(exponent)

    def __truediv__(self, other):
        other = self._operand(other)
        if other is None:
            return NotImplemented
        return self * other._checked_inverse()

    def __rtruediv__(self, other):
        other = self._operand(other)
        if other is None:
            return NotImplemented
        return other * self._checked_inverse()


class IntegerModElement(RingElement):
    """Canonical representative in [0, modulus) together with its ring."""

    __slots__ = ("_value", "_parent")

    def __init__(self, value: int, parent: "IntegersMod"):
        self._value = value % parent.modulus
        self._parent = parent

    @classmethod
    def _unchecked(cls, value: int, parent: "IntegersMod"):
        # value is already in [0, modulus)
        element = cls.__new__(cls)
        element._value = value
        element._parent = parent
        return element

    @property
    def parent(self) -> "IntegersMod":
        return self._parent

    @property
    def value(self) -> int:
        return self._value

    def _coerce(self, other):
        if isinstance(other, IntegerModElement):
            if other._parent != self._parent:
                raise ValueError(f"cannot combine elements of {self._parent!r} and {other._parent!r}")
            return other
        if isinstance(other, int):
            return self._parent(other)
        return None

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        total = self._value + other._value
        if total >= self._parent.modulus:
            total -= self._parent.modulus
        return self._unchecked(total, self._parent)

    def __neg__(self):
        # modulus - 0 would leave the canonical range
        if self._value == 0:
            return self
        return self._unchecked(self._parent.modulus - self._value, self._parent)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._unchecked(self._value * other._value % self._parent.modulus, self._parent)

    def __eq__(self, other):
        if isinstance(other, IntegerModElement):
            return self._parent == other._parent and self._value == other._value
        if isinstance(other, int):
            # only the canonical representative, so that hash(F(k)) == hash(k)
            return self._value == other
        return NotImplemented

    def __hash__(self):
        return hash(self._value)

    def __bool__(self):
        return self._value != 0

    def __int__(self):
        return self._value

    def __repr__(self):
        return f"{self._value} (mod {self._parent.modulus})"

    def __str__(self):
        return str(self._value)

    def is_zero(self) -> bool:
        return self._value == 0

    def is_one(self) -> bool:
        return self._value == 1


class PrimeFieldElement(IntegerModElement, FieldElement):
    __slots__ = ()

    def invert(self):
        """Inverse via the extended Euclidean algorithm against the modulus."""
        if self._value == 0:
            return None
        modulus = self._parent.modulus
        result = egcd(self._value, modulus)
        if result.d != 1:
            return None
        if result.negative:
            # -x a + n b = 1, so a^-1 = -x
            return type(self)(-result.a_coeff, self._parent)
        # x a - n b = 1, so a^-1 = x
        return type(self)(result.a_coeff, self._parent)


class IntegersMod(Ring):
    """The ring Z / nZ."""

    element_class = IntegerModElement

    def __init__(self, modulus: int):
        if modulus < 2:
            raise ValueError(f"modulus must be at least 2, got {modulus}")
        self._modulus = modulus

    @property
    def modulus(self) -> int:
        return self._modulus

    def zero(self):
        return self.element_class._unchecked(0, self)

    def one(self):
        return self.element_class._unchecked(1, self)

    def random(self, rng=None):
        if rng is None:
            rng = random
        return self.element_class._unchecked(rng.randrange(0, self._modulus), self)

    def __call__(self, value):
        if isinstance(value, IntegerModElement):
            if value.parent != self:
                raise ValueError(f"cannot coerce an element of {value.parent!r} into {self!r}")
            return value
        if isinstance(value, int):
            return self.element_class(value, self)
        raise TypeError(f"cannot coerce {type(value).__name__} into {self!r}")

    def __eq__(self, other):
        if not isinstance(other, IntegersMod):
            return NotImplemented
        return type(self) is type(other) and self._modulus == other._modulus

    def __hash__(self):
        return hash((type(self).__name__, self._modulus))

    def __repr__(self):
        return f"IntegersMod({self._modulus})"


class PrimeField(IntegersMod, Field):
    """GF(p) for a prime p supplied by the caller."""

    element_class = PrimeFieldElement

    def characteristic(self) -> int:
        return self._modulus

    def __repr__(self):
        return f"GF({self._modulus})"
