"""
Dense univariate polynomials over a field.

Coefficients are stored in ascending degree order with trailing zeros
stripped, so two equal polynomials always have identical coefficient tuples.
The zero polynomial has no coefficients and degree None (minus infinity).
"""
from collections.abc import Iterable, Mapping

from rings import Field, FieldElement


class DensePolynomial:
    """Immutable polynomial; every operation returns a new canonical instance."""

    __slots__ = ("_field", "_coeffs")

    def __init__(self, field: Field, coeffs: Iterable = ()):
        self._field = field
        values = [field(c) for c in coeffs]
        while values and values[-1].is_zero():
            values.pop()
        self._coeffs: tuple[FieldElement, ...] = tuple(values)

    # constructors

    @classmethod
    def from_sparse(cls, field: Field, terms: Mapping[int, object]) -> "DensePolynomial":
        """Build from a degree -> coefficient mapping; missing degrees are zero."""
        if not terms:
            return cls(field)
        if min(terms) < 0:
            raise ValueError("degrees must be non-negative")
        coeffs = [field.zero()] * (max(terms) + 1)
        for degree, coeff in terms.items():
            coeffs[degree] = field(coeff)
        return cls(field, coeffs)

    @classmethod
    def from_integers(cls, field: Field, values: Iterable[int]) -> "DensePolynomial":
        """Build from integer literals mapped through field.integer_embed."""
        return cls(field, [field.integer_embed(v) for v in values])

    @classmethod
    def zero(cls, field: Field) -> "DensePolynomial":
        return cls(field)

    @classmethod
    def one(cls, field: Field) -> "DensePolynomial":
        return cls(field, [field.one()])

    @classmethod
    def x(cls, field: Field) -> "DensePolynomial":
        """The indeterminate."""
        return cls(field, [field.zero(), field.one()])

    # accessors

    @property
    def field(self) -> Field:
        return self._field

    @property
    def coefficients(self) -> tuple[FieldElement, ...]:
        return self._coeffs

    @property
    def degree(self) -> int | None:
        if not self._coeffs:
            return None
        return len(self._coeffs) - 1

    def is_zero(self) -> bool:
        return not self._coeffs

    def coeff(self, i: int) -> FieldElement:
        """Coefficient of x^i; zero outside the stored range."""
        if 0 <= i < len(self._coeffs):
            return self._coeffs[i]
        return self._field.zero()

    @property
    def leading_coefficient(self) -> FieldElement:
        if not self._coeffs:
            return self._field.zero()
        return self._coeffs[-1]

    # arithmetic

    def _coerce(self, other) -> "DensePolynomial | None":
        if isinstance(other, DensePolynomial):
            if other._field != self._field:
                raise ValueError(f"cannot combine polynomials over {self._field!r} and {other._field!r}")
            return other
        if isinstance(other, (int, FieldElement)):
            return DensePolynomial(self._field, [other])
        return None

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        if self.is_zero():
            return other
        if other.is_zero():
            return self
        length = max(len(self._coeffs), len(other._coeffs))
        return DensePolynomial(
            self._field, [self.coeff(i) + other.coeff(i) for i in range(length)]
        )

    __radd__ = __add__

    def __neg__(self):
        return DensePolynomial(self._field, [-c for c in self._coeffs])

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other + (-self)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        if self.is_zero() or other.is_zero():
            return DensePolynomial(self._field)
        product = [self._field.zero()] * (len(self._coeffs) + len(other._coeffs) - 1)
        for i, a in enumerate(self._coeffs):
            if a.is_zero():
                continue
            for j, b in enumerate(other._coeffs):
                product[i + j] = product[i + j] + a * b
        return DensePolynomial(self._field, product)

    __rmul__ = __mul__

    def shift(self, d: int) -> "DensePolynomial":
        """Multiply by x^d."""
        if d < 0:
            raise ValueError(f"shift expects a non-negative amount, got {d}")
        if self.is_zero():
            return self
        return DensePolynomial(self._field, [self._field.zero()] * d + list(self._coeffs))

    def evaluate(self, x) -> FieldElement:
        """Evaluate at x using Horner's method."""
        x = self._field(x)
        result = self._field.zero()
        for coeff in reversed(self._coeffs):
            result = result * x + coeff
        return result

    __call__ = evaluate

    def __divmod__(self, divisor):
        """
        Euclidean division by normalized synthetic division.

        Returns:
            (quotient, remainder) with self == divisor * quotient + remainder
            and remainder zero or of degree below the divisor's
        """
        divisor = self._coerce(divisor)
        if divisor is None:
            return NotImplemented
        if divisor.is_zero():
            raise ZeroDivisionError("polynomial division by the zero polynomial")

        zero = self._field.zero()
        divisor_degree = divisor.degree
        if self.is_zero() or self.degree < divisor_degree:
            return DensePolynomial(self._field), self

        lead_inverse = divisor.leading_coefficient.invert()
        remainder = list(self._coeffs)
        quotient = [zero] * (self.degree - divisor_degree + 1)
        for i in range(len(quotient) - 1, -1, -1):
            factor = remainder[i + divisor_degree] * lead_inverse
            quotient[i] = factor
            if factor.is_zero():
                continue
            for j, c in enumerate(divisor._coeffs):
                remainder[i + j] = remainder[i + j] - factor * c

        return (
            DensePolynomial(self._field, quotient),
            DensePolynomial(self._field, remainder[:divisor_degree]),
        )

    def __floordiv__(self, divisor):
        return divmod(self, divisor)[0]

    def __mod__(self, divisor):
        return divmod(self, divisor)[1]

    def monic(self) -> "DensePolynomial":
        """Scale so that the leading coefficient is one; zero stays zero."""
        if self.is_zero():
            return self
        inverse = self.leading_coefficient.invert()
        return DensePolynomial(self._field, [c * inverse for c in self._coeffs])

    def gcd(self, other: "DensePolynomial") -> "DensePolynomial":
        """Monic greatest common divisor (zero if both are zero)."""
        a, b = self, self._coerce(other)
        while not b.is_zero():
            a, b = b, a % b
        return a.monic()

    def derivative(self) -> "DensePolynomial":
        return DensePolynomial(
            self._field, [c.scale(i) for i, c in enumerate(self._coeffs)][1:]
        )

    # comparison and display

    def __eq__(self, other):
        if isinstance(other, DensePolynomial):
            return self._field == other._field and self._coeffs == other._coeffs
        if isinstance(other, (int, FieldElement)):
            return len(self._coeffs) <= 1 and self.coeff(0) == other
        return NotImplemented

    def __hash__(self):
        # constants hash like the scalar they equal
        if len(self._coeffs) <= 1:
            return hash(self.coeff(0))
        return hash((self._field, self._coeffs))

    def __len__(self):
        return len(self._coeffs)

    def __repr__(self):
        return f"DensePolynomial({self._field!r}, [{', '.join(str(c) for c in self._coeffs)}])"

    def __str__(self):
        terms = []
        for degree in range(len(self._coeffs) - 1, -1, -1):
            coeff = self._coeffs[degree]
            if coeff.is_zero():
                continue
            if degree == 0:
                terms.append(str(coeff))
                continue
            prefix = "" if coeff.is_one() else str(coeff)
            terms.append(f"{prefix}x" if degree == 1 else f"{prefix}x^{degree}")
        return " + ".join(terms) if terms else "0"
