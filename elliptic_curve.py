"""
Elliptic curves in general Weierstrass form over a field.

    E : y^2 + a1 xy + a3 y = x^3 + a2 x^2 + a4 x + a6

Derived quantities follow Silverman, The Arithmetic of Elliptic Curves,
2nd ed., III.1; they are recomputed on every call. Points are affine pairs
or the point at infinity, which is the identity of the group law.
"""
from dataclasses import dataclass

from double_and_add import double_and_add
from rings import Field, FieldElement


@dataclass(frozen=True)
class Point:
    """Affine point (x, y); both coordinates None for the point at infinity."""
    x: FieldElement | None = None
    y: FieldElement | None = None

    @property
    def is_infinity(self) -> bool:
        return self.x is None

    def __str__(self):
        if self.is_infinity:
            return "O"
        return f"({self.x}, {self.y})"


INFINITY = Point()


class WeierstrassCurve:

    __slots__ = ("field", "a1", "a2", "a3", "a4", "a6")

    def __init__(self, field: Field, a1=0, a2=0, a3=0, a4=0, a6=0):
        self.field = field
        self.a1 = field(a1)
        self.a2 = field(a2)
        self.a3 = field(a3)
        self.a4 = field(a4)
        self.a6 = field(a6)

    @classmethod
    def from_j_invariant(cls, j: FieldElement) -> "WeierstrassCurve":
        """
        A curve over the parent field of j whose j-invariant is j.

        j = 0:     y^2 + y = x^3
        j = 1728:  y^2 = x^3 + x
        otherwise: y^2 + xy = x^3 - 36t x - t  with t = 1 / (j - 1728)
        """
        field = j.parent
        if j.is_zero():
            return cls(field, a3=1)
        j_1728 = field.integer_embed(1728)
        if j == j_1728:
            return cls(field, a4=1)
        t = (j - j_1728).invert()
        return cls(field, a1=1, a4=-t.scale(36), a6=-t)

    @property
    def coefficients(self) -> tuple[FieldElement, ...]:
        return (self.a1, self.a2, self.a3, self.a4, self.a6)

    def b2(self) -> FieldElement:
        return self.a1.square() + self.a2.scale(4)

    def b4(self) -> FieldElement:
        return self.a4.scale(2) + self.a1 * self.a3

    def b6(self) -> FieldElement:
        return self.a3.square() + self.a6.scale(4)

    def b8(self) -> FieldElement:
        return (
            self.a1.square() * self.a6
            + (self.a2 * self.a6).scale(4)
            - self.a1 * self.a3 * self.a4
            + self.a2 * self.a3.square()
            - self.a4.square()
        )

    def c4(self) -> FieldElement:
        return self.b2().square() - self.b4().scale(24)

    def c6(self) -> FieldElement:
        b2 = self.b2()
        return -b2.positive_pow(3) + (b2 * self.b4()).scale(36) - self.b6().scale(216)

    def discriminant(self) -> FieldElement:
        b2, b4, b6, b8 = self.b2(), self.b4(), self.b6(), self.b8()
        return (
            -b2.square() * b8
            - b4.positive_pow(3).scale(8)
            - b6.square().scale(27)
            + (b2 * b4 * b6).scale(9)
        )

    def is_singular(self) -> bool:
        return self.discriminant().is_zero()

    def has_node(self) -> bool:
        return self.is_singular() and not self.c4().is_zero()

    def has_cusp(self) -> bool:
        return self.is_singular() and self.c4().is_zero()

    def j_invariant(self) -> FieldElement:
        discriminant = self.discriminant()
        if discriminant.is_zero():
            raise ValueError("A curve of zero discriminant has no j-invariant")
        return self.c4().positive_pow(3) * discriminant.invert()

    def is_on_curve(self, p: Point) -> bool:
        if p.is_infinity:
            return True
        x, y = p.x, p.y
        lhs = y.square() + self.a1 * x * y + self.a3 * y
        rhs = x.positive_pow(3) + self.a2 * x.square() + self.a4 * x + self.a6
        return lhs == rhs

    def point(self, x, y) -> Point:
        p = Point(self.field(x), self.field(y))
        if not self.is_on_curve(p):
            raise ValueError(f"{p} is not on {self}")
        return p

    def negate(self, p: Point) -> Point:
        if p.is_infinity:
            return INFINITY
        return Point(p.x, -p.y - self.a1 * p.x - self.a3)

    def add(self, p: Point, q: Point) -> Point:
        """Chord-and-tangent addition."""
        if p.is_infinity:
            return q
        if q.is_infinity:
            return p

        x1, y1, x2, y2 = p.x, p.y, q.x, q.y
        if x1 == x2:
            if y1 + y2 + self.a1 * x2 + self.a3 == 0:
                return INFINITY
            # tangent at p
            denominator = y1.scale(2) + self.a1 * x1 + self.a3
            slope = (x1.square().scale(3) + (self.a2 * x1).scale(2) + self.a4 - self.a1 * y1) / denominator
            intercept = (-x1.positive_pow(3) + self.a4 * x1 + self.a6.scale(2) - self.a3 * y1) / denominator
        else:
            denominator = x2 - x1
            slope = (y2 - y1) / denominator
            intercept = (y1 * x2 - y2 * x1) / denominator

        x3 = slope.square() + self.a1 * slope - self.a2 - x1 - x2
        y3 = -(slope + self.a1) * x3 - intercept - self.a3
        return Point(x3, y3)

    def double(self, p: Point) -> Point:
        return self.add(p, p)

    def multiply(self, p: Point, k: int) -> Point:
        """[k]p; negative k multiplies the negation."""
        return double_and_add(p, k, self.add, lambda: INFINITY, self.negate)

    def __eq__(self, other):
        if not isinstance(other, WeierstrassCurve):
            return NotImplemented
        return self.field == other.field and self.coefficients == other.coefficients

    def __hash__(self):
        return hash((self.field, self.coefficients))

    def __repr__(self):
        coeffs = ", ".join(str(c) for c in self.coefficients)
        return f"WeierstrassCurve({self.field!r}, {coeffs})"

    def __str__(self):
        return (
            f"y^2 + {self.a1}xy + {self.a3}y = x^3 + {self.a2}x^2 + {self.a4}x + {self.a6}"
        )
