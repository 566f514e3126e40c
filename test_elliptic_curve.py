"""Tests for Weierstrass curves over GF(4999)."""

import random
import unittest

from elliptic_curve import INFINITY, Point, WeierstrassCurve
from rings import PrimeField

P = 4999  # P % 4 == 3, so square roots are a single exponentiation
F = PrimeField(P)


def square_root(value):
    """A square root of value in F, or None for non-residues."""
    root = F(pow(value.value, (P + 1) // 4, P))
    return root if root.square() == value else None


def curve_points(curve, count, rng):
    """Affine points found by solving y^2 + (a1 x + a3) y - rhs(x) = 0."""
    points = []
    while len(points) < count:
        x = F.random(rng)
        linear = curve.a1 * x + curve.a3
        rhs = x.positive_pow(3) + curve.a2 * x.square() + curve.a4 * x + curve.a6
        root = square_root(linear.square() + rhs.scale(4))
        if root is None:
            continue
        y = (root - linear) / 2
        points.append(curve.point(x, y))
    return points


class TestInvariants(unittest.TestCase):

    def test_short_form_discriminant(self):
        """For y^2 = x^3 + ax + b the discriminant is -16(4a^3 + 27b^2)"""
        curve = WeierstrassCurve(F, a4=2, a6=3)
        self.assertEqual(curve.discriminant(), F(-16 * (4 * 8 + 27 * 9)))
        self.assertEqual(curve.c4(), F(-48 * 2))
        self.assertEqual(curve.c6(), F(-864 * 3))

    def test_c_relation(self):
        """1728 * discriminant = c4^3 - c6^2"""
        rng = random.Random(42)
        for _ in range(50):
            curve = WeierstrassCurve(F, *(F.random(rng) for _ in range(5)))
            self.assertEqual(
                curve.discriminant().scale(1728),
                curve.c4().positive_pow(3) - curve.c6().square(),
            )

    def test_b_relation(self):
        """4 b8 = b2 b6 - b4^2"""
        rng = random.Random(7)
        for _ in range(50):
            curve = WeierstrassCurve(F, *(F.random(rng) for _ in range(5)))
            self.assertEqual(curve.b8().scale(4), curve.b2() * curve.b6() - curve.b4().square())

    def test_node(self):
        # y^2 = x^3 + x^2
        curve = WeierstrassCurve(F, a2=1)
        self.assertTrue(curve.is_singular())
        self.assertTrue(curve.has_node())
        self.assertFalse(curve.has_cusp())

    def test_cusp(self):
        # y^2 = x^3
        curve = WeierstrassCurve(F)
        self.assertTrue(curve.has_cusp())
        self.assertFalse(curve.has_node())

    def test_singular_curve_has_no_j_invariant(self):
        for curve in (WeierstrassCurve(F), WeierstrassCurve(F, a2=1)):
            with self.assertRaises(ValueError):
                curve.j_invariant()

    def test_smooth_curve(self):
        curve = WeierstrassCurve(F, a4=2, a6=3)
        self.assertFalse(curve.is_singular())
        self.assertFalse(curve.has_node())
        self.assertFalse(curve.has_cusp())


class TestJInvariant(unittest.TestCase):

    def test_special_values(self):
        zero_curve = WeierstrassCurve.from_j_invariant(F.zero())
        self.assertEqual(zero_curve.coefficients, (F(0), F(0), F(1), F(0), F(0)))
        self.assertEqual(zero_curve.j_invariant(), F.zero())

        j_1728 = F.integer_embed(1728)
        curve_1728 = WeierstrassCurve.from_j_invariant(j_1728)
        self.assertEqual(curve_1728.coefficients, (F(0), F(0), F(0), F(1), F(0)))
        self.assertEqual(curve_1728.j_invariant(), j_1728)

    def test_round_trip(self):
        rng = random.Random(42)
        special = (F.zero(), F.integer_embed(1728))
        tested = 0
        while tested < 300:
            j = F.random(rng)
            if j in special:
                continue
            curve = WeierstrassCurve.from_j_invariant(j)
            self.assertFalse(curve.is_singular())
            self.assertEqual(curve.j_invariant(), j)
            tested += 1

    def test_round_trip_large_field(self):
        G = PrimeField(2 ** 127 - 1)
        rng = random.Random(3)
        for _ in range(20):
            j = G.random_non_zero(rng)
            self.assertEqual(WeierstrassCurve.from_j_invariant(j).j_invariant(), j)


class TestPoints(unittest.TestCase):

    def setUp(self):
        self.rng = random.Random(42)
        self.curves = [
            WeierstrassCurve(F, a4=2, a6=3),
            WeierstrassCurve.from_j_invariant(F(1234)),
            WeierstrassCurve(F, 1, 2, 3, 4, 5),
        ]

    def test_infinity_is_on_curve(self):
        for curve in self.curves:
            self.assertTrue(curve.is_on_curve(INFINITY))
            self.assertTrue(INFINITY.is_infinity)

    def test_membership(self):
        curve = WeierstrassCurve(F, a4=2, a6=3)
        # 6^2 = 27 + 6 + 3
        self.assertTrue(curve.is_on_curve(Point(F(3), F(6))))
        self.assertTrue(curve.is_on_curve(Point(F(3), F(-6))))
        self.assertFalse(curve.is_on_curve(Point(F(3), F(5))))
        self.assertEqual(curve.point(3, 6), Point(F(3), F(6)))
        with self.assertRaises(ValueError):
            curve.point(0, 0)

    def test_negation(self):
        for curve in self.curves:
            self.assertEqual(curve.negate(INFINITY), INFINITY)
            for p in curve_points(curve, 10, self.rng):
                q = curve.negate(p)
                self.assertTrue(curve.is_on_curve(q))
                self.assertEqual(q.x, p.x)
                self.assertEqual(curve.negate(q), p)

    def test_identity_and_inverse(self):
        for curve in self.curves:
            for p in curve_points(curve, 10, self.rng):
                self.assertEqual(curve.add(p, INFINITY), p)
                self.assertEqual(curve.add(INFINITY, p), p)
                self.assertEqual(curve.add(p, curve.negate(p)), INFINITY)

    def test_closure_and_commutativity(self):
        for curve in self.curves:
            points = curve_points(curve, 12, self.rng)
            for p, q in zip(points, points[1:]):
                s = curve.add(p, q)
                self.assertTrue(curve.is_on_curve(s))
                self.assertEqual(s, curve.add(q, p))
                self.assertTrue(curve.is_on_curve(curve.double(p)))

    def test_associativity(self):
        for curve in self.curves:
            points = curve_points(curve, 9, self.rng)
            for p, q, r in zip(points[0::3], points[1::3], points[2::3]):
                self.assertEqual(
                    curve.add(curve.add(p, q), r),
                    curve.add(p, curve.add(q, r)),
                )

    def test_scalar_multiplication(self):
        for curve in self.curves:
            p = curve_points(curve, 1, self.rng)[0]
            acc = INFINITY
            for k in range(25):
                self.assertEqual(curve.multiply(p, k), acc)
                self.assertEqual(curve.multiply(p, -k), curve.negate(acc))
                acc = curve.add(acc, p)
            self.assertEqual(curve.multiply(p, 2), curve.double(p))

    def test_point_rendering(self):
        self.assertEqual(str(INFINITY), "O")
        self.assertEqual(str(Point(F(1), F(2))), "(1, 2)")


if __name__ == '__main__':
    unittest.main(verbosity=2)
