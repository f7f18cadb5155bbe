#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve point arithmetic in affine coordinates.

PointArithmetic composes the curve domain parameters with an
integer backend: every field reduction, inversion, and square root
is delegated to the backend.

The point at infinity INF is any point with y == 0:
no curve handled here has points of order two.

Two scalar multiplication algorithms are available:

* mult_ladder: 'Montgomery ladder', one addition and one doubling
  for each bit of the scalar, whatever its value;
  it is the one to be used with secret scalars
* mult_double_and_add: 'double & add', whose sequence of
  operations depends on the scalar bits;
  it is meant for public scalars (e.g. signature verification)
  and for cross-checking the ladder

Both algorithms must produce the same result for the same input.
"""

from typing import Dict, List, Optional

from koblitz.alias import INF, Integer, Point
from koblitz.backend import IntegerBackend, python_backend
from koblitz.ecc.curve import CURVES, Curve, secp256k1
from koblitz.exceptions import ArithmeticDomainError, InvalidPoint, KoblitzValueError
from koblitz.number import int_from_number
from koblitz.utils import int_repr


class PointArithmetic:
    "Group law and scalar multiplication for the points of a Curve."

    def __init__(self, ec: Curve, backend: IntegerBackend = python_backend) -> None:
        self.ec = ec
        self.backend = backend

        # SEC 1 v.2 3.1.1.2.1 step 7: n*G == INF
        if self._mult_ladder(ec.n, ec.G)[1] != 0:
            err_msg = f"n is not the group order: {int_repr(ec.n)}"
            raise KoblitzValueError(err_msg)

    def __repr__(self) -> str:
        return f"PointArithmetic({self.ec!r}, {type(self.backend).__name__}())"

    # validation

    def is_on_curve(self, Q: Point) -> bool:
        """Return True if the point is on the curve.

        INF is on the curve; an InvalidPoint error is raised
        for malformed points and out of range coordinates.
        """

        if Q is None or len(Q) != 2:
            raise InvalidPoint("point must be a tuple[int, int]", Q)
        x, y = Q
        if y == 0:  # Infinity point in affine coordinates
            return True
        if not 0 <= x < self.ec.p:
            raise InvalidPoint(f"x-coordinate not in 0..p-1: {int_repr(x)}", Q)
        if not 0 < y < self.ec.p:
            raise InvalidPoint(f"y-coordinate not in 1..p-1: {int_repr(y)}", Q)
        return self._y2(x) == self.backend.mod(y * y, self.ec.p)

    def require_on_curve(self, Q: Point) -> None:
        """Require the input curve Point to be on the curve.

        An InvalidPoint error is raised if not.
        """

        if not self.is_on_curve(Q):
            raise InvalidPoint("point not on curve", Q)

    # y-coordinate recovery

    def _y2(self, x: int) -> int:
        # skipping a crucial check here:
        # if sqrt(y*y) does not exist, then x is not valid.
        # This is a good reason to keep this method private
        return self.backend.mod((x * x + self.ec.a) * x + self.ec.b, self.ec.p)

    def y(self, x: int) -> int:
        """Return the y coordinate from x, as in (x, y)."""

        if not 0 <= x < self.ec.p:
            err_msg = f"x-coordinate not in 0..p-1: {int_repr(x)}"
            raise InvalidPoint(err_msg, x)
        try:
            return self.backend.sqrtmod(self._y2(x), self.ec.p)
        except ArithmeticDomainError as e:
            raise InvalidPoint(f"invalid x-coordinate: {int_repr(x)}", x) from e

    def y_odd_even(self, x: int, odd: int) -> int:
        """Return the odd/even affine y-coordinate associated to x."""

        root = self.y(x)
        # switch even/odd root as needed (XORing the conditions)
        return self.ec.p - root if root % 2 != odd else root

    # group law

    def negate(self, Q: Point) -> Point:
        """Return the opposite point.

        The input point is not checked to be on the curve.
        """

        # mod p is required to account for INF (i.e. Q[1]==0)
        # so that negate(INF) = INF
        return Q[0], self.backend.mod(self.ec.p - Q[1], self.ec.p)

    def _add(self, P: Point, Q: Point) -> Point:
        # points are assumed to be on curve

        if P[1] == 0:  # Infinity point in affine coordinates
            return Q
        if Q[1] == 0:  # Infinity point in affine coordinates
            return P

        if P[0] == Q[0]:
            if P[1] == Q[1]:
                return self._double(P)
            # opposite points
            return INF

        bn = self.backend
        p = self.ec.p
        lam = bn.mod((P[1] - Q[1]) * bn.invmod(P[0] - Q[0], p), p)
        x = bn.mod(lam * lam - P[0] - Q[0], p)
        y = bn.mod(lam * (P[0] - x) - P[1], p)
        return x, y

    def _double(self, P: Point) -> Point:
        # point is assumed to be on curve

        if P[1] == 0:  # Infinity point in affine coordinates
            return INF

        bn = self.backend
        p = self.ec.p
        lam = bn.mod((3 * P[0] * P[0] + self.ec.a) * bn.invmod(2 * P[1], p), p)
        x = bn.mod(lam * lam - 2 * P[0], p)
        y = bn.mod(lam * (P[0] - x) - P[1], p)
        return x, y

    def add(self, P: Point, Q: Point) -> Point:
        """Return the sum of two points.

        The input points must be on the curve.
        """

        self.require_on_curve(P)
        self.require_on_curve(Q)
        return self._add(P, Q)

    def double(self, P: Point) -> Point:
        """Return the double of a point.

        The input point must be on the curve.
        """

        self.require_on_curve(P)
        return self._double(P)

    # scalar multiplication

    def _mult_ladder(self, m: int, Q: Point) -> Point:
        # R[0] is the running result, R[1] = R[0] + Q is an ancillary variable
        R: List[Point] = [INF, Q]
        for i in [int(i) for i in bin(m)[2:]]:
            R[not i] = self._add(R[i], R[not i])
            R[i] = self._double(R[i])
        return R[0]

    def _mult_double_and_add(self, m: int, Q: Point) -> Point:
        R = INF
        # 'left-to-right' binary decomposition of m
        for i in bin(m)[2:]:
            R = self._double(R)
            if i == "1":
                R = self._add(R, Q)
        return R

    def _scalar(self, m: Integer) -> int:
        m = int_from_number(m)
        if m < 0:
            raise KoblitzValueError(f"negative m: {hex(m)}")
        return m

    def mult_ladder(self, m: Integer, Q: Optional[Point] = None) -> Point:
        """Scalar multiplication using 'Montgomery ladder' algorithm.

        This implementation uses
        'Montgomery ladder' algorithm,
        'left-to-right' binary decomposition of the m coefficient,
        affine coordinates.

        It performs the same sequence of operations
        whatever the scalar bits are,
        as it prevents branch prediction avoiding any if;
        on the other hand, Python big integers
        do not provide constant-time operations.

        The input point, G by default, must be on the curve;
        m must be non-negative and is not reduced mod n.
        """

        Q = self.ec.G if Q is None else Q
        self.require_on_curve(Q)
        return self._mult_ladder(self._scalar(m), Q)

    def mult_double_and_add(self, m: Integer, Q: Optional[Point] = None) -> Point:
        """Scalar multiplication using 'double & add' algorithm.

        This implementation uses
        'double & add' algorithm,
        'left-to-right' binary decomposition of the m coefficient,
        affine coordinates.

        The sequence of operations depends on the scalar bits:
        use it with public scalars only.

        The input point, G by default, must be on the curve;
        m must be non-negative and is not reduced mod n.
        """

        Q = self.ec.G if Q is None else Q
        self.require_on_curve(Q)
        return self._mult_double_and_add(self._scalar(m), Q)

    def double_mult(self, u: Integer, H: Point, v: Integer, Q: Point) -> Point:
        """Return u*H + v*Q, using 'double & add' for both products.

        Scalars are assumed to be public.
        """

        R1 = self.mult_double_and_add(u, H)
        R2 = self.mult_double_and_add(v, Q)
        return self._add(R1, R2)


ARITHMETICS: Dict[str, PointArithmetic] = {
    name: PointArithmetic(ec) for name, ec in CURVES.items()
}


def point_arithmetic(
    ec: Curve = secp256k1, backend: IntegerBackend = python_backend
) -> PointArithmetic:
    """Return the PointArithmetic of a curve with the given backend.

    The default backend instances for the named curves
    are built once at import time.
    """

    if backend is python_backend and ec.name in ARITHMETICS:
        if ARITHMETICS[ec.name].ec == ec:
            return ARITHMETICS[ec.name]
    return PointArithmetic(ec, backend)


def mult(m: Integer, Q: Optional[Point] = None, ec: Curve = secp256k1) -> Point:
    "Montgomery ladder scalar multiplication m*Q (Q=G by default)."
    return point_arithmetic(ec).mult_ladder(m, Q)


def double_and_add(
    m: Integer, Q: Optional[Point] = None, ec: Curve = secp256k1
) -> Point:
    "'double & add' scalar multiplication m*Q (Q=G by default)."
    return point_arithmetic(ec).mult_double_and_add(m, Q)
