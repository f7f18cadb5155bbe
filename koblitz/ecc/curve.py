#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve domain parameters.

Curve holds the immutable domain parameters (p, a, b, G, n, h)
of the prime order subgroup generated by G of the points
of the elliptic curve y^2 = x^3 + a*x + b over Fp.

The secp256k1 and secp192k1 Koblitz curves are from SEC 2 v.2:

https://www.secg.org/sec2-v2.pdf
"""

from math import isqrt
from typing import Any, Dict, Tuple

from koblitz.alias import Integer, Point
from koblitz.exceptions import InvalidPoint, KoblitzValueError
from koblitz.number import int_from_number
from koblitz.utils import HEX_THRESHOLD, hex_string, int_repr


def _str(i: int) -> str:
    return hex_string(i) if i > HEX_THRESHOLD else f"{i}"


def _is_probable_prime(i: int) -> bool:
    # Fermat test will do as _probabilistic_ primality test...
    return i > 2 and i % 2 == 1 and pow(2, i - 1, i) == 1


class Curve:
    """Prime order subgroup of the points of an elliptic curve over Fp.

    Parameters are checked according to SEC 1 v.2 3.1.1.2.1,
    except for n*G == INF, which requires point arithmetic
    and is checked by koblitz.ecc.point.PointArithmetic.
    """

    def __init__(
        self,
        p: Integer,
        a: Integer,
        b: Integer,
        G: Point,
        n: Integer,
        h: int,
        weakness_check: bool = True,
        name: str = "",
    ) -> None:

        p = int_from_number(p)
        a = int_from_number(a)
        b = int_from_number(b)
        n = int_from_number(n)

        # 1. check that p is a prime
        if not _is_probable_prime(p):
            raise KoblitzValueError(f"p is not prime: {int_repr(p)}")

        # 2. check that a and b are integers in the interval [0, p−1]
        if not 0 <= a < p:
            raise KoblitzValueError(f"a not in 0..p-1: {int_repr(a)}")
        if not 0 <= b < p:
            raise KoblitzValueError(f"b not in 0..p-1: {int_repr(b)}")

        # 3. check that 4*a^3 + 27*b^2 ≠ 0 (mod p)
        if (4 * a * a * a + 27 * b * b) % p == 0:
            raise KoblitzValueError("zero discriminant")

        # 2. check that xG and yG are integers in the interval [0, p−1]
        # 4. check that yG^2 = xG^3 + a*xG + b (mod p)
        if len(G) != 2:
            raise InvalidPoint("generator must be a tuple[int, int]", G)
        x_G, y_G = int_from_number(G[0]), int_from_number(G[1])
        if y_G == 0:
            raise InvalidPoint("INF point cannot be a generator", G)
        if not (0 <= x_G < p and 0 < y_G < p):
            raise InvalidPoint("generator coordinates not in 0..p-1", G)
        if (y_G * y_G - ((x_G * x_G + a) * x_G + b)) % p != 0:
            raise InvalidPoint("generator is not on the curve", G)

        # 5. check that n is prime
        if not _is_probable_prime(n):
            raise KoblitzValueError(f"n is not prime: {int_repr(n)}")

        # 6. check n and the cofactor h with Hasse theorem
        delta = isqrt(4 * p)
        if h < 2 and not p + 1 - delta <= n <= p + 1 + delta:
            raise KoblitzValueError(f"n not in p+1-delta..p+1+delta: {int_repr(n)}")
        exp_h = (p + 1 + delta) // n
        if h != exp_h:
            raise KoblitzValueError(f"invalid h: {h}, expected {exp_h}")

        # 8. check that n ≠ p and p^i % n ≠ 1 for all 1≤i<100
        if n == p:
            raise KoblitzValueError(f"n=p weak curve: {int_repr(n)}")
        if weakness_check and any(pow(p, i, n) == 1 for i in range(1, 100)):
            raise KoblitzValueError("weak curve")

        self.p = p
        self.a = a
        self.b = b
        self.G: Point = (x_G, y_G)
        self.n = n
        self.h = h
        self.name = name

        self.plen = p.bit_length()
        self.p_size = (self.plen + 7) // 8
        self.nlen = n.bit_length()
        self.n_size = (self.nlen + 7) // 8

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Curve):
            return NotImplemented
        return self._params() == other._params()

    def __hash__(self) -> int:
        return hash(self._params())

    def _params(self) -> Tuple[int, int, int, Point, int, int]:
        return self.p, self.a, self.b, self.G, self.n, self.h

    def __str__(self) -> str:
        result = f"Curve {self.name}".rstrip()
        result += f"\n p   = {_str(self.p)}"
        result += f"\n a   = {_str(self.a)}"
        result += f"\n b   = {_str(self.b)}"
        result += f"\n x_G = {_str(self.G[0])}"
        result += f"\n y_G = {_str(self.G[1])}"
        result += f"\n n   = {_str(self.n)}"
        result += f"\n h   = {self.h}"
        return result

    def __repr__(self) -> str:
        result = "Curve("
        result += ", ".join(int_repr(v) for v in (self.p, self.a, self.b))
        result += f", ({int_repr(self.G[0])}, {int_repr(self.G[1])})"
        result += f", {int_repr(self.n)}, {self.h}"
        if self.name:
            result += f", name='{self.name}'"
        return result + ")"


# SEC 2 v.2 curves over Fp, with a = 0 (Koblitz curves)
secp192k1 = Curve(
    p="0xfffffffffffffffffffffffffffffffffffffffeffffee37",
    a=0,
    b=3,
    G=(
        0xDB4FF10EC057E9AE26B07D0280B7F4341DA5D1B1EAE06C7D,
        0x9B2F2F6D9C5628A7844163D015BE86344082AA88D95E2F9D,
    ),
    n="0xfffffffffffffffffffffffe26f2fc170f69466a74defd8d",
    h=1,
    name="secp192k1",
)

secp256k1 = Curve(
    p="0xfffffffffffffffffffffffffffffffffffffffffffffffffffffffefffffc2f",
    a=0,
    b=7,
    G=(
        0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
        0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    ),
    n="0xfffffffffffffffffffffffffffffffebaaedce6af48a03bbfd25e8cd0364141",
    h=1,
    name="secp256k1",
)

CURVES: Dict[str, Curve] = {ec.name: ec for ec in (secp192k1, secp256k1)}
