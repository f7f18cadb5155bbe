#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Arbitrary-precision integer backend.

IntegerBackend is the arithmetic interface the curve and signature code
depends on; PythonIntegerBackend implements it on top of the native int.
A backend is chosen by configuration (see BACKENDS),
constructed once, and passed to the components that need it.

Every public backend method funnels its operands through the
number classifier: ints go through untouched, strings are parsed,
and unknown formats raise InvalidNumberFormat.

Modular square root and inverse implementations are originally from
https://en.wikibooks.org/wiki/Algorithm_Implementation/Mathematics/Extended_Euclidean_algorithm
and
https://codereview.stackexchange.com/questions/43210/tonelli-shanks-algorithm-implementation-of-prime-modular-square-root/43267
"""

import math
from abc import ABC, abstractmethod
from typing import Dict, Tuple, Type

from koblitz.alias import Integer
from koblitz.exceptions import ArithmeticDomainError, KoblitzValueError
from koblitz.number import int_from_number
from koblitz.utils import int_repr


def xgcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (g, x, y) such that a*x + b*y = g = gcd(a, b).

    based on Extended Euclidean Algorithm, see
    https://en.wikibooks.org/wiki/Algorithm_Implementation/Mathematics/Extended_Euclidean_algorithm
    """

    x0, x1, y0, y1 = 0, 1, 1, 0
    while a != 0:
        q, b, a = b // a, a, b % a
        y0, y1 = y1, y0 - q * y1
        x0, x1 = x1, x0 - q * x1
    return b, x0, y0


def legendre_symbol(a: int, p: int) -> int:
    """Compute the Legendre symbol a|p using Euler's criterion.

    p is a prime, a is relatively prime to p (if p divides a,
    then a|p = 0).
    It returns 1 if a has a square root modulo p, -1 otherwise.
    """

    ls = pow(a, p >> 1, p)
    return -1 if ls == p - 1 else ls


def _no_root(a: int, p: int) -> ArithmeticDomainError:
    err_msg = f"no root for {int_repr(a)} mod {int_repr(p)}"
    return ArithmeticDomainError(err_msg, a)


def tonelli(a: int, p: int) -> int:
    """Return a quadratic residue (mod p) of a; p must be a prime.

    The Tonelli-Shanks algorithm is used.
    """

    a %= p
    if a == 0 or p == 2:
        return a

    # Check solution existence for an odd prime p
    if legendre_symbol(a, p) != 1:
        raise _no_root(a, p)

    # Factor p-1 on the form q * 2^s (with q odd)
    q, s = p - 1, 0
    while q & 1 == 0:
        s += 1
        q >>= 1
    if s == 1:
        return pow(a, (p + 1) // 4, p)

    # Select a z which is a quadratic non residue modulo p
    z = 1
    while legendre_symbol(z, p) != -1:
        z += 1
    c = pow(z, q, p)
    r = pow(a, (q + 1) // 2, p)
    t = pow(a, q, p)
    while t != 1:
        # Find the lowest i such that t^(2^i) = 1
        t2i = t
        for i in range(1, s):
            t2i = t2i * t2i % p
            if t2i == 1:
                # Update next value to iterate
                b = pow(c, 1 << (s - i - 1), p)
                r = (r * b) % p
                c = (b * b) % p
                t = (t * c) % p
                s = i
                break

    return r


def mod_sqrt(a: int, p: int) -> int:
    """Return a quadratic residue (mod p) of a; p must be a prime.

    Solve the equation:
        x^2 = a mod p

    and return x. Note that p - x is also a root.

    If a simple solution is not available for p,
    then the Tonelli-Shanks algorithm is used.
    """

    a %= p

    if p % 4 == 3:  # secp256k1 and secp192k1 case
        # inverse candidate is pow(a, (p + 1) // 4, p)
        r = pow(a, (p >> 2) + 1, p)
    elif p % 8 == 5:
        # inverse candidate is pow(a, (p + 3) // 8, p)
        r = pow(a, (p >> 3) + 1, p)
        if r * r % p == a:
            return r
        # another inverse candidate
        r = r * pow(2, p >> 2, p) % p
    else:
        return tonelli(a, p)

    if r * r % p != a:
        raise _no_root(a, p)
    return r


class IntegerBackend(ABC):
    """Arbitrary-precision integer arithmetic interface.

    Operands can be provided in any format accepted by
    koblitz.number.int_from_number; results are always ints.
    """

    name = ""

    @abstractmethod
    def add(self, a: Integer, b: Integer) -> int:
        ...

    @abstractmethod
    def sub(self, a: Integer, b: Integer) -> int:
        ...

    @abstractmethod
    def mul(self, a: Integer, b: Integer) -> int:
        ...

    @abstractmethod
    def div(self, a: Integer, b: Integer) -> int:
        "Return the floor division of a by b."

    @abstractmethod
    def mod(self, a: Integer, m: Integer) -> int:
        "Return a mod m in the range [0, m-1], also for negative a."

    @abstractmethod
    def pow(self, base: Integer, exp: Integer) -> int:
        ...

    @abstractmethod
    def powmod(self, base: Integer, exp: Integer, m: Integer) -> int:
        ...

    @abstractmethod
    def invmod(self, a: Integer, m: Integer) -> int:
        "Return the inverse of a (mod m); fail if a and m are not coprime."

    @abstractmethod
    def sqrt(self, a: Integer) -> int:
        "Return the integer square root of a, i.e. floor(sqrt(a))."

    @abstractmethod
    def sqrtmod(self, a: Integer, p: Integer) -> int:
        "Return a square root of a (mod p), p being a prime."

    @abstractmethod
    def compare(self, a: Integer, b: Integer) -> int:
        "Return -1, 0, or 1 if a is less than, equal to, or greater than b."


def _positive_modulus(m: int) -> int:
    if m < 1:
        raise ArithmeticDomainError(f"invalid modulus: {int_repr(m)}", m)
    return m


class PythonIntegerBackend(IntegerBackend):
    "Integer backend using the native Python int."

    name = "python"

    def add(self, a: Integer, b: Integer) -> int:
        return int_from_number(a) + int_from_number(b)

    def sub(self, a: Integer, b: Integer) -> int:
        return int_from_number(a) - int_from_number(b)

    def mul(self, a: Integer, b: Integer) -> int:
        return int_from_number(a) * int_from_number(b)

    def div(self, a: Integer, b: Integer) -> int:
        b = int_from_number(b)
        if b == 0:
            raise ArithmeticDomainError("division by zero", b)
        return int_from_number(a) // b

    def mod(self, a: Integer, m: Integer) -> int:
        m = _positive_modulus(int_from_number(m))
        return int_from_number(a) % m

    def pow(self, base: Integer, exp: Integer) -> int:
        exp = int_from_number(exp)
        if exp < 0:
            raise ArithmeticDomainError(f"negative exponent: {exp}", exp)
        return int_from_number(base) ** exp

    def powmod(self, base: Integer, exp: Integer, m: Integer) -> int:
        exp = int_from_number(exp)
        if exp < 0:
            raise ArithmeticDomainError(f"negative exponent: {exp}", exp)
        m = _positive_modulus(int_from_number(m))
        return pow(int_from_number(base), exp, m)

    def invmod(self, a: Integer, m: Integer) -> int:
        m = _positive_modulus(int_from_number(m))
        a = int_from_number(a) % m
        g, x, _ = xgcd(a, m)
        if g == 1:
            return x % m
        err_msg = f"no inverse for {int_repr(a)} mod {int_repr(m)}"
        raise ArithmeticDomainError(err_msg, a)

    def sqrt(self, a: Integer) -> int:
        a = int_from_number(a)
        if a < 0:
            raise ArithmeticDomainError(f"negative radicand: {a}", a)
        return math.isqrt(a)

    def sqrtmod(self, a: Integer, p: Integer) -> int:
        p = _positive_modulus(int_from_number(p))
        return mod_sqrt(int_from_number(a), p)

    def compare(self, a: Integer, b: Integer) -> int:
        a = int_from_number(a)
        b = int_from_number(b)
        return (a > b) - (a < b)


BACKENDS: Dict[str, Type[IntegerBackend]] = {
    PythonIntegerBackend.name: PythonIntegerBackend,
}


def backend_from_name(backend_name: str) -> IntegerBackend:
    "Return a new backend instance given its configuration name."

    try:
        return BACKENDS[backend_name]()
    except KeyError as e:
        err_msg = f"unknown integer backend: {backend_name}"
        raise KoblitzValueError(err_msg) from e


# the default backend, constructed once and injected into components
python_backend = PythonIntegerBackend()
