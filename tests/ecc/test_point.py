#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `koblitz.ecc.point` module."

import secrets
from typing import Dict

import pytest

from koblitz.alias import INF, Integer
from koblitz.backend import PythonIntegerBackend, backend_from_name
from koblitz.ecc.curve import CURVES, Curve, secp192k1, secp256k1
from koblitz.ecc.point import (
    ARITHMETICS,
    PointArithmetic,
    double_and_add,
    mult,
    point_arithmetic,
)
from koblitz.exceptions import InvalidPoint, KoblitzValueError

# test curves: very low cardinality
low_card_curves: Dict[str, Curve] = {}
# 13 % 4 = 1; 13 % 8 = 5
low_card_curves["ec13_11"] = Curve(13, 7, 6, (1, 1), 11, 1, False)
low_card_curves["ec13_19"] = Curve(13, 0, 2, (1, 9), 19, 1, False)
# 17 % 4 = 1; 17 % 8 = 1
low_card_curves["ec17_13"] = Curve(17, 6, 8, (0, 12), 13, 2, False)
low_card_curves["ec17_23"] = Curve(17, 3, 5, (1, 14), 23, 1, False)
# 19 % 4 = 3; 19 % 8 = 3
low_card_curves["ec19_13"] = Curve(19, 0, 2, (4, 16), 13, 2, False)
low_card_curves["ec19_23"] = Curve(19, 2, 9, (0, 16), 23, 1, False)
# 23 % 4 = 3; 23 % 8 = 7
low_card_curves["ec23_19"] = Curve(23, 9, 7, (5, 4), 19, 1, False)
low_card_curves["ec23_31"] = Curve(23, 5, 1, (0, 1), 31, 1, False)

G = secp256k1.G
G2 = (
    0xC6047F9441ED7D6D3045406E95C07CD85C778E4B8CEF3CA7ABAC09B95C709EE5,
    0x1AE168FEA63DC339A3C58419466CEAEEF7F632653266D0E1236431A950CFE52A,
)
G3 = (
    0xF9308A019258C31049344F85F89D5229B531C845836F99B08601F113BCE036F9,
    0x388F7B0F632DE8140FE337E62A37F3566500A99934C2231B6CB9FD7584B8E672,
)


class CountingBackend(PythonIntegerBackend):
    "Python backend counting the modular inversions."

    def __init__(self) -> None:
        super().__init__()
        self.invmod_calls = 0

    def invmod(self, a: Integer, m: Integer) -> int:
        self.invmod_calls += 1
        return super().invmod(a, m)


def test_is_on_curve() -> None:

    arith = point_arithmetic(secp256k1)
    assert arith.is_on_curve(G)
    assert arith.is_on_curve(G2)
    assert arith.is_on_curve(INF)
    assert arith.is_on_curve((G[0], secp256k1.p - G[1]))
    assert not arith.is_on_curve((G[0], G[1] + 1))

    err_msg = "point must be a tuple"
    with pytest.raises(InvalidPoint, match=err_msg):
        arith.is_on_curve((1, 2, 3))  # type: ignore
    with pytest.raises(InvalidPoint, match=err_msg):
        arith.is_on_curve(None)  # type: ignore

    with pytest.raises(InvalidPoint, match="x-coordinate not in 0..p-1: "):
        arith.is_on_curve((-1, G[1]))
    with pytest.raises(InvalidPoint, match="x-coordinate not in 0..p-1: "):
        arith.is_on_curve((secp256k1.p, G[1]))
    with pytest.raises(InvalidPoint, match="y-coordinate not in 1..p-1: "):
        arith.is_on_curve((G[0], secp256k1.p))

    arith.require_on_curve(G)
    with pytest.raises(InvalidPoint, match="point not on curve"):
        arith.require_on_curve((G[0], G[1] + 1))


def test_add_double() -> None:

    arith = point_arithmetic(secp256k1)
    assert arith.double(G) == G2
    assert arith.add(G, G) == G2
    assert arith.add(G2, G) == G3
    assert arith.add(G, G2) == G3
    assert arith.add(G, arith.negate(G)) == INF
    assert arith.add(INF, G) == G
    assert arith.add(G, INF) == G
    assert arith.add(INF, INF) == INF
    assert arith.double(INF) == INF
    assert arith.negate(INF) == INF
    assert arith.negate(arith.negate(G)) == G

    with pytest.raises(InvalidPoint, match="point not on curve"):
        arith.add(G, (G[0], G[1] + 1))
    with pytest.raises(InvalidPoint, match="point not on curve"):
        arith.double((G[0], G[1] + 1))


def test_y() -> None:

    for ec in list(low_card_curves.values()) + list(CURVES.values()):
        arith = point_arithmetic(ec)
        x, y = ec.G
        assert arith.y(x) in (y, ec.p - y)
        assert arith.y_odd_even(x, y % 2) == y
        assert arith.y_odd_even(x, 1 - y % 2) == ec.p - y

        with pytest.raises(InvalidPoint, match="x-coordinate not in 0..p-1: "):
            arith.y(ec.p)

    ec = low_card_curves["ec23_31"]
    arith = point_arithmetic(ec)
    x_with_root = {
        x for x in range(ec.p) for y in range(1, ec.p) if arith.is_on_curve((x, y))
    }
    for x in range(ec.p):
        if x in x_with_root:
            assert arith.is_on_curve((x, arith.y(x)))
        else:
            with pytest.raises(InvalidPoint, match="invalid x-coordinate: "):
                arith.y(x)


def test_mult_vectors() -> None:

    assert mult(0) == INF
    assert mult(1) == G
    assert mult(2) == G2
    assert mult("0x03") == G3
    assert double_and_add(2) == G2
    assert double_and_add("3") == G3
    assert mult(secp256k1.n) == INF
    assert double_and_add(secp256k1.n) == INF
    assert mult(secp256k1.n - 1) == point_arithmetic().negate(G)
    assert mult(secp256k1.n + 2) == G2
    assert mult(3, G) == G3
    assert mult(2, G2) == double_and_add(4)

    Q = (
        0xCABC3692F1F7BA75A8572DC5D270B35BCC00650534F6E5ECD6338E55355454D5,
        0xAFA7746C07A124CB59E190F00955952A7329591B805C4D9D04D34ABE8A803A74,
    )
    assert mult(12345678) == Q
    assert double_and_add(12345678) == Q

    G2_192 = (
        0xF091CF6331B1747684F5D2549CD1D4B3A8BED93B94F93CB6,
        0xFD7AF42E1E7565A02E6268661C5E42E603DA2D98A18F2ED5,
    )
    assert mult(2, ec=secp192k1) == G2_192
    assert double_and_add(2, ec=secp192k1) == G2_192
    assert point_arithmetic(secp192k1).double(secp192k1.G) == G2_192


def test_mult_exceptions() -> None:

    with pytest.raises(KoblitzValueError, match="negative m: "):
        mult(-1)
    with pytest.raises(KoblitzValueError, match="negative m: "):
        double_and_add(-1)
    with pytest.raises(InvalidPoint, match="point not on curve"):
        mult(2, (G[0], G[1] + 1))
    with pytest.raises(InvalidPoint, match="point not on curve"):
        double_and_add(2, (G[0], G[1] + 1))


def test_ladder_and_double_and_add_low_card() -> None:

    for ec in low_card_curves.values():
        arith = PointArithmetic(ec)
        Q = ec.G
        for _ in range(ec.n):
            assert arith.is_on_curve(Q)
            for m in range(2 * ec.n + 1):
                R = arith.mult_ladder(m, Q)
                assert R == arith.mult_double_and_add(m, Q)
                assert arith.is_on_curve(R)
            Q = arith.add(Q, ec.G)
        # n*G == INF
        assert arith.mult_ladder(ec.n) == INF
        assert arith.mult_double_and_add(ec.n) == INF


def test_ladder_and_double_and_add() -> None:

    for ec in CURVES.values():
        arith = point_arithmetic(ec)
        for _ in range(8):
            m = secrets.randbelow(ec.n)
            assert arith.mult_ladder(m) == arith.mult_double_and_add(m)
            Q = arith.mult_ladder(m)
            assert arith.is_on_curve(Q)
            # (m + 1)*G == m*G + G
            assert arith.mult_ladder(m + 1) == arith.add(Q, ec.G)


def test_ladder_regular_operation_sequence() -> None:

    backend = CountingBackend()
    arith = PointArithmetic(secp256k1, backend)

    # same bit length, different Hamming weight
    m1 = 2 ** 255 + 1
    m2 = 2 ** 256 - 2 ** 200 - 12345
    assert m1.bit_length() == m2.bit_length() == 256
    assert m2 < secp256k1.n

    counts = []
    for m in (m1, m2):
        backend.invmod_calls = 0
        arith.mult_ladder(m)
        counts.append(backend.invmod_calls)
    # one doubling and one addition for each bit
    assert counts[0] == counts[1] == 2 * 256 - 1

    counts = []
    for m in (m1, m2):
        backend.invmod_calls = 0
        arith.mult_double_and_add(m)
        counts.append(backend.invmod_calls)
    assert counts[0] != counts[1]


def test_double_mult() -> None:

    arith = point_arithmetic(secp256k1)
    for u, v in ((0, 0), (1, 0), (0, 1), (1, 1), (2, 3), (secp256k1.n - 1, 1)):
        R = arith.double_mult(u, G, v, G2)
        assert R == arith.add(mult(u), mult(v, G2))
    assert arith.double_mult(1, G, 1, arith.negate(G)) == INF


def test_backend_composition() -> None:

    ec = low_card_curves["ec23_31"]
    arith = PointArithmetic(ec, backend_from_name("python"))
    assert isinstance(arith.backend, PythonIntegerBackend)
    assert arith.ec == ec
    assert "PythonIntegerBackend" in repr(arith)

    backend = CountingBackend()
    arith = PointArithmetic(secp256k1, backend)
    backend.invmod_calls = 0
    assert arith.double(G) == G2
    assert backend.invmod_calls == 1


def test_point_arithmetic_registry() -> None:

    assert set(ARITHMETICS) == set(CURVES)
    for name, ec in CURVES.items():
        assert point_arithmetic(ec) is ARITHMETICS[name]
    ec = low_card_curves["ec13_11"]
    assert point_arithmetic(ec).ec == ec
    assert point_arithmetic(ec) is not point_arithmetic(ec)

    # injected backends are never replaced by the default one
    backend = CountingBackend()
    for ec in CURVES.values():
        arith = point_arithmetic(ec, backend)
        assert arith.backend is backend
        assert arith.mult_ladder(2) == point_arithmetic(ec).mult_ladder(2)
        assert backend.invmod_calls > 0

    # 17 is prime and within the Hasse bound, but it is not the order of G
    ec = Curve(13, 0, 2, (1, 9), 17, 1, False)
    with pytest.raises(KoblitzValueError, match="n is not the group order: "):
        PointArithmetic(ec)
