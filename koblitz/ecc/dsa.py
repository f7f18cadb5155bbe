#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic Curve Digital Signature Algorithm (ECDSA).

Implemented according to SEC 1 v.2:

http://www.secg.org/sec1-v2.pdf

The message is hashed with SHA256; the nonce is a fresh
secure random scalar for each signature, unless explicitly provided.
"""

import logging
from typing import Optional, Union

from koblitz.alias import Octets, Point, String
from koblitz.backend import IntegerBackend, python_backend
from koblitz.ecc.curve import Curve, secp256k1
from koblitz.ecc.der import Sig
from koblitz.ecc.key import PubKey, point_from_pub_key
from koblitz.ecc.point import point_arithmetic
from koblitz.entropy import MAX_ATTEMPTS, RandBytes, random_scalar, secure_random_bytes
from koblitz.exceptions import KoblitzRuntimeError, KoblitzValueError
from koblitz.hashes import reduce_to_hlen
from koblitz.to_prv_key import PrvKey, int_from_prv_key
from koblitz.utils import int_from_bits

_LOGGER = logging.getLogger(__name__)


def challenge(msg: String, ec: Curve = secp256k1) -> int:
    "Return the message challenge as scalar, SEC 1 v.2 section 4.1.3 (4, 5)."

    # leftmost ec.nlen bits %= ec.n
    return int_from_bits(reduce_to_hlen(msg), ec.nlen) % ec.n


def _sign_(
    c: int,
    q: int,
    nonce: int,
    ec: Curve = secp256k1,
    backend: IntegerBackend = python_backend,
) -> Sig:
    # Private function for testing purposes: it allows to explore all
    # possible value of the challenge c (for low-cardinality curves).
    # It assume that c is in [0, n-1], while q and nonce are in [1, n-1]
    # Steps numbering follows SEC 1 v.2 section 4.1.3

    bn = backend
    # the nonce is secret: Montgomery ladder
    K = point_arithmetic(ec, bn).mult_ladder(nonce)  # 1

    # mod n makes it a scalar
    r = bn.mod(K[0], ec.n)  # 2, 3
    if r == 0:  # r≠0 required as it multiplies the public key
        raise KoblitzRuntimeError("failed to sign: r = 0")

    s = bn.mod(bn.invmod(nonce, ec.n) * (c + r * q), ec.n)  # 6
    if s == 0:  # s≠0 required as verify will need the inverse of s
        raise KoblitzRuntimeError("failed to sign: s = 0")

    return Sig(r, s, ec)


def sign(
    msg: String,
    prv_key: PrvKey,
    nonce: Optional[PrvKey] = None,
    ec: Curve = secp256k1,
    randbytes: RandBytes = secure_random_bytes,
    backend: IntegerBackend = python_backend,
) -> Sig:
    """ECDSA signature.

    Implemented according to SEC 1 v.2
    The message msg (text or bytes) is first processed by SHA256,
    yielding the challenge c.

    If the nonce is not provided, a fresh random one is drawn
    in the open range (1, n-1); if r or s turn out to be zero,
    a new nonce is drawn, up to MAX_ATTEMPTS times.
    A provided nonce is used as it is and never replaced.
    """

    # the secret key q: an integer in the range 1..n-1.
    # SEC 1 v.2 section 3.2.1
    q = int_from_prv_key(prv_key, ec)

    # the challenge
    c = challenge(msg, ec)  # 4, 5

    if nonce is not None:
        return _sign_(c, q, int_from_prv_key(nonce, ec), ec, backend)

    for attempt in range(1, MAX_ATTEMPTS + 1):
        k = random_scalar(ec.n, randbytes=randbytes)
        try:
            return _sign_(c, q, k, ec, backend)
        except KoblitzRuntimeError as e:
            _LOGGER.debug("%s, redrawing nonce (attempt %d)", e, attempt)

    err_msg = f"failed to sign after {MAX_ATTEMPTS} attempts"
    raise KoblitzRuntimeError(err_msg)


def _assert_as_valid_(
    c: int,
    Q: Point,
    r: int,
    s: int,
    ec: Curve = secp256k1,
    backend: IntegerBackend = python_backend,
) -> None:
    # Private function for test/dev purposes

    bn = backend
    w = bn.invmod(s, ec.n)
    u = bn.mod(c * w, ec.n)
    v = bn.mod(r * w, ec.n)  # 4
    # Let K = u*G + v*Q.
    K = point_arithmetic(ec, bn).double_mult(u, ec.G, v, Q)  # 5

    # Fail if infinite(K).
    if K[1] == 0:
        raise KoblitzValueError("invalid (INF) key")  # 5

    # affine x_K-coordinate of K
    x_K = K[0]
    # Fail if r ≠ x_K %n.
    if r != bn.mod(x_K, ec.n):  # 6, 7, 8
        raise KoblitzValueError("signature verification failed")


def assert_as_valid(
    msg: String,
    pub_key: PubKey,
    sig: Union[Sig, Octets],
    ec: Curve = secp256k1,
    backend: IntegerBackend = python_backend,
) -> None:
    """ECDSA signature verification (SEC 1 v.2 section 4.1.4).

    The signature can be a Sig or its DER encoding (bytes or hex-string).
    Raise an error if the signature is not valid.
    """

    # the following steps are also included in Sig.parse:
    # 1. r and s must be integers in the range 1..n-1
    if not isinstance(sig, Sig):
        sig = Sig.parse(sig, ec)
    else:
        sig.assert_valid()
    if sig.ec != ec:
        raise KoblitzValueError(f"signature / curve ({ec.name}) mismatch")

    # the public key must be a valid curve point
    Q = point_from_pub_key(pub_key, ec)

    c = challenge(msg, ec)  # 2, 3

    _assert_as_valid_(c, Q, sig.r, sig.s, ec, backend)  # 4, 5, 6, 7, 8


def verify(
    msg: String,
    pub_key: PubKey,
    sig: Union[Sig, Octets],
    ec: Curve = secp256k1,
    backend: IntegerBackend = python_backend,
) -> bool:
    """ECDSA signature verification (SEC 1 v.2 section 4.1.4).

    Return True for a valid signature, False otherwise:
    malformed signatures and invalid public keys are not valid.
    """

    # all kind of Exceptions are catched because
    # verify must always return a bool
    try:
        assert_as_valid(msg, pub_key, sig, ec, backend)
    except (ValueError, TypeError, RuntimeError) as e:
        _LOGGER.debug("invalid signature: %s", e)
        return False
    return True
