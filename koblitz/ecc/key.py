#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Key pair generation and public key formats.

Public keys are SEC 1 v.2 section 2.3.3 octet sequences
(hex-encoded in KeyPair):

* uncompressed: 04 | x | y
* compressed: 02 | x (even y) or 03 | x (odd y)

with x and y zero-padded to the field element size
(32 bytes for secp256k1).

A KeyPair is either generated from a fresh random private key,
derived from a given private key,
or rehydrated from previously computed field values:
rehydrated fields are trusted as they are,
only checked not to be missing.
"""

import logging
from dataclasses import dataclass, fields
from typing import Tuple, Union

from dataclasses_json import DataClassJsonMixin

from koblitz.alias import Octets, Point
from koblitz.backend import IntegerBackend, python_backend
from koblitz.ecc.curve import CURVES, Curve, secp256k1
from koblitz.ecc.point import point_arithmetic
from koblitz.entropy import RandBytes, random_scalar, secure_random_bytes
from koblitz.exceptions import InvalidPoint, KoblitzValueError
from koblitz.to_prv_key import PrvKey, int_from_prv_key
from koblitz.utils import bytes_from_octets, int_repr

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyPair(DataClassJsonMixin):
    "Private key (hex and decimal) with the derived public key."

    private_key_hex: str
    private_key_dec: str
    # 04 | x | y
    public_key: str
    # 02 | x or 03 | x
    public_key_compressed: str
    public_key_x: str
    public_key_y: str
    curve: str = secp256k1.name

    def __post_init__(self) -> None:
        for field in fields(self):
            if getattr(self, field.name) in (None, ""):
                raise KoblitzValueError(f"missing key field: {field.name}")

    @property
    def ec(self) -> Curve:
        if self.curve not in CURVES:
            raise KoblitzValueError(f"unknown curve: {self.curve}")
        return CURVES[self.curve]

    @property
    def prv_key(self) -> int:
        return int(self.private_key_hex, 16)

    @property
    def point(self) -> Point:
        return int(self.public_key_x, 16), int(self.public_key_y, 16)

    def private_key_as(self, fmt: str = "hex") -> str:
        "Return the private key as 'hex' or 'dec' string."

        if fmt == "hex":
            return self.private_key_hex
        if fmt == "dec":
            return self.private_key_dec
        raise KoblitzValueError(f"invalid private key format: {fmt}")

    def public_key_as(self, fmt: str = "uncompressed") -> str:
        "Return the public key as 'uncompressed' or 'compressed' hex-string."

        if fmt == "uncompressed":
            return self.public_key
        if fmt == "compressed":
            return self.public_key_compressed
        raise KoblitzValueError(f"invalid public key format: {fmt}")

    @classmethod
    def from_private_key(
        cls,
        prv_key: PrvKey,
        ec: Curve = secp256k1,
        backend: IntegerBackend = python_backend,
    ) -> "KeyPair":
        "Return the KeyPair of a given private key."

        q = int_from_prv_key(prv_key, ec)
        Q = point_arithmetic(ec, backend).mult_ladder(q)
        return _keypair_from_scalar(q, Q, ec)


def _keypair_from_scalar(q: int, Q: Point, ec: Curve) -> "KeyPair":
    x_hex = Q[0].to_bytes(ec.p_size, byteorder="big", signed=False).hex()
    y_hex = Q[1].to_bytes(ec.p_size, byteorder="big", signed=False).hex()
    return KeyPair(
        private_key_hex=q.to_bytes(ec.n_size, byteorder="big", signed=False).hex(),
        private_key_dec=str(q),
        public_key="04" + x_hex + y_hex,
        public_key_compressed=("03" if Q[1] & 1 else "02") + x_hex,
        public_key_x=x_hex,
        public_key_y=y_hex,
        curve=ec.name,
    )


def generate_keypair(
    ec: Curve = secp256k1,
    randbytes: RandBytes = secure_random_bytes,
    backend: IntegerBackend = python_backend,
) -> KeyPair:
    """Return a KeyPair with a fresh random private key.

    The private key is drawn in the open range (1, n-1);
    the public key is computed with the Montgomery ladder.
    """

    q = random_scalar(ec.n, randbytes=randbytes)
    arith = point_arithmetic(ec, backend)
    Q = arith.mult_ladder(q)
    arith.require_on_curve(Q)
    _LOGGER.debug("generated a new %s key pair", ec.name)
    return _keypair_from_scalar(q, Q, ec)


def bytes_from_point(Q: Point, ec: Curve = secp256k1, compressed: bool = True) -> bytes:
    """Return a point as compressed/uncompressed octet sequence.

    Return a point as compressed (0x02, 0x03) or uncompressed (0x04)
    octet sequence, according to SEC 1 v.2, section 2.3.3.
    """

    # check that Q is a point and that is on curve
    point_arithmetic(ec).require_on_curve(Q)

    if Q[1] == 0:  # infinity point in affine coordinates
        raise InvalidPoint("no bytes representation for infinity point", Q)

    bytes_ = Q[0].to_bytes(ec.p_size, byteorder="big", signed=False)
    if compressed:
        return (b"\x03" if (Q[1] & 1) else b"\x02") + bytes_

    return b"\x04" + bytes_ + Q[1].to_bytes(ec.p_size, byteorder="big", signed=False)


def _pub_key_bytes(pub_key: Octets) -> bytes:
    try:
        return bytes_from_octets(pub_key)
    except ValueError as e:
        raise InvalidPoint(f"not a public key: {pub_key!r}", pub_key) from e


def parse_compressed_public_key(pub_key: Octets, ec: Curve = secp256k1) -> Point:
    """Return the point of a compressed public key.

    y is recovered solving y^2 = x^3 + a*x + b (mod p),
    choosing the root whose parity matches the 02/03 prefix.
    """

    pub_key = _pub_key_bytes(pub_key)
    if len(pub_key) != ec.p_size + 1:
        err_msg = "invalid size for compressed point: "
        err_msg += f"{len(pub_key)} instead of {ec.p_size + 1}"
        raise InvalidPoint(err_msg, pub_key)
    if pub_key[0] not in (0x02, 0x03):
        err_msg = f"invalid compressed point prefix: {pub_key[0]:02x}"
        raise InvalidPoint(err_msg, pub_key)

    x_Q = int.from_bytes(pub_key[1:], byteorder="big", signed=False)
    # also check x_Q validity
    y_Q = point_arithmetic(ec).y_odd_even(x_Q, pub_key[0] & 1)
    return x_Q, y_Q


def parse_uncompressed_public_key(pub_key: Octets, ec: Curve = secp256k1) -> str:
    """Return the hex-string x | y payload of an uncompressed public key.

    The 04 prefix is stripped if present.
    """

    pub_key = _pub_key_bytes(pub_key)
    if len(pub_key) == 2 * ec.p_size + 1:
        if pub_key[0] != 0x04:
            err_msg = f"invalid uncompressed point prefix: {pub_key[0]:02x}"
            raise InvalidPoint(err_msg, pub_key)
        pub_key = pub_key[1:]
    if len(pub_key) != 2 * ec.p_size:
        err_msg = "invalid size for uncompressed point: "
        err_msg += f"{len(pub_key)} instead of {2 * ec.p_size + 1}"
        raise InvalidPoint(err_msg, pub_key)
    return pub_key.hex()


def parse_coordinate_pair_from_public_key(
    pub_key: Octets, ec: Curve = secp256k1
) -> Tuple[str, str]:
    "Return the (x, y) hex-string coordinates of an uncompressed public key."

    payload = parse_uncompressed_public_key(pub_key, ec)
    return payload[: 2 * ec.p_size], payload[2 * ec.p_size :]


PubKey = Union[Octets, Point, KeyPair]


def point_from_pub_key(pub_key: PubKey, ec: Curve = secp256k1) -> Point:
    """Return an elliptic curve point tuple from a public key.

    It supports:

    - SEC Octets (bytes or hex-string, with 02, 03, or 04 prefix)
    - unprefixed x | y octets
    - KeyPair
    - native tuple
    """

    if isinstance(pub_key, KeyPair):
        if pub_key.ec != ec:
            raise KoblitzValueError(f"key pair / curve ({ec.name}) mismatch")
        pub_key = pub_key.public_key

    if isinstance(pub_key, tuple):
        Q = pub_key
    else:
        pub_key = _pub_key_bytes(pub_key)
        if len(pub_key) == ec.p_size + 1:
            return parse_compressed_public_key(pub_key, ec)
        x_hex, y_hex = parse_coordinate_pair_from_public_key(pub_key, ec)
        Q = int(x_hex, 16), int(y_hex, 16)

    if len(Q) == 2 and Q[1] == 0:  # infinity point in affine coordinates
        raise InvalidPoint("INF is not a valid public key", Q)
    if not point_arithmetic(ec).is_on_curve(Q):
        raise InvalidPoint(f"point not on curve: ({int_repr(Q[0])}, ...)", Q)
    return Q


def compress_public_key(pub_key: PubKey, ec: Curve = secp256k1) -> str:
    "Return the compressed hex-string public key."

    return bytes_from_point(point_from_pub_key(pub_key, ec), ec).hex()


def pub_key_from_prv_key(
    prv_key: PrvKey, ec: Curve = secp256k1, compressed: bool = True
) -> str:
    "Return the hex-string public key of a private key."

    Q = point_arithmetic(ec).mult_ladder(int_from_prv_key(prv_key, ec))
    return bytes_from_point(Q, ec, compressed).hex()
