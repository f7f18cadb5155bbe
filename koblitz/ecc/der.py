#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Strict ASN.1 DER format for ECDSA signature representation.

Format:
[0x30] [data-size][0x02][r-size][r][0x02][s-size][s]

* 0x30: header byte to indicate compound structure
* data-size: 1-byte size descriptor of the following data
* 0x02: header byte indicating an integer
* r-size: 1-byte size descriptor of the r value that follows
* r: big-endian r value, zero-padded to the curve scalar size
    (32 bytes for secp256k1), with an additional leading null byte
    when its highest bit is set
    (to avoid being interpreted as a negative number)
* 0x02: header byte indicating an integer
* s-size: 1-byte size descriptor of the s value that follows
* s: big-endian s value. Same rules as for r apply

There are 6 bytes of meta-data:

* compound header, compound size,
* value header, r-value size,
* value header, s-value size

Scalars being either n_size or n_size + 1 bytes long,
for secp256k1 a signature is always 70, 71, or 72 bytes long;
any other size, header, or length byte is rejected
with a MalformedSignature error, without attempting recovery.
"""

from dataclasses import InitVar, dataclass, field
from typing import Tuple, Type, TypeVar

from dataclasses_json import DataClassJsonMixin, config

from koblitz.alias import Octets
from koblitz.ecc.curve import CURVES, Curve, secp256k1
from koblitz.exceptions import MalformedSignature
from koblitz.utils import bytes_from_octets, int_repr

_DER_SCALAR_MARKER = b"\x02"
_DER_SIG_MARKER = b"\x30"


def _der_sizes(ec: Curve) -> Tuple[int, ...]:
    "Return the valid DER signature sizes for the curve."
    # 6 bytes of meta-data plus two scalars, each optionally padded
    return tuple(6 + 2 * ec.n_size + padding for padding in range(3))


def _serialize_scalar(scalar: int, size: int) -> bytes:
    scalar_bytes = scalar.to_bytes(size, byteorder="big", signed=False)
    # 'highest bit set' padding included here
    if scalar_bytes[0] & 0x80:
        scalar_bytes = b"\x00" + scalar_bytes
    return _DER_SCALAR_MARKER + bytes([len(scalar_bytes)]) + scalar_bytes


def _deserialize_scalar(data: bytes, offset: int, size: int) -> Tuple[int, int]:

    marker = data[offset : offset + 1]
    if marker != _DER_SCALAR_MARKER:
        err_msg = f"invalid value header: {marker.hex()}"
        err_msg += f", instead of integer element {_DER_SCALAR_MARKER.hex()}"
        raise MalformedSignature(err_msg, data)

    scalar_size = data[offset + 1] if offset + 1 < len(data) else 0
    if scalar_size not in (size, size + 1):
        err_msg = f"invalid scalar size: {scalar_size}"
        err_msg += f", instead of {size} or {size + 1}"
        raise MalformedSignature(err_msg, data)

    start = offset + 2
    scalar_bytes = data[start : start + scalar_size]
    if len(scalar_bytes) != scalar_size:
        raise MalformedSignature("not enough binary data", data)
    if scalar_size == size + 1:
        if scalar_bytes[0] != 0 or scalar_bytes[1] < 0x80:
            raise MalformedSignature("invalid 'highest bit set' padding", data)
    elif scalar_bytes[0] >= 0x80:
        raise MalformedSignature("invalid negative scalar", data)

    scalar = int.from_bytes(scalar_bytes, byteorder="big", signed=False)
    return scalar, start + scalar_size


_Sig = TypeVar("_Sig", bound="Sig")

_HEX_SCALAR = config(encoder=lambda v: format(v, "x"), decoder=lambda v: int(v, 16))


@dataclass(frozen=True)
class Sig(DataClassJsonMixin):
    """ECDSA signature with strict ASN.1 DER serialization.

    - r is a scalar, 0 < r < ec.n
    - s is a scalar, 0 < s < ec.n

    (ec.n is the curve order)
    """

    # n_size bytes scalar
    r: int = field(metadata=_HEX_SCALAR)
    # n_size bytes scalar
    s: int = field(metadata=_HEX_SCALAR)
    ec: Curve = field(
        default=secp256k1,
        metadata=config(encoder=lambda v: v.name, decoder=lambda v: CURVES[v]),
    )
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        # r is a scalar, fail if r is not in [1, n-1]
        if not 0 < self.r < self.ec.n:
            err_msg = f"scalar r not in 1..n-1: {int_repr(self.r)}"
            raise MalformedSignature(err_msg, self.r)

        # s is a scalar, fail if s is not in [1, n-1]
        if not 0 < self.s < self.ec.n:
            err_msg = f"scalar s not in 1..n-1: {int_repr(self.s)}"
            raise MalformedSignature(err_msg, self.s)

    def serialize(self, check_validity: bool = True) -> bytes:
        "Serialize an ECDSA signature to strict ASN.1 DER representation."

        if check_validity:
            self.assert_valid()

        out = _serialize_scalar(self.r, self.ec.n_size)
        out += _serialize_scalar(self.s, self.ec.n_size)
        return _DER_SIG_MARKER + bytes([len(out)]) + out

    @classmethod
    def parse(
        cls: Type[_Sig],
        data: Octets,
        ec: Curve = secp256k1,
        check_validity: bool = True,
    ) -> _Sig:
        """Return a Sig by parsing binary data.

        Deserialize a strict ASN.1 DER representation of an ECDSA
        signature; data can be bytes or hex-string.
        """

        try:
            data = bytes_from_octets(data)
        except ValueError as e:
            raise MalformedSignature(f"not a DER signature: {data!r}", data) from e

        if len(data) not in _der_sizes(ec):
            err_msg = f"invalid DER signature size: {len(data)}"
            err_msg += f", instead of {_der_sizes(ec)}"
            raise MalformedSignature(err_msg, data)

        # [0x30] [data-size][0x02][r-size][r][0x02][s-size][s]
        marker = data[:1]
        if marker != _DER_SIG_MARKER:
            err_msg = f"invalid compound header: {marker.hex()}"
            err_msg += f", instead of DER sequence tag {_DER_SIG_MARKER.hex()}"
            raise MalformedSignature(err_msg, data)

        # [data-size][0x02][r-size][r][0x02][s-size][s]
        if data[1] != len(data) - 2:
            raise MalformedSignature("invalid DER sequence length", data)

        # [0x02][r-size][r][0x02][s-size][s]
        r, offset = _deserialize_scalar(data, 2, ec.n_size)
        s, offset = _deserialize_scalar(data, offset, ec.n_size)

        # to prevent malleability
        # the sequence must have been consumed entirely
        if offset != len(data):
            raise MalformedSignature("invalid DER sequence length", data)

        return cls(r, s, ec, check_validity)


def encode_der(r: int, s: int, ec: Curve = secp256k1) -> str:
    "Return the hex-string DER encoding of the (r, s) pair."
    return Sig(r, s, ec).serialize().hex()


def decode_der(der_sig: Octets, ec: Curve = secp256k1) -> Tuple[int, int]:
    "Return the (r, s) pair of a DER encoded signature."
    sig = Sig.parse(der_sig, ec)
    return sig.r, sig.s
