#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Functions for conversions between different private key formats.

A private key is an int in the range [1, n-1],
where n is the curve order.
Private keys can be provided as:

* int
* bytes (exactly n_size bytes)
* hex-string: '0x'-prefixed, or unprefixed with exactly 2*n_size digits
* WIF string (decimal digit strings are never read as WIF)
* any other numeric string the number classifier accepts
  (e.g. the decimal string of the key)
"""

from typing import Optional, Tuple, Union

from koblitz.alias import String
from koblitz.base58 import b58decode
from koblitz.ecc.curve import Curve, secp256k1
from koblitz.exceptions import InvalidPrivateKey, KoblitzValueError
from koblitz.network import NETWORKS, network_from_wif_version
from koblitz.number import Number, int_from_number, strip_hex_prefix
from koblitz.utils import int_repr

PrvKey = Union[int, bytes, str, Number]

# private key int, network, compressed
PrvkeyInfo = Tuple[int, str, bool]


def _looks_like_wif(wif: str) -> bool:
    for network in NETWORKS.values():
        for chars, length in (network.wif_uncompressed, network.wif_compressed):
            if len(wif) == length and wif[:1] in chars:
                return True
    return False


def prv_keyinfo_from_wif(
    wif: String, network: Optional[str] = None, compressed: Optional[bool] = None
) -> PrvkeyInfo:
    """Return private key tuple(int, network, compressed) from a WIF.

    WIF includes network and compression information:
    here the 'network, compressed' input parameters are passed
    only to allow consistency checks.
    """

    if isinstance(wif, bytes):
        wif = wif.decode("ascii")
    wif = wif.strip()

    if not _looks_like_wif(wif):
        raise KoblitzValueError(f"invalid WIF format: {wif!r}")

    payload = b58decode(wif)

    net = network_from_wif_version(payload[:1])
    if net is None:
        raise KoblitzValueError(f"invalid WIF version: {payload[:1]!r}")
    if network is not None and net != network:
        raise KoblitzValueError(f"not a {network} WIF: {wif!r}")

    ec = NETWORKS[net].curve

    if len(payload) == ec.n_size + 2:  # compressed WIF
        compr = True
        if payload[-1] != 0x01:  # must have a trailing 0x01
            raise KoblitzValueError("not a compressed WIF: missing trailing 0x01")
        prv_key = payload[1:-1]
    elif len(payload) == ec.n_size + 1:  # uncompressed WIF
        compr = False
        prv_key = payload[1:]
    else:
        raise KoblitzValueError(f"wrong WIF size: {len(payload)}")

    if compressed is not None and compr != compressed:
        raise KoblitzValueError("compression requirement mismatch")

    q = int.from_bytes(prv_key, byteorder="big")
    if not 0 < q < ec.n:
        raise InvalidPrivateKey(f"private key not in 1..n-1: {int_repr(q)}", q)

    return q, net, compr


def int_from_prv_key(prv_key: PrvKey, ec: Curve = secp256k1) -> int:
    """Return a verified-as-valid private key integer.

    Network and compressed informations from WIF keys
    are not used, but the WIF network curve must be ec.
    """

    if isinstance(prv_key, bytes):
        if len(prv_key) != ec.n_size:
            err_msg = f"invalid private key size: {len(prv_key)} bytes"
            err_msg += f" instead of {ec.n_size}"
            raise InvalidPrivateKey(err_msg, prv_key)
        q = int.from_bytes(prv_key, byteorder="big", signed=False)
    elif isinstance(prv_key, str):
        prv_key = prv_key.strip()
        digits = strip_hex_prefix(prv_key)
        if digits != prv_key or len(digits) == 2 * ec.n_size:
            try:
                q = int(digits, 16)
            except ValueError as e:
                err_msg = f"not a private key: {prv_key!r}"
                raise InvalidPrivateKey(err_msg, prv_key) from e
        elif _looks_like_wif(prv_key) and not prv_key.isdigit():
            q, network, _ = prv_keyinfo_from_wif(prv_key)
            if ec != NETWORKS[network].curve:
                raise KoblitzValueError(f"ec / network ({network}) mismatch")
        else:
            q = int_from_number(prv_key)
    else:
        q = int_from_number(prv_key)

    if not 0 < q < ec.n:
        raise InvalidPrivateKey(f"private key not in 1..n-1: {int_repr(q)}", q)

    return q
