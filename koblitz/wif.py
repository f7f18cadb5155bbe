#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Wallet Import Format (WIF) encoding of private keys.

WIF is the Base58Check encoding of

    version byte | private key (n_size bytes) | 0x01 (if compressed)

where the version byte is 0x80 for mainnet and 0xef for testnet.
"""

from koblitz.base58 import b58encode
from koblitz.network import network_from_name
from koblitz.to_prv_key import PrvKey, int_from_prv_key, prv_keyinfo_from_wif


def wif_from_prv_key(
    prv_key: PrvKey, network: str = "mainnet", compressed: bool = True
) -> str:
    "Return the WIF encoding of a private key."

    net = network_from_name(network)
    ec = net.curve
    q = int_from_prv_key(prv_key, ec)

    payload = net.wif
    payload += q.to_bytes(ec.n_size, byteorder="big", signed=False)
    payload += b"\x01" if compressed else b""
    return b58encode(payload).decode("ascii")


def prv_key_from_wif(wif: str) -> str:
    "Return the hex-string private key encoded in a WIF."

    q, net, _ = prv_keyinfo_from_wif(wif)
    ec = network_from_name(net).curve
    return q.to_bytes(ec.n_size, byteorder="big", signed=False).hex()
