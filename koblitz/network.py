#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Network constants and associated functions."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from koblitz.ecc.curve import Curve, secp256k1
from koblitz.exceptions import KoblitzValueError


@dataclass(frozen=True)
class Network:
    curve: Curve

    # WIF version byte
    wif: bytes

    # base58 WIF leading characters and length, (un)compressed
    wif_uncompressed: Tuple[str, int]
    wif_compressed: Tuple[str, int]


NETWORKS: Dict[str, Network] = {
    # base58 wif starts with 'K' or 'L' if compressed else '5'
    "mainnet": Network(secp256k1, b"\x80", ("5", 51), ("KL", 52)),
    # base58 wif starts with 'c' if compressed else '9'
    "testnet": Network(secp256k1, b"\xef", ("9", 51), ("c", 52)),
}


def network_from_wif_version(version: bytes) -> Optional[str]:
    """Return network string from the WIF version byte.

    Return None if the version byte is unknown.
    """

    for net, network in NETWORKS.items():
        if network.wif == version:
            return net
    return None


def network_from_name(network: str) -> Network:
    try:
        return NETWORKS[network]
    except KeyError as e:
        raise KoblitzValueError(f"unknown network: {network}") from e
