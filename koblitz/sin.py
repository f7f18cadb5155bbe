#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Service Identification Number (SIN).

A SIN is the Base58Check encoding of

    0x0f (SIN version) | 0x02 (ephemeral SIN type) | HASH160(pub_key)

where pub_key is the compressed public key;
ephemeral SINs always start with 'T'.
"""

from typing import Dict

from koblitz.base58 import b58encode
from koblitz.ecc.curve import Curve, secp256k1
from koblitz.ecc.key import PubKey, compress_public_key
from koblitz.hashes import hash256, ripemd160, sha256

SIN_VERSION = b"\x0f"
SIN_TYPE_EPHEMERAL = b"\x02"


def sin_steps(pub_key: PubKey, ec: Curve = secp256k1) -> Dict[str, str]:
    """Return the intermediate hex-string values of the SIN derivation.

    The returned dictionary keys are, in derivation order:
    'sha256', 'ripemd160', 'prefixed', 'hash256', 'checksum', 'payload'.
    """

    compressed = bytes.fromhex(compress_public_key(pub_key, ec))

    h1 = sha256(compressed)
    h2 = ripemd160(h1)
    prefixed = SIN_VERSION + SIN_TYPE_EPHEMERAL + h2
    h3 = hash256(prefixed)
    checksum = h3[:4]
    return {
        "sha256": h1.hex(),
        "ripemd160": h2.hex(),
        "prefixed": prefixed.hex(),
        "hash256": h3.hex(),
        "checksum": checksum.hex(),
        "payload": (prefixed + checksum).hex(),
    }


def generate_sin(pub_key: PubKey, ec: Curve = secp256k1) -> str:
    "Return the ephemeral SIN of a public key."

    compressed = bytes.fromhex(compress_public_key(pub_key, ec))
    payload = SIN_VERSION + SIN_TYPE_EPHEMERAL + ripemd160(sha256(compressed))
    # b58encode appends the 4-byte HASH256 checksum
    return b58encode(payload).decode("ascii")
