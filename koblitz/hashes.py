#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions.

RIPEMD160 is provided by hashlib when the underlying OpenSSL
still exposes it, by pycryptodome otherwise.
"""

import hashlib

from Crypto.Hash import RIPEMD160  # type: ignore

from koblitz.alias import Octets, String
from koblitz.utils import bytes_from_octets, bytes_from_string

try:
    hashlib.new("ripemd160")
    _HASHLIB_RIPEMD160 = True
except ValueError:  # pragma: no cover
    _HASHLIB_RIPEMD160 = False


def ripemd160(octets: Octets) -> bytes:
    """Return the RIPEMD160(*) of the input octet sequence."""
    octets = bytes_from_octets(octets)
    if _HASHLIB_RIPEMD160:
        return hashlib.new("ripemd160", octets).digest()
    return RIPEMD160.new(octets).digest()  # pragma: no cover


def sha256(octets: Octets) -> bytes:
    """Return the SHA256(*) of the input octet sequence."""
    octets = bytes_from_octets(octets)
    return hashlib.sha256(octets).digest()


def hash160(octets: Octets) -> bytes:
    """Return the HASH160=RIPEMD160(SHA256) of the input octet sequence."""
    return ripemd160(sha256(octets))


def hash256(octets: Octets) -> bytes:
    """Return the SHA256(SHA256(*)) of the input octet sequence."""
    return sha256(sha256(octets))


def reduce_to_hlen(msg: String) -> bytes:
    """Return the SHA256 digest of a message.

    Text messages are UTF-8 encoded, bytes are hashed as they are.
    """
    # Step 4 of SEC 1 v.2 section 4.1.3
    return hashlib.sha256(bytes_from_string(msg)).digest()
