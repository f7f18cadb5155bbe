#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Secure randomness for private keys and signature nonces.

Random bytes come from the operating system CSPRNG through the
secrets module: if it fails, or returns clearly degenerate data,
InsufficientEntropy is raised and no weaker generator is used instead.

Scalars are obtained by rejection sampling;
the number of draws is capped at MAX_ATTEMPTS.
"""

import logging
import secrets
from typing import Callable

from koblitz.exceptions import InsufficientEntropy, KoblitzRuntimeError

_LOGGER = logging.getLogger(__name__)

# the probability of a single draw being rejected is negligible
# for cryptographic curves and below 1/2 for any curve
MAX_ATTEMPTS = 128

RandBytes = Callable[[int], bytes]


def secure_random_bytes(size: int) -> bytes:
    "Return size bytes from the operating system CSPRNG."

    try:
        data = secrets.token_bytes(size)
    except (OSError, NotImplementedError) as e:
        raise InsufficientEntropy("secure random source failure", size) from e

    if len(data) != size:
        err_msg = f"secure random source returned {len(data)} bytes instead of {size}"
        raise InsufficientEntropy(err_msg, data)
    # all-equal bytes are rejected as source failure
    if size > 7 and data.count(data[:1]) == size:
        raise InsufficientEntropy("degenerate secure random data", data)
    return data


def random_scalar(
    n: int, max_attempts: int = MAX_ATTEMPTS, randbytes: RandBytes = secure_random_bytes
) -> int:
    """Return a random scalar k in the open range (1, n-1).

    Draws are n.bit_length() bits long; a draw outside the range
    is discarded and a new one is taken.
    """

    nbits = n.bit_length()
    size = (nbits + 7) // 8
    for attempt in range(1, max_attempts + 1):
        k = int.from_bytes(randbytes(size), byteorder="big", signed=False)
        k >>= size * 8 - nbits
        if 1 < k < n - 1:
            return k
        _LOGGER.debug("random scalar out of range, redrawing (attempt %d)", attempt)

    err_msg = f"no valid random scalar after {max_attempts} attempts"
    raise KoblitzRuntimeError(err_msg)
