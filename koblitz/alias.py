#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases.

mypy aliases, documenting also coding input conventions.
"""

from typing import Tuple, Union

# hex-string or bytes representation of an int
# hex-strings are strings, not bytes:
# 'deadbeef' or b'\xde\xad\xbe\xef'
# hex-string may have a '0x' prefix and surrounding spaces
Octets = Union[bytes, str]

# bytes or text string (e.g. a message to be signed):
# text strings are UTF-8 encoded before use
String = Union[bytes, str]

# int, decimal/hex/base58 string, or bytes:
# strings are funneled through the number classifier
Integer = Union[int, str, bytes]

# elliptic curve point in affine coordinates:
# the point at infinity is the only point with y == 0
Point = Tuple[int, int]

# infinity point in affine coordinates is INF = (int, 0)
# it can be checked with 'INF[1] == 0'
INF = 5, 0
