#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Numeric format classification and base conversions.

Numbers enter the library as int, bytes, or text; text can be
a decimal, hex (optionally '0x'-prefixed), binary, or Base58 string.
The format of a string is detected by classify,
with the following order of precedence:

* None or empty string: UNKNOWN
* '0', '0x0', '0x00': ZERO
* after removing a leading '-' sign and an optional '0x' prefix:
    * only 0/1 digits: BINARY
    * only decimal digits: DECIMAL
    * only hex digits: HEX
    * only Base58 alphabet characters (not '0x'-prefixed): BASE58
* anything else: UNKNOWN

Decimal digit strings are valid hex strings too:
decimal is tested first, so that '10' is ten, not sixteen;
binary digit strings are classified as BINARY
but, being valid decimal strings too, they are read as decimal numbers.
A '0x' prefix always forces the hex reading.

Number is the tagged value produced once at the library boundary:
it carries the int value together with the format it was parsed from,
so that internal arithmetic never re-sniffs formats.

Base58 omits the similar-looking letters
0 (zero), O (capital o), I (capital i), and l (lower case L)
to avoid ambiguity when printed; leading zero bytes
are encoded as leading '1' characters and restored on decoding.
The checksummed Base58Check version is in the koblitz.base58 module.
"""

import string
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Type, TypeVar

from koblitz.alias import Integer
from koblitz.exceptions import InvalidNumberFormat

_B58_ALPHABET = b"123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
__BASE = len(_B58_ALPHABET)

_BIN_DIGITS = frozenset("01")
_DEC_DIGITS = frozenset(string.digits)
_HEX_DIGITS = frozenset(string.hexdigits)
_B58_DIGITS = frozenset(_B58_ALPHABET.decode("ascii"))

_ZEROS = ("0", "0x0", "0x00")


class NumberFormat(Enum):
    DECIMAL = "dec"
    HEX = "hex"
    BINARY = "bin"
    BASE58 = "b58"
    ZERO = "zer"
    UNKNOWN = "unk"


def strip_hex_prefix(value: str) -> str:
    "Return the value without its '0x' prefix, if any."
    return value[2:] if value[:2].lower() == "0x" else value


def add_hex_prefix(value: str) -> str:
    "Return the value with a '0x' prefix, adding it if missing."
    return value if value[:2].lower() == "0x" else "0x" + value


def _split_sign(value: str) -> Tuple[bool, str]:
    value = value.strip()
    if value.startswith("-"):
        return True, value[1:]
    return False, value


def classify(value: Any) -> NumberFormat:
    "Return the numeric format of the input value."

    if value is None or isinstance(value, bool):
        return NumberFormat.UNKNOWN

    if isinstance(value, int):
        return NumberFormat.ZERO if value == 0 else NumberFormat.DECIMAL

    if not isinstance(value, str):
        return NumberFormat.UNKNOWN

    value = value.strip()
    if value.lower() in _ZEROS:
        return NumberFormat.ZERO

    _, value = _split_sign(value)
    prefixed = value[:2].lower() == "0x"
    value = strip_hex_prefix(value)
    if value == "":
        return NumberFormat.UNKNOWN

    digits = frozenset(value)
    if digits <= _BIN_DIGITS:
        return NumberFormat.BINARY
    if digits <= _DEC_DIGITS:
        return NumberFormat.DECIMAL
    if digits <= _HEX_DIGITS:
        return NumberFormat.HEX
    if not prefixed and digits <= _B58_DIGITS:
        return NumberFormat.BASE58
    return NumberFormat.UNKNOWN


def b58encode_bytes(v: bytes) -> bytes:
    "Encode bytes using Base58, without checksum."

    # preserve leading-0s
    # leading-0s become base58 leading-1s
    n_pad = len(v)
    v = v.lstrip(b"\0")
    vlen = len(v)
    n_pad -= vlen
    result = _B58_ALPHABET[:1] * n_pad

    if vlen:
        i = int.from_bytes(v, byteorder="big", signed=False)
        digits = b""
        while i:
            i, idx = divmod(i, __BASE)
            digits = _B58_ALPHABET[idx : idx + 1] + digits
        result += digits

    return result


def b58decode_bytes(v: bytes) -> bytes:
    "Decode Base58 ASCII bytes, without checksum verification."

    if any(x not in _B58_ALPHABET for x in v):
        err_msg = "Base58 string contains invalid characters"
        raise InvalidNumberFormat(err_msg, v)

    # preserve leading-0s
    # base58 leading-1s become leading-0s
    n_pad = len(v)
    v = v.lstrip(_B58_ALPHABET[:1])
    vlen = len(v)
    n_pad -= vlen
    result = b"\0" * n_pad

    if vlen:
        i = 0
        for char in v:
            i = i * __BASE + _B58_ALPHABET.index(char)
        nbytes = (i.bit_length() + 7) // 8
        result += i.to_bytes(nbytes, byteorder="big", signed=False)

    return result


_Number = TypeVar("_Number", bound="Number")


@dataclass(frozen=True)
class Number:
    "An integer tagged with the textual format it was parsed from."

    value: int
    fmt: NumberFormat = NumberFormat.DECIMAL

    def __int__(self) -> int:
        return self.value

    @classmethod
    def parse(cls: Type[_Number], value: Any) -> _Number:
        """Return a Number from int, bytes, Number, or numeric string.

        bytes are big-endian unsigned integers.
        An InvalidNumberFormat error is raised for unknown formats.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, bytes):
            return cls(int.from_bytes(value, "big", signed=False), NumberFormat.HEX)

        fmt = classify(value)
        if fmt is NumberFormat.UNKNOWN:
            raise InvalidNumberFormat(f"invalid number format: {value!r}", value)
        if isinstance(value, int):
            return cls(value, fmt)

        negative, digits = _split_sign(value)
        if fmt is NumberFormat.ZERO:
            i = 0
        elif fmt is NumberFormat.BASE58:
            i = int.from_bytes(b58decode_bytes(digits.encode("ascii")), "big")
        elif fmt is NumberFormat.HEX or digits[:2].lower() == "0x":
            i = int(strip_hex_prefix(digits), 16)
        else:
            i = int(digits, 10)
        return cls(-i if negative else i, fmt)

    def to_hex(self, with_prefix: bool = True) -> str:
        return encode_hex(self.value, with_prefix)

    def to_dec(self) -> str:
        return str(self.value)

    def to_bin(self) -> str:
        return dec_to_bin(self.value)

    def to_base58(self) -> str:
        i = abs(self.value)
        v = i.to_bytes((i.bit_length() + 7) // 8, byteorder="big", signed=False)
        sign = "-" if self.value < 0 else ""
        return sign + b58encode_bytes(v).decode("ascii")


def int_from_number(value: Integer) -> int:
    """Return an int from many possible integer representations.

    Allowed integer representations are:

    * 3735928559
    * -3735928559
    * "3735928559"
    * "0xdeadbeef"
    * "-0xdeadbeef"
    * "deadbeef"
    * "StV1DL6CwTryKyV" (Base58)
    * b'\xde\xad\xbe\xef'
    * Number(3735928559)
    """

    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return Number.parse(value).value


def encode_hex(decimal: Integer, with_prefix: bool = True) -> str:
    """Return the hex-string of a number.

    The result is lowercase, without leading zeros,
    and '0x'-prefixed unless otherwise requested.
    """

    i = int_from_number(decimal)
    sign = "-" if i < 0 else ""
    hex_digits = format(abs(i), "x")
    return sign + ("0x" if with_prefix else "") + hex_digits


def decode_hex(hex_value: str) -> str:
    "Return the decimal string of an (optionally '0x'-prefixed) hex-string."

    if not isinstance(hex_value, str):
        raise InvalidNumberFormat(f"not a hex-string: {hex_value!r}", hex_value)
    negative, digits = _split_sign(hex_value)
    digits = strip_hex_prefix(digits)
    if digits == "" or not frozenset(digits) <= _HEX_DIGITS:
        raise InvalidNumberFormat(f"invalid hex-string: {hex_value!r}", hex_value)
    i = int(digits, 16)
    return str(-i if negative else i)


def dec_to_bin(decimal: Integer) -> str:
    "Return the binary digit string (most significant bit first)."

    i = int_from_number(decimal)
    sign = "-" if i < 0 else ""
    return sign + format(abs(i), "b")


def bin_to_dec(bin_value: str) -> str:
    "Return the decimal string of a binary digit string."

    negative, digits = _split_sign(bin_value)
    if digits == "" or not frozenset(digits) <= _BIN_DIGITS:
        raise InvalidNumberFormat(f"invalid binary string: {bin_value!r}", bin_value)
    i = int(digits, 2)
    return str(-i if negative else i)


def hex_to_bytes(hex_value: str) -> bytes:
    """Return the big-endian bytes of the number a hex-string represents.

    Leading zero bytes are not part of the number and are dropped.
    """

    i = int(decode_hex(hex_value))
    if i < 0:
        raise InvalidNumberFormat(f"negative number: {hex_value!r}", hex_value)
    return i.to_bytes((i.bit_length() + 7) // 8, byteorder="big", signed=False)


def encode_base58(hex_value: str, size: Optional[int] = None) -> str:
    """Return the Base58 encoding of the bytes a hex-string represents.

    The hex-string is read as a byte sequence:
    its leading '00' bytes become leading '1' characters.
    Optionally, the byte size is checked.
    """

    digits = strip_hex_prefix(hex_value.strip())
    if len(digits) % 2 or not frozenset(digits) <= _HEX_DIGITS:
        raise InvalidNumberFormat(f"invalid hex-string: {hex_value!r}", hex_value)
    v = bytes.fromhex(digits)
    if size is not None and len(v) != size:
        err_msg = f"invalid size: {len(v)} bytes instead of {size}"
        raise InvalidNumberFormat(err_msg, hex_value)
    return b58encode_bytes(v).decode("ascii")


def decode_base58(b58_value: str) -> str:
    """Return the lowercase hex-string of a Base58 string.

    Leading '1' characters are restored as leading '00' bytes.
    """

    try:
        v = b58_value.strip().encode("ascii")
    except UnicodeEncodeError as e:
        err_msg = "Base58 string contains invalid characters"
        raise InvalidNumberFormat(err_msg, b58_value) from e
    return b58decode_bytes(v).hex()
