#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

The three base classes are only meant to discriminate between
Exceptions being raised by koblitz from those raised by other codebase.
Users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the koblitz versions are derived.

The remaining classes refine them into the error kinds of the library;
each one keeps the offending value, if any, for diagnostics.
"""

from typing import Any


class KoblitzValueError(ValueError):
    pass


class KoblitzTypeError(TypeError):
    pass


class KoblitzRuntimeError(RuntimeError):
    pass


class _WithValue:
    def __init__(self, err_msg: str, value: Any = None) -> None:
        super().__init__(err_msg)  # type: ignore
        self.value = value


class InvalidNumberFormat(_WithValue, KoblitzValueError):
    "Unparseable numeric input."


class InvalidPoint(_WithValue, KoblitzValueError):
    "Malformed point or point not on the curve."


class InvalidPrivateKey(_WithValue, KoblitzValueError):
    "Private key not in [1, n-1] or of the wrong size."


class MalformedSignature(_WithValue, KoblitzValueError):
    "DER structure violating the length or tag constants."


class ArithmeticDomainError(_WithValue, KoblitzValueError):
    "Operand out of the integer backend domain (e.g. no modular inverse)."


class InsufficientEntropy(_WithValue, KoblitzRuntimeError):
    "Secure random source failure."
