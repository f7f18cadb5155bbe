#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `koblitz.sin` module."

import hashlib

import pytest

from koblitz.base58 import b58decode
from koblitz.ecc.key import KeyPair, generate_keypair
from koblitz.ecc.point import mult
from koblitz.exceptions import InvalidPoint
from koblitz.sin import generate_sin, sin_steps

PRV_KEY = "7a4fbece43963538cb8f9149b094906168d71be36cfb405e6930fddb42da2c7d"
PUB_KEY = "033fbbf44c3da3fec12bf7bac254fd176adc3eaed79470932b574d8d60728eb206"
PUB_KEY_UNCOMPRESSED = (
    "043fbbf44c3da3fec12bf7bac254fd176adc3eaed79470932b574d8d60728eb206"
    "fb7ac7ac6959f75a6859a1a8d745db7e825a3c5c826e5b2e4950892b35772313"
)
SIN = "Tf61EPoJDSjbp6tGoyjbTKq7XLABPVcyUwY"


def test_sin() -> None:

    assert generate_sin(PUB_KEY) == SIN
    assert generate_sin(bytes.fromhex(PUB_KEY)) == SIN
    assert generate_sin(PUB_KEY_UNCOMPRESSED) == SIN
    assert generate_sin(KeyPair.from_private_key(PRV_KEY)) == SIN

    # private key 1: the generator point
    assert generate_sin(mult(1)) == "Tf8DhWM5WDBB1CarpFdonta9YEBJgW1GYAt"


def test_sin_steps() -> None:

    steps = sin_steps(PUB_KEY)
    assert list(steps) == [
        "sha256",
        "ripemd160",
        "prefixed",
        "hash256",
        "checksum",
        "payload",
    ]
    h1 = hashlib.sha256(bytes.fromhex(PUB_KEY)).hexdigest()
    assert steps["sha256"] == h1
    assert steps["ripemd160"] == "5cd296b2b85b37f3b02e6dcbd3c38e0ddd55b21f"
    assert steps["prefixed"] == "0f02" + steps["ripemd160"]
    prefixed = bytes.fromhex(steps["prefixed"])
    h3 = hashlib.sha256(hashlib.sha256(prefixed).digest()).hexdigest()
    assert steps["hash256"] == h3
    assert steps["checksum"] == "e1ca4017"
    assert steps["payload"] == steps["prefixed"] + "e1ca4017"

    # base58 checksum is verified while decoding
    assert b58decode(SIN).hex() == steps["prefixed"]
    assert sin_steps(PUB_KEY_UNCOMPRESSED) == steps


def test_random_sins() -> None:

    for _ in range(8):
        key = generate_keypair()
        sin = generate_sin(key)
        assert sin.startswith("T")
        assert sin == generate_sin(key.public_key_compressed)
        payload = b58decode(sin)
        assert len(payload) == 22
        assert payload[:2] == b"\x0f\x02"


def test_invalid_public_keys() -> None:

    with pytest.raises(InvalidPoint):
        generate_sin("02" + "00" * 32)
    with pytest.raises(InvalidPoint, match="not a public key: "):
        generate_sin("not a public key")
