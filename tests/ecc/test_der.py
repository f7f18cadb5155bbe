#!/usr/bin/env python3

# Copyright (C) The koblitz developers
#
# This file is part of koblitz. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of koblitz including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `koblitz.ecc.der` module."

import json

import pytest

from koblitz.ecc.curve import secp192k1, secp256k1
from koblitz.ecc.der import Sig, decode_der, encode_der
from koblitz.exceptions import MalformedSignature

ec = secp256k1

r = 0x3870F3C946C177B03745571AA71FA487639D0008289D5F43E04B3A71AA7DB454
s = 0xFB53E6212026736118E311A11862683DEDFCDE2EF3D44B090EAE23048E3E2B8A
der_sig = (
    "3045"
    "0220"
    "3870f3c946c177b03745571aa71fa487639d0008289d5f43e04b3a71aa7db454"
    "022100"
    "fb53e6212026736118e311a11862683dedfcde2ef3d44b090eae23048e3e2b8a"
)

one_32 = "00" * 31 + "01"


def test_vector() -> None:

    assert encode_der(r, s) == der_sig
    assert decode_der(der_sig) == (r, s)
    assert decode_der(bytes.fromhex(der_sig)) == (r, s)
    assert decode_der("0x" + der_sig.upper()) == (r, s)

    sig = Sig(r, s)
    assert sig.serialize().hex() == der_sig
    assert Sig.parse(der_sig) == sig
    assert len(sig.serialize()) == 71


def test_der_size() -> None:

    sig70 = 1, 1
    sig71 = 2 ** 255, 1
    sig71b = 1, ec.n - 1
    sig72 = ec.n - 2, ec.n - 1
    sigs = [sig70, sig71, sig71b, sig72]
    lengths = [70, 71, 71, 72]

    for length, (r_, s_) in zip(lengths, sigs):
        sig = Sig(r_, s_)
        assert r_ == sig.r
        assert s_ == sig.s
        assert ec == sig.ec
        sig_bin = sig.serialize()
        assert len(sig_bin) == length
        assert sig == Sig.parse(sig_bin)

    # scalars are zero-padded to the curve scalar size
    sig_bin = Sig(1, 1).serialize()
    assert sig_bin.hex() == "3044" + "0220" + one_32 + "0220" + one_32

    sig_bin = Sig(2 ** 240, 2 ** 200).serialize()
    assert len(sig_bin) == 70
    assert Sig.parse(sig_bin) == Sig(2 ** 240, 2 ** 200)

    # secp192k1: 24 or 25 bytes scalars
    for length, (r_, s_) in zip(
        [54, 55, 56], [(1, 1), (secp192k1.n - 1, 1), (secp192k1.n - 1,) * 2]
    ):
        sig = Sig(r_, s_, secp192k1)
        sig_bin = sig.serialize()
        assert len(sig_bin) == length
        assert Sig.parse(sig_bin, secp192k1) == sig
        assert decode_der(encode_der(r_, s_, secp192k1), secp192k1) == (r_, s_)


def test_der_deserialize() -> None:

    with pytest.raises(MalformedSignature, match="not a DER signature: "):
        Sig.parse("not a sig")

    err_msg = "invalid DER signature size: "
    # minimal BIP66 encoding of (1, 1)
    for invalid in ("3006020101020101", der_sig[:-4], der_sig + "0000", ""):
        with pytest.raises(MalformedSignature, match=err_msg):
            Sig.parse(invalid)
    # secp256k1 signature, secp192k1 sizes
    with pytest.raises(MalformedSignature, match=err_msg):
        Sig.parse(der_sig, secp192k1)

    sig_bin = bytes.fromhex(der_sig)

    bad_sig_bin = b"\x31" + sig_bin[1:]
    with pytest.raises(MalformedSignature, match="invalid compound header: 31"):
        Sig.parse(bad_sig_bin)

    bad_sig_bin = sig_bin[:1] + b"\x46" + sig_bin[2:]
    with pytest.raises(MalformedSignature, match="invalid DER sequence length"):
        Sig.parse(bad_sig_bin)

    # r and s value headers
    for offset in (2, 36):
        bad_sig_bin = sig_bin[:offset] + b"\x03" + sig_bin[offset + 1 :]
        with pytest.raises(MalformedSignature, match="invalid value header: 03"):
            Sig.parse(bad_sig_bin)

    # r and s sizes
    for offset in (3, 37):
        for size in (b"\x00", b"\x1f", b"\x22"):
            bad_sig_bin = sig_bin[:offset] + size + sig_bin[offset + 1 :]
            with pytest.raises(MalformedSignature, match="invalid scalar size: "):
                Sig.parse(bad_sig_bin)

    # s size 33, but only 32 bytes available
    bad_sig = "3044" + "0220" + one_32 + "0221" + one_32
    with pytest.raises(MalformedSignature, match="not enough binary data"):
        Sig.parse(bad_sig)

    # 0x00 padding without highest bit set
    bad_sig = "3045" + "0221" + "00" + one_32 + "0220" + one_32
    err_msg = "invalid 'highest bit set' padding"
    with pytest.raises(MalformedSignature, match=err_msg):
        Sig.parse(bad_sig)
    bad_sig = "3045" + "0221" + "01" + one_32 + "0220" + one_32
    with pytest.raises(MalformedSignature, match=err_msg):
        Sig.parse(bad_sig)

    # highest bit set without 0x00 padding
    bad_sig = "3044" + "0220" + "80" + "00" * 31 + "0220" + one_32
    with pytest.raises(MalformedSignature, match="invalid negative scalar"):
        Sig.parse(bad_sig)

    # trailing data in the sequence
    bad_sig = "3046" + "0220" + one_32 + "0220" + one_32 + "0000"
    with pytest.raises(MalformedSignature, match="invalid DER sequence length"):
        Sig.parse(bad_sig)


def test_scalar_range() -> None:

    for r_, s_ in ((0, 1), (ec.n, 1)):
        with pytest.raises(MalformedSignature, match="scalar r not in 1..n-1: "):
            Sig(r_, s_)
    for r_, s_ in ((1, 0), (1, ec.n)):
        with pytest.raises(MalformedSignature, match="scalar s not in 1..n-1: "):
            Sig(r_, s_)

    # well formed DER, out of range scalars
    n_hex = "%064x" % ec.n
    bad_sig = "3045" + "022100" + n_hex + "0220" + one_32
    with pytest.raises(MalformedSignature, match="scalar r not in 1..n-1: "):
        Sig.parse(bad_sig)
    bad_sig = "3044" + "0220" + one_32 + "0220" + "00" * 32
    with pytest.raises(MalformedSignature, match="scalar s not in 1..n-1: 0"):
        Sig.parse(bad_sig)
    # unless validity check is skipped
    sig = Sig.parse(bad_sig, check_validity=False)
    assert sig.s == 0

    sig = Sig(0, 1, ec, False)
    with pytest.raises(MalformedSignature, match="scalar r not in 1..n-1: "):
        sig.serialize()
    assert len(sig.serialize(check_validity=False)) == 70

    # malformed signatures are value errors
    with pytest.raises(ValueError):
        Sig(0, 1)


def test_json() -> None:

    sig = Sig(r, s)
    sig_dict = sig.to_dict()
    assert sig_dict == {"r": format(r, "x"), "s": format(s, "x"), "ec": "secp256k1"}
    assert Sig.from_dict(sig_dict) == sig
    assert Sig.from_json(sig.to_json()) == sig
    assert json.loads(sig.to_json()) == sig_dict

    sig = Sig(1, 2, secp192k1)
    sig_dict = sig.to_dict()
    assert sig_dict == {"r": "1", "s": "2", "ec": "secp192k1"}
    assert Sig.from_dict(sig_dict) == sig

    sig_dict = {"r": "0", "s": "2", "ec": "secp256k1"}
    with pytest.raises(MalformedSignature, match="scalar r not in 1..n-1: "):
        Sig.from_dict(sig_dict)
