import pytest

import genbp.transcript
from genbp.bls12 import Fp
from genbp.transcript import Transcript, ZeroChallenge


def build(name=b"test"):
    t = Transcript(name)
    t.domain_separate(b"domain")
    t.append_message(b"label", b"message")
    return t


def test_deterministic():
    assert build().challenge(b"c") == build().challenge(b"c")
    assert len(build().challenge(b"c")) == 64
    assert build().challenge_scalar(b"dst", b"c") == build().challenge_scalar(b"dst", b"c")


def test_order_and_framing_sensitive():
    assert build(b"a").challenge(b"c") != build(b"b").challenge(b"c")
    assert build().challenge(b"c") != build().challenge(b"d")

    a = Transcript(b"test")
    a.append_message(b"ab", b"c")
    b = Transcript(b"test")
    b.append_message(b"a", b"bc")
    assert a.challenge(b"c") != b.challenge(b"c")

    a = Transcript(b"test")
    a.domain_separate(b"x")
    b = Transcript(b"test")
    b.append_message(b"x", b"")
    assert a.challenge(b"c") != b.challenge(b"c")


def test_challenge_advances_state():
    t = build()
    assert t.challenge(b"c") != t.challenge(b"c")


def test_clone():
    t = build()
    clone = t.clone()
    assert t.challenge(b"c") == clone.challenge(b"c")
    t.append_message(b"more", b"data")
    assert t.challenge(b"c") != clone.challenge(b"c")


def test_zero_challenge(monkeypatch):
    monkeypatch.setattr(genbp.transcript, "hash_to_fp", lambda dst, msg: Fp(0))
    with pytest.raises(ZeroChallenge):
        build().challenge_scalar(b"dst", b"c")
