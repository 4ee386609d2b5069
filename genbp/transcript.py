"""
Fiat-Shamir transcript.

Every member is absorbed into a running Blake2b-512 state as
`kind || u32-LE length || bytes`, so no two distinct sequences of calls
produce the same state. Challenges are taken from a fork of the state, and
both the fork and the live state absorb a distinct marker afterwards.
"""
import hashlib

from .bls12 import hash_to_fp

NAME = 0
DOMAIN = 1
LABEL = 2
VALUE = 3
CHALLENGE = 4
CONTINUED = 5
CHALLENGED = 6


class ZeroChallenge(RuntimeError):
    """A Fiat-Shamir challenge reduced to zero. Not recoverable."""


class Transcript(object):

    def __init__(self, name):
        self._state = hashlib.blake2b(digest_size=64)
        self._append(NAME, name)

    def _append(self, kind, value):
        value = bytes(value)
        self._state.update(bytes([kind]))
        self._state.update(len(value).to_bytes(4, 'little'))
        self._state.update(value)

    def domain_separate(self, label):
        self._append(DOMAIN, label)

    def append_message(self, label, message):
        self._append(LABEL, label)
        self._append(VALUE, message)

    def challenge(self, label):
        self._append(CHALLENGE, label)
        fork = self._state.copy()
        self._state.update(bytes([CONTINUED]))
        fork.update(bytes([CHALLENGED]))
        return fork.digest()

    def challenge_scalar(self, dst, label):
        c = hash_to_fp(dst, self.challenge(label))
        if c.is_zero():
            raise ZeroChallenge("zero challenge %r in %s" % (label, dst.decode()))
        return c

    def clone(self):
        res = Transcript.__new__(Transcript)
        res._state = self._state.copy()
        return res
