from py_ecc.optimized_bls12_381 import FQ, Z1, add, neg, multiply, eq, is_inf, is_on_curve
from py_ecc.optimized_bls12_381 import b, curve_order, field_modulus
from py_ecc.bls.g2_primitives import G1_to_pubkey, pubkey_to_G1
from py_ecc.bls.hash import expand_message_xmd

import hashlib
import random

from .finitefield import IntegersModP

# BLS12_381 group order
Fp = IntegersModP(curve_order)
Fp.__repr__ = lambda self: hex(self.n)[:15] + "..." if len(hex(self.n))>=15 else hex(self.n)

# h such that h * E(Fq) lands in the prime-order subgroup
G1_COFACTOR = 0x396c8c005555e1568c00aaab0000aaab

POINT_BYTES = 48
SCALAR_BYTES = Fp.nbytes


class Point(object):
    """
    An element of the prime-order subgroup of BLS12-381 G1, wrapping the
    projective tuples py_ecc works with.
    """

    def __init__(self, pt):
        self.pt = pt

    @classmethod
    def identity(cls):
        return cls(Z1)

    def is_identity(self):
        return is_inf(self.pt)

    def __add__(self, other):
        assert type(other) is Point
        return Point(add(self.pt, other.pt))

    def __sub__(self, other):
        return self + (-other)

    def __neg__(self):
        return Point(neg(self.pt))

    def __mul__(self, x):
        assert type(x) in (int, Fp)
        return Point(multiply(self.pt, int(x) % curve_order))

    def __rmul__(self, x):
        return self.__mul__(x)

    def __eq__(self, other):
        return isinstance(other, Point) and eq(self.pt, other.pt)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self.to_bytes())

    def to_bytes(self):
        return bytes(G1_to_pubkey(self.pt))

    @classmethod
    def from_bytes(cls, data):
        if len(data) != POINT_BYTES:
            raise ValueError("expected %d bytes, got %d" % (POINT_BYTES, len(data)))
        pt = pubkey_to_G1(bytes(data))
        if not is_inf(multiply(pt, curve_order)):
            raise ValueError("point is not in the prime-order subgroup")
        return cls(pt)

    def __repr__(self):
        return 'Point(%s...)' % self.to_bytes().hex()[:16]


def multiexp(terms):
    """
    args:
       terms   sequence of (scalar, Point)
    returns:
       sum(scalar * point)
    """
    acc = Z1
    for scalar, point in terms:
        s = int(scalar) % curve_order
        if s:
            acc = add(acc, multiply(point.pt, s))
    return Point(acc)


def hash_to_fp(dst, msg):
    # 64 bytes so the reduction mod r is statistically uniform
    data = expand_message_xmd(msg, dst, 64, hashlib.sha256)
    return Fp(int.from_bytes(data, 'big'))


def hash_to_point(dst, msg):
    """
    Try-and-increment onto y^2 = x^3 + 4, then clear the cofactor. Nobody
    learns the discrete log of the result with respect to any other point.
    """
    p = field_modulus
    counter = 0
    while True:
        data = expand_message_xmd(msg + counter.to_bytes(4, 'little'), dst, 64, hashlib.sha256)
        x = int.from_bytes(data, 'big') % p
        rhs = (x * x * x + b.n) % p
        # p = 3 (mod 4)
        y = pow(rhs, (p + 1) // 4, p)
        if (y * y) % p == rhs:
            pt = (FQ(x), FQ(y), FQ.one())
            assert is_on_curve(pt, b)
            pt = multiply(pt, G1_COFACTOR)
            if not is_inf(pt):
                return Point(pt)
        counter += 1


_system_random = random.SystemRandom()


def random_fp(rng=None):
    rng = rng or _system_random
    return Fp(rng.randint(0, Fp.p - 1))


class Reader(object):
    """Cursor over a serialized proof."""

    def __init__(self, data):
        self.data = bytes(data)
        self.offset = 0

    def take(self, k):
        if self.offset + k > len(self.data):
            raise ValueError("truncated encoding")
        res = self.data[self.offset:self.offset + k]
        self.offset += k
        return res

    def point(self):
        return Point.from_bytes(self.take(POINT_BYTES))

    def scalar(self):
        return Fp.from_bytes(self.take(SCALAR_BYTES))

    def finish(self):
        if self.offset != len(self.data):
            raise ValueError("%d trailing bytes" % (len(self.data) - self.offset))
