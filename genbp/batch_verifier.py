from .bls12 import Fp
from .util import log2


class BatchVerifier(object):
    """
    Running weighted sums for one final multi-exponentiation.

    Verifying a proof never touches a point of the fixed generator set; it
    only adds to the scalars those generators will eventually be multiplied
    by. `h_sum[k]` is the weight of sum(h_bold[:2**k]), which lets a proof
    weight every h_bold of its size equally with a single scalar. Any point
    outside the generator set goes into `additional` as (scalar, Point).

    The accumulator is owned by whoever is building a batch. Independent
    accumulators over the same generators can be merged with `+`.
    """

    def __init__(self, n):
        self.g = Fp(0)
        self.h = Fp(0)
        self.g_bold = [Fp(0)] * n
        self.h_bold = [Fp(0)] * n
        self.h_sum = [Fp(0)] * (log2(n) + 1)
        self.additional = []

    def __len__(self):
        return len(self.g_bold)

    def __iadd__(self, other):
        assert type(other) is BatchVerifier
        assert len(self) == len(other), "batch verifiers for differing generator sets"
        self.g += other.g
        self.h += other.h
        self.g_bold = [a + b for a, b in zip(self.g_bold, other.g_bold)]
        self.h_bold = [a + b for a, b in zip(self.h_bold, other.h_bold)]
        self.h_sum = [a + b for a, b in zip(self.h_sum, other.h_sum)]
        self.additional = self.additional + other.additional
        return self

    def __add__(self, other):
        res = BatchVerifier(len(self))
        res += self
        res += other
        return res

    def __repr__(self):
        return 'BatchVerifier(%d generators, %d additional terms)' % (
            len(self), len(self.additional))
