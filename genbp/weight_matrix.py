import numpy as np

from .bls12 import Fp
from .vectors import ScalarVector


class WeightMatrix(object):
    """
    A q-row matrix of constraint weights, stored sparsely. Each row is a list
    of (column, weight) pairs; a column absent from a row has weight zero.

    `highest_index` is the largest column referenced by any row (0 for an
    empty matrix), which is what statement validation bounds.
    """

    def __init__(self, rows=()):
        self.highest_index = 0
        self.data = []
        for row in rows:
            self.push(row)

    def push(self, row):
        row = [(int(j), Fp(weight)) for (j, weight) in row]
        for (j, _) in row:
            assert j >= 0, "negative column index"
            self.highest_index = max(self.highest_index, j)
        self.data.append(row)

    def __len__(self):
        return len(self.data)

    def items(self):
        for i, row in enumerate(self.data):
            for (j, weight) in row:
                yield (i, j), weight

    def apply(self, n, z):
        """
        args:
           n   number of columns of the result
           z   (q vector) of per-row weights
        returns:
           (n vector) res[j] = sum_i z[i] * self[i, j]
        """
        assert len(self) == len(z)
        res = ScalarVector.zeros(n)
        for (i, j), weight in self.items():
            res[j] = res[j] + weight * z[i]
        return res

    def row_dot(self, i, values):
        """sum_j self[i, j] * values[j]"""
        acc = Fp(0)
        for (j, weight) in self.data[i]:
            acc += weight * values[j]
        return acc

    def to_dense(self, n):
        dense = np.empty((len(self), n), dtype=object)
        dense.fill(Fp(0))
        for (i, j), weight in self.items():
            dense[i, j] += weight
        return dense

    def __repr__(self):
        return 'WeightMatrix(%d rows, highest_index=%d)' % (len(self), self.highest_index)
