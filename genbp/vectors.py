# Use numpy to provide element-wise operations over field elements
import numpy as np

from .bls12 import Fp, Point, multiexp


class ScalarVector(object):
    """
    An ordered vector of field elements. Arithmetic between two vectors is
    element-wise and requires equal lengths; multiplying by a single Fp (or
    int) scales every element.
    """
    operatorPrecedence = 2

    def __init__(self, values=()):
        self.data = np.array([Fp(v) for v in values], dtype=object)

    @classmethod
    def _wrap(cls, array):
        res = cls.__new__(cls)
        res.data = array
        return res

    @classmethod
    def zeros(cls, n):
        return cls([Fp(0)] * n)

    @classmethod
    def powers(cls, x, n):
        """[x^0, x^1, ..., x^(n-1)]"""
        res = []
        acc = Fp(1)
        for _ in range(n):
            res.append(acc)
            acc = acc * x
        return cls(res)

    def __len__(self):
        return len(self.data)

    def __iter__(self):
        return iter(self.data)

    def __getitem__(self, i):
        if isinstance(i, slice):
            return ScalarVector._wrap(self.data[i].copy())
        return self.data[i]

    def __setitem__(self, i, value):
        self.data[i] = Fp(value)

    def __add__(self, other):
        assert type(other) is ScalarVector
        assert len(self) == len(other), "differing vector lengths"
        return ScalarVector._wrap(self.data + other.data)

    def __sub__(self, other):
        assert type(other) is ScalarVector
        assert len(self) == len(other), "differing vector lengths"
        return ScalarVector._wrap(self.data - other.data)

    def __neg__(self):
        return ScalarVector._wrap(-self.data)

    def __mul__(self, other):
        # Hadamard product
        if type(other) is ScalarVector:
            assert len(self) == len(other), "differing vector lengths"
            return ScalarVector._wrap(self.data * other.data)
        # Scale by a field element
        if type(other) is int:
            other = Fp(other)
        if type(other) is Fp:
            return ScalarVector._wrap(self.data * other)
        return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        if type(other) is not ScalarVector or len(self) != len(other):
            return False
        return all(a == b for a, b in zip(self.data, other.data))

    __hash__ = None

    def inner_product(self, other):
        assert len(self) == len(other), "differing vector lengths"
        return sum(self.data * other.data, Fp(0))

    def split(self):
        assert len(self) > 1 and len(self) % 2 == 0
        half = len(self) // 2
        return self[:half], self[half:]

    def pad(self, n):
        """Right-pad with zeros, in place, to length n."""
        assert len(self) <= n
        zeros = np.empty(n - len(self), dtype=object)
        zeros.fill(Fp(0))
        self.data = np.concatenate([self.data, zeros])

    def copy(self):
        return ScalarVector._wrap(self.data.copy())

    def zeroize(self):
        for i in range(len(self.data)):
            self.data[i] = Fp(0)

    def __repr__(self):
        return 'ScalarVector(%r)' % (list(self.data),)


class PointVector(object):
    """An ordered vector of group elements."""

    def __init__(self, points=()):
        self.points = list(points)
        for point in self.points:
            assert type(point) is Point

    def __len__(self):
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, i):
        if isinstance(i, slice):
            return PointVector(self.points[i])
        return self.points[i]

    def __eq__(self, other):
        return type(other) is PointVector and self.points == other.points

    __hash__ = None

    def __add__(self, other):
        assert len(self) == len(other), "differing vector lengths"
        return PointVector([a + b for a, b in zip(self.points, other.points)])

    def mul_vec(self, scalars):
        assert len(self) == len(scalars), "differing vector lengths"
        return PointVector([point * scalar for point, scalar in zip(self.points, scalars)])

    def __mul__(self, scalar):
        return PointVector([point * scalar for point in self.points])

    def multiexp(self, scalars):
        assert len(self) == len(scalars), "differing vector lengths"
        return multiexp(zip(scalars, self.points))

    def split(self):
        assert len(self) > 1 and len(self) % 2 == 0
        half = len(self) // 2
        return self[:half], self[half:]

    def transcript(self, transcript, label):
        for point in self.points:
            transcript.append_message(label, point.to_bytes())

    def __repr__(self):
        return 'PointVector(%d points)' % len(self.points)
