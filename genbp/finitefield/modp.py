from .euclidean import extendedEuclideanAlgorithm
from .numbertype import FieldElement, memoize, typecheck


# so all IntegersModP are instances of the same base class
class _Modular(FieldElement):
    pass


@memoize
def IntegersModP(p):
    # assume p is prime
    nbytes = (p.bit_length() + 7) // 8

    class IntegerModP(_Modular):
        __slots__ = ('n',)

        def __init__(self, n):
            try:
                self.n = int(n) % IntegerModP.p
            except (TypeError, ValueError):
                raise TypeError(
                    "Can't cast type %s to %s in __init__"
                    % (type(n).__name__, type(self).__name__)
                )

        @typecheck
        def __add__(self, other):
            return IntegerModP(self.n + other.n)

        @typecheck
        def __sub__(self, other):
            return IntegerModP(self.n - other.n)

        @typecheck
        def __mul__(self, other):
            return IntegerModP(self.n * other.n)

        def __neg__(self):
            return IntegerModP(-self.n)

        @typecheck
        def __eq__(self, other):
            return self.n == other.n

        @typecheck
        def __ne__(self, other):
            return self.n != other.n

        def inverse(self):
            # need to use the division algorithm *as integers* because we're
            # doing it on the modulus itself (which would otherwise be zero)
            if self.n == 0:
                raise ZeroDivisionError("0 has no inverse in %s" % IntegerModP.__name__)
            x, y, d = extendedEuclideanAlgorithm(self.n, self.p)
            return IntegerModP(x)

        def is_zero(self):
            return self.n == 0

        def to_bytes(self):
            # canonical little-endian encoding
            return self.n.to_bytes(nbytes, 'little')

        @classmethod
        def from_bytes(cls, data):
            if len(data) != nbytes:
                raise ValueError("expected %d bytes, got %d" % (nbytes, len(data)))
            n = int.from_bytes(data, 'little')
            if n >= cls.p:
                raise ValueError("non-canonical field element encoding")
            return cls(n)

        def __str__(self):
            return str(self.n)

        def __repr__(self):
            return "%d (mod %d)" % (self.n, self.p)

        def __int__(self):
            return self.n

        def __hash__(self):
            return hash((self.n, self.p))

    IntegerModP.p = p
    IntegerModP.nbytes = nbytes
    IntegerModP.__name__ = 'Z/%d' % (p)
    IntegerModP.englishName = 'IntegersMod%d' % (p)
    return IntegerModP
