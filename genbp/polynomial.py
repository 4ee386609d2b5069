from .bls12 import Fp
from .vectors import ScalarVector


class VectorPolynomial(object):
    """
    p(X) = sum_i coefficients[i] * X^i, where every coefficient is an
    n-vector. Unassigned coefficients are the zero vector.
    """

    def __init__(self, n, length):
        self.n = n
        self.coefficients = [ScalarVector.zeros(n) for _ in range(length)]

    def __len__(self):
        return len(self.coefficients)

    def __getitem__(self, i):
        return self.coefficients[i]

    def __setitem__(self, i, coeff):
        assert len(coeff) == self.n
        self.coefficients[i] = coeff

    def inner_product(self, other):
        """
        Coefficients of the scalar polynomial <p(X), q(X)>, of length
        len(p) + len(q) - 1.
        """
        assert self.n == other.n
        t = [Fp(0)] * (len(self) + len(other) - 1)
        for i, l in enumerate(self.coefficients):
            for j, r in enumerate(other.coefficients):
                t[i + j] += l.inner_product(r)
        return t

    def __call__(self, x):
        # Horner
        res = ScalarVector.zeros(self.n)
        for coeff in reversed(self.coefficients):
            res = res * x + coeff
        return res

    def zeroize(self):
        for coeff in self.coefficients:
            coeff.zeroize()

    def __repr__(self):
        return 'VectorPolynomial(n=%d, %d coefficients)' % (self.n, len(self))
