from .bls12 import Fp, multiexp
from .vectors import ScalarVector


class PedersenCommitment(object):
    """An opening of value * g + mask * h."""

    def __init__(self, value, mask):
        self.value = Fp(value)
        self.mask = Fp(mask)

    def commit(self, g, h):
        return multiexp([(self.value, g), (self.mask, h)])

    def zeroize(self):
        self.value = Fp(0)
        self.mask = Fp(0)


class PedersenVectorCommitment(object):
    """An opening of <g_values, g_bold> + <h_values, h_bold> + mask * h."""

    def __init__(self, g_values, h_values, mask):
        self.g_values = g_values if type(g_values) is ScalarVector else ScalarVector(g_values)
        self.h_values = h_values if type(h_values) is ScalarVector else ScalarVector(h_values)
        self.mask = Fp(mask)

    def commit(self, g_bold, h_bold, h):
        assert len(self.g_values) <= len(g_bold)
        assert len(self.h_values) <= len(h_bold)
        terms = list(zip(self.g_values, g_bold))
        terms.extend(zip(self.h_values, h_bold))
        terms.append((self.mask, h))
        return multiexp(terms)

    def zeroize(self):
        self.g_values.zeroize()
        self.h_values.zeroize()
        self.mask = Fp(0)
