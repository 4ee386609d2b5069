from functools import wraps


def memoize(f):
    cache = {}

    @wraps(f)
    def memoized(*args):
        if args not in cache:
            cache[args] = f(*args)
        return cache[args]

    memoized.cache = cache
    return memoized


def typecheck(f):
    """
    Coerce the right-hand operand of a binary operator into the type of the
    left-hand one, so that `Fp(3) + 4` and `Fp(3) == 3` do the obvious thing.
    """
    @wraps(f)
    def checked(self, other):
        if (hasattr(other.__class__, 'operatorPrecedence') and
                other.__class__.operatorPrecedence > self.__class__.operatorPrecedence):
            return NotImplemented

        if type(self) is not type(other):
            try:
                other = self.__class__(other)
            except TypeError:
                return NotImplemented

        return f(self, other)

    return checked


# so all the number types share the reflected operators
class DomainElement(object):
    operatorPrecedence = 1

    def __radd__(self, other): return self + other
    def __rsub__(self, other): return -self + other
    def __rmul__(self, other): return self * other


class FieldElement(DomainElement):

    def __truediv__(self, other):
        if type(self) is not type(other):
            other = self.__class__(other)
        return self * other.inverse()

    def __rtruediv__(self, other):
        return self.inverse() * other

    def __pow__(self, exponent):
        if exponent < 0:
            return self.inverse() ** -exponent
        return self.__class__(pow(int(self), exponent, self.p))
