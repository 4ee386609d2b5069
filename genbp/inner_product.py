"""
The weighted inner-product argument of Bulletproofs.

For public generators, per-index weights on h_bold, and a scalar u, the
prover convinces the verifier it knows a, b with

    P = <a, g_bold> + <b, h_bold * weights> + <a, b> * (u * g)

in log2(n) rounds, each halving the vectors under a Fiat-Shamir challenge.
Verification is deferred into a BatchVerifier.
"""
import logging

from .bls12 import Fp, Point, multiexp, random_fp
from .util import isPowerOfTwo, log2
from .vectors import ScalarVector
from .zeroize import Zeroizing

logger = logging.getLogger(__name__)

DST = b"inner_product"


class IpError(Exception):
    pass


class IncorrectAmountOfGenerators(IpError):
    pass


class DifferingLrLengths(IpError):
    pass


class IncorrectProofShape(IpError):
    pass


class IpWitness(object):

    def __init__(self, a, b):
        a = a if type(a) is ScalarVector else ScalarVector(a)
        b = b if type(b) is ScalarVector else ScalarVector(b)
        if len(a) != len(b):
            raise DifferingLrLengths("a has %d scalars, b has %d" % (len(a), len(b)))
        if not isPowerOfTwo(len(a)):
            raise IncorrectAmountOfGenerators("witness length %d is not a power of 2" % len(a))
        self.a = a
        self.b = b

    def zeroize(self):
        self.a.zeroize()
        self.b.zeroize()


class IpProof(object):
    """L and R for every round, then the folded a and b."""

    def __init__(self, L, R, a, b):
        self.L = list(L)
        self.R = list(R)
        self.a = a
        self.b = b

    def write(self):
        res = b"".join(L.to_bytes() for L in self.L)
        res += b"".join(R.to_bytes() for R in self.R)
        return res + self.a.to_bytes() + self.b.to_bytes()

    @classmethod
    def read(cls, reader, rounds):
        L = [reader.point() for _ in range(rounds)]
        R = [reader.point() for _ in range(rounds)]
        a = reader.scalar()
        b = reader.scalar()
        return cls(L, R, a, b)

    def __eq__(self, other):
        return (type(other) is IpProof and self.L == other.L and self.R == other.R
                and self.a == other.a and self.b == other.b)

    __hash__ = None

    def __repr__(self):
        return 'IpProof(%d rounds)' % len(self.L)


def challenge_products(xs, x_invs):
    """
    args:
       xs, x_invs   round challenges and their inverses, first round first
    returns:
       (2**rounds vector) res[i] = prod_k (xs[k] if bit k of i else x_invs[k]),
       where the first round is the most significant bit
    """
    res = [Fp(1)]
    for x, x_inv in zip(xs, x_invs):
        res = [p * c for p in res for c in (x_inv, x)]
    return res


class IpStatement(object):

    def __init__(self, generators, h_bold_weights, u, P=None, verifier_weight=None,
                 transcript_P=True):
        h_bold_weights = (h_bold_weights if type(h_bold_weights) is ScalarVector
                          else ScalarVector(h_bold_weights))
        if len(h_bold_weights) != len(generators):
            raise IncorrectAmountOfGenerators(
                "%d weights for %d generators" % (len(h_bold_weights), len(generators)))
        self.generators = generators
        self.h_bold_weights = h_bold_weights
        self.u = Fp(u)
        self.P = P
        self.verifier_weight = verifier_weight
        self.transcript_P = transcript_P

    @classmethod
    def new(cls, generators, h_bold_weights, u, P):
        """A standalone statement; P is bound into the transcript."""
        assert type(P) is Point
        return cls(generators, h_bold_weights, u, P=P)

    @classmethod
    def new_without_P_transcript(cls, generators, h_bold_weights, u, P=None,
                                 verifier_weight=None):
        """
        A statement whose P the caller has already committed to. The prover
        needs P; the verifier instead takes the weight under which P's terms
        were already added to its BatchVerifier.
        """
        return cls(generators, h_bold_weights, u, P=P, verifier_weight=verifier_weight,
                   transcript_P=False)

    def _transcript_P(self, transcript):
        if self.transcript_P:
            transcript.domain_separate(b"inner_product")
            transcript.append_message(b"generators", self.generators.transcript)
            transcript.append_message(b"P", self.P.to_bytes())

    @staticmethod
    def _transcript_L_R(transcript, L, R):
        transcript.append_message(b"L", L.to_bytes())
        transcript.append_message(b"R", R.to_bytes())
        return transcript.challenge_scalar(DST, b"x")

    def prove(self, transcript, witness):
        """
        Consumes `witness`: its vectors are zeroed once this returns.
        """
        with Zeroizing(witness) as secrets:
            assert self.P is not None, "proving requires P"
            n = len(self.generators)
            if len(witness.a) != n:
                raise IncorrectAmountOfGenerators(
                    "%d generators for a witness of length %d" % (n, len(witness.a)))

            self._transcript_P(transcript)

            u = self.generators.g * self.u
            g_bold = self.generators.g_bold
            h_bold = self.generators.h_bold.mul_vec(self.h_bold_weights)
            a = secrets.add(witness.a.copy())
            b = secrets.add(witness.b.copy())

            L_vec = []
            R_vec = []
            while len(g_bold) > 1:
                a1, a2 = secrets.add(*a.split())
                b1, b2 = secrets.add(*b.split())
                g1, g2 = g_bold.split()
                h1, h2 = h_bold.split()

                L = multiexp(list(zip(a1, g2)) + list(zip(b2, h1)) + [(a1.inner_product(b2), u)])
                R = multiexp(list(zip(a2, g1)) + list(zip(b1, h2)) + [(a2.inner_product(b1), u)])
                L_vec.append(L)
                R_vec.append(R)

                x = self._transcript_L_R(transcript, L, R)
                x_inv = x.inverse()

                g_bold = g1 * x_inv + g2 * x
                h_bold = h1 * x + h2 * x_inv
                a = secrets.add(a1 * x + a2 * x_inv)
                b = secrets.add(b1 * x_inv + b2 * x)

            proof = IpProof(L_vec, R_vec, a[0], b[0])
        logger.debug("inner-product proof over %d generators, %d rounds", n, len(L_vec))
        return proof

    def verify(self, rng, verifier, transcript, proof):
        """
        Queue the final check of `proof` into `verifier`.

        raises:
           IncorrectProofShape   if L and R don't have one entry per round
        """
        n = len(self.generators)
        rounds = log2(n)
        if len(proof.L) != rounds or len(proof.R) != rounds:
            raise IncorrectProofShape(
                "expected %d rounds, got %d L and %d R" % (rounds, len(proof.L), len(proof.R)))

        if self.P is not None:
            weight = random_fp(rng)
        else:
            assert self.verifier_weight is not None, "verifying without P requires a weight"
            weight = self.verifier_weight

        self._transcript_P(transcript)
        xs = [self._transcript_L_R(transcript, L, R) for L, R in zip(proof.L, proof.R)]
        x_invs = [x.inverse() for x in xs]

        # sum x^2 L + P + sum x^-2 R == <a * s, g_bold> + <b * s', h_bold * weights> + ab * u
        for L, R, x, x_inv in zip(proof.L, proof.R, xs, x_invs):
            verifier.additional.append((weight * x * x, L))
            verifier.additional.append((weight * x_inv * x_inv, R))

        products = challenge_products(xs, x_invs)
        for i in range(n):
            verifier.g_bold[i] -= weight * proof.a * products[i]
            verifier.h_bold[i] -= weight * proof.b * products[n - 1 - i] * self.h_bold_weights[i]
        verifier.g -= weight * proof.a * proof.b * self.u

        if self.P is not None:
            verifier.additional.append((weight, self.P))
