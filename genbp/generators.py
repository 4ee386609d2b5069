import logging

from .batch_verifier import BatchVerifier
from .bls12 import Point, hash_to_point, multiexp
from .transcript import Transcript
from .util import isPowerOfTwo, nearestPowerOfTwo
from .vectors import PointVector

logger = logging.getLogger(__name__)

GENERATORS_DST = b"genbp generators"
DEFAULT_SEED = b"Generalized Bulletproofs"


class Generators(object):
    """
    The fixed generator set: g, h, and the parallel vectors g_bold, h_bold,
    whose length is a power of two. No generator may repeat.
    """

    def __init__(self, g, h, g_bold, h_bold):
        g_bold = PointVector(g_bold)
        h_bold = PointVector(h_bold)
        if len(g_bold) == 0:
            raise ValueError("no g_bold generators")
        if len(g_bold) != len(h_bold):
            raise ValueError("g_bold and h_bold have differing lengths")
        if not isPowerOfTwo(len(g_bold)):
            raise ValueError("the amount of generators must be a power of 2")

        seen = set()
        for point in [g, h] + g_bold.points + h_bold.points:
            assert type(point) is Point
            encoding = point.to_bytes()
            if encoding in seen:
                raise ValueError("duplicate generator %r" % point)
            seen.add(encoding)

        self.g = g
        self.h = h
        self.g_bold = g_bold
        self.h_bold = h_bold

        # h_sum[k] = sum(h_bold[:2**k])
        self.h_sum = []
        acc = Point.identity()
        for i, point in enumerate(h_bold):
            acc = acc + point
            if isPowerOfTwo(i + 1):
                self.h_sum.append(acc)

        transcript = Transcript(b"Generalized Bulletproofs Generators")
        transcript.domain_separate(b"generators")
        transcript.append_message(b"g", g.to_bytes())
        transcript.append_message(b"h", h.to_bytes())
        g_bold.transcript(transcript, b"g_bold")
        h_bold.transcript(transcript, b"h_bold")
        self.transcript = transcript.challenge(b"summary")

    @classmethod
    def derive(cls, n, seed=DEFAULT_SEED):
        """Hash `seed` onto the curve for every generator of an n-sized set."""
        logger.debug("deriving %d generators", n)

        def point(label):
            return hash_to_point(GENERATORS_DST, seed + b"/" + label)

        return cls(
            point(b"g"),
            point(b"h"),
            [point(b"g_bold/%d" % i) for i in range(n)],
            [point(b"h_bold/%d" % i) for i in range(n)],
        )

    def __len__(self):
        return len(self.g_bold)

    def reduce(self, n):
        """Generators for a circuit of n multiplications, rounded up to a power of 2."""
        n = nearestPowerOfTwo(n)
        if n > len(self):
            raise ValueError("%d generators requested, only %d available" % (n, len(self)))
        return ProofGenerators(self, n)

    def batch_verifier(self):
        return BatchVerifier(len(self))

    def verify(self, verifier):
        """
        Run the one multi-exponentiation of a batch. True iff every proof
        accumulated into `verifier` was valid (with overwhelming probability).
        """
        assert len(verifier) == len(self)
        terms = [(verifier.g, self.g), (verifier.h, self.h)]
        terms.extend(zip(verifier.g_bold, self.g_bold))
        terms.extend(zip(verifier.h_bold, self.h_bold))
        terms.extend(zip(verifier.h_sum, self.h_sum))
        terms.extend(verifier.additional)
        res = multiexp(terms).is_identity()
        logger.debug("batch of %d terms verified: %s", len(terms), res)
        return res


class ProofGenerators(object):
    """A prefix of a Generators set, sized for one proof."""

    def __init__(self, generators, n):
        assert isPowerOfTwo(n) and n <= len(generators)
        self.g = generators.g
        self.h = generators.h
        self.g_bold = generators.g_bold[:n]
        self.h_bold = generators.h_bold[:n]
        self.transcript = generators.transcript

    def __len__(self):
        return len(self.g_bold)

    def __repr__(self):
        return 'ProofGenerators(%d)' % len(self)
