"""
Arithmetic-circuit proofs over Pedersen and Pedersen vector commitments.

The statement is a circuit of n multiplication gates

    aL * aR = aO

bound by q linear constraints, row by row,

    WL.aL + WR.aR + WO.aO + sum_i (WCL_i.C_i.g_values + WCR_i.C_i.h_values) = WV.V + c

where V are Pedersen commitments and C are Pedersen vector commitments
whose openings form the rest of the witness. This is the protocol of
Bulletproofs section 5.1, with the vector commitments folded into the l
and r polynomials as in the Generalized Bulletproofs construction, and
the final check handed to the inner-product argument.
"""
import logging
from collections import namedtuple

from .bls12 import Reader, multiexp, random_fp
from .inner_product import IpError, IpProof, IpStatement, IpWitness
from .pedersen import PedersenCommitment, PedersenVectorCommitment
from .polynomial import VectorPolynomial
from .util import log2, nearestPowerOfTwo
from .vectors import PointVector, ScalarVector
from .weight_matrix import WeightMatrix
from .zeroize import Zeroizing

logger = logging.getLogger(__name__)

DST = b"arithmetic_circuit_proof"


class AcError(Exception):
    pass


class DifferingLrLengths(AcError):
    pass


class IncorrectAmountOfGenerators(AcError):
    pass


class InconsistentAmountOfConstraints(AcError):
    pass


class ConstrainedNonExistentTerm(AcError):
    pass


class ConstrainedNonExistentCommitment(AcError):
    pass


class InconsistentWitness(AcError):
    pass


class IncorrectTBeforeNiLength(AcError):
    pass


class IncorrectTAfterNiLength(AcError):
    pass


class IpFailure(AcError):
    """The inner-product argument rejected the proof; `error` says how."""

    def __init__(self, error):
        super().__init__("inner-product argument failed: %r" % (error,))
        self.error = error


CircuitIndices = namedtuple('CircuitIndices', 'ni ilr io is_ jlr jo js poly_len t_len')


def circuit_indices(c):
    """
    Where each term sits in l(X) and r(X) for a circuit over c vector
    commitments. Vector commitment i (counting from 1) is placed at X^i in l
    and X^(ni - i) in r, so its products with the other terms never land on
    X^ni.
    """
    ni = 2 * (c + 1)
    poly_len = ni + 2
    return CircuitIndices(
        ni=ni,
        ilr=ni // 2,
        io=ni,
        is_=ni + 1,
        jlr=ni // 2,
        jo=0,
        js=ni + 1,
        poly_len=poly_len,
        t_len=2 * poly_len - 1,
    )


def _u32(n):
    return n.to_bytes(4, 'little')


def _reject(reason, *args):
    logger.warning("witness rejected: " + reason, *args)
    return InconsistentWitness(reason % args)


class ArithmeticCircuitWitness(object):
    """
    args:
       aL, aR   (n' vectors) left and right inputs of the multiplication gates
       c        openings of the statement's vector commitments, in order
       v        openings of the statement's Pedersen commitments, in order
    """

    def __init__(self, aL, aR, c=(), v=()):
        aL = aL if type(aL) is ScalarVector else ScalarVector(aL)
        aR = aR if type(aR) is ScalarVector else ScalarVector(aR)
        if len(aL) != len(aR):
            raise DifferingLrLengths("aL has %d scalars, aR has %d" % (len(aL), len(aR)))
        for opening in c:
            assert type(opening) is PedersenVectorCommitment
        for opening in v:
            assert type(opening) is PedersenCommitment
        self.aL = aL
        self.aR = aR
        self.aO = aL * aR
        self.c = list(c)
        self.v = list(v)

    def zeroize(self):
        self.aL.zeroize()
        self.aR.zeroize()
        self.aO.zeroize()
        for opening in self.c + self.v:
            opening.zeroize()


class ArithmeticCircuitProof(object):

    def __init__(self, AI, AO, S, T_before_ni, T_after_ni, tau_x, u, t_caret, ip):
        self.AI = AI
        self.AO = AO
        self.S = S
        self.T_before_ni = list(T_before_ni)
        self.T_after_ni = list(T_after_ni)
        self.tau_x = tau_x
        self.u = u
        self.t_caret = t_caret
        self.ip = ip

    def to_bytes(self):
        res = self.AI.to_bytes() + self.AO.to_bytes() + self.S.to_bytes()
        res += b"".join(T.to_bytes() for T in self.T_before_ni)
        res += b"".join(T.to_bytes() for T in self.T_after_ni)
        res += self.tau_x.to_bytes() + self.u.to_bytes() + self.t_caret.to_bytes()
        return res + self.ip.write()

    @classmethod
    def from_bytes(cls, data, n, vector_commitments):
        """
        args:
           data                 output of to_bytes
           n                    multiplications in the circuit proven
           vector_commitments   vector commitments in the circuit proven
        raises:
           ValueError   on a truncated, overlong or malformed encoding
        """
        idx = circuit_indices(vector_commitments)
        rounds = log2(nearestPowerOfTwo(n))
        reader = Reader(data)
        AI = reader.point()
        AO = reader.point()
        S = reader.point()
        T_before_ni = [reader.point() for _ in range(idx.ni)]
        T_after_ni = [reader.point() for _ in range(idx.t_len - idx.ni - 1)]
        tau_x = reader.scalar()
        u = reader.scalar()
        t_caret = reader.scalar()
        ip = IpProof.read(reader, rounds)
        reader.finish()
        return cls(AI, AO, S, T_before_ni, T_after_ni, tau_x, u, t_caret, ip)

    def __eq__(self, other):
        return type(other) is ArithmeticCircuitProof and self.to_bytes() == other.to_bytes()

    __hash__ = None

    def __repr__(self):
        return 'ArithmeticCircuitProof(%d T before ni, %d T after ni, %r)' % (
            len(self.T_before_ni), len(self.T_after_ni), self.ip)


class ArithmeticCircuitStatement(object):
    """
    args:
       generators   ProofGenerators, whose size n is the number of multiplications
       WL, WR, WO   WeightMatrix over aL, aR, aO
       WCL, WCR     one WeightMatrix per vector commitment, over its g_values and h_values
       WV           WeightMatrix over the Pedersen commitments
       c            (q vector) constants
       C            Pedersen vector commitments
       V            Pedersen commitments
    """

    def __init__(self, generators, WL, WR, WO, WCL, WCR, WV, c, C, V):
        WCL = list(WCL)
        WCR = list(WCR)
        c = c if type(c) is ScalarVector else ScalarVector(c)
        C = PointVector(C)
        V = PointVector(V)
        for W in [WL, WR, WO, WV] + WCL + WCR:
            assert type(W) is WeightMatrix

        n = len(generators)
        m = len(V)
        q = len(WL)

        if (len(WR) != q or len(WO) != q or len(WV) != q or len(c) != q
                or any(len(W) != q for W in WCL + WCR)):
            raise InconsistentAmountOfConstraints(
                "weight matrices and constants disagree on the number of constraints")
        if max(WL.highest_index, WR.highest_index, WO.highest_index) >= n:
            raise ConstrainedNonExistentTerm("constraint over a multiplication beyond %d" % n)
        if len(WCL) != len(C) or len(WCR) != len(C):
            raise ConstrainedNonExistentCommitment(
                "%d WCL and %d WCR for %d vector commitments" % (len(WCL), len(WCR), len(C)))
        if any(W.highest_index > n for W in WCL + WCR):
            raise ConstrainedNonExistentTerm("constraint over a committed value beyond %d" % n)
        if WV.highest_index > m:
            raise ConstrainedNonExistentCommitment("constraint over a commitment beyond %d" % m)

        self.generators = generators
        self.WL = WL
        self.WR = WR
        self.WO = WO
        self.WCL = WCL
        self.WCR = WCR
        self.WV = WV
        self.c = c
        self.C = C
        self.V = V
        logger.debug("validated %r", self)

    @property
    def n(self):
        return len(self.generators)

    @property
    def q(self):
        return len(self.WL)

    @property
    def m(self):
        return len(self.V)

    def __repr__(self):
        return 'ArithmeticCircuitStatement(n=%d, q=%d, %d vector commitments, m=%d)' % (
            self.n, self.q, len(self.C), self.m)

    def _initial_transcript(self, transcript, AI, AO, S):
        """
        returns:
           y, y_inv   (n vectors) powers of y and of its inverse, from y^0
           z          (q vector) powers of z, from z^1
        """
        transcript.domain_separate(DST)
        transcript.append_message(b"generators", self.generators.transcript)
        transcript.append_message(b"n", _u32(self.n))
        transcript.append_message(b"q", _u32(self.q))
        self.C.transcript(transcript, b"vector_commitment")
        self.V.transcript(transcript, b"commitment")
        transcript.append_message(b"AI", AI.to_bytes())
        transcript.append_message(b"AO", AO.to_bytes())
        transcript.append_message(b"S", S.to_bytes())

        y = transcript.challenge_scalar(DST, b"y")
        z = transcript.challenge_scalar(DST, b"z")
        logger.debug("derived challenges y, z")
        return (ScalarVector.powers(y, self.n), ScalarVector.powers(y.inverse(), self.n),
                ScalarVector.powers(z, self.q + 1)[1:])

    @staticmethod
    def _transcript_Ts(transcript, T_before_ni, T_after_ni):
        for T in T_before_ni:
            transcript.append_message(b"Ti", T.to_bytes())
        for T in T_after_ni:
            transcript.append_message(b"Tni+1+i", T.to_bytes())
        x = transcript.challenge_scalar(DST, b"x")
        logger.debug("derived challenge x")
        return ScalarVector.powers(x, len(T_before_ni) + 1 + len(T_after_ni))

    @staticmethod
    def _transcript_tau_x_u_t_caret(transcript, tau_x, u, t_caret):
        transcript.append_message(b"tau_x", tau_x.to_bytes())
        transcript.append_message(b"u", u.to_bytes())
        transcript.append_message(b"t_caret", t_caret.to_bytes())
        return transcript.challenge_scalar(DST, b"ip_x")

    def _pad_witness(self, witness):
        n = self.n
        if len(witness.aL) > n:
            raise IncorrectAmountOfGenerators(
                "%d multiplications for %d generators" % (len(witness.aL), n))
        for opening in witness.c:
            if len(opening.g_values) > n or len(opening.h_values) > n:
                raise IncorrectAmountOfGenerators("vector commitment longer than %d" % n)
        witness.aL.pad(n)
        witness.aR.pad(n)
        witness.aO.pad(n)
        for opening in witness.c:
            opening.g_values.pad(n)
            opening.h_values.pad(n)

    def _check_witness(self, witness):
        gens = self.generators
        if len(witness.c) != len(self.C):
            raise _reject("%d vector commitment openings for %d vector commitments",
                          len(witness.c), len(self.C))
        if len(witness.v) != self.m:
            raise _reject("%d commitment openings for %d commitments", len(witness.v), self.m)

        for i, (V, opening) in enumerate(zip(self.V, witness.v)):
            if opening.commit(gens.g, gens.h) != V:
                raise _reject("commitment %d does not open", i)
        for i, (C, opening) in enumerate(zip(self.C, witness.c)):
            if opening.commit(gens.g_bold, gens.h_bold, gens.h) != C:
                raise _reject("vector commitment %d does not open", i)

        values = [opening.value for opening in witness.v]
        for i in range(self.q):
            try:
                lhs = (self.WL.row_dot(i, witness.aL) + self.WR.row_dot(i, witness.aR)
                       + self.WO.row_dot(i, witness.aO))
                for opening, WCL, WCR in zip(witness.c, self.WCL, self.WCR):
                    lhs += WCL.row_dot(i, opening.g_values) + WCR.row_dot(i, opening.h_values)
                rhs = self.WV.row_dot(i, values) + self.c[i]
            except IndexError as e:
                raise _reject("constraint %d references a nonexistent term", i) from e
            if lhs != rhs:
                raise _reject("constraint %d is not satisfied", i)

    def prove(self, rng, transcript, witness):
        """
        args:
           rng          source of blinding randomness (random.Random interface)
           transcript   Transcript, advanced past the proof
           witness      ArithmeticCircuitWitness, consumed: its scalars are
                        zeroed once this returns or raises
        returns:
           ArithmeticCircuitProof
        """
        n = self.n
        gens = self.generators
        idx = circuit_indices(len(self.C))

        with Zeroizing(witness) as secrets:
            self._pad_witness(witness)
            self._check_witness(witness)

            # 1. Commit to the gates, and to the blinding vectors
            blinds = secrets.add(ScalarVector([random_fp(rng) for _ in range(3)]))
            alpha, beta, rho = blinds
            AI = multiexp(list(zip(witness.aL, gens.g_bold)) + list(zip(witness.aR, gens.h_bold))
                          + [(alpha, gens.h)])
            AO = multiexp(list(zip(witness.aO, gens.g_bold)) + [(beta, gens.h)])
            sL = secrets.add(ScalarVector([random_fp(rng) for _ in range(n)]))
            sR = secrets.add(ScalarVector([random_fp(rng) for _ in range(n)]))
            S = multiexp(list(zip(sL, gens.g_bold)) + list(zip(sR, gens.h_bold))
                         + [(rho, gens.h)])

            y, y_inv, z = self._initial_transcript(transcript, AI, AO, S)

            # 2. Lay out l(X) and r(X)
            l = secrets.add(VectorPolynomial(n, idx.poly_len))
            r = secrets.add(VectorPolynomial(n, idx.poly_len))
            l[idx.ilr] = self.WR.apply(n, z) * y_inv + witness.aL
            l[idx.io] = witness.aO.copy()
            l[idx.is_] = sL.copy()
            r[idx.jlr] = self.WL.apply(n, z) + witness.aR * y
            r[idx.jo] = self.WO.apply(n, z) - y
            r[idx.js] = sR * y
            for k, (opening, WCL, WCR) in enumerate(zip(witness.c, self.WCL, self.WCR)):
                i = k + 1
                j = idx.ni - i
                l[i] = opening.g_values.copy()
                l[j] = WCR.apply(n, z) * y_inv
                r[j] = WCL.apply(n, z)
                r[i] = r[i] + opening.h_values * y

            # 3. Commit to every coefficient of t(X) but the one at X^ni
            t = secrets.add(ScalarVector(l.inner_product(r)))
            assert len(t) == idx.t_len
            tau_before_ni = secrets.add(ScalarVector([random_fp(rng) for _ in range(idx.ni)]))
            tau_after_ni = secrets.add(
                ScalarVector([random_fp(rng) for _ in range(idx.t_len - idx.ni - 1)]))
            T_before_ni = [multiexp([(t_k, gens.g), (tau_k, gens.h)])
                           for t_k, tau_k in zip(t[:idx.ni], tau_before_ni)]
            T_after_ni = [multiexp([(t_k, gens.g), (tau_k, gens.h)])
                          for t_k, tau_k in zip(t[idx.ni + 1:], tau_after_ni)]

            x = self._transcript_Ts(transcript, T_before_ni, T_after_ni)

            # 4. Open l, r and the blinding of t at x
            l_x = secrets.add(l(x[1]))
            r_x = secrets.add(r(x[1]))
            t_caret = l_x.inner_product(r_x)

            v_masks = secrets.add(ScalarVector([opening.mask for opening in witness.v]))
            tau_x_coeffs = secrets.add(ScalarVector(
                list(tau_before_ni) + [self.WV.apply(self.m, z).inner_product(v_masks)]
                + list(tau_after_ni)))
            tau_x = tau_x_coeffs.inner_product(x)

            u = alpha * x[idx.ilr] + beta * x[idx.io] + rho * x[idx.is_]
            for k, opening in enumerate(witness.c):
                u += x[k + 1] * opening.mask

            ip_x = self._transcript_tau_x_u_t_caret(transcript, tau_x, u, t_caret)

            # 5. Prove <l(x), r(x)> = t_caret, with h_bold reweighted by y^-1
            P = multiexp(list(zip(l_x, gens.g_bold)) + list(zip(y_inv * r_x, gens.h_bold))
                         + [(ip_x * t_caret, gens.g)])
            statement = IpStatement.new_without_P_transcript(gens, y_inv, ip_x, P=P)
            ip = statement.prove(transcript, IpWitness(l_x.copy(), r_x.copy()))

            proof = ArithmeticCircuitProof(AI, AO, S, T_before_ni, T_after_ni, tau_x, u, t_caret, ip)

        logger.debug("proved %r", self)
        return proof

    def verify(self, rng, verifier, transcript, proof):
        """
        Queue the verification of `proof` into `verifier`, a BatchVerifier
        for the full generator set these ProofGenerators were reduced from.
        Nothing is added to `verifier` unless the proof is well-formed.

        raises:
           IncorrectTBeforeNiLength, IncorrectTAfterNiLength   on a malformed proof
           IpFailure                                           on a malformed IpProof
           ConstrainedNonExistentTerm, ConstrainedNonExistentCommitment
                                                               on a column past the last value
        """
        n = self.n
        m = self.m
        idx = circuit_indices(len(self.C))
        ni = idx.ni

        if len(proof.T_before_ni) != ni:
            raise IncorrectTBeforeNiLength(
                "expected %d, got %d" % (ni, len(proof.T_before_ni)))
        if len(proof.T_after_ni) != idx.t_len - ni - 1:
            raise IncorrectTAfterNiLength(
                "expected %d, got %d" % (idx.t_len - ni - 1, len(proof.T_after_ni)))

        # Columns at n or m are accepted by the statement yet have no generator
        if any(j >= n for W in self.WCL + self.WCR for (_, j), _ in W.items()):
            raise ConstrainedNonExistentTerm("constraint over a committed value beyond %d" % (n - 1))
        if any(j >= m for (_, j), _ in self.WV.items()):
            raise ConstrainedNonExistentCommitment("constraint over a commitment beyond %d" % (m - 1))

        y, y_inv, z = self._initial_transcript(transcript, proof.AI, proof.AO, proof.S)

        WL_z = self.WL.apply(n, z)
        WR_z_y_inv = self.WR.apply(n, z) * y_inv
        delta = WR_z_y_inv.inner_product(WL_z)

        x = self._transcript_Ts(transcript, proof.T_before_ni, proof.T_after_ni)

        # Accumulate locally so a failure leaves `verifier` untouched
        local = type(verifier)(len(verifier))

        # t_caret g + tau_x h == x^ni ((delta + <z, c>) g + <WV(z), V>) + sum x^k T_k
        weight = random_fp(rng)
        local.g += weight * proof.t_caret
        local.h += weight * proof.tau_x
        local.g -= weight * x[ni] * (delta + z.inner_product(self.c))
        for V_weight, V in zip(self.WV.apply(m, z), self.V):
            local.additional.append((-weight * x[ni] * V_weight, V))
        for k, T in enumerate(proof.T_before_ni):
            local.additional.append((-weight * x[k], T))
        for k, T in enumerate(proof.T_after_ni):
            local.additional.append((-weight * x[ni + 1 + k], T))

        # Rebuild P for the inner-product argument, under a second weight
        weight = random_fp(rng)
        local.additional.append((weight * x[idx.ilr], proof.AI))
        local.additional.append((weight * x[idx.io], proof.AO))
        local.additional.append((weight * x[idx.is_], proof.S))
        # -x^js y^n, which the y_inv weighting turns into -h_bold[:n]
        local.h_sum[log2(n)] -= weight

        h_bold_scalars = WL_z * x[idx.jlr] + self.WO.apply(n, z) * x[idx.jo]
        g_bold_scalars = WR_z_y_inv * x[idx.jlr]
        for k, (C, WCL, WCR) in enumerate(zip(self.C, self.WCL, self.WCR)):
            i = k + 1
            j = ni - i
            local.additional.append((weight * x[i], C))
            h_bold_scalars = h_bold_scalars + WCL.apply(n, z) * x[j]
            g_bold_scalars = g_bold_scalars + WCR.apply(n, z) * y_inv * x[j]
        h_bold_scalars = h_bold_scalars * y_inv
        for i in range(n):
            local.g_bold[i] += weight * g_bold_scalars[i]
            local.h_bold[i] += weight * h_bold_scalars[i]
        local.h -= weight * proof.u

        ip_x = self._transcript_tau_x_u_t_caret(transcript, proof.tau_x, proof.u, proof.t_caret)
        local.g += weight * ip_x * proof.t_caret

        statement = IpStatement.new_without_P_transcript(
            self.generators, y_inv, ip_x, verifier_weight=weight)
        try:
            statement.verify(rng, local, transcript, proof.ip)
        except IpError as e:
            raise IpFailure(e) from e

        verifier += local
        logger.debug("queued verification of %r", self)
