# Demo: prove and batch-verify two small circuits
#   python -m genbp
import random

from genbp import (
    ArithmeticCircuitProof,
    ArithmeticCircuitStatement,
    ArithmeticCircuitWitness,
    Generators,
    PedersenCommitment,
    PedersenVectorCommitment,
    Transcript,
    WeightMatrix,
    random_fp,
)

N_GENERATORS = 8
TRANSCRIPT_NAME = b"genbp demo"


def single_multiplication(generators, rng):
    """aL * aR = aO for one gate, nothing else constrained."""
    x, y = random_fp(rng), random_fp(rng)
    statement = ArithmeticCircuitStatement(
        generators.reduce(1), WeightMatrix(), WeightMatrix(), WeightMatrix(),
        [], [], WeightMatrix(), [], [], [])
    return statement, ArithmeticCircuitWitness([x], [y])


def committed_vector(generators, rng):
    """A vector commitment whose first entry equals a Pedersen-committed value."""
    gens = generators.reduce(4)
    values = [random_fp(rng) for _ in range(4)]
    opening = PedersenVectorCommitment(values, [random_fp(rng) for _ in range(4)], random_fp(rng))
    v = PedersenCommitment(values[0], random_fp(rng))
    statement = ArithmeticCircuitStatement(
        gens,
        WeightMatrix([[]]), WeightMatrix([[]]), WeightMatrix([[]]),
        [WeightMatrix([[(0, 1)]])], [WeightMatrix([[]])],
        WeightMatrix([[(0, 1)]]),
        [0],
        [opening.commit(gens.g_bold, gens.h_bold, gens.h)],
        [v.commit(gens.g, gens.h)],
    )
    witness = ArithmeticCircuitWitness(
        [random_fp(rng) for _ in range(4)], [random_fp(rng) for _ in range(4)], [opening], [v])
    return statement, witness


def main():
    rng = random.SystemRandom()

    print('Deriving %d generators...' % N_GENERATORS)
    generators = Generators.derive(N_GENERATORS)

    verifier = generators.batch_verifier()
    for name, build in [('single multiplication', single_multiplication),
                        ('committed vector', committed_vector)]:
        statement, witness = build(generators, rng)
        print('Proving %s: %r' % (name, statement))
        proof = statement.prove(rng, Transcript(TRANSCRIPT_NAME), witness)
        encoded = proof.to_bytes()
        print('Proof: %d bytes' % len(encoded))

        proof = ArithmeticCircuitProof.from_bytes(encoded, statement.n, len(statement.C))
        statement.verify(rng, verifier, Transcript(TRANSCRIPT_NAME), proof)

    print('Verifying batch:', verifier)
    assert generators.verify(verifier)
    print('Batch verified')


if __name__ == '__main__':
    main()
