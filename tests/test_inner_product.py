import pytest

from genbp.bls12 import Fp, Reader, multiexp, random_fp
from genbp.inner_product import (
    DifferingLrLengths,
    IncorrectAmountOfGenerators,
    IncorrectProofShape,
    IpProof,
    IpStatement,
    IpWitness,
    challenge_products,
)
from genbp.transcript import Transcript
from genbp.vectors import ScalarVector


def instance(rng, gens, weights=None, u=Fp(1)):
    n = len(gens)
    weights = weights if weights is not None else ScalarVector([1] * n)
    a = ScalarVector([random_fp(rng) for _ in range(n)])
    b = ScalarVector([random_fp(rng) for _ in range(n)])
    P = multiexp(list(zip(a, gens.g_bold)) + list(zip(b * weights, gens.h_bold))
                 + [(a.inner_product(b) * u, gens.g)])
    return IpStatement.new(gens, weights, u, P), IpWitness(a, b)


@pytest.mark.parametrize("n", [1, 2, 4, 8])
def test_prove_verify(generators, rng, n):
    gens = generators.reduce(n)
    statement, witness = instance(rng, gens)
    proof = statement.prove(Transcript(b"test"), witness)
    assert len(proof.L) == len(proof.R) == n.bit_length() - 1

    verifier = generators.batch_verifier()
    statement.verify(rng, verifier, Transcript(b"test"), proof)
    assert generators.verify(verifier)


def test_weighted(generators, rng):
    gens = generators.reduce(4)
    weights = ScalarVector([random_fp(rng) for _ in range(4)])
    statement, witness = instance(rng, gens, weights, random_fp(rng))
    proof = statement.prove(Transcript(b"test"), witness)

    verifier = generators.batch_verifier()
    statement.verify(rng, verifier, Transcript(b"test"), proof)
    assert generators.verify(verifier)


def test_witness_consumed(generators, rng):
    statement, witness = instance(rng, generators.reduce(2))
    statement.prove(Transcript(b"test"), witness)
    assert witness.a == ScalarVector.zeros(2)
    assert witness.b == ScalarVector.zeros(2)


def test_tampered(generators, rng):
    gens = generators.reduce(4)
    statement, witness = instance(rng, gens)
    proof = statement.prove(Transcript(b"test"), witness)
    proof.a += 1

    verifier = generators.batch_verifier()
    statement.verify(rng, verifier, Transcript(b"test"), proof)
    assert not generators.verify(verifier)


def test_different_transcript(generators, rng):
    gens = generators.reduce(4)
    statement, witness = instance(rng, gens)
    proof = statement.prove(Transcript(b"test"), witness)

    verifier = generators.batch_verifier()
    statement.verify(rng, verifier, Transcript(b"other"), proof)
    assert not generators.verify(verifier)


def test_batch(generators, rng):
    verifier = generators.batch_verifier()
    for n in [2, 4, 4, 8]:
        statement, witness = instance(rng, generators.reduce(n))
        proof = statement.prove(Transcript(b"test"), witness)
        statement.verify(rng, verifier, Transcript(b"test"), proof)
    assert generators.verify(verifier)


def test_incorrect_shape(generators, rng):
    gens = generators.reduce(4)
    statement, witness = instance(rng, gens)
    proof = statement.prove(Transcript(b"test"), witness)
    proof.L.pop()
    with pytest.raises(IncorrectProofShape):
        statement.verify(rng, generators.batch_verifier(), Transcript(b"test"), proof)


def test_malformed_witness(generators, rng):
    with pytest.raises(DifferingLrLengths):
        IpWitness([1, 2], [1])
    with pytest.raises(IncorrectAmountOfGenerators):
        IpWitness([1, 2, 3], [1, 2, 3])
    with pytest.raises(IncorrectAmountOfGenerators):
        IpWitness([], [])

    statement, _ = instance(rng, generators.reduce(4))
    with pytest.raises(IncorrectAmountOfGenerators):
        statement.prove(Transcript(b"test"), IpWitness([1, 2], [3, 4]))
    with pytest.raises(IncorrectAmountOfGenerators):
        IpStatement.new(generators.reduce(4), [1, 1], Fp(1), statement.P)


def test_serialization(generators, rng):
    statement, witness = instance(rng, generators.reduce(8))
    proof = statement.prove(Transcript(b"test"), witness)
    encoded = proof.write()
    assert len(encoded) == 2 * 3 * 48 + 2 * 32

    reader = Reader(encoded)
    assert IpProof.read(reader, 3) == proof
    reader.finish()


def test_challenge_products():
    x0, x1 = Fp(2), Fp(3)
    products = challenge_products([x0, x1], [x0.inverse(), x1.inverse()])
    assert products == [
        x0.inverse() * x1.inverse(),
        x0.inverse() * x1,
        x0 * x1.inverse(),
        x0 * x1,
    ]
    assert challenge_products([], []) == [Fp(1)]
