from .bls12 import Fp, Point, multiexp, random_fp
from .vectors import ScalarVector, PointVector
from .weight_matrix import WeightMatrix
from .transcript import Transcript, ZeroChallenge
from .generators import Generators, ProofGenerators
from .batch_verifier import BatchVerifier
from .pedersen import PedersenCommitment, PedersenVectorCommitment
from .inner_product import IpError, IpProof, IpStatement, IpWitness
from .arithmetic_circuit_proof import (
    AcError,
    ArithmeticCircuitProof,
    ArithmeticCircuitStatement,
    ArithmeticCircuitWitness,
    circuit_indices,
)
