import sys, os
sys.path.append(os.path.realpath(os.path.dirname(__file__)+"/.."))
import random

import pytest

from genbp import Generators

# py_ecc is pure Python: keep the generator set small
N_GENERATORS = 16


@pytest.fixture(scope="session")
def generators():
    return Generators.derive(N_GENERATORS)


@pytest.fixture
def rng():
    return random.Random(0xB0B)
