from __future__ import annotations

import pytest

from instantiations.bls import init, make_bls_params
from voprf.core import KeyGen


@pytest.fixture(scope="session")
def bls_params():
    init()
    return make_bls_params()


@pytest.fixture(scope="module")
def key_pair(bls_params):
    return KeyGen(bls_params)
