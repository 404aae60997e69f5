from __future__ import annotations

import secrets
from dataclasses import dataclass
from hashlib import sha256
from typing import Callable

import pytest

from voprf.core import Blind, Evaluate, KeyGen, KeyPair, Params, PKDerive, Unblind, Verify
from voprf.errors import AllocationFailure, InvalidScalar

Q = 2**61 - 1  # Mersenne prime
GEN = 3


# Toy pairing: G1 = G2 = GT = (Z_Q, +), scalar action is multiplication and
# e(a, b) = a * b mod Q, which is bilinear.


@dataclass(frozen=True)
class FrOps:
    sample: Callable[[], int] = lambda: secrets.randbelow(Q - 1) + 1

    def random(self) -> int:
        return self.sample()

    def inverse(self, value: int) -> int:
        if value % Q == 0:
            raise InvalidScalar("zero has no inverse")
        return pow(value, Q - 2, Q)

    def is_zero(self, value: int) -> bool:
        return value % Q == 0


@dataclass(frozen=True)
class G1Ops:
    def hash_to_group(self, message: bytes) -> int:
        return 1 + int.from_bytes(sha256(message).digest(), "big") % (Q - 1)

    def scalar_mul(self, value: int, scalar: int) -> int:
        return (value * scalar) % Q

    def is_identity(self, value: int) -> bool:
        return value == 0


@dataclass(frozen=True)
class G2Ops:
    def generator(self) -> int:
        return GEN

    def scalar_mul(self, value: int, scalar: int) -> int:
        return (value * scalar) % Q

    def is_identity(self, value: int) -> bool:
        return value == 0


def toy_pair(left: int, right: int) -> int:
    return (left * right) % Q


def toy_params(fr: FrOps = FrOps()) -> Params:
    return Params(Fr=fr, G1=G1Ops(), G2=G2Ops(), pair=toy_pair)


def test_correctness_definition_voprf():
    params = toy_params()
    kp = KeyGen(params)
    assert kp.pk == PKDerive(params, kp.sk)

    message = b"test-input"
    r, blinded = Blind(params, message)
    evaluated = Evaluate(params, kp.sk, blinded)
    output = Unblind(params, evaluated, r)

    assert output == params.G1.scalar_mul(params.G1.hash_to_group(message), kp.sk)
    assert Verify(params, kp.pk, message, output)
    assert not Verify(params, kp.pk, b"different-input", output)


def test_output_independent_of_blinding_factor():
    params = toy_params()
    kp = KeyGen(params)

    r1, blinded1 = Blind(params, b"alice")
    r2, blinded2 = Blind(params, b"alice")
    assert r1 != r2
    assert blinded1 != blinded2

    out1 = Unblind(params, Evaluate(params, kp.sk, blinded1), r1)
    out2 = Unblind(params, Evaluate(params, kp.sk, blinded2), r2)
    assert out1 == out2


def test_verify_rejects_other_key():
    params = toy_params()
    kp = KeyGen(params)
    other = KeyGen(params)

    r, blinded = Blind(params, b"alice")
    output = Unblind(params, Evaluate(params, other.sk, blinded), r)

    assert Verify(params, other.pk, b"alice", output)
    assert not Verify(params, kp.pk, b"alice", output)


def test_verify_rejects_identity_inputs():
    params = toy_params()
    assert not Verify(params, 0, b"alice", 0)

    kp = KeyGen(params)
    assert not Verify(params, kp.pk, b"alice", 0)


def test_blind_surfaces_zero_draw():
    params = toy_params(FrOps(sample=lambda: 0))
    with pytest.raises(InvalidScalar):
        Blind(params, b"alice")


def test_unblind_rejects_zero_factor():
    params = toy_params()
    with pytest.raises(InvalidScalar):
        Unblind(params, 12345, 0)


def test_empty_message_is_valid_input():
    params = toy_params()
    kp = KeyGen(params)
    r, blinded = Blind(params, b"")
    output = Unblind(params, Evaluate(params, kp.sk, blinded), r)
    assert Verify(params, kp.pk, b"", output)


def test_memory_error_is_reported_as_allocation_failure():
    @dataclass(frozen=True)
    class ExhaustedG1(G1Ops):
        def hash_to_group(self, message: bytes) -> int:
            raise MemoryError

    params = Params(Fr=FrOps(), G1=ExhaustedG1(), G2=G2Ops(), pair=toy_pair)
    with pytest.raises(AllocationFailure) as info:
        Blind(params, b"alice")
    assert isinstance(info.value, MemoryError)
    assert info.value.code == -2


def test_key_pair_repr_hides_secret():
    kp = KeyPair(sk=424242, pk=7)
    assert "424242" not in repr(kp)
