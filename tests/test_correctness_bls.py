from __future__ import annotations

from instantiations.bls import Point, Scalar, VerificationKey, hash_to_group
from voprf.core import Blind, Evaluate, KeyGen, PKDerive, Unblind, Verify


def test_bls_correctness_end_to_end(bls_params, key_pair):
    message = b"test-input"
    r, blinded = Blind(bls_params, message)
    assert not r.is_zero()

    evaluated = Evaluate(bls_params, key_pair.sk, blinded)
    output = Unblind(bls_params, evaluated, r)

    assert output == hash_to_group(message).mul(key_pair.sk)
    assert Verify(bls_params, key_pair.pk, message, output)
    assert not Verify(bls_params, key_pair.pk, b"different-input", output)


def test_bls_output_independent_of_blinding(bls_params, key_pair):
    r1, blinded1 = Blind(bls_params, b"alice")
    r2, blinded2 = Blind(bls_params, b"alice")
    assert blinded1 != blinded2

    out1 = Unblind(bls_params, Evaluate(bls_params, key_pair.sk, blinded1), r1)
    out2 = Unblind(bls_params, Evaluate(bls_params, key_pair.sk, blinded2), r2)
    assert out1 == out2


def test_bls_verify_rejects_other_key(bls_params, key_pair):
    other = KeyGen(bls_params)
    r, blinded = Blind(bls_params, b"alice")
    output = Unblind(bls_params, Evaluate(bls_params, other.sk, blinded), r)

    assert not Verify(bls_params, key_pair.pk, b"alice", output)


def test_bls_public_key_roundtrip_verifies(bls_params, key_pair):
    decoded = VerificationKey.from_bytes(key_pair.pk.to_bytes())
    assert decoded == key_pair.pk

    r, blinded = Blind(bls_params, b"test-input")
    output = Unblind(bls_params, Evaluate(bls_params, key_pair.sk, blinded), r)

    assert Verify(bls_params, key_pair.pk, b"test-input", output)
    assert Verify(bls_params, decoded, b"test-input", output)


def test_bls_protocol_over_wire_bytes(bls_params, key_pair):
    # client -> server -> client, carrying only byte encodings
    r, blinded = Blind(bls_params, b"")
    sk = Scalar.from_bytes(key_pair.sk.to_bytes())
    assert PKDerive(bls_params, sk) == key_pair.pk

    evaluated = Evaluate(bls_params, sk, Point.from_bytes(blinded.to_bytes()))
    r_back = Scalar.from_bytes(r.to_bytes())
    output = Unblind(bls_params, Point.from_bytes(evaluated.to_bytes()), r_back)

    assert output == hash_to_group(b"").mul(key_pair.sk)
