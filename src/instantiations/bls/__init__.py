from .inst import (
    G1_LEN,
    G2_LEN,
    SCALAR_LEN,
    FrOps,
    G1Ops,
    G2Ops,
    PairingValue,
    Point,
    Scalar,
    VerificationKey,
    generator,
    hash_to_group,
    init,
    is_initialized,
    make_bls_params,
    pair,
)

__all__ = [
    "G1_LEN",
    "G2_LEN",
    "SCALAR_LEN",
    "FrOps",
    "G1Ops",
    "G2Ops",
    "PairingValue",
    "Point",
    "Scalar",
    "VerificationKey",
    "generator",
    "hash_to_group",
    "init",
    "is_initialized",
    "make_bls_params",
    "pair",
]
