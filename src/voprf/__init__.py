"""Pairing-based Verifiable Oblivious Pseudorandom Function (VOPRF)."""

from .config import VoprfConfig
from .core import Blind, Evaluate, KeyGen, KeyPair, Params, PKDerive, Unblind, Verify
from .errors import (
    AllocationFailure,
    BufferTooSmall,
    DeserializationError,
    HashToGroupError,
    InvalidScalar,
    ScalarOutOfRange,
    UninitializedLibrary,
    VoprfError,
)
from .interfaces import Decode, Encode, HashGroup, KeyGroup, Pairing, ScalarField

__all__ = [
    "AllocationFailure",
    "Blind",
    "BufferTooSmall",
    "Decode",
    "DeserializationError",
    "Encode",
    "Evaluate",
    "HashToGroupError",
    "HashGroup",
    "InvalidScalar",
    "KeyGen",
    "KeyGroup",
    "KeyPair",
    "Pairing",
    "Params",
    "PKDerive",
    "ScalarField",
    "ScalarOutOfRange",
    "Unblind",
    "UninitializedLibrary",
    "Verify",
    "VoprfConfig",
    "VoprfError",
]
