from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Tuple, TypeVar

from .errors import InvalidScalar, allocation_guard
from .interfaces import HashGroup, KeyGroup, Pairing, ScalarField

logger = logging.getLogger(__name__)

S = TypeVar("S")
P = TypeVar("P")
V = TypeVar("V")
T = TypeVar("T")


@dataclass(frozen=True)
class Params(Generic[S, P, V, T]):
    Fr: ScalarField[S]
    G1: HashGroup[P, S]  # messages hash here; blinded/evaluated/output points
    G2: KeyGroup[V, S]  # public keys and the fixed generator
    pair: Pairing[P, V, T]


@dataclass(frozen=True)
class KeyPair(Generic[S, V]):
    sk: S
    pk: V

    def __repr__(self) -> str:
        return f"KeyPair(sk=<redacted>, pk={self.pk!r})"


def PKDerive(params: Params[S, P, V, T], sk: S) -> V:
    """pk := sk ⊙ g2."""
    with allocation_guard("PKDerive"):
        return params.G2.scalar_mul(params.G2.generator(), sk)


def KeyGen(params: Params[S, P, V, T]) -> KeyPair[S, V]:
    """Server, offline: sk ←$ Fr; pk := sk ⊙ g2."""
    with allocation_guard("KeyGen"):
        sk = params.Fr.random()
        pk = PKDerive(params, sk)
    logger.debug("generated key pair")
    return KeyPair(sk=sk, pk=pk)


def Blind(params: Params[S, P, V, T], message: bytes) -> Tuple[S, P]:
    """Client: r ←$ Fr*; blinded := r ⊙ H(m).

    r must stay with the client until Unblind. A zero draw is surfaced as
    InvalidScalar rather than resampled.
    """
    with allocation_guard("Blind"):
        r = params.Fr.random()
        if params.Fr.is_zero(r):
            raise InvalidScalar("blinding factor sampled as zero")
        blinded = params.G1.scalar_mul(params.G1.hash_to_group(message), r)
    logger.debug("blinded message of %d bytes", len(message))
    return r, blinded


def Evaluate(params: Params[S, P, V, T], sk: S, blinded: P) -> P:
    """Server: evaluated := sk ⊙ blinded. Oblivious to the message."""
    with allocation_guard("Evaluate"):
        return params.G1.scalar_mul(blinded, sk)


def Unblind(params: Params[S, P, V, T], evaluated: P, r: S) -> P:
    """Client: output := r^-1 ⊙ evaluated = sk ⊙ H(m)."""
    with allocation_guard("Unblind"):
        r_inv = params.Fr.inverse(r)
        return params.G1.scalar_mul(evaluated, r_inv)


def Verify(params: Params[S, P, V, T], pk: V, message: bytes, output: P) -> bool:
    """Anyone holding pk: accept iff e(H(m), pk) == e(output, g2).

    Identity pk or output is rejected outright; it only arises from a zero
    key and would make the check vacuous.
    """
    if params.G2.is_identity(pk) or params.G1.is_identity(output):
        logger.debug("verify rejected identity input")
        return False
    with allocation_guard("Verify"):
        lhs = params.pair(params.G1.hash_to_group(message), pk)
        rhs = params.pair(output, params.G2.generator())
    ok = lhs == rhs
    logger.debug("verify result=%s", ok)
    return ok
