# src/instantiations/bls/inst.py
from __future__ import annotations

import hmac
import logging
import secrets
import threading
from dataclasses import dataclass, field
from functools import cached_property
from hashlib import sha256
from typing import Any, ClassVar, Optional, Union

from voprf.codec import (
    BytesLike,
    as_bytes,
    from_base64,
    int_from_fixed_bytes,
    int_to_fixed_bytes,
    require_length,
    to_base64,
    write_into,
)
from voprf.config import VoprfConfig
from voprf.core import Params
from voprf.errors import (
    DeserializationError,
    HashToGroupError,
    InvalidScalar,
    ScalarOutOfRange,
    UninitializedLibrary,
)
from voprf.ro import ro_field_candidate

# py_ecc for BLS12-381 G1/G2 group ops, point compression and the pairing.
# Install: pip install py-ecc
try:
    from py_ecc.optimized_bls12_381 import (
        FQ,
        FQ12,
        b,
        b2,
        curve_order,
        field_modulus,
        is_inf,
        is_on_curve,
        multiply,
        pairing,
    )
    from py_ecc.bls.g2_primitives import (
        G1_to_pubkey,
        G2_to_signature,
        pubkey_to_G1,
        signature_to_G2,
    )
    from py_ecc.bls.hash_to_curve import hash_to_G2
except Exception as e:  # pragma: no cover
    raise ImportError(
        "BLS12-381 instantiation requires 'py-ecc'. Install via: pip install py-ecc"
    ) from e

logger = logging.getLogger(__name__)

SCALAR_LEN = 32  # big-endian Fr element
G1_LEN = 48  # compressed G1 point
G2_LEN = 96  # compressed G2 point

# Effective cofactor for G1 (RFC 9380, BLS12-381 G1 suites).
H_EFF_G1 = 0xD201000000010001

# p ≡ 3 (mod 4), so sqrt(a) = a^((p+1)/4) when a is a square.
_SQRT_EXP = (field_modulus + 1) // 4


# ----------------------------
# Process-wide pairing parameters
# - written once by init(), read-only afterwards
# - config is assigned last, so a non-None config means the state is ready
# ----------------------------

@dataclass
class _PairingState:
    lock: threading.Lock = field(default_factory=threading.Lock)
    config: Optional[VoprfConfig] = None
    generator: Any = None


_state = _PairingState()


def init(config: Optional[VoprfConfig] = None) -> None:
    """Set up pairing parameters. Safe to call more than once.

    The first call fixes the configuration for the process; later calls
    are no-ops.
    """
    state = _state
    with state.lock:
        if state.config is not None:
            if config is not None and config != state.config:
                logger.warning("init() called with a different config; keeping the first one")
            return
        cfg = (config if config is not None else VoprfConfig.from_env()).validate()
        state.generator = hash_to_G2(cfg.generator_seed, cfg.generator_dst, sha256)
        state.config = cfg
    logger.info("pairing parameters initialized (hash_dst=%r)", cfg.hash_dst)


def is_initialized() -> bool:
    return _state.config is not None


def _require_init() -> _PairingState:
    state = _state
    if state.config is None:
        raise UninitializedLibrary("call init() before using the BLS12-381 instantiation")
    return state


# ----------------------------
# Fr: scalars mod r
# ----------------------------

@dataclass(frozen=True)
class Scalar:
    """Element of Fr, the scalar field of order r."""

    value: int = field(repr=False)
    SIZE: ClassVar[int] = SCALAR_LEN

    def __post_init__(self) -> None:
        if not 0 <= self.value < curve_order:
            raise InvalidScalar("scalar outside [0, r)")

    def __repr__(self) -> str:
        return "Scalar(<redacted>)"

    @classmethod
    def zero(cls) -> "Scalar":
        return cls(0)

    @classmethod
    def random(cls) -> "Scalar":
        _require_init()
        return cls(secrets.randbelow(curve_order - 1) + 1)

    def is_zero(self) -> bool:
        return self.value == 0

    def inverse(self) -> "Scalar":
        if self.value == 0:
            raise InvalidScalar("zero scalar has no inverse")
        return Scalar(pow(self.value, curve_order - 2, curve_order))

    def byte_size(self) -> int:
        return self.SIZE

    def to_bytes(self) -> bytes:
        return int_to_fixed_bytes(self.value, self.SIZE)

    def write_into(self, buffer: Union[bytearray, memoryview]) -> int:
        return write_into(self.to_bytes(), buffer)

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Scalar":
        _require_init()
        data = as_bytes(data)
        require_length(data, cls.SIZE, "scalar")
        value = int_from_fixed_bytes(data)
        if value >= curve_order:
            raise ScalarOutOfRange("encoded scalar is not below the group order")
        return cls(value)

    def to_string(self) -> str:
        return to_base64(self.to_bytes())

    @classmethod
    def from_string(cls, text: str) -> "Scalar":
        return cls.from_bytes(from_base64(text))


def _check_scalar(s: Scalar) -> int:
    if not isinstance(s, Scalar):
        raise TypeError(f"expected Scalar, got {type(s).__name__}")
    return s.value


# ----------------------------
# Point representation note
# - py_ecc optimized arithmetic works on Jacobian points (x, y, z).
# - Equality and hashing go through the canonical compressed encoding,
#   which is computed once per instance.
# ----------------------------

@dataclass(frozen=True, eq=False)
class _CurveElement:
    pt: Any = field(repr=False)
    SIZE: ClassVar[int] = 0

    @cached_property
    def _encoded(self) -> bytes:
        return self._compress()

    def _compress(self) -> bytes:
        raise NotImplementedError

    def is_identity(self) -> bool:
        return is_inf(self.pt)

    def byte_size(self) -> int:
        return self.SIZE

    def to_bytes(self) -> bytes:
        return self._encoded

    def write_into(self, buffer: Union[bytearray, memoryview]) -> int:
        return write_into(self._encoded, buffer)

    def to_string(self) -> str:
        return to_base64(self._encoded)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return hmac.compare_digest(self._encoded, other._encoded)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._encoded))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._encoded.hex()})"


@dataclass(frozen=True, eq=False, repr=False)
class Point(_CurveElement):
    """Element of G1: hashed messages, blinded/evaluated points, outputs."""

    SIZE: ClassVar[int] = G1_LEN

    def _compress(self) -> bytes:
        return bytes(G1_to_pubkey(self.pt))

    def mul(self, s: Scalar) -> "Point":
        return Point(multiply(self.pt, _check_scalar(s)))

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Point":
        _require_init()
        data = as_bytes(data)
        require_length(data, cls.SIZE, "G1 point")
        try:
            pt = pubkey_to_G1(data)
        except (ValueError, AssertionError) as exc:
            raise DeserializationError("bytes do not encode a G1 point") from exc
        _validate(pt, b, "G1 point")
        return cls(pt)

    @classmethod
    def from_string(cls, text: str) -> "Point":
        return cls.from_bytes(from_base64(text))


@dataclass(frozen=True, eq=False, repr=False)
class VerificationKey(_CurveElement):
    """Element of G2: public keys and the protocol generator."""

    SIZE: ClassVar[int] = G2_LEN

    def _compress(self) -> bytes:
        return bytes(G2_to_signature(self.pt))

    def mul(self, s: Scalar) -> "VerificationKey":
        return VerificationKey(multiply(self.pt, _check_scalar(s)))

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "VerificationKey":
        _require_init()
        data = as_bytes(data)
        require_length(data, cls.SIZE, "G2 point")
        try:
            pt = signature_to_G2(data)
        except (ValueError, AssertionError) as exc:
            raise DeserializationError("bytes do not encode a G2 point") from exc
        _validate(pt, b2, "G2 point")
        return cls(pt)

    @classmethod
    def from_string(cls, text: str) -> "VerificationKey":
        return cls.from_bytes(from_base64(text))


def _validate(pt: Any, coeff: Any, what: str) -> None:
    # The identity is outside the hash-to-group range, so it is never a
    # legitimate output or public key.
    if is_inf(pt):
        raise DeserializationError(f"{what}: identity element is not accepted")
    if not is_on_curve(pt, coeff):
        raise DeserializationError(f"{what}: not on curve")
    if not is_inf(multiply(pt, curve_order)):
        raise DeserializationError(f"{what}: not in the prime-order subgroup")


# ----------------------------
# GT: pairing results (Fp12)
# ----------------------------

@dataclass(frozen=True)
class PairingValue:
    value: Any = field(repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PairingValue):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.to_string())

    def to_string(self) -> str:
        """Space-separated decimal coefficients of the Fp12 value."""
        return " ".join(str(c if isinstance(c, int) else c.n) for c in self.value.coeffs)

    def __str__(self) -> str:
        return self.to_string()

    @classmethod
    def from_string(cls, text: str) -> "PairingValue":
        try:
            coeffs = [int(c) for c in text.split()]
        except ValueError as exc:
            raise DeserializationError("malformed GT string") from exc
        if len(coeffs) != 12 or any(not 0 <= c < field_modulus for c in coeffs):
            raise DeserializationError("GT string must hold 12 coefficients below p")
        return cls(FQ12(coeffs))


# ----------------------------
# Hash-to-group, generator, pairing
# ----------------------------

def hash_to_group(message: BytesLike) -> Point:
    """Map bytes to G1 by try-and-increment, then clear the cofactor.

    Each attempt derives an x coordinate and a sign bit from
    expand_message_xmd(ctr || message, hash_dst). Deterministic for a given
    config; never returns the identity.
    """
    state = _require_init()
    message = as_bytes(message)
    cfg = state.config
    p = field_modulus
    for ctr in range(cfg.max_hash_attempts):
        x, sign = ro_field_candidate(message, cfg.hash_dst, ctr, p)
        rhs = (pow(x, 3, p) + b.n) % p
        y = pow(rhs, _SQRT_EXP, p)
        if y * y % p != rhs:
            continue
        if (y & 1) != sign:
            y = (p - y) % p
        pt = multiply((FQ(x), FQ(y), FQ.one()), H_EFF_G1)
        if is_inf(pt):
            continue
        return Point(pt)
    raise HashToGroupError(f"hash_to_group: no point found in {cfg.max_hash_attempts} attempts")


def generator() -> VerificationKey:
    """The fixed G2 base point derived at init()."""
    return VerificationKey(_require_init().generator)


def pair(p: Point, q: VerificationKey) -> PairingValue:
    _require_init()
    return PairingValue(pairing(q.pt, p.pt))


# ----------------------------
# Ops objects plugged into the generic core
# ----------------------------

@dataclass(frozen=True)
class FrOps:
    def random(self) -> Scalar:
        return Scalar.random()

    def inverse(self, value: Scalar) -> Scalar:
        return value.inverse()

    def is_zero(self, value: Scalar) -> bool:
        return value.is_zero()


@dataclass(frozen=True)
class G1Ops:
    def hash_to_group(self, message: bytes) -> Point:
        return hash_to_group(message)

    def scalar_mul(self, value: Point, scalar: Scalar) -> Point:
        return value.mul(scalar)

    def is_identity(self, value: Point) -> bool:
        return value.is_identity()


@dataclass(frozen=True)
class G2Ops:
    def generator(self) -> VerificationKey:
        return generator()

    def scalar_mul(self, value: VerificationKey, scalar: Scalar) -> VerificationKey:
        return value.mul(scalar)

    def is_identity(self, value: VerificationKey) -> bool:
        return value.is_identity()


def make_bls_params() -> Params[Scalar, Point, VerificationKey, PairingValue]:
    """
    Return params for the BLS12-381 instantiation.

    - Fr: scalars mod r (32-byte encoding)
    - G1: hash target, 48-byte compressed points
    - G2: public keys, 96-byte compressed points, generator from init()
    - pair: optimal ate pairing with final exponentiation

    init() must run before any operation on the returned params.
    """
    return Params(Fr=FrOps(), G1=G1Ops(), G2=G2Ops(), pair=pair)
