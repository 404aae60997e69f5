from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_HASH_DST = b"VOPRF-V01-BLS12381G1_XMD:SHA-256_TAI_"
DEFAULT_GENERATOR_DST = b"VOPRF-V01-BLS12381G2_XMD:SHA-256_SSWU_RO_GENERATOR_"
DEFAULT_GENERATOR_SEED = b"\x01"

# Each attempt fails with probability ~1/2, so hashing fails with 2^-max_hash_attempts.
MIN_HASH_ATTEMPTS = 64
MAX_HASH_ATTEMPTS = 256


@dataclass(frozen=True)
class VoprfConfig:
    """Process-wide parameters fixed at initialization.

    hash_dst:          domain-separation tag for hashing messages into G1
    generator_dst:     tag used when mapping the seed to the G2 generator
    generator_seed:    fixed seed mapped to the G2 generator
    max_hash_attempts: counter bound for try-and-increment hashing
    """

    hash_dst: bytes = DEFAULT_HASH_DST
    generator_dst: bytes = DEFAULT_GENERATOR_DST
    generator_seed: bytes = DEFAULT_GENERATOR_SEED
    max_hash_attempts: int = MAX_HASH_ATTEMPTS

    def validate(self) -> "VoprfConfig":
        for name in ("hash_dst", "generator_dst"):
            tag = getattr(self, name)
            if not isinstance(tag, bytes) or not tag:
                raise ValueError(f"{name} must be non-empty bytes")
            if len(tag) > 255:
                raise ValueError(f"{name} must be at most 255 bytes")
        if not isinstance(self.generator_seed, bytes):
            raise ValueError("generator_seed must be bytes")
        if not MIN_HASH_ATTEMPTS <= self.max_hash_attempts <= MAX_HASH_ATTEMPTS:
            raise ValueError(
                f"max_hash_attempts must be in {MIN_HASH_ATTEMPTS}..{MAX_HASH_ATTEMPTS}"
            )
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "VoprfConfig":
        """Build a config from ``VOPRF_*`` environment variables.

        Unset variables keep their defaults. ``VOPRF_GENERATOR_SEED`` is hex.
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get("VOPRF_HASH_DST"):
            kwargs["hash_dst"] = env["VOPRF_HASH_DST"].encode("utf-8")
        if env.get("VOPRF_GENERATOR_DST"):
            kwargs["generator_dst"] = env["VOPRF_GENERATOR_DST"].encode("utf-8")
        if env.get("VOPRF_GENERATOR_SEED"):
            try:
                kwargs["generator_seed"] = bytes.fromhex(env["VOPRF_GENERATOR_SEED"])
            except ValueError as exc:
                raise ValueError("VOPRF_GENERATOR_SEED must be hex") from exc
        if env.get("VOPRF_MAX_HASH_ATTEMPTS"):
            kwargs["max_hash_attempts"] = int(env["VOPRF_MAX_HASH_ATTEMPTS"])
        if kwargs:
            logger.debug("config overrides from environment: %s", sorted(kwargs))
        return cls(**kwargs).validate()
