from __future__ import annotations

from hashlib import sha256
from typing import Tuple

from py_ecc.bls.hash import expand_message_xmd

from .codec import int_from_fixed_bytes, int_to_fixed_bytes

# 64 bytes for a near-uniform field element plus one byte for the sign bit.
_EXPAND_LEN = 65


def ro_field_candidate(message: bytes, dst: bytes, ctr: int, modulus: int) -> Tuple[int, int]:
    """Random-oracle output for attempt ``ctr``: (x mod modulus, sign bit).

    The counter is prefixed so every attempt hashes a distinct input.
    """
    out = expand_message_xmd(int_to_fixed_bytes(ctr, 1) + message, dst, _EXPAND_LEN, sha256)
    x = int_from_fixed_bytes(out[:64]) % modulus
    return x, out[64] & 1
