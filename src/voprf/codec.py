from __future__ import annotations

import base64
import binascii
from typing import Union

from .errors import BufferTooSmall, DeserializationError

BytesLike = Union[bytes, bytearray, memoryview]


def as_bytes(data: BytesLike) -> bytes:
    """Normalize a bytes-like input; anything else is a decode failure."""
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise DeserializationError(f"expected bytes-like input, got {type(data).__name__}")


def int_to_fixed_bytes(x: int, length: int) -> bytes:
    return x.to_bytes(length, "big")


def int_from_fixed_bytes(bts: bytes) -> int:
    return int.from_bytes(bts, "big")


def require_length(data: bytes, length: int, what: str) -> None:
    if len(data) != length:
        raise DeserializationError(f"{what}: expected {length} bytes, got {len(data)}")


def write_into(encoded: bytes, buffer: Union[bytearray, memoryview]) -> int:
    """Copy ``encoded`` to the front of ``buffer`` and return the byte count.

    The buffer is left untouched when it is too short.
    """
    view = memoryview(buffer)
    if view.readonly:
        raise TypeError("output buffer is read-only")
    if view.nbytes < len(encoded):
        raise BufferTooSmall(len(encoded), view.nbytes)
    view.cast("B")[: len(encoded)] = encoded
    return len(encoded)


def to_base64(encoded: bytes) -> str:
    return base64.b64encode(encoded).decode("ascii")


def from_base64(text: str) -> bytes:
    if not isinstance(text, str):
        raise DeserializationError(f"expected base64 str, got {type(text).__name__}")
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise DeserializationError("malformed base64 string") from exc
