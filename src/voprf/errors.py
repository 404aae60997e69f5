"""Error taxonomy for VOPRF operations.

Each class carries an integer ``code`` so a boundary layer can report the
failure kind as a status value without keeping its own table.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator


class VoprfError(Exception):
    """Base class for every failure surfaced by the VOPRF core."""

    code: int = -10


class UninitializedLibrary(VoprfError):
    """An operation ran before the pairing parameters were initialized."""

    code = -6


class InvalidScalar(VoprfError):
    """Inversion of the zero scalar, or a scalar outside [0, r)."""

    code = -7


class DeserializationError(VoprfError):
    """Bytes do not decode to a valid field or group element."""

    code = -4


class ScalarOutOfRange(InvalidScalar, DeserializationError):
    """A decoded scalar is >= r."""

    code = InvalidScalar.code


class BufferTooSmall(VoprfError):
    """Caller-supplied output buffer is shorter than the encoding."""

    code = -5

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"buffer too small: need {required} bytes, got {available}")
        self.required = required
        self.available = available


class HashToGroupError(VoprfError):
    """Try-and-increment hashing ran out of counter values."""

    code = -8


class AllocationFailure(VoprfError, MemoryError):
    """Resource exhaustion while constructing an element."""

    code = -2


@contextmanager
def allocation_guard(what: str) -> Iterator[None]:
    """Re-raise ``MemoryError`` inside the block as :class:`AllocationFailure`."""
    try:
        yield
    except AllocationFailure:
        raise
    except MemoryError as exc:
        raise AllocationFailure(f"out of memory during {what}") from exc
