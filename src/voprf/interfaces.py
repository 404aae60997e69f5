"""Interface definitions for VOPRF components."""

from __future__ import annotations

from typing import Protocol, TypeVar, Union

Scalar = TypeVar("Scalar")
Element = TypeVar("Element")
Target = TypeVar("Target")
Left = TypeVar("Left")
Right = TypeVar("Right")
Encoded = TypeVar("Encoded", covariant=True)


class ScalarField(Protocol[Scalar]):
    """Scalar field Fr: sampling, inversion and a zero test."""

    def random(self) -> Scalar:
        ...

    def inverse(self, value: Scalar) -> Scalar:
        ...

    def is_zero(self, value: Scalar) -> bool:
        ...


class HashGroup(Protocol[Element, Scalar]):
    """Hash-target group (G1): hash-to-group and scalar action."""

    def hash_to_group(self, message: bytes) -> Element:
        ...

    def scalar_mul(self, value: Element, scalar: Scalar) -> Element:
        ...

    def is_identity(self, value: Element) -> bool:
        ...


class KeyGroup(Protocol[Element, Scalar]):
    """Public-key group (G2): fixed generator and scalar action."""

    def generator(self) -> Element:
        ...

    def scalar_mul(self, value: Element, scalar: Scalar) -> Element:
        ...

    def is_identity(self, value: Element) -> bool:
        ...


class Pairing(Protocol[Left, Right, Target]):
    """Bilinear map e: G1 x G2 -> GT."""

    def __call__(self, left: Left, right: Right) -> Target:
        ...


class Encode(Protocol):
    """Fixed-capacity encoding: size query, to bytes, into a caller buffer."""

    def byte_size(self) -> int:
        ...

    def to_bytes(self) -> bytes:
        ...

    def write_into(self, buffer: Union[bytearray, memoryview]) -> int:
        ...


class Decode(Protocol[Encoded]):
    """Decoding interface: decode bytes into an element."""

    def from_bytes(self, data: bytes) -> Encoded:
        ...
