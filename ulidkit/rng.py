"""
Random-byte sources.

Consumers take a RandomSource instead of reaching for a process-wide RNG, so
tests can supply deterministic bytes.
"""

from __future__ import annotations

import secrets
from typing import Protocol, runtime_checkable

from .errors import GenerationError


@runtime_checkable
class RandomSource(Protocol):
    """Protocol for anything that can fill a buffer with random bytes."""

    def fill(self, buffer: bytearray) -> None:
        """
        Overwrite every byte of `buffer` with random data.

        Args:
            buffer: Mutable buffer; its length is the number of bytes wanted.
        """
        ...


class SystemRandomSource:
    """Cryptographically secure bytes from the operating system."""

    def fill(self, buffer: bytearray) -> None:
        buffer[:] = secrets.token_bytes(len(buffer))


def draw(source: RandomSource, size: int) -> bytes:
    """Return `size` bytes drawn from `source`."""
    buffer = bytearray(size)
    source.fill(buffer)
    if len(buffer) != size:
        raise GenerationError(f"random source produced {len(buffer)} bytes, expected {size}")
    return bytes(buffer)
