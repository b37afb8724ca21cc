"""Hashing and random-byte leaves: SHA-256, SHA-512, BLAKE3, secure random."""

from __future__ import annotations

import hashlib

import blake3

from .codec import encode_hex
from .errors import InvalidInput
from .rng import RandomSource, SystemRandomSource, draw

DEFAULT_LENGTH = 32
MAX_LENGTH = 1024


def _check_length(length: int, what: str) -> None:
    if length < 1 or length > MAX_LENGTH:
        raise InvalidInput(f"{what} must be between 1 and {MAX_LENGTH} bytes")


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def sha512(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()


def blake3_digest(data: bytes, length: int = DEFAULT_LENGTH) -> bytes:
    """BLAKE3 with extendable output of `length` bytes (1-1024)."""
    _check_length(length, "Output length")
    return blake3.blake3(data).digest(length=length)


def random_bytes(length: int = DEFAULT_LENGTH, source: RandomSource | None = None) -> bytes:
    _check_length(length, "Length")
    return draw(source or SystemRandomSource(), length)


def render_digest(digest: bytes, binary: bool = False) -> str | bytes:
    return digest if binary else encode_hex(digest)
