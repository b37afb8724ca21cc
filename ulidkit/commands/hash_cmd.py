"""Hash commands - SHA-256, SHA-512, BLAKE3 and secure random bytes."""

from __future__ import annotations

from ..errors import InvalidInput, UlidError
from ..hashing import DEFAULT_LENGTH, blake3_digest, random_bytes, render_digest, sha256, sha512
from ..rng import RandomSource
from ._common import emit, print_error

ALGORITHMS = ("sha256", "sha512", "blake3")


def run_hash(
    algorithm: str,
    data: bytes,
    *,
    binary: bool = False,
    length: int = DEFAULT_LENGTH,
    output: str = "text",
) -> int:
    try:
        if algorithm == "sha256":
            digest = sha256(data)
        elif algorithm == "sha512":
            digest = sha512(data)
        elif algorithm == "blake3":
            digest = blake3_digest(data, length)
        else:
            raise InvalidInput(f"Unknown algorithm '{algorithm}'. Valid algorithms: {', '.join(ALGORITHMS)}")
    except UlidError as e:
        print_error(e)
        return 1

    emit(render_digest(digest, binary), output)
    return 0


def run_random(
    *,
    length: int = DEFAULT_LENGTH,
    binary: bool = False,
    output: str = "text",
    source: RandomSource | None = None,
) -> int:
    try:
        data = random_bytes(length, source)
    except UlidError as e:
        print_error(e)
        return 1

    emit(render_digest(data, binary), output)
    return 0
