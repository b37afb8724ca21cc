"""Encode/decode commands - Crockford Base32 and hex."""

from __future__ import annotations

from ..codec import as_text, decode_base32, decode_hex, encode_base32, encode_hex
from ..errors import UlidError
from ._common import emit, print_error


def run_encode(scheme: str, data: bytes, *, uppercase: bool = False, output: str = "text") -> int:
    """Encode raw bytes; `scheme` is base32 or hex."""
    if scheme == "base32":
        encoded = encode_base32(data)
    else:
        encoded = encode_hex(data, uppercase=uppercase)
    emit(encoded, output)
    return 0


def run_decode(scheme: str, text: str, *, as_string: bool = False, output: str = "text") -> int:
    """Decode to raw bytes, or to UTF-8 text with `as_string`."""
    try:
        data = decode_base32(text) if scheme == "base32" else decode_hex(text)
        emit(as_text(data) if as_string else data, output)
    except UlidError as e:
        print_error(e)
        return 1
    return 0
