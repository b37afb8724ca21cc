"""Base32 (Crockford) and hex encoding leaves."""

from __future__ import annotations

import base64
import binascii

from .engine import CROCKFORD_BASE32_CHARSET
from .errors import InvalidInput

_RFC4648_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_TO_CROCKFORD = str.maketrans(_RFC4648_ALPHABET, CROCKFORD_BASE32_CHARSET)
_FROM_CROCKFORD = str.maketrans(CROCKFORD_BASE32_CHARSET, _RFC4648_ALPHABET)

# Crockford decoding folds look-alike letters onto digits
_ALIASES = str.maketrans({"I": "1", "L": "1", "O": "0"})


def encode_base32(data: bytes) -> str:
    """Crockford Base32, uppercase, without padding."""
    return base64.b32encode(data).decode("ascii").rstrip("=").translate(_TO_CROCKFORD)


def decode_base32(text: str) -> bytes:
    """Decode Crockford Base32 (case-insensitive, hyphens ignored)."""
    normalized = text.strip().replace("-", "").upper().translate(_ALIASES)
    bad = [c for c in normalized if c not in CROCKFORD_BASE32_CHARSET]
    if bad:
        raise InvalidInput(f"Failed to decode Base32 data: invalid character '{bad[0]}'")

    rfc = normalized.translate(_FROM_CROCKFORD)
    rfc += "=" * (-len(rfc) % 8)
    try:
        return base64.b32decode(rfc)
    except binascii.Error as e:
        raise InvalidInput(f"Failed to decode Base32 data: {e}") from e


def encode_hex(data: bytes, uppercase: bool = False) -> str:
    encoded = binascii.hexlify(data).decode("ascii")
    return encoded.upper() if uppercase else encoded


def decode_hex(text: str) -> bytes:
    try:
        return binascii.unhexlify(text.strip())
    except (binascii.Error, ValueError) as e:
        raise InvalidInput(f"Failed to decode hex data: {e}") from e


def as_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidInput("Decoded data is not valid UTF-8 text") from e
