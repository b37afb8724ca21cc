"""UUID commands - generate, validate and parse RFC 4122 UUIDs."""

from __future__ import annotations

import uuid

from ..errors import InvalidInput
from ._common import emit, print_error

_VARIANTS = {
    uuid.RESERVED_NCS: "NCS",
    uuid.RFC_4122: "RFC4122",
    uuid.RESERVED_MICROSOFT: "Microsoft",
    uuid.RESERVED_FUTURE: "Future",
}


def _parse(text: str) -> uuid.UUID:
    try:
        return uuid.UUID(text)
    except ValueError as e:
        raise InvalidInput(f"'{text}' is not a valid UUID: {e}") from e


def uuid_record(value: uuid.UUID) -> dict:
    return {
        "uuid": str(value),
        # version nibble regardless of variant
        "version": (value.int >> 76) & 0xF,
        "variant": _VARIANTS.get(value.variant, "Unknown"),
        "hyphenated": str(value),
        "simple": value.hex,
        "urn": value.urn,
        "bytes": value.bytes,
    }


def run_uuid_generate(*, output: str = "text") -> int:
    emit(str(uuid.uuid4()), output)
    return 0


def run_uuid_validate(text: str, *, output: str = "text") -> int:
    try:
        _parse(text)
        valid = True
    except InvalidInput:
        valid = False
    emit(valid, output)
    return 0


def run_uuid_parse(text: str, *, output: str = "text") -> int:
    try:
        value = _parse(text)
    except InvalidInput as e:
        print_error(e)
        return 1

    emit(uuid_record(value), output)
    return 0
