"""
Core ULID engine: generation, parsing and validation of 26-character
Crockford Base32 identifiers.

The bit layout and codec come from python-ulid; this module adds the
validation rules, bulk limits and value shapes the commands expose.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Callable

from ulid import ULID

from .errors import InvalidFormat, InvalidInput, TimestampOutOfRange
from .rng import RandomSource, SystemRandomSource, draw
from .timeconv import format_iso8601, ms_to_datetime

# Length of a ULID string in Crockford Base32 encoding
ULID_STRING_LENGTH = 26

# Maximum number of ULIDs in a single bulk generation request
MAX_BULK_GENERATION = 10_000

# Valid characters for Crockford Base32 encoding used by ULIDs
CROCKFORD_BASE32_CHARSET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

TIMESTAMP_BITS = 48
RANDOMNESS_BITS = 80
TIMESTAMP_BYTES = TIMESTAMP_BITS // 8
RANDOMNESS_BYTES = RANDOMNESS_BITS // 8

MAX_TIMESTAMP_MS = (1 << TIMESTAMP_BITS) - 1

# 26 chars carry 130 bits; the leading char may only use the low 3
_MAX_LEADING_CHAR = "7"

_CHARSET = frozenset(CROCKFORD_BASE32_CHARSET)


class OutputFormat(str, Enum):
    STRING = "string"
    JSON = "json"
    BINARY = "binary"


@dataclass(frozen=True)
class UlidComponents:
    """Parsed components of a ULID."""

    ulid: str
    timestamp_ms: int
    randomness_hex: str
    valid: bool = True

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ValidationResult:
    """Every rule a string violates, collected rather than short-circuited."""

    valid: bool
    length: int
    charset_valid: bool = True
    timestamp_valid: bool = True
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def _decode_problem(ulid_str: str) -> str | None:
    """First reason `ulid_str` cannot be decoded, or None if it can."""
    if len(ulid_str) != ULID_STRING_LENGTH:
        return f"invalid length: expected {ULID_STRING_LENGTH} characters, got {len(ulid_str)}"
    for i, c in enumerate(ulid_str):
        if c not in _CHARSET:
            return f"invalid character '{c}' at position {i}"
    if ulid_str[0] > _MAX_LEADING_CHAR:
        return f"value overflows 128 bits (leading character '{ulid_str[0]}' > '{_MAX_LEADING_CHAR}')"
    return None


def _decode(ulid_str: str, prefix: str) -> ULID:
    problem = _decode_problem(ulid_str)
    if problem is not None:
        raise InvalidFormat(ulid_str, f"{prefix}: {problem}")
    return ULID.from_str(ulid_str)


def _randomness(ulid: ULID) -> int:
    return int.from_bytes(ulid.bytes[TIMESTAMP_BYTES:], "big")


def randomness_hex(value: int) -> str:
    """80-bit randomness as 20 zero-padded lowercase hex digits."""
    return format(value, f"0{RANDOMNESS_BYTES * 2}x")


def _system_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class UlidEngine:
    """
    Generate, parse and validate ULIDs.

    Randomness comes from an injected RandomSource and time from an injected
    millisecond clock, so both can be pinned in tests.
    """

    def __init__(
        self,
        random_source: RandomSource | None = None,
        *,
        max_bulk: int = MAX_BULK_GENERATION,
        clock: Callable[[], int] | None = None,
    ):
        self.random_source = random_source or SystemRandomSource()
        self.max_bulk = max_bulk
        self.clock = clock or _system_clock_ms

    # --- generation ---------------------------------------------------------

    def generate(self) -> ULID:
        """New ULID for the current millisecond."""
        return self.generate_with_timestamp(self.clock())

    def generate_with_timestamp(self, timestamp_ms: int) -> ULID:
        """New ULID for a caller-supplied millisecond timestamp."""
        if timestamp_ms < 0 or timestamp_ms > MAX_TIMESTAMP_MS:
            raise TimestampOutOfRange(timestamp_ms, MAX_TIMESTAMP_MS)
        randomness = draw(self.random_source, RANDOMNESS_BYTES)
        return ULID.from_bytes(timestamp_ms.to_bytes(TIMESTAMP_BYTES, "big") + randomness)

    def generate_bulk(self, count: int, timestamp_ms: int | None = None) -> list[ULID]:
        """
        Generate `count` independent ULIDs, optionally all at one timestamp.

        Raises:
            InvalidInput: count is negative or above max_bulk (never truncated)
            TimestampOutOfRange: timestamp_ms does not fit in 48 bits
        """
        if count < 0:
            raise InvalidInput("Count must be positive")
        if count > self.max_bulk:
            raise InvalidInput(
                f"Bulk generation limited to {self.max_bulk:,} ULIDs per request for performance"
            )
        if timestamp_ms is None:
            return [self.generate() for _ in range(count)]
        return [self.generate_with_timestamp(timestamp_ms) for _ in range(count)]

    # --- parsing / validation -----------------------------------------------

    @staticmethod
    def parse(ulid_str: str) -> UlidComponents:
        ulid = _decode(ulid_str, "Parse error")
        return UlidComponents(
            ulid=ulid_str,
            timestamp_ms=ulid.milliseconds,
            randomness_hex=randomness_hex(_randomness(ulid)),
            valid=True,
        )

    @staticmethod
    def validate(ulid_str: str) -> bool:
        return _decode_problem(ulid_str) is None

    @staticmethod
    def validate_detailed(ulid_str: str) -> ValidationResult:
        """Length, charset and decode checks, reporting every failure."""
        result = ValidationResult(valid=True, length=len(ulid_str))

        if len(ulid_str) != ULID_STRING_LENGTH:
            result.valid = False
            result.errors.append(
                f"Invalid length: expected {ULID_STRING_LENGTH} characters, got {len(ulid_str)}"
            )

        for i, c in enumerate(ulid_str):
            if c not in _CHARSET:
                result.valid = False
                result.charset_valid = False
                result.errors.append(
                    f"Invalid character '{c}' at position {i}. Valid characters: {CROCKFORD_BASE32_CHARSET}"
                )

        if result.valid:
            problem = _decode_problem(ulid_str)
            if problem is not None:
                result.valid = False
                result.timestamp_valid = False
                result.errors.append(f"Parse error: {problem}")

        return result

    @staticmethod
    def extract_timestamp(ulid_str: str) -> int:
        return _decode(ulid_str, "Cannot extract timestamp").milliseconds

    @staticmethod
    def extract_randomness(ulid_str: str) -> int:
        return _randomness(_decode(ulid_str, "Cannot extract randomness"))

    # --- value shapes ---------------------------------------------------------

    @staticmethod
    def to_value(ulid: ULID, fmt: OutputFormat = OutputFormat.STRING) -> str | dict | bytes:
        if fmt == OutputFormat.JSON:
            return {
                "ulid": str(ulid),
                "timestamp_ms": ulid.milliseconds,
                "randomness_hex": randomness_hex(_randomness(ulid)),
            }
        if fmt == OutputFormat.BINARY:
            return ulid.bytes
        return str(ulid)

    @staticmethod
    def components_to_value(components: UlidComponents) -> dict:
        timestamp: dict = {"ms": components.timestamp_ms}
        dt = ms_to_datetime(components.timestamp_ms)
        if dt is not None:
            timestamp["iso8601"] = format_iso8601(dt)
            timestamp["unix"] = components.timestamp_ms // 1000

        return {
            "ulid": components.ulid,
            "timestamp": timestamp,
            "randomness": {"hex": components.randomness_hex},
            "valid": components.valid,
        }


def parse_output_format(name: str | None) -> OutputFormat:
    """Map a --format value to an OutputFormat (None means string)."""
    if name is None:
        return OutputFormat.STRING
    try:
        return OutputFormat(name)
    except ValueError:
        raise InvalidInput(f"Unknown format '{name}'. Use 'string', 'json', or 'binary'") from None
