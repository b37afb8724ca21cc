"""Inspect command - break a ULID into annotated timestamp and randomness parts."""

from __future__ import annotations

import base64
import math
from collections import Counter
from datetime import datetime

from ..engine import RANDOMNESS_BITS, TIMESTAMP_BITS, UlidComponents, UlidEngine
from ..errors import UlidError
from ..timeconv import format_age, format_human, format_iso8601, format_rfc3339, ms_to_datetime
from ._common import emit, print_error

COLLISION_PROBABILITY_PER_MS = "~1 in 1.2 × 10^24"


def shannon_entropy(text: str) -> float:
    """Shannon entropy in bits per symbol over the characters of `text`."""
    if not text:
        return 0.0
    total = len(text)
    return -sum((n / total) * math.log2(n / total) for n in Counter(text).values())


def _timestamp_value(components: UlidComponents, compact: bool, now: datetime | None) -> str | dict | None:
    dt = ms_to_datetime(components.timestamp_ms)
    if dt is None:
        return None
    if compact:
        return format_human(dt, millis=True)
    return {
        "milliseconds": components.timestamp_ms,
        "seconds": components.timestamp_ms // 1000,
        "iso8601": format_iso8601(dt),
        "rfc3339": format_rfc3339(dt),
        "human": format_human(dt),
        "age": format_age(dt, now),
    }


def _randomness_value(components: UlidComponents, compact: bool) -> str | dict:
    if compact:
        return components.randomness_hex
    raw = bytes.fromhex(components.randomness_hex)
    return {
        "hex": components.randomness_hex,
        "bytes": list(raw),
        "base64": base64.b64encode(raw).decode("ascii"),
    }


def _statistics(components: UlidComponents) -> dict:
    return {
        "timestamp_bits": TIMESTAMP_BITS,
        "randomness_bits": RANDOMNESS_BITS,
        "total_bits": TIMESTAMP_BITS + RANDOMNESS_BITS,
        "randomness_entropy": shannon_entropy(components.randomness_hex),
        "collision_probability_per_ms": COLLISION_PROBABILITY_PER_MS,
    }


def inspect_ulid(
    ulid_str: str,
    *,
    compact: bool = False,
    timestamp_only: bool = False,
    stats: bool = False,
    now: datetime | None = None,
) -> dict:
    """Build the inspection record; raises InvalidFormat for bad input."""
    components = UlidEngine.parse(ulid_str)
    timestamp = _timestamp_value(components, compact, now)

    if timestamp_only:
        return {"timestamp": timestamp} if timestamp is not None else {}

    record: dict = {"ulid": components.ulid, "valid": components.valid}
    if timestamp is not None:
        record["timestamp"] = timestamp
    record["randomness"] = _randomness_value(components, compact)
    if stats:
        record["statistics"] = _statistics(components)
    return record


def run_inspect(
    ulid_str: str,
    *,
    compact: bool = False,
    timestamp_only: bool = False,
    stats: bool = False,
    output: str = "text",
) -> int:
    try:
        record = inspect_ulid(ulid_str, compact=compact, timestamp_only=timestamp_only, stats=stats)
    except UlidError as e:
        print_error(e)
        return 1

    emit(record, output)
    return 0
