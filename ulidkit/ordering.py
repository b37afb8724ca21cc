"""
Sorting of ULID strings, or of records carrying a ULID field.

Timestamp order compares decoded timestamps and falls back to the full string
on ties (equivalent to comparing randomness, since Base32 preserves numeric
order). Natural order is plain string order.

Unparsable strings are not errors: they are ranked as UNPARSABLE, ahead of
every valid identifier, as if their timestamp were 0. Values that are not
strings at all (or records missing the column) rank last.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import IntEnum
from typing import Any

from .engine import UlidEngine
from .errors import InvalidFormat

logger = logging.getLogger(__name__)


class SortRank(IntEnum):
    UNPARSABLE = 0
    VALID = 1
    MISSING = 2


SortKey = tuple[int, int, str]


def _identifier(value: Any, column: str | None) -> str | None:
    if column is not None:
        if not isinstance(value, Mapping):
            return None
        value = value.get(column)
    return value if isinstance(value, str) else None


def sort_key(ulid_str: str | None, natural: bool = False) -> SortKey:
    """Tagged key: (rank, timestamp, string)."""
    if ulid_str is None:
        return (SortRank.MISSING, 0, "")
    if natural:
        return (SortRank.VALID, 0, ulid_str)
    try:
        timestamp = UlidEngine.extract_timestamp(ulid_str)
    except InvalidFormat as e:
        logger.warning("Failed to extract timestamp from '%s': %s", ulid_str, e.reason)
        return (SortRank.UNPARSABLE, 0, ulid_str)
    return (SortRank.VALID, timestamp, ulid_str)


def sort_ulids(
    values: Iterable[Any],
    *,
    column: str | None = None,
    natural: bool = False,
    reverse: bool = False,
) -> list[Any]:
    """
    Sort ULIDs (or records containing them) by timestamp or natural order.

    Args:
        values: ULID strings, or mappings when `column` is given
        column: Field holding the ULID in each record
        natural: Plain string order instead of decoded timestamps
        reverse: Newest first; the exact reversal of the forward order

    Returns:
        A new sorted list; the input is left untouched.
    """
    ordered = sorted(values, key=lambda v: sort_key(_identifier(v, column), natural))
    if reverse:
        ordered.reverse()
    return ordered
