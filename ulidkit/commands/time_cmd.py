"""Time commands - now, parse, millis."""

from __future__ import annotations

from ..errors import UlidError
from ..timeconv import Timestamp, now_value, parse_timestamp, timestamp_record, to_millis
from ._common import emit, print_error


def run_time_now(*, fmt: str | None = None, output: str = "text") -> int:
    try:
        value = now_value(fmt)
    except UlidError as e:
        print_error(e)
        return 1

    emit(value, output)
    return 0


def run_time_parse(value: Timestamp, *, output: str = "text") -> int:
    try:
        dt = parse_timestamp(value)
    except UlidError as e:
        print_error(e)
        return 1

    emit(timestamp_record(dt), output)
    return 0


def run_time_millis(value: Timestamp | None = None, *, output: str = "text") -> int:
    try:
        millis = to_millis(value)
    except UlidError as e:
        print_error(e)
        return 1

    emit(millis, output)
    return 0
