"""
Batch and stream processing of ULID lists.

Elements are processed in chunks of `batch_size`. With `parallel=True` the
chunks are fanned out to a thread pool and collected back by chunk index, so
the output order always matches the input order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any

from .engine import UlidEngine
from .errors import InvalidInput, UlidError

logger = logging.getLogger(__name__)

ID_FIELDS = ("ulid", "id", "identifier", "uuid")

DEFAULT_BATCH_SIZE = 1000
DEFAULT_MAX_WORKERS = 4
MAX_STREAM_COUNT = 100_000

# Progress is only reported for inputs spanning more batches than this
_PROGRESS_MIN_BATCHES = 10


class StreamOperation(str, Enum):
    VALIDATE = "validate"
    PARSE = "parse"
    EXTRACT_TIMESTAMP = "extract-timestamp"
    TRANSFORM = "transform"


class StreamFormat(str, Enum):
    FULL = "full"
    COMPACT = "compact"
    TIMESTAMP_ONLY = "timestamp-only"


def parse_operation(name: str) -> StreamOperation:
    try:
        return StreamOperation(name)
    except ValueError:
        valid = ", ".join(op.value for op in StreamOperation)
        raise InvalidInput(f"Unknown operation '{name}'. Valid operations: {valid}") from None


def parse_stream_format(name: str | None) -> StreamFormat:
    if name is None:
        return StreamFormat.FULL
    try:
        return StreamFormat(name)
    except ValueError:
        valid = ", ".join(f.value for f in StreamFormat)
        raise InvalidInput(f"Unknown output format '{name}'. Valid formats: {valid}") from None


def extract_identifier(value: Any) -> str:
    """The ULID string carried by `value` (a string or a record)."""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        for key in ID_FIELDS:
            candidate = value.get(key)
            if isinstance(candidate, str):
                return candidate
        raise InvalidInput("No ULID field found in record (expected one of: ulid, id, identifier, uuid)")
    raise InvalidInput("Expected string or record containing ULID")


def _apply(
    value: Any,
    operation: StreamOperation,
    output_format: StreamFormat,
    engine: UlidEngine,
) -> Any:
    ulid_str = extract_identifier(value)

    if operation == StreamOperation.VALIDATE:
        return engine.validate(ulid_str)

    if operation == StreamOperation.PARSE:
        components = engine.parse(ulid_str)
        if output_format == StreamFormat.COMPACT:
            return {
                "ulid": components.ulid,
                "timestamp_ms": components.timestamp_ms,
                "randomness_hex": components.randomness_hex,
            }
        if output_format == StreamFormat.TIMESTAMP_ONLY:
            return components.timestamp_ms
        return engine.components_to_value(components)

    if operation == StreamOperation.EXTRACT_TIMESTAMP:
        return engine.extract_timestamp(ulid_str)

    # transform: normalize to the canonical identifier shape
    if not engine.validate(ulid_str):
        raise InvalidInput(f"'{ulid_str}' is not a valid ULID")
    if output_format == StreamFormat.COMPACT:
        return {"ulid": ulid_str}
    return ulid_str


def _process_chunk(
    chunk: Sequence[Any],
    operation: StreamOperation,
    output_format: StreamFormat,
    continue_on_error: bool,
    engine: UlidEngine,
) -> list[Any]:
    results = []
    for value in chunk:
        try:
            results.append(_apply(value, operation, output_format, engine))
        except UlidError as e:
            if not continue_on_error:
                raise
            results.append({"error": str(e), "input": value})
    return results


def _chunks(values: Sequence[Any], size: int) -> list[Sequence[Any]]:
    return [values[i : i + size] for i in range(0, len(values), size)]


def _check_batch_size(batch_size: int) -> None:
    if batch_size < 1:
        raise InvalidInput("Batch size must be at least 1")


def _progress_reporter(total: int) -> Callable[[int], None]:
    """Log INFO progress roughly every tenth of `total` batches once there are enough of them."""
    report_every = max(1, total // 10) if total > _PROGRESS_MIN_BATCHES else 0

    def progress(done: int) -> None:
        if report_every and (done % report_every == 0 or done == total):
            logger.info("Processed %d/%d batches (%d%%)", done, total, done * 100 // total)

    return progress


def process_stream(
    values: Sequence[Any],
    operation: str | StreamOperation,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    output_format: str | StreamFormat | None = None,
    parallel: bool = False,
    continue_on_error: bool = False,
    max_workers: int = DEFAULT_MAX_WORKERS,
    engine: UlidEngine | None = None,
) -> list[Any]:
    """
    Apply `operation` to every element of `values`, in input order.

    Args:
        values: ULID strings, or records carrying one in ulid/id/identifier/uuid
        operation: validate, parse, extract-timestamp or transform
        batch_size: Elements per chunk (>= 1)
        output_format: full (default), compact or timestamp-only
        parallel: Fan chunks out to a thread pool
        continue_on_error: Record `{error, input}` instead of aborting
        max_workers: Thread pool size when parallel
        engine: Engine to use (defaults to a fresh UlidEngine)

    Raises:
        InvalidInput: bad operation, format or batch size
        UlidError: first element failure in input order, unless continue_on_error
    """
    op = operation if isinstance(operation, StreamOperation) else parse_operation(operation)
    fmt = output_format if isinstance(output_format, StreamFormat) else parse_stream_format(output_format)
    _check_batch_size(batch_size)
    engine = engine or UlidEngine()

    chunks = _chunks(list(values), batch_size)
    total = len(chunks)
    progress = _progress_reporter(total)

    results: list[Any] = []
    if parallel and total > 1:
        logger.debug("Processing %d batches on %d workers", total, max_workers)
        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
            futures = [
                pool.submit(_process_chunk, chunk, op, fmt, continue_on_error, engine)
                for chunk in chunks
            ]
            # Collected in submission order; .result() re-raises the earliest failure first
            for done, future in enumerate(futures, start=1):
                results.extend(future.result())
                progress(done)
    else:
        for done, chunk in enumerate(chunks, start=1):
            results.extend(_process_chunk(chunk, op, fmt, continue_on_error, engine))
            progress(done)

    return results


def generate_stream(
    count: int,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    base_timestamp: int | None = None,
    unique_timestamps: bool = False,
    max_count: int = MAX_STREAM_COUNT,
    engine: UlidEngine | None = None,
) -> list[str]:
    """
    Generate `count` ULID strings in batches.

    With `base_timestamp`, every identifier uses that timestamp, or
    base + index when `unique_timestamps` is set.
    """
    if count < 0:
        raise InvalidInput("Count must be positive")
    if count > max_count:
        raise InvalidInput(f"Stream generation limited to {max_count:,} ULIDs")
    _check_batch_size(batch_size)
    engine = engine or UlidEngine()

    progress = _progress_reporter(-(-count // batch_size))
    generated: list[str] = []
    done = 0
    while len(generated) < count:
        size = min(batch_size, count - len(generated))
        if base_timestamp is None:
            batch = engine.generate_bulk(size)
        else:
            start = len(generated)
            batch = [
                engine.generate_with_timestamp(base_timestamp + (start + i if unique_timestamps else 0))
                for i in range(size)
            ]
        generated.extend(str(u) for u in batch)
        done += 1
        progress(done)

    logger.debug("Generated %d ULIDs in batches of %d", count, batch_size)
    return generated
