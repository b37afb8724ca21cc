"""Stream commands - batch processing and batch generation of ULIDs."""

from __future__ import annotations

from pathlib import Path

from ..batch import DEFAULT_BATCH_SIZE, DEFAULT_MAX_WORKERS, MAX_STREAM_COUNT, generate_stream, process_stream
from ..engine import UlidEngine
from ..errors import UlidError
from ._common import emit, print_error, read_list_input


def run_stream(
    operation: str,
    *,
    input_path: Path | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    output_format: str | None = None,
    parallel: bool = False,
    continue_on_error: bool = False,
    max_workers: int = DEFAULT_MAX_WORKERS,
    output: str = "text",
    engine: UlidEngine | None = None,
) -> int:
    try:
        values = read_list_input(input_path)
        results = process_stream(
            values,
            operation,
            batch_size=batch_size,
            output_format=output_format,
            parallel=parallel,
            continue_on_error=continue_on_error,
            max_workers=max_workers,
            engine=engine,
        )
    except UlidError as e:
        print_error(e)
        return 1

    emit(results, output)
    return 0


def run_generate_stream(
    count: int,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    timestamp: int | None = None,
    unique_timestamps: bool = False,
    max_count: int = MAX_STREAM_COUNT,
    output: str = "text",
    engine: UlidEngine | None = None,
) -> int:
    try:
        ulids = generate_stream(
            count,
            batch_size=batch_size,
            base_timestamp=timestamp,
            unique_timestamps=unique_timestamps,
            max_count=max_count,
            engine=engine,
        )
    except UlidError as e:
        print_error(e)
        return 1

    emit(ulids, output)
    return 0
