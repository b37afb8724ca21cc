"""Tests for batch/stream processing."""

from __future__ import annotations

import logging

import pytest

from ulidkit.batch import generate_stream, process_stream
from ulidkit.engine import UlidEngine
from ulidkit.errors import InvalidFormat, InvalidInput

KNOWN_ULID = "01AN4Z07BY79KA1307SR9X4MV3"
KNOWN_TIMESTAMP = 1465824320894


def test_validate_compact() -> None:
    assert process_stream([KNOWN_ULID, "bad"], "validate", output_format="compact") == [True, False]


def test_validate_is_boolean_in_every_format() -> None:
    for fmt in (None, "full", "timestamp-only"):
        assert process_stream([KNOWN_ULID, "bad"], "validate", output_format=fmt) == [True, False]


def test_parse_formats() -> None:
    full = process_stream([KNOWN_ULID], "parse")
    assert full[0]["timestamp"]["ms"] == KNOWN_TIMESTAMP

    compact = process_stream([KNOWN_ULID], "parse", output_format="compact")
    assert set(compact[0]) == {"ulid", "timestamp_ms", "randomness_hex"}

    assert process_stream([KNOWN_ULID], "parse", output_format="timestamp-only") == [KNOWN_TIMESTAMP]


def test_extract_timestamp_from_records() -> None:
    values = [{"ulid": KNOWN_ULID}, {"id": KNOWN_ULID}, {"identifier": KNOWN_ULID}, {"uuid": KNOWN_ULID}]
    assert process_stream(values, "extract-timestamp") == [KNOWN_TIMESTAMP] * 4


def test_transform() -> None:
    assert process_stream([{"id": KNOWN_ULID}], "transform") == [KNOWN_ULID]
    assert process_stream([KNOWN_ULID], "transform", output_format="compact") == [{"ulid": KNOWN_ULID}]
    with pytest.raises(InvalidInput, match="'bad' is not a valid ULID"):
        process_stream(["bad"], "transform")


def test_first_failure_aborts() -> None:
    with pytest.raises(InvalidFormat) as exc:
        process_stream([KNOWN_ULID, "first-bad", "second-bad"], "parse")
    assert exc.value.input == "first-bad"


def test_continue_on_error_records_failures() -> None:
    values = [KNOWN_ULID, "bad", {"name": "x"}, 42]
    results = process_stream(values, "extract-timestamp", continue_on_error=True)
    assert results[0] == KNOWN_TIMESTAMP
    assert results[1]["input"] == "bad"
    assert "Invalid ULID format 'bad'" in results[1]["error"]
    assert "No ULID field found" in results[2]["error"]
    assert results[3] == {"error": "Invalid input: Expected string or record containing ULID", "input": 42}


def test_unknown_operation() -> None:
    with pytest.raises(InvalidInput, match="Valid operations: validate, parse, extract-timestamp, transform"):
        process_stream([KNOWN_ULID], "explode")


def test_unknown_output_format() -> None:
    with pytest.raises(InvalidInput, match="Unknown output format 'xml'"):
        process_stream([KNOWN_ULID], "parse", output_format="xml")


def test_batch_size_must_be_positive() -> None:
    with pytest.raises(InvalidInput, match="Batch size"):
        process_stream([KNOWN_ULID], "validate", batch_size=0)


def test_empty_input() -> None:
    assert process_stream([], "validate") == []


def test_parallel_preserves_order(engine: UlidEngine) -> None:
    values = [str(engine.generate_with_timestamp(i)) for i in range(200)]
    values[57] = "bad"
    sequential = process_stream(values, "extract-timestamp", batch_size=7, continue_on_error=True)
    parallel = process_stream(
        values, "extract-timestamp", batch_size=7, parallel=True, continue_on_error=True, max_workers=4
    )
    assert parallel == sequential
    assert parallel[:3] == [0, 1, 2]
    assert parallel[57]["input"] == "bad"


def test_parallel_raises_first_failure_in_input_order(engine: UlidEngine) -> None:
    values = [str(engine.generate()) for _ in range(30)]
    values[5] = "early-bad"
    values[25] = "late-bad"
    with pytest.raises(InvalidFormat) as exc:
        process_stream(values, "parse", batch_size=3, parallel=True)
    assert exc.value.input == "early-bad"


def test_progress_logged_for_many_batches(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="ulidkit.batch"):
        process_stream([KNOWN_ULID] * 20, "validate", batch_size=1)
    assert "Processed 20/20 batches (100%)" in caplog.text


def test_no_progress_for_few_batches(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="ulidkit.batch"):
        process_stream([KNOWN_ULID] * 5, "validate", batch_size=1)
    assert "Processed" not in caplog.text


# -----------------------------------------------------------------------------
# generate_stream
# -----------------------------------------------------------------------------


def test_generate_stream_count_and_uniqueness() -> None:
    ulids = generate_stream(25, batch_size=10)
    assert len(ulids) == 25
    assert len(set(ulids)) == 25


def test_generate_stream_zero() -> None:
    assert generate_stream(0) == []


def test_generate_stream_base_timestamp() -> None:
    ulids = generate_stream(5, batch_size=2, base_timestamp=1_000)
    assert {UlidEngine.extract_timestamp(u) for u in ulids} == {1_000}


def test_generate_stream_unique_timestamps() -> None:
    ulids = generate_stream(5, batch_size=2, base_timestamp=1_000, unique_timestamps=True)
    assert [UlidEngine.extract_timestamp(u) for u in ulids] == [1_000, 1_001, 1_002, 1_003, 1_004]


def test_generate_stream_limits() -> None:
    with pytest.raises(InvalidInput, match="limited to 10 ULIDs"):
        generate_stream(11, max_count=10)
    with pytest.raises(InvalidInput, match="Count must be positive"):
        generate_stream(-1)
    with pytest.raises(InvalidInput, match="Batch size"):
        generate_stream(5, batch_size=0)


def test_generate_stream_uses_engine(fixed_engine: UlidEngine) -> None:
    assert generate_stream(2, engine=fixed_engine) == [
        "01AN4Z07BY0000000000000001",
        "01AN4Z07BY0000000000000002",
    ]


def test_generate_stream_logs_progress(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="ulidkit.batch"):
        generate_stream(20, batch_size=1)
    assert "Processed 2/20 batches (10%)" in caplog.text
    assert "Processed 20/20 batches (100%)" in caplog.text
