"""Tests for command functions (run_*) and their rendered output."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path

from ulidkit.commands.encode_cmd import run_decode, run_encode
from ulidkit.commands.hash_cmd import run_hash, run_random
from ulidkit.commands.info_cmd import run_info
from ulidkit.commands.inspect_cmd import inspect_ulid, run_inspect, shannon_entropy
from ulidkit.commands.sort_cmd import run_sort
from ulidkit.commands.stream_cmd import run_generate_stream, run_stream
from ulidkit.commands.time_cmd import run_time_millis, run_time_now, run_time_parse
from ulidkit.commands.ulid_cmd import run_generate, run_parse, run_security_advice, run_validate
from ulidkit.commands.uuid_cmd import run_uuid_generate, run_uuid_parse, run_uuid_validate
from ulidkit.engine import UlidEngine

KNOWN_ULID = "01AN4Z07BY79KA1307SR9X4MV3"
KNOWN_TIMESTAMP = 1465824320894
SAMPLE_UUID = "550e8400-e29b-41d4-a716-446655440000"


# -----------------------------------------------------------------------------
# generate / validate / parse
# -----------------------------------------------------------------------------


def test_generate_single(fixed_engine: UlidEngine, capsys) -> None:
    assert run_generate(engine=fixed_engine) == 0
    assert capsys.readouterr().out.strip() == "01AN4Z07BY0000000000000001"


def test_generate_json_value(fixed_engine: UlidEngine, capsys) -> None:
    assert run_generate(value_format="json", output="json", engine=fixed_engine) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {
        "ulid": "01AN4Z07BY0000000000000001",
        "timestamp_ms": KNOWN_TIMESTAMP,
        "randomness_hex": "00000000000000000001",
    }


def test_generate_bulk_prints_notice(fixed_engine: UlidEngine, capsys) -> None:
    assert run_generate(count=3, output="json", engine=fixed_engine) == 0
    captured = capsys.readouterr()
    assert len(json.loads(captured.out)) == 3
    assert "Notice" in captured.err


def test_generate_bulk_with_safe_context_is_quiet(fixed_engine: UlidEngine, capsys) -> None:
    assert run_generate(count=2, context="database records", output="json", engine=fixed_engine) == 0
    assert capsys.readouterr().err == ""


def test_generate_bulk_with_timestamp(engine: UlidEngine, capsys) -> None:
    assert run_generate(count=4, timestamp=1_000, output="json", engine=engine) == 0
    values = json.loads(capsys.readouterr().out)
    assert {UlidEngine.extract_timestamp(v) for v in values} == {1_000}


def test_generate_sensitive_context_returns_warning(fixed_engine: UlidEngine, capsys) -> None:
    assert run_generate(count=5, context="auth token", output="json", engine=fixed_engine) == 0
    captured = capsys.readouterr()
    data = json.loads(captured.out)
    assert data["warning"] == "Potential security concern detected"
    assert data["context"] == "auth token"
    assert "ULID Security Warning" in captured.err
    assert "auth token" in captured.err


def test_generate_binary_renders_hex_in_json(fixed_engine: UlidEngine, capsys) -> None:
    assert run_generate(value_format="binary", output="json", engine=fixed_engine) == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data) == 32
    assert data.endswith("01")


def test_generate_over_limit_fails(capsys) -> None:
    assert run_generate(count=3, engine=UlidEngine(max_bulk=2)) == 1
    assert "Invalid input" in capsys.readouterr().err


def test_generate_timestamp_out_of_range(capsys) -> None:
    assert run_generate(timestamp=2**48) == 1
    assert "Timestamp out of range" in capsys.readouterr().err


def test_generate_unknown_value_format(capsys) -> None:
    assert run_generate(value_format="xml") == 1
    assert "Unknown format 'xml'" in capsys.readouterr().err


def test_validate(capsys) -> None:
    assert run_validate(KNOWN_ULID) == 0
    assert capsys.readouterr().out.strip() == "true"
    assert run_validate("nope") == 0
    assert capsys.readouterr().out.strip() == "false"


def test_validate_detailed_json(capsys) -> None:
    assert run_validate("nope", detailed=True, output="json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data["valid"] is False
    assert data["length"] == 4
    assert data["errors"][0] == "Invalid length: expected 26 characters, got 4"


def test_parse(capsys) -> None:
    assert run_parse(KNOWN_ULID, output="json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data["timestamp"]["ms"] == KNOWN_TIMESTAMP
    assert data["timestamp"]["iso8601"] == "2016-06-13T13:25:20.894Z"


def test_parse_invalid(capsys) -> None:
    assert run_parse("not-a-ulid") == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Invalid ULID format" in captured.err
    assert "Example: 01AN4Z07BY79KA1307SR9X4MV3" in captured.err


def test_parse_text_output_is_a_table(capsys) -> None:
    assert run_parse(KNOWN_ULID) == 0
    out = capsys.readouterr().out
    assert "ulid" in out
    assert KNOWN_ULID in out


def test_security_advice_with_context(capsys) -> None:
    assert run_security_advice(context="user session", output="json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data["title"] == "ULID Security Considerations"
    assert data["context_rating"]["rating"] == "High"
    assert data["context_rating"]["sensitive"] is True


def test_security_advice_without_context(capsys) -> None:
    assert run_security_advice(output="json") == 0
    assert "context_rating" not in json.loads(capsys.readouterr().out)


# -----------------------------------------------------------------------------
# inspect
# -----------------------------------------------------------------------------


def test_inspect_full() -> None:
    record = inspect_ulid(KNOWN_ULID, stats=True)
    assert record["ulid"] == KNOWN_ULID
    assert record["valid"] is True
    assert record["timestamp"]["milliseconds"] == KNOWN_TIMESTAMP
    assert record["timestamp"]["seconds"] == 1465824320
    assert record["timestamp"]["human"] == "2016-06-13 13:25:20 UTC"
    assert record["timestamp"]["age"].endswith("days ago")
    assert len(record["randomness"]["bytes"]) == 10
    assert record["statistics"]["total_bits"] == 128
    assert record["statistics"]["collision_probability_per_ms"] == "~1 in 1.2 × 10^24"


def test_inspect_compact() -> None:
    record = inspect_ulid(KNOWN_ULID, compact=True)
    assert record["timestamp"] == "2016-06-13 13:25:20.894 UTC"
    assert isinstance(record["randomness"], str)
    assert "statistics" not in record


def test_inspect_timestamp_only() -> None:
    record = inspect_ulid(KNOWN_ULID, timestamp_only=True, stats=True)
    assert list(record) == ["timestamp"]


def test_inspect_invalid(capsys) -> None:
    assert run_inspect("bad") == 1
    assert "Invalid ULID format" in capsys.readouterr().err


def test_inspect_json(capsys) -> None:
    assert run_inspect(KNOWN_ULID, compact=True, output="json") == 0
    assert json.loads(capsys.readouterr().out)["ulid"] == KNOWN_ULID


def test_shannon_entropy() -> None:
    assert shannon_entropy("0123456789abcdef") == 4.0
    assert shannon_entropy("aaaa") == 0.0
    assert shannon_entropy("") == 0.0


# -----------------------------------------------------------------------------
# sort / stream
# -----------------------------------------------------------------------------


def test_sort_from_file(tmp_path: Path, engine: UlidEngine, capsys) -> None:
    early = str(engine.generate_with_timestamp(1_000))
    late = str(engine.generate_with_timestamp(2_000))
    path = tmp_path / "ids.txt"
    path.write_text(f"{late}\n\n{early}\n", encoding="utf-8")

    assert run_sort(input_path=path, output="json") == 0
    assert json.loads(capsys.readouterr().out) == [early, late]


def test_sort_records_json_file(tmp_path: Path, engine: UlidEngine, capsys) -> None:
    early = str(engine.generate_with_timestamp(1_000))
    late = str(engine.generate_with_timestamp(2_000))
    path = tmp_path / "ids.json"
    path.write_text(json.dumps([{"id": early}, {"id": late}]), encoding="utf-8")

    assert run_sort(input_path=path, column="id", reverse=True, output="json") == 0
    assert json.loads(capsys.readouterr().out) == [{"id": late}, {"id": early}]


def test_sort_malformed_json(tmp_path: Path, capsys) -> None:
    path = tmp_path / "ids.json"
    path.write_text("[not json", encoding="utf-8")
    assert run_sort(input_path=path) == 1
    assert "could not be parsed" in capsys.readouterr().err


def test_stream(tmp_path: Path, capsys) -> None:
    path = tmp_path / "ids.txt"
    path.write_text(f"{KNOWN_ULID}\nbad\n", encoding="utf-8")

    assert run_stream("extract-timestamp", input_path=path, continue_on_error=True, output="json") == 0
    results = json.loads(capsys.readouterr().out)
    assert results[0] == KNOWN_TIMESTAMP
    assert results[1]["input"] == "bad"


def test_stream_aborts_on_error(tmp_path: Path, capsys) -> None:
    path = tmp_path / "ids.txt"
    path.write_text("bad\n", encoding="utf-8")
    assert run_stream("parse", input_path=path) == 1
    assert "Invalid ULID format" in capsys.readouterr().err


def test_generate_stream(fixed_engine: UlidEngine, capsys) -> None:
    assert run_generate_stream(3, batch_size=2, engine=fixed_engine) == 0
    assert capsys.readouterr().out.split() == [
        "01AN4Z07BY0000000000000001",
        "01AN4Z07BY0000000000000002",
        "01AN4Z07BY0000000000000003",
    ]


def test_generate_stream_over_limit(capsys) -> None:
    assert run_generate_stream(5, max_count=4) == 1
    assert "limited to 4 ULIDs" in capsys.readouterr().err


# -----------------------------------------------------------------------------
# uuid / time / encode / hash / info
# -----------------------------------------------------------------------------


def test_uuid_generate(capsys) -> None:
    assert run_uuid_generate() == 0
    value = capsys.readouterr().out.strip()
    assert len(value) == 36
    assert value[14] == "4"


def test_uuid_validate(capsys) -> None:
    assert run_uuid_validate(SAMPLE_UUID) == 0
    assert capsys.readouterr().out.strip() == "true"
    assert run_uuid_validate("nope") == 0
    assert capsys.readouterr().out.strip() == "false"


def test_uuid_parse(capsys) -> None:
    assert run_uuid_parse(SAMPLE_UUID.upper(), output="json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {
        "uuid": SAMPLE_UUID,
        "version": 4,
        "variant": "RFC4122",
        "hyphenated": SAMPLE_UUID,
        "simple": "550e8400e29b41d4a716446655440000",
        "urn": f"urn:uuid:{SAMPLE_UUID}",
        "bytes": "550e8400e29b41d4a716446655440000",
    }


def test_uuid_parse_nil_variant(capsys) -> None:
    assert run_uuid_parse("00000000-0000-0000-0000-000000000000", output="json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data["version"] == 0
    assert data["variant"] == "NCS"


def test_uuid_parse_invalid(capsys) -> None:
    assert run_uuid_parse("nope") == 1
    assert "Invalid input" in capsys.readouterr().err


def test_time_commands(capsys) -> None:
    assert run_time_millis("2024-01-01T00:00:00Z") == 0
    assert capsys.readouterr().out.strip() == "1704067200000"

    assert run_time_parse(1704067200, output="json") == 0
    assert json.loads(capsys.readouterr().out)["iso8601"] == "2024-01-01T00:00:00.000Z"

    assert run_time_now(fmt="millis") == 0
    assert capsys.readouterr().out.strip().isdigit()


def test_time_errors(capsys) -> None:
    assert run_time_parse("yesterday") == 1
    assert "Invalid timestamp format" in capsys.readouterr().err
    assert run_time_now(fmt="epoch") == 1
    assert "Unknown format 'epoch'" in capsys.readouterr().err


def test_encode_decode(capsys) -> None:
    assert run_encode("base32", b"hello") == 0
    assert capsys.readouterr().out.strip() == "D1JPRV3F"

    assert run_encode("hex", b"hello", uppercase=True) == 0
    assert capsys.readouterr().out.strip() == "68656C6C6F"

    assert run_decode("base32", "D1JPRV3F", as_string=True) == 0
    assert capsys.readouterr().out.strip() == "hello"

    assert run_decode("hex", "68656c6c6f", output="json") == 0
    assert json.loads(capsys.readouterr().out) == "68656c6c6f"


def test_decode_errors(capsys) -> None:
    assert run_decode("hex", "zz") == 1
    assert "Failed to decode hex data" in capsys.readouterr().err
    assert run_decode("hex", "ff", as_string=True) == 1
    assert "not valid UTF-8" in capsys.readouterr().err


def test_decode_binary_to_stdout(capsysbinary) -> None:
    assert run_decode("hex", "00ff10") == 0
    assert capsysbinary.readouterr().out == b"\x00\xff\x10"


def test_hash(capsys) -> None:
    assert run_hash("sha256", b"abc") == 0
    assert capsys.readouterr().out.strip() == hashlib.sha256(b"abc").hexdigest()

    assert run_hash("blake3", b"abc", length=8) == 0
    assert len(capsys.readouterr().out.strip()) == 16


def test_hash_binary(capsysbinary) -> None:
    assert run_hash("sha512", b"abc", binary=True) == 0
    assert capsysbinary.readouterr().out == hashlib.sha512(b"abc").digest()


def test_hash_errors(capsys) -> None:
    assert run_hash("blake3", b"abc", length=0) == 1
    assert "between 1 and 1024" in capsys.readouterr().err
    assert run_hash("md5", b"abc") == 1
    assert "Unknown algorithm 'md5'" in capsys.readouterr().err


def test_random(counter_source, capsys) -> None:
    assert run_random(length=4, source=counter_source) == 0
    assert capsys.readouterr().out.strip() == "00000001"
    assert run_random(length=2048) == 1


def test_info(capsys) -> None:
    assert run_info(output="json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data["name"] == "ulidkit"
    assert set(data) == {"name", "version", "description", "authors", "license", "repository"}
