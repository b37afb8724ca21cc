"""CLI entrypoint for ulid."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import Settings, find_config, load_settings
from .engine import OutputFormat, UlidEngine
from .security import format_command_warning
from .timeconv import NOW_FORMATS, coerce_timestamp_arg

_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def _configure_logging(verbose: int) -> None:
    level = _LOG_LEVELS[min(verbose, len(_LOG_LEVELS) - 1)]
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


def _output(ctx: click.Context) -> str:
    return ctx.obj["output"]


def _engine(ctx: click.Context) -> UlidEngine:
    return UlidEngine(max_bulk=_settings(ctx).max_bulk)


@click.group()
@click.version_option(__version__, prog_name="ulid")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to ulidkit.yml (defaults to the nearest one above the working directory)",
)
@click.option(
    "--format",
    "output",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Rendering of command results",
)
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-v info, -vv debug)")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, output: str, verbose: int) -> None:
    """ulid - Generate, inspect and sort ULIDs.

    ULIDs are 128-bit, lexicographically sortable identifiers: a 48-bit
    millisecond timestamp followed by 80 random bits, written as 26
    Crockford Base32 characters.
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)

    if config_path is None:
        config_path = find_config(Path.cwd())

    try:
        settings = load_settings(config_path)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    ctx.obj["settings"] = settings
    ctx.obj["output"] = output


# --- core -------------------------------------------------------------------


@cli.command(epilog="\b\n" + format_command_warning())
@click.option("--count", "-c", type=int, default=None, help="Number of ULIDs to generate")
@click.option("--timestamp", "-t", type=int, default=None, help="Custom timestamp in milliseconds")
@click.option(
    "--format",
    "-f",
    "value_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=None,
    help="Value format (default from config, normally string)",
)
@click.option("--context", type=str, default=None, help="Usage context for security validation")
@click.pass_context
def generate(
    ctx: click.Context,
    count: int | None,
    timestamp: int | None,
    value_format: str | None,
    context: str | None,
) -> None:
    """Generate new ULIDs.

    Examples:

        ulid generate --count 5

        ulid generate --timestamp 1640995200000 --format json

        ulid generate --context "user session token"
    """
    from .commands.ulid_cmd import run_generate

    exit_code = run_generate(
        count=count,
        timestamp=timestamp,
        value_format=value_format or _settings(ctx).default_format,
        context=context,
        output=_output(ctx),
        engine=_engine(ctx),
    )
    sys.exit(exit_code)


@cli.command()
@click.argument("ulid")
@click.option("--detailed", "-d", is_flag=True, help="Return detailed validation information")
@click.pass_context
def validate(ctx: click.Context, ulid: str, detailed: bool) -> None:
    """Check whether a string is a valid ULID."""
    from .commands.ulid_cmd import run_validate

    exit_code = run_validate(ulid, detailed=detailed, output=_output(ctx))
    sys.exit(exit_code)


@cli.command()
@click.argument("ulid")
@click.pass_context
def parse(ctx: click.Context, ulid: str) -> None:
    """Parse a ULID and show its timestamp and randomness."""
    from .commands.ulid_cmd import run_parse

    exit_code = run_parse(ulid, output=_output(ctx))
    sys.exit(exit_code)


@cli.command()
@click.argument("ulid")
@click.option("--compact", "-c", is_flag=True, help="Compact single-line values")
@click.option("--timestamp-only", "-t", is_flag=True, help="Only show the timestamp")
@click.option("--stats", "-s", is_flag=True, help="Include bit layout and entropy statistics")
@click.pass_context
def inspect(ctx: click.Context, ulid: str, compact: bool, timestamp_only: bool, stats: bool) -> None:
    """Inspect a ULID in detail."""
    from .commands.inspect_cmd import run_inspect

    exit_code = run_inspect(
        ulid,
        compact=compact,
        timestamp_only=timestamp_only,
        stats=stats,
        output=_output(ctx),
    )
    sys.exit(exit_code)


@cli.command("sort")
@click.option("--column", "-c", type=str, default=None, help="Field holding the ULID in each record")
@click.option("--reverse", "-r", is_flag=True, help="Newest first")
@click.option("--natural", "-n", is_flag=True, help="Plain string order instead of timestamp order")
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON array or newline-separated file (default: stdin)",
)
@click.pass_context
def sort_cmd(
    ctx: click.Context,
    column: str | None,
    reverse: bool,
    natural: bool,
    input_path: Path | None,
) -> None:
    """Sort ULIDs by their embedded timestamp.

    Examples:

        printf '%s\\n' 01AN4Z07BZ79KA1307SR9X4MV4 01AN4Z07BY79KA1307SR9X4MV3 | ulid sort

        ulid sort --input events.json --column id --reverse
    """
    from .commands.sort_cmd import run_sort

    exit_code = run_sort(
        input_path=input_path,
        column=column,
        reverse=reverse,
        natural=natural,
        output=_output(ctx),
    )
    sys.exit(exit_code)


@cli.command("security-advice")
@click.option("--context", type=str, default=None, help="Rate a specific usage context")
@click.pass_context
def security_advice(ctx: click.Context, context: str | None) -> None:
    """Show security guidance for ULID usage."""
    from .commands.ulid_cmd import run_security_advice

    exit_code = run_security_advice(context=context, output=_output(ctx))
    sys.exit(exit_code)


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show package information."""
    from .commands.info_cmd import run_info

    exit_code = run_info(output=_output(ctx))
    sys.exit(exit_code)


# --- stream -----------------------------------------------------------------


@cli.command()
@click.argument(
    "operation",
    type=click.Choice(["validate", "parse", "extract-timestamp", "transform"]),
)
@click.option("--batch-size", "-b", type=int, default=None, help="Elements per batch (default from config)")
@click.option(
    "--output-format",
    "-f",
    type=click.Choice(["full", "compact", "timestamp-only"]),
    default="full",
    help="Shape of each result",
)
@click.option("--parallel", "-p", is_flag=True, help="Process batches on a thread pool")
@click.option("--continue-on-error", "-c", is_flag=True, help="Record errors instead of aborting")
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON array or newline-separated file (default: stdin)",
)
@click.pass_context
def stream(
    ctx: click.Context,
    operation: str,
    batch_size: int | None,
    output_format: str,
    parallel: bool,
    continue_on_error: bool,
    input_path: Path | None,
) -> None:
    """Apply an operation to a list of ULIDs in batches."""
    from .commands.stream_cmd import run_stream

    settings = _settings(ctx)
    exit_code = run_stream(
        operation,
        input_path=input_path,
        batch_size=settings.batch_size if batch_size is None else batch_size,
        output_format=output_format,
        parallel=parallel,
        continue_on_error=continue_on_error,
        max_workers=settings.max_workers,
        output=_output(ctx),
        engine=_engine(ctx),
    )
    sys.exit(exit_code)


@cli.command("generate-stream")
@click.argument("count", type=int)
@click.option("--batch-size", "-b", type=int, default=None, help="ULIDs per batch (default from config)")
@click.option("--timestamp", "-t", type=int, default=None, help="Base timestamp in milliseconds")
@click.option("--unique-timestamps", "-u", is_flag=True, help="Increment the base timestamp per ULID")
@click.pass_context
def generate_stream_cmd(
    ctx: click.Context,
    count: int,
    batch_size: int | None,
    timestamp: int | None,
    unique_timestamps: bool,
) -> None:
    """Generate a large number of ULIDs in batches."""
    from .commands.stream_cmd import run_generate_stream

    settings = _settings(ctx)
    exit_code = run_generate_stream(
        count,
        batch_size=settings.batch_size if batch_size is None else batch_size,
        timestamp=timestamp,
        unique_timestamps=unique_timestamps,
        max_count=settings.max_stream_count,
        output=_output(ctx),
        engine=_engine(ctx),
    )
    sys.exit(exit_code)


# --- uuid -------------------------------------------------------------------


@cli.group()
def uuid() -> None:
    """UUID commands."""
    pass


@uuid.command("generate")
@click.pass_context
def uuid_generate(ctx: click.Context) -> None:
    """Generate a random (version 4) UUID."""
    from .commands.uuid_cmd import run_uuid_generate

    sys.exit(run_uuid_generate(output=_output(ctx)))


@uuid.command("validate")
@click.argument("value")
@click.pass_context
def uuid_validate(ctx: click.Context, value: str) -> None:
    """Check whether a string is a valid UUID."""
    from .commands.uuid_cmd import run_uuid_validate

    sys.exit(run_uuid_validate(value, output=_output(ctx)))


@uuid.command("parse")
@click.argument("value")
@click.pass_context
def uuid_parse(ctx: click.Context, value: str) -> None:
    """Parse a UUID into version, variant and representations."""
    from .commands.uuid_cmd import run_uuid_parse

    sys.exit(run_uuid_parse(value, output=_output(ctx)))


# --- time -------------------------------------------------------------------


@cli.group()
def time() -> None:
    """Timestamp conversion commands."""
    pass


@time.command("now")
@click.option("--format", "-f", "fmt", type=click.Choice(list(NOW_FORMATS)), default="iso8601", help="Output format")
@click.pass_context
def time_now(ctx: click.Context, fmt: str) -> None:
    """Current UTC time."""
    from .commands.time_cmd import run_time_now

    sys.exit(run_time_now(fmt=fmt, output=_output(ctx)))


@time.command("parse")
@click.argument("timestamp")
@click.pass_context
def time_parse(ctx: click.Context, timestamp: str) -> None:
    """Parse RFC 3339 text or an epoch number (seconds or milliseconds)."""
    from .commands.time_cmd import run_time_parse

    sys.exit(run_time_parse(coerce_timestamp_arg(timestamp), output=_output(ctx)))


@time.command("millis")
@click.argument("timestamp", required=False)
@click.pass_context
def time_millis(ctx: click.Context, timestamp: str | None) -> None:
    """Convert a timestamp (default: now) to Unix milliseconds."""
    from .commands.time_cmd import run_time_millis

    value = coerce_timestamp_arg(timestamp) if timestamp is not None else None
    sys.exit(run_time_millis(value, output=_output(ctx)))


# --- encode / decode ----------------------------------------------------------


@cli.group()
def encode() -> None:
    """Encode data (argument or stdin)."""
    pass


@encode.command("base32")
@click.argument("data", required=False)
@click.pass_context
def encode_base32_cmd(ctx: click.Context, data: str | None) -> None:
    """Crockford Base32."""
    from .commands._common import read_data
    from .commands.encode_cmd import run_encode

    sys.exit(run_encode("base32", read_data(data), output=_output(ctx)))


@encode.command("hex")
@click.argument("data", required=False)
@click.option("--uppercase", "-u", is_flag=True, help="Uppercase hex digits")
@click.pass_context
def encode_hex_cmd(ctx: click.Context, data: str | None, uppercase: bool) -> None:
    """Hexadecimal."""
    from .commands._common import read_data
    from .commands.encode_cmd import run_encode

    sys.exit(run_encode("hex", read_data(data), uppercase=uppercase, output=_output(ctx)))


@cli.group()
def decode() -> None:
    """Decode data back to bytes or text."""
    pass


@decode.command("base32")
@click.argument("data")
@click.option("--text", "-t", "as_string", is_flag=True, help="Decode to UTF-8 text")
@click.pass_context
def decode_base32_cmd(ctx: click.Context, data: str, as_string: bool) -> None:
    """Crockford Base32."""
    from .commands.encode_cmd import run_decode

    sys.exit(run_decode("base32", data, as_string=as_string, output=_output(ctx)))


@decode.command("hex")
@click.argument("data")
@click.option("--text", "-t", "as_string", is_flag=True, help="Decode to UTF-8 text")
@click.pass_context
def decode_hex_cmd(ctx: click.Context, data: str, as_string: bool) -> None:
    """Hexadecimal."""
    from .commands.encode_cmd import run_decode

    sys.exit(run_decode("hex", data, as_string=as_string, output=_output(ctx)))


# --- hash -------------------------------------------------------------------


@cli.group("hash")
def hash_group() -> None:
    """Hash data (argument or stdin) and generate random bytes."""
    pass


@hash_group.command("sha256")
@click.argument("data", required=False)
@click.option("--binary", "-b", is_flag=True, help="Raw digest bytes instead of hex")
@click.pass_context
def hash_sha256(ctx: click.Context, data: str | None, binary: bool) -> None:
    """SHA-256 digest."""
    from .commands._common import read_data
    from .commands.hash_cmd import run_hash

    sys.exit(run_hash("sha256", read_data(data), binary=binary, output=_output(ctx)))


@hash_group.command("sha512")
@click.argument("data", required=False)
@click.option("--binary", "-b", is_flag=True, help="Raw digest bytes instead of hex")
@click.pass_context
def hash_sha512(ctx: click.Context, data: str | None, binary: bool) -> None:
    """SHA-512 digest."""
    from .commands._common import read_data
    from .commands.hash_cmd import run_hash

    sys.exit(run_hash("sha512", read_data(data), binary=binary, output=_output(ctx)))


@hash_group.command("blake3")
@click.argument("data", required=False)
@click.option("--binary", "-b", is_flag=True, help="Raw digest bytes instead of hex")
@click.option("--length", "-l", type=int, default=32, help="Output length in bytes (1-1024)")
@click.pass_context
def hash_blake3(ctx: click.Context, data: str | None, binary: bool, length: int) -> None:
    """BLAKE3 digest with adjustable output length."""
    from .commands._common import read_data
    from .commands.hash_cmd import run_hash

    sys.exit(run_hash("blake3", read_data(data), binary=binary, length=length, output=_output(ctx)))


@hash_group.command("random")
@click.option("--length", "-l", type=int, default=32, help="Number of bytes (1-1024)")
@click.option("--binary", "-b", is_flag=True, help="Raw bytes instead of hex")
@click.pass_context
def hash_random(ctx: click.Context, length: int, binary: bool) -> None:
    """Cryptographically secure random bytes."""
    from .commands.hash_cmd import run_random

    sys.exit(run_random(length=length, binary=binary, output=_output(ctx)))


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
