"""Shared plumbing for command functions: rendering, errors, input reading."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..errors import InvalidInput, LabeledError, UlidError, to_labeled


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=_json_default)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    return str(value)


def _write_binary(data: bytes) -> None:
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def emit(value: Any, fmt: str = "text") -> None:
    """
    Print a command result to stdout.

    JSON mode dumps the value (bytes as hex). Text mode prints scalars as-is,
    lists one item per line, mappings and lists of mappings as tables, and
    raw bytes straight to the binary stream.
    """
    if fmt == "json":
        print(json.dumps(value, indent=2, default=_json_default))
        return

    if isinstance(value, (bytes, bytearray)):
        _write_binary(bytes(value))
        return

    console = Console()
    if isinstance(value, dict):
        table = Table(show_header=False)
        table.add_column("field", style="cyan", no_wrap=True)
        table.add_column("value")
        for key, item in value.items():
            table.add_row(Text(str(key)), Text(_scalar(item)))
        console.print(table)
        return

    if isinstance(value, list):
        if value and all(isinstance(item, dict) for item in value):
            columns: list[str] = []
            for item in value:
                columns.extend(k for k in item if k not in columns)
            table = Table()
            for col in columns:
                table.add_column(escape(col), style="cyan" if col == columns[0] else None)
            for item in value:
                table.add_row(*(Text(_scalar(item.get(col))) for col in columns))
            console.print(table)
            return
        for item in value:
            if isinstance(item, (bytes, bytearray)):
                print(bytes(item).hex())
            else:
                print(_scalar(item))
        return

    print(_scalar(value))


def print_error(error: UlidError | LabeledError) -> None:
    """Report an error on stderr as title, message and dim help."""
    labeled = error if isinstance(error, LabeledError) else to_labeled(error)
    console = Console(stderr=True)
    console.print(f"Error: {labeled.title}", style="bold red", markup=False, highlight=False, soft_wrap=True)
    console.print(labeled.message, markup=False, highlight=False, soft_wrap=True)
    if labeled.help:
        console.print(labeled.help, style="dim", markup=False, highlight=False, soft_wrap=True)


def notice(message: str) -> None:
    """Governance-style advisory on stderr; never changes the exit code."""
    console = Console(stderr=True)
    console.print(f"[yellow]⚠ Notice:[/] {message}", style="dim", soft_wrap=True)


def read_list_input(input_path: Path | None = None) -> list[Any]:
    """
    Read a list of identifiers from a file or stdin.

    A JSON array (of strings or records) is used as-is; anything else is
    split into non-empty lines.
    """
    text = input_path.read_text(encoding="utf-8") if input_path else sys.stdin.read()
    stripped = text.strip()
    if not stripped:
        return []
    if stripped.startswith("["):
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise InvalidInput(f"Input looks like JSON but could not be parsed: {e}") from e
        return data
    return [line.strip() for line in stripped.splitlines() if line.strip()]


def read_data(data: str | None) -> bytes:
    """Argument text as UTF-8, or raw stdin bytes when omitted."""
    if data is not None:
        return data.encode("utf-8")
    return sys.stdin.buffer.read()
