"""Sort command - order ULIDs (or records) by embedded timestamp."""

from __future__ import annotations

from pathlib import Path

from ..errors import UlidError
from ..ordering import sort_ulids
from ._common import emit, print_error, read_list_input


def run_sort(
    *,
    input_path: Path | None = None,
    column: str | None = None,
    reverse: bool = False,
    natural: bool = False,
    output: str = "text",
) -> int:
    """Read a list from `input_path` (or stdin), sort it, print it."""
    try:
        values = read_list_input(input_path)
    except UlidError as e:
        print_error(e)
        return 1

    emit(sort_ulids(values, column=column, natural=natural, reverse=reverse), output)
    return 0
