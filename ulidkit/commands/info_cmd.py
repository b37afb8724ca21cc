"""Info command - package metadata."""

from __future__ import annotations

from importlib import metadata

from .. import __version__
from ._common import emit

DISTRIBUTION = "ulidkit"


def package_info() -> dict:
    """Metadata from the installed distribution; fields absent there are None."""
    try:
        meta = metadata.metadata(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        meta = None

    def field(name: str) -> str | None:
        return meta.get(name) if meta is not None else None

    repository = None
    if meta is not None:
        for entry in meta.get_all("Project-URL") or []:
            label, _, url = entry.partition(",")
            if label.strip().lower() in ("repository", "source", "homepage"):
                repository = url.strip()
                break

    return {
        "name": DISTRIBUTION,
        "version": __version__,
        "description": field("Summary") or "ULID generation, inspection and sorting toolkit",
        "authors": field("Author") or field("Author-email"),
        "license": field("License") or field("License-Expression"),
        "repository": repository,
    }


def run_info(*, output: str = "text") -> int:
    emit(package_info(), output)
    return 0
