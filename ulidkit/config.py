"""
Settings for the ulid command line.

Defaults live on the Settings dataclass. An optional `ulidkit.yml` overrides
them; it is found by walking up from the working directory, or passed
explicitly with `--config`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path

from .batch import DEFAULT_BATCH_SIZE, DEFAULT_MAX_WORKERS, MAX_STREAM_COUNT
from .engine import MAX_BULK_GENERATION, OutputFormat

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "ulidkit.yml"


@dataclass(frozen=True)
class Settings:
    max_bulk: int = MAX_BULK_GENERATION
    max_stream_count: int = MAX_STREAM_COUNT
    batch_size: int = DEFAULT_BATCH_SIZE
    max_workers: int = DEFAULT_MAX_WORKERS
    default_format: str = OutputFormat.STRING.value

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


_POSITIVE_INTS = ("max_bulk", "max_stream_count", "batch_size", "max_workers")


def _coerce(data: dict, source: Path) -> dict:
    known = {f.name for f in fields(Settings)}
    values = {}
    for key, value in data.items():
        if key not in known:
            logger.debug("Ignoring unknown setting '%s' in %s", key, source)
            continue
        if key in _POSITIVE_INTS:
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{source}: '{key}' must be a positive integer, got {value!r}")
        elif key == "default_format":
            valid = [f.value for f in OutputFormat]
            if value not in valid:
                raise ValueError(f"{source}: 'default_format' must be one of {', '.join(valid)}, got {value!r}")
        values[key] = value
    return values


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from a YAML file, falling back to defaults.

    Args:
        path: Config file; None means defaults only

    Raises:
        ValueError: file is not a mapping, or a value has the wrong type
    """
    settings = Settings()
    if path is None:
        return settings

    import yaml

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"{path}: invalid YAML: {e}") from e

    if data is None:
        return settings
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    logger.debug("Loaded settings from %s", path)
    return replace(settings, **_coerce(data, path))


def find_config(start: Path) -> Path | None:
    """Find `ulidkit.yml` by walking up from `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        candidate = p / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
