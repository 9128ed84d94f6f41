"""Schema file discovery in natural filename order."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_SUFFIXES: tuple[str, ...] = (".yaml", ".yml", ".json")

_NUMBER_CHUNK = re.compile(r"(\d*\.?\d+)")
_EXTENSION = re.compile(r"\.\w+$")


class DiscoveryError(Exception):
    """Raised when a schema location cannot be listed."""


def natural_sort_key(name: str) -> tuple[tuple[tuple[int, float | str], ...], int]:
    """Sort key ordering ``v2`` before ``v10`` and ignoring case and extension.

    Numeric chunks compare as numbers, text chunks case-insensitively; names
    sharing a prefix order by length.
    """
    chunks = _NUMBER_CHUNK.split(_EXTENSION.sub("", name))
    parts: list[tuple[int, float | str]] = []
    for chunk in chunks:
        if not chunk:
            continue
        try:
            parts.append((0, float(chunk)))
        except ValueError:
            parts.append((1, chunk.lower()))
    return tuple(parts), len(name)


def discover_schema_files(
    directory: Path | str, suffixes: Sequence[str] = DEFAULT_SCHEMA_SUFFIXES
) -> list[Path]:
    """List schema files directly inside ``directory`` in natural order."""
    root = Path(directory)
    if not root.is_dir():
        raise DiscoveryError(f"Schema directory not found: {root}")
    allowed = {suffix.lower() for suffix in suffixes}
    files = [
        entry for entry in root.iterdir() if entry.is_file() and entry.suffix.lower() in allowed
    ]
    ordered = sorted(files, key=lambda entry: natural_sort_key(entry.name))
    logger.debug("Discovered %d schema files in %s", len(ordered), root)
    return ordered


def expand_schema_paths(
    paths: Sequence[Path | str], suffixes: Sequence[str] = DEFAULT_SCHEMA_SUFFIXES
) -> list[Path]:
    """Keep files in the given order and expand directories in place."""
    expanded: list[Path] = []
    for raw_path in paths:
        path = Path(raw_path)
        if path.is_dir():
            expanded.extend(discover_schema_files(path, suffixes))
        elif path.is_file():
            expanded.append(path)
        else:
            raise DiscoveryError(f"Schema path not found: {path}")
    return expanded
