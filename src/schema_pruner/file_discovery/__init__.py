"""File discovery exports."""

from .schema_file_discovery import (
    DEFAULT_SCHEMA_SUFFIXES,
    DiscoveryError,
    discover_schema_files,
    expand_schema_paths,
    natural_sort_key,
)

__all__ = [
    "DEFAULT_SCHEMA_SUFFIXES",
    "DiscoveryError",
    "discover_schema_files",
    "expand_schema_paths",
    "natural_sort_key",
]
