"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from schema_pruner.reachability.filter_contracts import FilterRequest


@dataclass(frozen=True)
class SchemaSourceSettings:
    """Schema locations as configured and the files they expand to."""

    paths: tuple[Path, ...]
    files: tuple[Path, ...]


@dataclass(frozen=True)
class FilterSettings:
    """Entry sets whose closures are merged before pruning."""

    requests: tuple[FilterRequest, ...]


@dataclass(frozen=True)
class OutputSettings:
    """Destination of the pruned schema document."""

    path: Path | None
    format: str


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    schema: SchemaSourceSettings
    filter: FilterSettings
    output: OutputSettings
