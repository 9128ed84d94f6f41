"""Configuration loader service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from schema_pruner.file_discovery import DiscoveryError, expand_schema_paths
from schema_pruner.reachability.filter_contracts import FilterRequest
from schema_pruner.schema_tree.tree_export import EXPORT_FORMATS

from .runtime_settings import Configuration, FilterSettings, OutputSettings, SchemaSourceSettings

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    configuration = Configuration(
        path=path,
        schema=_parse_schema_section(parsed.get("schema"), base_path),
        filter=_parse_filter_section(parsed.get("filter")),
        output=_parse_output_section(parsed.get("output"), base_path),
    )
    logger.debug(
        "Loaded configuration %s: %d schema files, %d filter requests",
        path,
        len(configuration.schema.files),
        len(configuration.filter.requests),
    )
    return configuration


def _parse_schema_section(value: Any, base_path: Path) -> SchemaSourceSettings:
    section = _require_mapping(value, "schema")
    raw_paths = _normalize_string_sequence(section.get("paths"), "schema.paths")
    if not raw_paths:
        raise ConfigurationError("schema.paths must contain at least one file or directory.")
    paths = tuple(_resolve_path(base_path, raw_path) for raw_path in raw_paths)
    try:
        files = expand_schema_paths(paths)
    except DiscoveryError as exc:
        raise ConfigurationError(str(exc)) from exc
    if not files:
        raise ConfigurationError("schema.paths did not match any schema files.")
    return SchemaSourceSettings(paths=paths, files=tuple(files))


def _parse_filter_section(value: Any) -> FilterSettings:
    if value is None:
        raise ConfigurationError("Configuration section 'filter' is required.")
    entries = [value] if isinstance(value, Mapping) else value
    if not isinstance(entries, Sequence) or isinstance(entries, str) or not entries:
        raise ConfigurationError("filter must be a mapping or a non-empty list of mappings.")

    requests = []
    for index, entry in enumerate(entries):
        label = f"filter[{index}]"
        section = _require_mapping(entry, label)
        namespace = _require_non_empty_string(section.get("namespace"), f"{label}.namespace")
        types = _normalize_string_sequence(section.get("types"), f"{label}.types")
        if not types:
            raise ConfigurationError(f"{label}.types must name at least one type.")
        requests.append(FilterRequest(namespace=namespace, type_names=types))
    return FilterSettings(requests=tuple(requests))


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _require_mapping(value, "output") if value is not None else {}
    raw_path = _optional_string(section.get("path"), "output.path")
    path = _resolve_path(base_path, raw_path) if raw_path else None
    default_format = "json" if path is not None and path.suffix.lower() == ".json" else "yaml"
    fmt = _optional_string(section.get("format"), "output.format") or default_format
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise ConfigurationError(f"output.format must be one of: {', '.join(EXPORT_FORMATS)}.")
    return OutputSettings(path=path, format=fmt)


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
