"""Prune run use-case service."""

from __future__ import annotations

import logging
from pathlib import Path

from schema_pruner.configuration import ConfigurationError, load_configuration
from schema_pruner.reachability import SchemaReferenceError, filter_messages
from schema_pruner.schema_tree import (
    EXPORT_FORMATS,
    SchemaLoadError,
    dump_schema_tree,
    load_schema_tree,
)

from .run_contracts import PruneOutcome, PruneRequest, RunArtifacts

logger = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def load_run_artifacts(config_path: str) -> RunArtifacts:
    """Load the configuration and the full schema tree it points at."""
    try:
        configuration = load_configuration(config_path)
        tree = load_schema_tree(configuration.schema.files)
    except (ConfigurationError, SchemaLoadError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc
    return RunArtifacts(configuration=configuration, tree=tree)


def execute_prune_run(request: PruneRequest) -> PruneOutcome:
    """Load, filter and serialize the schema tree described by the configuration."""
    artifacts = load_run_artifacts(request.config_path)
    configuration = artifacts.configuration

    try:
        reachable = filter_messages(artifacts.tree, configuration.filter.requests)
    except SchemaReferenceError as exc:
        raise RunExecutionError(str(exc)) from exc
    logger.debug(
        "Retained %d types across %d namespaces",
        sum(len(types) for types in reachable.values()),
        len(reachable),
    )

    output_format = (request.output_format or configuration.output.format).lower()
    if output_format not in EXPORT_FORMATS:
        raise RunExecutionError(f"Unsupported output format: {output_format}")
    document = dump_schema_tree(artifacts.tree, output_format)

    output_path = _resolve_output_path(request, configuration.output.path)
    if output_path is not None and not request.write_output:
        logger.debug("Dry run, not writing %s", output_path)
        output_path = None
    if output_path is not None:
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(document, encoding="utf-8")
        except OSError as exc:
            raise RunExecutionError(f"Failed to write {output_path}: {exc}") from exc
        output_path = output_path.resolve()
    return PruneOutcome(reachable=reachable, document=document, output_path=output_path)


def _resolve_output_path(request: PruneRequest, configured: Path | None) -> Path | None:
    if request.output_path:
        return Path(request.output_path)
    return configured
