"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from schema_pruner.configuration.runtime_settings import Configuration
from schema_pruner.reachability.filter_contracts import ReachableSet
from schema_pruner.schema_tree.tree_models import SchemaTree


@dataclass(frozen=True)
class PruneRequest:
    """Input contract for one prune run; overrides win over the configuration.

    With ``write_output`` off the document is only returned, never written.
    """

    config_path: str
    output_path: str | None = None
    output_format: str | None = None
    write_output: bool = True


@dataclass(frozen=True)
class PruneOutcome:
    """Output contract for one completed prune run."""

    reachable: ReachableSet
    document: str
    output_path: Path | None


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded domain artifacts required during run execution."""

    configuration: Configuration
    tree: SchemaTree
