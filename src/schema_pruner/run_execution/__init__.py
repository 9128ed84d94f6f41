"""Run execution domain exports."""

from .prune_run_use_case import RunExecutionError, execute_prune_run, load_run_artifacts
from .run_contracts import PruneOutcome, PruneRequest, RunArtifacts

__all__ = [
    "PruneRequest",
    "PruneOutcome",
    "RunArtifacts",
    "RunExecutionError",
    "execute_prune_run",
    "load_run_artifacts",
]
