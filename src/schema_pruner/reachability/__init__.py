"""Reachability filter exports."""

from .filter_contracts import FilterRequest, ReachableSet, VisitedMarker
from .reachability_filter import (
    SchemaReferenceError,
    compute_reachable,
    filter_message,
    filter_messages,
    prune_tree,
)

__all__ = [
    "FilterRequest",
    "ReachableSet",
    "VisitedMarker",
    "SchemaReferenceError",
    "compute_reachable",
    "filter_message",
    "filter_messages",
    "prune_tree",
]
