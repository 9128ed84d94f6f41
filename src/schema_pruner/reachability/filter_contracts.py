"""Reachability filter entities."""

from __future__ import annotations

from dataclasses import dataclass

from schema_pruner.schema_tree.tree_models import TypeKey

ReachableSet = dict[str, set[str]]
VisitedMarker = set[TypeKey]


@dataclass(frozen=True)
class FilterRequest:
    """Entry set: type names in one top-level namespace that must survive filtering."""

    namespace: str
    type_names: tuple[str, ...]

    def __post_init__(self) -> None:
        # A bare string is one type name; duplicates collapse, first occurrence wins.
        names = self.type_names
        if isinstance(names, str):
            names = (names,)
        object.__setattr__(self, "type_names", tuple(dict.fromkeys(names)))
