"""Reachability filtering of schema trees.

Computes the transitive closure of types reachable from an entry set through
resolved field references and prunes the tree down to that closure. The walk
is depth first with an explicit stack; every (namespace, type) pair is
expanded at most once, so reference cycles and shared references terminate.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from schema_pruner.schema_tree.tree_models import (
    Namespace,
    SchemaTree,
    TypeDefinition,
    TypeKey,
    TypeKind,
)

from .filter_contracts import FilterRequest, ReachableSet, VisitedMarker


class SchemaReferenceError(LookupError):
    """Raised when a requested type does not exist in its namespace."""

    def __init__(self, namespace: str, type_name: str) -> None:
        super().__init__(f"Type '{type_name}' not found in namespace '{namespace}'")
        self.namespace = namespace
        self.type_name = type_name


def compute_reachable(
    root: SchemaTree,
    request: FilterRequest,
    reachable: ReachableSet | None = None,
    visited: VisitedMarker | None = None,
    *,
    on_expand: Callable[[TypeKey], None] | None = None,
) -> ReachableSet:
    """Collect every type reachable from ``request`` into ``reachable``.

    The entry namespace is looked up among the root's top-level namespaces; if
    it is missing the call is skipped without error, leaving ``reachable`` as
    it was. Field references are followed by their dotted namespace path, so
    types in nested namespaces are collected under that full name. A missing
    type inside an existing namespace raises :class:`SchemaReferenceError`.
    Pass the same ``reachable`` and ``visited`` objects across calls to merge
    several requests.

    Args:
      root: Tree whose top-level namespaces are searched.
      request: Namespace name and entry type names.
      reachable: Partially built result to extend; created when omitted.
      visited: Keys already expanded; created when omitted.
      on_expand: Called once per type whose fields are scanned.

    Returns:
      The reachable set, mapping namespace full name to required type names.
    """
    reachable = {} if reachable is None else reachable
    visited = set() if visited is None else visited

    entry = root.lookup(request.namespace)
    if entry is None:
        return reachable

    stack: list[tuple[Namespace, str]] = [
        (entry, type_name) for type_name in reversed(request.type_names)
    ]
    while stack:
        namespace, type_name = stack.pop()
        required = reachable.setdefault(namespace.full_name, set())

        definition = namespace.lookup(type_name)
        if definition is None:
            raise SchemaReferenceError(namespace.full_name, type_name)
        required.add(type_name)

        if not _is_expandable(definition):
            continue
        key = TypeKey(namespace=namespace.full_name, name=type_name)
        if key in visited:
            continue
        visited.add(key)
        if on_expand is not None:
            on_expand(key)

        references = [field.resolved for field in definition.fields if field.resolved is not None]
        for reference in reversed(references):
            target = root.find_namespace(reference.namespace)
            if target is not None:
                stack.append((target, reference.name))
    return reachable


def prune_tree(root: SchemaTree, reachable: ReachableSet) -> None:
    """Drop every namespace and child entry absent from ``reachable``, in place.

    A sub-namespace named in its parent's set is kept whole. Any other
    namespace survives only while it leads to a reachable type, and its own
    children are pruned the same way.
    """
    for name in [
        name
        for name, namespace in root.namespaces.items()
        if not _leads_to_reachable(namespace, reachable)
    ]:
        del root.namespaces[name]
    for namespace in root.namespaces.values():
        _prune_namespace(namespace, reachable)


def filter_message(root: SchemaTree, request: FilterRequest) -> ReachableSet:
    """Prune ``root`` to the closure of ``request``; the tree is untouched on error."""
    reachable = compute_reachable(root, request)
    prune_tree(root, reachable)
    return reachable


def filter_messages(root: SchemaTree, requests: Iterable[FilterRequest]) -> ReachableSet:
    """Merge the closures of several requests and prune once."""
    reachable: ReachableSet = {}
    visited: VisitedMarker = set()
    for request in requests:
        compute_reachable(root, request, reachable, visited)
    prune_tree(root, reachable)
    return reachable


def _prune_namespace(namespace: Namespace, reachable: ReachableSet) -> None:
    required = reachable.get(namespace.full_name, set())
    for child_name, child in list(namespace.children.items()):
        if child_name in required:
            continue
        if isinstance(child, Namespace) and _leads_to_reachable(child, reachable):
            _prune_namespace(child, reachable)
            continue
        del namespace.children[child_name]


def _leads_to_reachable(namespace: Namespace, reachable: ReachableSet) -> bool:
    prefix = f"{namespace.full_name}."
    return any(name == namespace.full_name or name.startswith(prefix) for name in reachable)


def _is_expandable(definition: object) -> bool:
    return isinstance(definition, TypeDefinition) and definition.kind is TypeKind.MESSAGE
