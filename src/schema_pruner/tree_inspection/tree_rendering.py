"""Human-readable rendering of schema trees for debugging."""

from __future__ import annotations

from collections.abc import Mapping, Set

import click

from schema_pruner.schema_tree.tree_models import (
    FieldDefinition,
    Namespace,
    SchemaTree,
    TypeDefinition,
    TypeKind,
)

ROOT_LABEL = "<root>"


def render_tree(node: SchemaTree | Namespace | TypeDefinition, *, styled: bool = True) -> str:
    """Render ``node`` and everything below it as indented text."""
    return _render(node, parent=_parent_name(node), indent="", styled=styled)


def pad(text: str, width: int, left_align: bool = False) -> str:
    """Pad ``text`` with spaces to ``width``; right-aligned unless ``left_align``."""
    if len(text) >= width:
        return text
    return text.ljust(width) if left_align else text.rjust(width)


def render_summary(reachable: Mapping[str, Set[str]]) -> str:
    """One line per namespace: name, type count and sorted type names."""
    if not reachable:
        return ""
    name_width = max(len(name) for name in reachable)
    count_width = max(len(str(len(types))) for types in reachable.values())
    lines = [
        f"{pad(name, name_width, left_align=True)}  {pad(str(len(types)), count_width)}  "
        f"{', '.join(sorted(types))}".rstrip()
        for name, types in reachable.items()
    ]
    return "\n".join(lines)


def _render(
    node: SchemaTree | Namespace | TypeDefinition | FieldDefinition,
    *,
    parent: str,
    indent: str,
    styled: bool,
) -> str:
    connector = indent[:-2] + "└ " if indent else ""
    lines = [
        connector + _bold(_describe(node, parent), styled),
        indent + _gray("parent: ", styled) + parent,
    ]
    if isinstance(node, FieldDefinition):
        lines.append(indent + _gray("type  : ", styled) + _field_type(node))
        if node.resolved is not None:
            lines.append(indent + _gray("target: ", styled) + str(node.resolved))
    elif isinstance(node, TypeDefinition) and node.kind is TypeKind.ENUM:
        values = ", ".join(f"{name}={number}" for name, number in node.values.items())
        lines.append(indent + _gray("values: ", styled) + values)
    lines.append("")

    child_indent = indent + "  "
    if isinstance(node, SchemaTree):
        for namespace in node.namespaces.values():
            lines.append(_render(namespace, parent=ROOT_LABEL, indent=child_indent, styled=styled))
    elif isinstance(node, Namespace):
        for child in node.children.values():
            lines.append(_render(child, parent=node.full_name, indent=child_indent, styled=styled))
    elif isinstance(node, TypeDefinition):
        for field in node.fields:
            lines.append(
                _render(field, parent=node.full_name, indent=child_indent, styled=styled)
            )
    return "\n".join(lines)


def _describe(node: SchemaTree | Namespace | TypeDefinition | FieldDefinition, parent: str) -> str:
    if isinstance(node, SchemaTree):
        return "Root"
    if isinstance(node, Namespace):
        return f"Namespace {node.full_name}"
    if isinstance(node, TypeDefinition):
        label = "Enum" if node.kind is TypeKind.ENUM else "Message"
        return f"{label} {node.full_name}"
    return f"Field {parent}.{node.name}"


def _parent_name(node: SchemaTree | Namespace | TypeDefinition) -> str:
    if isinstance(node, SchemaTree):
        return "-"
    if isinstance(node, Namespace):
        return node.full_name.rpartition(".")[0] or ROOT_LABEL
    return node.namespace


def _field_type(field: FieldDefinition) -> str:
    parts = [field.rule] if field.rule else []
    parts.append(field.type_name)
    if field.field_id is not None:
        parts.append(f"= {field.field_id}")
    return " ".join(parts)


def _bold(text: str, styled: bool) -> str:
    return click.style(text, bold=True) if styled else text


def _gray(text: str, styled: bool) -> str:
    return click.style(text, fg="bright_black") if styled else text
