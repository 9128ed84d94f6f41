"""Schema tree export for code emission."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .tree_models import FieldDefinition, Namespace, SchemaTree, TypeDefinition, TypeKind

EXPORT_FORMATS: tuple[str, ...] = ("yaml", "json")


def export_schema_tree(tree: SchemaTree) -> dict[str, Any]:
    """Return a schema document with the loader's shape, preserving child order."""
    return {
        "namespaces": {
            name: _export_namespace(namespace) for name, namespace in tree.namespaces.items()
        }
    }


def dump_schema_tree(tree: SchemaTree, fmt: str = "yaml") -> str:
    """Serialize the tree as YAML or JSON text."""
    document = export_schema_tree(tree)
    if fmt == "json":
        return json.dumps(document, indent=2) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, default_flow_style=False)
    raise ValueError(f"Unsupported export format: {fmt}")


def write_schema_tree(tree: SchemaTree, output_path: Path | str, fmt: str = "yaml") -> Path:
    """Write the serialized tree and return the resolved destination."""
    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(dump_schema_tree(tree, fmt), encoding="utf-8")
    return destination.resolve()


def _export_namespace(namespace: Namespace) -> dict[str, Any]:
    exported: dict[str, Any] = {}
    types = {
        type_definition.name: _export_type(type_definition)
        for type_definition in namespace.types()
    }
    nested = {child.name: _export_namespace(child) for child in namespace.namespaces()}
    if types:
        exported["types"] = types
    if nested:
        exported["namespaces"] = nested
    if namespace.options:
        exported["options"] = dict(namespace.options)
    return exported


def _export_type(type_definition: TypeDefinition) -> dict[str, Any]:
    exported: dict[str, Any] = {}
    if type_definition.kind is TypeKind.ENUM:
        exported["values"] = dict(type_definition.values)
    else:
        exported["fields"] = [_export_field(field) for field in type_definition.fields]
    if type_definition.options:
        exported["options"] = dict(type_definition.options)
    return exported


def _export_field(field: FieldDefinition) -> dict[str, Any]:
    exported: dict[str, Any] = {"name": field.name, "type": field.type_name}
    if field.field_id is not None:
        exported["id"] = field.field_id
    if field.rule is not None:
        exported["rule"] = field.rule
    if field.options:
        exported["options"] = dict(field.options)
    return exported
