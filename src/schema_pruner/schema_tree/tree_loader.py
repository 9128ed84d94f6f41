"""Schema document loading and field reference resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .tree_models import FieldDefinition, Namespace, SchemaTree, TypeDefinition, TypeKey, TypeKind

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES: frozenset[str] = frozenset(
    {
        "double",
        "float",
        "int32",
        "int64",
        "uint32",
        "uint64",
        "sint32",
        "sint64",
        "fixed32",
        "fixed64",
        "sfixed32",
        "sfixed64",
        "bool",
        "string",
        "bytes",
    }
)

FIELD_RULES: frozenset[str] = frozenset({"optional", "repeated", "required"})


class SchemaLoadError(Exception):
    """Raised when a schema document cannot be parsed or its references resolved."""


def parse_schema_document(text: str, source: str = "<inline>") -> Mapping[str, Any]:
    """Parse YAML or JSON schema text into its root mapping."""
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaLoadError(f"Failed to parse schema document {source}: {exc}") from exc
    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise SchemaLoadError(f"Schema document root must be a mapping: {source}")
    return parsed


def load_schema_files(paths: Sequence[Path | str]) -> list[tuple[str, Mapping[str, Any]]]:
    """Read and parse schema files, keeping the given order."""
    documents: list[tuple[str, Mapping[str, Any]]] = []
    for raw_path in paths:
        path = Path(raw_path)
        if not path.is_file():
            raise SchemaLoadError(f"Schema file not found: {path}")
        text = path.read_text(encoding="utf-8")
        documents.append((str(path), parse_schema_document(text, str(path))))
        logger.debug("Loaded schema document %s", path)
    return documents


def load_schema_tree(paths: Sequence[Path | str]) -> SchemaTree:
    """Load schema files and return one tree with every field reference resolved."""
    return build_schema_tree(load_schema_files(paths))


def build_schema_tree(documents: Iterable[tuple[str, Mapping[str, Any]]]) -> SchemaTree:
    """Merge parsed documents into a single tree, then resolve field references.

    Namespaces declared by several documents merge their children; a type name
    declared twice in the same namespace is an error.
    """
    tree = SchemaTree()
    for source, document in documents:
        namespaces = document.get("namespaces") or {}
        if not isinstance(namespaces, Mapping):
            raise SchemaLoadError(f"'namespaces' must be a mapping in {source}")
        for name, definition in namespaces.items():
            existing = tree.namespaces.get(name)
            namespace = _merge_namespace(existing, str(name), str(name), definition, source)
            tree.namespaces[namespace.name] = namespace
    resolve_references(tree)
    return tree


def resolve_references(tree: SchemaTree) -> None:
    """Point every non-primitive field at the type definition its declared type names."""
    for type_definition in tree.iter_types():
        for field_definition in type_definition.fields:
            if field_definition.type_name in PRIMITIVE_TYPES:
                field_definition.resolved = None
                continue
            resolved = _resolve_type_name(
                tree, type_definition.namespace, field_definition.type_name
            )
            if resolved is None:
                raise SchemaLoadError(
                    f"Unresolvable type '{field_definition.type_name}' for field "
                    f"{type_definition.full_name}.{field_definition.name}"
                )
            field_definition.resolved = resolved


def _resolve_type_name(tree: SchemaTree, scope: str, type_name: str) -> TypeKey | None:
    if type_name.startswith("."):
        return _key_if_defined(tree, type_name[1:])
    scope_parts = scope.split(".") if scope else []
    for depth in range(len(scope_parts), -1, -1):
        candidate = ".".join([*scope_parts[:depth], type_name])
        key = _key_if_defined(tree, candidate)
        if key is not None:
            return key
    return None


def _key_if_defined(tree: SchemaTree, full_name: str) -> TypeKey | None:
    namespace_name, _, name = full_name.rpartition(".")
    if not namespace_name or not name:
        return None
    key = TypeKey(namespace=namespace_name, name=name)
    return key if tree.find_type(key) is not None else None


def _merge_namespace(
    existing: Namespace | None, name: str, full_name: str, definition: Any, source: str
) -> Namespace:
    section = _require_mapping(definition or {}, f"namespace {full_name}", source)
    namespace = existing or Namespace(name=name, full_name=full_name)
    options = section.get("options") or {}
    namespace.options.update(_require_mapping(options, f"{full_name}.options", source))

    types = _require_mapping(section.get("types") or {}, f"{full_name}.types", source)
    for type_name, type_definition in types.items():
        if str(type_name) in namespace.children:
            raise SchemaLoadError(f"Duplicate definition {full_name}.{type_name} in {source}")
        namespace.add(_parse_type(str(type_name), full_name, type_definition, source))

    nested = _require_mapping(section.get("namespaces") or {}, f"{full_name}.namespaces", source)
    for child_name, child_definition in nested.items():
        child_full_name = f"{full_name}.{child_name}"
        current = namespace.lookup(str(child_name))
        if current is not None and not isinstance(current, Namespace):
            raise SchemaLoadError(f"Namespace {child_full_name} collides with a type in {source}")
        namespace.add(
            _merge_namespace(current, str(child_name), child_full_name, child_definition, source)
        )
    return namespace


def _parse_type(name: str, namespace: str, definition: Any, source: str) -> TypeDefinition:
    label = f"{namespace}.{name}"
    section = _require_mapping(definition or {}, label, source)
    options = dict(_require_mapping(section.get("options") or {}, f"{label}.options", source))
    if "fields" in section and "values" in section:
        raise SchemaLoadError(f"{label} must declare either fields or values, not both ({source})")

    if "values" in section:
        values = _require_mapping(section["values"], f"{label}.values", source)
        parsed_values: dict[str, int] = {}
        for value_name, number in values.items():
            if isinstance(number, bool) or not isinstance(number, int):
                raise SchemaLoadError(f"{label}.{value_name} must be an integer ({source})")
            parsed_values[str(value_name)] = number
        return TypeDefinition(
            name=name,
            namespace=namespace,
            kind=TypeKind.ENUM,
            values=parsed_values,
            options=options,
        )

    raw_fields = section.get("fields")
    if raw_fields is None:
        raw_fields = []
    if not isinstance(raw_fields, Sequence) or isinstance(raw_fields, str):
        raise SchemaLoadError(f"{label}.fields must be a list ({source})")
    fields = [_parse_field(label, raw_field, source) for raw_field in raw_fields]
    seen: set[str] = set()
    for field_definition in fields:
        if field_definition.name in seen:
            raise SchemaLoadError(f"Duplicate field {label}.{field_definition.name} ({source})")
        seen.add(field_definition.name)
    return TypeDefinition(name=name, namespace=namespace, fields=fields, options=options)


def _parse_field(owner: str, definition: Any, source: str) -> FieldDefinition:
    section = _require_mapping(definition, f"{owner} field", source)
    name = _require_non_empty_string(section.get("name"), f"{owner} field name", source)
    type_name = _require_non_empty_string(section.get("type"), f"{owner}.{name}.type", source)
    field_id = section.get("id")
    if field_id is not None and (isinstance(field_id, bool) or not isinstance(field_id, int)):
        raise SchemaLoadError(f"{owner}.{name}.id must be an integer ({source})")
    rule = section.get("rule")
    if rule is not None and rule not in FIELD_RULES:
        raise SchemaLoadError(
            f"{owner}.{name}.rule must be one of {sorted(FIELD_RULES)} ({source})"
        )
    raw_options = section.get("options") or {}
    options = dict(_require_mapping(raw_options, f"{owner}.{name}.options", source))
    return FieldDefinition(
        name=name, type_name=type_name, field_id=field_id, rule=rule, options=options
    )


def _require_mapping(value: Any, label: str, source: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SchemaLoadError(f"{label} must be a mapping ({source})")
    return value


def _require_non_empty_string(value: Any, label: str, source: str) -> str:
    if not isinstance(value, str):
        raise SchemaLoadError(f"{label} must be a string ({source})")
    stripped = value.strip()
    if not stripped:
        raise SchemaLoadError(f"{label} must not be empty ({source})")
    return stripped
