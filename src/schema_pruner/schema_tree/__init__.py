"""Schema tree exports."""

from .tree_export import EXPORT_FORMATS, dump_schema_tree, export_schema_tree, write_schema_tree
from .tree_loader import (
    PRIMITIVE_TYPES,
    SchemaLoadError,
    build_schema_tree,
    load_schema_tree,
    parse_schema_document,
)
from .tree_models import (
    FieldDefinition,
    Namespace,
    SchemaTree,
    TypeDefinition,
    TypeKey,
    TypeKind,
)

__all__ = [
    "EXPORT_FORMATS",
    "FieldDefinition",
    "Namespace",
    "PRIMITIVE_TYPES",
    "SchemaLoadError",
    "SchemaTree",
    "TypeDefinition",
    "TypeKey",
    "TypeKind",
    "build_schema_tree",
    "dump_schema_tree",
    "export_schema_tree",
    "load_schema_tree",
    "parse_schema_document",
    "write_schema_tree",
]
