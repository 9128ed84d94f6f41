"""Schema tree entities."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TypeKind(str, Enum):
    """Kind of a named type definition."""

    MESSAGE = "message"
    ENUM = "enum"


@dataclass(frozen=True, order=True)
class TypeKey:
    """Stable address of a type definition: owning namespace full name plus type name."""

    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


@dataclass
class FieldDefinition:
    """Named member of a message type."""

    name: str
    type_name: str
    field_id: int | None = None
    rule: str | None = None
    resolved: TypeKey | None = None
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class TypeDefinition:
    """Message or enum definition owned by one namespace."""

    name: str
    namespace: str
    kind: TypeKind = TypeKind.MESSAGE
    fields: list[FieldDefinition] = field(default_factory=list)
    values: dict[str, int] = field(default_factory=dict)
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> TypeKey:
        return TypeKey(namespace=self.namespace, name=self.name)

    @property
    def full_name(self) -> str:
        return str(self.key)


@dataclass
class Namespace:
    """Named container of sub-namespaces and type definitions, in declaration order."""

    name: str
    full_name: str
    children: dict[str, Namespace | TypeDefinition] = field(default_factory=dict)
    options: dict[str, Any] = field(default_factory=dict)

    def lookup(self, name: str) -> Namespace | TypeDefinition | None:
        return self.children.get(name)

    def namespaces(self) -> Iterator[Namespace]:
        return (child for child in self.children.values() if isinstance(child, Namespace))

    def types(self) -> Iterator[TypeDefinition]:
        return (child for child in self.children.values() if isinstance(child, TypeDefinition))

    def add(self, child: Namespace | TypeDefinition) -> None:
        self.children[child.name] = child


@dataclass
class SchemaTree:
    """Root of a parsed schema: the ordered set of top-level namespaces."""

    namespaces: dict[str, Namespace] = field(default_factory=dict)

    def lookup(self, name: str) -> Namespace | None:
        return self.namespaces.get(name)

    def find_namespace(self, full_name: str) -> Namespace | None:
        """Walk a dotted namespace name down from the root."""
        parts = full_name.split(".")
        current = self.namespaces.get(parts[0])
        for part in parts[1:]:
            if current is None:
                return None
            child = current.lookup(part)
            current = child if isinstance(child, Namespace) else None
        return current

    def find_type(self, key: TypeKey) -> TypeDefinition | None:
        namespace = self.find_namespace(key.namespace)
        if namespace is None:
            return None
        candidate = namespace.lookup(key.name)
        return candidate if isinstance(candidate, TypeDefinition) else None

    def iter_types(self) -> Iterator[TypeDefinition]:
        """Yield every type definition namespace by namespace, depth first."""
        stack = list(reversed(self.namespaces.values()))
        while stack:
            namespace = stack.pop()
            nested: list[Namespace] = []
            for child in namespace.children.values():
                if isinstance(child, TypeDefinition):
                    yield child
                else:
                    nested.append(child)
            stack.extend(reversed(nested))
