"""Schema descriptors for collections, fields and indexes.

Descriptors are declared once in source and applied at setup time. They
carry no runtime state and are never mutated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    """Primitive kinds a field can have."""

    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"

    @property
    def wire_name(self) -> str:
        """Attribute type name used by the remote API."""
        return _FIELD_WIRE_NAMES[self]

    @property
    def is_numeric(self) -> bool:
        return self in (FieldKind.INTEGER, FieldKind.FLOAT)


_FIELD_WIRE_NAMES = {
    FieldKind.TEXT: "string",
    FieldKind.INTEGER: "integer",
    FieldKind.FLOAT: "float",
    FieldKind.BOOLEAN: "boolean",
    FieldKind.TIMESTAMP: "datetime",
}


class IndexKind(str, Enum):
    """Index kinds. Values are the remote API's index type names."""

    KEY = "key"
    UNIQUE = "unique"


class SortOrder(str, Enum):
    """Sort order of one indexed field."""

    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class FieldDescriptor:
    """A typed field (attribute) of a collection.

    Attributes:
        key: Field key, unique within its collection.
        kind: Primitive kind.
        required: Whether documents must set the field.
        size: Maximum length, text fields only.
        default: Default value. Only sent to the remote for optional fields.
        array: Whether the field holds a list of values.
        min_value: Lower bound, numeric fields only.
        max_value: Upper bound, numeric fields only.
    """

    key: str
    kind: FieldKind
    required: bool = False
    size: int | None = None
    default: Any = None
    array: bool = False
    min_value: int | float | None = None
    max_value: int | float | None = None

    @property
    def type_label(self) -> str:
        """Short label used in progress output, e.g. ``string[]``."""
        return f"{self.kind.wire_name}{'[]' if self.array else ''}"

    @property
    def request_default(self) -> Any:
        """Default value as sent to the remote.

        The remote rejects defaults on required attributes, so the declared
        default of a required field stays local.
        """
        return None if self.required else self.default


@dataclass(frozen=True)
class IndexDescriptor:
    """An index over one or more fields of a collection."""

    key: str
    kind: IndexKind
    fields: tuple[str, ...]
    orders: tuple[SortOrder, ...] = ()


@dataclass(frozen=True)
class CollectionDescriptor:
    """A collection whose fields and indexes are provisioned by the setup.

    Attributes:
        collection_id: Remote identifier from configuration, None when unset.
        name: Display name used in progress output.
        summary: One-line description printed in the final summary.
        fields: Ordered field descriptors.
        indexes: Ordered index descriptors.
    """

    collection_id: str | None
    name: str
    summary: str = ""
    fields: tuple[FieldDescriptor, ...] = field(default_factory=tuple)
    indexes: tuple[IndexDescriptor, ...] = field(default_factory=tuple)
