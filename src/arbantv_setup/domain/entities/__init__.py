"""Domain entities for the ArbanTv schema setup."""

from arbantv_setup.domain.entities.schema import (
    CollectionDescriptor,
    FieldDescriptor,
    FieldKind,
    IndexDescriptor,
    IndexKind,
    SortOrder,
)

__all__ = [
    "CollectionDescriptor",
    "FieldDescriptor",
    "FieldKind",
    "IndexDescriptor",
    "IndexKind",
    "SortOrder",
]
