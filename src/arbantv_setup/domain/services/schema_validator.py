"""Schema validation service for declared collection descriptors.

Validates keys, per-kind field constraints and index references before
any remote call is made. Validation is static: it never consults the
remote service.
"""

import re
from dataclasses import dataclass
from datetime import datetime

from arbantv_setup.domain.entities.schema import (
    CollectionDescriptor,
    FieldDescriptor,
    FieldKind,
    IndexDescriptor,
    SortOrder,
)

# Pattern for valid field and index keys
KEY_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9._-]*$")


@dataclass
class SchemaValidationError:
    """A single schema validation error."""

    path: str
    message: str
    code: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message} ({self.code})"


class InvalidSchemaError(Exception):
    """Raised when a declared schema fails validation."""

    def __init__(self, errors: list[SchemaValidationError]) -> None:
        self.errors = errors
        self.message = "; ".join(str(e) for e in errors)
        super().__init__(self.message)


class SchemaValidator:
    """Validator for collection descriptors.

    Validates collection names, field definitions and index definitions.
    """

    MAX_KEY_LENGTH = 36

    @classmethod
    def validate_key(cls, key: str, path: str, kind: str) -> list[SchemaValidationError]:
        """Validate a field or index key.

        Args:
            key: The key to validate.
            path: Location of the key (for error messages).
            kind: ``field`` or ``index``.

        Returns:
            List of validation errors (empty if valid).
        """
        if not key:
            return [
                SchemaValidationError(
                    path=path,
                    message=f"{kind.capitalize()} key is required",
                    code=f"{kind}_key_required",
                )
            ]

        if len(key) > cls.MAX_KEY_LENGTH or not KEY_PATTERN.match(key):
            return [
                SchemaValidationError(
                    path=path,
                    message=(
                        f"{kind.capitalize()} key '{key}' must be at most {cls.MAX_KEY_LENGTH} "
                        "characters, start with a letter or digit and contain only "
                        "letters, digits, '.', '_' and '-'"
                    ),
                    code=f"{kind}_key_invalid_format",
                )
            ]

        return []

    @staticmethod
    def _default_matches(kind: FieldKind, value: object) -> bool:
        if kind is FieldKind.TEXT:
            return isinstance(value, str)
        if kind is FieldKind.BOOLEAN:
            return isinstance(value, bool)
        if kind is FieldKind.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        if kind is FieldKind.FLOAT:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        # Timestamps are sent as ISO 8601 strings
        if not isinstance(value, str):
            return False
        try:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return False
        return True

    @classmethod
    def validate_field(cls, field: FieldDescriptor, path: str) -> list[SchemaValidationError]:
        """Validate a single field descriptor.

        Args:
            field: The field descriptor.
            path: Location of the field (for error messages).

        Returns:
            List of validation errors (empty if valid).
        """
        errors = cls.validate_key(field.key, f"{path}.key", "field")

        if field.kind is FieldKind.TEXT:
            if field.size is None or field.size <= 0:
                errors.append(
                    SchemaValidationError(
                        path=f"{path}.size",
                        message="Text fields require a positive size",
                        code="field_size_required",
                    )
                )
        elif field.size is not None:
            errors.append(
                SchemaValidationError(
                    path=f"{path}.size",
                    message=f"Size is only allowed on text fields, not {field.kind.value}",
                    code="field_size_not_allowed",
                )
            )

        has_bounds = field.min_value is not None or field.max_value is not None
        if has_bounds and not field.kind.is_numeric:
            errors.append(
                SchemaValidationError(
                    path=f"{path}.min_value",
                    message="Bounds are only allowed on integer and float fields",
                    code="field_bounds_invalid",
                )
            )
        elif (
            field.min_value is not None
            and field.max_value is not None
            and field.min_value > field.max_value
        ):
            errors.append(
                SchemaValidationError(
                    path=f"{path}.min_value",
                    message=f"min_value {field.min_value} exceeds max_value {field.max_value}",
                    code="field_bounds_invalid",
                )
            )

        if field.default is not None:
            if field.array:
                errors.append(
                    SchemaValidationError(
                        path=f"{path}.default",
                        message="Array fields cannot have a default value",
                        code="field_default_invalid",
                    )
                )
            elif not cls._default_matches(field.kind, field.default):
                errors.append(
                    SchemaValidationError(
                        path=f"{path}.default",
                        message=f"Default {field.default!r} does not match kind '{field.kind.value}'",
                        code="field_default_invalid",
                    )
                )

        return errors

    @classmethod
    def validate_index(
        cls, index: IndexDescriptor, path: str, field_keys: set[str]
    ) -> list[SchemaValidationError]:
        """Validate a single index descriptor against its collection's fields.

        Args:
            index: The index descriptor.
            path: Location of the index (for error messages).
            field_keys: Keys of the fields declared in the same collection.

        Returns:
            List of validation errors (empty if valid).
        """
        errors = cls.validate_key(index.key, f"{path}.key", "index")

        if not index.fields:
            errors.append(
                SchemaValidationError(
                    path=f"{path}.fields",
                    message="Index must reference at least one field",
                    code="index_fields_required",
                )
            )

        for key in index.fields:
            if key not in field_keys:
                errors.append(
                    SchemaValidationError(
                        path=f"{path}.fields",
                        message=f"Index references undeclared field '{key}'",
                        code="index_field_unknown",
                    )
                )

        if index.orders and len(index.orders) != len(index.fields):
            errors.append(
                SchemaValidationError(
                    path=f"{path}.orders",
                    message="Index orders must have one entry per referenced field",
                    code="index_orders_invalid",
                )
            )
        elif any(not isinstance(order, SortOrder) for order in index.orders):
            errors.append(
                SchemaValidationError(
                    path=f"{path}.orders",
                    message="Index orders must be ASC or DESC",
                    code="index_orders_invalid",
                )
            )

        return errors

    @classmethod
    def validate_collection(
        cls, collection: CollectionDescriptor, path: str
    ) -> list[SchemaValidationError]:
        """Validate a collection descriptor with its fields and indexes.

        Args:
            collection: The collection descriptor.
            path: Location of the collection (for error messages).

        Returns:
            List of validation errors (empty if valid).
        """
        errors = []

        if not collection.name or not collection.name.strip():
            errors.append(
                SchemaValidationError(
                    path=f"{path}.name",
                    message="Collection name is required",
                    code="name_required",
                )
            )

        seen_fields: set[str] = set()
        for i, field in enumerate(collection.fields):
            field_path = f"{path}.fields[{i}]"
            errors.extend(cls.validate_field(field, field_path))
            if field.key and field.key in seen_fields:
                errors.append(
                    SchemaValidationError(
                        path=f"{field_path}.key",
                        message=f"Duplicate field key '{field.key}'",
                        code="field_key_duplicate",
                    )
                )
            seen_fields.add(field.key)

        seen_indexes: set[str] = set()
        for i, index in enumerate(collection.indexes):
            index_path = f"{path}.indexes[{i}]"
            errors.extend(cls.validate_index(index, index_path, seen_fields))
            if index.key and index.key in seen_indexes:
                errors.append(
                    SchemaValidationError(
                        path=f"{index_path}.key",
                        message=f"Duplicate index key '{index.key}'",
                        code="index_key_duplicate",
                    )
                )
            seen_indexes.add(index.key)

        return errors

    @classmethod
    def validate(cls, collections: list[CollectionDescriptor]) -> list[SchemaValidationError]:
        """Validate a complete declared schema.

        Args:
            collections: The collection descriptors.

        Returns:
            List of validation errors (empty if valid).
        """
        errors = []
        for collection in collections:
            errors.extend(cls.validate_collection(collection, collection.name or "<unnamed>"))
        return errors

    @classmethod
    def ensure_valid(cls, collections: list[CollectionDescriptor]) -> None:
        """Validate and raise if anything is wrong.

        Raises:
            InvalidSchemaError: If at least one validation error is found.
        """
        errors = cls.validate(collections)
        if errors:
            raise InvalidSchemaError(errors)
