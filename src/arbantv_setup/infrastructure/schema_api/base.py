"""Base abstractions for remote schema-management clients."""

from abc import ABC, abstractmethod
from typing import Any

# Error types the remote reports for schema objects that were created before
ALREADY_EXISTS_TYPES = frozenset({"attribute_already_exists", "index_already_exists"})

NOT_FOUND_TYPES = frozenset({"collection_not_found", "database_not_found"})


class SchemaApiError(Exception):
    """Raised when a remote schema call fails.

    Attributes:
        message: Human readable message from the remote (or the transport).
        code: HTTP status code, 0 when no response was received.
        error_type: Machine readable error type, e.g. ``attribute_already_exists``.
    """

    def __init__(self, message: str, code: int = 0, error_type: str | None = None) -> None:
        self.message = message
        self.code = code
        self.error_type = error_type
        super().__init__(message)


def is_already_exists(error: SchemaApiError) -> bool:
    """Check whether a failed create call hit an existing attribute or index.

    Structured fields win; the message text is only consulted when the
    remote did not send an error type.
    """
    if error.error_type:
        return error.error_type in ALREADY_EXISTS_TYPES
    if error.code == 409:
        return True
    return "already exists" in error.message.lower()


def is_not_found(error: SchemaApiError) -> bool:
    """Check whether a failed call refers to a missing collection or database."""
    if error.error_type:
        return error.error_type in NOT_FOUND_TYPES
    if error.code == 404:
        return True
    return "not found" in error.message.lower()


class SchemaApiClient(ABC):
    """Abstract client for the remote schema-management API.

    A client is bound to one database; every call addresses a collection
    inside it. All failures are raised as ``SchemaApiError``.
    """

    @abstractmethod
    async def get_collection(self, collection_id: str) -> dict[str, Any]:
        """Fetch a collection, raising if it does not exist."""
        ...

    @abstractmethod
    async def create_string_attribute(
        self,
        collection_id: str,
        key: str,
        size: int,
        required: bool,
        default: str | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        """Create a text attribute."""
        ...

    @abstractmethod
    async def create_integer_attribute(
        self,
        collection_id: str,
        key: str,
        required: bool,
        min: int | None = None,
        max: int | None = None,
        default: int | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        """Create an integer attribute."""
        ...

    @abstractmethod
    async def create_float_attribute(
        self,
        collection_id: str,
        key: str,
        required: bool,
        min: float | None = None,
        max: float | None = None,
        default: float | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        """Create a float attribute."""
        ...

    @abstractmethod
    async def create_boolean_attribute(
        self,
        collection_id: str,
        key: str,
        required: bool,
        default: bool | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        """Create a boolean attribute."""
        ...

    @abstractmethod
    async def create_datetime_attribute(
        self,
        collection_id: str,
        key: str,
        required: bool,
        default: str | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        """Create a datetime attribute. Defaults are ISO 8601 strings."""
        ...

    @abstractmethod
    async def get_attribute(self, collection_id: str, key: str) -> dict[str, Any]:
        """Fetch an attribute; its ``status`` tells whether it is usable yet."""
        ...

    @abstractmethod
    async def create_index(
        self,
        collection_id: str,
        key: str,
        index_type: str,
        attributes: list[str],
        orders: list[str] | None = None,
    ) -> dict[str, Any]:
        """Create an index over existing attributes."""
        ...
