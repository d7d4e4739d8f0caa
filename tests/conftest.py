"""Pytest configuration for all tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from arbantv_setup.core.config import Settings, get_settings
from arbantv_setup.domain.services.pacing import Pacer, PacingPolicy
from arbantv_setup.infrastructure.schema_api.base import SchemaApiClient, SchemaApiError


class FakeSchemaClient(SchemaApiClient):
    """In-memory schema client that behaves like the remote API.

    Created attributes and indexes are remembered, so creating them again
    raises the same conflict errors the remote sends on a rerun.
    """

    def __init__(
        self,
        collections: set[str] | None = None,
        failures: dict[str, SchemaApiError] | None = None,
        attribute_status: dict[str, list[str]] | None = None,
    ) -> None:
        self.collections = collections if collections is not None else set()
        self.failures = failures or {}
        # key -> statuses returned by successive get_attribute calls
        self.attribute_status = attribute_status or {}
        self.attributes: dict[tuple[str, str], dict[str, Any]] = {}
        self.indexes: dict[tuple[str, str], dict[str, Any]] = {}
        self.calls: list[tuple[str, str, str | None]] = []

    async def get_collection(self, collection_id: str) -> dict[str, Any]:
        self.calls.append(("get_collection", collection_id, None))
        if collection_id in self.failures:
            raise self.failures[collection_id]
        if collection_id not in self.collections:
            raise SchemaApiError(
                "Collection with the requested ID could not be found.",
                code=404,
                error_type="collection_not_found",
            )
        return {"$id": collection_id}

    def _create_attribute(self, wire_type: str, collection_id: str, key: str, **payload: Any):
        self.calls.append((f"create_{wire_type}_attribute", collection_id, key))
        if key in self.failures:
            raise self.failures[key]
        if (collection_id, key) in self.attributes:
            raise SchemaApiError(
                "Attribute with the requested key already exists.",
                code=409,
                error_type="attribute_already_exists",
            )
        attribute = {"key": key, "type": wire_type, "status": "available", **payload}
        self.attributes[(collection_id, key)] = attribute
        return attribute

    async def create_string_attribute(self, collection_id, key, size, required, default=None, array=False):
        return self._create_attribute(
            "string", collection_id, key, size=size, required=required, default=default, array=array
        )

    async def create_integer_attribute(
        self, collection_id, key, required, min=None, max=None, default=None, array=False
    ):
        return self._create_attribute(
            "integer", collection_id, key, required=required, min=min, max=max, default=default, array=array
        )

    async def create_float_attribute(
        self, collection_id, key, required, min=None, max=None, default=None, array=False
    ):
        return self._create_attribute(
            "float", collection_id, key, required=required, min=min, max=max, default=default, array=array
        )

    async def create_boolean_attribute(self, collection_id, key, required, default=None, array=False):
        return self._create_attribute(
            "boolean", collection_id, key, required=required, default=default, array=array
        )

    async def create_datetime_attribute(self, collection_id, key, required, default=None, array=False):
        return self._create_attribute(
            "datetime", collection_id, key, required=required, default=default, array=array
        )

    async def get_attribute(self, collection_id: str, key: str) -> dict[str, Any]:
        self.calls.append(("get_attribute", collection_id, key))
        statuses = self.attribute_status.get(key)
        if statuses:
            status = statuses.pop(0) if len(statuses) > 1 else statuses[0]
            return {"key": key, "status": status}
        return {"key": key, "status": "available"}

    async def create_index(self, collection_id, key, index_type, attributes, orders=None):
        self.calls.append(("create_index", collection_id, key))
        if key in self.failures:
            raise self.failures[key]
        if (collection_id, key) in self.indexes:
            raise SchemaApiError(
                "Index with the requested key already exists.",
                code=409,
                error_type="index_already_exists",
            )
        index = {"key": key, "type": index_type, "attributes": attributes, "orders": orders or []}
        self.indexes[(collection_id, key)] = index
        return index

    def calls_named(self, prefix: str) -> list[tuple[str, str, str | None]]:
        return [call for call in self.calls if call[0].startswith(prefix)]


@pytest.fixture
def make_client() -> type[FakeSchemaClient]:
    """Factory for fake clients configured per test."""
    return FakeSchemaClient


@pytest.fixture
def sleep() -> AsyncMock:
    """Recording sleep so pacing never actually waits."""
    return AsyncMock()


@pytest.fixture
def pacer(sleep: AsyncMock) -> Pacer:
    return Pacer(PacingPolicy(), sleep=sleep)


@pytest.fixture
def settings() -> Settings:
    """Settings with every collection configured and no .env file."""
    return Settings(
        _env_file=None,
        appwrite_endpoint="https://appwrite.test/v1",
        appwrite_project_id="proj_123",
        appwrite_api_key="key_abc",
        appwrite_database_id="db_main",
        creators_collection_id="creators",
        videos_collection_id="videos",
        comments_collection_id="comments",
        tags_collection_id="tags",
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
