"""Appwrite Databases REST client for schema setup calls."""

from typing import Any

import httpx

from arbantv_setup.core.config import Settings
from arbantv_setup.infrastructure.schema_api.base import SchemaApiClient, SchemaApiError


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the HTTP client used for one setup run.

    The client carries the endpoint, project and API key headers; callers
    own it and must close it (``async with``).
    """
    return httpx.AsyncClient(
        base_url=settings.appwrite_endpoint,
        headers={
            "X-Appwrite-Project": settings.appwrite_project_id,
            "X-Appwrite-Key": settings.appwrite_api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        },
        timeout=settings.appwrite_timeout_seconds,
    )


class AppwriteSchemaClient(SchemaApiClient):
    """Schema client for one Appwrite database.

    Error responses are JSON documents of the form
    ``{"message": ..., "code": ..., "type": ...}`` and are raised as
    ``SchemaApiError`` with the type preserved.
    """

    def __init__(self, http: httpx.AsyncClient, database_id: str) -> None:
        self._http = http
        self.database_id = database_id

    def _collection_path(self, collection_id: str) -> str:
        return f"/databases/{self.database_id}/collections/{collection_id}"

    @staticmethod
    def _error_from_response(response: httpx.Response) -> SchemaApiError:
        message = f"HTTP {response.status_code}"
        error_type = None
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict):
            message = data.get("message") or message
            error_type = data.get("type")
        elif response.text:
            message = f"{message}: {response.text.strip()}"

        return SchemaApiError(message, code=response.status_code, error_type=error_type)

    async def _request(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        try:
            response = await self._http.request(method, path, json=payload)
        except httpx.HTTPError as e:
            raise SchemaApiError(
                f"Request to {path} failed: {e}", code=0, error_type="network_error"
            ) from e

        if response.status_code >= 400:
            raise self._error_from_response(response)

        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise SchemaApiError(
                f"Unexpected response from {path}: {response.text.strip()[:200]}",
                code=response.status_code,
                error_type="invalid_response",
            ) from e
        if not isinstance(data, dict):
            raise SchemaApiError(
                f"Unexpected response from {path}: expected a JSON object",
                code=response.status_code,
                error_type="invalid_response",
            )
        return data

    async def _create_attribute(
        self, collection_id: str, wire_type: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        path = f"{self._collection_path(collection_id)}/attributes/{wire_type}"
        return await self._request("POST", path, payload)

    async def get_collection(self, collection_id: str) -> dict[str, Any]:
        return await self._request("GET", self._collection_path(collection_id))

    async def create_string_attribute(
        self,
        collection_id: str,
        key: str,
        size: int,
        required: bool,
        default: str | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        return await self._create_attribute(
            collection_id,
            "string",
            {"key": key, "size": size, "required": required, "default": default, "array": array},
        )

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
        return await self._create_attribute(
            collection_id,
            "integer",
            {
                "key": key,
                "required": required,
                "min": min,
                "max": max,
                "default": default,
                "array": array,
            },
        )

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
        return await self._create_attribute(
            collection_id,
            "float",
            {
                "key": key,
                "required": required,
                "min": min,
                "max": max,
                "default": default,
                "array": array,
            },
        )

    async def create_boolean_attribute(
        self,
        collection_id: str,
        key: str,
        required: bool,
        default: bool | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        return await self._create_attribute(
            collection_id,
            "boolean",
            {"key": key, "required": required, "default": default, "array": array},
        )

    async def create_datetime_attribute(
        self,
        collection_id: str,
        key: str,
        required: bool,
        default: str | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        return await self._create_attribute(
            collection_id,
            "datetime",
            {"key": key, "required": required, "default": default, "array": array},
        )

    async def get_attribute(self, collection_id: str, key: str) -> dict[str, Any]:
        return await self._request("GET", f"{self._collection_path(collection_id)}/attributes/{key}")

    async def create_index(
        self,
        collection_id: str,
        key: str,
        index_type: str,
        attributes: list[str],
        orders: list[str] | None = None,
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"{self._collection_path(collection_id)}/indexes",
            {
                "key": key,
                "type": index_type,
                "attributes": attributes,
                "orders": orders or [],
            },
        )
