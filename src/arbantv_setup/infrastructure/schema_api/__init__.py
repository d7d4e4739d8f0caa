"""Remote schema-management clients."""

from arbantv_setup.infrastructure.schema_api.appwrite_client import (
    AppwriteSchemaClient,
    build_http_client,
)
from arbantv_setup.infrastructure.schema_api.base import (
    SchemaApiClient,
    SchemaApiError,
    is_already_exists,
    is_not_found,
)

__all__ = [
    "AppwriteSchemaClient",
    "SchemaApiClient",
    "SchemaApiError",
    "build_http_client",
    "is_already_exists",
    "is_not_found",
]
