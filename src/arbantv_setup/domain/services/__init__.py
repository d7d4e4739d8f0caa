"""Domain services for the ArbanTv schema setup.

Services contain the validation and apply logic; they talk to the remote
service only through an injected ``SchemaApiClient``.
"""

from arbantv_setup.domain.services.pacing import Pacer, PacingPolicy
from arbantv_setup.domain.services.schema_applier import (
    ApplyReport,
    CollectionResult,
    CollectionStatus,
    ItemResult,
    Outcome,
    SchemaApplier,
)
from arbantv_setup.domain.services.schema_validator import (
    InvalidSchemaError,
    SchemaValidationError,
    SchemaValidator,
)

__all__ = [
    "ApplyReport",
    "CollectionResult",
    "CollectionStatus",
    "InvalidSchemaError",
    "ItemResult",
    "Outcome",
    "Pacer",
    "PacingPolicy",
    "SchemaApplier",
    "SchemaValidationError",
    "SchemaValidator",
]
