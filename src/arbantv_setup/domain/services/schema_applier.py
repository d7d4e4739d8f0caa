"""Apply declared collection schemas to the remote service.

The applier walks the declared collections one at a time. For each it
checks that the collection exists, creates every declared field, waits for
the fields to be provisioned, then creates every declared index. Creating
something that already exists counts as a skip, so re-running the setup
heals a partially applied schema. No single failure stops the run.
"""

from dataclasses import dataclass, field
from enum import Enum

from arbantv_setup.core.logging import get_logger
from arbantv_setup.domain.entities.schema import (
    CollectionDescriptor,
    FieldDescriptor,
    FieldKind,
    IndexDescriptor,
)
from arbantv_setup.domain.services.pacing import Pacer
from arbantv_setup.infrastructure.schema_api.base import (
    SchemaApiClient,
    SchemaApiError,
    is_already_exists,
    is_not_found,
)

logger = get_logger(__name__)


class Outcome(str, Enum):
    """Result of one create-field or create-index call."""

    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


class CollectionStatus(str, Enum):
    """How far a collection got."""

    APPLIED = "applied"
    MISSING_ID = "missing_id"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass
class ItemResult:
    """Outcome of one field or index."""

    key: str
    outcome: Outcome
    message: str | None = None


@dataclass
class CollectionResult:
    """Outcome of one collection.

    Attributes:
        name: Collection display name.
        collection_id: Remote identifier, None when it was not configured.
        status: Collection-level status.
        fields: One result per attempted field, in declaration order.
        indexes: One result per attempted index, in declaration order.
        unready_fields: Fields that failed or were still processing when
            index creation started.
        error: Collection-level error message, if any.
    """

    name: str
    collection_id: str | None
    status: CollectionStatus = CollectionStatus.APPLIED
    fields: list[ItemResult] = field(default_factory=list)
    indexes: list[ItemResult] = field(default_factory=list)
    unready_fields: list[str] = field(default_factory=list)
    error: str | None = None


@dataclass
class ApplyReport:
    """Outcome of a whole setup run."""

    collections: list[CollectionResult] = field(default_factory=list)

    def count_fields(self, outcome: Outcome) -> int:
        return sum(1 for c in self.collections for r in c.fields if r.outcome is outcome)

    def count_indexes(self, outcome: Outcome) -> int:
        return sum(1 for c in self.collections for r in c.indexes if r.outcome is outcome)

    @property
    def has_errors(self) -> bool:
        """True if any collection, field or index did not make it."""
        return any(
            c.status is not CollectionStatus.APPLIED
            or any(r.outcome is Outcome.FAILED for r in c.fields + c.indexes)
            for c in self.collections
        )


class SchemaApplier:
    """Best-effort, sequential apply loop over collection descriptors."""

    def __init__(
        self,
        client: SchemaApiClient,
        pacer: Pacer | None = None,
        wait_for_fields: bool = True,
        field_ready_attempts: int = 10,
    ) -> None:
        """Initialize the applier.

        Args:
            client: Remote schema client bound to the target database.
            pacer: Pacer owning every delay. Defaults to ``Pacer()``.
            wait_for_fields: Poll field status before creating indexes.
            field_ready_attempts: Maximum number of status polls per collection.
        """
        self._client = client
        self._pacer = pacer or Pacer()
        self._wait_for_fields = wait_for_fields
        self._field_ready_attempts = field_ready_attempts

    async def apply(self, collections: list[CollectionDescriptor]) -> ApplyReport:
        """Apply every collection in order.

        Args:
            collections: Declared collections.

        Returns:
            ApplyReport: Per-collection, per-item outcomes.
        """
        report = ApplyReport()
        for collection in collections:
            report.collections.append(await self.apply_collection(collection))
        return report

    async def apply_collection(self, collection: CollectionDescriptor) -> CollectionResult:
        """Apply the fields and indexes of a single collection.

        Args:
            collection: Collection descriptor.

        Returns:
            CollectionResult: Outcome of the collection and its items.
        """
        name = collection.name
        collection_id = collection.collection_id
        result = CollectionResult(name=name, collection_id=collection_id)

        logger.info(f"Setting up collection: {name} (ID: {collection_id})", tag="COLLECTION")

        if not collection_id:
            result.status = CollectionStatus.MISSING_ID
            result.error = f"Collection ID not found for {name}"
            logger.error(
                f"Collection ID not found for {name}. Please check your .env file.",
                tag="ERROR",
                indent=1,
            )
            return result

        try:
            await self._client.get_collection(collection_id)
        except SchemaApiError as e:
            result.error = e.message
            if is_not_found(e):
                result.status = CollectionStatus.NOT_FOUND
                logger.error(
                    f"Collection {name} not found. Please verify collection ID: {collection_id}",
                    tag="ERROR",
                    indent=1,
                )
            else:
                result.status = CollectionStatus.ERROR
                logger.error(
                    f"Error setting up collection {name}: {e.message}", tag="ERROR", indent=1
                )
            return result

        logger.info(f"Collection '{name}' found", tag="OK", indent=1)

        logger.info(f"Creating attributes for {name}...", tag="PROCESS", indent=1)
        for field_descriptor in collection.fields:
            result.fields.append(await self._apply_field(collection_id, field_descriptor))

        # Indexes are rejected until their attributes finish provisioning
        logger.info("Waiting for attributes to be ready...", tag="WAIT", indent=1)
        await self._pacer.before_indexes()
        if self._wait_for_fields:
            provisioned = [r.key for r in result.fields if r.outcome is not Outcome.FAILED]
            result.unready_fields = await self._await_fields(collection_id, provisioned)

        if collection.indexes:
            logger.info(f"Creating indexes for {name}...", tag="INDEX", indent=1)
            unusable = {r.key for r in result.fields if r.outcome is Outcome.FAILED}
            unusable.update(result.unready_fields)
            for index in collection.indexes:
                result.indexes.append(await self._apply_index(collection_id, index, unusable))

        return result

    async def _create_field(self, collection_id: str, field: FieldDescriptor) -> None:
        default = field.request_default
        if field.kind is FieldKind.TEXT:
            await self._client.create_string_attribute(
                collection_id,
                field.key,
                size=field.size,
                required=field.required,
                default=default,
                array=field.array,
            )
        elif field.kind is FieldKind.INTEGER:
            await self._client.create_integer_attribute(
                collection_id,
                field.key,
                required=field.required,
                min=field.min_value,
                max=field.max_value,
                default=default,
                array=field.array,
            )
        elif field.kind is FieldKind.FLOAT:
            await self._client.create_float_attribute(
                collection_id,
                field.key,
                required=field.required,
                min=field.min_value,
                max=field.max_value,
                default=default,
                array=field.array,
            )
        elif field.kind is FieldKind.BOOLEAN:
            await self._client.create_boolean_attribute(
                collection_id,
                field.key,
                required=field.required,
                default=default,
                array=field.array,
            )
        elif field.kind is FieldKind.TIMESTAMP:
            await self._client.create_datetime_attribute(
                collection_id,
                field.key,
                required=field.required,
                default=default,
                array=field.array,
            )
        else:
            raise ValueError(f"Unsupported field kind: {field.kind!r}")

    async def _apply_field(self, collection_id: str, field: FieldDescriptor) -> ItemResult:
        try:
            await self._create_field(collection_id, field)
        except SchemaApiError as e:
            if is_already_exists(e):
                logger.info(
                    f"Attribute {field.key} already exists, skipping...", tag="SKIP", indent=2
                )
                return ItemResult(key=field.key, outcome=Outcome.SKIPPED)

            logger.error(
                f"Failed to create attribute {field.key}: {e.message}", tag="ERROR", indent=2
            )
            return ItemResult(key=field.key, outcome=Outcome.FAILED, message=e.message)

        logger.info(f"Created attribute: {field.key} ({field.type_label})", tag="OK", indent=2)
        await self._pacer.after_field()
        return ItemResult(key=field.key, outcome=Outcome.CREATED)

    async def _await_fields(self, collection_id: str, keys: list[str]) -> list[str]:
        """Poll attribute status until every key is available.

        Returns:
            Keys that failed on the remote or were still processing after
            the last poll.
        """
        pending = list(keys)
        failed: list[str] = []

        for attempt in range(self._field_ready_attempts):
            if not pending:
                break
            if attempt:
                await self._pacer.before_indexes()

            still_pending = []
            for key in pending:
                try:
                    attribute = await self._client.get_attribute(collection_id, key)
                except SchemaApiError as e:
                    logger.debug("Attribute status check failed", key=key, error=e.message)
                    still_pending.append(key)
                    continue

                status = attribute.get("status") if isinstance(attribute, dict) else None
                if status == "available":
                    continue
                if status in ("failed", "stuck"):
                    failed.append(key)
                    continue
                still_pending.append(key)
            pending = still_pending

        for key in failed:
            logger.warning(f"Attribute {key} failed to provision", tag="WARN", indent=2)
        if pending:
            logger.warning(
                f"Attributes still processing after {self._field_ready_attempts} checks: "
                f"{', '.join(pending)}",
                tag="WARN",
                indent=1,
            )

        return failed + pending

    async def _apply_index(
        self, collection_id: str, index: IndexDescriptor, unusable: set[str]
    ) -> ItemResult:
        blocked = [key for key in index.fields if key in unusable]
        if blocked:
            logger.warning(
                f"Index {index.key} references attributes that are not ready: "
                f"{', '.join(blocked)}",
                tag="WARN",
                indent=2,
            )

        try:
            await self._client.create_index(
                collection_id,
                index.key,
                index_type=index.kind.value,
                attributes=list(index.fields),
                orders=[order.value for order in index.orders] or None,
            )
        except SchemaApiError as e:
            if is_already_exists(e):
                logger.info(
                    f"Index {index.key} already exists, skipping...", tag="SKIP", indent=2
                )
                return ItemResult(key=index.key, outcome=Outcome.SKIPPED)

            logger.error(
                f"Failed to create index {index.key}: {e.message}", tag="ERROR", indent=2
            )
            return ItemResult(key=index.key, outcome=Outcome.FAILED, message=e.message)

        logger.info(f"Created index: {index.key}", tag="OK", indent=2)
        await self._pacer.after_index()
        return ItemResult(key=index.key, outcome=Outcome.CREATED)
