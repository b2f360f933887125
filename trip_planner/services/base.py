"""
Entity Service base - Shared request/response handling for store-backed entities.

Every call is a fresh round trip to the record store: no caching, no retries.
Store failures are logged and re-raised as ``StoreError`` carrying the
store's message.
"""
from typing import Any, Awaitable, Optional, Union
import logging

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..config import Settings, settings as default_settings
from ..errors import NotFoundError, PartialBatchError, StoreError, ValidationError
from .field_mapping import SchemaMapping
from .record_store import RecordStore
from .validation import sanitize_fields

logger = logging.getLogger(__name__)

FieldSet = Union[dict, BaseModel]


def describe_validation_error(error: PydanticValidationError) -> str:
    """Flatten pydantic errors into one readable message."""
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
        message = err.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


class EntityService:
    """CRUD adapter for one record store collection."""

    mapping: SchemaMapping
    update_model: type[BaseModel]
    label: str = "Record"

    def __init__(self, store: RecordStore, config: Optional[Settings] = None):
        self.store = store
        self.config = config or default_settings

    @property
    def collection(self) -> str:
        return self.mapping.collection

    # Input handling

    def _validate(self, model: type[BaseModel], data: FieldSet) -> BaseModel:
        """Coerce a plain field set into an input model."""
        if isinstance(data, model):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            message = describe_validation_error(e)
            logger.warning(f"Invalid {self.label.lower()} data: {message}")
            raise ValidationError(message) from e

    def _prepare(self, values: dict[str, Any]) -> dict[str, Any]:
        """Apply boundary validation and rename fields for the store."""
        values = sanitize_fields(
            values,
            limit=self.config.max_field_length,
            fallback_url=self.config.cover_image_fallback_url
        )
        return self.mapping.to_store(values)

    def _to_model(self, record: dict) -> BaseModel:
        """Build the entity model from a store record."""
        # Empty store fields fall back to model defaults
        values = {k: v for k, v in self.mapping.from_store(record).items() if v is not None}
        try:
            return self.mapping.model.model_validate(values)
        except PydanticValidationError as e:
            message = describe_validation_error(e)
            logger.error(f"Malformed {self.label.lower()} record {record.get('Id')}: {message}")
            raise StoreError(f"Malformed {self.label.lower()} record: {message}") from e

    # Response handling

    async def _call(self, action: str, request: Awaitable[dict]) -> dict:
        """Await a store call and check its top-level success flag."""
        try:
            response = await request
        except StoreError as e:
            logger.error(f"Error trying to {action} {self.label.lower()}: {e.message}")
            raise StoreError(e.message) from e

        if not response or not response.get("success"):
            message = (response or {}).get("message") or f"Failed to {action} {self.label.lower()}"
            logger.error(f"Store rejected {action} {self.label.lower()}: {message}")
            raise StoreError(message)
        return response

    def _results(self, action: str, response: dict) -> list[dict]:
        """Per-record results of a write. Any failed record fails the whole call."""
        results = response.get("results") or []
        failures = [r.get("message") or "Unknown error" for r in results if not r.get("success")]
        if failures:
            logger.error(
                f"Failed to {action} {len(failures)} of {len(results)} "
                f"{self.label.lower()} records: {failures}"
            )
            if len(failures) < len(results):
                raise PartialBatchError(
                    f"Failed to {action} {len(failures)} of {len(results)} records: {failures[0]}",
                    failures=failures
                )
            raise StoreError(failures[0])
        return [r.get("data") or {} for r in results]

    async def _write_one(self, action: str, request: Awaitable[dict]) -> BaseModel:
        response = await self._call(action, request)
        records = self._results(action, response)
        if not records:
            raise StoreError(f"Store returned no result when trying to {action} {self.label.lower()}")
        return self._to_model(records[0])

    # Operations

    async def get_all(self) -> list:
        """Fetch every record in the collection."""
        response = await self._call(
            "fetch",
            self.store.fetch_records(self.collection, {"fields": self.mapping.fetch_fields()})
        )
        return [self._to_model(record) for record in response.get("data") or []]

    async def get_by_id(self, record_id: int):
        """Fetch one record; raises NotFoundError when absent."""
        response = await self._call(
            "fetch",
            self.store.get_record_by_id(
                self.collection,
                record_id,
                {"fields": self.mapping.fetch_fields()}
            )
        )
        record = response.get("data")
        if not record:
            raise NotFoundError(f"{self.label} not found")
        return self._to_model(record)

    async def _create_values(self, values: dict[str, Any]):
        return await self._write_one(
            "create",
            self.store.create_record(self.collection, {"records": [self._prepare(values)]})
        )

    async def _update_values(self, record_id: int, values: dict[str, Any]):
        record = self._prepare(values)
        record[self.mapping.store_name("id")] = record_id
        return await self._write_one(
            "update",
            self.store.update_record(self.collection, {"records": [record]})
        )

    async def update(self, record_id: int, data: FieldSet):
        """Write only the fields present in ``data``."""
        await self.get_by_id(record_id)
        payload = self._validate(self.update_model, data)
        return await self._update_values(record_id, payload.model_dump(mode="json", exclude_unset=True))

    async def delete(self, record_id: int) -> bool:
        """Delete a record. Returns True on success."""
        await self.get_by_id(record_id)
        response = await self._call(
            "delete",
            self.store.delete_record(self.collection, {"RecordIds": [record_id]})
        )
        self._results("delete", response)
        return True


class TripOwnedService(EntityService):
    """Entity service for records that belong to a trip."""

    async def get_by_trip_id(self, trip_id: int) -> list:
        """Fetch every record belonging to a trip."""
        response = await self._call(
            "fetch",
            self.store.fetch_records(
                self.collection,
                {
                    "fields": self.mapping.fetch_fields(),
                    "where": [{
                        "FieldName": self.mapping.store_name("trip_id"),
                        "Operator": "EqualTo",
                        "Values": [trip_id],
                    }],
                }
            )
        )
        return [self._to_model(record) for record in response.get("data") or []]

    def _require_trip_id(self, payload: BaseModel, trip_id: Optional[int]) -> int:
        trip_id = trip_id if trip_id is not None else getattr(payload, "trip_id", None)
        if trip_id is None:
            raise ValidationError("Trip is required", field="trip_id")
        return trip_id
