"""
Field Mapping - Translation between model fields and record store fields.

Each collection gets one explicit table. Tables are checked when this module
is imported: every model field must be mapped exactly once and store names
must be unique, so a renamed field fails at start-up instead of at request time.
"""
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from ..models import Trip, Activity, PackingItem


@dataclass(frozen=True)
class SchemaMapping:
    """Bidirectional mapping between a model and a store collection."""
    collection: str
    model: type[BaseModel]
    fields: dict[str, str]
    _reverse: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        model_fields = set(self.model.model_fields)
        unmapped = model_fields - set(self.fields)
        unknown = set(self.fields) - model_fields
        if unmapped or unknown:
            raise TypeError(
                f"Mapping for '{self.collection}' does not match {self.model.__name__}: "
                f"unmapped={sorted(unmapped)}, unknown={sorted(unknown)}"
            )
        store_names = list(self.fields.values())
        if len(set(store_names)) != len(store_names):
            raise TypeError(f"Mapping for '{self.collection}' has duplicate store field names")
        object.__setattr__(self, "_reverse", {v: k for k, v in self.fields.items()})

    def store_name(self, model_field: str) -> str:
        """Store field name for a model field."""
        return self.fields[model_field]

    def fetch_fields(self) -> list[dict]:
        """Field projection sent with fetch calls."""
        return [{"field": {"Name": name}} for name in self.fields.values()]

    def to_store(self, values: dict[str, Any]) -> dict[str, Any]:
        """Rename model fields to store fields. Keys not in the table are dropped."""
        return {self.fields[k]: v for k, v in values.items() if k in self.fields}

    def from_store(self, record: dict[str, Any]) -> dict[str, Any]:
        """Rename store fields to model fields. Store-only system fields are dropped."""
        return {self._reverse[k]: v for k, v in record.items() if k in self._reverse}


TRIP_MAPPING = SchemaMapping(
    collection="trip",
    model=Trip,
    fields={
        "id": "Id",
        "name": "Name",
        "destination": "destination",
        "start_date": "start_date",
        "end_date": "end_date",
        "cover_image": "cover_image",
        "created_at": "created_at",
    },
)

ACTIVITY_MAPPING = SchemaMapping(
    collection="Activity1",
    model=Activity,
    fields={
        "id": "Id",
        "trip_id": "trip_id",
        "type": "type",
        "title": "Name",
        "date": "date",
        "time": "time",
        "duration": "duration",
        "location": "location",
        "notes": "notes",
    },
)

PACKING_MAPPING = SchemaMapping(
    collection="packing_item",
    model=PackingItem,
    fields={
        "id": "Id",
        "trip_id": "trip_id",
        "category": "category",
        "name": "Name",
        "quantity": "quantity",
        "packed": "packed",
    },
)
