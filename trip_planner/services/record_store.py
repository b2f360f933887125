"""
Record Store - CRUD over named collections.

The hosted backend exposes fetch/get/create/update/delete calls whose
responses carry a ``success`` flag, an optional ``message`` and either
``data`` or per-record ``results``. ``InMemoryRecordStore`` mirrors that
contract for local development and tests; ``HttpRecordStore`` talks to the
hosted service.
"""
from abc import ABC, abstractmethod
from typing import Optional
import copy
import itertools
import logging

import httpx

from ..config import Settings, get_record_store_config
from ..errors import StoreError

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """Contract shared by every record store backend."""

    @abstractmethod
    async def fetch_records(self, collection: str, params: Optional[dict] = None) -> dict:
        """Fetch records, optionally projected to ``fields`` and filtered by ``where``."""

    @abstractmethod
    async def get_record_by_id(
        self,
        collection: str,
        record_id: int,
        params: Optional[dict] = None
    ) -> dict:
        """Fetch one record. ``data`` is None when the id is absent."""

    @abstractmethod
    async def create_record(self, collection: str, payload: dict) -> dict:
        """Create ``payload["records"]``; one result per record."""

    @abstractmethod
    async def update_record(self, collection: str, payload: dict) -> dict:
        """Update ``payload["records"]`` (each carries ``Id``); one result per record."""

    @abstractmethod
    async def delete_record(self, collection: str, payload: dict) -> dict:
        """Delete ``payload["RecordIds"]``; one result per id."""

    async def close(self):
        """Release any held resources."""


def _field_names(params: Optional[dict]) -> Optional[list[str]]:
    """Extract requested field names from a ``fields`` projection."""
    if not params or not params.get("fields"):
        return None
    names = []
    for entry in params["fields"]:
        if isinstance(entry, dict):
            names.append(entry.get("field", {}).get("Name"))
        else:
            names.append(entry)
    return [n for n in names if n]


def _matches(record: dict, where: list[dict]) -> bool:
    for condition in where:
        field = condition.get("FieldName")
        operator = condition.get("Operator", "EqualTo")
        values = condition.get("Values", [])
        if operator != "EqualTo":
            raise StoreError(f"Unsupported operator: {operator}")
        if record.get(field) not in values:
            return False
    return True


class InMemoryRecordStore(RecordStore):
    """Record store held in process memory. Each instance owns its data."""

    def __init__(self, seed: Optional[dict[str, list[dict]]] = None):
        self._collections: dict[str, dict[int, dict]] = {}
        # New ids start above every id the seed already uses
        seeded_ids = [r["Id"] for records in (seed or {}).values() for r in records if r.get("Id")]
        self._ids = itertools.count(max(seeded_ids, default=0) + 1)
        for collection, records in (seed or {}).items():
            for record in records:
                self._insert(collection, record)

    def _insert(self, collection: str, record: dict) -> dict:
        stored = copy.deepcopy(record)
        stored["Id"] = stored.get("Id") or next(self._ids)
        self._collections.setdefault(collection, {})[stored["Id"]] = stored
        return stored

    def _project(self, record: dict, fields: Optional[list[str]]) -> dict:
        if fields is None:
            return copy.deepcopy(record)
        projected = {name: copy.deepcopy(record.get(name)) for name in fields}
        projected["Id"] = record["Id"]
        return projected

    def reset(self):
        """Drop all records."""
        self._collections.clear()
        self._ids = itertools.count(1)

    def count(self, collection: str) -> int:
        """Number of records held in a collection."""
        return len(self._collections.get(collection, {}))

    async def fetch_records(self, collection: str, params: Optional[dict] = None) -> dict:
        fields = _field_names(params)
        where = (params or {}).get("where") or []
        records = self._collections.get(collection, {}).values()
        return {
            "success": True,
            "data": [self._project(r, fields) for r in records if _matches(r, where)],
        }

    async def get_record_by_id(
        self,
        collection: str,
        record_id: int,
        params: Optional[dict] = None
    ) -> dict:
        record = self._collections.get(collection, {}).get(record_id)
        if record is None:
            return {"success": True, "data": None}
        return {"success": True, "data": self._project(record, _field_names(params))}

    async def create_record(self, collection: str, payload: dict) -> dict:
        results = []
        for record in payload.get("records", []):
            record = {k: v for k, v in record.items() if k != "Id"}
            results.append({"success": True, "data": copy.deepcopy(self._insert(collection, record))})
        return {"success": True, "results": results}

    async def update_record(self, collection: str, payload: dict) -> dict:
        table = self._collections.setdefault(collection, {})
        results = []
        for record in payload.get("records", []):
            existing = table.get(record.get("Id"))
            if existing is None:
                results.append({"success": False, "message": f"Record not found: {record.get('Id')}"})
                continue
            existing.update(copy.deepcopy(record))
            results.append({"success": True, "data": copy.deepcopy(existing)})
        return {"success": True, "results": results}

    async def delete_record(self, collection: str, payload: dict) -> dict:
        table = self._collections.setdefault(collection, {})
        results = []
        for record_id in payload.get("RecordIds", []):
            if table.pop(record_id, None) is None:
                results.append({"success": False, "message": f"Record not found: {record_id}"})
            else:
                results.append({"success": True})
        return {"success": True, "results": results}


class HttpRecordStore(RecordStore):
    """Client for the hosted record store."""

    def __init__(
        self,
        base_url: str,
        headers: Optional[dict] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def _request(self, method: str, path: str, payload: Optional[dict] = None) -> dict:
        try:
            response = await self._client.request(method, path, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            message = f"Record store returned HTTP {e.response.status_code}"
            try:
                message = e.response.json().get("message") or message
            except ValueError:
                pass
            logger.error(f"Record store error on {method} {path}: {message}")
            raise StoreError(message) from e
        except httpx.HTTPError as e:
            logger.error(f"Record store unreachable on {method} {path}: {e}")
            raise StoreError(f"Record store unreachable: {e}") from e
        except ValueError as e:
            logger.error(f"Record store sent invalid JSON on {method} {path}: {e}")
            raise StoreError("Record store sent an invalid response") from e

    async def fetch_records(self, collection: str, params: Optional[dict] = None) -> dict:
        return await self._request("POST", f"/{collection}/fetch", params or {})

    async def get_record_by_id(
        self,
        collection: str,
        record_id: int,
        params: Optional[dict] = None
    ) -> dict:
        return await self._request("POST", f"/{collection}/{record_id}/fetch", params or {})

    async def create_record(self, collection: str, payload: dict) -> dict:
        return await self._request("POST", f"/{collection}", payload)

    async def update_record(self, collection: str, payload: dict) -> dict:
        return await self._request("PATCH", f"/{collection}", payload)

    async def delete_record(self, collection: str, payload: dict) -> dict:
        return await self._request("DELETE", f"/{collection}", payload)

    async def close(self):
        await self._client.aclose()


def create_record_store(settings: Settings) -> RecordStore:
    """Build the record store selected by configuration."""
    if settings.record_store_backend == "http":
        config = get_record_store_config(settings)
        logger.info(f"Using hosted record store at {config['base_url']}")
        return HttpRecordStore(**config)

    logger.info("Using in-memory record store")
    return InMemoryRecordStore()
