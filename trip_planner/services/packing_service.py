"""
Packing Service - Store adapter for packing checklist items.
"""
from typing import Optional
import logging

from ..models import PackingItem, PackingItemCreate, PackingItemUpdate
from .base import FieldSet, TripOwnedService
from .field_mapping import PACKING_MAPPING

logger = logging.getLogger(__name__)


class PackingService(TripOwnedService):
    """Create, read, update, delete and check off packing items."""
    
    mapping = PACKING_MAPPING
    update_model = PackingItemUpdate
    label = "Packing item"
    
    async def create(self, data: FieldSet, trip_id: Optional[int] = None) -> PackingItem:
        payload = self._validate(PackingItemCreate, data)
        values = payload.model_dump(mode="json", exclude_none=True)
        values["trip_id"] = self._require_trip_id(payload, trip_id)
        values["packed"] = False
        return await self._create_values(values)
    
    async def toggle_packed(self, item_id: int) -> PackingItem:
        """
        Flip the packed flag.
        
        Read-then-write: two concurrent toggles of the same item can race.
        Use set_packed when the desired state is known.
        """
        item = await self.get_by_id(item_id)
        updated = await self._update_values(item_id, {"packed": not item.packed})
        logger.info(f"Packing item {item_id} {'packed' if updated.packed else 'unpacked'}")
        return updated
    
    async def set_packed(self, item_id: int, packed: bool) -> PackingItem:
        """Write an explicit packed state. Repeating the call changes nothing."""
        await self.get_by_id(item_id)
        return await self._update_values(item_id, {"packed": packed})
