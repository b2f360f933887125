"""
Trip Service - Store adapter for trips.
"""
from datetime import datetime, timezone
import logging

from ..errors import ValidationError
from ..models import Trip, TripCreate, TripUpdate
from .base import EntityService, FieldSet
from .field_mapping import TRIP_MAPPING

logger = logging.getLogger(__name__)


class TripService(EntityService):
    """Create, read, update and delete trips."""
    
    mapping = TRIP_MAPPING
    update_model = TripUpdate
    label = "Trip"
    
    async def create(self, data: FieldSet) -> Trip:
        payload = self._validate(TripCreate, data)
        values = payload.model_dump(mode="json", exclude_none=True)
        values["created_at"] = datetime.now(timezone.utc).isoformat()
        trip = await self._create_values(values)
        logger.info(f"Created trip {trip.id} to {trip.destination}")
        return trip
    
    async def update(self, trip_id: int, data: FieldSet) -> Trip:
        existing = await self.get_by_id(trip_id)
        payload = self._validate(TripUpdate, data)
        
        start = payload.start_date or existing.start_date
        end = payload.end_date or existing.end_date
        if (payload.start_date or payload.end_date) and end < start:
            raise ValidationError("End date must not be before start date", field="end_date")
        
        return await self._update_values(trip_id, payload.model_dump(mode="json", exclude_unset=True))
    
    async def delete(self, trip_id: int) -> bool:
        # Activities and packing items keep their trip_id; nothing cascades
        deleted = await super().delete(trip_id)
        logger.info(f"Deleted trip {trip_id}")
        return deleted
