"""
Activity Service - Store adapter for timeline activities.
"""
from typing import Iterable, Optional, Union
import logging

from ..errors import ValidationError
from ..models import Activity, ActivityCreate, ActivityUpdate, Trip
from .base import FieldSet, TripOwnedService
from .calendar import ensure_within_trip
from .field_mapping import ACTIVITY_MAPPING

logger = logging.getLogger(__name__)


class ActivityService(TripOwnedService):
    """Create, read, update, delete and reorder activities."""
    
    mapping = ACTIVITY_MAPPING
    update_model = ActivityUpdate
    label = "Activity"
    
    async def create(
        self,
        data: FieldSet,
        trip: Optional[Trip] = None
    ) -> Activity:
        """
        Schedule a new activity.
        
        When the owning trip is given, the activity's date must fall within
        the trip; the check runs before anything is written.
        """
        payload = self._validate(ActivityCreate, data)
        trip_id = self._require_trip_id(payload, trip.id if trip else None)
        if trip is not None:
            ensure_within_trip(trip, payload.date)
        
        values = payload.model_dump(mode="json", exclude_none=True)
        values["trip_id"] = trip_id
        return await self._create_values(values)
    
    async def update(
        self,
        activity_id: int,
        data: FieldSet,
        trip: Optional[Trip] = None
    ) -> Activity:
        existing = await self.get_by_id(activity_id)
        payload = self._validate(ActivityUpdate, data)
        if trip is not None:
            if trip.id != existing.trip_id:
                raise ValidationError("Activity does not belong to this trip", field="trip_id")
            if payload.date is not None:
                ensure_within_trip(trip, payload.date)
        
        return await self._update_values(activity_id, payload.model_dump(mode="json", exclude_unset=True))
    
    async def reorder(
        self,
        trip: Trip,
        activities: Iterable[Union[Activity, dict]]
    ) -> list[Activity]:
        """
        Write back a rearranged set of a trip's activities in one batch.
        
        Every activity must already be stored under this trip, and every date
        must fall within it; both are checked before anything is written.
        If any record fails, the whole reorder fails.
        """
        trip_id = trip.id
        stored_ids = {a.id for a in await self.get_by_trip_id(trip_id)}
        
        ordered = []
        for item in activities:
            activity = item if isinstance(item, Activity) else self._validate(Activity, item)
            if activity.id not in stored_ids or activity.trip_id != trip_id:
                raise ValidationError(
                    f"Activity {activity.id} does not belong to trip {trip_id}",
                    field="trip_id"
                )
            ensure_within_trip(trip, activity.date)
            ordered.append(activity)
        
        if not ordered:
            return []
        
        records = [self._prepare(a.model_dump(mode="json")) for a in ordered]
        response = await self._call(
            "reorder",
            self.store.update_record(self.collection, {"records": records})
        )
        saved = [self._to_model(r) for r in self._results("reorder", response)]
        logger.info(f"Reordered {len(saved)} activities for trip {trip_id}")
        return saved
