"""Services for the trip planner."""
from dataclasses import dataclass
from typing import Optional

from ..config import Settings, settings as default_settings
from .record_store import RecordStore, InMemoryRecordStore, HttpRecordStore, create_record_store
from .trip_service import TripService
from .activity_service import ActivityService
from .packing_service import PackingService
from .trip_views import TripViewLoader


@dataclass
class TripPlannerServices:
    """Entity services and view loader sharing one record store."""
    store: RecordStore
    trips: TripService
    activities: ActivityService
    packing: PackingService
    views: TripViewLoader


def build_services(store: RecordStore, config: Optional[Settings] = None) -> TripPlannerServices:
    """Wire every service to the given record store."""
    config = config or default_settings
    trips = TripService(store, config)
    activities = ActivityService(store, config)
    packing = PackingService(store, config)
    return TripPlannerServices(
        store=store,
        trips=trips,
        activities=activities,
        packing=packing,
        views=TripViewLoader(trips, activities, packing, config),
    )


__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "HttpRecordStore",
    "create_record_store",
    "TripService",
    "ActivityService",
    "PackingService",
    "TripViewLoader",
    "TripPlannerServices",
    "build_services",
]
