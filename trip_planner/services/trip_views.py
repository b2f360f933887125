"""
Trip Views - Page-level data for the trip list, timeline, calendar,
packing and overview screens.

Each loader issues its independent store calls concurrently and joins
them before building the view.
"""
from datetime import date
from typing import Optional
import asyncio
import logging

from ..config import Settings, settings as default_settings
from ..models import (
    CalendarView,
    OverviewView,
    PackingView,
    TimelineView,
    Trip,
)
from .activity_service import ActivityService
from .calendar import build_calendar_events
from .itinerary import (
    activity_stats,
    available_dates,
    build_day_buckets,
    group_items_by_category,
    packing_stats,
    trip_duration_days,
    trip_status,
    upcoming_activities,
)
from .packing_service import PackingService
from .trip_service import TripService

logger = logging.getLogger(__name__)


class TripViewLoader:
    """Builds the derived views of a trip from the entity services."""
    
    def __init__(
        self,
        trips: TripService,
        activities: ActivityService,
        packing: PackingService,
        config: Optional[Settings] = None
    ):
        self.trips = trips
        self.activities = activities
        self.packing = packing
        self.config = config or default_settings
    
    async def list_trips(self) -> list[Trip]:
        """All trips, soonest start first."""
        trips = await self.trips.get_all()
        return sorted(trips, key=lambda t: t.start_date)
    
    async def timeline(self, trip_id: int) -> TimelineView:
        trip, activities = await asyncio.gather(
            self.trips.get_by_id(trip_id),
            self.activities.get_by_trip_id(trip_id),
        )
        days = build_day_buckets(trip.start_date, trip.end_date, activities)
        logger.debug(f"Timeline for trip {trip_id}: {len(days)} days, {len(activities)} activities")
        return TimelineView(trip=trip, days=days)
    
    async def calendar(self, trip_id: int) -> CalendarView:
        trip, activities = await asyncio.gather(
            self.trips.get_by_id(trip_id),
            self.activities.get_by_trip_id(trip_id),
        )
        return CalendarView(
            trip=trip,
            events=build_calendar_events(
                activities,
                default_duration=self.config.default_event_duration_minutes
            ),
            available_dates=available_dates(trip.start_date, trip.end_date)
        )
    
    async def packing_list(self, trip_id: int) -> PackingView:
        trip, items = await asyncio.gather(
            self.trips.get_by_id(trip_id),
            self.packing.get_by_trip_id(trip_id),
        )
        return PackingView(
            trip=trip,
            categories=group_items_by_category(items),
            stats=packing_stats(items)
        )
    
    async def overview(self, trip_id: int, today: Optional[date] = None) -> OverviewView:
        trip, activities, items = await asyncio.gather(
            self.trips.get_by_id(trip_id),
            self.activities.get_by_trip_id(trip_id),
            self.packing.get_by_trip_id(trip_id),
        )
        return OverviewView(
            trip=trip,
            status=trip_status(trip, today),
            duration_days=trip_duration_days(trip),
            packing=packing_stats(items),
            activities=activity_stats(activities),
            upcoming=upcoming_activities(
                activities,
                today=today,
                limit=self.config.upcoming_activity_limit
            )
        )
