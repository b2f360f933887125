"""Data models for the trip planner."""
from .trip import Trip, TripCreate, TripUpdate
from .activity import Activity, ActivityCreate, ActivityUpdate, ActivityType
from .packing import PackingItem, PackingItemCreate, PackingItemUpdate, PackingCategory
from .views import (
    TripStatus,
    DayBucket,
    PackingStats,
    ActivityStats,
    CalendarEvent,
    TimelineView,
    CalendarView,
    PackingView,
    OverviewView,
)

__all__ = [
    "Trip",
    "TripCreate",
    "TripUpdate",
    "Activity",
    "ActivityCreate",
    "ActivityUpdate",
    "ActivityType",
    "PackingItem",
    "PackingItemCreate",
    "PackingItemUpdate",
    "PackingCategory",
    "TripStatus",
    "DayBucket",
    "PackingStats",
    "ActivityStats",
    "CalendarEvent",
    "TimelineView",
    "CalendarView",
    "PackingView",
    "OverviewView",
]
