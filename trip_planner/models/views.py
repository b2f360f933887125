"""
View models - Derived structures built from trips, activities and packing items.
"""
from pydantic import Field
from typing import Optional
import datetime as dt
from enum import Enum

from .base import CamelModel
from .trip import Trip
from .activity import Activity
from .packing import PackingItem


class TripStatus(str, Enum):
    """Where today falls relative to the trip's dates."""
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"


class DayBucket(CamelModel):
    """One calendar day of a trip and the activities scheduled on it."""
    day_number: int = Field(..., ge=1, description="Day number in the trip")
    date: dt.date = Field(..., description="Calendar date of this day")
    activities: list[Activity] = Field(
        default_factory=list,
        description="Timed activities first, by time; untimed last"
    )


class PackingStats(CamelModel):
    """Packing progress for a trip."""
    total_items: int = 0
    packed_items: int = 0
    progress: float = Field(
        default=0.0,
        description="Unrounded completion percentage"
    )
    percent: int = Field(
        default=0,
        description="Completion percentage rounded to a whole number"
    )


class ActivityStats(CamelModel):
    """Activity counts for a trip."""
    total: int = 0
    by_type: dict[str, int] = Field(default_factory=dict)


class CalendarEvent(CamelModel):
    """An activity laid out on a calendar."""
    id: int
    title: str
    start: dt.datetime
    end: dt.datetime
    all_day: bool = False
    resource: Optional[Activity] = None


class TimelineView(CamelModel):
    """Day-by-day itinerary of a trip."""
    trip: Trip
    days: list[DayBucket] = Field(default_factory=list)
    
    def get_total_activities(self) -> int:
        """Count activities placed on the timeline."""
        return sum(len(day.activities) for day in self.days)


class CalendarView(CamelModel):
    """Calendar events of a trip plus the dates open for scheduling."""
    trip: Trip
    events: list[CalendarEvent] = Field(default_factory=list)
    available_dates: list[str] = Field(default_factory=list)


class PackingView(CamelModel):
    """Packing checklist grouped by category."""
    trip: Trip
    categories: dict[str, list[PackingItem]] = Field(default_factory=dict)
    stats: PackingStats = Field(default_factory=PackingStats)


class OverviewView(CamelModel):
    """Trip dashboard."""
    trip: Trip
    status: TripStatus
    duration_days: int = Field(..., ge=0)
    packing: PackingStats
    activities: ActivityStats
    upcoming: list[Activity] = Field(default_factory=list)
