"""
Activity models - Scheduled events within a trip's timeline.
"""
from pydantic import Field, field_validator
from typing import Optional
import datetime as dt
from enum import Enum

from .base import CamelModel, TimeOfDay, reject_null


class ActivityType(str, Enum):
    """Types of activities on a timeline."""
    FLIGHT = "flight"
    HOTEL = "hotel"
    RESTAURANT = "restaurant"
    SIGHTSEEING = "sightseeing"
    TRANSPORT = "transport"
    ACTIVITY = "activity"


class Activity(CamelModel):
    """A stored activity."""
    id: int = Field(..., description="Record identifier")
    trip_id: int = Field(..., description="Owning trip")
    type: ActivityType = Field(
        default=ActivityType.ACTIVITY,
        description="Type of activity"
    )
    title: str = Field(..., description="Short title shown on the timeline")
    date: dt.date = Field(..., description="Day the activity takes place")
    time: Optional[TimeOfDay] = Field(
        None,
        description="Start time; activities without one are all-day"
    )
    duration: Optional[int] = Field(
        None,
        ge=0,
        description="Duration in minutes"
    )
    location: Optional[str] = Field(None, description="Where it happens")
    notes: Optional[str] = Field(None, description="Free-form notes")


class ActivityCreate(CamelModel):
    """Fields accepted when scheduling an activity."""
    trip_id: Optional[int] = Field(
        None,
        description="Owning trip (taken from the URL when omitted)"
    )
    type: ActivityType = ActivityType.ACTIVITY
    title: str = Field(..., min_length=1)
    date: dt.date
    time: Optional[TimeOfDay] = None
    duration: Optional[int] = Field(None, ge=0)
    location: Optional[str] = None
    notes: Optional[str] = None


class ActivityUpdate(CamelModel):
    """Partial update of an activity."""
    type: Optional[ActivityType] = None
    title: Optional[str] = Field(None, min_length=1)
    date: Optional[dt.date] = None
    time: Optional[TimeOfDay] = None
    duration: Optional[int] = Field(None, ge=0)
    location: Optional[str] = None
    notes: Optional[str] = None
    
    check_required = field_validator("type", "title", "date")(reject_null)
