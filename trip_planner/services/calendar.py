"""
Calendar Mapping - Activities as calendar events, and the scheduling guard.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from ..errors import ValidationError
from ..models import Activity, CalendarEvent, Trip

DEFAULT_EVENT_DURATION_MINUTES = 60


def activity_to_event(
    activity: Activity,
    default_duration: int = DEFAULT_EVENT_DURATION_MINUTES
) -> CalendarEvent:
    """
    Lay an activity out on the calendar.

    Timed activities run from date+time for ``duration`` minutes, or the
    default when no duration is set. A zero duration is kept as a
    zero-length event. Untimed ones become all-day events ending the next day.
    """
    day_start = datetime.combine(activity.date, time.min)

    if activity.time is not None:
        start = datetime.combine(activity.date, activity.time)
        minutes = activity.duration if activity.duration is not None else default_duration
        end = start + timedelta(minutes=minutes)
        all_day = False
    else:
        start = day_start
        end = day_start + timedelta(days=1)
        all_day = True

    return CalendarEvent(
        id=activity.id,
        title=activity.title,
        start=start,
        end=end,
        all_day=all_day,
        resource=activity
    )


def build_calendar_events(
    activities: Iterable[Activity],
    default_duration: int = DEFAULT_EVENT_DURATION_MINUTES
) -> list[CalendarEvent]:
    """Map every activity to a calendar event."""
    return [activity_to_event(a, default_duration) for a in activities]


def ensure_within_trip(trip: Trip, day: Optional[date]):
    """Reject scheduling on a day outside the trip's start/end dates."""
    if day is None:
        raise ValidationError("Date is required", field="date")
    if day < trip.start_date or day > trip.end_date:
        raise ValidationError(
            f"Please select a date within your trip period "
            f"({trip.start_date.isoformat()} to {trip.end_date.isoformat()})",
            field="date"
        )
