"""
Itinerary Aggregator - Day buckets and trip statistics.

Turns a trip's date range and its flat activity list into an ordered
day-by-day timeline, and derives the figures shown on the overview page.
"""
from collections import Counter
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional, Union
import logging

from ..models import (
    Activity,
    ActivityStats,
    DayBucket,
    PackingItem,
    PackingStats,
    Trip,
    TripStatus,
)

logger = logging.getLogger(__name__)

# Number of activities shown in the overview's "coming up" list
UPCOMING_ACTIVITY_LIMIT = 3

DateLike = Union[date, datetime, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    """Parse a date or ISO date/datetime string. Returns None when unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def trip_days(start: DateLike, end: DateLike) -> list[date]:
    """
    Every calendar day from start to end inclusive.

    Returns an empty list when either bound cannot be parsed or the range
    is inverted.
    """
    start_day = parse_date(start)
    end_day = parse_date(end)
    if start_day is None or end_day is None:
        logger.warning(f"Cannot build trip days from start={start!r} end={end!r}")
        return []
    if end_day < start_day:
        logger.warning(f"Trip end {end_day} is before start {start_day}")
        return []

    span = (end_day - start_day).days
    return [start_day + timedelta(days=offset) for offset in range(span + 1)]


def available_dates(start: DateLike, end: DateLike) -> list[str]:
    """ISO strings of the days an activity can be scheduled on."""
    return [day.isoformat() for day in trip_days(start, end)]


def _day_order(activity: Activity) -> tuple[int, time]:
    # Untimed activities sort after every timed one
    if activity.time is None:
        return (1, time.min)
    return (0, activity.time)


def sort_day_activities(activities: Iterable[Activity]) -> list[Activity]:
    """Order one day's activities: by time ascending, untimed last."""
    return sorted(activities, key=_day_order)


def build_day_buckets(
    start: DateLike,
    end: DateLike,
    activities: Iterable[Activity]
) -> list[DayBucket]:
    """
    Group activities into one bucket per trip day, empty days included.

    Days come from the calendar, not from the activities, so a day with
    nothing planned still appears. Activities dated outside the range are
    not placed.
    """
    days = trip_days(start, end)
    grouped: dict[date, list[Activity]] = {day: [] for day in days}

    for activity in activities:
        if activity.date in grouped:
            grouped[activity.date].append(activity)

    return [
        DayBucket(
            day_number=index,
            date=day,
            activities=sort_day_activities(grouped[day])
        )
        for index, day in enumerate(days, start=1)
    ]


def packing_stats(items: Iterable[PackingItem]) -> PackingStats:
    """Packed/total counts and completion percentage (0 when there are no items)."""
    items = list(items)
    total = len(items)
    packed = sum(1 for item in items if item.packed)

    if total == 0:
        return PackingStats()

    progress = packed / total * 100
    return PackingStats(
        total_items=total,
        packed_items=packed,
        progress=progress,
        percent=round(100 * packed / total)
    )


def activity_stats(activities: Iterable[Activity]) -> ActivityStats:
    """Total activity count and a count per activity type."""
    counts = Counter(activity.type.value for activity in activities)
    return ActivityStats(total=sum(counts.values()), by_type=dict(counts))


def upcoming_activities(
    activities: Iterable[Activity],
    today: Optional[date] = None,
    limit: int = UPCOMING_ACTIVITY_LIMIT
) -> list[Activity]:
    """Activities dated today or later, soonest first, at most ``limit``."""
    today = today or date.today()
    upcoming = [a for a in activities if a.date >= today]
    upcoming.sort(key=lambda a: (a.date, a.time.isoformat() if a.time else ""))
    return upcoming[:limit]


def trip_status(trip: Trip, today: Optional[date] = None) -> TripStatus:
    """Whether the trip is still ahead, underway, or over."""
    today = today or date.today()
    if today < trip.start_date:
        return TripStatus.UPCOMING
    if today > trip.end_date:
        return TripStatus.COMPLETED
    return TripStatus.ACTIVE


def trip_duration_days(trip: Trip) -> int:
    """Number of calendar days the trip covers."""
    return max((trip.end_date - trip.start_date).days + 1, 0)


def group_items_by_category(items: Iterable[PackingItem]) -> dict[str, list[PackingItem]]:
    """Packing items keyed by category, in first-seen order."""
    grouped: dict[str, list[PackingItem]] = {}
    for item in items:
        grouped.setdefault(item.category.value, []).append(item)
    return grouped
