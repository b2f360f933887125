"""Builders for test data."""
from datetime import date

from trip_planner.models import Activity, PackingItem, Trip


def make_trip(**overrides) -> Trip:
    data = {
        "id": 1,
        "name": "Summer in Lisbon",
        "destination": "Lisbon",
        "start_date": date(2024, 6, 1),
        "end_date": date(2024, 6, 3),
    }
    data.update(overrides)
    return Trip(**data)


def make_activity(activity_id: int = 1, **overrides) -> Activity:
    data = {
        "id": activity_id,
        "trip_id": 1,
        "type": "sightseeing",
        "title": f"Activity {activity_id}",
        "date": date(2024, 6, 2),
    }
    data.update(overrides)
    return Activity(**data)


def make_item(item_id: int = 1, **overrides) -> PackingItem:
    data = {
        "id": item_id,
        "trip_id": 1,
        "category": "clothing",
        "name": f"Item {item_id}",
        "quantity": 1,
        "packed": False,
    }
    data.update(overrides)
    return PackingItem(**data)
