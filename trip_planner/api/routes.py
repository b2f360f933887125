"""
API Routes for the Trip Planner.
"""
from fastapi import APIRouter, Depends, Request
from pydantic import Field

from ..models import (
    Activity,
    ActivityCreate,
    ActivityUpdate,
    CalendarView,
    OverviewView,
    PackingItem,
    PackingItemCreate,
    PackingItemUpdate,
    PackingView,
    TimelineView,
    Trip,
    TripCreate,
    TripUpdate,
)
from ..models.base import CamelModel
from ..services import TripPlannerServices


router = APIRouter(prefix="/api", tags=["trip-planner"])


def get_services(request: Request) -> TripPlannerServices:
    """Services bound to the app's record store."""
    return request.app.state.services


# Request/Response Models
class DeleteResponse(CamelModel):
    success: bool = True


class ReorderRequest(CamelModel):
    activities: list[Activity] = Field(default_factory=list)


class PackedRequest(CamelModel):
    packed: bool


# Trips

@router.get("/trips", response_model=list[Trip])
async def list_trips(services: TripPlannerServices = Depends(get_services)):
    """List all trips."""
    return await services.views.list_trips()


@router.post("/trips", response_model=Trip, status_code=201)
async def create_trip(
    request: TripCreate,
    services: TripPlannerServices = Depends(get_services)
):
    """Create a trip."""
    return await services.trips.create(request)


@router.get("/trips/{trip_id}", response_model=Trip)
async def get_trip(trip_id: int, services: TripPlannerServices = Depends(get_services)):
    return await services.trips.get_by_id(trip_id)


@router.put("/trips/{trip_id}", response_model=Trip)
async def update_trip(
    trip_id: int,
    request: TripUpdate,
    services: TripPlannerServices = Depends(get_services)
):
    return await services.trips.update(trip_id, request)


@router.delete("/trips/{trip_id}", response_model=DeleteResponse)
async def delete_trip(trip_id: int, services: TripPlannerServices = Depends(get_services)):
    """Delete a trip. Its activities and packing items are left in place."""
    return DeleteResponse(success=await services.trips.delete(trip_id))


# Trip views

@router.get("/trips/{trip_id}/timeline", response_model=TimelineView)
async def get_timeline(trip_id: int, services: TripPlannerServices = Depends(get_services)):
    """Day-by-day itinerary, empty days included."""
    return await services.views.timeline(trip_id)


@router.get("/trips/{trip_id}/calendar", response_model=CalendarView)
async def get_calendar(trip_id: int, services: TripPlannerServices = Depends(get_services)):
    return await services.views.calendar(trip_id)


@router.get("/trips/{trip_id}/packing/summary", response_model=PackingView)
async def get_packing_summary(trip_id: int, services: TripPlannerServices = Depends(get_services)):
    """Packing checklist grouped by category, with progress."""
    return await services.views.packing_list(trip_id)


@router.get("/trips/{trip_id}/overview", response_model=OverviewView)
async def get_overview(trip_id: int, services: TripPlannerServices = Depends(get_services)):
    return await services.views.overview(trip_id)


# Activities

@router.get("/trips/{trip_id}/activities", response_model=list[Activity])
async def list_activities(trip_id: int, services: TripPlannerServices = Depends(get_services)):
    return await services.activities.get_by_trip_id(trip_id)


@router.post("/trips/{trip_id}/activities", response_model=Activity, status_code=201)
async def create_activity(
    trip_id: int,
    request: ActivityCreate,
    services: TripPlannerServices = Depends(get_services)
):
    """Schedule an activity. The date must fall within the trip."""
    trip = await services.trips.get_by_id(trip_id)
    return await services.activities.create(request, trip=trip)


@router.put("/trips/{trip_id}/activities/reorder", response_model=list[Activity])
async def reorder_activities(
    trip_id: int,
    request: ReorderRequest,
    services: TripPlannerServices = Depends(get_services)
):
    """Write back a rearranged set of activities in one batch."""
    trip = await services.trips.get_by_id(trip_id)
    return await services.activities.reorder(trip, request.activities)


@router.get("/activities/{activity_id}", response_model=Activity)
async def get_activity(activity_id: int, services: TripPlannerServices = Depends(get_services)):
    return await services.activities.get_by_id(activity_id)


@router.put("/activities/{activity_id}", response_model=Activity)
async def update_activity(
    activity_id: int,
    request: ActivityUpdate,
    services: TripPlannerServices = Depends(get_services)
):
    """Update an activity. A new date must still fall within the trip."""
    activity = await services.activities.get_by_id(activity_id)
    trip = await services.trips.get_by_id(activity.trip_id)
    return await services.activities.update(activity_id, request, trip=trip)


@router.delete("/activities/{activity_id}", response_model=DeleteResponse)
async def delete_activity(activity_id: int, services: TripPlannerServices = Depends(get_services)):
    return DeleteResponse(success=await services.activities.delete(activity_id))


# Packing

@router.get("/trips/{trip_id}/packing", response_model=list[PackingItem])
async def list_packing_items(trip_id: int, services: TripPlannerServices = Depends(get_services)):
    return await services.packing.get_by_trip_id(trip_id)


@router.post("/trips/{trip_id}/packing", response_model=PackingItem, status_code=201)
async def create_packing_item(
    trip_id: int,
    request: PackingItemCreate,
    services: TripPlannerServices = Depends(get_services)
):
    """Add an item to a trip's packing list. New items start unpacked."""
    await services.trips.get_by_id(trip_id)
    return await services.packing.create(request, trip_id=trip_id)


@router.get("/packing/{item_id}", response_model=PackingItem)
async def get_packing_item(item_id: int, services: TripPlannerServices = Depends(get_services)):
    return await services.packing.get_by_id(item_id)


@router.put("/packing/{item_id}", response_model=PackingItem)
async def update_packing_item(
    item_id: int,
    request: PackingItemUpdate,
    services: TripPlannerServices = Depends(get_services)
):
    return await services.packing.update(item_id, request)


@router.delete("/packing/{item_id}", response_model=DeleteResponse)
async def delete_packing_item(item_id: int, services: TripPlannerServices = Depends(get_services)):
    return DeleteResponse(success=await services.packing.delete(item_id))


@router.post("/packing/{item_id}/toggle", response_model=PackingItem)
async def toggle_packing_item(item_id: int, services: TripPlannerServices = Depends(get_services)):
    """Flip an item between packed and unpacked."""
    return await services.packing.toggle_packed(item_id)


@router.put("/packing/{item_id}/packed", response_model=PackingItem)
async def set_packing_item_packed(
    item_id: int,
    request: PackedRequest,
    services: TripPlannerServices = Depends(get_services)
):
    """Set an item's packed state explicitly."""
    return await services.packing.set_packed(item_id, request.packed)
