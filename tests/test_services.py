"""Tests for the entity services against the in-memory record store."""
import pytest
from datetime import date

from trip_planner.errors import NotFoundError, PartialBatchError, StoreError, ValidationError
from trip_planner.models import ActivityCreate
from trip_planner.services import InMemoryRecordStore, build_services


TRIP_DATA = {
    "name": "Summer in Lisbon",
    "destination": "Lisbon",
    "startDate": "2024-06-01",
    "endDate": "2024-06-03",
}


class RecordingStore(InMemoryRecordStore):
    """In-memory store that remembers which operations were called."""
    
    def __init__(self):
        super().__init__()
        self.calls = []
    
    async def fetch_records(self, collection, params=None):
        self.calls.append(("fetch", collection))
        return await super().fetch_records(collection, params)
    
    async def get_record_by_id(self, collection, record_id, params=None):
        self.calls.append(("get", collection))
        return await super().get_record_by_id(collection, record_id, params)
    
    async def create_record(self, collection, payload):
        self.calls.append(("create", collection))
        return await super().create_record(collection, payload)
    
    async def update_record(self, collection, payload):
        self.calls.append(("update", collection))
        return await super().update_record(collection, payload)


class FailingStore(InMemoryRecordStore):
    """In-memory store whose writes are rejected."""
    
    async def create_record(self, collection, payload):
        return {"success": False, "message": "Quota exceeded"}
    
    async def fetch_records(self, collection, params=None):
        raise StoreError("connection reset")


class VanishingStore(InMemoryRecordStore):
    """In-memory store where one record disappears just before a batch update."""
    
    def __init__(self):
        super().__init__()
        self.vanish = None
    
    async def update_record(self, collection, payload):
        if self.vanish is not None:
            await self.delete_record(collection, {"RecordIds": [self.vanish]})
        return await super().update_record(collection, payload)


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def services(store):
    return build_services(store)


class TestTripService:
    """Test trip CRUD."""
    
    @pytest.mark.asyncio
    async def test_create_and_get(self, services):
        trip = await services.trips.create(TRIP_DATA)
        
        assert trip.id is not None
        assert trip.start_date == date(2024, 6, 1)
        assert trip.created_at is not None
        
        fetched = await services.trips.get_by_id(trip.id)
        assert fetched == trip
    
    @pytest.mark.asyncio
    async def test_stored_with_store_field_names(self, services, store):
        trip = await services.trips.create(TRIP_DATA)
        
        record = (await store.get_record_by_id("trip", trip.id))["data"]
        
        assert record["Name"] == "Summer in Lisbon"
        assert record["start_date"] == "2024-06-01"
    
    @pytest.mark.asyncio
    async def test_get_all(self, services):
        await services.trips.create(TRIP_DATA)
        await services.trips.create({**TRIP_DATA, "name": "Porto"})
        
        trips = await services.trips.get_all()
        
        assert {t.name for t in trips} == {"Summer in Lisbon", "Porto"}
    
    @pytest.mark.asyncio
    async def test_missing_trip(self, services):
        with pytest.raises(NotFoundError, match="Trip not found"):
            await services.trips.get_by_id(999)
        with pytest.raises(NotFoundError):
            await services.trips.update(999, {"name": "x"})
        with pytest.raises(NotFoundError):
            await services.trips.delete(999)
    
    @pytest.mark.asyncio
    async def test_end_before_start_rejected(self, services, store):
        with pytest.raises(ValidationError):
            await services.trips.create({**TRIP_DATA, "endDate": "2024-05-01"})
        assert ("create", "trip") not in store.calls
    
    @pytest.mark.asyncio
    async def test_update_checks_dates_against_stored_trip(self, services):
        trip = await services.trips.create(TRIP_DATA)
        
        with pytest.raises(ValidationError):
            await services.trips.update(trip.id, {"endDate": "2024-05-30"})
        
        updated = await services.trips.update(trip.id, {"endDate": "2024-06-05"})
        assert updated.end_date == date(2024, 6, 5)
        assert updated.name == "Summer in Lisbon"
    
    @pytest.mark.asyncio
    async def test_update_rejects_null_required_fields(self, services, store):
        trip = await services.trips.create(TRIP_DATA)
        store.calls.clear()
        
        for field in ("name", "destination", "startDate", "endDate"):
            with pytest.raises(ValidationError):
                await services.trips.update(trip.id, {field: None})
        
        assert ("update", "trip") not in store.calls
        assert await services.trips.get_all() == [trip]
    
    @pytest.mark.asyncio
    async def test_update_clears_optional_field(self, services):
        trip = await services.trips.create({**TRIP_DATA, "coverImage": "https://images.example.com/lisbon.jpg"})
        
        updated = await services.trips.update(trip.id, {"coverImage": None})
        
        assert updated.cover_image is None
        assert updated.name == "Summer in Lisbon"
    
    @pytest.mark.asyncio
    async def test_long_cover_image_is_shortened(self, services):
        origin_path = "https://images.example.com/" + "p" * 153
        url = origin_path + "?" + "q" * 119
        assert len(url) == 300 and len(origin_path) == 180
        
        trip = await services.trips.create({**TRIP_DATA, "coverImage": url})
        
        assert trip.cover_image == origin_path
    
    @pytest.mark.asyncio
    async def test_long_name_is_capped(self, services):
        trip = await services.trips.create({**TRIP_DATA, "name": "L" * 300})
        assert len(trip.name) == 255
    
    @pytest.mark.asyncio
    async def test_delete_does_not_cascade(self, services):
        trip = await services.trips.create(TRIP_DATA)
        await services.packing.create({"name": "Passport"}, trip_id=trip.id)
        
        assert await services.trips.delete(trip.id) is True
        
        assert len(await services.packing.get_by_trip_id(trip.id)) == 1


class TestActivityService:
    """Test activity CRUD, scheduling guard and reorder."""
    
    @pytest.mark.asyncio
    async def test_create_within_trip(self, services):
        trip = await services.trips.create(TRIP_DATA)
        
        activity = await services.activities.create(
            {"title": "Belém Tower", "type": "sightseeing", "date": "2024-06-02", "time": "09:00"},
            trip=trip
        )
        
        assert activity.trip_id == trip.id
        assert activity.time.hour == 9
        assert [a.id for a in await services.activities.get_by_trip_id(trip.id)] == [activity.id]
    
    @pytest.mark.asyncio
    async def test_create_outside_trip_rejected_before_write(self, services, store):
        trip = await services.trips.create(TRIP_DATA)
        store.calls.clear()
        
        with pytest.raises(ValidationError):
            await services.activities.create(
                ActivityCreate(title="Too late", date=date(2024, 6, 10)),
                trip=trip
            )
        
        assert store.calls == []
    
    @pytest.mark.asyncio
    async def test_create_requires_trip(self, services):
        with pytest.raises(ValidationError):
            await services.activities.create({"title": "Orphan", "date": "2024-06-02"})
    
    @pytest.mark.asyncio
    async def test_update_guard(self, services):
        trip = await services.trips.create(TRIP_DATA)
        activity = await services.activities.create(
            {"title": "Dinner", "type": "restaurant", "date": "2024-06-01"}, trip=trip
        )
        
        with pytest.raises(ValidationError):
            await services.activities.update(activity.id, {"date": "2024-07-01"}, trip=trip)
        
        moved = await services.activities.update(activity.id, {"date": "2024-06-03"}, trip=trip)
        assert moved.date == date(2024, 6, 3)
        assert moved.type.value == "restaurant"
    
    @pytest.mark.asyncio
    async def test_activities_scoped_to_trip(self, services):
        lisbon = await services.trips.create(TRIP_DATA)
        porto = await services.trips.create({**TRIP_DATA, "name": "Porto"})
        await services.activities.create({"title": "A", "date": "2024-06-01"}, trip=lisbon)
        await services.activities.create({"title": "B", "date": "2024-06-01"}, trip=porto)
        
        assert [a.title for a in await services.activities.get_by_trip_id(porto.id)] == ["B"]
        assert len(await services.activities.get_all()) == 2
    
    @pytest.mark.asyncio
    async def test_reorder(self, services):
        trip = await services.trips.create(TRIP_DATA)
        first = await services.activities.create({"title": "A", "date": "2024-06-01"}, trip=trip)
        second = await services.activities.create({"title": "B", "date": "2024-06-02"}, trip=trip)
        
        saved = await services.activities.reorder(trip, [
            second.model_copy(update={"date": date(2024, 6, 1)}),
            first.model_copy(update={"date": date(2024, 6, 2)}),
        ])
        
        assert [(a.title, a.date.day) for a in saved] == [("B", 1), ("A", 2)]
    
    @pytest.mark.asyncio
    async def test_reorder_rejects_activity_stored_under_another_trip(self, services, store):
        lisbon = await services.trips.create(TRIP_DATA)
        porto = await services.trips.create({**TRIP_DATA, "name": "Porto"})
        theirs = await services.activities.create({"title": "Ribeira", "date": "2024-06-01"}, trip=porto)
        store.calls.clear()
        
        # The submitted trip id is rewritten; ownership comes from the store
        with pytest.raises(ValidationError) as exc_info:
            await services.activities.reorder(lisbon, [theirs.model_copy(update={"trip_id": lisbon.id})])
        
        assert exc_info.value.field == "trip_id"
        assert ("update", "Activity1") not in store.calls
        assert (await services.activities.get_by_id(theirs.id)).trip_id == porto.id
    
    @pytest.mark.asyncio
    async def test_reorder_rejects_date_outside_trip(self, services, store):
        trip = await services.trips.create(TRIP_DATA)
        first = await services.activities.create({"title": "A", "date": "2024-06-01"}, trip=trip)
        second = await services.activities.create({"title": "B", "date": "2024-06-02"}, trip=trip)
        store.calls.clear()
        
        with pytest.raises(ValidationError) as exc_info:
            await services.activities.reorder(trip, [
                first.model_copy(update={"date": date(2024, 6, 3)}),
                second.model_copy(update={"date": date(2024, 7, 1)}),
            ])
        
        assert exc_info.value.field == "date"
        assert ("update", "Activity1") not in store.calls
        assert (await services.activities.get_by_id(first.id)).date == date(2024, 6, 1)
    
    @pytest.mark.asyncio
    async def test_reorder_partial_failure_fails_whole_call(self):
        store = VanishingStore()
        services = build_services(store)
        trip = await services.trips.create(TRIP_DATA)
        kept = await services.activities.create({"title": "A", "date": "2024-06-01"}, trip=trip)
        gone = await services.activities.create({"title": "B", "date": "2024-06-02"}, trip=trip)
        store.vanish = gone.id
        
        with pytest.raises(PartialBatchError) as exc_info:
            await services.activities.reorder(trip, [kept, gone])
        
        assert len(exc_info.value.failures) == 1
    
    @pytest.mark.asyncio
    async def test_update_rejects_null_date(self, services):
        trip = await services.trips.create(TRIP_DATA)
        activity = await services.activities.create({"title": "Museum", "date": "2024-06-01"}, trip=trip)
        
        for field in ("date", "title", "type"):
            with pytest.raises(ValidationError):
                await services.activities.update(activity.id, {field: None}, trip=trip)
        
        assert await services.activities.get_by_id(activity.id) == activity
        assert len(await services.activities.get_by_trip_id(trip.id)) == 1


class TestPackingService:
    """Test packing items and the packed flag."""
    
    @pytest.mark.asyncio
    async def test_new_items_start_unpacked(self, services):
        trip = await services.trips.create(TRIP_DATA)
        
        item = await services.packing.create(
            {"name": "Sunscreen", "category": "toiletries", "quantity": 2, "packed": True},
            trip_id=trip.id
        )
        
        assert item.packed is False
        assert item.quantity == 2
    
    @pytest.mark.asyncio
    async def test_quantity_must_be_positive(self, services):
        with pytest.raises(ValidationError):
            await services.packing.create({"name": "Socks", "quantity": 0}, trip_id=1)
    
    @pytest.mark.asyncio
    async def test_toggle_twice_restores_state(self, services):
        item = await services.packing.create({"name": "Passport", "category": "documents"}, trip_id=1)
        
        toggled = await services.packing.toggle_packed(item.id)
        restored = await services.packing.toggle_packed(item.id)
        
        assert toggled.packed is True
        assert restored.packed is False
        assert (await services.packing.get_by_id(item.id)).packed is False
    
    @pytest.mark.asyncio
    async def test_set_packed_is_idempotent(self, services):
        item = await services.packing.create({"name": "Charger"}, trip_id=1)
        
        await services.packing.set_packed(item.id, True)
        again = await services.packing.set_packed(item.id, True)
        
        assert again.packed is True
    
    @pytest.mark.asyncio
    async def test_toggle_missing_item(self, services):
        with pytest.raises(NotFoundError, match="Packing item not found"):
            await services.packing.toggle_packed(42)
    
    @pytest.mark.asyncio
    async def test_update_and_delete(self, services):
        item = await services.packing.create({"name": "Hat"}, trip_id=1)
        
        updated = await services.packing.update(item.id, {"quantity": 3})
        assert updated.quantity == 3
        assert updated.name == "Hat"
        
        assert await services.packing.delete(item.id) is True
        with pytest.raises(NotFoundError):
            await services.packing.get_by_id(item.id)
    
    @pytest.mark.asyncio
    async def test_update_rejects_null_required_fields(self, services):
        item = await services.packing.create({"name": "Hat", "category": "clothing"}, trip_id=1)
        
        for field in ("name", "category", "quantity", "packed"):
            with pytest.raises(ValidationError):
                await services.packing.update(item.id, {field: None})
        
        assert await services.packing.get_by_trip_id(1) == [item]


class TestStoreFailures:
    """Test propagation of store errors."""
    
    @pytest.mark.asyncio
    async def test_failure_flag_carries_store_message(self):
        services = build_services(FailingStore())
        
        with pytest.raises(StoreError, match="Quota exceeded"):
            await services.trips.create(TRIP_DATA)
    
    @pytest.mark.asyncio
    async def test_transport_error_is_reraised(self):
        services = build_services(FailingStore())
        
        with pytest.raises(StoreError, match="connection reset"):
            await services.trips.get_all()
    
    @pytest.mark.asyncio
    async def test_malformed_record(self):
        store = InMemoryRecordStore(seed={"trip": [{"Name": "Broken", "start_date": "soon"}]})
        services = build_services(store)
        
        with pytest.raises(StoreError, match="Malformed trip record"):
            await services.trips.get_all()
