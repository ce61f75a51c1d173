"""Tests for box service functionality."""

import pytest

from box_inventory.exceptions import (
    ConfirmationRequiredException,
    RecordNotFoundException,
    ResourceConflictException,
    ValidationFailedException,
)
from box_inventory.models.box import BoxStatus
from box_inventory.services.box_service import BoxService
from box_inventory.services.snapshot_store import SnapshotStore
from box_inventory.utils.utilization import is_overfilled
from tests.testing_utils import FakeInventorySource, StubMetricsService


class TestBoxService:
    """Test cases for BoxService."""

    def test_create_box(self, box_service: BoxService, fake_source: FakeInventorySource, metrics_stub: StubMetricsService):
        """Test creating a new empty box."""
        box = box_service.create_box("Store", "BOX-1", 50, description="Chargers")

        assert box.box_number == "BOX-1"
        assert box.location == "Store"
        assert box.capacity == 50
        assert box.description == "Chargers"
        assert box.status == BoxStatus.ACTIVE
        assert box.items == []
        assert box.id in fake_source.boxes
        assert metrics_stub.boxes_created == [("Store", "manual")]

    def test_create_box_uses_default_capacity(
        self, fake_source: FakeInventorySource, snapshot_store: SnapshotStore, metrics_stub: StubMetricsService
    ):
        service = BoxService(fake_source, snapshot_store, metrics_stub, default_capacity=75)

        box = service.create_box("Store", "BOX-1")

        assert box.capacity == 75

    def test_box_number_unique_per_location(self, box_service: BoxService, fake_source: FakeInventorySource):
        """The same box number may exist at different locations but not twice at one."""
        box_service.create_box("Store", "BOX-1", 50)
        box_service.create_box("Warehouse", "BOX-1", 50)

        with pytest.raises(ResourceConflictException):
            box_service.create_box("Store", "BOX-1", 20)

        assert len(fake_source.boxes) == 2

    @pytest.mark.parametrize("capacity", [0, -10, 2.5])
    def test_create_box_invalid_capacity(self, box_service: BoxService, fake_source: FakeInventorySource, capacity):
        with pytest.raises(ValidationFailedException) as exc_info:
            box_service.create_box("Store", "BOX-1", capacity)

        assert exc_info.value.field == "capacity"
        assert fake_source.calls == []

    def test_create_box_missing_number(self, box_service: BoxService):
        with pytest.raises(ValidationFailedException) as exc_info:
            box_service.create_box("Store", "  ", 50)

        assert exc_info.value.field == "box_number"

    def test_create_box_invalid_status(self, box_service: BoxService):
        with pytest.raises(ValidationFailedException) as exc_info:
            box_service.create_box("Store", "BOX-1", 50, status="Archived")

        assert exc_info.value.field == "status"

    def test_get_box_nonexistent(self, box_service: BoxService):
        with pytest.raises(RecordNotFoundException) as exc_info:
            box_service.get_box("missing")

        assert "Box missing was not found" in str(exc_info.value)

    def test_update_box(self, box_service: BoxService, fake_source: FakeInventorySource):
        box = fake_source.add_box("Store", "BOX-1", 50)

        updated = box_service.update_box(box.id, description="Cables", status=BoxStatus.FULL, capacity=None)

        assert updated.description == "Cables"
        assert updated.status == BoxStatus.FULL
        assert updated.capacity == 50

    def test_update_capacity_below_contents_overfills(self, box_service: BoxService, fake_source: FakeInventorySource):
        box = fake_source.add_box("Store", "BOX-1", 50, {"charger": 40})

        updated = box_service.update_box(box.id, capacity=30)

        assert updated.capacity == 30
        assert is_overfilled(updated) is True

    def test_update_rejects_non_positive_capacity(self, box_service: BoxService, fake_source: FakeInventorySource):
        box = fake_source.add_box("Store", "BOX-1", 50)

        with pytest.raises(ValidationFailedException):
            box_service.update_box(box.id, capacity=0)

        assert fake_source.boxes[box.id].capacity == 50

    def test_update_rejects_unknown_field(self, box_service: BoxService, fake_source: FakeInventorySource):
        box = fake_source.add_box("Store", "BOX-1", 50)

        with pytest.raises(ValidationFailedException) as exc_info:
            box_service.update_box(box.id, color="red")

        assert exc_info.value.field == "color"

    def test_update_number_conflict(self, box_service: BoxService, fake_source: FakeInventorySource):
        fake_source.add_box("Store", "BOX-1", 50)
        box = fake_source.add_box("Store", "BOX-2", 50)

        with pytest.raises(ResourceConflictException):
            box_service.update_box(box.id, box_number="BOX-1")

    def test_move_box_to_other_location(
        self, box_service: BoxService, fake_source: FakeInventorySource, snapshot_store: SnapshotStore
    ):
        fake_source.add_box("Warehouse", "BOX-1", 50)
        box = fake_source.add_box("Store", "BOX-1", 50)

        with pytest.raises(ResourceConflictException):
            box_service.update_box(box.id, location="Warehouse")

        updated = box_service.update_box(box.id, location="Warehouse", box_number="BOX-2")

        assert updated.key == ("Warehouse", "BOX-2")
        assert len(snapshot_store.cached("Store").registry) == 0
        assert len(snapshot_store.cached("Warehouse").registry) == 2

    def test_delete_box_requires_confirmation(self, box_service: BoxService, fake_source: FakeInventorySource):
        box = fake_source.add_box("Store", "BOX-1", 50)

        with pytest.raises(ConfirmationRequiredException):
            box_service.delete_box(box.id)

        assert box.id in fake_source.boxes

    def test_delete_box(self, box_service: BoxService, fake_source: FakeInventorySource, metrics_stub: StubMetricsService):
        box = fake_source.add_box("Store", "BOX-1", 50, {"charger": 10})

        box_service.delete_box(box.id, confirm=True)

        assert box.id not in fake_source.boxes
        assert metrics_stub.boxes_deleted == ["Store"]

    def test_list_boxes_filters_and_sorts(self, box_service: BoxService, fake_source: FakeInventorySource):
        fake_source.add_box("Store", "BOX-2", 10, {"a": 9})
        fake_source.add_box("Store", "BOX-1", 100, {"a": 10, "b": 10})
        fake_source.add_box("Store", "BOX-3", 50, status=BoxStatus.INACTIVE)
        fake_source.add_box("Warehouse", "BOX-9", 10)

        by_number = box_service.list_boxes("Store")
        by_capacity = box_service.list_boxes("Store", sort_by="capacity", descending=True)
        by_utilization = box_service.list_boxes("Store", sort_by="utilization", descending=True)
        inactive = box_service.list_boxes("Store", status=BoxStatus.INACTIVE)

        assert [b.box_number for b in by_number] == ["BOX-1", "BOX-2", "BOX-3"]
        assert [b.capacity for b in by_capacity] == [100, 50, 10]
        assert [b.box_number for b in by_utilization] == ["BOX-2", "BOX-1", "BOX-3"]
        assert [b.box_number for b in inactive] == ["BOX-3"]

    def test_list_boxes_invalid_sort(self, box_service: BoxService):
        with pytest.raises(ValidationFailedException):
            box_service.list_boxes("Store", sort_by="color")

    def test_search_boxes_filters_by_location(self, box_service: BoxService, fake_source: FakeInventorySource):
        fake_source.add_item("charger", "USB-C Charger")
        fake_source.add_box("Store", "BOX-1", 50, {"charger": 5})
        fake_source.add_box("Warehouse", "BOX-1", 50, {"charger": 5})

        everywhere = box_service.search_boxes("charger")
        store_only = box_service.search_boxes("charger", location="Store")

        assert len(everywhere) == 2
        assert [b.location for b in store_only] == ["Store"]

    def test_search_blank_query(self, box_service: BoxService, fake_source: FakeInventorySource):
        assert box_service.search_boxes("  ") == []
        assert fake_source.calls == []

    def test_location_stats(self, box_service: BoxService, fake_source: FakeInventorySource):
        fake_source.add_box("Store", "BOX-1", 50, {"a": 40})
        fake_source.add_box("Store", "BOX-2", 10, {"a": 15}, status=BoxStatus.FULL)
        fake_source.add_box("Store", "BOX-3", 10, status=BoxStatus.INACTIVE)

        stats = box_service.get_location_stats("Store")

        assert stats.total_boxes == 3
        assert stats.active_boxes == 1
        assert stats.full_boxes == 1
        assert stats.inactive_boxes == 1
        assert stats.overfilled_boxes == 1
        assert stats.total_items_stored == 55
        assert stats.average_items_per_box == 18.3

    def test_location_stats_empty(self, box_service: BoxService):
        stats = box_service.get_location_stats("Store")

        assert stats.total_boxes == 0
        assert stats.average_items_per_box == 0.0

    def test_get_box_usage(self, box_service: BoxService, fake_source: FakeInventorySource):
        box = fake_source.add_box("Store", "BOX-1", 50, {"a": 40})

        usage = box_service.get_box_usage(box.id)

        assert usage.utilization_percent == 80.0
        assert usage.status_color == "warning"
        assert usage.available_space == 10
