"""Tests for location scoped API endpoints."""

from flask.testing import FlaskClient

from box_inventory.models.box import BoxStatus
from tests.testing_utils import FakeInventorySource


class TestAvailableItemsAPI:
    """Test available items endpoint."""

    def test_list_available_items(self, client: FlaskClient, fake_source: FakeInventorySource):
        fake_source.add_item("charger", "USB-C Charger", unit="pcs", category="Power")
        fake_source.add_item("cable", "HDMI Cable")
        fake_source.set_stock("Store", "charger", 100)
        fake_source.set_stock("Store", "cable", 10)
        fake_source.add_box("Store", "BOX-1", 50, {"charger": 40, "cable": 10})

        response = client.get("/api/locations/Store/available-items")

        assert response.status_code == 200
        assert response.json == [{
            "item_id": "charger",
            "item_name": "USB-C Charger",
            "unit": "pcs",
            "category": "Power",
            "total_quantity": 100,
            "quantity_in_boxes": 40,
            "available_for_boxing": 60,
        }]

    def test_backend_unreachable(self, client: FlaskClient, fake_source: FakeInventorySource):
        fake_source.unavailable = True

        response = client.get("/api/locations/Store/available-items")

        assert response.status_code == 502
        assert response.json["code"] == "REMOTE_UNAVAILABLE"


class TestLocationBoxesAPI:
    """Test box listing and creation for a location."""

    def test_create_box(self, client: FlaskClient, fake_source: FakeInventorySource):
        response = client.post(
            "/api/locations/Store/boxes",
            json={"box_number": "BOX-1", "capacity": 40, "description": "Chargers"},
        )

        assert response.status_code == 201
        data = response.json
        assert data["box_number"] == "BOX-1"
        assert data["location"] == "Store"
        assert data["capacity"] == 40
        assert data["status"] == "Active"
        assert data["items"] == []
        assert data["usage"]["utilization_percent"] == 0.0
        assert data["usage"]["status_color"] == "success"
        assert len(fake_source.boxes) == 1

    def test_create_box_default_capacity(self, client: FlaskClient):
        response = client.post("/api/locations/Store/boxes", json={"box_number": "BOX-1"})

        assert response.status_code == 201
        assert response.json["capacity"] == 50

    def test_create_box_invalid_capacity(self, client: FlaskClient, fake_source: FakeInventorySource):
        response = client.post("/api/locations/Store/boxes", json={"box_number": "BOX-1", "capacity": 0})

        assert response.status_code == 400
        assert fake_source.boxes == {}

    def test_create_duplicate_box_number(self, client: FlaskClient, fake_source: FakeInventorySource):
        fake_source.add_box("Store", "BOX-1", 50)

        response = client.post("/api/locations/Store/boxes", json={"box_number": "BOX-1", "capacity": 10})

        assert response.status_code == 409
        assert response.json["code"] == "RESOURCE_CONFLICT"

    def test_list_boxes(self, client: FlaskClient, fake_source: FakeInventorySource):
        fake_source.add_box("Store", "BOX-1", 100, {"a": 10})
        fake_source.add_box("Store", "BOX-2", 10, {"a": 9})
        fake_source.add_box("Warehouse", "BOX-3", 10)

        response = client.get("/api/locations/Store/boxes?sort_by=utilization&order=desc")

        assert response.status_code == 200
        assert [box["box_number"] for box in response.json] == ["BOX-2", "BOX-1"]
        assert response.json[0]["usage"]["status_color"] == "warning"

    def test_list_boxes_by_status(self, client: FlaskClient, fake_source: FakeInventorySource):
        fake_source.add_box("Store", "BOX-1", 10)
        fake_source.add_box("Store", "BOX-2", 10, status=BoxStatus.INACTIVE)

        response = client.get("/api/locations/Store/boxes?status=Inactive")

        assert response.status_code == 200
        assert [box["box_number"] for box in response.json] == ["BOX-2"]

    def test_list_boxes_invalid_sort(self, client: FlaskClient):
        response = client.get("/api/locations/Store/boxes?sort_by=color")

        assert response.status_code == 400

    def test_box_stats(self, client: FlaskClient, fake_source: FakeInventorySource):
        fake_source.add_box("Store", "BOX-1", 50, {"a": 40})
        fake_source.add_box("Store", "BOX-2", 50, {"a": 20})

        response = client.get("/api/locations/Store/boxes/stats")

        assert response.status_code == 200
        assert response.json["total_boxes"] == 2
        assert response.json["active_boxes"] == 2
        assert response.json["total_items_stored"] == 60
        assert response.json["average_items_per_box"] == 30.0


class TestSmartCreateAPI:
    """Test bulk allocation endpoint."""

    def test_smart_create(self, client: FlaskClient, fake_source: FakeInventorySource):
        fake_source.add_item("charger", "USB-C Charger")
        fake_source.set_stock("Store", "charger", 120)

        response = client.post(
            "/api/locations/Store/smart-create",
            json={"item_id": "charger", "number_of_boxes": 3, "capacity_per_box": 50},
        )

        assert response.status_code == 201
        data = response.json
        assert [plan["assigned_qty"] for plan in data["plan"]["boxes"]] == [50, 50, 20]
        assert [box["usage"]["total_quantity"] for box in data["boxes"]] == [50, 50, 20]
        assert data["leftover"] == 0
        assert data["shortfall"] is None

    def test_smart_create_with_shortfall(self, client: FlaskClient, fake_source: FakeInventorySource):
        fake_source.add_item("charger", "USB-C Charger")
        fake_source.set_stock("Store", "charger", 120)

        response = client.post(
            "/api/locations/Store/smart-create",
            json={"item_id": "charger", "number_of_boxes": 2, "capacity_per_box": 50},
        )

        assert response.status_code == 201
        assert response.json["leftover"] == 20
        assert response.json["shortfall"]["leftover"] == 20
        assert response.json["shortfall"]["additional_boxes_needed"] == 1

        available = client.get("/api/locations/Store/available-items")
        assert available.json[0]["available_for_boxing"] == 20

    def test_smart_create_rejects_zero_boxes(self, client: FlaskClient, fake_source: FakeInventorySource):
        fake_source.set_stock("Store", "charger", 120)

        response = client.post(
            "/api/locations/Store/smart-create",
            json={"item_id": "charger", "number_of_boxes": 0, "capacity_per_box": 50},
        )

        assert response.status_code == 400
        assert fake_source.boxes == {}

    def test_smart_create_item_without_stock(self, client: FlaskClient, fake_source: FakeInventorySource):
        response = client.post(
            "/api/locations/Store/smart-create",
            json={"item_id": "charger", "number_of_boxes": 1, "capacity_per_box": 50},
        )

        assert response.status_code == 409
        assert response.json["code"] == "INVALID_OPERATION"
