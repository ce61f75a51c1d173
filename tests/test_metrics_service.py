"""Tests for MetricsService."""

from box_inventory.services.metrics_service import MetricsService


class TestMetricsService:
    """Test cases for MetricsService functionality."""

    def test_initialize_metrics(self):
        service = MetricsService()

        assert hasattr(service, 'inventory_boxes_created_total')
        assert hasattr(service, 'inventory_boxes_deleted_total')
        assert hasattr(service, 'inventory_allocations_total')
        assert hasattr(service, 'inventory_allocated_units_total')
        assert hasattr(service, 'inventory_allocation_shortfall_units_total')
        assert hasattr(service, 'inventory_ledger_operations_total')
        assert hasattr(service, 'inventory_box_utilization_percent')
        assert hasattr(service, 'inventory_overfilled_boxes')

    def test_initialize_metrics_is_idempotent(self):
        service = MetricsService()
        counter = service.inventory_boxes_created_total

        service.initialize_metrics()

        assert service.inventory_boxes_created_total is counter

    def test_record_box_lifecycle(self):
        service = MetricsService()

        service.record_box_created("Store", "smart")
        service.record_box_created("Store", "smart")
        service.record_box_deleted("Store")

        assert service.inventory_boxes_created_total.labels(location="Store", mode="smart")._value.get() == 2
        assert service.inventory_boxes_deleted_total.labels(location="Store")._value.get() == 1

    def test_record_allocation(self):
        service = MetricsService()

        service.record_allocation("single", "success", 10)
        service.record_allocation("single", "rejected")

        assert service.inventory_allocations_total.labels(mode="single", outcome="success")._value.get() == 1
        assert service.inventory_allocations_total.labels(mode="single", outcome="rejected")._value.get() == 1
        assert service.inventory_allocated_units_total.labels(mode="single")._value.get() == 10

    def test_record_shortfall_and_ledger(self):
        service = MetricsService()

        service.record_allocation_shortfall("Warehouse", 20)
        service.record_ledger_operation("remove")

        assert service.inventory_allocation_shortfall_units_total.labels(location="Warehouse")._value.get() == 20
        assert service.inventory_ledger_operations_total.labels(operation="remove")._value.get() == 1

    def test_update_location_utilization(self):
        service = MetricsService()

        service.update_location_utilization("Store", {"BOX-1": 80.0, "BOX-2": 130.0}, 1)

        gauge = service.inventory_box_utilization_percent
        assert gauge.labels(location="Store", box_number="BOX-1")._value.get() == 80.0
        assert gauge.labels(location="Store", box_number="BOX-2")._value.get() == 130.0
        assert service.inventory_overfilled_boxes.labels(location="Store")._value.get() == 1

    def test_get_metrics_text(self):
        service = MetricsService()
        service.record_ledger_operation("add")

        text = service.get_metrics_text()

        assert 'inventory_ledger_operations_total{operation="add"} 1.0' in text
