"""Prometheus metrics service for collecting and exposing application metrics."""

import logging
from abc import ABC, abstractmethod

from prometheus_client import Counter, Gauge, generate_latest

logger = logging.getLogger(__name__)


class MetricsServiceProtocol(ABC):
    """Protocol for metrics service implementations."""

    @abstractmethod
    def initialize_metrics(self):
        """Initialize metric objects."""
        pass

    @abstractmethod
    def record_box_created(self, location: str, mode: str) -> None:
        """Record creation of a box by the given mode (manual or smart)."""
        pass

    @abstractmethod
    def record_box_deleted(self, location: str) -> None:
        """Record deletion of a box."""
        pass

    @abstractmethod
    def record_allocation(self, mode: str, outcome: str, quantity: int = 0) -> None:
        """Record an allocation attempt and the quantity it placed."""
        pass

    @abstractmethod
    def record_allocation_shortfall(self, location: str, leftover: int) -> None:
        """Record stock left unassigned by a bulk allocation."""
        pass

    @abstractmethod
    def record_ledger_operation(self, operation: str) -> None:
        """Record a box item ledger mutation."""
        pass

    @abstractmethod
    def update_location_utilization(self, location: str, boxes: dict[str, float], overfilled: int) -> None:
        """Publish per-box utilization for a freshly read location."""
        pass

    @abstractmethod
    def get_metrics_text(self) -> str:
        """Get metrics in Prometheus text format."""
        pass


class MetricsService(MetricsServiceProtocol):
    """Service class for Prometheus metrics collection and exposure."""

    def __init__(self):
        """Initialize service with metric objects."""
        self.initialize_metrics()

    def initialize_metrics(self):
        """Define all Prometheus metric objects."""
        # Check if already initialized (for container singleton reuse)
        if hasattr(self, 'inventory_boxes_created_total'):
            return

        # Box lifecycle metrics
        self.inventory_boxes_created_total = Counter(
            'inventory_boxes_created_total',
            'Boxes created by location and mode',
            ['location', 'mode']
        )
        self.inventory_boxes_deleted_total = Counter(
            'inventory_boxes_deleted_total',
            'Boxes deleted by location',
            ['location']
        )

        # Allocation metrics
        self.inventory_allocations_total = Counter(
            'inventory_allocations_total',
            'Allocation attempts by mode and outcome',
            ['mode', 'outcome']
        )
        self.inventory_allocated_units_total = Counter(
            'inventory_allocated_units_total',
            'Units placed into boxes by allocation mode',
            ['mode']
        )
        self.inventory_allocation_shortfall_units_total = Counter(
            'inventory_allocation_shortfall_units_total',
            'Units left unassigned by bulk allocation',
            ['location']
        )

        # Ledger metrics
        self.inventory_ledger_operations_total = Counter(
            'inventory_ledger_operations_total',
            'Box item ledger mutations by operation',
            ['operation']
        )

        # Storage metrics
        self.inventory_box_utilization_percent = Gauge(
            'inventory_box_utilization_percent',
            'Box utilization percentage',
            ['location', 'box_number']
        )
        self.inventory_overfilled_boxes = Gauge(
            'inventory_overfilled_boxes',
            'Boxes holding more units than their capacity',
            ['location']
        )

    def record_box_created(self, location: str, mode: str) -> None:
        try:
            self.inventory_boxes_created_total.labels(location=location, mode=mode).inc()
        except Exception as e:
            logger.error(f"Error recording box creation metric: {e}")

    def record_box_deleted(self, location: str) -> None:
        try:
            self.inventory_boxes_deleted_total.labels(location=location).inc()
        except Exception as e:
            logger.error(f"Error recording box deletion metric: {e}")

    def record_allocation(self, mode: str, outcome: str, quantity: int = 0) -> None:
        try:
            self.inventory_allocations_total.labels(mode=mode, outcome=outcome).inc()
            if quantity > 0:
                self.inventory_allocated_units_total.labels(mode=mode).inc(quantity)
        except Exception as e:
            logger.error(f"Error recording allocation metric: {e}")

    def record_allocation_shortfall(self, location: str, leftover: int) -> None:
        try:
            self.inventory_allocation_shortfall_units_total.labels(location=location).inc(leftover)
        except Exception as e:
            logger.error(f"Error recording allocation shortfall metric: {e}")

    def record_ledger_operation(self, operation: str) -> None:
        try:
            self.inventory_ledger_operations_total.labels(operation=operation).inc()
        except Exception as e:
            logger.error(f"Error recording ledger metric: {e}")

    def update_location_utilization(self, location: str, boxes: dict[str, float], overfilled: int) -> None:
        try:
            for box_number, percent in boxes.items():
                self.inventory_box_utilization_percent.labels(
                    location=location, box_number=box_number
                ).set(percent)
            self.inventory_overfilled_boxes.labels(location=location).set(overfilled)
        except Exception as e:
            logger.error(f"Error updating utilization metrics: {e}")

    def get_metrics_text(self) -> str:
        """Generate metrics in Prometheus text format.

        Returns:
            Metrics data in Prometheus exposition format
        """
        return generate_latest().decode('utf-8')
