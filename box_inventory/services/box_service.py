"""Box service for box registry management logic."""

import logging
from dataclasses import dataclass
from typing import Any

from box_inventory.exceptions import (
    ConfirmationRequiredException,
    ResourceConflictException,
    ValidationFailedException,
)
from box_inventory.models.box import Box, BoxStatus
from box_inventory.services.base import BaseService
from box_inventory.services.inventory_source import InventorySource
from box_inventory.services.metrics_service import MetricsServiceProtocol
from box_inventory.services.snapshot_store import SnapshotStore
from box_inventory.utils.utilization import (
    BoxUsage,
    calculate_usage,
    is_overfilled,
    total_quantity,
    utilization_percent,
)

logger = logging.getLogger(__name__)

SORT_KEYS = {
    "box_number": lambda box: box.box_number.lower(),
    "location": lambda box: box.location.lower(),
    "item_count": lambda box: box.item_count,
    "capacity": lambda box: box.capacity,
    "utilization": utilization_percent,
}


@dataclass
class BoxStats:
    """Data class for box summary statistics at a location."""
    location: str
    total_boxes: int
    active_boxes: int
    full_boxes: int
    inactive_boxes: int
    overfilled_boxes: int
    total_items_stored: int
    average_items_per_box: float


class BoxService(BaseService):
    """Service class for box registry operations."""

    def __init__(
        self,
        source: InventorySource,
        snapshot_store: SnapshotStore,
        metrics_service: MetricsServiceProtocol,
        default_capacity: int = 50,
    ):
        """Initialize service with backend client and dependencies.

        Args:
            source: Client for the external inventory backend
            snapshot_store: Store providing and refreshing location snapshots
            metrics_service: Instance of MetricsService for recording metrics
            default_capacity: Capacity of boxes created without an explicit one
        """
        super().__init__(source)
        self.snapshot_store = snapshot_store
        self.metrics_service = metrics_service
        self.default_capacity = default_capacity

    def create_box(
        self,
        location: str,
        box_number: str,
        capacity: int | None = None,
        description: str = "",
        status: BoxStatus = BoxStatus.ACTIVE,
    ) -> Box:
        """Create an empty box; box numbers must be unique within the location."""
        if capacity is None:
            capacity = self.default_capacity
        location = _require_text(location, "location")
        box_number = _require_text(box_number, "box_number")
        _require_capacity(capacity)
        status = _require_status(status)

        snapshot = self.snapshot_store.refresh(location)
        if snapshot.registry.find_by_number(box_number) is not None:
            raise ResourceConflictException("Box", f"number {box_number} at {location}")

        box = self.source.create_box(location, box_number, description or "", capacity, status)
        logger.info("Created box %s/%s with capacity %d", location, box_number, capacity)
        self.metrics_service.record_box_created(location, "manual")
        self.snapshot_store.refresh_after_write(location)
        return box

    def get_box(self, box_id: str) -> Box:
        """Get box."""
        return self.source.get_box(box_id)

    def update_box(self, box_id: str, **fields: Any) -> Box:
        """Update box number, location, description, capacity or status.

        Only the supplied fields are sent. Capacity may be lowered below the
        current contents; the box is then reported as overfilled.
        """
        changes: dict[str, Any] = {}
        for name, value in fields.items():
            if value is None:
                continue
            if name in ("location", "box_number"):
                changes[name] = _require_text(value, name)
            elif name == "capacity":
                _require_capacity(value)
                changes[name] = value
            elif name == "status":
                changes[name] = _require_status(value)
            elif name == "description":
                changes[name] = value
            else:
                raise ValidationFailedException(name, "is not an editable box field")

        box = self.source.get_box(box_id)
        if not changes:
            return box

        target_location = changes.get("location", box.location)
        target_number = changes.get("box_number", box.box_number)
        if (target_location, target_number) != box.key:
            snapshot = self.snapshot_store.refresh(target_location)
            existing = snapshot.registry.find_by_number(target_number)
            if existing is not None and existing.id != box.id:
                raise ResourceConflictException("Box", f"number {target_number} at {target_location}")

        updated = self.source.update_box(box_id, changes)
        logger.info("Updated box %s/%s: %s", updated.location, updated.box_number, sorted(changes))

        self.snapshot_store.refresh_after_write(updated.location)
        if updated.location != box.location:
            self.snapshot_store.refresh_after_write(box.location)
        return updated

    def delete_box(self, box_id: str, confirm: bool = False) -> None:
        """Delete a box and its contents permanently; requires confirmation."""
        if not confirm:
            raise ConfirmationRequiredException(f"delete box {box_id}")

        box = self.source.get_box(box_id)
        self.source.delete_box(box_id)
        logger.info(
            "Deleted box %s/%s holding %d units", box.location, box.box_number, total_quantity(box)
        )
        self.metrics_service.record_box_deleted(box.location)
        self.snapshot_store.refresh_after_write(box.location)

    def list_boxes(
        self,
        location: str,
        status: BoxStatus | None = None,
        sort_by: str = "box_number",
        descending: bool = False,
        refresh: bool = False,
    ) -> list[Box]:
        """List boxes at a location, optionally filtered by status and sorted."""
        if sort_by not in SORT_KEYS:
            raise ValidationFailedException("sort_by", f"must be one of {', '.join(SORT_KEYS)}")

        snapshot = self.snapshot_store.refresh(location) if refresh else self.snapshot_store.get(location)
        boxes = snapshot.registry.boxes
        if status is not None:
            boxes = [box for box in boxes if box.status == status]
        return sorted(boxes, key=SORT_KEYS[sort_by], reverse=descending)

    def search_boxes(self, query: str, location: str | None = None) -> list[Box]:
        """Search boxes by box number or item name, optionally within one location."""
        query = (query or "").strip()
        if not query:
            return []

        boxes = self.source.search_boxes(query)
        if location:
            boxes = [box for box in boxes if box.location == location]
        return boxes

    def get_location_stats(self, location: str) -> BoxStats:
        """Summarize the boxes stored at a location."""
        boxes = self.snapshot_store.get(location).registry.boxes
        total_items = sum(total_quantity(box) for box in boxes)
        average = round(total_items / len(boxes), 1) if boxes else 0.0

        return BoxStats(
            location=location,
            total_boxes=len(boxes),
            active_boxes=sum(1 for box in boxes if box.status == BoxStatus.ACTIVE),
            full_boxes=sum(1 for box in boxes if box.status == BoxStatus.FULL),
            inactive_boxes=sum(1 for box in boxes if box.status == BoxStatus.INACTIVE),
            overfilled_boxes=sum(1 for box in boxes if is_overfilled(box)),
            total_items_stored=total_items,
            average_items_per_box=average,
        )

    def get_box_usage(self, box_id: str) -> BoxUsage:
        """Calculate usage statistics for a specific box."""
        return calculate_usage(self.source.get_box(box_id))


def _require_text(value: str, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationFailedException(field, "is required")
    return str(value).strip()


def _require_capacity(capacity: int) -> None:
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ValidationFailedException("capacity", "must be a whole number")
    if capacity <= 0:
        raise ValidationFailedException("capacity", "must be greater than 0")


def _require_status(status: BoxStatus | str) -> BoxStatus:
    try:
        return BoxStatus(status)
    except ValueError as e:
        allowed = ", ".join(member.value for member in BoxStatus)
        raise ValidationFailedException("status", f"must be one of {allowed}") from e
