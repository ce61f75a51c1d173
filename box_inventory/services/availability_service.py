"""Availability resolver for stock that is not yet assigned to a box."""

from dataclasses import dataclass

from box_inventory.models.registry import LocationSnapshot
from box_inventory.services.snapshot_store import SnapshotStore


@dataclass(frozen=True)
class AvailableItem:
    """Item stock at a location together with how much of it is boxed."""

    item_id: str
    item_name: str
    unit: str
    category: str
    total_quantity: int
    quantity_in_boxes: int
    available_for_boxing: int


def resolve_available_items(snapshot: LocationSnapshot) -> list[AvailableItem]:
    """Compute un-boxed stock per item from a location snapshot.

    Items without stock, and items that are fully or over-assigned to
    boxes, are left out rather than reported with zero or negative stock.
    """
    totals: dict[str, int] = {}
    records = {}
    for record in snapshot.inventory:
        totals[record.item_id] = totals.get(record.item_id, 0) + record.quantity
        records.setdefault(record.item_id, record)

    result = []
    for item_id, total in totals.items():
        if total <= 0:
            continue

        in_boxes = snapshot.registry.quantity_in_boxes(item_id)
        available = max(0, total - in_boxes)
        if available == 0:
            continue

        item = records[item_id].item
        result.append(
            AvailableItem(
                item_id=item_id,
                item_name=item.name,
                unit=item.unit,
                category=item.category,
                total_quantity=total,
                quantity_in_boxes=in_boxes,
                available_for_boxing=available,
            )
        )

    result.sort(key=lambda available_item: (available_item.item_name.lower(), available_item.item_id))
    return result


class AvailabilityService:
    """Service resolving per-location stock available for boxing."""

    def __init__(self, snapshot_store: SnapshotStore):
        """Initialize service with the location snapshot store.

        Args:
            snapshot_store: Store providing location snapshots
        """
        self.snapshot_store = snapshot_store

    def available_items(self, location: str, refresh: bool = False) -> list[AvailableItem]:
        """List items at a location that still have stock to box.

        Raises:
            InventorySourceUnavailableException: When the backend cannot be read
        """
        snapshot = self._snapshot(location, refresh)
        return resolve_available_items(snapshot)

    def available_quantity(self, location: str, item_id: str, refresh: bool = False) -> int:
        """Un-boxed quantity of one item at a location (0 when none)."""
        for available_item in self.available_items(location, refresh=refresh):
            if available_item.item_id == item_id:
                return available_item.available_for_boxing
        return 0

    def _snapshot(self, location: str, refresh: bool) -> LocationSnapshot:
        if refresh:
            return self.snapshot_store.refresh(location)
        return self.snapshot_store.get(location)
