"""Box item ledger: add, update and remove item entries of a single box."""

import logging

from box_inventory.exceptions import (
    CapacityExceededException,
    ConfirmationRequiredException,
    RecordNotFoundException,
    ValidationFailedException,
)
from box_inventory.models.box import Box
from box_inventory.services.base import BaseService
from box_inventory.services.inventory_source import InventorySource
from box_inventory.services.metrics_service import MetricsServiceProtocol
from box_inventory.services.snapshot_store import SnapshotStore
from box_inventory.utils.utilization import is_overfilled, overfill_amount, total_quantity

logger = logging.getLogger(__name__)


class BoxLedgerService(BaseService):
    """Service class for manual box item edits.

    Unlike ``AllocationService.add_to_existing`` these operations do not check
    the box capacity unless ``enforce_capacity`` is enabled, so a box can be
    recorded as overfilled through this path.
    """

    def __init__(
        self,
        source: InventorySource,
        snapshot_store: SnapshotStore,
        metrics_service: MetricsServiceProtocol,
        enforce_capacity: bool = False,
    ):
        """Initialize service with backend client and dependencies.

        Args:
            source: Client for the external inventory backend
            snapshot_store: Store to refresh after each mutation
            metrics_service: Instance of MetricsService for recording metrics
            enforce_capacity: Reject edits that would push a box above capacity
                unless the caller passes ``allow_overfill``
        """
        super().__init__(source)
        self.snapshot_store = snapshot_store
        self.metrics_service = metrics_service
        self.enforce_capacity = enforce_capacity

    def add_item(
        self,
        box_id: str,
        item_id: str,
        quantity: int,
        notes: str = "",
        allow_overfill: bool = False,
        *,
        refresh_location: bool = True,
    ) -> Box:
        """Add an item entry to a box and return the box as re-read from the backend.

        ``refresh_location`` may be turned off by callers that issue several
        writes in a row and refresh the location once at the end.
        """
        _require_item_id(item_id)
        _require_non_negative(quantity, "quantity")

        if self.enforce_capacity and not allow_overfill:
            box = self.source.get_box(box_id)
            self._check_capacity(box, total_quantity(box) + quantity)

        self.source.add_box_item(box_id, item_id, quantity, notes or "")
        self.metrics_service.record_ledger_operation("add")
        return self._reload(box_id, f"added {quantity} x {item_id}", refresh_location)

    def set_item_quantity(
        self,
        box_id: str,
        item_id: str,
        new_quantity: int,
        allow_overfill: bool = False,
    ) -> Box:
        """Overwrite the quantity of an existing entry.

        A quantity of 0 is accepted; callers should prefer ``remove_item``.
        """
        _require_item_id(item_id)
        _require_non_negative(new_quantity, "quantity")

        box = self.source.get_box(box_id)
        entry = box.find_entry(item_id)
        if entry is None:
            raise RecordNotFoundException("Box item", f"{item_id} in box {box.box_number}")

        if self.enforce_capacity and not allow_overfill:
            self._check_capacity(box, total_quantity(box) - entry.quantity + new_quantity)

        self.source.update_box_item(box_id, item_id, new_quantity)
        self.metrics_service.record_ledger_operation("set")
        return self._reload(box_id, f"set {item_id} to {new_quantity}")

    def remove_item(self, box_id: str, item_id: str, confirm: bool = False) -> Box:
        """Remove an item entry from a box.

        Removal is irreversible and must be confirmed. Removing an item the
        box does not hold succeeds without contacting the backend for a write.
        """
        _require_item_id(item_id)
        if not confirm:
            raise ConfirmationRequiredException(f"remove item {item_id} from box {box_id}")

        box = self.source.get_box(box_id)
        if box.find_entry(item_id) is None:
            logger.debug("Item %s not in box %s; nothing to remove", item_id, box_id)
            return box

        self.source.remove_box_item(box_id, item_id)
        self.metrics_service.record_ledger_operation("remove")
        return self._reload(box_id, f"removed {item_id}")

    def _check_capacity(self, box: Box, new_total: int) -> None:
        if new_total > box.capacity:
            raise CapacityExceededException(
                box.box_number,
                requested=new_total - total_quantity(box),
                available_space=max(0, box.capacity - total_quantity(box)),
            )

    def _reload(self, box_id: str, change: str, refresh_location: bool = True) -> Box:
        box = self.source.get_box(box_id)
        logger.info("Box %s/%s: %s", box.location, box.box_number, change)
        if is_overfilled(box):
            logger.warning(
                "Box %s/%s is overfilled by %d units",
                box.location, box.box_number, overfill_amount(box),
            )
        if refresh_location:
            self.snapshot_store.refresh_after_write(box.location)
        return box


def _require_item_id(item_id: str) -> None:
    if not item_id or not str(item_id).strip():
        raise ValidationFailedException("item_id", "an item must be selected")


def _require_non_negative(value: int, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationFailedException(field, "must be a whole number")
    if value < 0:
        raise ValidationFailedException(field, "must not be negative")
