"""Location-keyed store of inventory and box snapshots."""

import logging
import threading

from box_inventory.exceptions import BusinessLogicException
from box_inventory.models.registry import BoxRegistry, LocationSnapshot
from box_inventory.services.inventory_source import InventorySource
from box_inventory.services.metrics_service import MetricsServiceProtocol
from box_inventory.utils.utilization import is_overfilled, utilization_percent

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Single owner of the current snapshot for each storage location.

    Snapshots are read from the backend on demand and replaced wholesale;
    they are never patched locally. Callers that mutate a location must
    call ``refresh`` (or ``invalidate``) once the write has succeeded.
    """

    def __init__(
        self,
        source: InventorySource,
        metrics_service: MetricsServiceProtocol,
        max_age_seconds: int = 30,
    ) -> None:
        self.source = source
        self.metrics_service = metrics_service
        self.max_age_seconds = max_age_seconds
        self._snapshots: dict[str, LocationSnapshot] = {}
        self._lock = threading.Lock()

    def get(self, location: str) -> LocationSnapshot:
        """Return the location snapshot, re-reading it when missing or stale."""
        with self._lock:
            snapshot = self._snapshots.get(location)

        if snapshot is not None and snapshot.age_seconds() < self.max_age_seconds:
            return snapshot
        return self.refresh(location)

    def refresh(self, location: str) -> LocationSnapshot:
        """Re-read inventory totals and boxes for a location.

        A failed read drops any cached snapshot for the location so that a
        stale view is never served after the backend has become unreachable.
        """
        try:
            inventory = self.source.get_total_inventory(location)
            boxes = self.source.list_boxes(location)
        except Exception:
            self.invalidate(location)
            raise

        snapshot = LocationSnapshot(
            location=location,
            inventory=inventory,
            registry=BoxRegistry(location, boxes),
        )
        with self._lock:
            self._snapshots[location] = snapshot

        logger.debug(
            "Refreshed snapshot for %s: %d inventory records, %d boxes",
            location, len(snapshot.inventory), len(snapshot.registry),
        )
        self._publish_utilization(snapshot)
        return snapshot

    def refresh_after_write(self, location: str) -> LocationSnapshot | None:
        """Re-read a location after a successful mutation.

        The write has already been accepted by the backend at this point, so a
        failed re-read is logged and leaves the location uncached instead of
        reporting the mutation itself as failed.
        """
        try:
            return self.refresh(location)
        except BusinessLogicException as e:
            logger.warning("Could not re-read %s after update: %s", location, e.message)
            return None

    def invalidate(self, location: str) -> None:
        with self._lock:
            self._snapshots.pop(location, None)

    def cached(self, location: str) -> LocationSnapshot | None:
        """Return the cached snapshot without touching the backend."""
        with self._lock:
            return self._snapshots.get(location)

    def _publish_utilization(self, snapshot: LocationSnapshot) -> None:
        boxes = {box.box_number: utilization_percent(box) for box in snapshot.registry}
        overfilled = sum(1 for box in snapshot.registry if is_overfilled(box))
        self.metrics_service.update_location_utilization(snapshot.location, boxes, overfilled)
