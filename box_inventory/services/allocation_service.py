"""Capacity allocator distributing item stock into boxes."""

import logging
import math
from dataclasses import dataclass, field

from box_inventory.exceptions import (
    BusinessLogicException,
    CapacityExceededException,
    InsufficientQuantityException,
    InvalidOperationException,
    ValidationFailedException,
)
from box_inventory.models.box import Box, BoxStatus
from box_inventory.services.availability_service import resolve_available_items
from box_inventory.services.base import BaseService
from box_inventory.services.box_ledger_service import BoxLedgerService
from box_inventory.services.inventory_source import InventorySource
from box_inventory.services.metrics_service import MetricsServiceProtocol
from box_inventory.services.snapshot_store import SnapshotStore
from box_inventory.utils.utilization import available_space

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoxPlan:
    """Quantity planned for the n-th box of a bulk allocation (1-based)."""

    box_number: int
    assigned_qty: int


@dataclass(frozen=True)
class DistributionPlan:
    """Result of greedily spreading a quantity over equally sized boxes."""

    boxes: list[BoxPlan]
    total_assigned: int
    leftover: int

    @property
    def has_shortfall(self) -> bool:
        return self.leftover > 0


@dataclass(frozen=True)
class AllocationShortfall:
    """Warning that bulk allocation could not place all requested stock."""

    location: str
    item_id: str
    leftover: int
    additional_boxes_needed: int
    message: str


@dataclass
class SmartCreateResult:
    """Boxes created by a bulk allocation and any stock left over."""

    location: str
    item_id: str
    plan: DistributionPlan
    boxes: list[Box] = field(default_factory=list)
    shortfall: AllocationShortfall | None = None

    @property
    def leftover(self) -> int:
        return self.plan.leftover


def plan_distribution(available_qty: int, number_of_boxes: int, capacity_per_box: int) -> DistributionPlan:
    """Fill boxes left to right, each up to ``capacity_per_box``.

    No planned box ever exceeds the capacity. Stock beyond
    ``number_of_boxes * capacity_per_box`` is reported as ``leftover`` and
    remains available for boxing. Boxes past the last filled one are planned
    with a quantity of 0.
    """
    _require_whole_number(available_qty, "available_qty", minimum=0)
    _require_whole_number(number_of_boxes, "number_of_boxes", minimum=1)
    _require_whole_number(capacity_per_box, "capacity_per_box", minimum=1)

    remaining = available_qty
    boxes = []
    for index in range(1, number_of_boxes + 1):
        assigned = min(remaining, capacity_per_box)
        remaining -= assigned
        boxes.append(BoxPlan(box_number=index, assigned_qty=assigned))

    return DistributionPlan(
        boxes=boxes,
        total_assigned=available_qty - remaining,
        leftover=remaining,
    )


class AllocationService(BaseService):
    """Service class for placing item stock into boxes.

    Both allocation modes enforce box capacity: bulk allocation by
    construction and single-box allocation by rejecting oversized requests.
    """

    def __init__(
        self,
        source: InventorySource,
        snapshot_store: SnapshotStore,
        ledger_service: BoxLedgerService,
        metrics_service: MetricsServiceProtocol,
        skip_empty_boxes: bool = False,
        default_prefix: str = "BOX",
    ):
        """Initialize service with backend client and dependencies.

        Args:
            source: Client for the external inventory backend
            snapshot_store: Store providing and refreshing location snapshots
            ledger_service: Ledger used to place stock into boxes
            metrics_service: Instance of MetricsService for recording metrics
            skip_empty_boxes: Do not create bulk boxes that would receive no stock
            default_prefix: Box number prefix used when the caller supplies none
        """
        super().__init__(source)
        self.snapshot_store = snapshot_store
        self.ledger_service = ledger_service
        self.metrics_service = metrics_service
        self.skip_empty_boxes = skip_empty_boxes
        self.default_prefix = default_prefix

    def smart_create(
        self,
        location: str,
        item_id: str,
        number_of_boxes: int,
        capacity_per_box: int,
        quantity: int | None = None,
        description: str | None = None,
        box_number_prefix: str | None = None,
        status: BoxStatus = BoxStatus.ACTIVE,
    ) -> SmartCreateResult:
        """Create new boxes at a location and fill them from one item's free stock.

        Args:
            location: Storage location for the new boxes
            item_id: Item to distribute
            number_of_boxes: How many boxes to create
            capacity_per_box: Capacity of each new box
            quantity: Units to distribute; defaults to all stock available for boxing
            description: Description for the new boxes; defaults to the item name
            box_number_prefix: Prefix for generated box numbers
            status: Initial status of the new boxes

        Returns:
            SmartCreateResult with the created boxes and any shortfall warning
        """
        if not location or not location.strip():
            raise ValidationFailedException("location", "a location is required")
        if not item_id or not str(item_id).strip():
            raise ValidationFailedException("item_id", "an item must be selected")
        _require_whole_number(number_of_boxes, "number_of_boxes", minimum=1)
        _require_whole_number(capacity_per_box, "capacity_per_box", minimum=1)
        if quantity is not None:
            _require_whole_number(quantity, "quantity", minimum=1)

        prefix = (box_number_prefix or self.default_prefix).strip()
        if not prefix:
            raise ValidationFailedException("box_number_prefix", "must not be blank")

        snapshot = self.snapshot_store.refresh(location)
        available_item = next(
            (candidate for candidate in resolve_available_items(snapshot) if candidate.item_id == item_id),
            None,
        )
        if available_item is None:
            self.metrics_service.record_allocation("smart", "rejected")
            raise InvalidOperationException(
                f"create boxes for item {item_id} at {location}",
                "it has no stock left to box",
            )

        free_qty = available_item.available_for_boxing
        if quantity is not None and quantity > free_qty:
            self.metrics_service.record_allocation("smart", "rejected")
            raise InsufficientQuantityException(quantity, free_qty, location)

        plan = plan_distribution(quantity if quantity is not None else free_qty, number_of_boxes, capacity_per_box)
        result = SmartCreateResult(location=location, item_id=item_id, plan=plan)

        sequence = snapshot.registry.next_sequence(prefix)
        box_description = description if description is not None else available_item.item_name
        created = 0

        try:
            for box_plan in plan.boxes:
                if box_plan.assigned_qty == 0 and self.skip_empty_boxes:
                    continue

                box = self.source.create_box(
                    location, f"{prefix}-{sequence}", box_description, capacity_per_box, status
                )
                sequence += 1
                created += 1
                self.metrics_service.record_box_created(location, "smart")

                if box_plan.assigned_qty > 0:
                    box = self.ledger_service.add_item(
                        box.id, item_id, box_plan.assigned_qty, refresh_location=False
                    )
                result.boxes.append(box)
        except BusinessLogicException:
            logger.error(
                "Smart create for %s at %s stopped after %d of %d boxes",
                item_id, location, created, len(plan.boxes),
            )
            self.metrics_service.record_allocation("smart", "failed")
            self.snapshot_store.refresh_after_write(location)
            raise

        if plan.has_shortfall:
            extra_boxes = math.ceil(plan.leftover / capacity_per_box)
            result.shortfall = AllocationShortfall(
                location=location,
                item_id=item_id,
                leftover=plan.leftover,
                additional_boxes_needed=extra_boxes,
                message=(
                    f"{plan.leftover} units of {available_item.item_name or item_id} were not assigned to a box; "
                    f"{extra_boxes} more box(es) of capacity {capacity_per_box} are needed"
                ),
            )
            logger.warning(result.shortfall.message)
            self.metrics_service.record_allocation_shortfall(location, plan.leftover)

        logger.info(
            "Smart create placed %d units of %s into %d boxes at %s (leftover %d)",
            plan.total_assigned, item_id, len(result.boxes), location, plan.leftover,
        )
        self.metrics_service.record_allocation(
            "smart", "partial" if plan.has_shortfall else "success", plan.total_assigned
        )
        self.snapshot_store.refresh_after_write(location)
        return result

    def add_to_existing(self, box_id: str | None, item_id: str, quantity: int, notes: str = "") -> Box:
        """Place stock into one existing box without exceeding its capacity.

        Raises:
            ValidationFailedException: No box selected, no item or quantity <= 0
            InvalidOperationException: The box is inactive
            CapacityExceededException: The quantity exceeds the box's free space
        """
        if not box_id or not str(box_id).strip():
            raise ValidationFailedException("box_id", "no box selected")
        if not item_id or not str(item_id).strip():
            raise ValidationFailedException("item_id", "an item must be selected")
        _require_whole_number(quantity, "quantity", minimum=1)

        box = self.source.get_box(box_id)
        if box.status == BoxStatus.INACTIVE:
            self.metrics_service.record_allocation("single", "rejected")
            raise InvalidOperationException(f"add items to box {box.box_number}", "the box is inactive")

        space = available_space(box)
        if quantity > space:
            self.metrics_service.record_allocation("single", "rejected")
            raise CapacityExceededException(box.box_number, quantity, space)

        updated = self.ledger_service.add_item(box.id, item_id, quantity, notes)
        self.metrics_service.record_allocation("single", "success", quantity)
        return updated


def _require_whole_number(value: int, field: str, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationFailedException(field, "must be a whole number")
    if value < minimum:
        reason = "must not be negative" if minimum == 0 else f"must be at least {minimum}"
        raise ValidationFailedException(field, reason)
