"""Utilization and overfill calculations for box snapshots.

All functions are pure and operate on a ``Box`` as read from the backend.
"""

from dataclasses import dataclass

from box_inventory.models.box import Box

WARNING_THRESHOLD_PERCENT = 80.0
ERROR_THRESHOLD_PERCENT = 100.0


@dataclass(frozen=True)
class BoxUsage:
    """Derived fill statistics for one box."""

    box_id: str
    box_number: str
    capacity: int
    total_quantity: int
    available_space: int
    utilization_percent: float
    is_overfilled: bool
    overfill_amount: int
    status_color: str


def total_quantity(box: Box) -> int:
    """Sum of all entry quantities in the box."""
    return sum(entry.quantity for entry in box.items)


def _fill_ratio_percent(box: Box) -> float:
    if box.capacity <= 0:
        return 0.0
    return total_quantity(box) * 100 / box.capacity


def utilization_percent(box: Box) -> float:
    """Fill percentage rounded to one decimal; 0 when the box has no capacity."""
    return round(_fill_ratio_percent(box), 1)


def is_overfilled(box: Box) -> bool:
    return total_quantity(box) > box.capacity


def overfill_amount(box: Box) -> int:
    return max(0, total_quantity(box) - box.capacity)


def available_space(box: Box) -> int:
    """Units that can still be added without exceeding capacity."""
    return max(0, box.capacity - total_quantity(box))


def status_color(utilization: float) -> str:
    """Advisory UI color for an unrounded utilization percentage."""
    if utilization >= ERROR_THRESHOLD_PERCENT:
        return "error"
    if utilization >= WARNING_THRESHOLD_PERCENT:
        return "warning"
    return "success"


def calculate_usage(box: Box) -> BoxUsage:
    """Bundle every derived statistic for a box."""
    ratio = _fill_ratio_percent(box)
    return BoxUsage(
        box_id=box.id,
        box_number=box.box_number,
        capacity=box.capacity,
        total_quantity=total_quantity(box),
        available_space=available_space(box),
        utilization_percent=round(ratio, 1),
        is_overfilled=is_overfilled(box),
        overfill_amount=overfill_amount(box),
        status_color=status_color(ratio),
    )
