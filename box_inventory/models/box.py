"""Box model for capacity-bounded item containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class BoxStatus(str, Enum):
    """Administrative status of a box.

    Status is only ever set explicitly; it is not derived from utilization,
    so a completely filled box may still be ``Active``.
    """

    ACTIVE = "Active"
    FULL = "Full"
    INACTIVE = "Inactive"


@dataclass
class BoxItemEntry:
    """Quantity of a single item stored in a box.

    ``item_name`` is a display copy taken when the entry was read; renames of
    the underlying item are not propagated to existing entries.
    """

    item_id: str
    item_name: str
    quantity: int
    notes: str = ""


@dataclass
class Box:
    """Container at one storage location holding quantities of items."""

    id: str
    box_number: str
    location: str
    capacity: int
    status: BoxStatus = BoxStatus.ACTIVE
    description: str = ""
    items: list[BoxItemEntry] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def key(self) -> tuple[str, str]:
        """Composite registry key; box numbers are unique per location only."""
        return (self.location, self.box_number)

    @property
    def item_count(self) -> int:
        return len(self.items)

    def find_entry(self, item_id: str) -> BoxItemEntry | None:
        """Return the entry for an item, if the box holds one."""
        for entry in self.items:
            if entry.item_id == item_id:
                return entry
        return None

    def quantity_of(self, item_id: str) -> int:
        entry = self.find_entry(item_id)
        return entry.quantity if entry else 0

    def __repr__(self) -> str:
        return f"<Box {self.location}/{self.box_number}: {self.description}>"
