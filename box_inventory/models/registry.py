"""In-memory box registry and location snapshot."""

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime

from box_inventory.models.box import Box
from box_inventory.models.item import InventoryRecord

logger = logging.getLogger(__name__)


class BoxRegistry:
    """Boxes of a single storage location indexed by id and box number.

    Boxes reported for any other location are dropped so that box contents
    from different locations are never combined.
    """

    def __init__(self, location: str, boxes: Iterable[Box] = ()) -> None:
        self.location = location
        self._by_id: dict[str, Box] = {}
        self._by_key: dict[tuple[str, str], Box] = {}

        for box in boxes:
            if box.location != location:
                logger.debug(
                    "Ignoring box %s from location %s in registry for %s",
                    box.id, box.location, location,
                )
                continue
            self._by_id[box.id] = box
            self._by_key[box.key] = box

    def __iter__(self) -> Iterator[Box]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, box_id: object) -> bool:
        return box_id in self._by_id

    @property
    def boxes(self) -> list[Box]:
        return list(self._by_id.values())

    def get(self, box_id: str) -> Box | None:
        return self._by_id.get(box_id)

    def find_by_number(self, box_number: str) -> Box | None:
        """Look up a box by its number within this location."""
        return self._by_key.get((self.location, box_number))

    def quantity_in_boxes(self, item_id: str) -> int:
        """Sum of an item's quantity across every box at this location."""
        return sum(box.quantity_of(item_id) for box in self)

    def next_sequence(self, prefix: str) -> int:
        """Next free number for box numbers of the form ``{prefix}-{n}``."""
        pattern = re.compile(rf"^{re.escape(prefix)}-(\d+)$", re.IGNORECASE)
        highest = 0
        for box in self:
            match = pattern.match(box.box_number)
            if match:
                highest = max(highest, int(match.group(1)))
        return highest + 1


@dataclass
class LocationSnapshot:
    """Inventory totals and boxes of one location as read from the backend."""

    location: str
    inventory: list[InventoryRecord]
    registry: BoxRegistry
    fetched_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def total_quantity(self, item_id: str) -> int:
        return sum(record.quantity for record in self.inventory if record.item_id == item_id)

    def find_record(self, item_id: str) -> InventoryRecord | None:
        for record in self.inventory:
            if record.item_id == item_id:
                return record
        return None

    def age_seconds(self, now: datetime | None = None) -> float:
        now = now or datetime.now(UTC)
        return (now - self.fetched_at).total_seconds()
