"""Domain models for box allocation."""

from box_inventory.models.box import Box, BoxItemEntry, BoxStatus
from box_inventory.models.item import InventoryRecord, Item
from box_inventory.models.registry import BoxRegistry, LocationSnapshot

__all__ = [
    "Box",
    "BoxItemEntry",
    "BoxRegistry",
    "BoxStatus",
    "InventoryRecord",
    "Item",
    "LocationSnapshot",
]
