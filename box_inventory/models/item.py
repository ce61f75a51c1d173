"""Item and stock record models owned by the inventory backend."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Item:
    """Catalogue item referenced by boxes; never created by this service."""

    id: str
    name: str
    unit: str = ""
    category: str = ""


@dataclass(frozen=True)
class InventoryRecord:
    """Total quantity of one item held at a storage location."""

    item: Item
    quantity: int

    @property
    def item_id(self) -> str:
        return self.item.id
