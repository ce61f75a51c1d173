"""Schemas for stock available for boxing."""

from pydantic import BaseModel, ConfigDict, Field


class AvailableItemSchema(BaseModel):
    """Schema for an item with stock that is not yet assigned to a box."""

    item_id: str = Field(
        description="Identifier of the item",
        json_schema_extra={"example": "65a1f0c2e4b0a1b2c3d4e5f6"}
    )
    item_name: str = Field(
        description="Item name",
        json_schema_extra={"example": "USB-C Charger"}
    )
    unit: str = Field(
        description="Unit of measure",
        json_schema_extra={"example": "pcs"}
    )
    category: str = Field(
        description="Item category",
        json_schema_extra={"example": "Accessories"}
    )
    total_quantity: int = Field(
        description="Total stock of the item at the location",
        json_schema_extra={"example": 100}
    )
    quantity_in_boxes: int = Field(
        description="Units already assigned to boxes at the location",
        json_schema_extra={"example": 40}
    )
    available_for_boxing: int = Field(
        description="Units that can still be placed into boxes",
        json_schema_extra={"example": 60}
    )

    model_config = ConfigDict(from_attributes=True)


class AvailableItemsQuerySchema(BaseModel):
    """Query parameters for listing available items."""

    refresh: bool = Field(
        default=False,
        description="Re-read the location from the inventory backend first",
        json_schema_extra={"example": True}
    )
