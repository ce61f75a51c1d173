"""Box schemas for request/response validation."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from box_inventory.models.box import Box, BoxStatus
from box_inventory.utils.utilization import calculate_usage


class BoxCreateSchema(BaseModel):
    """Schema for creating a new box at a location."""

    box_number: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Box number, unique within the location",
        json_schema_extra={"example": "BOX-12"}
    )
    capacity: int | None = Field(
        default=None,
        gt=0,
        description="Maximum number of units the box is meant to hold; defaults to the configured capacity",
        json_schema_extra={"example": 50}
    )
    description: str = Field(
        default="",
        max_length=500,
        description="Notes about the box or its contents",
        json_schema_extra={"example": "Phone chargers, top shelf"}
    )
    status: BoxStatus = Field(
        default=BoxStatus.ACTIVE,
        description="Administrative status of the box",
        json_schema_extra={"example": "Active"}
    )


class BoxUpdateSchema(BaseModel):
    """Schema for updating an existing box; omitted fields are left unchanged."""

    box_number: str | None = Field(
        default=None,
        min_length=1,
        max_length=100,
        description="Updated box number",
        json_schema_extra={"example": "BOX-13"}
    )
    location: str | None = Field(
        default=None,
        min_length=1,
        description="Move the box to another storage location",
        json_schema_extra={"example": "Warehouse"}
    )
    description: str | None = Field(
        default=None,
        max_length=500,
        description="Updated description",
        json_schema_extra={"example": "Spare cables"}
    )
    capacity: int | None = Field(
        default=None,
        gt=0,
        description="Updated capacity",
        json_schema_extra={"example": 80}
    )
    status: BoxStatus | None = Field(
        default=None,
        description="Updated administrative status",
        json_schema_extra={"example": "Full"}
    )


class BoxListQuerySchema(BaseModel):
    """Query parameters for listing the boxes of a location."""

    status: BoxStatus | None = Field(
        default=None,
        description="Only return boxes with this status",
        json_schema_extra={"example": "Active"}
    )
    sort_by: Literal["box_number", "location", "item_count", "capacity", "utilization"] = Field(
        default="box_number",
        description="Sort key",
        json_schema_extra={"example": "capacity"}
    )
    order: Literal["asc", "desc"] = Field(
        default="asc",
        description="Sort direction",
        json_schema_extra={"example": "desc"}
    )
    refresh: bool = Field(
        default=False,
        description="Re-read the location from the inventory backend first",
        json_schema_extra={"example": False}
    )


class BoxSearchQuerySchema(BaseModel):
    """Query parameters for free-text box search."""

    query: str = Field(
        default="",
        description="Text matched against box numbers and item names",
        json_schema_extra={"example": "charger"}
    )
    location: str | None = Field(
        default=None,
        description="Only return boxes at this location",
        json_schema_extra={"example": "Store"}
    )


class BoxItemEntrySchema(BaseModel):
    """Schema for one item entry inside a box."""

    item_id: str = Field(
        description="Identifier of the item",
        json_schema_extra={"example": "65a1f0c2e4b0a1b2c3d4e5f6"}
    )
    item_name: str = Field(
        description="Item name as recorded when the entry was read",
        json_schema_extra={"example": "USB-C Charger"}
    )
    quantity: int = Field(
        description="Units of the item in the box",
        json_schema_extra={"example": 20}
    )
    notes: str = Field(
        description="Free-form notes for the entry",
        json_schema_extra={"example": "Returned stock"}
    )

    model_config = ConfigDict(from_attributes=True)


class BoxUsageSchema(BaseModel):
    """Schema for box utilization statistics."""

    box_id: str = Field(description="Box identifier", json_schema_extra={"example": "65a1f0c2e4b0a1b2c3d4e5f7"})
    box_number: str = Field(description="Box number", json_schema_extra={"example": "BOX-12"})
    capacity: int = Field(description="Box capacity", json_schema_extra={"example": 50})
    total_quantity: int = Field(
        description="Sum of all item quantities in the box",
        json_schema_extra={"example": 40}
    )
    available_space: int = Field(
        description="Units that still fit without exceeding capacity",
        json_schema_extra={"example": 10}
    )
    utilization_percent: float = Field(
        description="Total quantity as a percentage of capacity",
        json_schema_extra={"example": 80.0}
    )
    is_overfilled: bool = Field(
        description="Whether the box holds more than its capacity",
        json_schema_extra={"example": False}
    )
    overfill_amount: int = Field(
        description="Units above capacity",
        json_schema_extra={"example": 0}
    )
    status_color: Literal["success", "warning", "error"] = Field(
        description="Advisory color for displaying utilization",
        json_schema_extra={"example": "warning"}
    )

    model_config = ConfigDict(from_attributes=True)


class BoxResponseSchema(BaseModel):
    """Schema for full box details with contents and utilization."""

    id: str = Field(description="Box identifier", json_schema_extra={"example": "65a1f0c2e4b0a1b2c3d4e5f7"})
    box_number: str = Field(description="Box number, unique within the location", json_schema_extra={"example": "BOX-12"})
    location: str = Field(description="Storage location of the box", json_schema_extra={"example": "Store"})
    description: str = Field(description="Notes about the box", json_schema_extra={"example": "Phone chargers"})
    capacity: int = Field(description="Box capacity in units", json_schema_extra={"example": 50})
    status: BoxStatus = Field(description="Administrative status", json_schema_extra={"example": "Active"})
    items: list[BoxItemEntrySchema] = Field(description="Item entries held by the box")
    created_at: datetime | None = Field(
        default=None,
        description="Timestamp when the box was created",
        json_schema_extra={"example": "2024-01-15T10:30:00Z"}
    )
    updated_at: datetime | None = Field(
        default=None,
        description="Timestamp when the box was last modified",
        json_schema_extra={"example": "2024-01-15T14:45:00Z"}
    )
    usage: BoxUsageSchema = Field(description="Derived utilization statistics")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_box(cls, box: Box) -> "BoxResponseSchema":
        return cls(
            id=box.id,
            box_number=box.box_number,
            location=box.location,
            description=box.description,
            capacity=box.capacity,
            status=box.status,
            items=[BoxItemEntrySchema.model_validate(entry) for entry in box.items],
            created_at=box.created_at,
            updated_at=box.updated_at,
            usage=BoxUsageSchema.model_validate(calculate_usage(box)),
        )


class BoxStatsSchema(BaseModel):
    """Schema for box summary statistics at a location."""

    location: str = Field(description="Storage location", json_schema_extra={"example": "Store"})
    total_boxes: int = Field(description="Number of boxes", json_schema_extra={"example": 12})
    active_boxes: int = Field(description="Boxes with status Active", json_schema_extra={"example": 9})
    full_boxes: int = Field(description="Boxes with status Full", json_schema_extra={"example": 2})
    inactive_boxes: int = Field(description="Boxes with status Inactive", json_schema_extra={"example": 1})
    overfilled_boxes: int = Field(
        description="Boxes holding more units than their capacity",
        json_schema_extra={"example": 0}
    )
    total_items_stored: int = Field(
        description="Sum of item quantities over all boxes",
        json_schema_extra={"example": 430}
    )
    average_items_per_box: float = Field(
        description="Average units per box",
        json_schema_extra={"example": 35.8}
    )

    model_config = ConfigDict(from_attributes=True)


class BoxItemAddSchema(BaseModel):
    """Schema for recording an item entry in a box without a capacity check."""

    item_id: str = Field(
        ...,
        min_length=1,
        description="Item to record in the box",
        json_schema_extra={"example": "65a1f0c2e4b0a1b2c3d4e5f6"}
    )
    quantity: int = Field(
        ...,
        ge=0,
        description="Units of the item in the box",
        json_schema_extra={"example": 5}
    )
    notes: str = Field(
        default="",
        max_length=500,
        description="Notes for the item entry",
        json_schema_extra={"example": "Counted on arrival"}
    )
    allow_overfill: bool = Field(
        default=False,
        description="Accept the edit even when capacity enforcement is enabled and it would overfill the box",
        json_schema_extra={"example": False}
    )


class BoxItemUpdateSchema(BaseModel):
    """Schema for overwriting the quantity of an item entry."""

    quantity: int = Field(
        ...,
        ge=0,
        description="New quantity of the item in the box",
        json_schema_extra={"example": 12}
    )
    allow_overfill: bool = Field(
        default=False,
        description="Accept the edit even when capacity enforcement is enabled and it would overfill the box",
        json_schema_extra={"example": False}
    )
