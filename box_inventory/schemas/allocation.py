"""Schemas for placing stock into boxes."""

from pydantic import BaseModel, ConfigDict, Field

from box_inventory.models.box import BoxStatus
from box_inventory.schemas.box import BoxResponseSchema
from box_inventory.services.allocation_service import SmartCreateResult


class SmartCreateSchema(BaseModel):
    """Schema for creating several boxes filled from one item's free stock."""

    item_id: str = Field(
        ...,
        min_length=1,
        description="Item to distribute",
        json_schema_extra={"example": "65a1f0c2e4b0a1b2c3d4e5f6"}
    )
    number_of_boxes: int = Field(
        ...,
        ge=1,
        description="How many boxes to create",
        json_schema_extra={"example": 3}
    )
    capacity_per_box: int = Field(
        ...,
        ge=1,
        description="Capacity of each new box",
        json_schema_extra={"example": 50}
    )
    quantity: int | None = Field(
        default=None,
        ge=1,
        description="Units to distribute; defaults to all stock available for boxing",
        json_schema_extra={"example": 120}
    )
    description: str | None = Field(
        default=None,
        max_length=500,
        description="Description for the new boxes; defaults to the item name",
        json_schema_extra={"example": "Chargers overflow"}
    )
    box_number_prefix: str | None = Field(
        default=None,
        min_length=1,
        max_length=50,
        description="Prefix for generated box numbers",
        json_schema_extra={"example": "CHG"}
    )
    status: BoxStatus = Field(
        default=BoxStatus.ACTIVE,
        description="Initial status of the new boxes",
        json_schema_extra={"example": "Active"}
    )


class AddToExistingSchema(BaseModel):
    """Schema for placing stock into one existing box."""

    item_id: str = Field(
        ...,
        min_length=1,
        description="Item to place into the box",
        json_schema_extra={"example": "65a1f0c2e4b0a1b2c3d4e5f6"}
    )
    quantity: int = Field(
        ...,
        gt=0,
        description="Units to add; must fit into the box's free space",
        json_schema_extra={"example": 10}
    )
    notes: str = Field(
        default="",
        max_length=500,
        description="Notes for the item entry",
        json_schema_extra={"example": "From delivery 42"}
    )


class BoxPlanSchema(BaseModel):
    """Schema for the planned quantity of one box."""

    box_number: int = Field(description="1-based position of the box in the plan", json_schema_extra={"example": 1})
    assigned_qty: int = Field(description="Units planned for the box", json_schema_extra={"example": 50})

    model_config = ConfigDict(from_attributes=True)


class DistributionPlanSchema(BaseModel):
    """Schema for a bulk distribution plan."""

    boxes: list[BoxPlanSchema] = Field(description="Planned quantity per box")
    total_assigned: int = Field(description="Units assigned to boxes", json_schema_extra={"example": 150})
    leftover: int = Field(description="Units that did not fit", json_schema_extra={"example": 50})

    model_config = ConfigDict(from_attributes=True)


class AllocationShortfallSchema(BaseModel):
    """Schema for the warning raised when bulk allocation leaves stock unassigned."""

    location: str = Field(description="Storage location", json_schema_extra={"example": "Store"})
    item_id: str = Field(description="Item that was distributed", json_schema_extra={"example": "65a1f0c2e4b0a1b2c3d4e5f6"})
    leftover: int = Field(description="Units still available for boxing", json_schema_extra={"example": 50})
    additional_boxes_needed: int = Field(
        description="Further boxes of the same capacity needed for the leftover",
        json_schema_extra={"example": 1}
    )
    message: str = Field(
        description="Human readable warning",
        json_schema_extra={"example": "50 units of USB-C Charger were not assigned to a box"}
    )

    model_config = ConfigDict(from_attributes=True)


class SmartCreateResponseSchema(BaseModel):
    """Schema for the outcome of a bulk allocation."""

    location: str = Field(description="Storage location", json_schema_extra={"example": "Store"})
    item_id: str = Field(description="Item that was distributed", json_schema_extra={"example": "65a1f0c2e4b0a1b2c3d4e5f6"})
    plan: DistributionPlanSchema = Field(description="The distribution that was applied")
    boxes: list[BoxResponseSchema] = Field(description="Boxes that were created")
    leftover: int = Field(description="Units still available for boxing", json_schema_extra={"example": 0})
    shortfall: AllocationShortfallSchema | None = Field(
        default=None,
        description="Present when not all requested stock could be placed"
    )

    @classmethod
    def from_result(cls, result: SmartCreateResult) -> "SmartCreateResponseSchema":
        return cls(
            location=result.location,
            item_id=result.item_id,
            plan=DistributionPlanSchema.model_validate(result.plan),
            boxes=[BoxResponseSchema.from_box(box) for box in result.boxes],
            leftover=result.leftover,
            shortfall=(
                AllocationShortfallSchema.model_validate(result.shortfall)
                if result.shortfall is not None else None
            ),
        )
