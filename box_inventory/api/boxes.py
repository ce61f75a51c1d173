"""Box management API endpoints."""

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from box_inventory.schemas.allocation import AddToExistingSchema
from box_inventory.schemas.box import (
    BoxItemAddSchema,
    BoxItemUpdateSchema,
    BoxResponseSchema,
    BoxSearchQuerySchema,
    BoxUpdateSchema,
    BoxUsageSchema,
)
from box_inventory.schemas.common import ConfirmQuerySchema, ErrorResponseSchema
from box_inventory.services.container import ServiceContainer
from box_inventory.utils.error_handling import handle_api_errors
from box_inventory.utils.spectree_config import api

boxes_bp = Blueprint("boxes", __name__, url_prefix="/boxes")


@boxes_bp.route("/search", methods=["GET"])
@api.validate(query=BoxSearchQuerySchema, resp=SpectreeResponse(HTTP_200=list[BoxResponseSchema]))
@handle_api_errors
@inject
def search_boxes(box_service=Provide[ServiceContainer.box_service]):
    """Search boxes by box number or item name."""
    query = BoxSearchQuerySchema.model_validate(request.args.to_dict())
    boxes = box_service.search_boxes(query.query, location=query.location)
    return [BoxResponseSchema.from_box(box).model_dump(mode="json") for box in boxes]


@boxes_bp.route("/<box_id>", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=BoxResponseSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def get_box(box_id: str, box_service=Provide[ServiceContainer.box_service]):
    """Get box details with contents and utilization."""
    box = box_service.get_box(box_id)
    return BoxResponseSchema.from_box(box).model_dump(mode="json")


@boxes_bp.route("/<box_id>", methods=["PUT"])
@api.validate(
    json=BoxUpdateSchema,
    resp=SpectreeResponse(
        HTTP_200=BoxResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
        HTTP_409=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def update_box(box_id: str, box_service=Provide[ServiceContainer.box_service]):
    """Update box details; lowering capacity below the contents is allowed."""
    data = BoxUpdateSchema.model_validate(request.get_json())
    box = box_service.update_box(box_id, **data.model_dump(exclude_unset=True))
    return BoxResponseSchema.from_box(box).model_dump(mode="json")


@boxes_bp.route("/<box_id>", methods=["DELETE"])
@api.validate(
    query=ConfirmQuerySchema,
    resp=SpectreeResponse(HTTP_204=None, HTTP_404=ErrorResponseSchema, HTTP_428=ErrorResponseSchema),
)
@handle_api_errors
@inject
def delete_box(box_id: str, box_service=Provide[ServiceContainer.box_service]):
    """Delete a box and its contents; requires ``confirm=true``."""
    query = ConfirmQuerySchema.model_validate(request.args.to_dict())
    box_service.delete_box(box_id, confirm=query.confirm)
    return "", 204


@boxes_bp.route("/<box_id>/usage", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=BoxUsageSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def get_box_usage(box_id: str, box_service=Provide[ServiceContainer.box_service]):
    """Get usage statistics for a specific box."""
    usage = box_service.get_box_usage(box_id)
    return BoxUsageSchema.model_validate(usage).model_dump()


@boxes_bp.route("/<box_id>/allocate", methods=["POST"])
@api.validate(
    json=AddToExistingSchema,
    resp=SpectreeResponse(
        HTTP_200=BoxResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
        HTTP_409=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def allocate_to_box(box_id: str, allocation_service=Provide[ServiceContainer.allocation_service]):
    """Place stock into an existing box; rejected when it does not fit."""
    data = AddToExistingSchema.model_validate(request.get_json())
    box = allocation_service.add_to_existing(box_id, data.item_id, data.quantity, notes=data.notes)
    return BoxResponseSchema.from_box(box).model_dump(mode="json")


@boxes_bp.route("/<box_id>/items", methods=["POST"])
@api.validate(
    json=BoxItemAddSchema,
    resp=SpectreeResponse(
        HTTP_201=BoxResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
        HTTP_409=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def add_box_item(box_id: str, box_ledger_service=Provide[ServiceContainer.box_ledger_service]):
    """Record an item entry in a box."""
    data = BoxItemAddSchema.model_validate(request.get_json())
    box = box_ledger_service.add_item(
        box_id, data.item_id, data.quantity, notes=data.notes, allow_overfill=data.allow_overfill
    )
    return BoxResponseSchema.from_box(box).model_dump(mode="json"), 201


@boxes_bp.route("/<box_id>/items/<item_id>", methods=["PUT"])
@api.validate(
    json=BoxItemUpdateSchema,
    resp=SpectreeResponse(
        HTTP_200=BoxResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
        HTTP_409=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def update_box_item(box_id: str, item_id: str, box_ledger_service=Provide[ServiceContainer.box_ledger_service]):
    """Overwrite the quantity of an item entry in a box."""
    data = BoxItemUpdateSchema.model_validate(request.get_json())
    box = box_ledger_service.set_item_quantity(
        box_id, item_id, data.quantity, allow_overfill=data.allow_overfill
    )
    return BoxResponseSchema.from_box(box).model_dump(mode="json")


@boxes_bp.route("/<box_id>/items/<item_id>", methods=["DELETE"])
@api.validate(
    query=ConfirmQuerySchema,
    resp=SpectreeResponse(HTTP_200=BoxResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_428=ErrorResponseSchema),
)
@handle_api_errors
@inject
def remove_box_item(box_id: str, item_id: str, box_ledger_service=Provide[ServiceContainer.box_ledger_service]):
    """Remove an item entry from a box; requires ``confirm=true``."""
    query = ConfirmQuerySchema.model_validate(request.args.to_dict())
    box = box_ledger_service.remove_item(box_id, item_id, confirm=query.confirm)
    return BoxResponseSchema.from_box(box).model_dump(mode="json")
