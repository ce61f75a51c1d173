"""Location scoped endpoints: available stock, box listing and bulk allocation."""

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from box_inventory.schemas.allocation import SmartCreateResponseSchema, SmartCreateSchema
from box_inventory.schemas.availability import AvailableItemSchema, AvailableItemsQuerySchema
from box_inventory.schemas.box import (
    BoxCreateSchema,
    BoxListQuerySchema,
    BoxResponseSchema,
    BoxStatsSchema,
)
from box_inventory.schemas.common import ErrorResponseSchema
from box_inventory.services.container import ServiceContainer
from box_inventory.utils.error_handling import handle_api_errors
from box_inventory.utils.spectree_config import api

locations_bp = Blueprint("locations", __name__, url_prefix="/locations")


@locations_bp.route("/<location>/available-items", methods=["GET"])
@api.validate(
    query=AvailableItemsQuerySchema,
    resp=SpectreeResponse(HTTP_200=list[AvailableItemSchema], HTTP_502=ErrorResponseSchema),
)
@handle_api_errors
@inject
def list_available_items(location: str, availability_service=Provide[ServiceContainer.availability_service]):
    """List items at a location that still have stock to place into boxes."""
    query = AvailableItemsQuerySchema.model_validate(request.args.to_dict())
    items = availability_service.available_items(location, refresh=query.refresh)
    return [AvailableItemSchema.model_validate(item).model_dump() for item in items]


@locations_bp.route("/<location>/boxes", methods=["GET"])
@api.validate(
    query=BoxListQuerySchema,
    resp=SpectreeResponse(HTTP_200=list[BoxResponseSchema], HTTP_400=ErrorResponseSchema, HTTP_502=ErrorResponseSchema),
)
@handle_api_errors
@inject
def list_boxes(location: str, box_service=Provide[ServiceContainer.box_service]):
    """List the boxes of a location.

    Query parameters:
    - status: Only boxes with this status
    - sort_by: box_number, location, item_count, capacity or utilization
    - order: asc or desc
    - refresh: Re-read the location from the inventory backend first
    """
    query = BoxListQuerySchema.model_validate(request.args.to_dict())
    boxes = box_service.list_boxes(
        location,
        status=query.status,
        sort_by=query.sort_by,
        descending=query.order == "desc",
        refresh=query.refresh,
    )
    return [BoxResponseSchema.from_box(box).model_dump(mode="json") for box in boxes]


@locations_bp.route("/<location>/boxes", methods=["POST"])
@api.validate(
    json=BoxCreateSchema,
    resp=SpectreeResponse(HTTP_201=BoxResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_409=ErrorResponseSchema),
)
@handle_api_errors
@inject
def create_box(location: str, box_service=Provide[ServiceContainer.box_service]):
    """Create an empty box at a location."""
    # Spectree validates the request, but we still need to access the data
    data = BoxCreateSchema.model_validate(request.get_json())
    box = box_service.create_box(
        location,
        data.box_number,
        capacity=data.capacity,
        description=data.description,
        status=data.status,
    )
    return BoxResponseSchema.from_box(box).model_dump(mode="json"), 201


@locations_bp.route("/<location>/boxes/stats", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=BoxStatsSchema, HTTP_502=ErrorResponseSchema))
@handle_api_errors
@inject
def get_box_stats(location: str, box_service=Provide[ServiceContainer.box_service]):
    """Get box summary statistics for a location."""
    stats = box_service.get_location_stats(location)
    return BoxStatsSchema.model_validate(stats).model_dump()


@locations_bp.route("/<location>/smart-create", methods=["POST"])
@api.validate(
    json=SmartCreateSchema,
    resp=SpectreeResponse(
        HTTP_201=SmartCreateResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_409=ErrorResponseSchema,
        HTTP_502=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def smart_create(location: str, allocation_service=Provide[ServiceContainer.allocation_service]):
    """Create several boxes and fill them from one item's free stock.

    Stock that does not fit into the requested boxes stays available for
    boxing and is reported in the ``shortfall`` field.
    """
    data = SmartCreateSchema.model_validate(request.get_json())
    result = allocation_service.smart_create(
        location,
        data.item_id,
        number_of_boxes=data.number_of_boxes,
        capacity_per_box=data.capacity_per_box,
        quantity=data.quantity,
        description=data.description,
        box_number_prefix=data.box_number_prefix,
        status=data.status,
    )
    return SmartCreateResponseSchema.from_result(result).model_dump(mode="json"), 201
