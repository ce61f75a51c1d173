"""Services package for the box allocation service."""

from box_inventory.services.allocation_service import AllocationService
from box_inventory.services.availability_service import AvailabilityService
from box_inventory.services.box_ledger_service import BoxLedgerService
from box_inventory.services.box_service import BoxService
from box_inventory.services.container import ServiceContainer

__all__ = [
    "AllocationService",
    "AvailabilityService",
    "BoxLedgerService",
    "BoxService",
    "ServiceContainer",
]
