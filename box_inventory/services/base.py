"""Base service class with common functionality."""

from abc import ABC

from box_inventory.services.inventory_source import InventorySource


class BaseService(ABC):
    """Abstract base class for all services."""
    
    def __init__(self, source: InventorySource):
        """Initialize service with the inventory backend client.
        
        Args:
            source: Client for the external inventory backend
        """
        self.source = source
