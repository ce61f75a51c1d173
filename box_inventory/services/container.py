"""Dependency injection container for services."""

from dependency_injector import containers, providers

from box_inventory.config import Settings
from box_inventory.services.allocation_service import AllocationService
from box_inventory.services.availability_service import AvailabilityService
from box_inventory.services.box_ledger_service import BoxLedgerService
from box_inventory.services.box_service import BoxService
from box_inventory.services.inventory_source import HttpInventorySource
from box_inventory.services.metrics_service import MetricsService
from box_inventory.services.snapshot_store import SnapshotStore


class ServiceContainer(containers.DeclarativeContainer):
    """Container for service dependency injection."""

    # Configuration provider
    config = providers.Dependency(instance_of=Settings)

    # Inventory backend client - Singleton sharing one HTTP session
    inventory_source = providers.Singleton(HttpInventorySource, settings=config)

    # Metrics service - Singleton owning the Prometheus collectors
    metrics_service = providers.Singleton(MetricsService)

    # Snapshot store - Singleton holding the current view of each location
    snapshot_store = providers.Singleton(
        SnapshotStore,
        source=inventory_source,
        metrics_service=metrics_service,
        max_age_seconds=config.provided.SNAPSHOT_MAX_AGE_SECONDS,
    )

    # Service providers - Factory creates new instances for each request
    availability_service = providers.Factory(
        AvailabilityService,
        snapshot_store=snapshot_store,
    )
    box_service = providers.Factory(
        BoxService,
        source=inventory_source,
        snapshot_store=snapshot_store,
        metrics_service=metrics_service,
        default_capacity=config.provided.DEFAULT_BOX_CAPACITY,
    )
    box_ledger_service = providers.Factory(
        BoxLedgerService,
        source=inventory_source,
        snapshot_store=snapshot_store,
        metrics_service=metrics_service,
        enforce_capacity=config.provided.LEDGER_ENFORCE_CAPACITY,
    )

    # AllocationService places stock through the ledger
    allocation_service = providers.Factory(
        AllocationService,
        source=inventory_source,
        snapshot_store=snapshot_store,
        ledger_service=box_ledger_service,
        metrics_service=metrics_service,
        skip_empty_boxes=config.provided.SMART_CREATE_SKIP_EMPTY_BOXES,
        default_prefix=config.provided.DEFAULT_BOX_NUMBER_PREFIX,
    )
