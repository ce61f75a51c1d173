"""Pytest configuration and fixtures."""

import pytest
from dependency_injector import providers
from flask import Flask
from prometheus_client import REGISTRY

from box_inventory import create_app
from box_inventory.config import Settings
from box_inventory.services.allocation_service import AllocationService
from box_inventory.services.availability_service import AvailabilityService
from box_inventory.services.box_ledger_service import BoxLedgerService
from box_inventory.services.box_service import BoxService
from box_inventory.services.container import ServiceContainer
from box_inventory.services.snapshot_store import SnapshotStore
from tests.testing_utils import FakeInventorySource, StubMetricsService


@pytest.fixture(autouse=True)
def clear_prometheus_registry():
    """Clear Prometheus registry before and after each test to ensure isolation.

    This is necessary for tests that create multiple Flask app instances or services
    that register Prometheus metrics, as metrics cannot be registered twice in the
    same registry.
    """
    collectors = list(REGISTRY._collector_to_names.keys())
    for collector in collectors:
        try:
            REGISTRY.unregister(collector)
        except (KeyError, ValueError):
            pass
    yield
    collectors = list(REGISTRY._collector_to_names.keys())
    for collector in collectors:
        try:
            REGISTRY.unregister(collector)
        except (KeyError, ValueError):
            pass


def _build_test_settings() -> Settings:
    """Construct base Settings object for tests."""
    return Settings(
        SECRET_KEY="test-secret-key",
        DEBUG=True,
        FLASK_ENV="testing",
        CORS_ORIGINS=["http://localhost:3000"],
        INVENTORY_API_URL="http://inventory.test/api",
        INVENTORY_API_TOKEN="",
        SNAPSHOT_MAX_AGE_SECONDS=0,
        SMART_CREATE_SKIP_EMPTY_BOXES=False,
        LEDGER_ENFORCE_CAPACITY=False,
    )


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings pointing at a fake inventory backend."""
    return _build_test_settings()


@pytest.fixture
def fake_source() -> FakeInventorySource:
    """In-memory inventory backend."""
    return FakeInventorySource()


@pytest.fixture
def metrics_stub() -> StubMetricsService:
    """Metrics service stub that records calls."""
    return StubMetricsService()


@pytest.fixture
def snapshot_store(fake_source: FakeInventorySource, metrics_stub: StubMetricsService) -> SnapshotStore:
    """Snapshot store that re-reads the backend on every access."""
    return SnapshotStore(fake_source, metrics_stub, max_age_seconds=0)


@pytest.fixture
def availability_service(snapshot_store: SnapshotStore) -> AvailabilityService:
    return AvailabilityService(snapshot_store)


@pytest.fixture
def ledger_service(
    fake_source: FakeInventorySource, snapshot_store: SnapshotStore, metrics_stub: StubMetricsService
) -> BoxLedgerService:
    return BoxLedgerService(fake_source, snapshot_store, metrics_stub)


@pytest.fixture
def allocation_service(
    fake_source: FakeInventorySource,
    snapshot_store: SnapshotStore,
    ledger_service: BoxLedgerService,
    metrics_stub: StubMetricsService,
) -> AllocationService:
    return AllocationService(fake_source, snapshot_store, ledger_service, metrics_stub)


@pytest.fixture
def box_service(
    fake_source: FakeInventorySource, snapshot_store: SnapshotStore, metrics_stub: StubMetricsService
) -> BoxService:
    return BoxService(fake_source, snapshot_store, metrics_stub)


@pytest.fixture
def app(test_settings: Settings, fake_source: FakeInventorySource) -> Flask:
    """Create Flask app for testing backed by the in-memory inventory backend."""
    app = create_app(test_settings)
    app.container.inventory_source.override(providers.Object(fake_source))
    return app


@pytest.fixture
def client(app: Flask):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def container(app: Flask) -> ServiceContainer:
    """Access to the DI container for testing."""
    return app.container
