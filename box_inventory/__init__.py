"""Flask application factory for the inventory box allocation service."""

from typing import TYPE_CHECKING

from flask_cors import CORS

if TYPE_CHECKING:
    from box_inventory.config import Settings

from box_inventory.app import App
from box_inventory.config import get_settings
from box_inventory.services.container import ServiceContainer


def create_app(settings: "Settings | None" = None) -> App:
    """Create and configure Flask application."""
    app = App(__name__)

    # Load configuration
    if settings is None:
        settings = get_settings()

    app.config.from_object(settings)

    # Initialize SpecTree for OpenAPI docs
    from box_inventory.utils.spectree_config import configure_spectree

    configure_spectree(app)

    # Initialize service container after SpecTree
    container = ServiceContainer()
    container.config.override(settings)

    wire_modules = [
        'box_inventory.api.boxes', 'box_inventory.api.locations',
        'box_inventory.api.metrics', 'box_inventory.api.health',
    ]

    container.wire(modules=wire_modules)

    app.container = container

    # Configure CORS
    CORS(app, origins=settings.CORS_ORIGINS)

    # Initialize Flask-Log-Request-ID for correlation tracking
    from flask_log_request_id import RequestID
    RequestID(app)

    # Register error handlers
    from box_inventory.utils.flask_error_handlers import register_error_handlers

    register_error_handlers(app)

    # Register main API blueprint
    from box_inventory.api import api_bp

    app.register_blueprint(api_bp)

    # Register Prometheus collectors up front so /metrics lists them before first use
    container.metrics_service()
    app.logger.info(
        "Box allocation service configured against %s", settings.INVENTORY_API_URL
    )

    return app
