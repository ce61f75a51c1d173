"""API blueprints for the box allocation service."""

from flask import Blueprint

# Create main API blueprint
api_bp = Blueprint("api", __name__, url_prefix="/api")


# Import and register all resource blueprints
# Note: Imports are done after api_bp creation to avoid circular imports
from box_inventory.api.boxes import boxes_bp  # noqa: E402
from box_inventory.api.health import health_bp  # noqa: E402
from box_inventory.api.locations import locations_bp  # noqa: E402
from box_inventory.api.metrics import metrics_bp  # noqa: E402

api_bp.register_blueprint(boxes_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(health_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(locations_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(metrics_bp)  # type: ignore[attr-defined]
