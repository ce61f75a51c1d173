"""Health check endpoints for Kubernetes probes."""

from flask import Blueprint, jsonify
from spectree import Response as SpectreeResponse

from box_inventory.schemas.common import HealthResponse
from box_inventory.utils.spectree_config import api

health_bp = Blueprint("health", __name__, url_prefix="/health")


@health_bp.route("/healthz", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=HealthResponse))
def healthz():
    """Liveness probe endpoint for Kubernetes.

    Always returns 200; the inventory backend is not contacted.
    """
    return jsonify({"status": "alive", "ready": True}), 200
