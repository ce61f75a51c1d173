"""Centralized error handling utilities."""

import functools
import logging
from collections.abc import Callable
from typing import Any

from flask import jsonify
from flask.wrappers import Response
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from box_inventory.exceptions import (
    BusinessLogicException,
    CapacityExceededException,
    ConfirmationRequiredException,
    InsufficientQuantityException,
    InvalidOperationException,
    InventorySourceUnavailableException,
    RecordNotFoundException,
    RemoteServiceException,
    ResourceConflictException,
    ValidationFailedException,
)
from box_inventory.utils import get_current_correlation_id

logger = logging.getLogger(__name__)


def _error_response(error: BusinessLogicException, message: str, status: int) -> tuple[Response, int]:
    return jsonify({
        "error": error.message,
        "details": {"message": message},
        "code": error.error_code,
    }), status


def handle_api_errors(func: Callable[..., Any]) -> Callable[..., Response | tuple[Response | str, int]]:
    """Decorator to handle common API errors consistently.

    Maps pydantic validation errors and the domain exceptions to HTTP status
    codes with a uniform ``{"error", "details", "code"}`` body.
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except BadRequest:
            # JSON parsing errors from request.get_json()
            return jsonify({
                "error": "Invalid JSON",
                "details": {"message": "Request body must be valid JSON"}
            }), 400
        except ValidationError as e:
            error_details = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                error_details.append({
                    "message": error["msg"],
                    "field": field
                })

            return jsonify({
                "error": "Validation failed",
                "details": error_details
            }), 400

        except ValidationFailedException as e:
            return jsonify({
                "error": e.message,
                "details": [{"message": e.reason, "field": e.field}],
                "code": e.error_code,
            }), 400

        except RecordNotFoundException as e:
            return _error_response(e, "The requested resource could not be found", 404)

        except ResourceConflictException as e:
            return _error_response(e, "A resource with those details already exists", 409)

        except InsufficientQuantityException as e:
            return _error_response(e, "The requested quantity is not available for boxing", 409)

        except CapacityExceededException as e:
            return _error_response(e, "The operation would exceed the box capacity", 409)

        except InvalidOperationException as e:
            return _error_response(e, "The requested operation cannot be performed", 409)

        except ConfirmationRequiredException as e:
            return _error_response(e, "Repeat the request with confirm=true to proceed", 428)

        except InventorySourceUnavailableException as e:
            logger.warning("Inventory backend unavailable [%s]: %s", get_current_correlation_id(), e.message)
            return _error_response(e, "The inventory backend could not be reached", 502)

        except RemoteServiceException as e:
            logger.warning("Inventory backend error [%s]: %s", get_current_correlation_id(), e.message)
            return _error_response(e, "The inventory backend rejected the request", 502)

        except BusinessLogicException as e:
            # Fallback for other domain exceptions
            return _error_response(e, "A box operation failed", 400)

        except Exception as e:
            logger.exception("Unhandled error [%s]", get_current_correlation_id())
            return jsonify({
                "error": "Internal server error",
                "details": {"message": str(e)}
            }), 500

    return wrapper
