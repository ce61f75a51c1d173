"""Domain-specific exceptions with user-ready messages for box allocation."""


class BusinessLogicException(Exception):
    """Base exception class for business logic errors.

    All business logic exceptions include user-ready messages that can be
    displayed directly in the UI without client-side message construction.
    """

    def __init__(self, message: str, error_code: str) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ValidationFailedException(BusinessLogicException):
    """Exception raised when a request field fails local validation."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        message = f"Invalid {field}: {reason}"
        super().__init__(message, error_code="VALIDATION_FAILED")


class RecordNotFoundException(BusinessLogicException):
    """Exception raised when a requested record is not found."""

    def __init__(self, resource_type: str, identifier: str | int) -> None:
        message = f"{resource_type} {identifier} was not found"
        super().__init__(message, error_code="RECORD_NOT_FOUND")


class ResourceConflictException(BusinessLogicException):
    """Exception raised when attempting to create a resource that already exists."""

    def __init__(self, resource_type: str, identifier: str | int) -> None:
        message = f"A {resource_type.lower()} with {identifier} already exists"
        super().__init__(message, error_code="RESOURCE_CONFLICT")


class InsufficientQuantityException(BusinessLogicException):
    """Exception raised when there's not enough quantity available for an operation."""

    def __init__(self, requested: int, available: int, location: str = "") -> None:
        self.requested = requested
        self.available = available
        location_text = f" at {location}" if location else ""
        message = f"Not enough stock available for boxing{location_text} (requested {requested}, have {available})"
        super().__init__(message, error_code="INSUFFICIENT_QUANTITY")


class CapacityExceededException(BusinessLogicException):
    """Exception raised when a box capacity would be exceeded."""

    def __init__(self, box_number: str, requested: int, available_space: int) -> None:
        self.box_number = box_number
        self.requested = requested
        self.available_space = available_space
        message = (
            f"Box {box_number} only has space for {available_space} more units "
            f"(requested {requested})"
        )
        super().__init__(message, error_code="CAPACITY_EXCEEDED")


class InvalidOperationException(BusinessLogicException):
    """Exception raised when an operation cannot be performed due to business rules."""

    def __init__(self, operation: str, cause: str) -> None:
        self.operation = operation
        self.cause = cause
        message = f"Cannot {operation} because {cause}"
        super().__init__(message, error_code="INVALID_OPERATION")


class ConfirmationRequiredException(BusinessLogicException):
    """Exception raised when a destructive operation was issued without confirmation."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        message = f"Confirmation is required to {operation}"
        super().__init__(message, error_code="CONFIRMATION_REQUIRED")


class RemoteServiceException(BusinessLogicException):
    """Exception raised when the inventory backend rejects or fails a request."""

    def __init__(self, operation: str, detail: str, status_code: int | None = None) -> None:
        self.operation = operation
        self.detail = detail
        self.status_code = status_code
        message = f"Inventory backend failed to {operation}: {detail}"
        super().__init__(message, error_code="REMOTE_ERROR")


class InventorySourceUnavailableException(RemoteServiceException):
    """Exception raised when the inventory backend cannot be reached at all."""

    def __init__(self, operation: str, detail: str = "could not connect to the inventory backend") -> None:
        super().__init__(operation, detail)
        self.error_code = "REMOTE_UNAVAILABLE"
