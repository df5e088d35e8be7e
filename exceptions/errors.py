"""
Custom exception classes for the application.

Input shape errors are raised by the adapters before the engine runs.
Schema validation errors are raised by the engine with every problem found.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "SHIPMENT_FILE_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class InvalidInputError(AppError):
    """Request or file content has the wrong shape (400)."""

    def __init__(
        self,
        message: str,
        code: str = "INVALID_INPUT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=400,
            details=details
        )


# ===================
# EVENT VALIDATION
# ===================

class EventValidationError(AppError):
    """
    Event batch failed schema validation (400).

    Carries every error found in the batch, in batch order.
    The batch is rejected as a whole.
    """

    def __init__(self, validation_errors: list[str]):
        self.validation_errors = list(validation_errors)
        super().__init__(
            code="EVENT_VALIDATION_FAILED",
            message="Validation failed",
            status_code=400,
            details={"validation_errors": self.validation_errors}
        )

    def to_rejection(self, file_path: Optional[str] = None) -> dict:
        """
        Rejection body returned to callers unchanged.

        Args:
            file_path: Source file, added when the batch came from a file

        Returns:
            {"error": "Validation failed", "validation_errors": [...]}
        """
        body: dict[str, Any] = {
            "error": self.message,
            "validation_errors": list(self.validation_errors),
        }
        if file_path is not None:
            body["file_path"] = file_path
        return body


# ===================
# SHIPMENT INPUT ERRORS
# ===================

class NoEventsFoundError(InvalidInputError):
    """Shipments contained no events to process."""

    def __init__(self, source: Optional[str] = None):
        super().__init__(
            code="NO_EVENTS_FOUND",
            message="No events found" + (f" in {source}" if source else ""),
            details={"source": source} if source else None
        )


class ShipmentFileNotFoundError(NotFoundError):
    """Shipment file does not exist."""

    def __init__(self, file_path: str):
        super().__init__(
            resource="Shipment file",
            identifier=file_path,
            code="SHIPMENT_FILE_NOT_FOUND"
        )


class ShipmentFileParseError(InvalidInputError):
    """Shipment file could not be read as JSON."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            code="SHIPMENT_FILE_INVALID_JSON",
            message=f"Invalid JSON file: {reason}",
            details={"file_path": file_path}
        )
