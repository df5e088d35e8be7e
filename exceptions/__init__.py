"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    InvalidInputError,

    # Event validation
    EventValidationError,

    # Shipment input
    NoEventsFoundError,
    ShipmentFileNotFoundError,
    ShipmentFileParseError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "InvalidInputError",

    # Event validation
    "EventValidationError",

    # Shipment input
    "NoEventsFoundError",
    "ShipmentFileNotFoundError",
    "ShipmentFileParseError",
]
