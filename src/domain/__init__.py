"""Domain models - booking entries and their validation."""

from .booking import BookingEntry
from .exceptions import (
    BookingError,
    BookingValidationError,
    EmptyNameError,
    MissingDateRangeError,
    InvertedRangeError,
)
from .validator import ValidationResult, validate_entry, create_entry

__all__ = [
    "BookingEntry",
    "BookingError",
    "BookingValidationError",
    "EmptyNameError",
    "MissingDateRangeError",
    "InvertedRangeError",
    "ValidationResult",
    "validate_entry",
    "create_entry",
]
