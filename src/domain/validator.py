"""
Entry validation for the add booking form.

Turns raw form input (a name and two possibly unselected dates) into either a
BookingEntry or the first validation failure. Checks run in a fixed order so
the user always sees the same message for the same input:

1. name must not be blank
2. both dates must be selected
3. departure must not be before arrival
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from src.domain.booking import BookingEntry
from src.domain.exceptions import (
    BookingValidationError,
    EmptyNameError,
    MissingDateRangeError,
    InvertedRangeError,
)
from src.utils.logger import get_logger, mask_name

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Outcome of validating form input: exactly one of entry or error is set."""

    entry: Optional[BookingEntry] = None
    error: Optional[BookingValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> BookingEntry:
        """
        Return the validated entry.

        Raises:
            BookingValidationError: The carried validation failure
        """
        if self.error is not None:
            raise self.error
        return self.entry


def find_violation(
    name: Optional[str],
    arrival_date: Optional[date],
    departure_date: Optional[date],
) -> Optional[BookingValidationError]:
    """
    Return the first rule the input breaks, or None if it is valid.

    Args:
        name: Guest name as typed
        arrival_date: Selected arrival date, None if unset
        departure_date: Selected departure date, None if unset

    Returns:
        Validation error instance (not raised) or None

    Raises:
        TypeError: If name is not a string or a date is not a date
    """
    if name is not None and not isinstance(name, str):
        raise TypeError(f"Name must be a string, got {type(name).__name__}")
    for label, value in (("arrival_date", arrival_date), ("departure_date", departure_date)):
        if value is not None and not isinstance(value, date):
            raise TypeError(f"{label} must be a date, got {type(value).__name__}")

    if name is None or not name.strip():
        return EmptyNameError()

    if arrival_date is None or departure_date is None:
        return MissingDateRangeError()

    if departure_date < arrival_date:
        return InvertedRangeError(
            f"Departure {departure_date.isoformat()} is before arrival {arrival_date.isoformat()}"
        )

    return None


def validate_entry(
    name: Optional[str],
    arrival_date: Optional[date],
    departure_date: Optional[date],
) -> ValidationResult:
    """
    Validate add-form input and build a BookingEntry on success.

    The entry keeps the inputs exactly as given; the name is not trimmed.

    Args:
        name: Guest name as typed
        arrival_date: Selected arrival date, None if unset
        departure_date: Selected departure date, None if unset

    Returns:
        ValidationResult with either entry or error set
    """
    violation = find_violation(name, arrival_date, departure_date)
    if violation is not None:
        logger.debug(
            "Booking entry rejected",
            operation="validate_entry",
            context={"guest": mask_name(name), "reason": violation.code},
        )
        return ValidationResult(error=violation)

    return ValidationResult(entry=BookingEntry(name, arrival_date, departure_date))


def create_entry(
    name: Optional[str],
    arrival_date: Optional[date],
    departure_date: Optional[date],
) -> BookingEntry:
    """Validate input and return the entry, raising the first validation failure."""
    return validate_entry(name, arrival_date, departure_date).unwrap()
