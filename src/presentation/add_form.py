"""
Add booking form model.

Holds the state of the add screen (name field, date range selection, date
picker visibility, error message) and performs the save action: validate the
input, then append the entry to the shared store.
"""

from datetime import date
from typing import Optional

from src.domain.booking import BookingEntry
from src.domain.exceptions import BookingValidationError
from src.domain.validator import validate_entry
from src.presentation.formatting import (
    DISPLAY_DATE_FORMAT,
    date_from_epoch_millis,
    format_date_range,
)
from src.store.booking_store import BookingStore
from src.utils.logger import get_logger, log_operation

logger = get_logger(__name__)


class AddBookingForm:
    """
    State and actions of the add booking screen.

    A failed submit keeps everything the user entered and sets
    error_message; a successful submit stores the entry and clears it.
    """

    def __init__(self, store: BookingStore, date_format: str = DISPLAY_DATE_FORMAT):
        self.store = store
        self.date_format = date_format
        self.name = ""
        self.arrival_date: Optional[date] = None
        self.departure_date: Optional[date] = None
        self.date_picker_open = False
        self.error: Optional[BookingValidationError] = None

    @property
    def error_message(self) -> str:
        return self.error.user_message if self.error else ""

    @property
    def name_has_error(self) -> bool:
        return self.error is not None and self.error.field == "name"

    @property
    def date_has_error(self) -> bool:
        return self.error is not None and self.error.field == "date_range"

    @property
    def date_range_text(self) -> str:
        return format_date_range(self.arrival_date, self.departure_date, self.date_format)

    def set_name(self, name: str) -> None:
        self.name = name

    def open_date_picker(self) -> None:
        self.date_picker_open = True

    def dismiss_date_picker(self) -> None:
        self.date_picker_open = False

    def select_date_range(self, start: date, end: date) -> None:
        """Apply a confirmed picker selection and close the picker."""
        self.arrival_date = start
        self.departure_date = end
        self.date_picker_open = False

    def select_date_range_millis(self, start_millis: Optional[int], end_millis: Optional[int]) -> None:
        """
        Apply a picker selection given as UTC epoch milliseconds.

        Incomplete selections are ignored and the picker stays open.
        """
        if start_millis is None or end_millis is None:
            return
        self.select_date_range(
            date_from_epoch_millis(start_millis), date_from_epoch_millis(end_millis)
        )

    @log_operation("submit_booking_form")
    def submit(self) -> Optional[BookingEntry]:
        """
        Validate the form and save the booking.

        Returns:
            The stored entry, or None if validation failed
        """
        result = validate_entry(self.name, self.arrival_date, self.departure_date)
        if not result.ok:
            self.error = result.error
            logger.info(
                "Add booking form rejected",
                operation="submit_booking_form",
                context={"reason": result.error.code},
            )
            return None

        self.store.add(result.entry)
        self.error = None
        return result.entry
