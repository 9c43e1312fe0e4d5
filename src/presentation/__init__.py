"""Presentation module - screen models for the booking list and add form."""

from .add_form import AddBookingForm
from .home import HomeView, EMPTY_MESSAGE
from .formatting import (
    DISPLAY_DATE_FORMAT,
    format_date,
    format_date_range,
    parse_date,
    date_from_epoch_millis,
)

__all__ = [
    "AddBookingForm",
    "HomeView",
    "EMPTY_MESSAGE",
    "DISPLAY_DATE_FORMAT",
    "format_date",
    "format_date_range",
    "parse_date",
    "date_from_epoch_millis",
]
