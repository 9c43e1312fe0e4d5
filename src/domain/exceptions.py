"""
Custom exception hierarchy for booking entry validation.

Each validation failure carries a stable machine-readable code, the field it
concerns, and the message shown to the user in the add form.
"""


class BookingError(Exception):
    """
    Base exception for all booking-related errors.
    """

    pass


class BookingValidationError(BookingError):
    """
    Raised (or returned) when form input cannot become a booking entry.

    All validation failures are recoverable: the form is redisplayed with
    user_message and no entry is created.
    """

    code = "invalid_entry"
    field = ""
    user_message = "The booking entry is invalid."

    def __init__(self, message: str = ""):
        super().__init__(message or self.user_message)


class EmptyNameError(BookingValidationError):
    """
    Raised when the name is missing or contains only whitespace.
    """

    code = "empty_name"
    field = "name"
    user_message = "Please enter a name."


class MissingDateRangeError(BookingValidationError):
    """
    Raised when the arrival or departure date has not been selected.
    """

    code = "missing_date_range"
    field = "date_range"
    user_message = "Please select a valid date range."


class InvertedRangeError(BookingValidationError):
    """
    Raised when the departure date is earlier than the arrival date.

    Equal dates (a single-day booking) are valid.
    """

    code = "inverted_range"
    field = "date_range"
    user_message = "The end date cannot be before the start date."
