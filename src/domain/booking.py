"""
Booking entry domain model.

Represents a single booking: a guest name and an inclusive date range.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Any, Optional, Union


@dataclass(frozen=True)
class BookingEntry:
    """
    Immutable booking entry with value semantics.

    Attributes:
        name: Guest name, stored exactly as entered (not trimmed)
        arrival_date: First day of the stay
        departure_date: Last day of the stay, never before arrival_date

    Two entries with the same three fields are equal and interchangeable;
    there is no identity key.
    """

    name: str
    arrival_date: date
    departure_date: date

    def __post_init__(self):
        # Same checks, same order as the add form
        from .validator import find_violation

        violation = find_violation(self.name, self.arrival_date, self.departure_date)
        if violation is not None:
            raise violation

    @property
    def nights(self) -> int:
        """Number of nights between arrival and departure (0 for a single day)."""
        return (self.departure_date - self.arrival_date).days

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookingEntry":
        """
        Create BookingEntry from a dictionary.

        Dates may be date objects or ISO "YYYY-MM-DD" strings. Missing keys
        are treated as unset and rejected by the entry invariant.

        Args:
            data: Dictionary with name, arrival_date and departure_date

        Returns:
            BookingEntry instance

        Raises:
            BookingValidationError: If the data violates the entry invariant
            TypeError: If the name is not a string
            ValueError: If a date string is not ISO formatted
        """
        return cls(
            name=data.get("name"),
            arrival_date=_coerce_date(data.get("arrival_date")),
            departure_date=_coerce_date(data.get("departure_date")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert BookingEntry to a plain dictionary with ISO dates.

        Returns:
            Dictionary representation
        """
        return {
            "name": self.name,
            "arrival_date": self.arrival_date.isoformat(),
            "departure_date": self.departure_date.isoformat(),
        }


def _coerce_date(value: Union[date, str, None]) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(value)
