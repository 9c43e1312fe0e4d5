"""
Home screen list model.

Observes the booking store and exposes the rows the home screen shows: one per
entry with the guest name and the formatted date range, plus delete by row.
"""

from typing import List, Tuple

from src.domain.booking import BookingEntry
from src.presentation.formatting import DISPLAY_DATE_FORMAT, format_date_range
from src.store.booking_store import BookingStore
from src.utils.logger import get_logger, mask_name

logger = get_logger(__name__)

EMPTY_MESSAGE = "No bookings available."


class HomeView:
    """
    Live view of the booking list.

    Subscribes on construction; call close() when the screen goes away.
    """

    def __init__(self, store: BookingStore, date_format: str = DISPLAY_DATE_FORMAT):
        self.store = store
        self.date_format = date_format
        self.render_count = 0
        self._subscription = store.subscribe(self._on_entries_changed, replay=False)
        self.entries: Tuple[BookingEntry, ...] = store.current_entries()

    def _on_entries_changed(self, entries: Tuple[BookingEntry, ...]) -> None:
        self.entries = entries
        self.render_count += 1

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def rows(self) -> List[Tuple[str, str]]:
        return [
            (
                entry.name,
                format_date_range(entry.arrival_date, entry.departure_date, self.date_format),
            )
            for entry in self.entries
        ]

    def render(self) -> List[str]:
        """Return display lines, numbered from 1."""
        if self.is_empty:
            return [EMPTY_MESSAGE]
        return [f"{idx}. {name}  {dates}" for idx, (name, dates) in enumerate(self.rows, 1)]

    def delete_at(self, index: int) -> BookingEntry:
        """
        Delete the entry shown at the given zero-based row.

        Raises:
            IndexError: If no row exists at index
        """
        if index < 0 or index >= len(self.entries):
            raise IndexError(f"No booking at row {index}")

        entry = self.entries[index]
        if not self.store.delete(entry):
            logger.warning(
                "Row no longer in store, nothing deleted",
                operation="delete_row",
                context={"row": index, "guest": mask_name(entry.name)},
            )
        return entry

    def close(self) -> None:
        self._subscription.unsubscribe()
