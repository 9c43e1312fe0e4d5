"""Store module - in-memory booking entry state with observers."""

from .booking_store import BookingStore, Subscription

__all__ = ["BookingStore", "Subscription"]
