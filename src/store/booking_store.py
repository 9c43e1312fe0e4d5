"""
Booking Store Module

Owns the in-memory, ordered list of booking entries and publishes every
change to subscribed observers.

- Insertion order is preserved; value-equal duplicates are allowed
- add() appends, delete() removes the first value-equal entry
- Observers receive the complete new sequence as an immutable tuple
- One lock guards reads and mutations; observers run outside it
- Notifications are queued in mutation order and delivered by one notifier
  at a time, so every observer ends on the current entries
"""

import threading
from collections import deque
from itertools import count
from typing import Callable, Deque, Dict, Iterator, Optional, Tuple

from src.domain.booking import BookingEntry
from src.utils.logger import get_logger, mask_name

logger = get_logger(__name__)

Entries = Tuple[BookingEntry, ...]
Observer = Callable[[Entries], None]


class Subscription:
    """
    Handle returned by BookingStore.subscribe().

    Call unsubscribe() on teardown, or use the subscription as a context
    manager. Unsubscribing twice is harmless.
    """

    def __init__(self, store: "BookingStore", subscription_id: int, since_version: int = 0):
        self._store = store
        self.subscription_id = subscription_id
        # Changes up to this version are covered by the replay or predate the subscription
        self.since_version = since_version

    @property
    def active(self) -> bool:
        return self._store._has_observer(self)

    def unsubscribe(self) -> None:
        self._store._remove_observer(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()

    def __repr__(self):
        return f"Subscription({self.subscription_id})"


class BookingStore:
    """
    Shared state holder for booking entries.

    Example:
        >>> store = BookingStore()
        >>> subscription = store.subscribe(lambda entries: print(len(entries)))
        0
        >>> store.add(entry)
        1
        >>> subscription.unsubscribe()
    """

    def __init__(self, replay_on_subscribe: bool = True):
        """
        Initialize an empty store.

        Args:
            replay_on_subscribe: Default for subscribe(); when True a new
                observer immediately receives the current entries
        """
        self._entries: Entries = ()
        self._observers: Dict[Subscription, Observer] = {}
        self._lock = threading.Lock()
        self._ids = count(1)
        self._version = 0
        self._pending: Deque[Tuple[int, Entries]] = deque()
        self._delivering = False
        self.replay_on_subscribe = replay_on_subscribe

    def current_entries(self) -> Entries:
        """Return a snapshot of the current entries in insertion order."""
        with self._lock:
            return self._entries

    def add(self, entry: BookingEntry) -> None:
        """
        Append an entry and notify observers.

        Args:
            entry: Already validated booking entry

        Raises:
            TypeError: If entry is not a BookingEntry
        """
        if not isinstance(entry, BookingEntry):
            raise TypeError(f"Expected BookingEntry, got {type(entry).__name__}")

        with self._lock:
            self._entries = self._entries + (entry,)
            snapshot = self._entries
            self._enqueue(snapshot)

        logger.info(
            "Booking entry added",
            operation="add_entry",
            context={"guest": mask_name(entry.name), "entry_count": len(snapshot)},
        )
        self._drain()

    def delete(self, entry: BookingEntry) -> bool:
        """
        Remove the first entry equal to the given one.

        If several entries are equal only the earliest is removed. A missing
        entry leaves the store unchanged and notifies no one.

        Args:
            entry: Entry to remove, matched by value

        Returns:
            True if an entry was removed, False otherwise
        """
        with self._lock:
            try:
                index = self._entries.index(entry)
            except ValueError:
                snapshot = None
            else:
                self._entries = self._entries[:index] + self._entries[index + 1 :]
                snapshot = self._entries
                self._enqueue(snapshot)

        if snapshot is None:
            logger.debug(
                "Booking entry not found, nothing deleted",
                operation="delete_entry",
                context={"guest": mask_name(getattr(entry, "name", None))},
            )
            return False

        logger.info(
            "Booking entry deleted",
            operation="delete_entry",
            context={"guest": mask_name(entry.name), "entry_count": len(snapshot)},
        )
        self._drain()
        return True

    def subscribe(self, observer: Observer, replay: Optional[bool] = None) -> Subscription:
        """
        Register an observer for entry changes.

        Args:
            observer: Callable receiving the full tuple of entries
            replay: Deliver the current entries immediately; defaults to
                the store's replay_on_subscribe setting

        Returns:
            Subscription handle for unsubscribing

        Raises:
            TypeError: If observer is not callable
        """
        if not callable(observer):
            raise TypeError(f"Observer must be callable, got {type(observer)}")

        if replay is None:
            replay = self.replay_on_subscribe

        with self._lock:
            subscription = Subscription(self, next(self._ids), self._version)
            self._observers[subscription] = observer
            snapshot = self._entries

        logger.debug(
            "Observer subscribed",
            operation="subscribe",
            context={"subscription_id": subscription.subscription_id},
        )

        if replay:
            self._call(subscription, observer, snapshot)
        return subscription

    def _has_observer(self, subscription: Subscription) -> bool:
        with self._lock:
            return subscription in self._observers

    def _remove_observer(self, subscription: Subscription) -> None:
        with self._lock:
            removed = self._observers.pop(subscription, None)

        if removed is not None:
            logger.debug(
                "Observer unsubscribed",
                operation="unsubscribe",
                context={"subscription_id": subscription.subscription_id},
            )

    def _enqueue(self, snapshot: Entries) -> None:
        # Caller holds self._lock
        self._version += 1
        self._pending.append((self._version, snapshot))

    def _drain(self) -> None:
        """
        Deliver queued snapshots to observers in mutation order.

        Only one caller delivers at a time. A mutation made by an observer,
        or by another thread, during delivery is queued and delivered by the
        caller already draining, after the snapshot in progress.
        """
        with self._lock:
            if self._delivering:
                return
            self._delivering = True

        try:
            while True:
                with self._lock:
                    if not self._pending:
                        self._delivering = False
                        return
                    version, snapshot = self._pending.popleft()
                    observers = [
                        (subscription, observer)
                        for subscription, observer in self._observers.items()
                        if subscription.since_version < version
                    ]

                for subscription, observer in observers:
                    self._call(subscription, observer, snapshot)
        except BaseException:
            with self._lock:
                self._delivering = False
            raise

    def _call(self, subscription: Subscription, observer: Observer, snapshot: Entries) -> None:
        # Errors are logged; remaining observers still run
        try:
            observer(snapshot)
        except Exception as e:
            logger.error(
                "Observer failed while handling booking update",
                operation="notify_observers",
                context={"subscription_id": subscription.subscription_id},
                error=str(e),
            )

    def __len__(self) -> int:
        return len(self.current_entries())

    def __iter__(self) -> Iterator[BookingEntry]:
        return iter(self.current_entries())
