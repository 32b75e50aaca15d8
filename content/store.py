"""In-memory event store serving consistent snapshots to concurrent readers."""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime, timezone
from typing import Iterable
from uuid import UUID

from content.models import Event, Snapshot, UpcomingEvents

log = logging.getLogger(__name__)


class EventStore:
    """Holds the latest scanned events and swaps them out wholesale.

    One writer (the sync task) publishes complete record sets; any number of
    readers query at any time. The lock only covers the reference swap, so a
    reader never waits on a scan and never sees two generations mixed.
    Readers get deep copies, never references into the live snapshot.
    """

    def __init__(self, events: Iterable[Event] = ()) -> None:
        self._lock = threading.Lock()
        self._snapshot = Snapshot()
        events = tuple(events)
        if events:
            self.publish(events)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def publish(self, events: Iterable[Event]) -> Snapshot:
        """Replace the whole record set and return the new snapshot."""
        events = tuple(e.model_copy(deep=True) for e in events)
        with self._lock:
            snapshot = Snapshot(
                generation=self._snapshot.generation + 1,
                events=events,
                published_at=datetime.now(timezone.utc),
            )
            self._snapshot = snapshot
        log.info(
            "Published snapshot %d with %d event(s)", snapshot.generation, len(events)
        )
        return snapshot.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def _current(self) -> Snapshot:
        with self._lock:
            return self._snapshot

    def snapshot(self) -> Snapshot:
        """A private copy of the current snapshot."""
        return self._current().model_copy(deep=True)

    @property
    def generation(self) -> int:
        return self._current().generation

    def __len__(self) -> int:
        return len(self._current().events)

    def get_events(self) -> list[Event]:
        """All events, oldest first."""
        events = self._current().events
        return [e.model_copy(deep=True) for e in sorted(events, key=lambda e: e.time)]

    def get_upcoming_events(self, today: date | None = None) -> list[Event]:
        """Events dated *today* or later, oldest first.

        *today* defaults to the current local date at call time.
        """
        today = today or date.today()
        events = self._current().events
        upcoming = sorted((e for e in events if e.time >= today), key=lambda e: e.time)
        return [e.model_copy(deep=True) for e in upcoming]

    def get_upcoming_overview(self, today: date | None = None) -> UpcomingEvents:
        return UpcomingEvents(
            events=[e.overview() for e in self.get_upcoming_events(today)]
        )

    def get_event(self, event_id: UUID) -> Event | None:
        """Look up any event in the snapshot, past or upcoming."""
        for event in self._current().events:
            if event.id == event_id:
                return event.model_copy(deep=True)
        return None
