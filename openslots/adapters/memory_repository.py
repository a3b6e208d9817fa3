"""
In-memory event store implementing the availability query contract.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from ..domain.models import Event

logger = logging.getLogger(__name__)


class InMemoryEventRepository:
    """
    Keeps events in a list.

    ``events_within`` returns the events that can influence a window: those
    starting inside it, plus every weekly recurring opening whatever its
    own date is.
    """

    def __init__(self, events: Optional[Iterable[Event]] = None):
        self._events: List[Event] = list(events or [])

    def __len__(self) -> int:
        return len(self._events)

    def all(self) -> List[Event]:
        """Return every stored event ordered by start time."""
        return sorted(self._events, key=lambda e: e.starts_at)

    def add(self, event: Event) -> Event:
        """Store an event that has already been validated."""
        self._events.append(event)
        return event

    def events_within(self, starts_at: datetime, ends_at: datetime) -> List[Event]:
        """
        Fetch the events relevant to ``[starts_at, ends_at)``.

        Args:
            starts_at: Inclusive window start
            ends_at: Exclusive window end

        Returns:
            Matching events, ordered by ``starts_at`` (stable for ties)
        """
        matches = [
            event for event in self._events
            if (event.is_opening and event.weekly_recurring)
            or starts_at <= event.starts_at < ends_at
        ]
        logger.debug(
            "Found %d event(s) between %s and %s", len(matches), starts_at, ends_at
        )
        return sorted(matches, key=lambda e: e.starts_at)
