"""
Application services for weekly availability and event creation.

The service fetches candidate events through a repository protocol and
delegates the computation to the pure domain functions. The repository is
passed in explicitly so tests can use the in-memory store.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, List, Protocol

import pendulum
from pendulum import DateTime

from ..adapters.json_repository import JsonEventRepository
from ..config import AppConfig
from ..domain.availability import DAYS_PER_WEEK, compute_week_availability, group_by_kind
from ..domain.exceptions import InvalidEventError
from ..domain.models import Event, ValidationResult, as_date
from ..domain.validation import validate_event

logger = logging.getLogger(__name__)


class EventRepositoryProtocol(Protocol):
    """Protocol describing the event store behaviour needed by the service."""

    def events_within(self, starts_at: datetime, ends_at: datetime) -> List[Event]:
        """
        Return events starting in ``[starts_at, ends_at)`` plus all weekly
        recurring openings, ordered by ``starts_at``.
        """

    def add(self, event: Event) -> Event:
        """Store a validated event."""


class AvailabilityFinderService:
    """
    Entry point for callers: weekly availabilities, validation and creation.

    ``timezone`` is the zone the stored events are expressed in; it is used
    to turn calendar dates into the query window.
    """

    def __init__(self, repository: EventRepositoryProtocol, timezone: str = "UTC") -> None:
        self._repository = repository
        self._timezone = timezone

    @classmethod
    def from_config(cls, config: AppConfig) -> "AvailabilityFinderService":
        """Build a service on top of the JSON event store named in the config."""
        repository = JsonEventRepository(config.events_file, timezone=config.timezone)
        return cls(repository=repository, timezone=config.timezone)

    def availabilities(self, start_date: date) -> Dict[str, List[str]]:
        """
        Free slots for the seven days starting at ``start_date``.

        Returns:
            ``{"YYYY-MM-DD": ["9:00", ...]}`` with exactly seven keys in date order
        """
        window_start = self._start_of_day(start_date)
        window_end = window_start.add(days=DAYS_PER_WEEK)

        events = self._repository.events_within(window_start, window_end)
        return compute_week_availability(group_by_kind(events), window_start.date())

    def validate(self, event: Event) -> ValidationResult:
        """Validate ``event`` against the events already stored for its day."""
        other_events: List[Event] = []
        if event.is_appointment and event.starts_at is not None:
            day_start = self._start_of_day(event.starts_at)
            other_events = self._repository.events_within(day_start, day_start.add(days=1))

        return validate_event(event, other_events)

    def create_event(self, event: Event) -> Event:
        """
        Validate and store an event.

        Raises:
            InvalidEventError: If the event breaks any validation rule
        """
        result = self.validate(event)
        if not result.is_valid:
            logger.warning("Rejected %s: %s", event, "; ".join(result.full_messages()))
            raise InvalidEventError(result)

        stored = self._repository.add(event)
        logger.info("Created %s", stored)
        return stored

    def _start_of_day(self, value: date) -> DateTime:
        day = as_date(value)
        return pendulum.datetime(day.year, day.month, day.day, tz=self._timezone)
