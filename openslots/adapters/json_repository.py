"""
Event store backed by a JSON file.

File format - a list of records::

    [
        {
            "kind": "opening",
            "starts_at": "2020-01-01 09:00",
            "ends_at": "2020-01-01 10:30",
            "weekly_recurring": true
        }
    ]
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pendulum

from ..domain.exceptions import EventRepositoryError
from ..domain.models import Event, EventKind
from .memory_repository import InMemoryEventRepository

logger = logging.getLogger(__name__)


class JsonEventRepository(InMemoryEventRepository):
    """
    Loads events from a JSON file and writes them back on ``save``.

    Naive timestamps in the file are read in ``timezone``; no conversion
    between zones takes place.
    """

    def __init__(self, path: Path, timezone: str = "UTC"):
        self.path = Path(path)
        self.timezone = timezone
        super().__init__(self._load_events())

    def _load_events(self) -> List[Event]:
        """Load event records from disk; a missing file is an empty store."""
        if not self.path.exists():
            logger.debug("Event file %s does not exist yet, starting empty", self.path)
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise EventRepositoryError(f"Could not read events from {self.path}: {exc}") from exc

        if not isinstance(records, list):
            raise EventRepositoryError(f"Event file {self.path} must contain a list of events.")

        events: List[Event] = []
        for index, record in enumerate(records):
            try:
                events.append(self._parse_record(record))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed event #%d in %s: %s", index, self.path, exc)
        return events

    def _parse_record(self, record: Dict[str, Any]) -> Event:
        return Event(
            kind=EventKind(record["kind"]),
            starts_at=pendulum.parse(record["starts_at"], tz=self.timezone),
            ends_at=pendulum.parse(record["ends_at"], tz=self.timezone),
            weekly_recurring=self._parse_flag(record.get("weekly_recurring", False)),
        )

    @staticmethod
    def _parse_flag(value: Any) -> bool:
        if not isinstance(value, bool):
            raise ValueError(f"weekly_recurring must be true or false, got {value!r}")
        return value

    def add(self, event: Event) -> Event:
        """Store an event and write the file right away."""
        super().add(event)
        self.save()
        return event

    @staticmethod
    def _to_record(event: Event) -> Dict[str, Any]:
        return {
            "kind": event.kind.value,
            "starts_at": event.starts_at.to_iso8601_string(),
            "ends_at": event.ends_at.to_iso8601_string(),
            "weekly_recurring": event.weekly_recurring,
        }

    def save(self) -> None:
        """Write every stored event back to the JSON file."""
        records = [self._to_record(event) for event in self.all()]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
        except OSError as exc:
            raise EventRepositoryError(f"Could not save events to {self.path}: {exc}") from exc
        logger.debug("Saved %d event(s) to %s", len(records), self.path)
