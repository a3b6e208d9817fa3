"""
Domain models for calendar events and their 30-minute slots.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Dict, List, Optional

import pendulum
from pendulum import DateTime

from .exceptions import SlotDecompositionError

SLOT_MINUTES = 30
SLOT_FORMAT = "H:mm"


class EventKind(str, Enum):
    """The two kinds of calendar events."""
    OPENING = "opening"
    APPOINTMENT = "appointment"


def format_slot(moment: DateTime) -> str:
    """Render a slot start as ``H:MM`` (no leading zero on the hour)."""
    return moment.format(SLOT_FORMAT)


def slot_sort_key(slot: str) -> time:
    """Parse a slot label back into a time of day for chronological sorting."""
    return datetime.strptime(slot, "%H:%M").time()


def as_date(value: date) -> date:
    """Reduce a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class Event:
    """
    A single calendar occurrence: an opening or an appointment.

    Timestamps are normalised to pendulum ``DateTime`` on construction.
    Fields may be ``None`` so that incomplete input can still be handed to
    ``validate_event`` and reported field by field.
    """
    kind: Optional[EventKind]
    starts_at: Optional[DateTime]
    ends_at: Optional[DateTime]
    weekly_recurring: bool = False

    def __post_init__(self):
        if self.kind is not None and not isinstance(self.kind, EventKind):
            object.__setattr__(self, "kind", EventKind(self.kind))
        for name in ("starts_at", "ends_at"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, DateTime):
                object.__setattr__(self, name, pendulum.instance(value))

    @property
    def is_opening(self) -> bool:
        return self.kind is EventKind.OPENING

    @property
    def is_appointment(self) -> bool:
        return self.kind is EventKind.APPOINTMENT

    def slots(self) -> List[str]:
        """
        Decompose ``[starts_at, ends_at)`` into 30-minute slot labels.

        A duration that is not a multiple of 30 minutes still yields every
        slot start before ``ends_at``.

        Raises:
            SlotDecompositionError: If a timestamp is missing or the range is empty
        """
        if self.starts_at is None or self.ends_at is None:
            raise SlotDecompositionError("Event needs both starts_at and ends_at to have slots")
        if self.ends_at <= self.starts_at:
            raise SlotDecompositionError(
                f"Event end {self.ends_at} must be after its start {self.starts_at}"
            )

        labels: List[str] = []
        current = self.starts_at
        while current < self.ends_at:
            labels.append(format_slot(current))
            current = current.add(minutes=SLOT_MINUTES)
        return labels

    def is_opening_valid_for_date(self, day: date) -> bool:
        """Check whether this opening applies to ``day``, following weekly recurrence."""
        if not self.is_opening or self.starts_at is None:
            return False

        day = as_date(day)
        if self.weekly_recurring:
            return self.starts_at.weekday() == day.weekday()
        return self.starts_at.date() == day

    def is_appointment_valid_for_date(self, day: date) -> bool:
        """Check whether this appointment takes place on ``day``."""
        if not self.is_appointment or self.starts_at is None:
            return False
        return self.starts_at.date() == as_date(day)

    def __str__(self) -> str:
        kind = self.kind.value if self.kind else "event"
        if self.starts_at is None or self.ends_at is None:
            return f"{kind} (incomplete)"
        recurring = " weekly" if self.weekly_recurring else ""
        return f"{kind}{recurring} {self.starts_at.format('YYYY-MM-DD HH:mm')} - {self.ends_at.format('HH:mm')}"


@dataclass
class ValidationResult:
    """
    Outcome of validating an event: field name -> list of messages.
    """
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)

    def full_messages(self) -> List[str]:
        """Messages prefixed with a readable field name, e.g. ``Ends at is not a 30 min slot``."""
        return [
            f"{field_name.replace('_', ' ').capitalize()} {message}"
            for field_name, messages in self.errors.items()
            for message in messages
        ]
