"""
Validation rules an event must pass before it is stored.

Every rule runs and adds its own message; nothing fails fast. Rules that
compare the two timestamps only run when both are present.
"""

from typing import Iterable

from .availability import compute_day_availability, group_by_kind
from .models import SLOT_MINUTES, Event, ValidationResult

BLANK = "can't be blank"
RECURRING_APPOINTMENT = "can't be true for appointment"
ENDS_BEFORE_START = "can't be before starts_at"
DIFFERENT_DAY = "can't be on a different day"
NO_AVAILABLE_SLOTS = "can't create appointment for no available slots"
NOT_A_SLOT = "is not a 30 min slot"


def validate_event(event: Event, other_events: Iterable[Event] = ()) -> ValidationResult:
    """
    Validate an event against its own invariants and the existing calendar.

    Args:
        event: The proposed event
        other_events: Every stored event that can affect the appointment's day
            (events on that day plus weekly recurring openings), excluding
            ``event`` itself. Only consulted for appointments.

    Returns:
        ValidationResult with one entry per violated field
    """
    result = ValidationResult()
    has_times = event.starts_at is not None and event.ends_at is not None

    if event.kind is None:
        result.add("kind", BLANK)
    if event.starts_at is None:
        result.add("starts_at", BLANK)
    if event.ends_at is None:
        result.add("ends_at", BLANK)

    if event.is_appointment and event.weekly_recurring:
        result.add("weekly_recurring", RECURRING_APPOINTMENT)

    if has_times:
        if event.ends_at <= event.starts_at:
            result.add("ends_at", ENDS_BEFORE_START)
        if event.ends_at.date() != event.starts_at.date():
            result.add("ends_at", DIFFERENT_DAY)

    if event.is_appointment and has_times and not _fits_open_slots(event, other_events):
        result.add("kind", NO_AVAILABLE_SLOTS)

    if has_times and not _is_whole_slots(event):
        result.add("ends_at", NOT_A_SLOT)

    return result


def _fits_open_slots(appointment: Event, other_events: Iterable[Event]) -> bool:
    # An empty range covers no slots and is reported by the ordering rule instead.
    if appointment.ends_at <= appointment.starts_at:
        return True

    day = appointment.starts_at.date()
    others = [other for other in other_events if other is not appointment]
    available = set(compute_day_availability(group_by_kind(others), day))
    return set(appointment.slots()) <= available


def _is_whole_slots(event: Event) -> bool:
    seconds = (event.ends_at - event.starts_at).total_seconds()
    return seconds % (SLOT_MINUTES * 60) == 0
