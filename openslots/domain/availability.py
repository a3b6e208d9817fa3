"""
Core business logic for computing free 30-minute slots.

Pure functions over an explicit event collection: no repository access,
no I/O, no module state. Callers are responsible for handing in a complete
candidate set (see ``EventRepositoryProtocol.events_within``).
"""

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Sequence, Set

from .models import Event, EventKind, as_date, slot_sort_key

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7

EventsByKind = Mapping[EventKind, Sequence[Event]]


def group_by_kind(events: Iterable[Event]) -> Dict[EventKind, List[Event]]:
    """
    Partition events by kind, preserving their incoming order.

    Both kinds are always present in the result, possibly with empty lists.
    """
    grouped: Dict[EventKind, List[Event]] = {kind: [] for kind in EventKind}
    for event in events:
        grouped[event.kind].append(event)
    return grouped


def compute_day_availability(events_by_kind: EventsByKind, day: date) -> List[str]:
    """
    Compute the free slots of a single day.

    Algorithm:
    1. Collect the slots of every opening valid for the day (set)
    2. Collect the slots of every appointment on the day (set)
    3. Remove the appointment slots from the opening slots
    4. Sort chronologically by time of day, not by label

    Args:
        events_by_kind: Events grouped by kind (see ``group_by_kind``)
        day: The calendar day to compute

    Returns:
        Ordered slot labels such as ``["9:00", "14:30"]``; empty if none are free
    """
    day = as_date(day)

    opening_slots: Set[str] = set()
    for event in events_by_kind.get(EventKind.OPENING, ()):
        if event.is_opening_valid_for_date(day):
            opening_slots.update(event.slots())

    appointment_slots: Set[str] = set()
    for event in events_by_kind.get(EventKind.APPOINTMENT, ()):
        if event.is_appointment_valid_for_date(day):
            appointment_slots.update(event.slots())

    free = sorted(opening_slots - appointment_slots, key=slot_sort_key)
    logger.debug(
        "%s: %d opening slot(s), %d booked, %d free",
        day.isoformat(), len(opening_slots), len(appointment_slots), len(free)
    )
    return free


def compute_week_availability(events_by_kind: EventsByKind, start_date: date) -> Dict[str, List[str]]:
    """
    Compute availability for the seven days starting at ``start_date``.

    ``events_by_kind`` must already hold every event starting inside the
    window plus all weekly recurring openings; missing events silently
    produce missing slots.

    Returns:
        ``{"YYYY-MM-DD": [slot, ...]}`` with exactly seven keys in date order
    """
    start_date = as_date(start_date)
    week: Dict[str, List[str]] = {}

    for index in range(DAYS_PER_WEEK):
        day = start_date + timedelta(days=index)
        week[day.isoformat()] = compute_day_availability(events_by_kind, day)

    return week
