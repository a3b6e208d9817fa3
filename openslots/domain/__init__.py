"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability import compute_day_availability, compute_week_availability, group_by_kind
from .models import Event, EventKind, ValidationResult
from .validation import validate_event

__all__ = [
    "Event",
    "EventKind",
    "ValidationResult",
    "compute_day_availability",
    "compute_week_availability",
    "group_by_kind",
    "validate_event",
]
