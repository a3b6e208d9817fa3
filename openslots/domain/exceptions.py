"""
Domain-specific exception hierarchy for openslots.
"""


class OpenSlotsError(Exception):
    """Base class for all application-level errors."""


class SlotDecompositionError(OpenSlotsError, ValueError):
    """Raised when an event cannot be split into 30-minute slots."""


class InvalidEventError(OpenSlotsError):
    """Raised when an event is rejected by the creation pathway."""

    def __init__(self, result):
        self.result = result
        super().__init__("; ".join(result.full_messages()) or "Event is invalid")


class EventRepositoryError(OpenSlotsError):
    """Raised when stored events cannot be loaded or saved."""
