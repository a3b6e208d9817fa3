"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability_finder import AvailabilityFinderService, EventRepositoryProtocol

__all__ = ["AvailabilityFinderService", "EventRepositoryProtocol"]
