"""
Adapters layer - Event storage collaborators.
"""

from .json_repository import JsonEventRepository
from .memory_repository import InMemoryEventRepository

__all__ = ["InMemoryEventRepository", "JsonEventRepository"]
