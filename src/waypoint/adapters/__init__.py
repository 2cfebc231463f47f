"""Adapters - I/O implementations of ports."""

from .memory import InMemoryContactRepository, InMemoryMeetingRepository, InMemoryTripRepository
from .json_store import JsonDataStore

__all__ = [
    "InMemoryContactRepository",
    "InMemoryMeetingRepository",
    "InMemoryTripRepository",
    "JsonDataStore",
]
