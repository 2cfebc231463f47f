"""Ports - interfaces/protocols for external dependencies."""

from .meeting_repo import MeetingRepository
from .trip_repo import TripRepository
from .contact_repo import ContactRepository

__all__ = [
    "MeetingRepository",
    "TripRepository",
    "ContactRepository",
]
