"""Trip repository interface."""

from typing import Protocol

from waypoint.core.models import Trip


class TripRepository(Protocol):
    """Interface for reading and saving trips."""

    def get(self, trip_id: str) -> Trip | None:
        """Fetch one trip. Returns None if not found."""
        ...

    def list_all(self) -> list[Trip]:
        """Fetch all trips."""
        ...

    def save(self, trip: Trip) -> None:
        """Insert or replace a trip by id."""
        ...
