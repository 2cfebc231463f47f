"""Meeting repository interface."""

from typing import Protocol

from waypoint.core.models import Meeting


class MeetingRepository(Protocol):
    """Read access to meetings from any backend."""

    def get(self, meeting_id: str) -> Meeting | None:
        """Fetch one meeting. Returns None if not found."""
        ...

    def list_all(self) -> list[Meeting]:
        """Fetch all meetings."""
        ...

    def find_many(self, meeting_ids: list[str]) -> list[Meeting]:
        """Fetch the meetings whose ids are known, in the order given."""
        ...
