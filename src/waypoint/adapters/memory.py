"""In-memory repository adapters."""

from copy import deepcopy

from waypoint.core.models import Contact, Meeting, Trip


class InMemoryMeetingRepository:
    """
    Dict-backed meeting storage.

    Implements MeetingRepository protocol. Returns copies, so callers can't
    mutate what's stored.
    """

    def __init__(self, meetings: list[Meeting] | None = None):
        self._meetings: dict[str, Meeting] = {}
        for meeting in meetings or []:
            self.add(meeting)

    def add(self, meeting: Meeting) -> None:
        self._meetings[meeting.id] = deepcopy(meeting)

    def get(self, meeting_id: str) -> Meeting | None:
        meeting = self._meetings.get(meeting_id)
        return deepcopy(meeting) if meeting else None

    def list_all(self) -> list[Meeting]:
        return [deepcopy(m) for m in self._meetings.values()]

    def find_many(self, meeting_ids: list[str]) -> list[Meeting]:
        return [deepcopy(self._meetings[i]) for i in dict.fromkeys(meeting_ids) if i in self._meetings]


class InMemoryTripRepository:
    """
    Dict-backed trip storage.

    Implements TripRepository protocol.
    """

    def __init__(self, trips: list[Trip] | None = None):
        self._trips: dict[str, Trip] = {}
        for trip in trips or []:
            self.save(trip)

    def get(self, trip_id: str) -> Trip | None:
        trip = self._trips.get(trip_id)
        return deepcopy(trip) if trip else None

    def list_all(self) -> list[Trip]:
        return [deepcopy(t) for t in self._trips.values()]

    def save(self, trip: Trip) -> None:
        self._trips[trip.id] = deepcopy(trip)


class InMemoryContactRepository:
    """Dict-backed contact storage. Implements ContactRepository protocol."""

    def __init__(self, contacts: list[Contact] | None = None):
        self._contacts = {c.id: deepcopy(c) for c in contacts or []}

    def get(self, contact_id: str) -> Contact | None:
        contact = self._contacts.get(contact_id)
        return deepcopy(contact) if contact else None

    def list_all(self) -> list[Contact]:
        return [deepcopy(c) for c in self._contacts.values()]
