"""Pure travel domain models - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from enum import Enum


class TripPurpose(Enum):
    """Why a trip is being taken."""

    BUSINESS = "business"
    PERSONAL = "personal"
    MIXED = "mixed"
    CONFERENCE = "conference"
    TRAINING = "training"
    CLIENT_VISIT = "client_visit"
    VACATION = "vacation"
    FAMILY = "family"


def parse_timestamp(value: str, tz: tzinfo = timezone.utc) -> datetime:
    """
    Parse an ISO 8601 timestamp into a naive datetime.

    Offset-aware values (including a trailing "Z") are converted to tz and the
    tzinfo dropped, so naive and aware records compare cleanly.
    """
    if value[-1:] in ("Z", "z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz).replace(tzinfo=None)
    return parsed


@dataclass
class Attendee:
    """A meeting attendee, referencing a contact by id."""

    id: str
    name: str = ""
    email: str = ""


@dataclass
class MeetingLocation:
    """Structured meeting location."""

    type: str = "physical"  # physical, virtual, hybrid
    address: str = ""
    room: str = ""
    virtual_url: str = ""

    def text(self) -> str:
        return self.address or self.room


@dataclass
class Meeting:
    """A scheduled meeting."""

    id: str
    title: str
    start: datetime
    end: datetime | None = None
    location: MeetingLocation | str | None = None
    attendees: list[Attendee] = field(default_factory=list)
    meeting_type: str = "other"
    status: str = "scheduled"
    description: str = ""

    def location_text(self) -> str:
        """Free-text form of the location, or empty string."""
        if self.location is None:
            return ""
        if isinstance(self.location, MeetingLocation):
            return self.location.text()
        return self.location

    def attendee_ids(self) -> list[str]:
        return [a.id for a in self.attendees]

    @property
    def finish(self) -> datetime:
        """End time, falling back to start for open-ended meetings."""
        return self.end or self.start

    @classmethod
    def from_dict(cls, data: dict, tz: tzinfo = timezone.utc) -> "Meeting":
        """Create Meeting from a JSON-style record, with times made naive in tz."""
        raw_location = data.get("location")
        if isinstance(raw_location, dict):
            location = MeetingLocation(
                type=raw_location.get("type", "physical"),
                address=raw_location.get("address", ""),
                room=raw_location.get("room", ""),
                virtual_url=raw_location.get("virtualUrl", ""),
            )
        else:
            location = raw_location or None
        end = data.get("endTime")
        return cls(
            id=data["id"],
            title=data["title"],
            start=parse_timestamp(data["startTime"], tz),
            end=parse_timestamp(end, tz) if end else None,
            location=location,
            attendees=[
                Attendee(id=a["id"], name=a.get("name", ""), email=a.get("email", ""))
                for a in data.get("attendees", [])
            ],
            meeting_type=data.get("type", "other"),
            status=data.get("status", "scheduled"),
            description=data.get("description", "") or "",
        )


@dataclass
class Destination:
    """A city/country leg of a trip."""

    id: str
    city: str
    country: str
    arrival_date: date
    departure_date: date
    planned_meetings: list[str] = field(default_factory=list)
    purpose: str = ""
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "city": self.city,
            "country": self.country,
            "arrivalDate": self.arrival_date.isoformat(),
            "departureDate": self.departure_date.isoformat(),
            "plannedMeetings": list(self.planned_meetings),
            "purpose": self.purpose,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Destination":
        return cls(
            id=data["id"],
            city=data.get("city", ""),
            country=data.get("country", ""),
            arrival_date=date.fromisoformat(data["arrivalDate"][:10]),
            departure_date=date.fromisoformat(data["departureDate"][:10]),
            planned_meetings=list(data.get("plannedMeetings", [])),
            purpose=data.get("purpose", ""),
            notes=data.get("notes", ""),
        )


@dataclass
class Budget:
    """Estimated trip budget."""

    total: float
    currency: str = "USD"
    breakdown: dict[str, float] = field(default_factory=dict)


@dataclass
class Trip:
    """A planned period of travel with one or more destinations."""

    id: str
    title: str
    purpose: TripPurpose
    start_date: date
    end_date: date
    destinations: list[Destination] = field(default_factory=list)
    related_meetings: list[str] = field(default_factory=list)
    related_contacts: list[str] = field(default_factory=list)
    description: str = ""
    status: str = "planning"
    budget: Budget | None = None

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days

    def contains(self, day: date) -> bool:
        """Check if a date falls within the trip (inclusive)."""
        return self.start_date <= day <= self.end_date

    def days_outside(self, day: date) -> int:
        """Whole days from a date to the nearest trip boundary, 0 if inside."""
        if day < self.start_date:
            return (self.start_date - day).days
        if day > self.end_date:
            return (day - self.end_date).days
        return 0

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "purpose": self.purpose.value,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "destinations": [d.to_dict() for d in self.destinations],
            "relatedMeetings": list(self.related_meetings),
            "relatedContacts": list(self.related_contacts),
            "description": self.description,
            "status": self.status,
        }
        if self.budget:
            data["budget"] = {
                "total": self.budget.total,
                "currency": self.budget.currency,
                "breakdown": dict(self.budget.breakdown),
            }
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Trip":
        """Create Trip from a JSON-style record."""
        budget = None
        if data.get("budget"):
            budget = Budget(
                total=data["budget"].get("total", 0),
                currency=data["budget"].get("currency", "USD"),
                breakdown=data["budget"].get("breakdown", {}),
            )
        return cls(
            id=data["id"],
            title=data["title"],
            purpose=TripPurpose(data.get("purpose", "business")),
            start_date=date.fromisoformat(data["startDate"][:10]),
            end_date=date.fromisoformat(data["endDate"][:10]),
            destinations=[Destination.from_dict(d) for d in data.get("destinations", [])],
            related_meetings=list(data.get("relatedMeetings", [])),
            related_contacts=list(data.get("relatedContacts", [])),
            description=data.get("description", ""),
            status=data.get("status", "planning"),
            budget=budget,
        )


@dataclass
class Contact:
    """An address book contact."""

    id: str
    name: str
    email: str = ""
    company: str = ""
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Contact":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            email=data.get("email", ""),
            company=data.get("company", "") or "",
            notes=data.get("notes", "") or "",
        )


@dataclass(frozen=True)
class RelevanceScore:
    """How strongly a meeting is associated with a trip. Never stored."""

    meeting_id: str
    trip_id: str
    score: int
    label: str
