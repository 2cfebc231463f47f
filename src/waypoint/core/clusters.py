"""Grouping meetings into candidate trip destinations - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from .locations import CanonicalLocation, normalize
from .models import Meeting

DEFAULT_LOCAL_KEYWORDS = ("office", "local", "headquarters")


@dataclass(frozen=True)
class DateRange:
    """Span from the first meeting's start to the last meeting's end."""

    start: datetime
    end: datetime

    @property
    def span(self) -> timedelta:
        return self.end - self.start

    def day_span(self) -> int:
        """Whole days covered, counting both ends."""
        return (self.end.date() - self.start.date()).days + 1


@dataclass
class LocationCluster:
    """Meetings sharing a normalized location."""

    location: CanonicalLocation
    meetings: list[Meeting]
    date_range: DateRange

    def attendee_ids(self) -> set[str]:
        return {a for m in self.meetings for a in m.attendee_ids()}


@dataclass
class StrategicPolicy:
    """Decides which lone meetings are still worth travelling for."""

    keywords: tuple[str, ...] = ("client", "conference")
    attendee_threshold: int = 5

    def is_strategic(self, meeting: Meeting) -> bool:
        title = meeting.title.lower()
        if any(k in title for k in self.keywords):
            return True
        return len(meeting.attendees) > self.attendee_threshold


def _date_range(meetings: list[Meeting]) -> DateRange:
    return DateRange(
        start=min(m.start for m in meetings),
        end=max(m.finish for m in meetings),
    )


def group_by_location(meetings: list[Meeting]) -> list[LocationCluster]:
    """
    Group meetings by normalized location, without any filtering.

    Meetings with no usable location are skipped. Groups appear in first-seen
    order; meetings within a group are sorted by start.
    """
    groups: dict[tuple[str, str], tuple[CanonicalLocation, list[Meeting]]] = {}
    for meeting in meetings:
        location = normalize(meeting.location)
        if not location.is_known:
            continue
        groups.setdefault(location.key, (location, []))[1].append(meeting)

    clusters = []
    for location, grouped in groups.values():
        grouped = sorted(grouped, key=lambda m: m.start)
        clusters.append(LocationCluster(location, grouped, _date_range(grouped)))
    return clusters


def should_keep(cluster: LocationCluster, policy: StrategicPolicy) -> bool:
    """A cluster is kept if it has several meetings, spans a day, or is strategic."""
    if len(cluster.meetings) > 1:
        return True
    if cluster.date_range.span >= timedelta(days=1):
        return True
    return any(policy.is_strategic(m) for m in cluster.meetings)


def cluster(
    meetings: list[Meeting],
    policy: StrategicPolicy | None = None,
) -> list[LocationCluster]:
    """
    Build candidate destinations from meetings.

    Pure function - no I/O. Clusters failing the retention policy are dropped.
    """
    policy = policy or StrategicPolicy()
    return [c for c in group_by_location(meetings) if should_keep(c, policy)]


def travel_candidates(
    meetings: list[Meeting],
    as_of: datetime,
    local_keywords: tuple[str, ...] = DEFAULT_LOCAL_KEYWORDS,
) -> list[Meeting]:
    """Future meetings with a location that isn't a local office."""
    candidates = []
    for meeting in meetings:
        text = meeting.location_text().lower()
        if not text.strip():
            continue
        if any(k in text for k in local_keywords):
            continue
        if meeting.start <= as_of:
            continue
        candidates.append(meeting)
    return candidates
