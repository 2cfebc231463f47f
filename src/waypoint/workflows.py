"""Shared workflow layer between the CLI and any other front end.

Each function resolves ids through the repositories, hands plain data to the
functional core, and raises NotFoundError when an id doesn't resolve.
"""

import logging
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from .config import Config
from .core.clusters import LocationCluster, StrategicPolicy, cluster, group_by_location, travel_candidates
from .core.models import Contact, Meeting, RelevanceScore, Trip
from .core.planning import TravelTask, build_trip, local_contacts, plan_tasks
from .core.ranking import RankedSuggestion, ScoredMeeting, rank
from .core.scoring import make_rules, score, score_pair
from .ports import ContactRepository, MeetingRepository, TripRepository

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """Raised when a meeting or trip id doesn't resolve."""


def get_trip(trips: TripRepository, trip_id: str) -> Trip:
    trip = trips.get(trip_id)
    if trip is None:
        raise NotFoundError(f"Trip with ID {trip_id} not found")
    return trip


def get_meeting(meetings: MeetingRepository, meeting_id: str) -> Meeting:
    meeting = meetings.get(meeting_id)
    if meeting is None:
        raise NotFoundError(f"Meeting with ID {meeting_id} not found")
    return meeting


def score_meeting(
    meetings: MeetingRepository,
    trips: TripRepository,
    meeting_id: str,
    trip_id: str,
    config: Config | None = None,
) -> RelevanceScore:
    """Score one meeting against one trip."""
    config = config or Config()
    meeting = get_meeting(meetings, meeting_id)
    trip = get_trip(trips, trip_id)
    return score_pair(meeting, trip, make_rules(proximity_days=config.proximity_days))


def suggest_meetings_for_trip(
    meetings: MeetingRepository,
    trips: TripRepository,
    trip_id: str,
    config: Config | None = None,
) -> list[RankedSuggestion]:
    """
    Rank unlinked meetings near a trip by relevance.

    Candidates start within the trip dates extended by the suggestion window
    on either side.
    """
    config = config or Config()
    trip = get_trip(trips, trip_id)
    window = timedelta(days=config.suggestion_window_days)
    earliest = trip.start_date - window
    latest = trip.end_date + window
    rules = make_rules(proximity_days=config.proximity_days)

    scored = []
    for meeting in meetings.list_all():
        if meeting.id in trip.related_meetings:
            continue
        if not earliest <= meeting.start.date() <= latest:
            continue
        scored.append(ScoredMeeting(meeting, score(meeting, trip, rules)))

    logger.debug(f"Trip {trip_id}: {len(scored)} candidate meetings")
    return rank(scored)


def find_travel_clusters(
    meetings: MeetingRepository,
    as_of: datetime | None = None,
    config: Config | None = None,
) -> list[LocationCluster]:
    """Upcoming out-of-town meetings grouped into candidate destinations."""
    config = config or Config()
    as_of = _local_naive(as_of or datetime.now(ZoneInfo(config.timezone)), config)
    candidates = travel_candidates(meetings.list_all(), as_of, tuple(config.local_keywords))
    policy = StrategicPolicy(
        keywords=tuple(config.strategic_keywords),
        attendee_threshold=config.strategic_attendee_threshold,
    )
    return cluster(candidates, policy)


def _local_naive(moment: datetime, config: Config) -> datetime:
    """Express a moment as naive wall-clock time in the configured timezone."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(ZoneInfo(config.timezone)).replace(tzinfo=None)


def create_trip_from_meetings(
    meetings: MeetingRepository,
    trips: TripRepository,
    meeting_ids: list[str],
    trip_id: str | None = None,
) -> Trip:
    """Build and save a trip covering the given meetings."""
    selected = meetings.find_many(meeting_ids)
    if not selected:
        raise NotFoundError("No valid meetings found for the provided IDs")

    missing = set(meeting_ids) - {m.id for m in selected}
    if missing:
        logger.warning(f"Ignoring unknown meeting IDs: {', '.join(sorted(missing))}")

    trip_id = trip_id or _next_trip_id(trips)
    trip = build_trip(trip_id, selected, group_by_location(selected))
    trips.save(trip)
    logger.info(f"Created trip {trip.id} with {len(selected)} meetings")
    return trip


def _next_trip_id(trips: TripRepository) -> str:
    existing = {t.id for t in trips.list_all()}
    n = len(existing) + 1
    while f"trip-{n}" in existing:
        n += 1
    return f"trip-{n}"


def link_meetings(
    meetings: MeetingRepository,
    trips: TripRepository,
    trip_id: str,
    meeting_ids: list[str],
) -> Trip:
    """Attach meetings to a trip. Already-linked ids are left alone."""
    trip = get_trip(trips, trip_id)
    for meeting_id in meeting_ids:
        get_meeting(meetings, meeting_id)
        if meeting_id not in trip.related_meetings:
            trip.related_meetings.append(meeting_id)
    trips.save(trip)
    return trip


def unlink_meeting(trips: TripRepository, trip_id: str, meeting_id: str) -> Trip:
    """Detach a meeting from a trip and from any destination that planned it."""
    trip = get_trip(trips, trip_id)
    if meeting_id not in trip.related_meetings:
        raise NotFoundError(f"Meeting {meeting_id} is not linked to trip {trip_id}")
    trip.related_meetings = [m for m in trip.related_meetings if m != meeting_id]
    for dest in trip.destinations:
        dest.planned_meetings = [m for m in dest.planned_meetings if m != meeting_id]
    trips.save(trip)
    return trip


def plan_trip_tasks(
    meetings: MeetingRepository,
    trips: TripRepository,
    trip_id: str,
) -> list[TravelTask]:
    """Suggested prep, coordination and follow-up tasks for a trip."""
    trip = get_trip(trips, trip_id)
    linked = meetings.find_many(trip.related_meetings)
    return plan_tasks(trip, linked)


def find_local_contacts(
    contacts: ContactRepository,
    trips: TripRepository,
    trip_id: str,
) -> list[Contact]:
    """Contacts based in one of the trip's destination cities."""
    trip = get_trip(trips, trip_id)
    return local_contacts(contacts.list_all(), trip)
