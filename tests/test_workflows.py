"""Tests for the shared workflow layer."""

import json
from datetime import date, datetime, time, timedelta, timezone

import pytest

from waypoint.adapters.json_store import JsonDataStore
from waypoint.adapters.memory import (
    InMemoryContactRepository,
    InMemoryMeetingRepository,
    InMemoryTripRepository,
)
from waypoint.config import Config
from waypoint.core.models import Attendee, Contact, Destination, Meeting, Trip, TripPurpose
from waypoint.workflows import (
    NotFoundError,
    create_trip_from_meetings,
    find_local_contacts,
    find_travel_clusters,
    link_meetings,
    plan_trip_tasks,
    score_meeting,
    suggest_meetings_for_trip,
    unlink_meeting,
)


def _meeting(id, title, day, location=None, attendees=()):
    start = datetime.combine(day, time(10, 0))
    return Meeting(
        id=id,
        title=title,
        start=start,
        end=start + timedelta(hours=1),
        location=location,
        attendees=[Attendee(id=a) for a in attendees],
    )


@pytest.fixture
def meetings():
    return InMemoryMeetingRepository(
        [
            _meeting("linked", "Client kickoff", date(2025, 6, 2), "Paris, France", ["c1"]),
            _meeting("sync", "Client Sync", date(2025, 6, 3), "Paris, France", ["c1"]),
            _meeting("tokyo", "Sync", date(2025, 6, 3), "Tokyo, Japan"),
            _meeting("after", "Wrap-up", date(2025, 6, 7), "Lyon, France"),
            _meeting("far", "Planning", date(2025, 7, 20), "Paris, France"),
        ]
    )


@pytest.fixture
def trips():
    return InMemoryTripRepository(
        [
            Trip(
                id="t1",
                title="Paris client visit",
                purpose=TripPurpose.CLIENT_VISIT,
                start_date=date(2025, 6, 1),
                end_date=date(2025, 6, 5),
                destinations=[
                    Destination("dest-1", "Paris", "France", date(2025, 6, 1), date(2025, 6, 5), ["linked"])
                ],
                related_meetings=["linked"],
                related_contacts=["c1"],
            )
        ]
    )


class TestScoreMeeting:
    def test_scores_pair(self, meetings, trips):
        result = score_meeting(meetings, trips, "sync", "t1")
        assert result.score == 11
        assert result.label == "high"

    def test_unknown_meeting(self, meetings, trips):
        with pytest.raises(NotFoundError, match="Meeting with ID nope not found"):
            score_meeting(meetings, trips, "nope", "t1")

    def test_unknown_trip(self, meetings, trips):
        with pytest.raises(NotFoundError, match="Trip with ID nope not found"):
            score_meeting(meetings, trips, "sync", "nope")


class TestSuggestMeetingsForTrip:
    def test_ranks_unlinked_meetings_in_window(self, meetings, trips):
        ranked = suggest_meetings_for_trip(meetings, trips, "t1")
        assert [(r.meeting.id, r.score, r.label) for r in ranked] == [
            ("sync", 11, "high"),
            ("tokyo", 5, "high"),
            # country match + 2 days after the trip
            ("after", 4, "medium"),
        ]

    def test_window_is_configurable(self, meetings, trips):
        ranked = suggest_meetings_for_trip(meetings, trips, "t1", Config(suggestion_window_days=0))
        assert [r.meeting.id for r in ranked] == ["sync", "tokyo"]

    def test_unknown_trip(self, meetings, trips):
        with pytest.raises(NotFoundError):
            suggest_meetings_for_trip(meetings, trips, "missing")


class TestFindTravelClusters:
    def test_clusters_future_meetings(self, meetings):
        clusters = find_travel_clusters(meetings, as_of=datetime(2025, 6, 1))
        assert [c.location.city for c in clusters] == ["Paris"]
        assert [m.id for m in clusters[0].meetings] == ["linked", "sync", "far"]

    def test_config_policy(self, meetings):
        config = Config(strategic_keywords=["wrap-up"])
        clusters = find_travel_clusters(meetings, as_of=datetime(2025, 6, 1), config=config)
        assert [c.location.city for c in clusters] == ["Paris", "Lyon"]

    def test_mixed_z_suffixed_and_naive_times(self, tmp_path):
        path = tmp_path / "waypoint.json"
        path.write_text(
            json.dumps(
                {
                    "meetings": [
                        {
                            "id": "a",
                            "title": "Kickoff",
                            "startTime": "2030-06-03T10:00:00.000Z",
                            "endTime": "2030-06-03T11:00:00.000Z",
                            "location": "Berlin, Germany",
                        },
                        {
                            "id": "b",
                            "title": "Review",
                            "startTime": "2030-06-04T09:00:00",
                            "location": "Berlin, Germany",
                        },
                    ]
                }
            )
        )
        store = JsonDataStore(path)
        clusters = find_travel_clusters(store.meetings, as_of=datetime(2030, 6, 1))
        assert len(clusters) == 1
        assert [m.id for m in clusters[0].meetings] == ["a", "b"]
        assert clusters[0].date_range.start == datetime(2030, 6, 3, 10, 0)

    def test_aware_as_of_uses_configured_timezone(self, meetings):
        # 02:00 UTC is 11:00 in Tokyo, after the 10:00 "sync" meeting
        as_of = datetime(2025, 6, 3, 2, 0, tzinfo=timezone.utc)
        utc = find_travel_clusters(meetings, as_of=as_of)
        assert [m.id for m in utc[0].meetings] == ["sync", "far"]
        assert find_travel_clusters(meetings, as_of=as_of, config=Config(timezone="Asia/Tokyo")) == []


class TestCreateTripFromMeetings:
    def test_creates_and_saves(self, meetings, trips):
        trip = create_trip_from_meetings(meetings, trips, ["tokyo", "sync"])
        assert trip.id == "trip-2"
        assert trips.get("trip-2") == trip
        assert trip.related_meetings == ["tokyo", "sync"]
        assert [d.city for d in trip.destinations] == ["Tokyo", "Paris"]
        assert trip.purpose is TripPurpose.CLIENT_VISIT

    def test_explicit_id(self, meetings, trips):
        assert create_trip_from_meetings(meetings, trips, ["sync"], trip_id="x").id == "x"

    def test_ignores_unknown_ids(self, meetings, trips, caplog):
        trip = create_trip_from_meetings(meetings, trips, ["sync", "ghost"])
        assert trip.related_meetings == ["sync"]
        assert "ghost" in caplog.text

    def test_no_valid_meetings(self, meetings, trips):
        with pytest.raises(NotFoundError, match="No valid meetings"):
            create_trip_from_meetings(meetings, trips, ["ghost"])


class TestLinking:
    def test_link_is_idempotent(self, meetings, trips):
        link_meetings(meetings, trips, "t1", ["sync", "linked", "sync"])
        assert trips.get("t1").related_meetings == ["linked", "sync"]

    def test_link_unknown_meeting(self, meetings, trips):
        with pytest.raises(NotFoundError):
            link_meetings(meetings, trips, "t1", ["ghost"])
        assert trips.get("t1").related_meetings == ["linked"]

    def test_unlink_removes_from_destinations(self, trips):
        trip = unlink_meeting(trips, "t1", "linked")
        assert trip.related_meetings == []
        assert trip.destinations[0].planned_meetings == []
        assert trips.get("t1").related_meetings == []

    def test_unlink_not_linked(self, trips):
        with pytest.raises(NotFoundError, match="not linked"):
            unlink_meeting(trips, "t1", "sync")

    def test_linked_meeting_no_longer_suggested(self, meetings, trips):
        link_meetings(meetings, trips, "t1", ["sync"])
        ranked = suggest_meetings_for_trip(meetings, trips, "t1")
        assert "sync" not in [r.meeting.id for r in ranked]


class TestPlanTripTasks:
    def test_uses_linked_meetings(self, meetings, trips):
        tasks = plan_trip_tasks(meetings, trips, "t1")
        assert [t.category for t in tasks] == ["Meeting Preparation", "Follow-up"]
        assert tasks[0].title == "Prepare for meeting: Client kickoff"

    def test_unknown_trip(self, meetings, trips):
        with pytest.raises(NotFoundError):
            plan_trip_tasks(meetings, trips, "missing")


class TestFindLocalContacts:
    def test_matches_destination_city(self, trips):
        contacts = InMemoryContactRepository(
            [Contact(id="c1", name="Amélie", company="Paris Consulting"), Contact(id="c2", name="Ben")]
        )
        assert [c.id for c in find_local_contacts(contacts, trips, "t1")] == ["c1"]
