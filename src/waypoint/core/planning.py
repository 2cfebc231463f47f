"""Pure trip planning logic - building trips and task bundles from meetings."""

import math
from dataclasses import dataclass, field
from datetime import date, timedelta

from .clusters import LocationCluster
from .models import Budget, Contact, Destination, Meeting, Trip, TripPurpose

DAILY_RATE = 200

BUDGET_SHARES = {
    "transportation": 0.4,
    "accommodation": 0.35,
    "meals": 0.15,
    "entertainment": 0.05,
    "business": 0.03,
    "miscellaneous": 0.02,
}

# Checked in order; first hit wins
PURPOSE_KEYWORDS = (
    (TripPurpose.TRAINING, ("training", "workshop", "seminar", "course", "certification")),
    (TripPurpose.CONFERENCE, ("conference", "summit", "expo", "convention", "workshop")),
    (TripPurpose.CLIENT_VISIT, ("business", "client", "proposal", "contract", "negotiation", "sales")),
)


@dataclass
class TravelWindow:
    """Dates a trip should cover, padded around its meetings."""

    start_date: date
    end_date: date
    buffer_days: int


@dataclass
class TravelTask:
    """A task suggested for a trip."""

    title: str
    description: str
    category: str
    due_date: date
    priority: str = "high"
    estimated_minutes: int = 60
    tags: list[str] = field(default_factory=list)
    checklist: list[str] = field(default_factory=list)


def travel_window(meetings: list[Meeting], cluster_count: int) -> TravelWindow:
    """Span of the meetings, padded by one buffer day per two destinations (min 1)."""
    buffer_days = max(1, math.ceil(cluster_count / 2))
    earliest = min(m.start for m in meetings).date()
    latest = max(m.start for m in meetings).date()
    return TravelWindow(
        start_date=earliest - timedelta(days=buffer_days),
        end_date=latest + timedelta(days=buffer_days),
        buffer_days=buffer_days,
    )


def cluster_purpose(cluster: LocationCluster) -> str:
    """Short description of what the meetings in a cluster are for."""
    titles = " ".join(m.title.lower() for m in cluster.meetings)
    if "conference" in titles or "summit" in titles:
        return "Conference attendance"
    if "training" in titles or "workshop" in titles:
        return "Training session"
    if "client" in titles or "customer" in titles:
        return "Client meetings"
    return "Business meetings"


def destinations_from_clusters(clusters: list[LocationCluster]) -> list[Destination]:
    """One destination per cluster, arriving a day early and leaving a day late."""
    destinations = []
    for i, c in enumerate(clusters, start=1):
        first, last = c.meetings[0], c.meetings[-1]
        destinations.append(
            Destination(
                id=f"dest-{i}",
                city=c.location.city,
                country=c.location.country,
                arrival_date=first.start.date() - timedelta(days=1),
                departure_date=last.finish.date() + timedelta(days=1),
                planned_meetings=[m.id for m in c.meetings],
                purpose=cluster_purpose(c),
                notes=f"{len(c.meetings)} meeting(s) scheduled in this location",
            )
        )
    return destinations


def determine_purpose(meetings: list[Meeting]) -> TripPurpose:
    """Guess the trip purpose from meeting titles and descriptions."""
    text = " ".join(f"{m.title} {m.description}" for m in meetings).lower()
    for purpose, keywords in PURPOSE_KEYWORDS:
        if any(k in text for k in keywords):
            return purpose
    return TripPurpose.BUSINESS


def trip_title(clusters: list[LocationCluster]) -> str:
    if len(clusters) == 1:
        return f"Business Trip to {clusters[0].location}"
    cities = ", ".join(c.location.city for c in clusters)
    return f"Multi-City Business Trip: {cities}"


def trip_description(meetings: list[Meeting], clusters: list[LocationCluster]) -> str:
    purposes = ", ".join(cluster_purpose(c) for c in clusters)
    return (
        f"Trip includes {len(meetings)} meeting(s) across {len(clusters)} location(s). "
        f"Key activities: {purposes}. "
        "Generated automatically from meeting schedule."
    )


def related_contacts(meetings: list[Meeting]) -> list[str]:
    """Unique attendee ids across meetings, in first-seen order."""
    return list(dict.fromkeys(a for m in meetings for a in m.attendee_ids()))


def estimate_budget(window: TravelWindow, location_count: int) -> Budget:
    """Flat daily-rate estimate scaled by the number of locations."""
    duration = (window.end_date - window.start_date).days
    multiplier = max(1.0, location_count * 0.5)
    total = duration * DAILY_RATE * multiplier
    return Budget(
        total=total,
        breakdown={k: round(total * share, 2) for k, share in BUDGET_SHARES.items()},
    )


def build_trip(trip_id: str, meetings: list[Meeting], clusters: list[LocationCluster]) -> Trip:
    """
    Assemble a trip from meetings already grouped by location.

    Pure function - no I/O. Meetings must be non-empty.
    """
    window = travel_window(meetings, len(clusters))
    return Trip(
        id=trip_id,
        title=trip_title(clusters) if clusters else "Business Trip",
        purpose=determine_purpose(meetings),
        start_date=window.start_date,
        end_date=window.end_date,
        destinations=destinations_from_clusters(clusters),
        related_meetings=[m.id for m in meetings],
        related_contacts=related_contacts(meetings),
        description=trip_description(meetings, clusters),
        budget=estimate_budget(window, len(clusters)),
    )


def plan_tasks(trip: Trip, meetings: list[Meeting]) -> list[TravelTask]:
    """
    Suggested tasks for a trip: prep per meeting, coordination, follow-up.

    Pure function - no I/O.
    """
    tasks = []
    for meeting in meetings:
        tasks.append(
            TravelTask(
                title=f"Prepare for meeting: {meeting.title}",
                description=f"Preparation task for meeting during trip: {trip.title}",
                category="Meeting Preparation",
                due_date=meeting.start.date() - timedelta(days=1),
                estimated_minutes=60,
                tags=["meeting-prep", f"trip-{trip.id}", f"meeting-{meeting.id}"],
                checklist=[
                    "Review meeting agenda",
                    "Prepare presentation materials",
                    "Research attendee backgrounds",
                    "Confirm meeting location and logistics",
                ],
            )
        )

    if len(meetings) > 1:
        tasks.append(
            TravelTask(
                title="Coordinate meeting logistics during travel",
                description=f"Coordinate {len(meetings)} meetings during trip: {trip.title}",
                category="Travel Coordination",
                due_date=trip.start_date - timedelta(days=3),
                estimated_minutes=90,
                tags=["coordination", f"trip-{trip.id}", "logistics"],
                checklist=[
                    "Confirm all meeting times and locations",
                    "Plan transportation between meetings",
                    "Share itinerary with key stakeholders",
                    "Prepare backup communication plans",
                ],
            )
        )

    tasks.append(
        TravelTask(
            title="Follow up on trip meetings and action items",
            description=f"Post-trip follow-up for {len(meetings)} meetings during: {trip.title}",
            category="Follow-up",
            due_date=trip.end_date + timedelta(days=2),
            estimated_minutes=120,
            tags=["follow-up", f"trip-{trip.id}", "meetings"],
            checklist=[
                "Send thank you notes to meeting attendees",
                "Update CRM with meeting outcomes",
                "Create action items from meeting notes",
                "Schedule follow-up meetings as needed",
            ],
        )
    )
    return tasks


def local_contacts(contacts: list[Contact], trip: Trip) -> list[Contact]:
    """Contacts whose company or notes mention one of the trip's destination cities."""
    cities = [d.city.lower() for d in trip.destinations if d.city.strip()]
    return [
        c
        for c in contacts
        if any(city in c.company.lower() or city in c.notes.lower() for city in cities)
    ]
