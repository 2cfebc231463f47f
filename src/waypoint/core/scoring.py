"""Meeting-to-trip relevance scoring - no I/O dependencies.

A score is the sum of named rule contributions. Each rule is a weight and a
predicate returning a bool or a count, so every term can be tested on its own.
"""

import re
from dataclasses import dataclass
from typing import Callable, Protocol

from .locations import normalize
from .models import Meeting, RelevanceScore, Trip, TripPurpose
from .ranking import label_for

NEAR_MISS_DAYS = 3


class KeywordStrategy(Protocol):
    """Bonus points for a meeting whose title fits the trip's purpose."""

    def bonus(self, meeting: Meeting, trip: Trip) -> int:
        ...


@dataclass
class PurposeKeywordStrategy:
    """Substring match of a per-purpose keyword in the meeting title."""

    keywords: dict[TripPurpose, tuple[str, int]] | None = None

    def __post_init__(self):
        if self.keywords is None:
            self.keywords = {
                TripPurpose.BUSINESS: ("business", 1),
                TripPurpose.CONFERENCE: ("conference", 2),
                TripPurpose.CLIENT_VISIT: ("client", 2),
            }

    def bonus(self, meeting: Meeting, trip: Trip) -> int:
        entry = self.keywords.get(trip.purpose)
        if not entry:
            return 0
        keyword, points = entry
        return points if keyword in meeting.title.lower() else 0


@dataclass(frozen=True)
class ScoringRule:
    """A named scoring term: contributes weight * predicate(meeting, trip)."""

    name: str
    weight: int
    predicate: Callable[[Meeting, Trip], int | bool]

    def points(self, meeting: Meeting, trip: Trip) -> int:
        return self.weight * int(self.predicate(meeting, trip))


def _mentions(text: str, name: str) -> bool:
    """Whole-word occurrence of name in text."""
    return re.search(rf"(?<!\w){re.escape(name)}(?!\w)", text) is not None


def location_matches(meeting: Meeting, trip: Trip) -> bool:
    """Meeting location names one of the trip's destination cities or countries."""
    text = meeting.location_text().casefold()
    if not text.strip():
        return False
    canonical = normalize(text)
    city, country = canonical.key

    for dest in trip.destinations:
        for name in (dest.city.casefold().strip(), dest.country.casefold().strip()):
            if not name:
                continue
            if name in (city, country) or _mentions(text, name):
                return True
    return False


def starts_within_trip(meeting: Meeting, trip: Trip) -> bool:
    return trip.contains(meeting.start.date())


def near_miss_days(meeting: Meeting, trip: Trip, window: int = NEAR_MISS_DAYS) -> int:
    """Proximity points for a meeting just outside the trip: window minus days away."""
    days = trip.days_outside(meeting.start.date())
    if days == 0:
        return 0
    return max(0, window - days)


def shared_attendees(meeting: Meeting, trip: Trip) -> int:
    related = set(trip.related_contacts)
    return sum(1 for attendee_id in meeting.attendee_ids() if attendee_id in related)


def make_rules(
    keyword_strategy: KeywordStrategy | None = None,
    proximity_days: int = NEAR_MISS_DAYS,
) -> tuple[ScoringRule, ...]:
    """Build the scoring table, optionally with a custom keyword strategy."""
    strategy = keyword_strategy or PurposeKeywordStrategy()
    return (
        ScoringRule("location", 3, location_matches),
        ScoringRule("in_range", 5, starts_within_trip),
        ScoringRule("proximity", 1, lambda m, t: near_miss_days(m, t, proximity_days)),
        ScoringRule("attendees", 1, shared_attendees),
        ScoringRule("keyword", 1, strategy.bonus),
    )


DEFAULT_RULES = make_rules()


def explain(
    meeting: Meeting,
    trip: Trip,
    rules: tuple[ScoringRule, ...] = DEFAULT_RULES,
) -> dict[str, int]:
    """Per-rule contributions, in table order."""
    return {rule.name: rule.points(meeting, trip) for rule in rules}


def score(
    meeting: Meeting,
    trip: Trip,
    rules: tuple[ScoringRule, ...] = DEFAULT_RULES,
) -> int:
    """
    Relevance of a meeting to a trip.

    Pure function - no I/O. Always >= 0; not bounded above.
    """
    return max(0, sum(explain(meeting, trip, rules).values()))


def score_pair(
    meeting: Meeting,
    trip: Trip,
    rules: tuple[ScoringRule, ...] = DEFAULT_RULES,
) -> RelevanceScore:
    """Score and label a meeting/trip pair."""
    value = score(meeting, trip, rules)
    return RelevanceScore(
        meeting_id=meeting.id,
        trip_id=trip.id,
        score=value,
        label=label_for(value),
    )
