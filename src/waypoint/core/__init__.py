"""Functional core - pure business logic with no I/O."""

from .models import (
    Attendee,
    Contact,
    Destination,
    Meeting,
    MeetingLocation,
    RelevanceScore,
    Trip,
    TripPurpose,
    parse_timestamp,
)
from .locations import CanonicalLocation, normalize
from .scoring import (
    DEFAULT_RULES,
    KeywordStrategy,
    PurposeKeywordStrategy,
    ScoringRule,
    explain,
    make_rules,
    score,
    score_pair,
)
from .clusters import LocationCluster, StrategicPolicy, cluster, group_by_location, travel_candidates
from .ranking import RankedSuggestion, ScoredMeeting, group_by_label, label_for, rank

__all__ = [
    # Models
    "Attendee",
    "Contact",
    "Destination",
    "Meeting",
    "MeetingLocation",
    "RelevanceScore",
    "Trip",
    "TripPurpose",
    "parse_timestamp",
    # Locations
    "CanonicalLocation",
    "normalize",
    # Scoring
    "DEFAULT_RULES",
    "KeywordStrategy",
    "PurposeKeywordStrategy",
    "ScoringRule",
    "explain",
    "make_rules",
    "score",
    "score_pair",
    # Clusters
    "LocationCluster",
    "StrategicPolicy",
    "cluster",
    "group_by_location",
    "travel_candidates",
    # Ranking
    "RankedSuggestion",
    "ScoredMeeting",
    "group_by_label",
    "label_for",
    "rank",
]
