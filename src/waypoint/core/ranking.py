"""Ranking scored meetings into labelled suggestions - no I/O dependencies."""

from dataclasses import dataclass
from typing import Iterable, Protocol

from .models import Meeting

# (minimum score, label), highest first
LABEL_THRESHOLDS = ((5, "high"), (3, "medium"), (1, "low"))
MINIMAL = "minimal"


class Scored(Protocol):
    meeting: Meeting
    score: int


@dataclass(frozen=True)
class ScoredMeeting:
    """A meeting with its relevance score for some trip."""

    meeting: Meeting
    score: int


@dataclass(frozen=True)
class RankedSuggestion:
    """A scored meeting with its priority bucket."""

    meeting: Meeting
    score: int
    label: str


def label_for(score: int) -> str:
    """Priority bucket for a score: high, medium, low or minimal."""
    for threshold, label in LABEL_THRESHOLDS:
        if score >= threshold:
            return label
    return MINIMAL


def rank(scored: Iterable[Scored]) -> list[RankedSuggestion]:
    """
    Sort by score (descending) and attach labels.

    Pure function - no I/O. Ties keep their input order, so ranking an
    already-ranked list returns it unchanged.
    """
    ordered = sorted(scored, key=lambda item: -item.score)
    return [RankedSuggestion(item.meeting, item.score, label_for(item.score)) for item in ordered]


def group_by_label(suggestions: list[RankedSuggestion]) -> dict[str, list[RankedSuggestion]]:
    """Bucket ranked suggestions by label, preserving order within each."""
    groups: dict[str, list[RankedSuggestion]] = {label: [] for _, label in LABEL_THRESHOLDS}
    groups[MINIMAL] = []
    for suggestion in suggestions:
        groups[suggestion.label].append(suggestion)
    return groups
