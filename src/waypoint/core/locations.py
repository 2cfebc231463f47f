"""Free-text location normalization - no I/O dependencies."""

from dataclasses import dataclass

from .models import MeetingLocation

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class CanonicalLocation:
    """City/country pair extracted from a location string."""

    city: str
    country: str

    @property
    def key(self) -> tuple[str, str]:
        """Case-insensitive grouping key."""
        return (self.city.casefold(), self.country.casefold())

    @property
    def is_known(self) -> bool:
        return self.city != UNKNOWN

    def __str__(self) -> str:
        if self.country == UNKNOWN:
            return self.city
        return f"{self.city}, {self.country}"


def _title_case(text: str) -> str:
    # Per whitespace word; str.title() also splits on apostrophes ("St. John'S")
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split())


def normalize(location: MeetingLocation | str | None) -> CanonicalLocation:
    """
    Extract a canonical city/country from a location.

    The city is the text before the first comma, title-cased. The country is
    the last comma-separated segment. Never raises: anything unparseable
    becomes Unknown.
    """
    if isinstance(location, MeetingLocation):
        location = location.text()
    if not location or not location.strip():
        return CanonicalLocation(UNKNOWN, UNKNOWN)

    city_part, sep, rest = location.partition(",")
    city = _title_case(city_part.strip()) or UNKNOWN

    country = UNKNOWN
    if sep:
        country = rest.split(",")[-1].strip() or UNKNOWN

    return CanonicalLocation(city, country)
