"""JSON file data store - loads repositories from a single data file."""

import json
import logging
from pathlib import Path
from zoneinfo import ZoneInfo

from waypoint.core.models import Contact, Meeting, Trip

from .memory import InMemoryContactRepository, InMemoryMeetingRepository, InMemoryTripRepository

logger = logging.getLogger(__name__)


def _load_records(data: dict, key: str, factory) -> list:
    records = []
    for item in data.get(key, []):
        try:
            records.append(factory(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed {key} record: {e}")
    return records


class JsonDataStore:
    """
    File-backed store for meetings, trips and contacts.

    The file is a JSON object with "meetings", "trips" and "contacts" arrays.
    A missing file gives empty repositories. Only trips are ever written back.
    Meeting times carrying an offset are converted to `timezone` and stored
    naive.
    """

    def __init__(self, path: Path | str, timezone: str = "UTC"):
        self.path = Path(path).expanduser()
        tz = ZoneInfo(timezone)
        data = self._read()
        self.meetings = InMemoryMeetingRepository(
            _load_records(data, "meetings", lambda item: Meeting.from_dict(item, tz))
        )
        self.trips = InMemoryTripRepository(_load_records(data, "trips", Trip.from_dict))
        self.contacts = InMemoryContactRepository(_load_records(data, "contacts", Contact.from_dict))
        logger.debug(
            f"Loaded {len(self.meetings.list_all())} meetings, {len(self.trips.list_all())} trips "
            f"from {self.path}"
        )

    def _read(self) -> dict:
        if not self.path.exists():
            logger.info(f"No data file at {self.path}, starting empty")
            return {}
        data = json.loads(self.path.read_text())
        if not isinstance(data, dict):
            raise ValueError(f"{self.path}: expected a JSON object at top level")
        return data

    def save_trips(self) -> None:
        """Write trips back, leaving the rest of the file untouched."""
        data = self._read()
        data["trips"] = [t.to_dict() for t in self.trips.list_all()]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))
