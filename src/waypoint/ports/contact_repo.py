"""Contact repository interface."""

from typing import Protocol

from waypoint.core.models import Contact


class ContactRepository(Protocol):
    """Read access to contacts."""

    def get(self, contact_id: str) -> Contact | None:
        ...

    def list_all(self) -> list[Contact]:
        ...
