"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RegistrationStatus(str, Enum):
    """Lifecycle of a registration for one (event, user) pair."""

    REGISTERED = "REGISTERED"
    CANCELLED = "CANCELLED"
    ATTENDED = "ATTENDED"

    @property
    def holds_seat(self) -> bool:
        """Whether a registration in this status counts against capacity."""
        return self is not RegistrationStatus.CANCELLED


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: int | None
    title: str
    description: str
    event_date: datetime
    venue: str
    category: str
    capacity: int
    registered_count: int
    owner_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @property
    def is_full(self) -> bool:
        return self.registered_count >= self.capacity


@dataclass(frozen=True)
class Registration:
    """Domain representation of a Registration."""

    id: int | None
    event_id: int
    user_id: int
    status: RegistrationStatus
    registered_at: datetime
    confirmation_sent_at: datetime | None = None


@dataclass(frozen=True)
class Attendance:
    """Domain representation of an Attendance check-in."""

    id: int | None
    event_id: int
    user_id: int
    checked_in_at: datetime


@dataclass(frozen=True)
class EventRequest:
    """Mutable fields of an event as supplied by a caller.

    ``event_date`` is the raw ISO-8601 date-time string.
    """

    title: str
    description: str
    event_date: str
    venue: str
    category: str
    capacity: int


@dataclass(frozen=True)
class Speaker:
    """A speaker presenting at one or more events."""

    id: int | None
    name: str
    bio: str
    expertise: str
    email: str


@dataclass(frozen=True)
class SpeakerRequest:
    """Speaker details as supplied by a caller."""

    name: str
    bio: str = ""
    expertise: str = ""
    email: str = ""


@dataclass(frozen=True)
class EventView:
    """An event as seen by a particular caller.

    ``created_by_name`` is the owner's full name; ``speakers`` keeps the order
    in which they were added to the event.
    """

    event: Event
    is_registered: bool = False
    created_by_name: str = ""
    speakers: tuple[Speaker, ...] = ()
