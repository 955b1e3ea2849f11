"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime

from events.domain import Attendance, Event, Registration, Speaker


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def find_by_id(self, event_id: int) -> Event | None:
        """Return an event by ID (active or not), or None if not found."""
        ...

    @abstractmethod
    def save(self, event: Event) -> Event:
        """Insert (id is None) or update an event and return the stored version."""
        ...

    @abstractmethod
    def lock_event(self, event_id: int) -> AbstractContextManager[Event | None]:
        """Hold an exclusive lock on one event for the duration of the block.

        Yields the freshly read event (or None). All store writes made inside
        the block are applied as one atomic unit. Locks on different events
        never contend.
        """
        ...

    @abstractmethod
    def find_active(self) -> list[Event]:
        """Return active events ordered by event_date ascending."""
        ...

    @abstractmethod
    def find_upcoming(self, now: datetime) -> list[Event]:
        """Return active events at or after ``now``, ordered by event_date ascending."""
        ...

    @abstractmethod
    def search_by_title_or_category(self, term: str) -> list[Event]:
        """Return active events whose title or category contains ``term`` (case-insensitive)."""
        ...

    @abstractmethod
    def find_by_category(self, category: str) -> list[Event]:
        """Return active events in ``category`` (case-insensitive), ordered by event_date."""
        ...

    @abstractmethod
    def find_by_owner(self, user_id: int) -> list[Event]:
        """Return active events owned by a user, ordered by event_date."""
        ...


class RegistrationStore(ABC):
    """Interface for registration persistence operations.

    Implementations reject a second row for the same (event, user) pair.
    """

    @abstractmethod
    def find_by_event_and_user(self, event_id: int, user_id: int) -> Registration | None:
        """Return the registration for the pair, or None."""
        ...

    @abstractmethod
    def find_by_event(self, event_id: int) -> list[Registration]:
        """Return all registrations for an event, ordered by registered_at."""
        ...

    @abstractmethod
    def find_by_user(self, user_id: int) -> list[Registration]:
        """Return all registrations of a user, ordered by registered_at."""
        ...

    @abstractmethod
    def count_active(self, event_id: int) -> int:
        """Count registrations for an event that hold a seat (REGISTERED or ATTENDED)."""
        ...

    @abstractmethod
    def save(self, registration: Registration) -> Registration:
        """Insert (id is None) or update a registration.

        Raises:
            AlreadyRegisteredError: If inserting would create a second row for the pair.
        """
        ...

    @abstractmethod
    def mark_confirmation_sent(self, registration_id: int, sent_at: datetime) -> None:
        """Set confirmation_sent_at without touching any other column."""
        ...


class AttendanceStore(ABC):
    """Interface for attendance persistence operations."""

    @abstractmethod
    def find_by_event_and_user(self, event_id: int, user_id: int) -> Attendance | None:
        """Return the attendance for the pair, or None."""
        ...

    @abstractmethod
    def count_by_event(self, event_id: int) -> int:
        """Count attendances for an event."""
        ...

    @abstractmethod
    def save(self, attendance: Attendance) -> Attendance:
        """Insert an attendance.

        Raises:
            AlreadyCheckedInError: If the pair already has an attendance.
        """
        ...


class SpeakerStore(ABC):
    """Interface for speakers and their assignment to events."""

    @abstractmethod
    def find_by_id(self, speaker_id: int) -> Speaker | None:
        ...

    @abstractmethod
    def find_by_event(self, event_id: int) -> list[Speaker]:
        """Return the speakers assigned to an event, in assignment order."""
        ...

    @abstractmethod
    def save(self, speaker: Speaker) -> Speaker:
        """Insert (id is None) or update a speaker and return the stored version."""
        ...

    @abstractmethod
    def add_to_event(self, event_id: int, speaker_id: int) -> None:
        """Assign a speaker to an event. Assigning the same pair twice is a no-op."""
        ...
