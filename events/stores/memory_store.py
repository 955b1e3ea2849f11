"""In-memory implementations of the event, registration, attendance and speaker stores.

Used by the service tests and for running the services without a database.
Writes are not rolled back when a ``lock_event`` block raises; services
validate before they write.
"""

import itertools
import threading
from collections import defaultdict
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime

from django.utils import timezone

from events.domain import Attendance, Event, Registration, Speaker
from events.domain.errors import AlreadyCheckedInError, AlreadyRegisteredError
from events.stores.interfaces import AttendanceStore, EventStore, RegistrationStore, SpeakerStore


class InMemoryEventStore(EventStore):
    """Dict-backed event store with one lock per event."""

    def __init__(self) -> None:
        self._events: dict[int, Event] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._event_locks: defaultdict[int, threading.Lock] = defaultdict(threading.Lock)

    def _active(self) -> list[Event]:
        events = [e for e in list(self._events.values()) if e.is_active]
        return sorted(events, key=lambda e: (e.event_date, e.id))

    def find_by_id(self, event_id: int) -> Event | None:
        return self._events.get(event_id)

    def save(self, event: Event) -> Event:
        with self._lock:
            now = timezone.now()
            if event.id is None:
                event = replace(event, id=next(self._ids), created_at=now, updated_at=now)
            else:
                event = replace(event, updated_at=now)
            self._events[event.id] = event
            return event

    @contextmanager
    def lock_event(self, event_id: int) -> Iterator[Event | None]:
        with self._lock:
            event_lock = self._event_locks[event_id]
        with event_lock:
            yield self._events.get(event_id)

    def find_active(self) -> list[Event]:
        return self._active()

    def find_upcoming(self, now: datetime) -> list[Event]:
        return [e for e in self._active() if e.event_date >= now]

    def search_by_title_or_category(self, term: str) -> list[Event]:
        needle = term.lower()
        return [e for e in self._active() if needle in e.title.lower() or needle in e.category.lower()]

    def find_by_category(self, category: str) -> list[Event]:
        return [e for e in self._active() if e.category.lower() == category.lower()]

    def find_by_owner(self, user_id: int) -> list[Event]:
        return [e for e in self._active() if e.owner_id == user_id]


class InMemoryRegistrationStore(RegistrationStore):
    """Dict-backed registration store keyed by (event, user)."""

    def __init__(self) -> None:
        self._rows: dict[tuple[int, int], Registration] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _ordered(self, rows: list[Registration]) -> list[Registration]:
        return sorted(rows, key=lambda r: (r.registered_at, r.id))

    def find_by_event_and_user(self, event_id: int, user_id: int) -> Registration | None:
        return self._rows.get((event_id, user_id))

    def find_by_event(self, event_id: int) -> list[Registration]:
        return self._ordered([r for r in list(self._rows.values()) if r.event_id == event_id])

    def find_by_user(self, user_id: int) -> list[Registration]:
        return self._ordered([r for r in list(self._rows.values()) if r.user_id == user_id])

    def count_active(self, event_id: int) -> int:
        return sum(1 for r in self.find_by_event(event_id) if r.status.holds_seat)

    def save(self, registration: Registration) -> Registration:
        key = (registration.event_id, registration.user_id)
        with self._lock:
            existing = self._rows.get(key)
            if registration.id is None:
                if existing is not None:
                    raise AlreadyRegisteredError()
                registration = replace(registration, id=next(self._ids))
            elif existing is not None and existing.id != registration.id:
                raise AlreadyRegisteredError()
            self._rows[key] = registration
            return registration

    def mark_confirmation_sent(self, registration_id: int, sent_at: datetime) -> None:
        with self._lock:
            for key, row in self._rows.items():
                if row.id == registration_id:
                    self._rows[key] = replace(row, confirmation_sent_at=sent_at)
                    return


class InMemoryAttendanceStore(AttendanceStore):
    """Dict-backed attendance store keyed by (event, user)."""

    def __init__(self) -> None:
        self._rows: dict[tuple[int, int], Attendance] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def find_by_event_and_user(self, event_id: int, user_id: int) -> Attendance | None:
        return self._rows.get((event_id, user_id))

    def count_by_event(self, event_id: int) -> int:
        return sum(1 for a in list(self._rows.values()) if a.event_id == event_id)

    def save(self, attendance: Attendance) -> Attendance:
        key = (attendance.event_id, attendance.user_id)
        with self._lock:
            if key in self._rows:
                raise AlreadyCheckedInError()
            attendance = replace(attendance, id=next(self._ids))
            self._rows[key] = attendance
            return attendance


class InMemorySpeakerStore(SpeakerStore):
    """Dict-backed speaker store; assignments are kept as an ordered list of pairs."""

    def __init__(self) -> None:
        self._speakers: dict[int, Speaker] = {}
        self._assignments: list[tuple[int, int]] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def find_by_id(self, speaker_id: int) -> Speaker | None:
        return self._speakers.get(speaker_id)

    def find_by_event(self, event_id: int) -> list[Speaker]:
        return [self._speakers[s] for e, s in list(self._assignments) if e == event_id]

    def save(self, speaker: Speaker) -> Speaker:
        with self._lock:
            if speaker.id is None:
                speaker = replace(speaker, id=next(self._ids))
            self._speakers[speaker.id] = speaker
            return speaker

    def add_to_event(self, event_id: int, speaker_id: int) -> None:
        with self._lock:
            if (event_id, speaker_id) not in self._assignments:
                self._assignments.append((event_id, speaker_id))
