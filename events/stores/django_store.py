"""Django ORM implementation of the event, registration, attendance and speaker stores."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet

from events import models
from events.domain import Attendance, Event, Registration, RegistrationStatus, Speaker
from events.domain.errors import AlreadyCheckedInError, AlreadyRegisteredError
from events.stores.interfaces import AttendanceStore, EventStore, RegistrationStore, SpeakerStore


def _event_to_domain(row: models.Event) -> Event:
    return Event(
        id=row.pk,
        title=row.title,
        description=row.description,
        event_date=row.event_date,
        venue=row.venue,
        category=row.category,
        capacity=row.capacity,
        registered_count=row.registered_count,
        owner_id=row.owner_id,
        is_active=row.is_active,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _registration_to_domain(row: models.Registration) -> Registration:
    return Registration(
        id=row.pk,
        event_id=row.event_id,
        user_id=row.user_id,
        status=RegistrationStatus(row.status),
        registered_at=row.registered_at,
        confirmation_sent_at=row.confirmation_sent_at,
    )


def _attendance_to_domain(row: models.Attendance) -> Attendance:
    return Attendance(
        id=row.pk,
        event_id=row.event_id,
        user_id=row.user_id,
        checked_in_at=row.checked_in_at,
    )


def _speaker_to_domain(row: models.Speaker) -> Speaker:
    return Speaker(id=row.pk, name=row.name, bio=row.bio, expertise=row.expertise, email=row.email)


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    def _active(self) -> QuerySet[models.Event]:
        return models.Event.objects.filter(is_active=True).order_by("event_date")

    def find_by_id(self, event_id: int) -> Event | None:
        row = models.Event.objects.filter(pk=event_id).first()
        return _event_to_domain(row) if row else None

    def save(self, event: Event) -> Event:
        fields = {
            "title": event.title,
            "description": event.description,
            "event_date": event.event_date,
            "venue": event.venue,
            "category": event.category,
            "capacity": event.capacity,
            "registered_count": event.registered_count,
            "owner_id": event.owner_id,
            "is_active": event.is_active,
        }
        if event.id is None:
            row = models.Event.objects.create(**fields)
        else:
            row, _ = models.Event.objects.update_or_create(pk=event.id, defaults=fields)
        return _event_to_domain(row)

    @contextmanager
    def lock_event(self, event_id: int) -> Iterator[Event | None]:
        with transaction.atomic():
            row = models.Event.objects.select_for_update().filter(pk=event_id).first()
            yield _event_to_domain(row) if row else None

    def find_active(self) -> list[Event]:
        return [_event_to_domain(row) for row in self._active()]

    def find_upcoming(self, now: datetime) -> list[Event]:
        return [_event_to_domain(row) for row in self._active().filter(event_date__gte=now)]

    def search_by_title_or_category(self, term: str) -> list[Event]:
        rows = self._active().filter(Q(title__icontains=term) | Q(category__icontains=term))
        return [_event_to_domain(row) for row in rows]

    def find_by_category(self, category: str) -> list[Event]:
        return [_event_to_domain(row) for row in self._active().filter(category__iexact=category)]

    def find_by_owner(self, user_id: int) -> list[Event]:
        return [_event_to_domain(row) for row in self._active().filter(owner_id=user_id)]


class DjangoRegistrationStore(RegistrationStore):
    """Relational registration store using Django ORM."""

    def find_by_event_and_user(self, event_id: int, user_id: int) -> Registration | None:
        row = models.Registration.objects.filter(event_id=event_id, user_id=user_id).first()
        return _registration_to_domain(row) if row else None

    def find_by_event(self, event_id: int) -> list[Registration]:
        rows = models.Registration.objects.filter(event_id=event_id).order_by("registered_at", "pk")
        return [_registration_to_domain(row) for row in rows]

    def find_by_user(self, user_id: int) -> list[Registration]:
        rows = models.Registration.objects.filter(user_id=user_id).order_by("registered_at", "pk")
        return [_registration_to_domain(row) for row in rows]

    def count_active(self, event_id: int) -> int:
        return (
            models.Registration.objects.filter(event_id=event_id)
            .exclude(status=models.Registration.Status.CANCELLED)
            .count()
        )

    def save(self, registration: Registration) -> Registration:
        fields = {
            "event_id": registration.event_id,
            "user_id": registration.user_id,
            "status": registration.status.value,
            "registered_at": registration.registered_at,
            "confirmation_sent_at": registration.confirmation_sent_at,
        }
        try:
            # Savepoint so a unique-constraint failure leaves the outer transaction usable.
            with transaction.atomic():
                if registration.id is None:
                    row = models.Registration.objects.create(**fields)
                else:
                    row, _ = models.Registration.objects.update_or_create(pk=registration.id, defaults=fields)
        except IntegrityError as e:
            raise AlreadyRegisteredError() from e
        return _registration_to_domain(row)

    def mark_confirmation_sent(self, registration_id: int, sent_at: datetime) -> None:
        models.Registration.objects.filter(pk=registration_id).update(confirmation_sent_at=sent_at)


class DjangoAttendanceStore(AttendanceStore):
    """Relational attendance store using Django ORM."""

    def find_by_event_and_user(self, event_id: int, user_id: int) -> Attendance | None:
        row = models.Attendance.objects.filter(event_id=event_id, user_id=user_id).first()
        return _attendance_to_domain(row) if row else None

    def count_by_event(self, event_id: int) -> int:
        return models.Attendance.objects.filter(event_id=event_id).count()

    def save(self, attendance: Attendance) -> Attendance:
        try:
            with transaction.atomic():
                row = models.Attendance.objects.create(
                    event_id=attendance.event_id,
                    user_id=attendance.user_id,
                    checked_in_at=attendance.checked_in_at,
                )
        except IntegrityError as e:
            raise AlreadyCheckedInError() from e
        return _attendance_to_domain(row)


class DjangoSpeakerStore(SpeakerStore):
    """Relational speaker store using Django ORM."""

    def find_by_id(self, speaker_id: int) -> Speaker | None:
        row = models.Speaker.objects.filter(pk=speaker_id).first()
        return _speaker_to_domain(row) if row else None

    def find_by_event(self, event_id: int) -> list[Speaker]:
        links = models.EventSpeaker.objects.filter(event_id=event_id).select_related("speaker").order_by("pk")
        return [_speaker_to_domain(link.speaker) for link in links]

    def save(self, speaker: Speaker) -> Speaker:
        fields = {
            "name": speaker.name,
            "bio": speaker.bio,
            "expertise": speaker.expertise,
            "email": speaker.email,
        }
        if speaker.id is None:
            row = models.Speaker.objects.create(**fields)
        else:
            row, _ = models.Speaker.objects.update_or_create(pk=speaker.id, defaults=fields)
        return _speaker_to_domain(row)

    def add_to_event(self, event_id: int, speaker_id: int) -> None:
        models.EventSpeaker.objects.get_or_create(event_id=event_id, speaker_id=speaker_id)
