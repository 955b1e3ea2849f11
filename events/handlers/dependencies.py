"""Service wiring for the HTTP layer."""

from accounts.stores.django_store import DjangoUserStore
from events.services.event_service import EventService
from events.services.registration_service import RegistrationService
from events.stores.django_store import (
    DjangoAttendanceStore,
    DjangoEventStore,
    DjangoRegistrationStore,
    DjangoSpeakerStore,
)
from notifications.celery_notifier import CeleryNotifier


def get_event_service() -> EventService:
    return EventService(
        events=DjangoEventStore(),
        registrations=DjangoRegistrationStore(),
        users=DjangoUserStore(),
        speakers=DjangoSpeakerStore(),
    )


def get_registration_service() -> RegistrationService:
    return RegistrationService(
        events=DjangoEventStore(),
        registrations=DjangoRegistrationStore(),
        attendances=DjangoAttendanceStore(),
        users=DjangoUserStore(),
        notifier=CeleryNotifier(),
    )
