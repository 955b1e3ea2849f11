"""Registration service - the registration state machine.

Per (event, user) pair::

    NONE -> REGISTERED -> ATTENDED
                |  ^
                v  |
             CANCELLED

At most one registration row exists per pair; cancelling and registering
again reuses that row. ``Event.registered_count`` counts the rows holding a
seat (REGISTERED or ATTENDED) and is only written here, always inside the
event lock together with the registration row it accounts for.
"""

from dataclasses import replace

import structlog
from django.utils import timezone

from accounts.domain import User
from accounts.domain.errors import UserNotFoundError
from accounts.stores.interfaces import UserStore
from events.domain import Attendance, Event, Registration, RegistrationStatus
from events.domain.errors import (
    AlreadyRegisteredError,
    EventFullError,
    EventNotFoundError,
    RegistrationNotActiveError,
    RegistrationNotFoundError,
)
from events.stores.interfaces import AttendanceStore, EventStore, RegistrationStore
from notifications.dispatch import fire_and_forget
from notifications.interfaces import Notifier

logger = structlog.get_logger(__name__)


class RegistrationService:
    """Service for registering, cancelling and checking in attendees."""

    def __init__(
        self,
        events: EventStore,
        registrations: RegistrationStore,
        attendances: AttendanceStore,
        users: UserStore,
        notifier: Notifier,
    ) -> None:
        self._events = events
        self._registrations = registrations
        self._attendances = attendances
        self._users = users
        self._notifier = notifier

    def register(self, event_id: int, user_id: int) -> Registration:
        """Take a seat for the user at the event.

        A cancelled registration for the same pair is brought back to REGISTERED.

        Raises:
            EventNotFoundError: If the event does not exist or was deleted.
            UserNotFoundError: If the user does not exist.
            AlreadyRegisteredError: If the user already holds a seat.
            EventFullError: If no seats are left.
        """
        with self._events.lock_event(event_id) as event:
            if event is None or not event.is_active:
                raise EventNotFoundError(event_id)
            user = self._get_user(user_id)
            existing = self._registrations.find_by_event_and_user(event_id, user_id)
            if existing is not None and existing.status.holds_seat:
                raise AlreadyRegisteredError()
            if event.is_full:
                logger.info("registration_rejected_full", event_id=event_id, user_id=user_id)
                raise EventFullError(event_id)

            now = timezone.now()
            if existing is None:
                registration = Registration(
                    id=None,
                    event_id=event_id,
                    user_id=user_id,
                    status=RegistrationStatus.REGISTERED,
                    registered_at=now,
                )
            else:
                registration = replace(
                    existing,
                    status=RegistrationStatus.REGISTERED,
                    registered_at=now,
                    confirmation_sent_at=None,
                )
            registration = self._registrations.save(registration)
            event = self._events.save(replace(event, registered_count=event.registered_count + 1))

        logger.info(
            "registration_created",
            event_id=event_id,
            user_id=user_id,
            resurrected=existing is not None,
            registered_count=event.registered_count,
        )
        return self._confirm(registration, user, event)

    def cancel(self, event_id: int, user_id: int) -> Registration:
        """Give up the user's seat.

        Cancelling a registration that is not REGISTERED is a no-op and leaves
        the counter alone.

        Raises:
            EventNotFoundError: If the event does not exist.
            UserNotFoundError: If the user does not exist.
            RegistrationNotFoundError: If the user never registered.
        """
        with self._events.lock_event(event_id) as event:
            if event is None:
                raise EventNotFoundError(event_id)
            self._get_user(user_id)
            registration = self._registrations.find_by_event_and_user(event_id, user_id)
            if registration is None:
                raise RegistrationNotFoundError(event_id, user_id)
            if registration.status is not RegistrationStatus.REGISTERED:
                logger.info(
                    "registration_cancel_noop",
                    event_id=event_id,
                    user_id=user_id,
                    status=registration.status.value,
                )
                return registration
            registration = self._registrations.save(replace(registration, status=RegistrationStatus.CANCELLED))
            self._events.save(replace(event, registered_count=max(0, event.registered_count - 1)))

        logger.info("registration_cancelled", event_id=event_id, user_id=user_id)
        return registration

    def mark_attended(self, event_id: int, user_id: int) -> Attendance:
        """Check the user in at the event.

        Raises:
            EventNotFoundError: If the event does not exist.
            UserNotFoundError: If the user does not exist.
            RegistrationNotFoundError: If the user never registered.
            RegistrationNotActiveError: If the registration is cancelled or already attended.
        """
        with self._events.lock_event(event_id) as event:
            if event is None:
                raise EventNotFoundError(event_id)
            self._get_user(user_id)
            registration = self._registrations.find_by_event_and_user(event_id, user_id)
            if registration is None:
                raise RegistrationNotFoundError(event_id, user_id)
            if registration.status is not RegistrationStatus.REGISTERED:
                raise RegistrationNotActiveError(registration.status.value)
            now = timezone.now()
            attendance = self._attendances.save(
                Attendance(id=None, event_id=event_id, user_id=user_id, checked_in_at=now)
            )
            self._registrations.save(replace(registration, status=RegistrationStatus.ATTENDED))

        logger.info("registration_attended", event_id=event_id, user_id=user_id)
        return attendance

    def list_for_user(self, user_id: int) -> list[Registration]:
        """Return every registration of a user, cancelled ones included.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        self._get_user(user_id)
        return self._registrations.find_by_user(user_id)

    def list_for_event(self, event_id: int) -> list[Registration]:
        """Return every registration for an event, including deleted events.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        self._get_event(event_id)
        return self._registrations.find_by_event(event_id)

    def attendance_count(self, event_id: int) -> int:
        self._get_event(event_id)
        return self._attendances.count_by_event(event_id)

    def reconcile_count(self, event_id: int) -> int:
        """Recompute ``registered_count`` from the registration rows and repair drift.

        Returns the number of registrations holding a seat.
        """
        with self._events.lock_event(event_id) as event:
            if event is None:
                raise EventNotFoundError(event_id)
            actual = self._registrations.count_active(event_id)
            if actual != event.registered_count:
                logger.warning(
                    "registered_count_drift",
                    event_id=event_id,
                    stored=event.registered_count,
                    actual=actual,
                )
                self._events.save(replace(event, registered_count=actual))
        return actual

    def send_reminders(self, event_id: int) -> int:
        """Send a reminder to every user currently registered for an active event.

        Returns the number of reminders handed off for delivery.
        """
        event = self._get_event(event_id)
        if not event.is_active:
            raise EventNotFoundError(event_id)
        sent = 0
        for registration in self._registrations.find_by_event(event_id):
            if registration.status is not RegistrationStatus.REGISTERED:
                continue
            user = self._users.find_by_id(registration.user_id)
            if user is None:
                continue
            if fire_and_forget(
                self._notifier.notify_event_reminder,
                user.email,
                user.first_name,
                event.title,
                event.event_date,
                event_id=event_id,
                user_id=user.id,
            ):
                sent += 1
        logger.info("event_reminders_sent", event_id=event_id, count=sent)
        return sent

    def _confirm(self, registration: Registration, user: User, event: Event) -> Registration:
        delivered = fire_and_forget(
            self._notifier.notify_registration_confirmed,
            user.email,
            user.first_name,
            event.title,
            event_id=event.id,
            user_id=user.id,
        )
        if not delivered or registration.id is None:
            return registration
        sent_at = timezone.now()
        self._registrations.mark_confirmation_sent(registration.id, sent_at)
        return replace(registration, confirmation_sent_at=sent_at)

    def _get_user(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def _get_event(self, event_id: int) -> Event:
        event = self._events.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event
