"""Event service - event lifecycle and catalog reads.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

The caller's identity is passed in explicitly; ``None`` is the anonymous caller.
"""

from dataclasses import replace
from datetime import datetime

import structlog
from django.utils import timezone

from accounts.domain import Identity
from accounts.domain.errors import AdminRequiredError
from accounts.stores.interfaces import UserStore
from events.domain import Capacity, Event, EventDate, EventRequest, EventView, Speaker, SpeakerRequest
from events.domain.errors import EventNotFoundError, EventPermissionDeniedError, InvalidEventRequestError
from events.stores.interfaces import EventStore, RegistrationStore, SpeakerStore

logger = structlog.get_logger(__name__)


def _validated(request: EventRequest, now: datetime) -> tuple[datetime, int]:
    if not request.title or not request.title.strip():
        raise InvalidEventRequestError("Title is required")
    try:
        capacity = Capacity(request.capacity)
    except ValueError as e:
        raise InvalidEventRequestError(str(e)) from e
    try:
        event_date = EventDate.from_string(request.event_date)
    except ValueError as e:
        raise InvalidEventRequestError("Event date must be an ISO-8601 date-time") from e
    if event_date.is_past(now):
        raise InvalidEventRequestError("Event date must not be in the past")
    return event_date.value, capacity.value


class EventService:
    """Service for event lifecycle and catalog operations."""

    def __init__(
        self,
        events: EventStore,
        registrations: RegistrationStore,
        users: UserStore,
        speakers: SpeakerStore,
    ) -> None:
        self._events = events
        self._registrations = registrations
        self._users = users
        self._speakers = speakers

    def create_event(self, request: EventRequest, actor: Identity) -> EventView:
        """Create an event owned by the acting administrator.

        Raises:
            AdminRequiredError: If the actor is not an administrator.
            InvalidEventRequestError: If capacity or date are invalid.
        """
        if not actor.is_admin:
            raise AdminRequiredError()
        now = timezone.now()
        event_date, capacity = _validated(request, now)
        event = self._events.save(
            Event(
                id=None,
                title=request.title.strip(),
                description=request.description,
                event_date=event_date,
                venue=request.venue,
                category=request.category,
                capacity=capacity,
                registered_count=0,
                owner_id=actor.user_id,
                is_active=True,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("event_created", event_id=event.id, user_id=actor.user_id)
        return self._view(event, actor)

    def update_event(self, event_id: int, request: EventRequest, actor: Identity) -> EventView:
        """Replace the mutable fields of an event.

        Never touches ``registered_count`` or registrations.

        Raises:
            EventNotFoundError: If the event does not exist.
            EventPermissionDeniedError: If the actor is neither owner nor administrator.
            InvalidEventRequestError: If the new values are invalid.
        """
        event_date, capacity = _validated(request, timezone.now())
        with self._events.lock_event(event_id) as event:
            if event is None:
                raise EventNotFoundError(event_id)
            self._check_can_manage(event, actor)
            if capacity < event.registered_count:
                raise InvalidEventRequestError("Capacity cannot be lower than the number of registrations")
            event = self._events.save(
                replace(
                    event,
                    title=request.title.strip(),
                    description=request.description,
                    event_date=event_date,
                    venue=request.venue,
                    category=request.category,
                    capacity=capacity,
                )
            )
        logger.info("event_updated", event_id=event_id, user_id=actor.user_id)
        return self._view(event, actor)

    def delete_event(self, event_id: int, actor: Identity) -> None:
        """Soft-delete an event. Registrations and attendances are left untouched.

        Raises:
            EventNotFoundError: If the event does not exist.
            EventPermissionDeniedError: If the actor is neither owner nor administrator.
        """
        with self._events.lock_event(event_id) as event:
            if event is None:
                raise EventNotFoundError(event_id)
            self._check_can_manage(event, actor)
            if event.is_active:
                self._events.save(replace(event, is_active=False))
        logger.info("event_deleted", event_id=event_id, user_id=actor.user_id)

    def ensure_can_manage(self, event_id: int, actor: Identity) -> Event:
        """Return the event if the actor may manage it.

        Raises:
            EventNotFoundError: If the event does not exist.
            EventPermissionDeniedError: If the actor is neither owner nor administrator.
        """
        event = self._events.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        self._check_can_manage(event, actor)
        return event

    def add_speaker(self, event_id: int, request: SpeakerRequest, actor: Identity) -> EventView:
        """Create a speaker and assign them to an event.

        Raises:
            EventNotFoundError: If the event does not exist or was deleted.
            EventPermissionDeniedError: If the actor is neither owner nor administrator.
            InvalidEventRequestError: If the speaker has no name.
        """
        event = self.ensure_can_manage(event_id, actor)
        if not event.is_active:
            raise EventNotFoundError(event_id)
        if not request.name or not request.name.strip():
            raise InvalidEventRequestError("Speaker name is required")
        speaker = self._speakers.save(
            Speaker(
                id=None,
                name=request.name.strip(),
                bio=request.bio,
                expertise=request.expertise,
                email=request.email,
            )
        )
        self._speakers.add_to_event(event_id, speaker.id)
        logger.info("speaker_added", event_id=event_id, speaker_id=speaker.id, user_id=actor.user_id)
        return self._view(event, actor)

    def get_event(self, event_id: int, caller: Identity | None = None) -> EventView:
        """Return an active event.

        Raises:
            EventNotFoundError: If the event does not exist or was deleted.
        """
        event = self._events.find_by_id(event_id)
        if event is None or not event.is_active:
            raise EventNotFoundError(event_id)
        return self._view(event, caller)

    def list_events(self, caller: Identity | None = None) -> list[EventView]:
        return self._views(self._events.find_active(), caller)

    def list_upcoming(self, caller: Identity | None = None) -> list[EventView]:
        return self._views(self._events.find_upcoming(timezone.now()), caller)

    def search_events(self, term: str, caller: Identity | None = None) -> list[EventView]:
        term = term.strip()
        if not term:
            return self.list_events(caller)
        return self._views(self._events.search_by_title_or_category(term), caller)

    def list_by_category(self, category: str, caller: Identity | None = None) -> list[EventView]:
        return self._views(self._events.find_by_category(category.strip()), caller)

    def list_owned(self, actor: Identity) -> list[EventView]:
        """Return the active events the actor owns."""
        return self._views(self._events.find_by_owner(actor.user_id), actor)

    def _check_can_manage(self, event: Event, actor: Identity) -> None:
        if event.owner_id != actor.user_id and not actor.is_admin:
            logger.info("event_permission_denied", event_id=event.id, user_id=actor.user_id)
            raise EventPermissionDeniedError()

    def _view(self, event: Event, caller: Identity | None) -> EventView:
        owner = self._users.find_by_id(event.owner_id)
        is_registered = False
        if caller is not None and event.id is not None:
            registration = self._registrations.find_by_event_and_user(event.id, caller.user_id)
            is_registered = registration is not None and registration.status.holds_seat
        return EventView(
            event=event,
            is_registered=is_registered,
            created_by_name=owner.full_name if owner else "",
            speakers=tuple(self._speakers.find_by_event(event.id)) if event.id is not None else (),
        )

    def _views(self, events: list[Event], caller: Identity | None) -> list[EventView]:
        return [self._view(event, caller) for event in events]
