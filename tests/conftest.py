"""Pytest configuration and shared fixtures."""

import typing as t
from datetime import datetime, timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.domain import Identity, Role, User
from accounts.services.auth_service import AuthService
from accounts.stores.memory_store import InMemoryUserStore
from accounts.tokens import IdentityTokenService
from eventdesk.celery import app as celery_app
from events.domain import Event
from events.services.event_service import EventService
from events.services.registration_service import RegistrationService
from events.stores.memory_store import (
    InMemoryAttendanceStore,
    InMemoryEventStore,
    InMemoryRegistrationStore,
    InMemorySpeakerStore,
)
from notifications.interfaces import Notifier

TEST_SIGNING_KEY = "test-signing-key-that-is-long-enough-for-hmac-sha256-0123456789abcdef"


class RecordingNotifier(Notifier):
    """Collects notifications instead of delivering them."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, tuple[t.Any, ...]]] = []

    def notify_welcome(self, email: str, first_name: str) -> None:
        self.sent.append(("welcome", (email, first_name)))

    def notify_registration_confirmed(self, email: str, first_name: str, event_title: str) -> None:
        self.sent.append(("registration_confirmed", (email, first_name, event_title)))

    def notify_event_reminder(self, email: str, first_name: str, event_title: str, event_date: datetime) -> None:
        self.sent.append(("event_reminder", (email, first_name, event_title, event_date)))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.sent]


class BrokenNotifier(Notifier):
    """A notifier whose broker is down."""

    def notify_welcome(self, email: str, first_name: str) -> None:
        raise ConnectionError("broker unavailable")

    def notify_registration_confirmed(self, email: str, first_name: str, event_title: str) -> None:
        raise ConnectionError("broker unavailable")

    def notify_event_reminder(self, email: str, first_name: str, event_title: str, event_date: datetime) -> None:
        raise ConnectionError("broker unavailable")


@pytest.fixture(autouse=True)
def fast_test_settings(settings: t.Any) -> None:
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    settings.JWT_SIGNING_KEY = TEST_SIGNING_KEY
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"


@pytest.fixture(autouse=True)
def celery_eager_mode() -> t.Iterator[None]:
    """Run Celery tasks in-process so their side effects are observable."""
    celery_app.conf.CELERY_TASK_ALWAYS_EAGER = True
    yield
    celery_app.conf.CELERY_TASK_ALWAYS_EAGER = False


@pytest.fixture(autouse=True)
def reset_identity_tokens() -> t.Iterator[None]:
    from accounts.tokens import get_identity_tokens

    get_identity_tokens.cache_clear()
    yield
    get_identity_tokens.cache_clear()


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def tokens() -> IdentityTokenService:
    return IdentityTokenService(TEST_SIGNING_KEY, "HS256", timedelta(minutes=60))


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def registration_store() -> InMemoryRegistrationStore:
    return InMemoryRegistrationStore()


@pytest.fixture
def attendance_store() -> InMemoryAttendanceStore:
    return InMemoryAttendanceStore()


@pytest.fixture
def speaker_store() -> InMemorySpeakerStore:
    return InMemorySpeakerStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def event_service(
    event_store: InMemoryEventStore,
    registration_store: InMemoryRegistrationStore,
    user_store: InMemoryUserStore,
    speaker_store: InMemorySpeakerStore,
) -> EventService:
    return EventService(event_store, registration_store, user_store, speaker_store)


@pytest.fixture
def registration_service(
    event_store: InMemoryEventStore,
    registration_store: InMemoryRegistrationStore,
    attendance_store: InMemoryAttendanceStore,
    user_store: InMemoryUserStore,
    notifier: RecordingNotifier,
) -> RegistrationService:
    return RegistrationService(event_store, registration_store, attendance_store, user_store, notifier)


@pytest.fixture
def auth_service(user_store: InMemoryUserStore, tokens: IdentityTokenService, notifier: RecordingNotifier) -> AuthService:
    return AuthService(user_store, tokens, notifier)


@pytest.fixture
def make_user(user_store: InMemoryUserStore) -> t.Callable[..., User]:
    counter = iter(range(1, 10_000))

    def _make(role: Role = Role.USER, email: str | None = None, is_active: bool = True) -> User:
        n = next(counter)
        return user_store.save(
            User(
                id=None,
                email=email or f"user{n}@example.com",
                password_hash="!",
                first_name=f"First{n}",
                last_name=f"Last{n}",
                role=role,
                is_active=is_active,
                created_at=timezone.now(),
            )
        )

    return _make


@pytest.fixture
def admin(make_user: t.Callable[..., User]) -> User:
    return make_user(role=Role.ADMIN, email="admin@example.com")


@pytest.fixture
def make_event(event_store: InMemoryEventStore, admin: User) -> t.Callable[..., Event]:
    def _make(capacity: int = 10, owner: User | None = None, **overrides: t.Any) -> Event:
        now = timezone.now()
        fields: dict[str, t.Any] = {
            "id": None,
            "title": "PyCon Meetup",
            "description": "Talks and pizza",
            "event_date": now + timedelta(days=7),
            "venue": "Main Hall",
            "category": "Tech",
            "capacity": capacity,
            "registered_count": 0,
            "owner_id": (owner or admin).id,
            "is_active": True,
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return event_store.save(Event(**fields))

    return _make


@pytest.fixture
def broken_notifier() -> BrokenNotifier:
    return BrokenNotifier()


@pytest.fixture
def identity_of() -> t.Callable[[User], Identity]:
    def _identity(user: User) -> Identity:
        assert user.id is not None
        return Identity(user_id=user.id, email=user.email, role=user.role)

    return _identity
