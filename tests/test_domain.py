"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from datetime import datetime, timedelta, timezone as dt_timezone

import pytest
from django.utils import timezone

from accounts.domain import Email, Identity, Role
from common.errors import DomainError, ErrorCode, ErrorKind
from events.domain import Capacity, Event, EventDate, RegistrationStatus
from events.domain.errors import AlreadyRegisteredError, EventFullError, EventNotFoundError


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_positive_value(self):
        """Capacity can be created with a positive value."""
        assert Capacity(1).value == 1

    def test_capacity_rejects_zero(self):
        """An event must offer at least one seat."""
        with pytest.raises(ValueError):
            Capacity(0)

    def test_capacity_rejects_negative_value(self):
        with pytest.raises(ValueError):
            Capacity(-5)

    @pytest.mark.parametrize("value", ["10", 2.5, True, None])
    def test_capacity_rejects_non_integers(self, value):
        with pytest.raises(ValueError):
            Capacity(value)


class TestEventDate:
    """Tests for EventDate value object."""

    def test_from_string_with_offset(self):
        event_date = EventDate.from_string("2030-05-01T18:30:00+02:00")
        assert event_date.value == datetime(2030, 5, 1, 16, 30, tzinfo=dt_timezone.utc)

    def test_from_string_naive_value_becomes_aware(self):
        """Naive date-times are interpreted in the default time zone."""
        event_date = EventDate.from_string("2030-05-01T18:30:00")
        assert timezone.is_aware(event_date.value)

    @pytest.mark.parametrize("value", ["2030-05-01", "not a date", "", "2030-13-01T10:00:00"])
    def test_from_string_rejects_invalid_values(self, value):
        with pytest.raises(ValueError):
            EventDate.from_string(value)

    def test_rejects_naive_datetime(self):
        with pytest.raises(ValueError):
            EventDate(datetime(2030, 5, 1, 18, 30))

    def test_is_past(self):
        now = timezone.now()
        assert EventDate(now - timedelta(seconds=1)).is_past(now)
        assert not EventDate(now).is_past(now)
        assert not EventDate(now + timedelta(days=1)).is_past(now)


class TestEmail:
    """Tests for Email value object."""

    def test_from_string_normalises(self):
        assert Email.from_string("  Alice@Example.COM ").value == "alice@example.com"

    def test_equality_is_case_insensitive_after_normalisation(self):
        assert Email.from_string("BOB@example.com") == Email.from_string("bob@EXAMPLE.com")

    def test_rejects_value_without_at_sign(self):
        with pytest.raises(ValueError):
            Email.from_string("not-an-email")

    def test_rejects_unnormalised_value(self):
        with pytest.raises(ValueError):
            Email("Alice@Example.com")


class TestRegistrationStatus:
    """Only cancelled registrations give their seat back."""

    @pytest.mark.parametrize(
        ("status", "holds_seat"),
        [
            (RegistrationStatus.REGISTERED, True),
            (RegistrationStatus.ATTENDED, True),
            (RegistrationStatus.CANCELLED, False),
        ],
    )
    def test_holds_seat(self, status, holds_seat):
        assert status.holds_seat is holds_seat


class TestEvent:
    def _event(self, capacity: int, registered_count: int) -> Event:
        now = timezone.now()
        return Event(
            id=1,
            title="Workshop",
            description="",
            event_date=now + timedelta(days=1),
            venue="Room 1",
            category="Tech",
            capacity=capacity,
            registered_count=registered_count,
            owner_id=1,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    def test_is_full_when_count_reaches_capacity(self):
        assert self._event(capacity=2, registered_count=2).is_full
        assert not self._event(capacity=2, registered_count=1).is_full


class TestIdentity:
    def test_admin_role(self):
        assert Identity(user_id=1, email="a@example.com", role=Role.ADMIN).is_admin
        assert not Identity(user_id=2, email="b@example.com", role=Role.USER).is_admin


class TestDomainErrors:
    """Each error carries a stable kind and code."""

    def test_error_kinds(self):
        assert EventNotFoundError(1).kind is ErrorKind.NOT_FOUND
        assert AlreadyRegisteredError().kind is ErrorKind.CONFLICT
        assert EventFullError(1).kind is ErrorKind.CAPACITY_EXCEEDED

    def test_error_str_includes_code(self):
        error = EventFullError(7)
        assert isinstance(error, DomainError)
        assert error.code is ErrorCode.EVENT_FULL
        assert str(error) == "EVENT_FULL: Event is at full capacity"
        assert error.event_id == 7
