"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import datetime
from typing import Self

from django.utils import timezone


@dataclass(frozen=True)
class Capacity:
    """Positive integer representing how many seats an event offers."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Capacity must be an integer")
        if self.value < 1:
            raise ValueError("Capacity must be positive")


@dataclass(frozen=True)
class EventDate:
    """Timezone-aware instant at which an event takes place."""

    value: datetime

    def __post_init__(self) -> None:
        if timezone.is_naive(self.value):
            raise ValueError("Event date must be timezone-aware")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse an ISO-8601 date-time; naive values use the default time zone."""
        if not isinstance(value, str) or "T" not in value.strip():
            raise ValueError("Event date must be an ISO-8601 date-time")
        parsed = datetime.fromisoformat(value.strip())
        if timezone.is_naive(parsed):
            parsed = timezone.make_aware(parsed)
        return cls(value=parsed)

    def is_past(self, now: datetime) -> bool:
        return self.value < now
