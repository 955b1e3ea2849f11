from events.domain.models import (
    Attendance,
    Event,
    EventRequest,
    EventView,
    Registration,
    RegistrationStatus,
    Speaker,
    SpeakerRequest,
)
from events.domain.value_objects import Capacity, EventDate

__all__ = [
    "Attendance",
    "Event",
    "EventRequest",
    "EventView",
    "Registration",
    "RegistrationStatus",
    "Speaker",
    "SpeakerRequest",
    "Capacity",
    "EventDate",
]
