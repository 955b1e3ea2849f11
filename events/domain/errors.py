"""Domain errors for the events module."""

from common.errors import (
    CapacityExceededError,
    ConflictError,
    ErrorCode,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
)


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found or no longer active."""

    def __init__(self, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class RegistrationNotFoundError(NotFoundError):
    """Raised when a user has no registration for an event."""

    def __init__(self, event_id: int, user_id: int) -> None:
        super().__init__(
            code=ErrorCode.REGISTRATION_NOT_FOUND,
            message="Registration not found",
        )
        self.event_id = event_id
        self.user_id = user_id


class AlreadyRegisteredError(ConflictError):
    """Raised when a user already holds a seat for an event."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_REGISTERED,
            message="User already registered for this event",
        )


class RegistrationNotActiveError(ConflictError):
    """Raised when attendance is marked for a registration that is not REGISTERED."""

    def __init__(self, status: str) -> None:
        super().__init__(
            code=ErrorCode.REGISTRATION_NOT_ACTIVE,
            message=f"Registration is {status.lower()}, not registered",
        )


class AlreadyCheckedInError(ConflictError):
    """Raised when an attendance row already exists for the pair."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_CHECKED_IN,
            message="Attendance already recorded",
        )


class EventFullError(CapacityExceededError):
    """Raised when an event has no free seats left."""

    def __init__(self, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.EVENT_FULL,
            message="Event is at full capacity",
        )
        self.event_id = event_id


class EventPermissionDeniedError(ForbiddenError):
    """Raised when the caller neither owns the event nor is an administrator."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PERMISSION_DENIED,
            message="You don't have permission to manage this event",
        )


class InvalidEventRequestError(InvalidRequestError):
    """Raised when event input fails validation."""

    def __init__(self, message: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_REQUEST,
            message=message,
        )
