"""Error kinds shared by every module.

Each concrete domain error belongs to exactly one kind. Callers branch on the
kind (or the specific code), never on the message text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ErrorKind(Enum):
    """Stable, caller-facing error kinds."""

    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    FORBIDDEN = "FORBIDDEN"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_REQUEST = "INVALID_REQUEST"
    UNEXPECTED = "UNEXPECTED"


class ErrorCode(Enum):
    """Specific error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    REGISTRATION_NOT_FOUND = "REGISTRATION_NOT_FOUND"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    REGISTRATION_NOT_ACTIVE = "REGISTRATION_NOT_ACTIVE"
    ALREADY_CHECKED_IN = "ALREADY_CHECKED_IN"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    EVENT_FULL = "EVENT_FULL"
    ADMIN_REQUIRED = "ADMIN_REQUIRED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    ACCOUNT_DEACTIVATED = "ACCOUNT_DEACTIVATED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_EVENT_REQUEST = "INVALID_EVENT_REQUEST"
    INVALID_SIGNUP_REQUEST = "INVALID_SIGNUP_REQUEST"
    UNEXPECTED = "UNEXPECTED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    kind: ClassVar[ErrorKind] = ErrorKind.UNEXPECTED

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(DomainError):
    kind = ErrorKind.CONFLICT


class CapacityExceededError(DomainError):
    kind = ErrorKind.CAPACITY_EXCEEDED


class ForbiddenError(DomainError):
    kind = ErrorKind.FORBIDDEN


class UnauthorizedError(DomainError):
    kind = ErrorKind.UNAUTHORIZED


class InvalidRequestError(DomainError):
    kind = ErrorKind.INVALID_REQUEST

