"""Domain errors for the accounts module."""

from common.errors import (
    ConflictError,
    ErrorCode,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
    UnauthorizedError,
)


class UserNotFoundError(NotFoundError):
    """Raised when a user does not exist."""

    def __init__(self, user_id: int | None = None) -> None:
        super().__init__(
            code=ErrorCode.USER_NOT_FOUND,
            message="User not found",
        )
        self.user_id = user_id


class EmailAlreadyRegisteredError(ConflictError):
    """Raised on signup with an email that already has an account."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EMAIL_ALREADY_REGISTERED,
            message="Email already registered",
        )


class InvalidCredentialsError(UnauthorizedError):
    """Raised when the password does not match."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid email or password",
        )


class AccountDeactivatedError(ForbiddenError):
    """Raised when a deactivated account tries to log in."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ACCOUNT_DEACTIVATED,
            message="User account is deactivated",
        )


class AdminRequiredError(ForbiddenError):
    """Raised when an operation is reserved for administrators."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ADMIN_REQUIRED,
            message="Only administrators can perform this action",
        )


class InvalidSignupError(InvalidRequestError):
    """Raised when signup input is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SIGNUP_REQUEST,
            message=message,
        )
