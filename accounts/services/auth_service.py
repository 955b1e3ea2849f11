"""Auth service - signup, login and identity lookups.

Passwords are hashed with Django's salted password hashers; tokens come
from accounts.tokens.
"""

from dataclasses import dataclass

import structlog
from django.contrib.auth.hashers import check_password, make_password
from django.utils import timezone

from accounts.domain import Email, Role, User
from accounts.domain.errors import (
    AccountDeactivatedError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidSignupError,
    UserNotFoundError,
)
from accounts.stores.interfaces import UserStore
from accounts.tokens import IdentityTokenService
from notifications.dispatch import fire_and_forget
from notifications.interfaces import Notifier

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """A freshly issued token and the account it belongs to."""

    token: str
    user: User


class AuthService:
    """Service for account creation and authentication."""

    def __init__(self, users: UserStore, tokens: IdentityTokenService, notifier: Notifier) -> None:
        self._users = users
        self._tokens = tokens
        self._notifier = notifier

    def signup(self, email: str, password: str, first_name: str, last_name: str) -> User:
        """Create a regular, active account and send a welcome message.

        Raises:
            InvalidSignupError: If the email or password is unusable.
            EmailAlreadyRegisteredError: If the email is taken (case-insensitive).
        """
        try:
            address = Email.from_string(email)
        except ValueError as e:
            raise InvalidSignupError("A valid email address is required") from e
        if not password:
            raise InvalidSignupError("Password is required")
        if self._users.exists_by_email(address.value):
            raise EmailAlreadyRegisteredError()

        user = self._users.save(
            User(
                id=None,
                email=address.value,
                password_hash=make_password(password),
                first_name=first_name,
                last_name=last_name,
                role=Role.USER,
                is_active=True,
                created_at=timezone.now(),
            )
        )
        logger.info("user_signed_up", user_id=user.id)
        fire_and_forget(self._notifier.notify_welcome, user.email, user.first_name, user_id=user.id)
        return user

    def login(self, email: str, password: str) -> LoginResult:
        """Check credentials and issue an identity token.

        Raises:
            UserNotFoundError: If no account has this email.
            InvalidCredentialsError: If the password does not match.
            AccountDeactivatedError: If the account is deactivated.
        """
        user = self._users.find_by_email(email)
        if user is None:
            raise UserNotFoundError()
        if not check_password(password, user.password_hash):
            logger.info("login_failed", user_id=user.id)
            raise InvalidCredentialsError()
        if not user.is_active:
            raise AccountDeactivatedError()

        token = self._tokens.issue(user.email, user.id, user.role)
        logger.info("user_logged_in", user_id=user.id)
        return LoginResult(token=token, user=user)

    def get_user(self, user_id: int) -> User:
        """Return a user by ID.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
