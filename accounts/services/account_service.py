"""Administrative account changes."""

from dataclasses import replace

import structlog

from accounts.domain import Identity, Role, User
from accounts.domain.errors import AdminRequiredError, UserNotFoundError
from accounts.stores.interfaces import UserStore

logger = structlog.get_logger(__name__)


class AccountService:
    """Role and activation changes, reserved for administrators."""

    def __init__(self, users: UserStore) -> None:
        self._users = users

    def change_role(self, user_id: int, role: Role, actor: Identity) -> User:
        user = self.get_user(user_id, actor)
        if user.role is role:
            return user
        user = self._users.save(replace(user, role=role))
        logger.info("user_role_changed", user_id=user_id, role=role.value, actor_id=actor.user_id)
        return user

    def set_active(self, user_id: int, is_active: bool, actor: Identity) -> User:
        user = self.get_user(user_id, actor)
        if user.is_active == is_active:
            return user
        user = self._users.save(replace(user, is_active=is_active))
        logger.info("user_activation_changed", user_id=user_id, is_active=is_active, actor_id=actor.user_id)
        return user

    def get_user(self, user_id: int, actor: Identity) -> User:
        """Return a user for an administrator.

        Raises:
            AdminRequiredError: If the actor is not an administrator.
            UserNotFoundError: If the user does not exist.
        """
        if not actor.is_admin:
            raise AdminRequiredError()
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
