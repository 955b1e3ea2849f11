"""In-memory implementation of the UserStore.

Used by the service tests and for running the services without a database.
"""

import itertools
import threading
from dataclasses import replace

from accounts.domain import User
from accounts.domain.errors import EmailAlreadyRegisteredError
from accounts.stores.interfaces import UserStore


class InMemoryUserStore(UserStore):
    """Thread-safe dict-backed user store."""

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        wanted = email.strip().lower()
        return next((u for u in list(self._users.values()) if u.email.lower() == wanted), None)

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def save(self, user: User) -> User:
        with self._lock:
            clash = self.find_by_email(user.email)
            if clash is not None and clash.id != user.id:
                raise EmailAlreadyRegisteredError()
            if user.id is None:
                user = replace(user, id=next(self._ids))
            self._users[user.id] = user
            return user
