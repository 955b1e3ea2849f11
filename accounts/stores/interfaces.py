"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from accounts.domain import User


class UserStore(ABC):
    """Interface for user persistence operations."""

    @abstractmethod
    def find_by_id(self, user_id: int) -> User | None:
        """Return a user by ID, or None if not found."""
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> User | None:
        """Return a user by email (case-insensitive), or None if not found."""
        ...

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        """Check if an account with this email exists (case-insensitive)."""
        ...

    @abstractmethod
    def save(self, user: User) -> User:
        """Insert (id is None) or update a user and return the stored version."""
        ...
