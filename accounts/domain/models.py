"""Domain models for user accounts and caller identity.

Django ORM models are in accounts/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    """Account role carried in identity tokens."""

    ADMIN = "ADMIN"
    USER = "USER"


@dataclass(frozen=True)
class User:
    """Domain representation of a User."""

    id: int | None
    email: str
    password_hash: str
    first_name: str
    last_name: str
    role: Role
    is_active: bool
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Identity:
    """An authenticated caller, resolved from a verified identity token.

    Anonymous callers are represented by ``None`` wherever an identity is accepted.
    """

    user_id: int
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_authenticated(self) -> bool:
        # Lets DRF treat the identity as request.user.
        return True
