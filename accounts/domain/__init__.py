from accounts.domain.models import Identity, Role, User
from accounts.domain.value_objects import Email

__all__ = [
    "Identity",
    "Role",
    "User",
    "Email",
]
