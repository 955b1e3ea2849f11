"""Django ORM implementation of the UserStore."""

from django.db import IntegrityError, transaction

from accounts import models
from accounts.domain import Role, User
from accounts.domain.errors import EmailAlreadyRegisteredError
from accounts.stores.interfaces import UserStore


def _to_domain(row: models.User) -> User:
    return User(
        id=row.pk,
        email=row.email,
        password_hash=row.password_hash,
        first_name=row.first_name,
        last_name=row.last_name,
        role=Role(row.role),
        is_active=row.is_active,
        created_at=row.created_at,
    )


class DjangoUserStore(UserStore):
    """Relational user store using Django ORM."""

    def find_by_id(self, user_id: int) -> User | None:
        row = models.User.objects.filter(pk=user_id).first()
        return _to_domain(row) if row else None

    def find_by_email(self, email: str) -> User | None:
        row = models.User.objects.filter(email__iexact=email.strip()).first()
        return _to_domain(row) if row else None

    def exists_by_email(self, email: str) -> bool:
        return models.User.objects.filter(email__iexact=email.strip()).exists()

    def save(self, user: User) -> User:
        fields = {
            "email": user.email,
            "password_hash": user.password_hash,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "role": user.role.value,
            "is_active": user.is_active,
        }
        try:
            with transaction.atomic():
                if user.id is None:
                    row = models.User.objects.create(**fields)
                else:
                    row, _ = models.User.objects.update_or_create(pk=user.id, defaults=fields)
        except IntegrityError as e:
            raise EmailAlreadyRegisteredError() from e
        return _to_domain(row)
