"""Bearer-token authentication for DRF views.

This is the only place that reads the Authorization header. An invalid or
expired token authenticates nobody: the request continues as anonymous and
protected views answer 401.
"""

import typing as t

from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.permissions import BasePermission
from rest_framework.request import Request

from accounts.domain import Identity
from accounts.tokens import get_identity_tokens

KEYWORD = "Bearer"


class BearerTokenAuthentication(BaseAuthentication):
    """Resolve ``Authorization: Bearer <token>`` into an Identity."""

    def authenticate(self, request: Request) -> tuple[Identity, str] | None:
        header = get_authorization_header(request).split()
        if len(header) != 2 or header[0].decode("latin-1").lower() != KEYWORD.lower():
            return None
        try:
            token = header[1].decode("utf-8")
        except UnicodeDecodeError:
            return None
        identity = get_identity_tokens().verify(token)
        if identity is None:
            return None
        return identity, token

    def authenticate_header(self, request: Request) -> str:
        return KEYWORD


class IsAuthenticatedIdentity(BasePermission):
    """Allow only callers with a verified identity token."""

    def has_permission(self, request: Request, view: t.Any) -> bool:
        return isinstance(request.user, Identity)


def caller_of(request: Request) -> Identity | None:
    """The verified caller, or None for an anonymous request."""
    user = request.user
    return user if isinstance(user, Identity) else None
