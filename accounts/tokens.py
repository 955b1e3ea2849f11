"""Identity tokens.

A signed JWT asserting the caller's email (``sub``), numeric user id and role.
Nothing in a token is trusted until :meth:`IdentityTokenService.verify` succeeds.
"""

import functools
import typing as t
from datetime import datetime, timedelta

import jwt
import structlog
from django.conf import settings
from django.utils import timezone
from pydantic import BaseModel, ConfigDict, StrictInt, ValidationError, field_serializer

from accounts.domain import Identity, Role

logger = structlog.get_logger(__name__)


class IdentityClaims(BaseModel):
    """The identity token payload."""

    model_config = ConfigDict(extra="ignore")

    sub: str
    user_id: StrictInt
    role: Role
    iat: datetime
    exp: datetime

    @field_serializer("iat", "exp")
    def serialize_timestamp(self, value: datetime) -> int:
        return int(value.timestamp())

    @field_serializer("role")
    def serialize_role(self, value: Role) -> str:
        return value.value


class IdentityTokenService:
    """Issues and verifies identity tokens. Stateless; safe to share across threads."""

    def __init__(self, signing_key: str, algorithm: str, default_ttl: timedelta) -> None:
        self._signing_key = signing_key
        self._algorithm = algorithm
        self._default_ttl = default_ttl

    def issue(
        self,
        email: str,
        user_id: int,
        role: Role,
        issued_at: datetime | None = None,
        ttl: timedelta | None = None,
    ) -> str:
        """Create a token that expires at ``issued_at + ttl``."""
        issued_at = issued_at or timezone.now()
        claims = IdentityClaims(
            sub=email,
            user_id=user_id,
            role=role,
            iat=issued_at,
            exp=issued_at + (ttl if ttl is not None else self._default_ttl),
        )
        return jwt.encode(claims.model_dump(), self._signing_key, algorithm=self._algorithm)

    def verify(self, token: str | None, now: datetime | None = None) -> Identity | None:
        """Return the identity asserted by the token, or None if it is not valid.

        A token is rejected when the signature does not match, the structure or
        claims are malformed, or ``now`` is at or after its expiry.
        """
        if not token:
            return None
        try:
            decoded = jwt.decode(
                token,
                key=self._signing_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "iat", "exp"], "verify_exp": False, "verify_iat": False},
            )
            claims = IdentityClaims.model_validate(decoded)
        except jwt.InvalidTokenError:
            logger.debug("invalid_token")
            return None
        except ValidationError:
            logger.debug("malformed_token_claims")
            return None

        now = now or timezone.now()
        if now >= claims.exp:
            logger.debug("token_has_expired", user_id=claims.user_id)
            return None
        return Identity(user_id=claims.user_id, email=claims.sub, role=claims.role)

    def extract_user_id(self, token: str | None) -> int | None:
        identity = self.verify(token)
        return identity.user_id if identity else None

    def extract_role(self, token: str | None) -> Role | None:
        identity = self.verify(token)
        return identity.role if identity else None

    def extract_email(self, token: str | None) -> str | None:
        identity = self.verify(token)
        return identity.email if identity else None


@functools.cache
def get_identity_tokens() -> IdentityTokenService:
    """Process-wide token service, built from settings on first use."""
    return IdentityTokenService(
        signing_key=t.cast(str, settings.JWT_SIGNING_KEY),
        algorithm=settings.JWT_ALGORITHM,
        default_ttl=settings.ACCESS_TOKEN_LIFETIME,
    )
