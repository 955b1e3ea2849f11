"""Tests for identity token issue and verification."""

from datetime import timedelta

import jwt
import pytest
from django.utils import timezone
from freezegun import freeze_time

from accounts.domain import Identity, Role
from accounts.tokens import IdentityTokenService, get_identity_tokens


class TestIssueAndVerify:
    def test_round_trip(self, tokens: IdentityTokenService):
        token = tokens.issue("alice@example.com", 42, Role.USER)
        assert tokens.verify(token) == Identity(user_id=42, email="alice@example.com", role=Role.USER)

    def test_admin_role_survives(self, tokens: IdentityTokenService):
        token = tokens.issue("root@example.com", 1, Role.ADMIN)
        identity = tokens.verify(token)
        assert identity is not None
        assert identity.is_admin

    def test_payload_claims(self, tokens: IdentityTokenService):
        issued_at = timezone.now()
        token = tokens.issue("alice@example.com", 42, Role.USER, issued_at=issued_at)
        payload = jwt.decode(token, options={"verify_signature": False})
        assert payload["sub"] == "alice@example.com"
        assert payload["user_id"] == 42
        assert payload["role"] == "USER"
        assert payload["exp"] - payload["iat"] == 3600


class TestRejection:
    """Invalid tokens yield no identity instead of raising."""

    def test_expired_token(self, tokens: IdentityTokenService):
        issued_at = timezone.now() - timedelta(hours=2)
        token = tokens.issue("alice@example.com", 42, Role.USER, issued_at=issued_at)
        assert tokens.verify(token) is None

    def test_token_is_invalid_at_expiry_instant(self, tokens: IdentityTokenService):
        issued_at = timezone.now().replace(microsecond=0)
        token = tokens.issue("alice@example.com", 42, Role.USER, issued_at=issued_at, ttl=timedelta(minutes=10))
        assert tokens.verify(token, now=issued_at + timedelta(minutes=9)) is not None
        assert tokens.verify(token, now=issued_at + timedelta(minutes=10)) is None

    def test_zero_ttl_token_is_expired_when_issued(self, tokens: IdentityTokenService):
        issued_at = timezone.now().replace(microsecond=0)
        token = tokens.issue("alice@example.com", 42, Role.USER, issued_at=issued_at, ttl=timedelta(0))

        payload = jwt.decode(token, options={"verify_signature": False})
        assert payload["exp"] == payload["iat"]
        assert tokens.verify(token, now=issued_at) is None

    def test_token_expires_with_the_clock(self, tokens: IdentityTokenService):
        with freeze_time("2030-01-01 12:00:00") as frozen:
            token = tokens.issue("alice@example.com", 42, Role.USER)
            frozen.tick(timedelta(minutes=59))
            assert tokens.verify(token) is not None
            frozen.tick(timedelta(minutes=1))
            assert tokens.verify(token) is None

    def test_wrong_signing_key(self, tokens: IdentityTokenService):
        other = IdentityTokenService("a-completely-different-signing-key-0123456789abcdef", "HS256", timedelta(hours=1))
        token = other.issue("alice@example.com", 42, Role.USER)
        assert tokens.verify(token) is None

    def test_tampered_payload(self, tokens: IdentityTokenService):
        token = tokens.issue("alice@example.com", 42, Role.USER)
        header, _, signature = token.split(".")
        forged = jwt.encode(
            {"sub": "alice@example.com", "user_id": 42, "role": "ADMIN", "iat": 0, "exp": 9999999999},
            "guessed-key-guessed-key-guessed-key-0123456789",
            algorithm="HS256",
        ).split(".")[1]
        assert tokens.verify(".".join([header, forged, signature])) is None

    @pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
    def test_malformed_token(self, tokens: IdentityTokenService, token):
        assert tokens.verify(token) is None

    def test_missing_user_id_claim(self, tokens: IdentityTokenService):
        now = timezone.now()
        token = jwt.encode(
            {"sub": "alice@example.com", "role": "USER", "iat": int(now.timestamp()), "exp": int(now.timestamp()) + 60},
            tokens._signing_key,
            algorithm="HS256",
        )
        assert tokens.verify(token) is None

    def test_unknown_role(self, tokens: IdentityTokenService):
        now = timezone.now()
        token = jwt.encode(
            {
                "sub": "alice@example.com",
                "user_id": 42,
                "role": "SUPERUSER",
                "iat": int(now.timestamp()),
                "exp": int(now.timestamp()) + 60,
            },
            tokens._signing_key,
            algorithm="HS256",
        )
        assert tokens.verify(token) is None


class TestExtractors:
    def test_extract_from_valid_token(self, tokens: IdentityTokenService):
        token = tokens.issue("alice@example.com", 42, Role.ADMIN)
        assert tokens.extract_user_id(token) == 42
        assert tokens.extract_role(token) is Role.ADMIN
        assert tokens.extract_email(token) == "alice@example.com"

    def test_extract_from_invalid_token(self, tokens: IdentityTokenService):
        assert tokens.extract_user_id("garbage") is None
        assert tokens.extract_role("garbage") is None
        assert tokens.extract_email(None) is None


def test_identity_tokens_use_configured_key(tokens: IdentityTokenService):
    token = get_identity_tokens().issue("alice@example.com", 42, Role.USER)
    assert tokens.verify(token) is not None
