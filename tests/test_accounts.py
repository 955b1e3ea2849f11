"""Tests for signup, login and administrative account changes."""

import pytest

from accounts.domain import Role
from accounts.domain.errors import (
    AccountDeactivatedError,
    AdminRequiredError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidSignupError,
    UserNotFoundError,
)
from accounts.services.account_service import AccountService
from accounts.services.auth_service import AuthService
from common.errors import ErrorKind


class TestSignup:
    def test_signup_creates_regular_user(self, auth_service, notifier):
        user = auth_service.signup("Alice@Example.com", "s3cret-pass", "Alice", "Liddell")

        assert user.id is not None
        assert user.email == "alice@example.com"
        assert user.role is Role.USER
        assert user.is_active
        assert user.password_hash != "s3cret-pass"
        assert notifier.sent == [("welcome", ("alice@example.com", "Alice"))]

    def test_email_is_unique_ignoring_case(self, auth_service):
        auth_service.signup("alice@example.com", "s3cret-pass", "Alice", "Liddell")

        with pytest.raises(EmailAlreadyRegisteredError) as exc_info:
            auth_service.signup("ALICE@example.com", "other-pass", "Alice", "Again")
        assert exc_info.value.kind is ErrorKind.CONFLICT

    @pytest.mark.parametrize(("email", "password"), [("not-an-email", "s3cret-pass"), ("bob@example.com", "")])
    def test_invalid_signup(self, auth_service, email, password):
        with pytest.raises(InvalidSignupError):
            auth_service.signup(email, password, "Bob", "Builder")

    def test_welcome_failure_does_not_fail_signup(self, user_store, tokens, broken_notifier):
        service = AuthService(user_store, tokens, broken_notifier)

        user = service.signup("carol@example.com", "s3cret-pass", "Carol", "Danvers")

        assert user_store.find_by_id(user.id) == user


class TestLogin:
    """Login failures are distinguishable by kind."""

    @pytest.fixture
    def alice(self, auth_service):
        return auth_service.signup("alice@example.com", "s3cret-pass", "Alice", "Liddell")

    def test_login_issues_token(self, auth_service, tokens, alice):
        result = auth_service.login("alice@example.com", "s3cret-pass")

        assert result.user == alice
        identity = tokens.verify(result.token)
        assert identity.user_id == alice.id
        assert identity.email == "alice@example.com"
        assert identity.role is Role.USER

    def test_login_email_is_case_insensitive(self, auth_service, alice):
        assert auth_service.login("ALICE@example.com", "s3cret-pass").user.id == alice.id

    def test_wrong_password(self, auth_service, alice):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            auth_service.login("alice@example.com", "wrong-pass")
        assert exc_info.value.kind is ErrorKind.UNAUTHORIZED

    def test_unknown_email(self, auth_service):
        with pytest.raises(UserNotFoundError) as exc_info:
            auth_service.login("nobody@example.com", "s3cret-pass")
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    def test_deactivated_account(self, auth_service, user_store, alice, admin, identity_of):
        AccountService(user_store).set_active(alice.id, False, identity_of(admin))

        with pytest.raises(AccountDeactivatedError) as exc_info:
            auth_service.login("alice@example.com", "s3cret-pass")
        assert exc_info.value.kind is ErrorKind.FORBIDDEN

    def test_get_user(self, auth_service, alice):
        assert auth_service.get_user(alice.id) == alice
        with pytest.raises(UserNotFoundError):
            auth_service.get_user(999)


class TestAccountService:
    def test_admin_promotes_user(self, user_store, make_user, admin, identity_of):
        user = make_user()

        promoted = AccountService(user_store).change_role(user.id, Role.ADMIN, identity_of(admin))

        assert promoted.role is Role.ADMIN
        assert user_store.find_by_id(user.id).role is Role.ADMIN

    def test_non_admin_is_refused_before_lookup(self, user_store, make_user, identity_of):
        with pytest.raises(AdminRequiredError):
            AccountService(user_store).change_role(999, Role.ADMIN, identity_of(make_user()))

    def test_unknown_user(self, user_store, admin, identity_of):
        with pytest.raises(UserNotFoundError):
            AccountService(user_store).set_active(999, False, identity_of(admin))

    def test_reactivate(self, user_store, make_user, admin, identity_of):
        user = make_user(is_active=False)

        assert AccountService(user_store).set_active(user.id, True, identity_of(admin)).is_active


class TestUserStore:
    def test_duplicate_email_is_rejected(self, user_store, make_user):
        make_user(email="dup@example.com")
        with pytest.raises(EmailAlreadyRegisteredError):
            make_user(email="DUP@example.com")

    def test_lookup_by_email_ignores_case(self, user_store, make_user):
        user = make_user(email="case@example.com")
        assert user_store.find_by_email("Case@Example.com") == user
        assert user_store.exists_by_email("CASE@EXAMPLE.COM")
