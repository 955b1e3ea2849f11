"""HTTP handlers (views) for signup, login and account administration."""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.domain import Role
from accounts.handlers.serializers import (
    LoginSerializer,
    SignupSerializer,
    UserAdminUpdateSerializer,
    UserSerializer,
)
from accounts.services.account_service import AccountService
from accounts.services.auth_service import AuthService
from accounts.stores.django_store import DjangoUserStore
from accounts.tokens import get_identity_tokens
from common.authentication import IsAuthenticatedIdentity
from notifications.celery_notifier import CeleryNotifier


def get_auth_service() -> AuthService:
    return AuthService(DjangoUserStore(), get_identity_tokens(), CeleryNotifier())


class SignupView(APIView):
    """Handler for POST /api/auth/signup"""

    def post(self, request: Request) -> Response:
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = get_auth_service().signup(**serializer.validated_data)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """Handler for POST /api/auth/login"""

    def post(self, request: Request) -> Response:
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = get_auth_service().login(**serializer.validated_data)
        return Response(
            {
                "token": result.token,
                "token_type": "Bearer",
                "user": UserSerializer(result.user).data,
            }
        )


class MeView(APIView):
    """Handler for GET /api/auth/me"""

    permission_classes = [IsAuthenticatedIdentity]

    def get(self, request: Request) -> Response:
        user = get_auth_service().get_user(request.user.user_id)
        return Response(UserSerializer(user).data)


class UserAdminView(APIView):
    """Handler for PATCH /api/users/{user_id} (administrators only)"""

    permission_classes = [IsAuthenticatedIdentity]

    def patch(self, request: Request, user_id: int) -> Response:
        serializer = UserAdminUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        accounts = AccountService(DjangoUserStore())
        user = accounts.get_user(user_id, request.user)
        if "role" in serializer.validated_data:
            user = accounts.change_role(user_id, Role(serializer.validated_data["role"]), request.user)
        if "is_active" in serializer.validated_data:
            user = accounts.set_active(user_id, serializer.validated_data["is_active"], request.user)
        return Response(UserSerializer(user).data)
