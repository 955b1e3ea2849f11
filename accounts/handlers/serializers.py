"""Serializers for account input and output."""

from rest_framework import serializers

from accounts.domain import Role


class SignupSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(min_length=8, max_length=128, write_only=True)
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(max_length=255)
    password = serializers.CharField(max_length=128, write_only=True)


class UserSerializer(serializers.Serializer):
    """Serializer for User domain model."""

    id = serializers.IntegerField()
    email = serializers.EmailField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    role = serializers.CharField(source="role.value")
    is_active = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class UserAdminUpdateSerializer(serializers.Serializer):
    """Administrative changes; both fields optional."""

    role = serializers.ChoiceField(choices=[role.value for role in Role], required=False)
    is_active = serializers.BooleanField(required=False)
