"""Serializers for registration, sign-in, profile and user administration."""

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User


class UserMeSerializer(serializers.ModelSerializer):
    is_admin = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "name", "phone", "is_admin", "date_joined"]
        read_only_fields = ["id", "email", "is_admin", "date_joined"]


class RegistrationSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True)
    phone = serializers.CharField(max_length=16, required=False, allow_blank=True)

    def validate_email(self, value: str) -> str:
        value = value.strip().lower()
        if User.objects.filter(email=value).exists():
            raise serializers.ValidationError("Email is already registered.")
        return value

    def validate(self, attrs):
        user = User(email=attrs.get("email", ""), name=attrs.get("name", ""))
        try:
            validate_password(attrs["password"], user=user)
        except DjangoValidationError as exc:
            raise serializers.ValidationError({"password": list(exc.messages)})
        return attrs


class SignInSerializer(serializers.Serializer):
    """Authenticate with email and password and issue a JWT pair.

    On success `self.user` holds the authenticated user so the view can
    run post-login work (merging the anonymous cart).
    """

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    user = None

    def validate(self, attrs):
        email = attrs["email"].strip().lower()
        try:
            user = User.objects.get(email=email)
        except User.DoesNotExist:
            user = None

        if user is None or not user.is_active or not user.check_password(attrs["password"]):
            raise serializers.ValidationError({"detail": "Invalid credentials."})

        self.user = user
        refresh = RefreshToken.for_user(user)
        return {
            "access": str(refresh.access_token),
            "refresh": str(refresh),
            "user": UserMeSerializer(user).data,
        }


class SignOutSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class AdminUserSerializer(serializers.ModelSerializer):
    """Back-office view of a user; role and activation are editable."""

    order_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = User
        fields = ["id", "email", "name", "phone", "is_staff", "is_active", "date_joined", "last_login", "order_count"]
        read_only_fields = ["id", "email", "date_joined", "last_login", "order_count"]
