"""Users app API views.

- register: create an account (email, name, password).
- signin: issue a JWT pair and fold the anonymous session cart into the
  user's cart.
- refresh / signout: rotate or blacklist refresh tokens.
- signout-all / signout-others: revoke every session of the current user,
  or all but the one presenting its refresh token.
- profile: read or edit the current user's name and phone.
"""

from cart.services import CartError
from cart.session import SessionCart
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken, TokenError
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .logging import log_auth_event
from .serializers import RegistrationSerializer, SignInSerializer, SignOutSerializer, UserMeSerializer
from .services import register_user, revoke_refresh_tokens, update_user


@extend_schema(
    operation_id="users_profile",
    summary="Get or update current user profile",
    description=(
        "GET returns the authenticated user's profile. PATCH updates `name` and `phone`.\n\n"
        "Errors: 401 if authentication credentials are missing or invalid."
    ),
    tags=["User Endpoints"],
    request=UserMeSerializer,
    responses={
        200: OpenApiResponse(description="User profile", response=UserMeSerializer),
        401: OpenApiResponse(description="Unauthorized"),
    },
)
@api_view(["GET", "PATCH"])
@permission_classes([IsAuthenticated])
@throttle_classes([ScopedRateThrottle])
def profile(request):
    if request.method == "PATCH":
        serializer = UserMeSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        update_user(user=request.user, acting_user=request.user, **serializer.validated_data)
        log_auth_event("profile_update", request, user=request.user)
    return Response(UserMeSerializer(request.user).data)


profile.throttle_scope = "profile"


@extend_schema(
    tags=["User Endpoints"],
    request=RegistrationSerializer,
    responses={201: UserMeSerializer, 400: OpenApiResponse(description="Validation error")},
)
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([ScopedRateThrottle])
def register(request):
    serializer = RegistrationSerializer(data=request.data)
    if not serializer.is_valid():
        log_auth_event("register", request, status="invalid")
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        user = register_user(**serializer.validated_data)
    except DjangoValidationError as exc:
        log_auth_event("register", request, status="invalid")
        errors = exc.message_dict if hasattr(exc, "error_dict") else {"password": exc.messages}
        return Response(errors, status=status.HTTP_400_BAD_REQUEST)
    log_auth_event("register", request, user=user)
    return Response(UserMeSerializer(user).data, status=status.HTTP_201_CREATED)


register.throttle_scope = "register"


class SignInView(TokenObtainPairView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "signin"
    serializer_class = SignInSerializer

    @extend_schema(tags=["User Endpoints"], request=SignInSerializer)
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            log_auth_event("signin", request, status="failed")
            code = status.HTTP_401_UNAUTHORIZED if "detail" in serializer.errors else status.HTTP_400_BAD_REQUEST
            return Response(serializer.errors, status=code)

        user = serializer.user
        session_cart = SessionCart(request)
        merged = 0
        if session_cart:
            try:
                merged = session_cart.merge_into(user)
            except (CartError, Http404) as exc:
                # Sign-in still succeeds; unmerged lines stay in the session cart.
                log_auth_event("signin_cart_merge", request, user=user, status="failed", extra={"error": str(exc)})
        log_auth_event("signin", request, user=user, extra={"cart_lines_merged": merged})
        return Response(serializer.validated_data, status=status.HTTP_200_OK)


class RefreshView(TokenRefreshView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "token_refresh"

    @extend_schema(tags=["User Endpoints"])
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        log_auth_event("token_refresh", request, status="success" if resp.status_code == 200 else "failed")
        return resp


class SignOutView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "signout"
    permission_classes = [AllowAny]

    @extend_schema(tags=["User Endpoints"], request=SignOutSerializer)
    def post(self, request):
        serializer = SignOutSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"detail": "Refresh token is required."}, status=status.HTTP_400_BAD_REQUEST)
        try:
            RefreshToken(serializer.validated_data["refresh"]).blacklist()
        except TokenError:
            log_auth_event("signout", request, status="invalid_token")
            return Response({"detail": "Invalid token."}, status=status.HTTP_400_BAD_REQUEST)
        log_auth_event("signout", request)
        return Response({"detail": "Signed out."}, status=status.HTTP_205_RESET_CONTENT)


class SignOutAllView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "signout"
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["User Endpoints"], request=None)
    def post(self, request):
        revoked = revoke_refresh_tokens(user=request.user)
        log_auth_event("signout_all", request, user=request.user, extra={"revoked": revoked})
        return Response({"detail": "Signed out of all sessions."}, status=status.HTTP_205_RESET_CONTENT)


class SignOutOthersView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "signout"
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["User Endpoints"], request=SignOutSerializer)
    def post(self, request):
        serializer = SignOutSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"detail": "Refresh token is required."}, status=status.HTTP_400_BAD_REQUEST)
        try:
            current = RefreshToken(serializer.validated_data["refresh"])
        except TokenError:
            log_auth_event("signout_others", request, user=request.user, status="invalid_token")
            return Response({"detail": "Invalid token."}, status=status.HTTP_400_BAD_REQUEST)
        if str(current.get(api_settings.USER_ID_CLAIM)) != str(request.user.pk):
            log_auth_event("signout_others", request, user=request.user, status="invalid_token")
            return Response({"detail": "Invalid token."}, status=status.HTTP_400_BAD_REQUEST)
        revoked = revoke_refresh_tokens(user=request.user, keep_jti=current[api_settings.JTI_CLAIM])
        log_auth_event("signout_others", request, user=request.user, extra={"revoked": revoked})
        return Response({"detail": "Other sessions signed out."}, status=status.HTTP_205_RESET_CONTENT)
