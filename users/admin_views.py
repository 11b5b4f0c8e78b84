"""Back-office user management, staff only."""

from django.db.models import Count
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.response import Response

from .logging import log_auth_event
from .models import User
from .serializers import AdminUserSerializer
from .services import update_user


@extend_schema_view(
    list=extend_schema(tags=["Admin Endpoints"], summary="List users"),
    retrieve=extend_schema(tags=["Admin Endpoints"], summary="Get user"),
    partial_update=extend_schema(tags=["Admin Endpoints"], summary="Update user"),
    destroy=extend_schema(tags=["Admin Endpoints"], summary="Delete user"),
)
class UserAdminViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [permissions.IsAdminUser]
    serializer_class = AdminUserSerializer
    search_fields = ["email", "name"]
    filterset_fields = ["is_staff", "is_active"]
    ordering_fields = ["date_joined", "email", "name"]
    http_method_names = ["get", "patch", "delete", "head", "options"]

    def get_queryset(self):
        return User.objects.annotate(order_count=Count("orders")).order_by("-date_joined")

    def perform_update(self, serializer):
        update_user(user=serializer.instance, acting_user=self.request.user, **serializer.validated_data)
        log_auth_event(
            "admin_user_update",
            self.request,
            user=serializer.instance,
            extra={"by": self.request.user.pk, "fields": sorted(serializer.validated_data)},
        )

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        if user.pk == request.user.pk:
            return Response({"detail": "You cannot delete your own account."}, status=status.HTTP_400_BAD_REQUEST)
        log_auth_event("admin_user_delete", request, user=user, extra={"by": request.user.pk})
        user.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
