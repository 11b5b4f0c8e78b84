"""Back-office order management, staff only."""

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.response import Response

from .models import Order
from .serializers import AdminOrderSerializer, OrderStatusSerializer
from .services import OrderError, set_status


@extend_schema_view(
    list=extend_schema(tags=["Admin Endpoints"], summary="List orders"),
    retrieve=extend_schema(tags=["Admin Endpoints"], summary="Get order"),
    destroy=extend_schema(tags=["Admin Endpoints"], summary="Delete order"),
)
class OrderAdminViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [permissions.IsAdminUser]
    serializer_class = AdminOrderSerializer
    filterset_fields = ["status", "user"]
    search_fields = ["number", "user__email", "user__name"]
    ordering_fields = ["created_at", "total", "status"]

    def get_queryset(self):
        return Order.objects.select_related("user").prefetch_related("items__product")

    @extend_schema(
        tags=["Admin Endpoints"],
        summary="Change order status",
        request=OrderStatusSerializer,
        responses={200: AdminOrderSerializer},
    )
    def partial_update(self, request, *args, **kwargs):
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            order = set_status(order=self.get_object(), status=serializer.validated_data["status"])
        except OrderError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(self.get_serializer(self.get_queryset().get(pk=order.pk)).data)
