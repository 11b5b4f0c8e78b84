"""Customer-facing order endpoints."""

from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer
from rest_framework import generics
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Order
from .serializers import OrderCreateSerializer, OrderSerializer
from .services import OrderError, cancel_own_order, create_order

ORDER_ERROR = inline_serializer(name="OrderMutationError", fields={"detail": rf_serializers.CharField()})


class OrderListView(generics.ListAPIView):
    """List the user's orders (newest first) or place a new one."""

    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer
    filterset_fields = ["status"]
    ordering_fields = ["created_at", "total"]

    def get_throttles(self):
        self.throttle_scope = "orders_write" if self.request.method == "POST" else "orders"
        return super().get_throttles()

    def get_queryset(self):
        return Order.objects.filter(user=self.request.user).prefetch_related("items__product")

    @extend_schema(tags=["Orders"], summary="List my orders")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Orders"],
        summary="Create order",
        description=(
            "Creates a pending order from explicit items. Prices are taken from the catalog at this moment and "
            "stock is decremented. 400 when a product is inactive or stock is insufficient; 404 when a product, "
            "variant or address does not exist."
        ),
        request=OrderCreateSerializer,
        responses={201: OrderSerializer, 400: ORDER_ERROR},
        examples=[
            OpenApiExample(
                "Create",
                value={"items": [{"product_id": 7, "quantity": 2}], "address_id": 3, "notes": "Llamar antes"},
                request_only=True,
            )
        ],
    )
    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            order = create_order(user=request.user, **serializer.validated_data)
        except OrderError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(generics.RetrieveAPIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "orders"
    serializer_class = OrderSerializer
    lookup_url_kwarg = "order_id"

    def get_queryset(self):
        return Order.objects.filter(user=self.request.user).prefetch_related("items__product")

    @extend_schema(tags=["Orders"], summary="Get order detail")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class OrderCancelView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "orders_write"

    @extend_schema(
        tags=["Orders"],
        summary="Cancel order",
        description="Cancels one of the user's pending orders and returns its units to stock.",
        request=None,
        responses={200: OrderSerializer, 400: ORDER_ERROR},
    )
    def post(self, request, order_id: int):
        try:
            order = cancel_own_order(user=request.user, order_id=order_id)
        except OrderError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(OrderSerializer(order).data)
