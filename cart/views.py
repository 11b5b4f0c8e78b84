"""DRF views for the user cart and the anonymous session cart."""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema, inline_serializer
from orders.serializers import OrderSerializer
from orders.services import OrderError, checkout_cart
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import get_or_create_cart
from .serializers import (
    AddItemSerializer,
    CartReadSerializer,
    CheckoutSerializer,
    GuestCartReadSerializer,
    LineQuerySerializer,
    UpdateItemSerializer,
)
from .services import CartError, add_item, clear_cart, merge_items, remove_item, update_item
from .session import SessionCart

ERROR_RESPONSES = {
    400: inline_serializer(name="CartMutationError", fields={"detail": rf_serializers.CharField()}),
    404: inline_serializer(name="NotFoundError", fields={"detail": rf_serializers.CharField()}),
}

VARIANT_PARAM = OpenApiParameter(
    "variant_id",
    OpenApiTypes.INT,
    location=OpenApiParameter.QUERY,
    required=False,
    description="Variant of the line; omit for the product without a variant",
)


def _cart_response(user, code=status.HTTP_200_OK) -> Response:
    cart = get_or_create_cart(user=user)
    return Response(CartReadSerializer.from_cart(cart=cart).data, status=code)


def _variant_id(request):
    query = LineQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    return query.validated_data["variant_id"]


class CartView(APIView):
    """The authenticated user's cart."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Get cart",
        description="Returns the user's cart with items priced at current prices and totals.",
        responses=CartReadSerializer,
        examples=[
            OpenApiExample(
                "Cart",
                value={
                    "id": 1,
                    "items": [
                        {
                            "id": 10,
                            "product_id": 7,
                            "variant_id": None,
                            "name": "Compresor Embraco 1/3 HP",
                            "slug": "compresor-embraco-13-hp",
                            "variant_name": None,
                            "image_url": "",
                            "stock": 12,
                            "quantity": 2,
                            "unit_price": "385000.00",
                            "line_total": "770000.00",
                        }
                    ],
                    "subtotal": "770000.00",
                    "total": "770000.00",
                    "item_count": 2,
                },
                response_only=True,
            )
        ],
    )
    def get(self, request):
        return _cart_response(request.user)

    @extend_schema(tags=["Cart Endpoints"], summary="Clear cart", responses=CartReadSerializer)
    def delete(self, request):
        clear_cart(user=request.user)
        return _cart_response(request.user)


class CartItemsView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Add item to cart",
        description=(
            "Adds units of a product, or of one of its variants, to the cart. An existing line is incremented. "
            "Fails with 400 when the variant is inactive, the item is out of stock or the quantity would exceed "
            "stock; 404 when the product or variant does not exist."
        ),
        request=AddItemSerializer,
        responses={201: CartReadSerializer, **ERROR_RESPONSES},
    )
    def post(self, request):
        serializer = AddItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            add_item(user=request.user, **serializer.validated_data)
        except CartError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return _cart_response(request.user, status.HTTP_201_CREATED)


class CartItemDetailView(APIView):
    """A single line, addressed by product id and optional `?variant_id=`."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Update cart item quantity",
        parameters=[VARIANT_PARAM],
        request=UpdateItemSerializer,
        responses={200: CartReadSerializer, **ERROR_RESPONSES},
    )
    def patch(self, request, product_id: int):
        serializer = UpdateItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            update_item(
                user=request.user,
                product_id=product_id,
                variant_id=_variant_id(request),
                quantity=serializer.validated_data["quantity"],
            )
        except CartError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return _cart_response(request.user)

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Remove cart item",
        parameters=[VARIANT_PARAM],
        responses={200: CartReadSerializer, 404: ERROR_RESPONSES[404]},
    )
    def delete(self, request, product_id: int):
        remove_item(user=request.user, product_id=product_id, variant_id=_variant_id(request))
        return _cart_response(request.user)


class CartMergeView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Merge items into cart",
        description=(
            "Adds each `{product_id, variant_id?, quantity}` entry in order, as `POST items/` would. Entries are "
            "applied one by one: on the first failure the error is returned and earlier entries stay in the cart."
        ),
        request=AddItemSerializer(many=True),
        responses={200: CartReadSerializer, **ERROR_RESPONSES},
    )
    def post(self, request):
        serializer = AddItemSerializer(data=request.data, many=True)
        serializer.is_valid(raise_exception=True)
        try:
            merge_items(user=request.user, items=serializer.validated_data)
        except CartError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return _cart_response(request.user)


class CartCheckoutView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "orders_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Checkout cart",
        description="Creates a pending order from the cart lines, decrements stock and empties the cart.",
        request=CheckoutSerializer,
        responses={201: OrderSerializer, **ERROR_RESPONSES},
    )
    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            order = checkout_cart(user=request.user, **serializer.validated_data)
        except OrderError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


# Anonymous session cart


class GuestCartView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "cart"

    @extend_schema(tags=["Cart Endpoints"], summary="Get guest cart", responses=GuestCartReadSerializer)
    def get(self, request):
        return Response(GuestCartReadSerializer(SessionCart(request).summary()).data)

    @extend_schema(tags=["Cart Endpoints"], summary="Clear guest cart", responses=GuestCartReadSerializer)
    def delete(self, request):
        session_cart = SessionCart(request)
        session_cart.clear()
        return Response(GuestCartReadSerializer(session_cart.summary()).data)


class GuestCartItemsView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Add item to guest cart",
        description="Stores the line in the session. Stock is checked when the cart is merged on sign-in.",
        request=AddItemSerializer,
        responses={201: GuestCartReadSerializer, **ERROR_RESPONSES},
    )
    def post(self, request):
        serializer = AddItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session_cart = SessionCart(request)
        session_cart.add(**serializer.validated_data)
        return Response(GuestCartReadSerializer(session_cart.summary()).data, status=status.HTTP_201_CREATED)


class GuestCartItemDetailView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Update guest cart item",
        parameters=[VARIANT_PARAM],
        request=UpdateItemSerializer,
        responses={200: GuestCartReadSerializer, **ERROR_RESPONSES},
    )
    def patch(self, request, product_id: int):
        serializer = UpdateItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session_cart = SessionCart(request)
        session_cart.update(
            product_id=product_id,
            variant_id=_variant_id(request),
            quantity=serializer.validated_data["quantity"],
        )
        return Response(GuestCartReadSerializer(session_cart.summary()).data)

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Remove guest cart item",
        parameters=[VARIANT_PARAM],
        responses={200: GuestCartReadSerializer, 404: ERROR_RESPONSES[404]},
    )
    def delete(self, request, product_id: int):
        session_cart = SessionCart(request)
        session_cart.remove(product_id=product_id, variant_id=_variant_id(request))
        return Response(GuestCartReadSerializer(session_cart.summary()).data)
