"""Wishlist endpoints for the authenticated user."""

from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import get_wishlist, list_wishlists
from .serializers import WishlistCreateSerializer, WishlistItemCreateSerializer, WishlistSerializer
from .services import WishlistError, add_product, create_wishlist, delete_wishlist, remove_product


class _WishlistView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "wishlists"


class WishlistListView(_WishlistView):
    @extend_schema(tags=["Wishlist Endpoints"], summary="List my wishlists", responses=WishlistSerializer(many=True))
    def get(self, request):
        return Response(WishlistSerializer(list_wishlists(user=request.user), many=True).data)

    @extend_schema(
        tags=["Wishlist Endpoints"],
        summary="Create wishlist",
        request=WishlistCreateSerializer,
        responses={201: WishlistSerializer},
    )
    def post(self, request):
        serializer = WishlistCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            wishlist = create_wishlist(user=request.user, name=serializer.validated_data["name"])
        except WishlistError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(WishlistSerializer(wishlist).data, status=status.HTTP_201_CREATED)


class WishlistDetailView(_WishlistView):
    @extend_schema(tags=["Wishlist Endpoints"], summary="Get wishlist", responses=WishlistSerializer)
    def get(self, request, wishlist_id: int):
        return Response(WishlistSerializer(get_wishlist(user=request.user, wishlist_id=wishlist_id)).data)

    @extend_schema(tags=["Wishlist Endpoints"], summary="Delete wishlist", responses={204: None})
    def delete(self, request, wishlist_id: int):
        delete_wishlist(user=request.user, wishlist_id=wishlist_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class WishlistItemsView(_WishlistView):
    @extend_schema(
        tags=["Wishlist Endpoints"],
        summary="Add product to wishlist",
        request=WishlistItemCreateSerializer,
        responses={201: WishlistSerializer},
    )
    def post(self, request, wishlist_id: int):
        serializer = WishlistItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        add_product(user=request.user, wishlist_id=wishlist_id, **serializer.validated_data)
        return Response(
            WishlistSerializer(get_wishlist(user=request.user, wishlist_id=wishlist_id)).data,
            status=status.HTTP_201_CREATED,
        )


class WishlistItemDetailView(_WishlistView):
    @extend_schema(tags=["Wishlist Endpoints"], summary="Remove product from wishlist", responses={204: None})
    def delete(self, request, wishlist_id: int, product_id: int):
        try:
            remove_product(user=request.user, wishlist_id=wishlist_id, product_id=product_id)
        except WishlistError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class DefaultWishlistItemsView(_WishlistView):
    @extend_schema(
        tags=["Wishlist Endpoints"],
        summary="Add product to Favoritos",
        description='Creates the "Favoritos" list on first use.',
        request=WishlistItemCreateSerializer,
        responses={201: WishlistSerializer},
    )
    def post(self, request):
        serializer = WishlistItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = add_product(user=request.user, **serializer.validated_data)
        wishlist = get_wishlist(user=request.user, wishlist_id=item.wishlist_id)
        return Response(WishlistSerializer(wishlist).data, status=status.HTTP_201_CREATED)
