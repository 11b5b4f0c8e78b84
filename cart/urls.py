"""Cart URL routes (v1)."""

from django.urls import path

from .views import (
    CartCheckoutView,
    CartItemDetailView,
    CartItemsView,
    CartMergeView,
    CartView,
    GuestCartItemDetailView,
    GuestCartItemsView,
    GuestCartView,
)

app_name = "cart"

urlpatterns = [
    path("", CartView.as_view(), name="cart-detail"),
    path("items/", CartItemsView.as_view(), name="cart-items"),
    path("items/<int:product_id>/", CartItemDetailView.as_view(), name="cart-item"),
    path("merge/", CartMergeView.as_view(), name="cart-merge"),
    path("checkout/", CartCheckoutView.as_view(), name="cart-checkout"),
    # Anonymous session cart
    path("guest/", GuestCartView.as_view(), name="guest-cart-detail"),
    path("guest/items/", GuestCartItemsView.as_view(), name="guest-cart-items"),
    path("guest/items/<int:product_id>/", GuestCartItemDetailView.as_view(), name="guest-cart-item"),
]
