from django.urls import path

from .views import (
    DefaultWishlistItemsView,
    WishlistDetailView,
    WishlistItemDetailView,
    WishlistItemsView,
    WishlistListView,
)

app_name = "wishlists"

urlpatterns = [
    path("", WishlistListView.as_view(), name="list"),
    path("default/items/", DefaultWishlistItemsView.as_view(), name="default-items"),
    path("<int:wishlist_id>/", WishlistDetailView.as_view(), name="detail"),
    path("<int:wishlist_id>/items/", WishlistItemsView.as_view(), name="items"),
    path("<int:wishlist_id>/items/<int:product_id>/", WishlistItemDetailView.as_view(), name="item-detail"),
]
