from django.db.models import Prefetch, QuerySet
from django.shortcuts import get_object_or_404

from .models import Wishlist, WishlistItem


def list_wishlists(*, user) -> QuerySet[Wishlist]:
    items = WishlistItem.objects.select_related("product")
    return Wishlist.objects.filter(user=user).prefetch_related(Prefetch("items", queryset=items))


def get_wishlist(*, user, wishlist_id: int) -> Wishlist:
    return get_object_or_404(list_wishlists(user=user), pk=wishlist_id)
