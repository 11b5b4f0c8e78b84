"""Wishlist mutations."""

import logging

from catalog.models import Product
from django.db import transaction
from django.shortcuts import get_object_or_404

from .models import DEFAULT_WISHLIST_NAME, Wishlist, WishlistItem


class WishlistError(Exception):
    """Raised for invalid wishlist operations."""


logger = logging.getLogger("refrielectricos.wishlists")


def get_default_wishlist(*, user) -> Wishlist:
    wishlist, _ = Wishlist.objects.get_or_create(user=user, name=DEFAULT_WISHLIST_NAME)
    return wishlist


@transaction.atomic
def create_wishlist(*, user, name: str) -> Wishlist:
    name = (name or "").strip()
    if not name:
        raise WishlistError("Wishlist name is required")
    if Wishlist.objects.filter(user=user, name__iexact=name).exists():
        raise WishlistError(f'A wishlist named "{name}" already exists')
    return Wishlist.objects.create(user=user, name=name)


def delete_wishlist(*, user, wishlist_id: int) -> None:
    wishlist = get_object_or_404(Wishlist, pk=wishlist_id, user=user)
    wishlist.delete()


@transaction.atomic
def add_product(*, user, product_id: int, wishlist_id=None) -> WishlistItem:
    """Add a product to one of the user's lists, or to the default list.

    Adding a product that is already on the list returns the existing item.
    """

    if wishlist_id is None:
        wishlist = get_default_wishlist(user=user)
    else:
        wishlist = get_object_or_404(Wishlist, pk=wishlist_id, user=user)
    product = get_object_or_404(Product, pk=product_id, is_active=True)
    item, created = WishlistItem.objects.get_or_create(wishlist=wishlist, product=product)
    if created:
        logger.info(
            "wishlist.item_added",
            extra={"event": "wishlist.item_added", "wishlist_id": wishlist.id, "product_id": product.id},
        )
    return item


def remove_product(*, user, wishlist_id: int, product_id: int) -> None:
    wishlist = get_object_or_404(Wishlist, pk=wishlist_id, user=user)
    deleted, _ = WishlistItem.objects.filter(wishlist=wishlist, product_id=product_id).delete()
    if not deleted:
        raise WishlistError("Product is not in this wishlist")
