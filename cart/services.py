"""Cart Store: mutations on a user's persisted cart."""

import logging
from typing import Iterable, Mapping, Optional

from catalog.models import Product, ProductVariant
from django.db import transaction
from django.shortcuts import get_object_or_404

from .keys import LineKey
from .models import Cart, CartItem
from .selectors import get_or_create_cart


class CartError(Exception):
    """Raised for cart mutation failures (stock, availability, quantity)."""


logger = logging.getLogger("refrielectricos.cart")


def _check_quantity(quantity) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise CartError("Quantity must be a positive integer")


def _available_stock(*, product_id: int, variant_id: Optional[int]) -> int:
    """Stock that bounds the line: the variant's when given, else the product's.

    Raises Http404 for a missing product or a variant of another product.
    """

    product = get_object_or_404(Product, pk=product_id)
    if variant_id is None:
        return product.stock
    variant = get_object_or_404(ProductVariant, pk=variant_id, product=product)
    if not variant.is_active:
        raise CartError("Variant is not available")
    return variant.stock


@transaction.atomic
def add_item(*, user, product_id: int, quantity: int, variant_id: Optional[int] = None) -> CartItem:
    """Add `quantity` units of a product (or one of its variants) to the cart.

    An existing line for the same key is incremented; the resulting quantity
    may not exceed available stock.
    """

    _check_quantity(quantity)
    cart = get_or_create_cart(user=user)
    stock = _available_stock(product_id=product_id, variant_id=variant_id)
    if stock <= 0:
        raise CartError("Product is out of stock")

    key = LineKey(product_id, variant_id)
    item = CartItem.objects.select_for_update().filter(cart=cart, **key.lookup()).first()
    new_quantity = quantity + (item.quantity if item else 0)
    if new_quantity > stock:
        raise CartError(f"Only {stock} units available")

    if item is None:
        item = CartItem.objects.create(cart=cart, product_id=product_id, variant_id=variant_id, quantity=quantity)
        event = "cart.item_added"
    else:
        item.quantity = new_quantity
        item.save(update_fields=["quantity", "updated_at"])
        event = "cart.item_updated"
    logger.info(
        event,
        extra={
            "event": event,
            "cart_id": cart.id,
            "user_id": user.id,
            "product_id": product_id,
            "variant_id": variant_id,
            "quantity": item.quantity,
        },
    )
    return item


@transaction.atomic
def update_item(*, user, product_id: int, quantity: int, variant_id: Optional[int] = None) -> CartItem:
    """Overwrite the quantity of an existing line (Http404 when missing)."""

    _check_quantity(quantity)
    cart = get_or_create_cart(user=user)
    key = LineKey(product_id, variant_id)
    item = get_object_or_404(CartItem.objects.select_for_update(), cart=cart, **key.lookup())
    stock = item.variant.stock if item.variant_id else item.product.stock
    if quantity > stock:
        raise CartError(f"Only {stock} units available")
    item.quantity = quantity
    item.save(update_fields=["quantity", "updated_at"])
    logger.info(
        "cart.item_updated",
        extra={
            "event": "cart.item_updated",
            "cart_id": cart.id,
            "user_id": user.id,
            "product_id": product_id,
            "variant_id": variant_id,
            "quantity": quantity,
        },
    )
    return item


@transaction.atomic
def remove_item(*, user, product_id: int, variant_id: Optional[int] = None) -> None:
    cart = get_or_create_cart(user=user)
    item = get_object_or_404(CartItem, cart=cart, **LineKey(product_id, variant_id).lookup())
    item.delete()
    logger.info(
        "cart.item_removed",
        extra={
            "event": "cart.item_removed",
            "cart_id": cart.id,
            "user_id": user.id,
            "product_id": product_id,
            "variant_id": variant_id,
        },
    )


@transaction.atomic
def clear_cart(*, user) -> Cart:
    """Delete every line of the user's cart; a no-op on an empty cart."""

    cart = get_or_create_cart(user=user)
    deleted, _ = CartItem.objects.filter(cart=cart).delete()
    logger.info(
        "cart.cleared",
        extra={"event": "cart.cleared", "cart_id": cart.id, "user_id": user.id, "lines": deleted},
    )
    return cart


def merge_items(*, user, items: Iterable[Mapping]) -> Cart:
    """Add each entry through `add_item`, in order.

    Entries commit one by one: the first failure propagates and the entries
    before it stay in the cart.
    """

    cart = get_or_create_cart(user=user)
    merged = 0
    for entry in items:
        add_item(
            user=user,
            product_id=entry["product_id"],
            variant_id=entry.get("variant_id"),
            quantity=entry["quantity"],
        )
        merged += 1
    logger.info(
        "cart.merged",
        extra={"event": "cart.merged", "cart_id": cart.id, "user_id": user.id, "lines": merged},
    )
    return cart
