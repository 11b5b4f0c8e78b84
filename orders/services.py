"""Order mutations: creation with stock decrement, checkout and status changes."""

import logging
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from cart.selectors import cart_lines, get_or_create_cart
from cart.services import clear_cart
from catalog.models import Product, ProductVariant
from common.choices import ORDER_STATUS_TRANSITIONS, OrderStatus
from customer.models import Address
from django.db import transaction
from django.db.models import F
from django.shortcuts import get_object_or_404

from .emails import send_order_paid_email
from .models import Order, OrderItem


class OrderError(Exception):
    """Raised for invalid orders or status changes."""


logger = logging.getLogger("refrielectricos.orders")


def _shipping_snapshot(address: Optional[Address]) -> dict:
    if address is None:
        return {}
    street = ", ".join(part for part in (address.address_line1, address.address_line2) if part)
    return {
        "address": address,
        "shipping_name": address.full_name,
        "shipping_phone": address.phone,
        "shipping_address": street,
        "shipping_city": address.city,
        "shipping_state": address.state,
        "shipping_zip": address.zip_code,
        "shipping_country": address.country,
    }


@transaction.atomic
def create_order(*, user, items: Iterable[Mapping], address_id: Optional[int] = None, notes: str = "") -> Order:
    """Create a pending order, snapshotting prices and decrementing stock.

    Each entry is ``{"product_id", "variant_id"?, "quantity"}``. The unit
    price and the stock decremented are the variant's when one is given,
    else the product's. Any failure rolls the whole order back.
    """

    items = list(items)
    if not items:
        raise OrderError("Order must contain at least one item")

    address = get_object_or_404(Address, pk=address_id, user=user) if address_id is not None else None
    order = Order.objects.create(user=user, email=user.email, notes=notes or "", **_shipping_snapshot(address))

    total = Decimal("0.00")
    for entry in items:
        quantity = entry["quantity"]
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise OrderError("Quantity must be a positive integer")
        product = get_object_or_404(Product.objects.select_for_update(), pk=entry["product_id"])
        if not product.is_active:
            raise OrderError(f'"{product.name}" is not available')

        variant = None
        if entry.get("variant_id") is not None:
            variant = get_object_or_404(
                ProductVariant.objects.select_for_update(), pk=entry["variant_id"], product=product
            )
            if not variant.is_active:
                raise OrderError(f'"{product.name} - {variant.name}" is not available')

        stocked = variant or product
        if stocked.stock < quantity:
            raise OrderError(f'Insufficient stock for "{product.name}": only {stocked.stock} units available')
        stocked.stock -= quantity
        stocked.save(update_fields=["stock", "updated_at"])

        OrderItem.objects.create(
            order=order,
            product=product,
            variant=variant,
            product_name=product.name,
            variant_name=variant.name if variant else "",
            quantity=quantity,
            price=stocked.price,
        )
        total += stocked.price * quantity

    order.total = total
    order.number = f"ORD-{int(order.id):06d}"
    order.save(update_fields=["total", "number", "updated_at"])
    logger.info(
        "order_created",
        extra={
            "event": "order_created",
            "order_id": order.id,
            "user_id": user.id,
            "total": str(total),
            "lines": len(items),
        },
    )
    return order


@transaction.atomic
def checkout_cart(*, user, address_id: Optional[int] = None, notes: str = "") -> Order:
    """Turn the user's cart into an order and empty the cart."""

    cart = get_or_create_cart(user=user)
    lines = cart_lines(cart=cart)
    if not lines:
        raise OrderError("Cart is empty")
    order = create_order(
        user=user,
        items=[{"product_id": li.product_id, "variant_id": li.variant_id, "quantity": li.quantity} for li in lines],
        address_id=address_id,
        notes=notes,
    )
    clear_cart(user=user)
    return order


def _restore_stock(order: Order) -> None:
    for item in order.items.all():
        if item.variant_id:
            ProductVariant.objects.filter(pk=item.variant_id).update(stock=F("stock") + item.quantity)
        elif item.product_id:
            Product.objects.filter(pk=item.product_id).update(stock=F("stock") + item.quantity)


@transaction.atomic
def set_status(*, order: Order, status: str) -> Order:
    """Move an order along its lifecycle.

    Cancelling puts the units back in stock; becoming paid emails the
    customer.
    """

    order = Order.objects.select_for_update().get(pk=order.pk)
    if status not in OrderStatus.values:
        raise OrderError(f'Unknown order status "{status}"')
    previous = order.status
    if status not in ORDER_STATUS_TRANSITIONS[previous]:
        raise OrderError(f"Cannot change order status from {previous} to {status}")

    if status == OrderStatus.CANCELLED:
        _restore_stock(order)
    order.status = status
    order.save(update_fields=["status", "updated_at"])
    logger.info(
        "order_status_changed",
        extra={
            "event": "order_status_changed",
            "order_id": order.id,
            "user_id": order.user_id,
            "status_from": previous,
            "status_to": status,
        },
    )
    if status == OrderStatus.PAID:
        transaction.on_commit(lambda: send_order_paid_email(order))
    return order


def cancel_own_order(*, user, order_id: int) -> Order:
    """Customer-initiated cancellation; only pending orders qualify."""

    order = get_object_or_404(Order, pk=order_id, user=user)
    if order.status != OrderStatus.PENDING:
        raise OrderError("Only pending orders can be cancelled")
    return set_status(order=order, status=OrderStatus.CANCELLED)
