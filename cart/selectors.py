"""Read-side cart helpers."""

from decimal import Decimal

from .models import Cart


def get_or_create_cart(*, user) -> Cart:
    """Return the user's cart, creating it on first use."""

    cart, _ = Cart.objects.get_or_create(user=user)
    return cart


def cart_lines(*, cart: Cart):
    return list(cart.items.select_related("product", "variant"))


def cart_totals(*, cart: Cart, lines=None) -> dict:
    """Subtotal, total and item count priced at current product/variant prices."""

    lines = cart_lines(cart=cart) if lines is None else lines
    subtotal = sum((line.line_total for line in lines), Decimal("0.00"))
    # Shipping and discounts are not modelled; total equals subtotal
    return {
        "subtotal": subtotal,
        "total": subtotal,
        "item_count": sum(int(line.quantity) for line in lines),
    }
