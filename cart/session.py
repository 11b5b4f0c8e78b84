"""Anonymous cart kept in the Django session until the visitor signs in."""

import logging
from decimal import Decimal
from typing import Iterator, Optional

from catalog.models import Product, ProductVariant
from django.http import Http404
from django.shortcuts import get_object_or_404

from .keys import LineKey
from .services import CartError, merge_items

logger = logging.getLogger("refrielectricos.cart")


class SessionCart:
    """Guest cart stored as ``{"<product_id>:<variant_id>": quantity}`` in the session.

    Lines follow the persisted cart's identity rules (see `LineKey`) but are
    not stock-checked; stock is enforced when they are merged into a user's
    cart on sign-in.
    """

    SESSION_KEY = "guest_cart"

    def __init__(self, request):
        self.session = request.session
        self._lines: dict = dict(self.session.get(self.SESSION_KEY) or {})

    def __bool__(self) -> bool:
        return bool(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[tuple[LineKey, int]]:
        for raw, quantity in self._lines.items():
            yield LineKey.from_session_key(raw), int(quantity)

    def items(self) -> list[dict]:
        return [{"product_id": k.product_id, "variant_id": k.variant_id, "quantity": q} for k, q in self]

    def _save(self) -> None:
        self.session[self.SESSION_KEY] = self._lines
        self.session.modified = True

    @staticmethod
    def _check_quantity(quantity) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise CartError("Quantity must be a positive integer")

    def add(self, *, product_id: int, quantity: int, variant_id: Optional[int] = None) -> int:
        self._check_quantity(quantity)
        product = get_object_or_404(Product, pk=product_id)
        if variant_id is not None:
            get_object_or_404(ProductVariant, pk=variant_id, product=product)
        raw = LineKey(product_id, variant_id).as_session_key()
        self._lines[raw] = int(self._lines.get(raw, 0)) + quantity
        self._save()
        return self._lines[raw]

    def update(self, *, product_id: int, quantity: int, variant_id: Optional[int] = None) -> int:
        self._check_quantity(quantity)
        raw = LineKey(product_id, variant_id).as_session_key()
        if raw not in self._lines:
            raise Http404("Item not found in cart")
        self._lines[raw] = quantity
        self._save()
        return quantity

    def remove(self, *, product_id: int, variant_id: Optional[int] = None) -> None:
        raw = LineKey(product_id, variant_id).as_session_key()
        if raw not in self._lines:
            raise Http404("Item not found in cart")
        del self._lines[raw]
        self._save()

    def clear(self) -> None:
        self._lines = {}
        self._save()

    def summary(self) -> dict:
        """Lines priced at current catalog prices, plus totals.

        Lines whose product or variant has since been deleted are skipped.
        """

        keys = [key for key, _ in self]
        products = Product.objects.in_bulk({k.product_id for k in keys})
        variants = ProductVariant.objects.in_bulk({k.variant_id for k in keys if k.variant_id is not None})
        lines = []
        for key, quantity in self:
            product = products.get(key.product_id)
            variant = variants.get(key.variant_id) if key.variant_id is not None else None
            if product is None or (key.variant_id is not None and variant is None):
                continue
            unit_price = variant.price if variant else product.price
            lines.append(
                {
                    "product_id": product.id,
                    "variant_id": key.variant_id,
                    "name": product.name,
                    "variant_name": variant.name if variant else None,
                    "image_url": (variant.image_url if variant and variant.image_url else product.image_url),
                    "quantity": quantity,
                    "unit_price": unit_price,
                    "line_total": unit_price * quantity,
                }
            )
        subtotal = sum((line["line_total"] for line in lines), Decimal("0.00"))
        return {
            "items": lines,
            "subtotal": subtotal,
            "total": subtotal,
            "item_count": sum(line["quantity"] for line in lines),
        }

    def merge_into(self, user) -> int:
        """Push each line into the user's cart, dropping it from the session once merged.

        Returns the number of merged lines. Lines whose product or variant no
        longer exists are discarded. Any other failing line propagates its
        error and stays in the session together with the lines after it.
        """

        merged = 0
        for key, quantity in list(self):
            entry = {"product_id": key.product_id, "variant_id": key.variant_id, "quantity": quantity}
            try:
                merge_items(user=user, items=[entry])
            except Http404:
                del self._lines[key.as_session_key()]
                self._save()
                logger.info(
                    "cart.session_line_dropped",
                    extra={
                        "event": "cart.session_line_dropped",
                        "user_id": user.id,
                        "product_id": key.product_id,
                        "variant_id": key.variant_id,
                    },
                )
                continue
            del self._lines[key.as_session_key()]
            self._save()
            merged += 1
        if merged:
            logger.info(
                "cart.session_merged",
                extra={"event": "cart.session_merged", "user_id": user.id, "lines": merged},
            )
        return merged
