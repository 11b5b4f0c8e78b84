"""Cart app models.

Each user owns at most one persisted cart. A cart line is identified by
its product plus an optional variant; a line without a variant and a line
for a concrete variant of the same product are distinct lines.
"""

from decimal import Decimal

from common.models import TimeStampedModel
from django.conf import settings
from django.db import models


class Cart(TimeStampedModel):
    user = models.OneToOneField(settings.AUTH_USER_MODEL, related_name="cart", on_delete=models.CASCADE)

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self) -> str:  # pragma: no cover
        return f"Cart#{self.id} ({self.user_id})"


class CartItem(TimeStampedModel):
    cart = models.ForeignKey(Cart, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey("catalog.Product", related_name="cart_items", on_delete=models.CASCADE)
    variant = models.ForeignKey(
        "catalog.ProductVariant",
        null=True,
        blank=True,
        related_name="cart_items",
        on_delete=models.CASCADE,
    )
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(fields=["cart", "product", "variant"], name="unique_line_per_cart"),
            # NULLs are distinct in unique indexes, so the variant-less line needs its own constraint
            models.UniqueConstraint(
                fields=["cart", "product"],
                condition=models.Q(variant__isnull=True),
                name="unique_plain_line_per_cart",
            ),
            models.CheckConstraint(name="cart_item_quantity_positive", condition=models.Q(quantity__gte=1)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"CartItem#{self.id} cart={self.cart_id} product={self.product_id} variant={self.variant_id}"

    @property
    def unit_price(self) -> Decimal:
        """Current price: the variant's when present, else the product's."""
        source = self.variant if self.variant_id else self.product
        return source.price

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * Decimal(int(self.quantity))
