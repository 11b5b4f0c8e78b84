from common.models import TimeStampedModel
from django.conf import settings
from django.db import models

DEFAULT_WISHLIST_NAME = "Favoritos"


class Wishlist(TimeStampedModel):
    """Named product list owned by a user."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="wishlists", on_delete=models.CASCADE)
    name = models.CharField(max_length=100, default=DEFAULT_WISHLIST_NAME)

    class Meta:
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(fields=["user", "name"], name="unique_wishlist_name_per_user"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Wishlist#{self.id} user={self.user_id} name={self.name}"


class WishlistItem(TimeStampedModel):
    wishlist = models.ForeignKey(Wishlist, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey("catalog.Product", related_name="wishlist_items", on_delete=models.CASCADE)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["wishlist", "product"], name="unique_product_per_wishlist"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"WishlistItem#{self.id} wishlist={self.wishlist_id} product={self.product_id}"
