"""Catalog app models.

Products carry their own stock and price; variants (e.g. capacity or
voltage options) optionally override both.
"""

from common.models import TimeStampedModel
from django.db import models


class Product(TimeStampedModel):
    """A sellable item (compressor, thermostat, refrigerant, ...)."""

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    stock = models.PositiveIntegerField(default=0)
    image_url = models.URLField(max_length=500, blank=True)
    images_url = models.JSONField(default=list, blank=True)
    category = models.CharField(max_length=120, blank=True, db_index=True)
    subcategory = models.CharField(max_length=120, blank=True)
    brand = models.CharField(max_length=120, blank=True, db_index=True)
    sku = models.CharField(max_length=64, unique=True, null=True, blank=True)
    tags = models.JSONField(default=list, blank=True)
    # List of {"label": ..., "value": ...} pairs shown on the detail page
    specifications = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(name="product_price_non_negative", condition=models.Q(price__gte=0)),
        ]
        indexes = [
            models.Index(fields=["category", "is_active"], name="product_category_active_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class ProductVariant(TimeStampedModel):
    product = models.ForeignKey(Product, related_name="variants", on_delete=models.CASCADE)
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=260, unique=True)
    sku = models.CharField(max_length=64, unique=True, null=True, blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    original_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    stock = models.PositiveIntegerField(default=0)
    image_url = models.URLField(max_length=500, blank=True)
    images_url = models.JSONField(default=list, blank=True)
    attributes = models.JSONField(default=dict, blank=True)
    is_default = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    position = models.IntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]
        constraints = [
            models.CheckConstraint(name="variant_price_non_negative", condition=models.Q(price__gte=0)),
        ]
        indexes = [
            models.Index(fields=["product", "is_active"], name="variant_product_active_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.product.name} [{self.name}]"
