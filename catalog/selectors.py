"""Selectors for the catalog domain.

Read-only query helpers shared by the public and admin views. They return
querysets or plain data and have no side effects.
"""

from decimal import Decimal
from typing import Optional

from django.db.models import Q, QuerySet
from django.shortcuts import get_object_or_404

from .models import Product, ProductVariant


def list_products(
    *,
    search: Optional[str] = None,
    category: Optional[str] = None,
    brand: Optional[str] = None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
    include_inactive: bool = False,
) -> QuerySet[Product]:
    """Return products newest first, narrowed by the storefront filters.

    ``search`` matches name, description or brand case-insensitively;
    ``category`` and ``brand`` are exact matches.
    """

    qs = Product.objects.all()
    if not include_inactive:
        qs = qs.filter(is_active=True)
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(description__icontains=search) | Q(brand__icontains=search))
    if category:
        qs = qs.filter(category=category)
    if brand:
        qs = qs.filter(brand=brand)
    if min_price is not None:
        qs = qs.filter(price__gte=min_price)
    if max_price is not None:
        qs = qs.filter(price__lte=max_price)
    return qs.order_by("-created_at", "-id")


def get_product(term: str, *, include_inactive: bool = False) -> Product:
    """Return a product by numeric id or slug; raise Http404 when missing."""

    qs = Product.objects.all() if include_inactive else Product.objects.filter(is_active=True)
    if str(term).isdigit():
        product = qs.filter(pk=int(term)).first()
        if product is not None:
            return product
    return get_object_or_404(qs, slug=term)


def get_metadata() -> dict:
    """Distinct non-empty categories and brands, alphabetically."""

    categories = (
        Product.objects.exclude(category="").order_by("category").values_list("category", flat=True).distinct()
    )
    brands = Product.objects.exclude(brand="").order_by("brand").values_list("brand", flat=True).distinct()
    return {"categories": list(categories), "brands": list(brands)}


def list_related_products(*, category: str, exclude_id: Optional[int] = None, limit: int = 4) -> QuerySet[Product]:
    qs = Product.objects.filter(category=category, is_active=True)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    return qs.order_by("-created_at", "-id")[:limit]


def list_variants(*, product: Product, include_inactive: bool = False) -> QuerySet[ProductVariant]:
    """Variants of a product, default first, then by position and name."""

    qs = product.variants.all()
    if not include_inactive:
        qs = qs.filter(is_active=True)
    return qs.order_by("-is_default", "position", "name")


def low_stock_products(threshold: int) -> QuerySet[Product]:
    return Product.objects.filter(stock__lte=threshold).order_by("stock", "name")


def get_variant_by_slug(slug: str) -> ProductVariant:
    """An active variant of an active product; raise Http404 otherwise."""

    qs = ProductVariant.objects.select_related("product").filter(is_active=True, product__is_active=True)
    return get_object_or_404(qs, slug=slug)
