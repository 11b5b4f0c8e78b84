"""Catalog mutations: product and variant writes used by the admin API."""

import logging
from typing import Optional

from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils.text import slugify

from .models import Product, ProductVariant


class CatalogError(Exception):
    """Raised for invalid catalog writes (slug or SKU conflicts)."""


logger = logging.getLogger("refrielectricos.catalog")


def product_slug(name: str) -> str:
    return slugify(name)


def unique_variant_slug(*, product: Product, name: str, exclude_id: Optional[int] = None) -> str:
    """Build ``<product-slug>-<variant-slug>`` and suffix ``-N`` until free.

    A variant named like its product (or with an empty slug) becomes
    ``<product-slug>-variante``; a name already prefixed with the product
    slug is used as is.
    """

    variant_slug = slugify(name)
    if not variant_slug or variant_slug == product.slug:
        base = f"{product.slug}-variante"
    elif variant_slug.startswith(product.slug):
        base = variant_slug
    else:
        base = f"{product.slug}-{variant_slug}"

    taken = ProductVariant.objects.filter(slug__startswith=base)
    if exclude_id is not None:
        taken = taken.exclude(pk=exclude_id)
    taken = set(taken.values_list("slug", flat=True))

    slug, counter = base, 1
    while slug in taken:
        slug = f"{base}-{counter}"
        counter += 1
    return slug


@transaction.atomic
def create_product(**data) -> Product:
    slug = product_slug(data["name"])
    if not slug:
        raise CatalogError("Product name must contain letters or digits")
    if Product.objects.filter(slug=slug).exists():
        raise CatalogError(f'Product with name "{data["name"]}" already exists (slug conflict)')
    sku = data.get("sku")
    if sku and Product.objects.filter(sku=sku).exists():
        raise CatalogError(f'SKU "{sku}" already exists')
    product = Product.objects.create(slug=slug, **data)
    logger.info("catalog.product_created", extra={"event": "catalog.product_created", "product_id": product.id})
    return product


@transaction.atomic
def update_product(*, product: Product, **data) -> Product:
    """Apply changes; renaming regenerates the slug."""

    name = data.get("name")
    if name and name != product.name:
        slug = product_slug(name)
        if Product.objects.filter(slug=slug).exclude(pk=product.pk).exists():
            raise CatalogError(f'Product with name "{name}" already exists (slug conflict)')
        product.slug = slug
    sku = data.get("sku")
    if sku and Product.objects.filter(sku=sku).exclude(pk=product.pk).exists():
        raise CatalogError(f'SKU "{sku}" already exists')
    for key, value in data.items():
        setattr(product, key, value)
    product.save()
    logger.info("catalog.product_updated", extra={"event": "catalog.product_updated", "product_id": product.id})
    return product


def _clear_other_defaults(product: Product, keep_id: Optional[int] = None) -> None:
    qs = ProductVariant.objects.filter(product=product, is_default=True)
    if keep_id is not None:
        qs = qs.exclude(pk=keep_id)
    qs.update(is_default=False)


@transaction.atomic
def create_variant(*, product_id: int, **data) -> ProductVariant:
    product = get_object_or_404(Product, pk=product_id)
    sku = data.get("sku")
    if sku and ProductVariant.objects.filter(sku=sku).exists():
        raise CatalogError(f'SKU "{sku}" already exists')
    slug = data.pop("slug", None) or unique_variant_slug(product=product, name=data["name"])
    if data.get("is_default"):
        _clear_other_defaults(product)
    variant = ProductVariant.objects.create(product=product, slug=slug, **data)
    logger.info(
        "catalog.variant_created",
        extra={"event": "catalog.variant_created", "product_id": product.id, "variant_id": variant.id},
    )
    return variant


@transaction.atomic
def bulk_create_variants(*, product_id: int, variants: list[dict]) -> list[ProductVariant]:
    """Create several variants of one product in a single transaction.

    Each entry gets its own unique slug and, without an explicit position,
    its index in the batch. When the product has no default variant yet the
    first entry becomes the default.
    """

    product = get_object_or_404(Product, pk=product_id)
    has_default = product.variants.filter(is_default=True).exists()
    created = []
    for index, entry in enumerate(variants):
        data = dict(entry)
        data.setdefault("position", index)
        if not has_default and index == 0:
            data["is_default"] = True
        created.append(create_variant(product_id=product.pk, **data))
    logger.info(
        "catalog.variants_bulk_created",
        extra={"event": "catalog.variants_bulk_created", "product_id": product.id, "count": len(created)},
    )
    return created


@transaction.atomic
def update_variant(*, variant: ProductVariant, **data) -> ProductVariant:
    name = data.get("name")
    if name and name != variant.name and not data.get("slug"):
        variant.slug = unique_variant_slug(product=variant.product, name=name, exclude_id=variant.pk)
    sku = data.get("sku")
    if sku and ProductVariant.objects.filter(sku=sku).exclude(pk=variant.pk).exists():
        raise CatalogError(f'SKU "{sku}" already exists')
    if data.get("is_default"):
        _clear_other_defaults(variant.product, keep_id=variant.pk)
    for key, value in data.items():
        setattr(variant, key, value)
    variant.save()
    return variant
