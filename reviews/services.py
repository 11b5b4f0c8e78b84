"""Review creation rules."""

import logging
from decimal import Decimal

from catalog.models import Product
from django.db import IntegrityError, transaction
from django.shortcuts import get_object_or_404

from .models import Review
from .selectors import has_received


class ReviewError(Exception):
    """The user may not review this product."""


class ReviewConflict(ReviewError):
    """The user already reviewed this product."""


logger = logging.getLogger("refrielectricos.reviews")


def create_review(*, user, product_id: int, rating: Decimal, comment: str = "") -> Review:
    """Record a review for a product the user has received.

    Raises Http404 for an unknown product, ReviewConflict for a second
    review and ReviewError when no delivered order contains the product.
    """

    product = get_object_or_404(Product, pk=product_id)
    if Review.objects.filter(user=user, product=product).exists():
        raise ReviewConflict("Ya has valorado este producto")
    if not has_received(user=user, product_id=product.pk):
        raise ReviewError("Debes haber comprado y recibido el producto para dejar una reseña")

    try:
        with transaction.atomic():
            review = Review.objects.create(user=user, product=product, rating=rating, comment=comment or "")
    except IntegrityError:
        raise ReviewConflict("Ya has valorado este producto")
    logger.info(
        "review.created",
        extra={"event": "review.created", "review_id": review.id, "product_id": product.pk, "user_id": user.id},
    )
    return review
