"""Read-side review queries."""

from catalog.models import Product
from common.choices import OrderStatus
from django.db.models import Avg, Count, QuerySet
from orders.models import OrderItem

from .models import Review


def list_for_product(*, product_id: int) -> QuerySet[Review]:
    return Review.objects.filter(product_id=product_id).select_related("user").order_by("-created_at", "-id")


def list_for_user(*, user) -> QuerySet[Review]:
    return Review.objects.filter(user=user).select_related("product").order_by("-created_at", "-id")


def rating_summary(*, product_id: int) -> dict:
    agg = Review.objects.filter(product_id=product_id).aggregate(average=Avg("rating"), count=Count("id"))
    average = agg["average"]
    return {"average": round(float(average), 1) if average is not None else None, "count": agg["count"]}


def has_received(*, user, product_id: int) -> bool:
    """Whether any delivered order of the user contains the product."""

    return OrderItem.objects.filter(
        order__user=user, order__status=OrderStatus.DELIVERED, product_id=product_id
    ).exists()


def check_eligibility(*, user, product_id: int) -> dict:
    has_purchased = has_received(user=user, product_id=product_id)
    has_reviewed = Review.objects.filter(user=user, product_id=product_id).exists()
    return {
        "can_review": has_purchased and not has_reviewed,
        "has_purchased": has_purchased,
        "has_reviewed": has_reviewed,
    }


def pending_products_for_user(*, user) -> QuerySet[Product]:
    """Products from the user's delivered orders that they have not reviewed yet."""

    delivered = OrderItem.objects.filter(
        order__user=user, order__status=OrderStatus.DELIVERED, product__isnull=False
    ).values("product_id")
    reviewed = Review.objects.filter(user=user).values("product_id")
    return Product.objects.filter(pk__in=delivered).exclude(pk__in=reviewed).order_by("name")
