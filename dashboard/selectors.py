"""Order Aggregator: back-office reporting over orders and products."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from catalog.models import Product
from common.choices import OrderStatus
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Count, Sum
from django.utils import timezone
from orders.models import Order, OrderItem

MONTH_ABBREVIATIONS = ["Ene", "Feb", "Mar", "Abr", "May", "Jun", "Jul", "Ago", "Sep", "Oct", "Nov", "Dic"]
HISTORY_MONTHS = 6
RECENT_ORDERS = 5
TOP_PRODUCTS = 4


def _month_starts(now: datetime, count: int) -> list[tuple[int, int]]:
    """(year, month) pairs for the current month and the ``count - 1`` before it, oldest first."""

    year, month = now.year, now.month
    pairs = []
    for _ in range(count):
        pairs.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(pairs))


def revenue_by_month(*, now: Optional[datetime] = None, months: int = HISTORY_MONTHS) -> list[dict]:
    """Paid-order revenue per local calendar month; empty months report zero."""

    now = timezone.localtime(now or timezone.now())
    buckets = {key: Decimal("0.00") for key in _month_starts(now, months)}
    first_year, first_month = next(iter(buckets))
    window_start = now.replace(year=first_year, month=first_month, day=1, hour=0, minute=0, second=0, microsecond=0)

    paid = Order.objects.filter(status=OrderStatus.PAID, created_at__gte=window_start).values_list(
        "total", "created_at"
    )
    for total, created_at in paid:
        local = timezone.localtime(created_at)
        key = (local.year, local.month)
        if key in buckets:
            buckets[key] += total
    return [{"name": MONTH_ABBREVIATIONS[month - 1], "revenue": revenue} for (_, month), revenue in buckets.items()]


def order_status_distribution() -> list[dict]:
    rows = Order.objects.order_by().values("status").annotate(count=Count("id")).order_by("status")
    return [{"status": row["status"], "count": row["count"]} for row in rows]


def recent_orders(limit: int = RECENT_ORDERS):
    return Order.objects.select_related("user").order_by("-created_at", "-id")[:limit]


def top_products(limit: int = TOP_PRODUCTS) -> list[dict]:
    """Best sellers by units over all order items.

    Items whose product has since been deleted carry a null product and are
    left out.
    """

    rows = list(
        OrderItem.objects.filter(product__isnull=False)
        .order_by()
        .values("product_id")
        .annotate(sold=Sum("quantity"))
        .order_by("-sold", "product_id")[:limit]
    )
    products = Product.objects.in_bulk([row["product_id"] for row in rows])
    result = []
    for row in rows:
        product = products.get(row["product_id"])
        if product is None:
            continue
        result.append(
            {
                "id": product.id,
                "name": product.name,
                "price": product.price,
                "image_url": product.image_url,
                "category": product.category,
                "sold": row["sold"],
            }
        )
    return result


def get_dashboard_stats(now: Optional[datetime] = None) -> dict:
    total_revenue = Order.objects.filter(status=OrderStatus.PAID).aggregate(total=Sum("total"))["total"]
    return {
        "total_users": get_user_model().objects.count(),
        "total_products": Product.objects.count(),
        "total_orders": Order.objects.count(),
        "total_revenue": total_revenue or Decimal("0.00"),
        "low_stock_products": Product.objects.filter(stock__lte=settings.LOW_STOCK_THRESHOLD).count(),
        "revenue_by_month": revenue_by_month(now=now),
        "order_status_distribution": order_status_distribution(),
        "recent_orders": list(recent_orders()),
        "top_products": top_products(),
    }
