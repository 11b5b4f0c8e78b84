from datetime import datetime
from datetime import timezone as dt_timezone
from decimal import Decimal

import pytest
from catalog.tests.factories import ProductFactory
from common.choices import OrderStatus
from dashboard.selectors import get_dashboard_stats, revenue_by_month, top_products
from django.utils import timezone
from orders.models import Order
from orders.tests.factories import OrderFactory, OrderItemFactory
from rest_framework.test import APIClient
from users.tests.factories import StaffUserFactory, UserFactory

NOW = timezone.make_aware(datetime(2026, 6, 15, 12, 0))


def _order_at(when, **kwargs):
    order = OrderFactory(**kwargs)
    Order.objects.filter(pk=order.pk).update(created_at=when)
    return order


@pytest.mark.django_db
def test_revenue_history_has_six_months_oldest_first():
    _order_at(timezone.make_aware(datetime(2026, 3, 10, 12)), status=OrderStatus.PAID, total=Decimal("100"))
    _order_at(timezone.make_aware(datetime(2026, 5, 2, 9)), status=OrderStatus.PAID, total=Decimal("50"))
    _order_at(timezone.make_aware(datetime(2026, 3, 11, 9)), status=OrderStatus.PENDING, total=Decimal("999"))
    _order_at(timezone.make_aware(datetime(2025, 12, 20, 9)), status=OrderStatus.PAID, total=Decimal("999"))

    history = revenue_by_month(now=NOW)

    assert [m["name"] for m in history] == ["Ene", "Feb", "Mar", "Abr", "May", "Jun"]
    assert [m["revenue"] for m in history] == [0, 0, 100, 0, 50, 0]
    assert sum(m["revenue"] for m in history) == 150


@pytest.mark.django_db
def test_revenue_history_buckets_by_local_month():
    # 02:00 UTC on March 1st is still February 28th in Bogota.
    _order_at(datetime(2026, 3, 1, 2, 0, tzinfo=dt_timezone.utc), status=OrderStatus.PAID, total=Decimal("40"))
    history = {m["name"]: m["revenue"] for m in revenue_by_month(now=NOW)}
    assert history["Feb"] == 40
    assert history["Mar"] == 0


@pytest.mark.django_db
def test_revenue_history_crosses_year_boundary():
    now = timezone.make_aware(datetime(2026, 2, 10, 12))
    _order_at(timezone.make_aware(datetime(2025, 11, 5, 12)), status=OrderStatus.PAID, total=Decimal("30"))
    history = revenue_by_month(now=now)
    assert [m["name"] for m in history] == ["Sep", "Oct", "Nov", "Dic", "Ene", "Feb"]
    assert [m["revenue"] for m in history] == [0, 0, 30, 0, 0, 0]


@pytest.mark.django_db
def test_top_products_ranks_by_units_and_skips_deleted():
    a, b, c, d, e = (ProductFactory() for _ in range(5))
    OrderItemFactory(product=a, quantity=3)
    OrderItemFactory(product=a, quantity=2)
    OrderItemFactory(product=b, quantity=7)
    OrderItemFactory(product=c, quantity=2)
    OrderItemFactory(product=d, quantity=1)
    OrderItemFactory(product=e, quantity=1)
    gone = ProductFactory()
    OrderItemFactory(product=gone, quantity=50)
    gone.delete()

    top = top_products()

    assert [(p["id"], p["sold"]) for p in top] == [(b.id, 7), (a.id, 5), (c.id, 2), (d.id, 1)]
    assert top[0]["name"] == b.name
    assert top[0]["category"] == "Compresores"


@pytest.mark.django_db
def test_dashboard_stats_counts_and_revenue():
    ProductFactory(stock=2)
    ProductFactory(stock=5)
    ProductFactory(stock=6)
    OrderFactory(status=OrderStatus.PAID, total=Decimal("80.00"))
    OrderFactory(status=OrderStatus.PAID, total=Decimal("20.00"))
    OrderFactory(status=OrderStatus.DELIVERED, total=Decimal("500.00"))
    OrderFactory(status=OrderStatus.PENDING, total=Decimal("10.00"))

    stats = get_dashboard_stats()

    assert stats["total_orders"] == 4
    assert stats["total_users"] == 4
    assert stats["total_products"] == 3
    assert stats["low_stock_products"] == 2
    assert stats["total_revenue"] == Decimal("100.00")
    distribution = {row["status"]: row["count"] for row in stats["order_status_distribution"]}
    assert distribution == {"paid": 2, "delivered": 1, "pending": 1}
    assert len(stats["recent_orders"]) == 4


@pytest.mark.django_db
def test_recent_orders_limited_to_five_newest():
    orders = [OrderFactory() for _ in range(7)]
    recent = get_dashboard_stats()["recent_orders"]
    assert [o.id for o in recent] == [o.id for o in reversed(orders)][:5]


@pytest.mark.django_db
def test_dashboard_endpoint_is_staff_only():
    client = APIClient()
    client.force_authenticate(user=UserFactory())
    assert client.get("/api/v1/admin/dashboard/").status_code == 403

    order = OrderFactory(status=OrderStatus.PAID, total=Decimal("75.00"))
    client.force_authenticate(user=StaffUserFactory())
    resp = client.get("/api/v1/admin/dashboard/")
    assert resp.status_code == 200
    assert resp.data["total_revenue"] == "75.00"
    assert len(resp.data["revenue_by_month"]) == 6
    assert resp.data["recent_orders"][0]["user"]["email"] == order.user.email
