from decimal import Decimal

import pytest
from catalog.tests.factories import ProductFactory
from common.choices import OrderStatus
from orders.models import Order
from orders.services import create_order
from orders.tests.factories import OrderFactory
from rest_framework.test import APIClient
from users.tests.factories import StaffUserFactory, UserFactory


@pytest.fixture
def user():
    return UserFactory()


@pytest.fixture
def client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.mark.django_db
def test_create_and_list_own_orders(client, user):
    product = ProductFactory(price=Decimal("25.00"), stock=10)
    OrderFactory()  # someone else's

    resp = client.post("/api/v1/orders/", {"items": [{"product_id": product.id, "quantity": 4}]}, format="json")
    assert resp.status_code == 201
    assert resp.data["total"] == "100.00"
    assert resp.data["items"][0]["line_total"] == "100.00"

    resp = client.get("/api/v1/orders/")
    assert resp.status_code == 200
    assert [o["id"] for o in resp.data["results"]] == [Order.objects.get(user=user).id]


@pytest.mark.django_db
def test_create_order_validation(client):
    assert client.post("/api/v1/orders/", {"items": []}, format="json").status_code == 400
    product = ProductFactory(stock=1)
    resp = client.post("/api/v1/orders/", {"items": [{"product_id": product.id, "quantity": 2}]}, format="json")
    assert resp.status_code == 400
    assert "Insufficient stock" in resp.data["detail"]


@pytest.mark.django_db
def test_order_detail_is_owner_only(client):
    other = OrderFactory()
    assert client.get(f"/api/v1/orders/{other.id}/").status_code == 404


@pytest.mark.django_db
def test_cancel_endpoint(client, user):
    order = create_order(user=user, items=[{"product_id": ProductFactory().id, "quantity": 1}])
    resp = client.post(f"/api/v1/orders/{order.id}/cancel/")
    assert resp.status_code == 200
    assert resp.data["status"] == "cancelled"
    assert client.post(f"/api/v1/orders/{order.id}/cancel/").status_code == 400


@pytest.mark.django_db
def test_admin_orders_require_staff(client):
    assert client.get("/api/v1/admin/orders/").status_code == 403


@pytest.mark.django_db
def test_admin_lists_filters_and_changes_status():
    staff = APIClient()
    staff.force_authenticate(user=StaffUserFactory())
    pending = create_order(user=UserFactory(), items=[{"product_id": ProductFactory().id, "quantity": 1}])
    OrderFactory(status=OrderStatus.DELIVERED)

    resp = staff.get("/api/v1/admin/orders/", {"status": "pending"})
    assert resp.status_code == 200
    assert [o["id"] for o in resp.data["results"]] == [pending.id]
    assert resp.data["results"][0]["user"]["email"] == pending.user.email

    resp = staff.patch(f"/api/v1/admin/orders/{pending.id}/", {"status": "paid"}, format="json")
    assert resp.status_code == 200
    assert resp.data["status"] == "paid"

    resp = staff.patch(f"/api/v1/admin/orders/{pending.id}/", {"status": "pending"}, format="json")
    assert resp.status_code == 400

    assert staff.delete(f"/api/v1/admin/orders/{pending.id}/").status_code == 204
    assert not Order.objects.filter(pk=pending.pk).exists()
