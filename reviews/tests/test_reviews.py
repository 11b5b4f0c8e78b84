from decimal import Decimal

import pytest
from catalog.tests.factories import ProductFactory
from common.choices import OrderStatus
from orders.tests.factories import OrderFactory, OrderItemFactory
from rest_framework.test import APIClient
from reviews.models import Review
from reviews.selectors import check_eligibility, pending_products_for_user
from reviews.services import ReviewConflict, ReviewError, create_review
from users.tests.factories import UserFactory


def _delivered(user, product):
    order = OrderFactory(user=user, status=OrderStatus.DELIVERED)
    OrderItemFactory(order=order, product=product)
    return order


@pytest.mark.django_db
def test_create_review_requires_delivered_order():
    user = UserFactory()
    product = ProductFactory()
    OrderItemFactory(order=OrderFactory(user=user, status=OrderStatus.SHIPPED), product=product)

    with pytest.raises(ReviewError):
        create_review(user=user, product_id=product.id, rating=Decimal("4.5"))

    _delivered(user, product)
    review = create_review(user=user, product_id=product.id, rating=Decimal("4.5"), comment="Muy bueno")
    assert review.rating == Decimal("4.5")


@pytest.mark.django_db
def test_second_review_conflicts():
    user = UserFactory()
    product = ProductFactory()
    _delivered(user, product)
    create_review(user=user, product_id=product.id, rating=Decimal("5"))
    with pytest.raises(ReviewConflict):
        create_review(user=user, product_id=product.id, rating=Decimal("3"))
    assert Review.objects.count() == 1


@pytest.mark.django_db
def test_eligibility_and_pending_products():
    user = UserFactory()
    reviewed, pending, other = ProductFactory(), ProductFactory(), ProductFactory()
    _delivered(user, reviewed)
    _delivered(user, pending)
    create_review(user=user, product_id=reviewed.id, rating=Decimal("4"))

    assert check_eligibility(user=user, product_id=pending.id) == {
        "can_review": True,
        "has_purchased": True,
        "has_reviewed": False,
    }
    assert check_eligibility(user=user, product_id=reviewed.id)["can_review"] is False
    assert check_eligibility(user=user, product_id=other.id)["has_purchased"] is False
    assert list(pending_products_for_user(user=user)) == [pending]


@pytest.mark.django_db
def test_review_api_status_codes():
    user = UserFactory()
    product = ProductFactory()
    client = APIClient()
    client.force_authenticate(user=user)

    resp = client.post("/api/v1/reviews/", {"product_id": product.id, "rating": "4.5"}, format="json")
    assert resp.status_code == 400

    _delivered(user, product)
    resp = client.post("/api/v1/reviews/", {"product_id": product.id, "rating": "4.5"}, format="json")
    assert resp.status_code == 201
    assert resp.data["user"]["id"] == user.id

    resp = client.post("/api/v1/reviews/", {"product_id": product.id, "rating": "3.0"}, format="json")
    assert resp.status_code == 409

    resp = client.post("/api/v1/reviews/", {"product_id": 999999, "rating": "3.0"}, format="json")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_review_api_rejects_out_of_range_rating():
    user = UserFactory()
    product = ProductFactory()
    _delivered(user, product)
    client = APIClient()
    client.force_authenticate(user=user)
    for rating in ("0.0", "5.5", "3.3"):
        resp = client.post("/api/v1/reviews/", {"product_id": product.id, "rating": rating}, format="json")
        assert resp.status_code == 400, rating


@pytest.mark.django_db
def test_product_reviews_are_public_with_summary():
    product = ProductFactory()
    for rating in ("4.0", "5.0"):
        user = UserFactory()
        _delivered(user, product)
        create_review(user=user, product_id=product.id, rating=Decimal(rating))

    resp = APIClient().get(f"/api/v1/reviews/product/{product.id}/")
    assert resp.status_code == 200
    assert resp.data["count"] == 2
    assert resp.data["average"] == 4.5
    assert len(resp.data["results"]) == 2


@pytest.mark.django_db
def test_my_reviews_and_pending_endpoints():
    user = UserFactory()
    a, b = ProductFactory(), ProductFactory()
    _delivered(user, a)
    _delivered(user, b)
    create_review(user=user, product_id=a.id, rating=Decimal("3.5"))
    client = APIClient()
    client.force_authenticate(user=user)

    mine = client.get("/api/v1/reviews/mine/")
    assert [r["product"]["id"] for r in mine.data] == [a.id]
    pending = client.get("/api/v1/reviews/pending/")
    assert [p["id"] for p in pending.data] == [b.id]
    assert client.get(f"/api/v1/reviews/eligibility/{b.id}/").data["can_review"] is True
