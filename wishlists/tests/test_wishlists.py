import pytest
from catalog.tests.factories import ProductFactory
from rest_framework.test import APIClient
from users.tests.factories import UserFactory
from wishlists.models import Wishlist, WishlistItem
from wishlists.services import WishlistError, add_product, create_wishlist


@pytest.fixture
def user():
    return UserFactory()


@pytest.fixture
def client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.mark.django_db
def test_add_to_default_creates_favoritos_once(user):
    p1, p2 = ProductFactory(), ProductFactory()
    add_product(user=user, product_id=p1.id)
    add_product(user=user, product_id=p2.id)
    add_product(user=user, product_id=p1.id)

    wishlist = Wishlist.objects.get(user=user)
    assert wishlist.name == "Favoritos"
    assert WishlistItem.objects.filter(wishlist=wishlist).count() == 2


@pytest.mark.django_db
def test_create_wishlist_rejects_duplicate_name(user):
    create_wishlist(user=user, name="Taller")
    with pytest.raises(WishlistError):
        create_wishlist(user=user, name="taller")


@pytest.mark.django_db
def test_wishlist_api_flow(client):
    product = ProductFactory()
    resp = client.post("/api/v1/wishlists/", {"name": "Proyecto cava"}, format="json")
    assert resp.status_code == 201
    wishlist_id = resp.data["id"]

    resp = client.post(f"/api/v1/wishlists/{wishlist_id}/items/", {"product_id": product.id}, format="json")
    assert resp.status_code == 201
    assert [i["product_id"] for i in resp.data["items"]] == [product.id]

    resp = client.get("/api/v1/wishlists/")
    assert resp.status_code == 200
    assert len(resp.data) == 1

    resp = client.delete(f"/api/v1/wishlists/{wishlist_id}/items/{product.id}/")
    assert resp.status_code == 204
    resp = client.delete(f"/api/v1/wishlists/{wishlist_id}/items/{product.id}/")
    assert resp.status_code == 404

    resp = client.delete(f"/api/v1/wishlists/{wishlist_id}/")
    assert resp.status_code == 204
    assert not Wishlist.objects.filter(pk=wishlist_id).exists()


@pytest.mark.django_db
def test_default_items_endpoint(client):
    product = ProductFactory()
    resp = client.post("/api/v1/wishlists/default/items/", {"product_id": product.id}, format="json")
    assert resp.status_code == 201
    assert resp.data["name"] == "Favoritos"


@pytest.mark.django_db
def test_other_users_wishlist_is_404(client):
    other = create_wishlist(user=UserFactory(), name="Ajena")
    assert client.get(f"/api/v1/wishlists/{other.id}/").status_code == 404
    resp = client.post(f"/api/v1/wishlists/{other.id}/items/", {"product_id": ProductFactory().id}, format="json")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_inactive_product_cannot_be_added(client):
    product = ProductFactory(is_active=False)
    resp = client.post("/api/v1/wishlists/default/items/", {"product_id": product.id}, format="json")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_wishlists_require_auth():
    assert APIClient().get("/api/v1/wishlists/").status_code == 401
