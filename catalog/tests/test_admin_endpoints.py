import pytest
from catalog.models import ProductVariant
from catalog.tests.factories import ProductFactory, ProductVariantFactory
from rest_framework.test import APIClient
from users.tests.factories import StaffUserFactory, UserFactory


def _product_payload(**overrides):
    payload = {
        "name": "Compresor Embraco 1/2 HP",
        "price": "450000.00",
        "stock": 3,
        "category": "Compresores",
        "brand": "Embraco",
        "specifications": [{"label": "Potencia", "value": "1/2 HP"}],
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
def test_admin_create_product_requires_staff():
    client = APIClient()
    client.force_authenticate(user=UserFactory())
    resp = client.post("/api/v1/admin/catalog/products/", _product_payload(), format="json")
    assert resp.status_code == 403


@pytest.mark.django_db
def test_admin_create_product_derives_slug_and_rejects_conflict():
    client = APIClient()
    client.force_authenticate(user=StaffUserFactory())

    resp = client.post("/api/v1/admin/catalog/products/", _product_payload(), format="json")
    assert resp.status_code == 201
    assert resp.data["slug"] == "compresor-embraco-12-hp"

    dup = client.post("/api/v1/admin/catalog/products/", _product_payload(price="1.00"), format="json")
    assert dup.status_code == 400
    assert "slug conflict" in dup.data["detail"]


@pytest.mark.django_db
def test_admin_rejects_malformed_specifications():
    client = APIClient()
    client.force_authenticate(user=StaffUserFactory())
    resp = client.post(
        "/api/v1/admin/catalog/products/", _product_payload(specifications=[{"label": "x"}]), format="json"
    )
    assert resp.status_code == 400
    assert "specifications" in resp.data


@pytest.mark.django_db
def test_admin_rename_product_regenerates_slug():
    product = ProductFactory(name="Viejo nombre")
    client = APIClient()
    client.force_authenticate(user=StaffUserFactory())
    resp = client.patch(f"/api/v1/admin/catalog/products/{product.id}/", {"name": "Nuevo Nombre"}, format="json")
    assert resp.status_code == 200
    assert resp.data["slug"] == "nuevo-nombre"


@pytest.mark.django_db
def test_admin_create_variant_builds_slug_and_single_default():
    product = ProductFactory(name="Capacitor")
    first = ProductVariantFactory(product=product, is_default=True)
    client = APIClient()
    client.force_authenticate(user=StaffUserFactory())

    resp = client.post(
        "/api/v1/admin/catalog/variants/",
        {"product": product.id, "name": "35 uF", "price": "30000.00", "stock": 4, "is_default": True},
        format="json",
    )
    assert resp.status_code == 201
    assert resp.data["slug"] == "capacitor-35-uf"
    first.refresh_from_db()
    assert first.is_default is False
    assert ProductVariant.objects.filter(product=product, is_default=True).count() == 1


@pytest.mark.django_db
def test_admin_duplicate_variant_sku_is_rejected():
    existing = ProductVariantFactory(sku="DUP-1")
    client = APIClient()
    client.force_authenticate(user=StaffUserFactory())
    resp = client.post(
        "/api/v1/admin/catalog/variants/",
        {"product": existing.product_id, "name": "Otra", "sku": "DUP-1", "price": "1.00"},
        format="json",
    )
    assert resp.status_code == 400


@pytest.mark.django_db
def test_admin_bulk_create_variants_assigns_default_positions_and_slugs():
    product = ProductFactory(name="Termostato")
    client = APIClient()
    client.force_authenticate(user=StaffUserFactory())

    resp = client.post(
        f"/api/v1/admin/catalog/products/{product.id}/variants/bulk/",
        [
            {"name": "Rango A", "price": "10.00", "stock": 1},
            {"name": "Rango A", "price": "12.00", "stock": 2},
            {"name": "Rango B", "price": "14.00", "stock": 3, "position": 7},
        ],
        format="json",
    )
    assert resp.status_code == 201
    assert [(v["slug"], v["position"], v["is_default"]) for v in resp.data] == [
        ("termostato-rango-a", 0, True),
        ("termostato-rango-a-1", 1, False),
        ("termostato-rango-b", 7, False),
    ]


@pytest.mark.django_db
def test_admin_bulk_create_keeps_existing_default():
    product = ProductFactory()
    existing = ProductVariantFactory(product=product, is_default=True)
    client = APIClient()
    client.force_authenticate(user=StaffUserFactory())

    resp = client.post(
        f"/api/v1/admin/catalog/products/{product.id}/variants/bulk/",
        [{"name": "Nueva", "price": "5.00"}],
        format="json",
    )
    assert resp.status_code == 201
    assert resp.data[0]["is_default"] is False
    existing.refresh_from_db()
    assert existing.is_default is True


@pytest.mark.django_db
def test_admin_bulk_create_requires_staff_and_existing_product():
    product = ProductFactory()
    payload = [{"name": "X", "price": "1.00"}]
    url = f"/api/v1/admin/catalog/products/{product.id}/variants/bulk/"
    client = APIClient()
    client.force_authenticate(user=UserFactory())
    assert client.post(url, payload, format="json").status_code == 403

    client.force_authenticate(user=StaffUserFactory())
    missing = "/api/v1/admin/catalog/products/999999/variants/bulk/"
    assert client.post(missing, payload, format="json").status_code == 404
    assert not ProductVariant.objects.exists()
