import pytest
from customer.models import Address
from customer.services import create_address, delete_address
from rest_framework.test import APIClient
from users.tests.factories import UserFactory

URL = "/api/v1/customer/addresses/"


def _payload(**overrides):
    data = {
        "full_name": "Ana Gómez",
        "phone": "+57 300 123 4567",
        "address_line1": "Calle 10 # 5-20",
        "city": "Bucaramanga",
        "state": "Santander",
        "zip_code": "680001",
    }
    data.update(overrides)
    return data


@pytest.fixture
def user():
    return UserFactory()


@pytest.fixture
def client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.mark.django_db
def test_first_address_becomes_default(client):
    resp = client.post(URL, _payload(), format="json")
    assert resp.status_code == 201
    assert resp.data["is_default"] is True
    assert resp.data["phone"] == "+573001234567"
    assert resp.data["country"] == "Colombia"

    resp = client.post(URL, _payload(city="Cúcuta"), format="json")
    assert resp.data["is_default"] is False


@pytest.mark.django_db
def test_new_default_unsets_previous(client, user):
    first = client.post(URL, _payload(), format="json").data
    second = client.post(URL, _payload(city="Cúcuta", is_default=True), format="json").data

    defaults = list(Address.objects.filter(user=user, is_default=True).values_list("id", flat=True))
    assert defaults == [second["id"]]

    resp = client.patch(f"{URL}{first['id']}/", {"is_default": True}, format="json")
    assert resp.status_code == 200
    defaults = list(Address.objects.filter(user=user, is_default=True).values_list("id", flat=True))
    assert defaults == [first["id"]]


@pytest.mark.django_db
def test_list_is_default_first(client):
    client.post(URL, _payload(city="A"), format="json")
    client.post(URL, _payload(city="B"), format="json")
    resp = client.get(URL)
    assert resp.status_code == 200
    assert [a["city"] for a in resp.data] == ["A", "B"]


@pytest.mark.django_db
def test_deleting_default_promotes_newest(user):
    old = create_address(user=user, **_payload(phone="+573001234567", city="A"))
    create_address(user=user, **_payload(phone="+573001234567", city="B"))
    newest = create_address(user=user, **_payload(phone="+573001234567", city="C"))

    delete_address(address=old)

    newest.refresh_from_db()
    assert newest.is_default is True
    assert Address.objects.filter(user=user, is_default=True).count() == 1


@pytest.mark.django_db
def test_other_users_address_is_404(client):
    other = create_address(user=UserFactory(), **_payload(phone="+573001234567"))
    assert client.get(f"{URL}{other.id}/").status_code == 404
    assert client.delete(f"{URL}{other.id}/").status_code == 404


@pytest.mark.django_db
def test_invalid_phone_is_rejected(client):
    resp = client.post(URL, _payload(phone="abc"), format="json")
    assert resp.status_code == 400
    assert "phone" in resp.data
