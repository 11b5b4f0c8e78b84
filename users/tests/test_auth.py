import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken
from users.models import User
from users.tests.factories import UserFactory

REGISTER_URL = "/api/v1/account/register/"
PROFILE_URL = "/api/v1/account/profile/"
SIGNIN_URL = "/api/v1/auth/signin/"
REFRESH_URL = "/api/v1/auth/refresh/"
SIGNOUT_URL = "/api/v1/auth/signout/"
SIGNOUT_ALL_URL = "/api/v1/auth/signout-all/"
SIGNOUT_OTHERS_URL = "/api/v1/auth/signout-others/"


@pytest.mark.django_db
def test_register_creates_user_with_normalized_email():
    resp = APIClient().post(
        REGISTER_URL,
        {"email": "Ana.Gomez@Example.com", "name": "Ana Gómez", "password": "Refri-2024!"},
        format="json",
    )
    assert resp.status_code == 201
    assert resp.data["email"] == "ana.gomez@example.com"
    assert resp.data["is_admin"] is False
    user = User.objects.get(email="ana.gomez@example.com")
    assert user.check_password("Refri-2024!")
    assert user.username == "anagomez"


@pytest.mark.django_db
def test_register_rejects_duplicate_email_and_weak_password():
    UserFactory(email="ana@example.com")
    client = APIClient()
    resp = client.post(REGISTER_URL, {"email": "ANA@example.com", "name": "Ana", "password": "Refri-2024!"})
    assert resp.status_code == 400
    assert "email" in resp.data

    resp = client.post(REGISTER_URL, {"email": "nuevo@example.com", "name": "Nuevo", "password": "123"})
    assert resp.status_code == 400
    assert "password" in resp.data


@pytest.mark.django_db
def test_signin_returns_tokens_and_user():
    UserFactory(email="ana@example.com")
    resp = APIClient().post(SIGNIN_URL, {"email": "ANA@example.com", "password": "pass1234"}, format="json")
    assert resp.status_code == 200
    assert resp.data["access"]
    assert resp.data["refresh"]
    assert resp.data["user"]["email"] == "ana@example.com"


@pytest.mark.django_db
def test_signin_bad_credentials_is_401_missing_field_is_400():
    UserFactory(email="ana@example.com")
    client = APIClient()
    resp = client.post(SIGNIN_URL, {"email": "ana@example.com", "password": "wrong"}, format="json")
    assert resp.status_code == 401
    resp = client.post(SIGNIN_URL, {"email": "nadie@example.com", "password": "pass1234"}, format="json")
    assert resp.status_code == 401
    resp = client.post(SIGNIN_URL, {"email": "ana@example.com"}, format="json")
    assert resp.status_code == 400


@pytest.mark.django_db
def test_inactive_user_cannot_signin():
    UserFactory(email="ana@example.com", is_active=False)
    resp = APIClient().post(SIGNIN_URL, {"email": "ana@example.com", "password": "pass1234"}, format="json")
    assert resp.status_code == 401


@pytest.mark.django_db
def test_refresh_and_signout_blacklists_token():
    UserFactory(email="ana@example.com")
    client = APIClient()
    tokens = client.post(SIGNIN_URL, {"email": "ana@example.com", "password": "pass1234"}, format="json").data

    resp = client.post(REFRESH_URL, {"refresh": tokens["refresh"]}, format="json")
    assert resp.status_code == 200
    assert resp.data["access"]

    resp = client.post(SIGNOUT_URL, {"refresh": tokens["refresh"]}, format="json")
    assert resp.status_code == 205
    assert BlacklistedToken.objects.count() == 1

    assert client.post(SIGNOUT_URL, {"refresh": tokens["refresh"]}, format="json").status_code == 400
    assert client.post(SIGNOUT_URL, {}, format="json").status_code == 400


@pytest.mark.django_db
def test_signout_all_revokes_every_refresh_token():
    user = UserFactory(email="ana@example.com")
    client = APIClient()
    credentials = {"email": "ana@example.com", "password": "pass1234"}
    first = client.post(SIGNIN_URL, credentials, format="json").data
    second = client.post(SIGNIN_URL, credentials, format="json").data

    assert client.post(SIGNOUT_ALL_URL, format="json").status_code == 401
    client.force_authenticate(user=user)
    assert client.post(SIGNOUT_ALL_URL, format="json").status_code == 205
    assert BlacklistedToken.objects.count() == 2
    for tokens in (first, second):
        assert client.post(REFRESH_URL, {"refresh": tokens["refresh"]}, format="json").status_code == 401


@pytest.mark.django_db
def test_signout_others_keeps_the_current_session():
    user = UserFactory(email="ana@example.com")
    other = UserFactory(email="luis@example.com")
    client = APIClient()
    current = client.post(SIGNIN_URL, {"email": "ana@example.com", "password": "pass1234"}, format="json").data
    stale = client.post(SIGNIN_URL, {"email": "ana@example.com", "password": "pass1234"}, format="json").data
    foreign = client.post(SIGNIN_URL, {"email": "luis@example.com", "password": "pass1234"}, format="json").data

    client.force_authenticate(user=user)
    assert client.post(SIGNOUT_OTHERS_URL, {}, format="json").status_code == 400
    assert client.post(SIGNOUT_OTHERS_URL, {"refresh": foreign["refresh"]}, format="json").status_code == 400
    resp = client.post(SIGNOUT_OTHERS_URL, {"refresh": current["refresh"]}, format="json")
    assert resp.status_code == 205

    assert client.post(REFRESH_URL, {"refresh": current["refresh"]}, format="json").status_code == 200
    assert client.post(REFRESH_URL, {"refresh": stale["refresh"]}, format="json").status_code == 401
    assert client.post(REFRESH_URL, {"refresh": foreign["refresh"]}, format="json").status_code == 200
    assert not BlacklistedToken.objects.filter(token__user=other).exists()


@pytest.mark.django_db
def test_profile_get_and_patch():
    user = UserFactory(name="Ana")
    client = APIClient()
    assert client.get(PROFILE_URL).status_code == 401

    client.force_authenticate(user=user)
    resp = client.get(PROFILE_URL)
    assert resp.status_code == 200
    assert resp.data["name"] == "Ana"

    resp = client.patch(PROFILE_URL, {"name": "Ana María", "phone": "+573001234567"}, format="json")
    assert resp.status_code == 200
    user.refresh_from_db()
    assert user.name == "Ana María"
    assert user.phone == "+573001234567"


@pytest.mark.django_db
def test_profile_patch_cannot_grant_staff():
    user = UserFactory()
    client = APIClient()
    client.force_authenticate(user=user)
    client.patch(PROFILE_URL, {"is_admin": True, "is_staff": True}, format="json")
    user.refresh_from_db()
    assert user.is_staff is False
