import pytest

from storefront.auth.admin import AdminAuth
from storefront.database.credentials import CredentialStore
from storefront.errors import AuthFailure, CatalogValidationError


def test_wrong_password_without_credential_does_not_provision():
    credentials = CredentialStore()
    auth = AdminAuth(credentials)

    with pytest.raises(AuthFailure):
        auth.login("guess")
    assert credentials.get_user_by_username("admin") is None


def test_default_password_provisions_credential():
    credentials = CredentialStore()
    auth = AdminAuth(credentials)

    assert auth.login("admin123") is True
    user = credentials.get_user_by_username("admin")
    assert user.password == "admin123"
    assert auth.login("admin123") is True


def test_existing_credential_is_compared_exactly():
    credentials = CredentialStore()
    credentials.create_user("admin", "s3cret")
    auth = AdminAuth(credentials)

    assert auth.login("s3cret") is True
    with pytest.raises(AuthFailure):
        auth.login("admin123")
    with pytest.raises(AuthFailure):
        auth.login(None)


def test_reset_overwrites_in_place():
    credentials = CredentialStore()
    auth = AdminAuth(credentials)
    auth.login("admin123")
    original = credentials.get_user_by_username("admin")

    assert auth.reset_password("n3w") is True

    user = credentials.get_user_by_username("admin")
    assert user.id == original.id
    assert user.password == "n3w"


def test_reset_creates_missing_credential():
    credentials = CredentialStore()
    auth = AdminAuth(credentials, default_password="other-default")

    auth.reset_password("fresh")
    assert auth.login("fresh") is True


def test_reset_requires_password():
    auth = AdminAuth(CredentialStore())
    with pytest.raises(CatalogValidationError):
        auth.reset_password("")


def test_login_endpoint(client, app):
    bad = client.post("/api/admin/login", json={"password": "nope"})
    assert bad.status_code == 401
    assert bad.json() == {"error": "Invalid credentials"}
    assert app.state.admin_auth.credentials.get_user_by_username("admin") is None

    good = client.post("/api/admin/login", json={"password": "admin123"})
    assert good.status_code == 200
    assert good.json() == {"success": True}


def test_login_without_body_is_rejected(client):
    response = client.post("/api/admin/login")
    assert response.status_code == 401


def test_reset_password_endpoint(client):
    response = client.post("/api/admin/reset-password", json={"newPassword": "changed"})
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert client.post("/api/admin/login", json={"password": "admin123"}).status_code == 401
    assert client.post("/api/admin/login", json={"password": "changed"}).status_code == 200


def test_reset_password_missing_returns_400(client):
    response = client.post("/api/admin/reset-password", json={})
    assert response.status_code == 400
    assert response.json()["error"] == "Password required"


def test_non_string_password_is_a_failed_login():
    credentials = CredentialStore()
    credentials.create_user("admin", "123")
    auth = AdminAuth(credentials)
    with pytest.raises(AuthFailure):
        auth.login(123)


@pytest.mark.parametrize("body", [{"password": 123}, {"password": ["admin123"]}, ["admin123"], "admin123"])
def test_login_with_odd_body_returns_401(client, body):
    response = client.post("/api/admin/login", json=body)
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}
