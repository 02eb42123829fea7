from datetime import timedelta

from registrar.core.config import settings
from registrar.core.security import create_access_token, decode_access_token
from registrar.models import AdminRole

from conftest import ADMIN_PASSWORD


def test_login_success(client, admin, db_session):
    response = client.post(
        "/api/auth/login",
        json={"email": "ADMIN@example.com", "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Login successful"
    assert body["data"]["admin"]["email"] == "admin@example.com"
    assert "hashed_password" not in body["data"]["admin"]

    token = body["data"]["token"]
    payload = decode_access_token(token)
    assert payload["sub"] == str(admin.id)
    assert payload["role"] == AdminRole.SUPER_ADMIN.value
    assert payload["email"] == "admin@example.com"

    assert response.cookies.get(settings.AUTH_COOKIE_NAME) == token

    db_session.refresh(admin)
    assert admin.last_login_at is not None


def test_login_wrong_password(client, admin):
    response = client.post(
        "/api/auth/login",
        json={"email": "admin@example.com", "password": "not-the-password"}
    )
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid email or password"}


def test_login_unknown_email(client):
    response = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid email or password"


def test_login_inactive_admin(client, make_admin):
    make_admin(is_active=False)
    response = client.post(
        "/api/auth/login",
        json={"email": "admin@example.com", "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 401


def test_login_validation(client):
    response = client.post("/api/auth/login", json={"email": "not-an-email", "password": "123"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert "email" in body["errors"]
    assert body["errors"]["password"] == "Password must be at least 6 characters"


def test_profile(client, auth_headers):
    response = client.get("/api/auth/profile", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["username"] == "admin"
    assert data["role"] == "super_admin"


def test_profile_with_cookie(client, admin):
    login = client.post(
        "/api/auth/login",
        json={"email": "admin@example.com", "password": ADMIN_PASSWORD}
    )
    assert login.status_code == 200

    # No Authorization header: the login cookie is sent back
    response = client.get("/api/auth/profile")
    assert response.status_code == 200
    assert response.json()["data"]["email"] == "admin@example.com"


def test_profile_requires_token(client):
    response = client.get("/api/auth/profile")
    assert response.status_code == 401
    assert response.json()["error"] == "Access denied. No token provided."


def test_profile_rejects_invalid_token(client):
    response = client.get("/api/auth/profile", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_profile_rejects_expired_token(client, admin):
    token = create_access_token(subject=str(admin.id), expires_delta=timedelta(minutes=-5))
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"] == "Token expired"


def test_profile_rejects_inactive_admin(client, admin, auth_headers, db_session):
    admin.is_active = False
    db_session.commit()

    response = client.get("/api/auth/profile", headers=auth_headers)
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token or admin account is inactive"


def test_update_profile(client, auth_headers):
    response = client.put(
        "/api/auth/profile",
        json={"username": "headmaster", "email": "Head@Example.com"},
        headers=auth_headers
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Profile updated successfully"
    assert body["data"]["username"] == "headmaster"
    assert body["data"]["email"] == "head@example.com"


def test_update_profile_conflict(client, auth_headers, make_admin):
    make_admin(email="other@example.com", username="other", role=AdminRole.ADMIN.value)

    response = client.put(
        "/api/auth/profile",
        json={"email": "other@example.com"},
        headers=auth_headers
    )
    assert response.status_code == 409

    response = client.put(
        "/api/auth/profile",
        json={"username": "other"},
        headers=auth_headers
    )
    assert response.status_code == 409
