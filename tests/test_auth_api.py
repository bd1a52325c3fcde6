from datetime import timedelta

import pytest

from core.dependencies import authorize, RoleChecker, ADMIN, MANAGER
from core.exceptions import AuthError, ForbiddenError
from core.security import create_access_token, decode_token


# ==================== AUTHORIZATION PREDICATE ====================

def test_authorize_rejects_missing_claims():
    with pytest.raises(AuthError) as exc:
        authorize(None)
    assert exc.value.status_code == 401
    assert exc.value.message == "Invalid token"


def test_authorize_rejects_role_outside_allowed_set():
    claims = {"id": "u1", "name": "Sam", "email": "s@x.ng", "role": "staff"}
    with pytest.raises(ForbiddenError) as exc:
        authorize(claims, [ADMIN, MANAGER])
    assert exc.value.status_code == 403


def test_authorize_without_roles_accepts_any_principal():
    claims = {"id": "u1", "name": "Sam", "email": "s@x.ng", "role": "staff"}
    principal = authorize(claims)
    assert principal.id == "u1"
    assert principal.role == "staff"


def test_role_checker_returns_principal():
    checker = RoleChecker([ADMIN])
    principal = checker({"id": "a1", "name": "A", "email": "a@x.ng", "role": "admin"})
    assert principal.role == "admin"


def test_expired_token_does_not_decode():
    token = create_access_token({"id": "u1", "role": "admin"}, timedelta(seconds=-5))
    assert decode_token(token) is None


# ==================== TOKEN HANDLING OVER HTTP ====================

def test_missing_token_is_401_no_token(client):
    response = client.get("/api/tenants")
    assert response.status_code == 401
    assert response.json() == {"error": "No token"}


def test_garbage_token_is_401_invalid_token(client):
    response = client.get("/api/tenants", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_staff_cannot_list_users(client, staff_headers):
    response = client.get("/api/users", headers=staff_headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}


# ==================== LOGIN ====================

def test_login_returns_token_and_user(client, admin):
    response = client.post("/api/auth/login", json={"email": "admin@estateiq.ng", "password": "Secret@123"})
    assert response.status_code == 200

    body = response.json()
    assert body["user"]["email"] == "admin@estateiq.ng"
    assert body["user"]["role"] == "admin"
    assert "password_hash" not in body["user"]

    claims = decode_token(body["token"])
    assert claims["id"] == admin.id
    assert claims["role"] == "admin"


def test_login_requires_email_and_password(client):
    response = client.post("/api/auth/login", json={"email": "admin@estateiq.ng"})
    assert response.status_code == 400
    assert response.json() == {"error": "Email and password required"}


def test_disabled_account_fails_like_wrong_password(client, admin, add_user):
    add_user("off-1", "Old Staff", "old@estateiq.ng", is_active=False)

    wrong = client.post("/api/auth/login", json={"email": "admin@estateiq.ng", "password": "nope"})
    disabled = client.post("/api/auth/login", json={"email": "old@estateiq.ng", "password": "Secret@123"})
    unknown = client.post("/api/auth/login", json={"email": "who@estateiq.ng", "password": "Secret@123"})

    assert wrong.status_code == disabled.status_code == unknown.status_code == 401
    assert wrong.json() == disabled.json() == unknown.json() == {"error": "Invalid credentials"}


# ==================== REGISTER / PROFILE ====================

def test_register_defaults_to_staff(client, admin_headers):
    response = client.post(
        "/api/auth/register",
        json={"name": "New Person", "email": "New@EstateIQ.ng", "password": "pw123456"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "staff"
    assert body["email"] == "new@estateiq.ng"

    login = client.post("/api/auth/login", json={"email": "new@estateiq.ng", "password": "pw123456"})
    assert login.status_code == 200


def test_register_null_role_defaults_to_staff(client, admin_headers):
    response = client.post(
        "/api/auth/register",
        json={"name": "No Role", "email": "norole@estateiq.ng", "password": "pw123456", "role": None},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json()["role"] == "staff"


def test_register_duplicate_email(client, admin_headers):
    response = client.post(
        "/api/auth/register",
        json={"name": "Again", "email": "admin@estateiq.ng", "password": "pw"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Email already exists"}


def test_register_is_admin_only(client, manager_headers):
    response = client.post(
        "/api/auth/register",
        json={"name": "X", "email": "x@estateiq.ng", "password": "pw"},
        headers=manager_headers,
    )
    assert response.status_code == 403


def test_me_and_profile_update(client, staff_headers):
    me = client.get("/api/auth/me", headers=staff_headers)
    assert me.status_code == 200
    assert me.json()["name"] == "Sam Staff"

    updated = client.put("/api/auth/me", json={"phone": "08099999999"}, headers=staff_headers)
    assert updated.status_code == 200
    assert updated.json()["phone"] == "08099999999"
    assert updated.json()["name"] == "Sam Staff"


def test_change_password(client, staff, staff_headers):
    wrong = client.put(
        "/api/auth/change-password",
        json={"currentPassword": "bad", "newPassword": "Fresh@123"},
        headers=staff_headers,
    )
    assert wrong.status_code == 400
    assert wrong.json() == {"error": "Current password incorrect"}

    ok = client.put(
        "/api/auth/change-password",
        json={"currentPassword": "Secret@123", "newPassword": "Fresh@123"},
        headers=staff_headers,
    )
    assert ok.status_code == 200
    assert ok.json() == {"success": True}

    login = client.post("/api/auth/login", json={"email": staff.email, "password": "Fresh@123"})
    assert login.status_code == 200


# ==================== USERS ====================

def test_manager_can_list_users(client, admin, manager_headers):
    response = client.get("/api/users", headers=manager_headers)
    assert response.status_code == 200
    emails = {u["email"] for u in response.json()}
    assert {"admin@estateiq.ng", "manager@estateiq.ng"} <= emails


def test_admin_updates_user_role(client, staff, admin_headers):
    response = client.put(f"/api/users/{staff.id}", json={"role": "manager"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["role"] == "manager"


def test_primary_admin_cannot_be_deleted(client, admin, admin_headers):
    response = client.delete(f"/api/users/{admin.id}", headers=admin_headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Cannot delete primary admin"}


def test_delete_user(client, staff, admin_headers):
    response = client.delete(f"/api/users/{staff.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    missing = client.delete(f"/api/users/{staff.id}", headers=admin_headers)
    assert missing.status_code == 404
