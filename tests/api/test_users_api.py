"""
HTTP tests for /api/users — registration, login and self-or-admin gating.
"""

import time

import pytest
from jose import jwt

pytestmark = pytest.mark.api


def register(client, **overrides):
    payload = {"email": "new@example.com", "username": "newbie", "password": "password123"}
    payload.update(overrides)
    return client.post("/api/users", json=payload)


class TestRegistration:

    def test_success_never_returns_password(self, client):
        response = register(client)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["user"]["email"] == "new@example.com"
        assert body["user"]["roles"] == ["user"]
        assert "password" not in body["user"]

    def test_existing_email(self, client, regular_user):
        response = register(client, email=regular_user.email, username="brand_new")
        assert response.status_code == 400
        assert response.json()["message"] == "Email already in use"

    def test_existing_username(self, client, regular_user):
        response = register(client, email="fresh@example.com", username=regular_user.username)
        assert response.status_code == 400
        assert response.json()["message"] == "Username already in use"

    def test_validation_runs_first(self, client):
        response = client.post("/api/users", json={"email": "x@example.com"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == 400
        assert body["message"] == "Email, username and password are required"
        assert body["details"]["body"] == {"email": "x@example.com"}

    def test_anonymous_cannot_pick_roles(self, client):
        response = register(client, roles=["admin"])
        assert response.status_code == 201
        assert response.json()["user"]["roles"] == ["user"]

    def test_unverifiable_token_registers_as_anonymous(self, client):
        response = client.post(
            "/api/users",
            json={"email": "a@b.co", "username": "abc", "password": "password123", "roles": ["admin"]},
            headers={"Authorization": "Bearer garbage"},
        )
        assert response.status_code == 201
        assert response.json()["user"]["roles"] == ["user"]

    def test_admin_can_register_an_admin(self, client, admin_headers):
        response = client.post(
            "/api/users",
            json={"email": "boss@example.com", "username": "boss", "password": "password123", "roles": ["admin"]},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["user"]["roles"] == ["admin"]


class TestLogin:

    def test_success(self, client, make_user):
        user = make_user(password="s3cretpass")
        response = client.post("/api/users/login", json={"email": user.email, "password": "s3cretpass"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["user"]["id"] == user.id
        assert "createdAt" in body["user"]
        assert "password" not in body["user"]

        claims = jwt.get_unverified_claims(body["token"])
        assert claims["id"] == user.id
        assert claims["email"] == user.email
        assert claims["username"] == user.username
        assert claims["roles"] == ["user"]
        assert "exp" in claims

    def test_token_lifetime_is_one_hour(self, client, make_user):
        user = make_user(password="s3cretpass")
        token = client.post("/api/users/login", json={"email": user.email, "password": "s3cretpass"}).json()["token"]
        claims = jwt.get_unverified_claims(token)
        assert 3500 < claims["exp"] - time.time() <= 3600

    def test_wrong_password_and_unknown_email_look_the_same(self, client, make_user):
        user = make_user(password="s3cretpass")
        wrong_password = client.post("/api/users/login", json={"email": user.email, "password": "nope-nope"})
        unknown_email = client.post("/api/users/login", json={"email": "ghost@example.com", "password": "s3cretpass"})

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json()["message"] == unknown_email.json()["message"] == "Invalid email or password"

    def test_missing_fields(self, client):
        response = client.post("/api/users/login", json={"email": "a@example.com"})
        assert response.status_code == 400
        assert response.json()["message"] == "Email and password are required"


class TestUserAccess:

    def test_list_requires_admin(self, client, admin_headers, user_headers):
        assert client.get("/api/users").status_code == 401
        assert client.get("/api/users", headers=user_headers).status_code == 403

        response = client.get("/api/users", headers=admin_headers)
        assert response.status_code == 200
        assert all("password" not in u for u in response.json())

    def test_self_can_read_update_delete(self, client, regular_user, user_headers):
        url = f"/api/users/{regular_user.id}"

        assert client.get(url, headers=user_headers).json()["username"] == regular_user.username

        updated = client.put(url, json={"username": "jane_new"}, headers=user_headers)
        assert updated.status_code == 200
        assert updated.json()["user"]["username"] == "jane_new"

        deleted = client.delete(url, headers=user_headers)
        assert deleted.status_code == 200
        assert deleted.json()["message"] == "User deleted successfully"

    def test_other_users_are_forbidden(self, client, admin, user_headers):
        url = f"/api/users/{admin.id}"
        assert client.get(url, headers=user_headers).status_code == 403
        assert client.put(url, json={"username": "hijack"}, headers=user_headers).status_code == 403
        assert client.delete(url, headers=user_headers).status_code == 403

    def test_admin_acts_on_anyone(self, client, regular_user, admin_headers):
        url = f"/api/users/{regular_user.id}"
        assert client.get(url, headers=admin_headers).status_code == 200
        promoted = client.put(url, json={"roles": ["user", "admin"]}, headers=admin_headers)
        assert promoted.json()["user"]["roles"] == ["user", "admin"]
        assert client.delete(url, headers=admin_headers).status_code == 200

    def test_user_cannot_grant_self_roles(self, client, regular_user, user_headers):
        response = client.put(f"/api/users/{regular_user.id}", json={"roles": ["admin"]}, headers=user_headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Only admins can change roles"

    def test_update_password_then_login(self, client, regular_user, user_headers):
        client.put(f"/api/users/{regular_user.id}", json={"password": "changed-pass"}, headers=user_headers)
        response = client.post("/api/users/login", json={"email": regular_user.email, "password": "changed-pass"})
        assert response.status_code == 200

    def test_missing_and_malformed_ids(self, client, admin_headers):
        assert client.get("/api/users/" + "0" * 24, headers=admin_headers).status_code == 404
        malformed = client.get("/api/users/not-an-id", headers=admin_headers)
        assert malformed.status_code == 400
        assert malformed.json()["message"] == "Invalid user ID format"

    def test_deleted_user_token_still_verifies_but_user_is_gone(self, client, regular_user, headers_for):
        headers = headers_for(regular_user)
        client.delete(f"/api/users/{regular_user.id}", headers=headers)
        assert client.get(f"/api/users/{regular_user.id}", headers=headers).status_code == 404
