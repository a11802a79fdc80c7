"""End-to-end auth flow against a temporary database."""

import pytest

import airos.infrastructure.auth as auth_module
from airos.infrastructure.auth import BcryptPasswordHasher

REGISTER_BODY = {
    "name": "Siti Rahma",
    "email": "Siti@Example.com",
    "password": "secret123",
    "department": "Sales",
}


@pytest.fixture(autouse=True)
def fast_hasher(monkeypatch):
    monkeypatch.setattr(auth_module, "_password_hasher", BcryptPasswordHasher(rounds=4))


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestAuthFlow:
    async def test_register_profile_logout(self, client, sqlite_db):
        response = await client.post("/api/auth/register", json=REGISTER_BODY)
        assert response.status_code == 201
        data = response.json()
        assert data["user"]["email"] == "siti@example.com"
        assert data["user"]["role"] == "staff"
        token = data["token"]

        profile = await client.get("/api/auth/profile", headers=_bearer(token))
        assert profile.status_code == 200
        assert profile.json()["name"] == "Siti Rahma"

        logout = await client.post("/api/auth/logout", headers=_bearer(token))
        assert logout.status_code == 200

        after = await client.get("/api/auth/profile", headers=_bearer(token))
        assert after.status_code == 401
        assert after.json()["error_code"] == "INVALID_TOKEN"

    async def test_login(self, client, sqlite_db):
        await client.post("/api/auth/register", json=REGISTER_BODY)

        response = await client.post(
            "/api/auth/login", json={"email": "siti@example.com", "password": "secret123"}
        )

        assert response.status_code == 200
        assert response.json()["user"]["last_login"] is not None

    async def test_login_wrong_password(self, client, sqlite_db):
        await client.post("/api/auth/register", json=REGISTER_BODY)

        response = await client.post(
            "/api/auth/login", json={"email": "siti@example.com", "password": "nope1234"}
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_CREDENTIALS"

    async def test_duplicate_email(self, client, sqlite_db):
        await client.post("/api/auth/register", json=REGISTER_BODY)

        response = await client.post("/api/auth/register", json=REGISTER_BODY)

        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_EMAIL"

    async def test_short_password(self, client, sqlite_db):
        response = await client.post(
            "/api/auth/register", json={**REGISTER_BODY, "password": "abc"}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_staff_cannot_list_users(self, client, sqlite_db):
        registered = await client.post("/api/auth/register", json=REGISTER_BODY)
        token = registered.json()["token"]

        response = await client.get("/api/users", headers=_bearer(token))

        assert response.status_code == 403

    async def test_garbage_token(self, client, sqlite_db):
        response = await client.get("/api/auth/profile", headers=_bearer("garbage"))
        assert response.status_code == 401
