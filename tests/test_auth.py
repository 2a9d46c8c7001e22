"""
Tests for session login/logout/me, admin-only user creation and REQUIRE_LOGIN.
"""

import pytest
from unittest.mock import patch, AsyncMock
from httpx import AsyncClient, ASGITransport

from brandops.main import _bootstrap_first_admin, create_app
from brandops.services.auth_service import hash_password, verify_password

pytestmark = pytest.mark.anyio


async def _login(client, username="admin", password="admin"):
    return await client.post("/api/login", json={"username": username, "password": password})


async def test_login_me_logout_cycle(client):
    response = await _login(client)
    assert response.status_code == 200
    user = response.json()
    assert user == {"id": 1, "username": "admin", "name": "John Doe", "role": "admin"}

    response = await client.get("/api/me")
    assert response.status_code == 200
    assert response.json()["username"] == "admin"

    response = await client.post("/api/logout")
    assert response.json() == {"message": "Logged out successfully"}
    assert (await client.get("/api/me")).status_code == 401


async def test_login_rejects_wrong_password_and_unknown_user(client):
    response = await _login(client, password="wrong")
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"
    assert (await _login(client, username="ghost")).status_code == 401


async def test_login_requires_both_fields(client):
    response = await client.post("/api/login", json={"username": "admin"})
    assert response.status_code == 400


async def test_me_without_session_is_401(client):
    response = await client.get("/api/me")
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authenticated"


async def test_me_clears_session_when_user_is_gone(client, seeded_storage):
    await _login(client)
    with patch.object(seeded_storage, "get_user", new_callable=AsyncMock, return_value=None):
        response = await client.get("/api/me")
    assert response.status_code == 401
    assert response.json()["detail"] == "User not found"
    # Session was cleared, so the real user is not restored
    assert (await client.get("/api/me")).json()["detail"] == "Not authenticated"


async def test_create_user_requires_admin(client, seeded_storage):
    payload = {"username": "ops", "password": "pw", "name": "Ops"}
    assert (await client.post("/api/users", json=payload)).status_code == 401

    await _login(client)
    response = await client.post("/api/users", json=payload)
    assert response.status_code == 201
    assert response.json()["role"] == "user"
    assert "password" not in response.json()
    assert "passwordHash" not in response.json()

    assert (await client.post("/api/users", json=payload)).status_code == 409

    await client.post("/api/logout")
    await _login(client, "ops", "pw")
    response = await client.post("/api/users", json={"username": "x", "password": "y"})
    assert response.status_code == 403


async def test_require_login_guards_data_routes(seeded_storage, settings, insights_service):
    settings = settings.model_copy(update={"require_login": True})
    app = create_app(storage=seeded_storage, settings=settings, insights_service=insights_service)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        assert (await client.get("/api/brands")).status_code == 401
        assert (await client.get("/api/health")).status_code == 200
        await _login(client)
        assert (await client.get("/api/brands")).status_code == 200


async def test_bootstrap_creates_admin_once(memory_storage, settings):
    settings = settings.model_copy(update={"first_admin_username": "root", "first_admin_password": "pw"})
    await _bootstrap_first_admin(memory_storage, settings)
    await _bootstrap_first_admin(memory_storage, settings)

    admin = await memory_storage.get_user_by_username("root")
    assert admin.role == "admin"
    assert verify_password("pw", admin.password_hash)


async def test_bootstrap_skipped_without_credentials(memory_storage, settings):
    await _bootstrap_first_admin(memory_storage, settings)
    assert await memory_storage.get_user_by_username("admin") is None


def test_verify_password_handles_bad_hashes():
    assert verify_password("pw", hash_password("pw"))
    assert not verify_password("pw", "")
    assert not verify_password("pw", "plaintext-pw")
