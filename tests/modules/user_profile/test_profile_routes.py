# -*- coding: utf-8 -*-
"""
tests/modules/user_profile/test_profile_routes.py
"""


async def test_me_creates_free_profile(async_client, auth_headers):
    resp = await async_client.get("/profile/me", headers=auth_headers())

    assert resp.status_code == 200
    data = resp.json()
    assert data["user_id"] == "user-1"
    assert data["email"] == "viajero@example.com"
    assert data["subscription"] == "free"
    assert data["is_premium"] is False
    assert data["purchased_content"] == []
    assert data["created_at"] is not None


async def test_me_reflects_stored_access(async_client, auth_headers, app):
    await app.state.document_store.set(
        "users", "user-9", {"subscription": "premium", "purchasedContent": ["kerala", "goa"]}
    )

    data = (await async_client.get("/profile/me", headers=auth_headers("user-9"))).json()
    assert data["is_premium"] is True
    assert data["purchased_content"] == ["goa", "kerala"]


async def test_me_requires_token(async_client):
    resp = await async_client.get("/profile/me")
    assert resp.status_code == 401


async def test_me_rejects_bad_token(async_client):
    resp = await async_client.get("/profile/me", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"]["error"] == "invalid_token"
