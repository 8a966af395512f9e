# -*- coding: utf-8 -*-
"""
tests/modules/entitlement/test_preview_ws_routes.py

WS /entitlement/preview/{content_id}: autenticación, estado inicial,
eventos del reproductor y desbloqueo en vivo.
"""

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from app.modules.auth import create_access_token
from app.shared.config import get_settings


@pytest.fixture
def fast_preview(monkeypatch):
    """Preview corto y ticker rápido; debe pedirse antes que `app`."""
    monkeypatch.setenv("PREVIEW_SECONDS", "2")
    monkeypatch.setenv("PREVIEW_TICK_SECONDS", "0.01")
    get_settings.cache_clear()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def _url(content_id="taj-mahal-360", user_id="user-1"):
    return f"/entitlement/preview/{content_id}?token={create_access_token(user_id)}"


def _set_profile(client, app, data, user_id="user-1"):
    client.portal.call(app.state.document_store.set, "users", user_id, data)


def _receive_until(ws, predicate, limit=50):
    for _ in range(limit):
        message = ws.receive_json()
        if predicate(message):
            return message
    raise AssertionError("expected message not received")


def test_invalid_token_closes_with_policy_violation(client):
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/entitlement/preview/taj?token=not-a-jwt") as ws:
            ws.receive_json()
    assert exc.value.code == 1008


def test_missing_token_closes(client):
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/entitlement/preview/taj") as ws:
            ws.receive_json()
    assert exc.value.code == 1008


def test_initial_state_and_player_events(client):
    with client.websocket_connect(_url()) as ws:
        first = ws.receive_json()
        assert first["type"] == "state"
        assert first["gate"]["state"] == "locked_counting"
        assert first["gate"]["content_id"] == "taj-mahal-360"
        assert first["gate"]["preview_seconds_remaining"] == 60

        ws.send_json({"event": "play"})
        assert ws.receive_json()["gate"]["is_playing"] is True

        ws.send_json({"event": "pause"})
        paused = _receive_until(ws, lambda m: m["gate"]["state"] == "locked_paused")
        assert paused["gate"]["is_paused"] is True

        ws.send_json({"event": "switch", "content_id": "kerala"})
        switched = _receive_until(ws, lambda m: m["gate"]["content_id"] == "kerala")
        assert switched["gate"]["preview_seconds_remaining"] == 60

        ws.send_json({"event": "ended"})
        ended = _receive_until(ws, lambda m: m["type"] == "state" and not m["gate"]["is_paused"])
        assert ended["gate"]["is_playing"] is False


def test_client_errors(client):
    with client.websocket_connect(_url()) as ws:
        ws.receive_json()

        ws.send_text("{not json")
        assert ws.receive_json() == {"type": "error", "message": "Invalid JSON"}

        ws.send_json({"event": "rewind"})
        assert ws.receive_json() == {"type": "error", "message": "Unknown event: 'rewind'"}

        ws.send_json(["play"])
        assert ws.receive_json() == {"type": "error", "message": "Expected a JSON object"}

        ws.send_json({"event": "switch"})
        assert ws.receive_json() == {"type": "error", "message": "switch requires content_id"}


def test_premium_profile_starts_unlocked(app, client):
    _set_profile(client, app, {"subscription": "premium", "purchasedContent": []})

    with client.websocket_connect(_url()) as ws:
        assert ws.receive_json()["gate"]["state"] == "unlocked"


def test_expiry_then_purchase_unlocks(fast_preview, app, client):
    _set_profile(client, app, {"subscription": "free", "purchasedContent": []})

    with client.websocket_connect(_url()) as ws:
        assert ws.receive_json()["gate"]["preview_seconds_remaining"] == 2

        ws.send_json({"event": "play"})
        required = _receive_until(ws, lambda m: m["type"] == "payment_required")
        assert required["gate"]["state"] == "locked_expired"

        _set_profile(client, app, {"subscription": "free", "purchasedContent": ["taj-mahal-360"]})
        unlocked = _receive_until(ws, lambda m: m["type"] == "unlocked")
        assert unlocked["gate"]["has_access"] is True
