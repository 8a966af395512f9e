# -*- coding: utf-8 -*-
"""
app/modules/entitlement/routes/preview_ws_routes.py

WS /entitlement/preview/{content_id}?token=<jwt>

Cliente → servidor (JSON):
    {"event": "play"} | {"event": "pause"} | {"event": "ended"}
    {"event": "switch", "content_id": "..."}

Servidor → cliente (JSON):
    {"type": "state", "gate": {...}}          en cada cambio
    {"type": "payment_required", "gate": {...}}
    {"type": "unlocked", "gate": {...}}
    {"type": "error", "message": "..."}

Token inválido: cierre 1008 antes de aceptar.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from app.shared.config import get_settings
from app.modules.auth import user_from_token
from app.modules.auth.security import TokenDecodeError
from app.modules.entitlement.services import EntitlementSnapshot, GateSession
from app.modules.user_profile.repositories import ProfileRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entitlement", tags=["Entitlement"])


def _message(kind: str, snapshot: EntitlementSnapshot) -> dict[str, Any]:
    return {"type": kind, "gate": snapshot.to_dict()}


async def _pump(websocket: WebSocket, outbox: "asyncio.Queue[Optional[dict[str, Any]]]") -> None:
    while True:
        message = await outbox.get()
        if message is None:
            return
        await websocket.send_json(message)


def _handle_event(session: GateSession, data: Any) -> Optional[str]:
    """Aplica un evento del cliente; devuelve un mensaje de error si no es válido."""
    if not isinstance(data, dict):
        return "Expected a JSON object"
    gate = session.gate
    if gate is None:
        return "Preview session is not open"

    event = data.get("event")
    if event == "play":
        gate.play()
    elif event == "pause":
        gate.pause()
    elif event == "ended":
        gate.stop()
    elif event == "switch":
        content_id = data.get("content_id")
        if not isinstance(content_id, str) or not content_id:
            return "switch requires content_id"
        session.switch_content(content_id)
    else:
        return f"Unknown event: {event!r}"
    return None


@router.websocket("/preview/{content_id}")
async def preview_websocket(websocket: WebSocket, content_id: str):
    token = websocket.query_params.get("token")
    try:
        user = user_from_token(token or "")
    except TokenDecodeError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    settings = get_settings()
    outbox: "asyncio.Queue[Optional[dict[str, Any]]]" = asyncio.Queue()
    session = GateSession(
        ProfileRepository(websocket.app.state.document_store),
        user.user_id,
        content_id,
        preview_seconds=settings.preview_seconds,
        tick_seconds=settings.preview_tick_seconds,
    )
    sender = asyncio.create_task(_pump(websocket, outbox))

    try:
        gate = await session.open()
        gate.on_change(lambda s: outbox.put_nowait(_message("state", s)))
        gate.on_payment_required(lambda s: outbox.put_nowait(_message("payment_required", s)))
        gate.on_unlock(lambda s: outbox.put_nowait(_message("unlocked", s)))
        outbox.put_nowait(_message("state", gate.snapshot()))

        while True:
            raw = await websocket.receive_text()
            try:
                error = _handle_event(session, json.loads(raw))
            except ValueError:
                error = "Invalid JSON"
            if error:
                outbox.put_nowait({"type": "error", "message": error})
    except WebSocketDisconnect:
        logger.debug("preview_ws_disconnected user=%s content=%s", user.user_id, content_id)
    finally:
        await session.close()
        outbox.put_nowait(None)
        try:
            await sender
        except (WebSocketDisconnect, RuntimeError):
            # El socket ya estaba cerrado al drenar la cola
            pass


# Fin del archivo app/modules/entitlement/routes/preview_ws_routes.py
