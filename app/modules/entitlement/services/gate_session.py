# -*- coding: utf-8 -*-
"""
app/modules/entitlement/services/gate_session.py

Sesión de preview: une una PreviewGate con la suscripción en vivo al
perfil del usuario y con el ticker de un segundo.

- El acceso inicial sale del snapshot del perfil (premium o contenido comprado)
- Cada actualización del perfil puede desbloquear la compuerta
- Eventos del perfil después de close() se ignoran
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from app.shared.database import Unsubscribe
from app.modules.user_profile.models import UserProfile
from app.modules.user_profile.repositories import ProfileRepository
from .preview_gate import DEFAULT_PREVIEW_SECONDS, PreviewGate

logger = logging.getLogger(__name__)


class GateSession:
    def __init__(
        self,
        profiles: ProfileRepository,
        user_id: str,
        content_id: str,
        *,
        preview_seconds: int = DEFAULT_PREVIEW_SECONDS,
        tick_seconds: float = 1.0,
    ) -> None:
        self.profiles = profiles
        self.user_id = user_id
        self.initial_content_id = content_id
        self.preview_seconds = preview_seconds
        self.tick_seconds = tick_seconds
        self.gate: Optional[PreviewGate] = None
        self._profile: Optional[UserProfile] = None
        self._unsubscribe: Optional[Unsubscribe] = None
        self._ticker: Optional["asyncio.Task[None]"] = None
        self._closed = False

    async def __aenter__(self) -> "GateSession":
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ------------------------------------------------------------------ #
    def _has_access(self, content_id: str) -> bool:
        return self._profile is not None and self._profile.has_access_to(content_id)

    def _on_profile(self, profile: Optional[UserProfile]) -> None:
        if self._closed:
            return
        self._profile = profile
        if self.gate is not None:
            self.gate.apply_access(self._has_access(self.gate.content_id))

    def _on_profile_error(self, exc: Exception) -> None:
        logger.warning("gate_profile_stream_error user=%s error=%r", self.user_id, exc)

    async def _run_ticker(self) -> None:
        while not self._closed:
            await asyncio.sleep(self.tick_seconds)
            if self.gate is not None:
                self.gate.tick()

    # ------------------------------------------------------------------ #
    async def open(self) -> PreviewGate:
        if self.gate is not None:
            return self.gate
        # El snapshot inicial llega antes de que subscribe() retorne
        self._unsubscribe = await self.profiles.subscribe(
            self.user_id, self._on_profile, self._on_profile_error
        )
        self.gate = PreviewGate(
            self.initial_content_id,
            has_access=self._has_access(self.initial_content_id),
            preview_seconds=self.preview_seconds,
        )
        self._ticker = asyncio.create_task(self._run_ticker())
        logger.debug(
            "gate_session_opened user=%s content=%s state=%s",
            self.user_id,
            self.initial_content_id,
            self.gate.state.value,
        )
        return self.gate

    def switch_content(self, content_id: str) -> None:
        if self.gate is None or self._closed:
            return
        self.gate.switch_content(content_id, has_access=self._has_access(content_id))

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
        if self._ticker is not None:
            self._ticker.cancel()
            try:
                await self._ticker
            except asyncio.CancelledError:
                pass
        if self.gate is not None:
            self.gate.close()
        logger.debug("gate_session_closed user=%s", self.user_id)


__all__ = ["GateSession"]
