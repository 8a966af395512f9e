# -*- coding: utf-8 -*-
"""
app/modules/entitlement/services/preview_gate.py

Máquina de estados de la compuerta de preview.

    locked_counting(t) --pause--> locked_paused(t) --play--> locked_counting(t)
    locked_counting(t) --tick (reproduciendo)--> locked_counting(t-1)
    locked_counting(1) --tick--> locked_expired   (detiene reproducción, pide pago)
    locked_* --acceso confirmado--> unlocked      (sin esperar al conteo)
    locked_* --cambio de contenido--> locked_counting(60)

Invariantes:
- has_expired => preview_seconds_remaining == 0
- el conteo solo baja con is_playing, sin pausa y sin acceso
- solo el perfil actualizado (acceso real) desbloquea; nunca una transacción
  pending o failed

La compuerta no conoce relojes: el ticker de GateSession llama tick().
Tras close() todos los eventos se ignoran.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Optional

from app.modules.entitlement.enums import GateState

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_SECONDS = 60

Listener = Callable[["EntitlementSnapshot"], None]


@dataclass(frozen=True)
class EntitlementSnapshot:
    content_id: str
    has_access: bool
    preview_seconds_remaining: int
    is_playing: bool
    is_paused: bool
    has_expired: bool

    @property
    def state(self) -> GateState:
        if self.has_access:
            return GateState.UNLOCKED
        if self.has_expired:
            return GateState.LOCKED_EXPIRED
        if self.is_paused:
            return GateState.LOCKED_PAUSED
        return GateState.LOCKED_COUNTING

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["state"] = self.state.value
        return data


class PreviewGate:
    def __init__(
        self,
        content_id: str,
        *,
        has_access: bool = False,
        preview_seconds: int = DEFAULT_PREVIEW_SECONDS,
    ) -> None:
        if preview_seconds <= 0:
            raise ValueError("preview_seconds must be positive")
        self.preview_seconds = preview_seconds
        self._closed = False
        self._unlock_listeners: list[Listener] = []
        self._payment_listeners: list[Listener] = []
        self._change_listeners: list[Listener] = []
        self._reset(content_id, has_access)

    # ------------------------------------------------------------------ #
    # Estado
    # ------------------------------------------------------------------ #
    @property
    def state(self) -> GateState:
        return self.snapshot().state

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> EntitlementSnapshot:
        return EntitlementSnapshot(
            content_id=self.content_id,
            has_access=self.has_access,
            preview_seconds_remaining=self.remaining,
            is_playing=self.is_playing,
            is_paused=self.is_paused,
            has_expired=self.has_expired,
        )

    def _reset(self, content_id: str, has_access: bool) -> None:
        self.content_id = content_id
        self.has_access = has_access
        self.remaining = self.preview_seconds
        self.is_playing = False
        self.is_paused = False
        self.has_expired = False

    # ------------------------------------------------------------------ #
    # Suscriptores
    # ------------------------------------------------------------------ #
    def on_unlock(self, callback: Listener) -> Callable[[], None]:
        return self._add(self._unlock_listeners, callback)

    def on_payment_required(self, callback: Listener) -> Callable[[], None]:
        return self._add(self._payment_listeners, callback)

    def on_change(self, callback: Listener) -> Callable[[], None]:
        return self._add(self._change_listeners, callback)

    @staticmethod
    def _add(listeners: list[Listener], callback: Listener) -> Callable[[], None]:
        listeners.append(callback)

        def _remove() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return _remove

    def _emit(self, listeners: list[Listener]) -> None:
        snapshot = self.snapshot()
        for callback in list(listeners):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("preview_gate_listener_failed content=%s", self.content_id)

    # ------------------------------------------------------------------ #
    # Eventos de reproducción
    # ------------------------------------------------------------------ #
    def play(self) -> None:
        if self._closed:
            return
        if self.has_expired and not self.has_access:
            # Reproducir tras expirar solo vuelve a pedir el pago
            self._emit(self._payment_listeners)
            return
        self.is_playing = True
        self.is_paused = False
        self._emit(self._change_listeners)

    def pause(self) -> None:
        if self._closed or self.has_expired:
            return
        self.is_playing = False
        self.is_paused = True
        self._emit(self._change_listeners)

    def stop(self) -> None:
        """Fin del video: sin reproducción ni pausa, el conteo se conserva."""
        if self._closed:
            return
        self.is_playing = False
        self.is_paused = False
        self._emit(self._change_listeners)

    def tick(self) -> bool:
        """
        Un segundo de reloj. Devuelve True si el conteo bajó.
        """
        if self._closed or self.has_access or self.has_expired:
            return False
        if not self.is_playing or self.is_paused:
            return False

        self.remaining -= 1
        if self.remaining <= 0:
            self.remaining = 0
            self.has_expired = True
            self.is_playing = False
            self.is_paused = False
            logger.info("preview_expired content=%s", self.content_id)
            self._emit(self._change_listeners)
            self._emit(self._payment_listeners)
            return True

        self._emit(self._change_listeners)
        return True

    # ------------------------------------------------------------------ #
    # Eventos externos
    # ------------------------------------------------------------------ #
    def switch_content(self, content_id: str, *, has_access: Optional[bool] = None) -> None:
        """
        Cambia de contenido. Bloqueado (incluso expirado) vuelve a
        locked_counting(60); desbloqueado se conserva salvo que has_access
        indique lo contrario para el nuevo contenido.
        """
        if self._closed:
            return
        access = self.has_access if has_access is None else has_access
        self._reset(content_id, access)
        self._emit(self._change_listeners)

    def apply_access(self, has_access: bool) -> None:
        """Acceso derivado del perfil en vivo. Solo puede desbloquear."""
        if has_access:
            self.unlock()

    def unlock(self) -> None:
        if self._closed or self.has_access:
            return
        previous = self.state
        self.has_access = True
        self.has_expired = False
        self.is_paused = False
        logger.info(
            "preview_unlocked content=%s from=%s remaining=%d",
            self.content_id,
            previous.value,
            self.remaining,
        )
        self._emit(self._change_listeners)
        self._emit(self._unlock_listeners)

    def close(self) -> None:
        self._closed = True
        self._unlock_listeners.clear()
        self._payment_listeners.clear()
        self._change_listeners.clear()


__all__ = ["DEFAULT_PREVIEW_SECONDS", "EntitlementSnapshot", "PreviewGate"]
