# -*- coding: utf-8 -*-
"""
app/modules/entitlement/enums/gate_state_enum.py

Estados de la compuerta de preview.
- locked_counting: bloqueado, el conteo avanza mientras se reproduce
- locked_paused: bloqueado, conteo detenido por pausa
- locked_expired: preview agotado, se requiere pago
- unlocked: acceso confirmado (premium o contenido comprado)
"""

from enum import StrEnum


class GateState(StrEnum):
    LOCKED_COUNTING = "locked_counting"
    LOCKED_PAUSED = "locked_paused"
    LOCKED_EXPIRED = "locked_expired"
    UNLOCKED = "unlocked"

    @property
    def is_locked(self) -> bool:
        return self != GateState.UNLOCKED


__all__ = ["GateState"]
