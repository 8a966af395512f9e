# -*- coding: utf-8 -*-
"""
app/modules/entitlement/__init__.py

Compuerta de preview: 60 segundos de reproducción gratuita que se
desbloquean en cuanto el perfil del usuario refleja el acceso comprado.

Estructura:
- enums: GateState
- services: PreviewGate (máquina de estados) y GateSession (perfil en vivo + ticker)
- routes: WS /entitlement/preview/{content_id}
"""

from .enums import GateState
from .services import EntitlementSnapshot, GateSession, PreviewGate

__all__ = ["EntitlementSnapshot", "GateSession", "GateState", "PreviewGate"]
