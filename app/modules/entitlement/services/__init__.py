# -*- coding: utf-8 -*-
"""
app/modules/entitlement/services/__init__.py
"""

from .gate_session import GateSession
from .preview_gate import DEFAULT_PREVIEW_SECONDS, EntitlementSnapshot, PreviewGate

__all__ = ["DEFAULT_PREVIEW_SECONDS", "EntitlementSnapshot", "GateSession", "PreviewGate"]
