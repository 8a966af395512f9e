# -*- coding: utf-8 -*-
"""
app/modules/entitlement/enums/__init__.py
"""

from .gate_state_enum import GateState

__all__ = ["GateState"]
