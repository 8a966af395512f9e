# -*- coding: utf-8 -*-
"""
app/modules/entitlement/routes/__init__.py
"""

from .preview_ws_routes import router as entitlement_router

__all__ = ["entitlement_router"]
