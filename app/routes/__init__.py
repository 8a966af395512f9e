# -*- coding: utf-8 -*-
"""
app/routes/__init__.py

Ensamblador principal de ruteadores de la API.

- /health
- /profile/*
- /payments/*
- /entitlement/* (WebSocket)
"""

from fastapi import APIRouter

from app.modules.entitlement.routes import entitlement_router
from app.modules.payments.routes import router as payments_router
from app.modules.user_profile.routes import user_profile_router
from .health_routes import router as health_router

router = APIRouter()

router.include_router(health_router)
router.include_router(user_profile_router)
router.include_router(payments_router)
router.include_router(entitlement_router)

__all__ = ["router"]

# Fin del archivo app/routes/__init__.py
