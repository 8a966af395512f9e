# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/__init__.py

Ensamblador de rutas REST del módulo Payments.

Incluye:
- /payments/transactions/*
- /payments/gateways/available
- /payments/admin/*
- /payments/webhooks/stripe
- /payments/metrics/prometheus
"""

from fastapi import APIRouter

from app.modules.payments.metrics.routes import router_prometheus
from .admin_routes import router as admin_router
from .gateways_routes import router as gateways_router
from .transactions_routes import router as transactions_router
from .webhooks_stripe import router as webhooks_stripe_router

router = APIRouter()

# Prefijo común /payments para todas las rutas del módulo
router.include_router(transactions_router, prefix="/payments")
router.include_router(gateways_router, prefix="/payments")
router.include_router(admin_router, prefix="/payments")
router.include_router(webhooks_stripe_router, prefix="/payments")
router.include_router(router_prometheus, prefix="/payments")

__all__ = ["router"]

# Fin del archivo app/modules/payments/routes/__init__.py
