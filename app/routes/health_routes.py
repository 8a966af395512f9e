# -*- coding: utf-8 -*-
"""
app/routes/health_routes.py

Endpoint básico de health check.
"""

import asyncio
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app.shared.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


async def _store_reachable(request: Request, timeout_s: float = 2.0) -> bool:
    store = getattr(request.app.state, "document_store", None)
    if store is None:
        return False
    try:
        await asyncio.wait_for(store.get("config", "paymentGateways"), timeout=timeout_s)
        return True
    except Exception as e:
        logger.warning("health_store_unreachable error=%r", e)
        return False


@router.get(
    "/health",
    summary="Health check del backend",
    description="Estado básico del backend y conectividad al almacén de documentos.",
)
async def health_check(request: Request) -> dict:
    settings = get_settings()
    store_ok = await _store_reachable(request)

    return {
        "status": "ok" if store_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.python_env,
        "document_store": {
            "backend": settings.document_store_backend,
            "reachable": store_ok,
        },
        "service": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
    }

# Fin del archivo app/routes/health_routes.py
