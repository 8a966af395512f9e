# -*- coding: utf-8 -*-
"""
app/main.py

Punto de entrada principal del backend de Incredible India VR.

Ajustes clave:
- Configuración vía app.shared.config (pydantic-settings, por PYTHON_ENV)
- Logging configurado una vez al crear la app (plain / json)
- Lifespan: almacén de documentos, cliente HTTP compartido y runtime de pagos
  en app.state; cierre ordenado en shutdown
- Middleware JSON para errores 500 con request_id
- Métricas Prometheus en /payments/metrics/prometheus
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.shared.config import get_payments_settings, get_settings, setup_logging
from app.shared.core import close_http_client, create_http_client
from app.shared.database import build_document_store
from app.shared.middleware import JSONExceptionMiddleware, RequestLoggingMiddleware
from app.modules.payments.dependencies import build_payments_runtime
from app.routes import router as api_router

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "User Profile", "description": "Perfil, tier de suscripción y contenido comprado"},
    {"name": "payments:transactions", "description": "Transacciones e intentos de pago"},
    {"name": "payments:admin", "description": "Administración de pagos y pasarelas"},
    {"name": "payments:webhooks", "description": "Webhooks de proveedores"},
    {"name": "Entitlement", "description": "Compuerta de preview (WebSocket)"},
]


def _build_lifespan(http_transport: Optional[httpx.AsyncBaseTransport]):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # ────────── STARTUP ──────────
        settings = get_settings()
        store = await build_document_store(settings)
        http_client = create_http_client(settings, transport=http_transport)
        payments = build_payments_runtime(store, http_client, get_payments_settings())

        app.state.document_store = store
        app.state.http_client = http_client
        app.state.payments = payments
        logger.info("🟢 Backend iniciado env=%s store=%s", settings.python_env, settings.document_store_backend)

        try:
            yield
        finally:
            # ────────── SHUTDOWN ──────────
            logger.info("🔴 Iniciando shutdown ordenado...")
            try:
                await payments.aclose()
            except Exception as e:
                logger.error("❌ Error cerrando intentos pendientes: %r", e)
            await close_http_client(http_client)
            try:
                await store.close()
            except Exception as e:
                logger.error("❌ Error cerrando almacén de documentos: %r", e)
            logger.info("🔴 Backend apagado.")

    return lifespan


def _configure_cors(app_instance: FastAPI) -> None:
    settings = get_settings()
    origins = settings.get_cors_origins()
    # Con comodín no se permiten credenciales (especificación CORS)
    allow_credentials = origins != ["*"]
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )
    logger.info("CORS configurado origins=%s credentials=%s", origins, allow_credentials)


def create_app(*, http_transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    Construye la aplicación. `http_transport` reemplaza el transporte del
    cliente HTTP compartido (httpx.MockTransport en tests).
    """
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    application = FastAPI(
        title=f"{settings.app_name} API",
        description="Pagos, transacciones y compuerta de preview de contenido VR",
        version=settings.app_version,
        lifespan=_build_lifespan(http_transport),
        openapi_tags=openapi_tags,
    )
    _configure_cors(application)
    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(JSONExceptionMiddleware)
    application.include_router(api_router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=get_settings().is_dev)

# Fin del archivo app/main.py
