# -*- coding: utf-8 -*-
"""
app/shared/core/http_client_cache.py

Cliente HTTP compartido para llamadas a proveedores de pago.
Se crea en el lifespan y se cierra al apagar.

Requisitos:
- httpx>=0.26.0 (AsyncHTTPTransport con parámetro 'retries')
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)


def create_http_client(
    settings: BaseAppSettings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Construye el cliente con User-Agent identificable, timeouts y reintentos
    de conexión. `transport` permite inyectar httpx.MockTransport en tests.
    """
    headers = {"User-Agent": f"{settings.app_name}/{settings.app_version}"}
    timeout = httpx.Timeout(settings.http_timeout_seconds, connect=10.0)
    limits = httpx.Limits(
        max_connections=20,
        max_keepalive_connections=10,
        keepalive_expiry=30.0,
    )
    client = httpx.AsyncClient(
        headers=headers,
        timeout=timeout,
        limits=limits,
        transport=transport or httpx.AsyncHTTPTransport(retries=settings.http_retries),
    )
    logger.info("http_client_ready retries=%d timeout=%.1fs", settings.http_retries, settings.http_timeout_seconds)
    return client


async def close_http_client(client: Optional[httpx.AsyncClient]) -> None:
    if client is None:
        return
    try:
        await client.aclose()
    except Exception as e:
        logger.debug("http_client_close_failed error=%s", e)


__all__ = ["close_http_client", "create_http_client"]

# Fin del archivo app/shared/core/http_client_cache.py
