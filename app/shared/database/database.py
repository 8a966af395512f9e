# -*- coding: utf-8 -*-
"""
app/shared/database/database.py

Construcción del almacén de documentos según configuración.

Provee:
- build_engine(settings): create_async_engine (asyncpg en prod, aiosqlite en local)
- build_document_store(settings): InMemoryDocumentStore o SqlDocumentStore
- get_document_store(request): dependencia FastAPI (app.state)
"""

from __future__ import annotations

import logging

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.shared.config.settings_base import BaseAppSettings
from .document_store import DocumentStore
from .memory_store import InMemoryDocumentStore
from .sql_store import SqlDocumentStore

logger = logging.getLogger(__name__)


def build_engine(settings: BaseAppSettings) -> AsyncEngine:
    return create_async_engine(
        settings.database_url,
        echo=settings.db_echo_sql,
        pool_pre_ping=settings.db_pool_pre_ping,
    )


async def build_document_store(settings: BaseAppSettings) -> DocumentStore:
    if settings.document_store_backend == "sql":
        store = SqlDocumentStore(build_engine(settings))
        await store.create_schema()
        logger.info("document_store backend=sql")
        return store
    logger.info("document_store backend=memory")
    return InMemoryDocumentStore()


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.document_store


__all__ = ["build_document_store", "build_engine", "get_document_store"]
# Fin del archivo app/shared/database/database.py
