# -*- coding: utf-8 -*-
"""
app/shared/database/sql_store.py

Backend SQLAlchemy (async) del almacén de documentos.

Cada documento es una fila de la tabla `documents` (collection, doc_id, data JSON).
Los filtros y el orden se aplican en Python sobre la colección; el volumen
esperado (transacciones y perfiles de una tienda) lo permite.

Tipos no-JSON dentro de `data`:
- datetime -> {"$datetime": ISO-8601}
- Decimal  -> str
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import JSON, DateTime, String, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base
from .document_store import (
    DocumentAlreadyExists,
    DocumentNotFound,
    DocumentStore,
    FieldFilter,
    OrderBy,
    Record,
    apply_query,
    resolve_write,
)

_DATETIME_TAG = "$datetime"


class StoredDocument(Base):
    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(128), primary_key=True)
    doc_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


def encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return {_DATETIME_TAG: value.isoformat()}
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Mapping):
        return {k: encode_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode_value(v) for v in value]
    return value


def decode_value(value: Any) -> Any:
    if isinstance(value, dict):
        if set(value) == {_DATETIME_TAG}:
            return datetime.fromisoformat(value[_DATETIME_TAG])
        return {k: decode_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [decode_value(v) for v in value]
    return value


class SqlDocumentStore(DocumentStore):
    """Almacén persistente sobre cualquier motor async de SQLAlchemy (asyncpg, aiosqlite)."""

    def __init__(self, engine: AsyncEngine, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._engine = engine
        self._sessionmaker = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    async def create_schema(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, tables=[StoredDocument.__table__])

    async def close(self) -> None:
        await super().close()
        await self._engine.dispose()

    # ------------------------------------------------------------------ #
    async def _load_row(self, session: AsyncSession, collection: str, doc_id: str) -> Optional[StoredDocument]:
        stmt = (
            select(StoredDocument)
            .where(StoredDocument.collection == collection, StoredDocument.doc_id == doc_id)
            .with_for_update()
        )
        return (await session.execute(stmt)).scalar_one_or_none()

    async def create(self, collection: str, data: Mapping[str, Any], *, doc_id: Optional[str] = None) -> str:
        doc_id = doc_id or uuid.uuid4().hex
        now = self._clock()
        async with self._sessionmaker() as session, session.begin():
            if await self._load_row(session, collection, doc_id) is not None:
                raise DocumentAlreadyExists(f"Document {collection}/{doc_id} already exists")
            session.add(
                StoredDocument(
                    collection=collection,
                    doc_id=doc_id,
                    data=encode_value(resolve_write(None, data, now)),
                    created_at=now,
                    updated_at=now,
                )
            )
        await self._publish(collection, doc_id)
        return doc_id

    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any], *, merge: bool = False) -> None:
        now = self._clock()
        async with self._sessionmaker() as session, session.begin():
            row = await self._load_row(session, collection, doc_id)
            if row is None:
                session.add(
                    StoredDocument(
                        collection=collection,
                        doc_id=doc_id,
                        data=encode_value(resolve_write(None, data, now)),
                        created_at=now,
                        updated_at=now,
                    )
                )
            else:
                current = decode_value(row.data) if merge else None
                row.data = encode_value(resolve_write(current, data, now))
                row.updated_at = now
        await self._publish(collection, doc_id)

    async def update(self, collection: str, doc_id: str, patch: Mapping[str, Any]) -> None:
        now = self._clock()
        async with self._sessionmaker() as session, session.begin():
            row = await self._load_row(session, collection, doc_id)
            if row is None:
                raise DocumentNotFound(collection, doc_id)
            row.data = encode_value(resolve_write(decode_value(row.data), patch, now))
            row.updated_at = now
        await self._publish(collection, doc_id)

    async def get(self, collection: str, doc_id: str) -> Optional[Record]:
        async with self._sessionmaker() as session:
            stmt = select(StoredDocument.data).where(
                StoredDocument.collection == collection, StoredDocument.doc_id == doc_id
            )
            data = (await session.execute(stmt)).scalar_one_or_none()
        if data is None:
            return None
        return {"id": doc_id, **decode_value(data)}

    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order: Optional[OrderBy] = None,
    ) -> list[Record]:
        async with self._sessionmaker() as session:
            stmt = select(StoredDocument.doc_id, StoredDocument.data).where(StoredDocument.collection == collection)
            rows = (await session.execute(stmt)).all()
        records = [{"id": doc_id, **decode_value(data)} for doc_id, data in rows]
        return apply_query(records, filters, order)


__all__ = ["SqlDocumentStore", "StoredDocument", "decode_value", "encode_value"]
# Fin del archivo app/shared/database/sql_store.py
