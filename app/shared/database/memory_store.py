# -*- coding: utf-8 -*-
"""
app/shared/database/memory_store.py

Backend en memoria del almacén de documentos (desarrollo y tests).
Copia los registros al leer y escribir para evitar aliasing.
"""

from __future__ import annotations

import asyncio
import copy
import uuid
from collections import defaultdict
from typing import Any, Mapping, Optional, Sequence

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


class InMemoryDocumentStore(DocumentStore):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._collections: dict[str, dict[str, Record]] = defaultdict(dict)
        self._lock = asyncio.Lock()

    async def create(self, collection: str, data: Mapping[str, Any], *, doc_id: Optional[str] = None) -> str:
        doc_id = doc_id or uuid.uuid4().hex
        async with self._lock:
            docs = self._collections[collection]
            if doc_id in docs:
                raise DocumentAlreadyExists(f"Document {collection}/{doc_id} already exists")
            docs[doc_id] = resolve_write(None, data, self._clock())
        await self._publish(collection, doc_id)
        return doc_id

    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any], *, merge: bool = False) -> None:
        async with self._lock:
            docs = self._collections[collection]
            current = docs.get(doc_id) if merge else None
            docs[doc_id] = resolve_write(current, data, self._clock())
        await self._publish(collection, doc_id)

    async def update(self, collection: str, doc_id: str, patch: Mapping[str, Any]) -> None:
        async with self._lock:
            docs = self._collections[collection]
            if doc_id not in docs:
                raise DocumentNotFound(collection, doc_id)
            docs[doc_id] = resolve_write(docs[doc_id], patch, self._clock())
        await self._publish(collection, doc_id)

    async def get(self, collection: str, doc_id: str) -> Optional[Record]:
        data = self._collections[collection].get(doc_id)
        if data is None:
            return None
        return {"id": doc_id, **copy.deepcopy(data)}

    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order: Optional[OrderBy] = None,
    ) -> list[Record]:
        records = [
            {"id": doc_id, **copy.deepcopy(data)}
            for doc_id, data in self._collections[collection].items()
        ]
        return apply_query(records, filters, order)


__all__ = ["InMemoryDocumentStore"]
