# -*- coding: utf-8 -*-
"""
app/shared/database/repository.py

Repositorio base sobre el almacén de documentos.
Convierte registros (dict con "id") en modelos pydantic.
"""

from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from .document_store import DocumentStore, FieldFilter, OrderBy, Record

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Repositorio asincrónico base para lecturas comunes."""

    collection: str

    def __init__(self, store: DocumentStore, model: Type[T]):
        self.store = store
        self.model = model

    def _to_model(self, record: Record) -> T:
        return self.model.model_validate(record)

    # -------------------------------------------------------------
    # Lecturas básicas
    # -------------------------------------------------------------
    async def get(self, obj_id: str) -> Optional[T]:
        record = await self.store.get(self.collection, obj_id)
        return self._to_model(record) if record is not None else None

    async def list(
        self,
        filters: Sequence[FieldFilter] = (),
        order: Optional[OrderBy] = None,
    ) -> list[T]:
        records = await self.store.query(self.collection, filters, order)
        return [self._to_model(r) for r in records]

    async def exists(self, obj_id: str) -> bool:
        return await self.store.get(self.collection, obj_id) is not None

    async def create(self, data: dict[str, Any], *, doc_id: Optional[str] = None) -> str:
        return await self.store.create(self.collection, data, doc_id=doc_id)


__all__ = ["BaseRepository"]
