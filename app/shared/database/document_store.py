# -*- coding: utf-8 -*-
"""
app/shared/database/document_store.py

Contrato del almacén de documentos (colecciones de registros JSON con id).

Provee:
- DocumentStore: base abstracta con create/set/update/get/query
- subscribe / subscribe_document: listeners con snapshot inicial y
  notificación tras cada escritura en la colección
- Centinelas de escritura: SERVER_TIMESTAMP y ArrayUnion
- FieldFilter / OrderBy para consultas

Los backends concretos viven en memory_store.py y sql_store.py.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

Record = dict[str, Any]
Unsubscribe = Callable[[], None]
ErrorCallback = Callable[[Exception], None]


class DocumentNotFound(LookupError):
    """El documento no existe (update sobre id inexistente)."""

    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"Document {collection}/{doc_id} not found")
        self.collection = collection
        self.doc_id = doc_id


class DocumentAlreadyExists(ValueError):
    """create() con un id ya usado en la colección."""


# ---------------------------------------------------------------------------- #
# Centinelas de escritura
# ---------------------------------------------------------------------------- #
class _ServerTimestamp:
    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class ArrayUnion:
    """Agrega valores a una lista sin duplicarlos (unión de conjuntos)."""

    values: tuple[Any, ...]

    def __init__(self, values: Sequence[Any]):
        object.__setattr__(self, "values", tuple(values))

    def apply(self, current: Any) -> list[Any]:
        merged = list(current) if isinstance(current, (list, tuple)) else []
        for value in self.values:
            if value not in merged:
                merged.append(value)
        return merged


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def resolve_write(current: Optional[Mapping[str, Any]], patch: Mapping[str, Any], now: datetime) -> Record:
    """Aplica `patch` sobre `current` resolviendo centinelas."""
    merged: Record = copy.deepcopy(dict(current)) if current else {}
    for key, value in patch.items():
        if key == "id":
            continue
        if value is SERVER_TIMESTAMP:
            merged[key] = now
        elif isinstance(value, ArrayUnion):
            merged[key] = value.apply(merged.get(key))
        else:
            merged[key] = copy.deepcopy(value)
    return merged


# ---------------------------------------------------------------------------- #
# Consultas
# ---------------------------------------------------------------------------- #
@dataclass(frozen=True)
class FieldFilter:
    field: str
    op: str
    value: Any

    def matches(self, record: Mapping[str, Any]) -> bool:
        actual = record.get(self.field)
        if self.op == "==":
            return actual == self.value
        if self.op == "!=":
            return actual != self.value
        if self.op == "in":
            return actual in self.value
        if self.op == "array-contains":
            return isinstance(actual, (list, tuple)) and self.value in actual
        raise ValueError(f"Unsupported filter operator: {self.op}")


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = False


def apply_query(
    records: Sequence[Record],
    filters: Sequence[FieldFilter] = (),
    order: Optional[OrderBy] = None,
) -> list[Record]:
    """Filtra y ordena en memoria; los registros sin el campo van al final."""
    selected = [r for r in records if all(f.matches(r) for f in filters)]
    if order is None:
        return selected
    present = [r for r in selected if r.get(order.field) is not None]
    missing = [r for r in selected if r.get(order.field) is None]
    present.sort(key=lambda r: r[order.field], reverse=order.descending)
    return present + missing


# ---------------------------------------------------------------------------- #
# Listeners
# ---------------------------------------------------------------------------- #
@dataclass
class _Listener:
    collection: str
    on_change: Callable[[Any], None]
    on_error: Optional[ErrorCallback] = None
    doc_id: Optional[str] = None
    filters: tuple[FieldFilter, ...] = ()
    order: Optional[OrderBy] = None
    active: bool = field(default=True)


class DocumentStore(ABC):
    """
    Almacén de documentos con suscripciones en proceso.

    Las subclases implementan la persistencia; la entrega de snapshots
    a listeners se resuelve aquí tras cada escritura (`_publish`).
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock
        self._listeners: list[_Listener] = []

    # ------------------------------------------------------------------ #
    # Persistencia (backends)
    # ------------------------------------------------------------------ #
    @abstractmethod
    async def create(self, collection: str, data: Mapping[str, Any], *, doc_id: Optional[str] = None) -> str:
        ...

    @abstractmethod
    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any], *, merge: bool = False) -> None:
        ...

    @abstractmethod
    async def update(self, collection: str, doc_id: str, patch: Mapping[str, Any]) -> None:
        ...

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Record]:
        ...

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order: Optional[OrderBy] = None,
    ) -> list[Record]:
        ...

    async def close(self) -> None:
        self._listeners.clear()

    # ------------------------------------------------------------------ #
    # Suscripciones
    # ------------------------------------------------------------------ #
    async def subscribe(
        self,
        collection: str,
        on_change: Callable[[list[Record]], None],
        on_error: Optional[ErrorCallback] = None,
        *,
        filters: Sequence[FieldFilter] = (),
        order: Optional[OrderBy] = None,
    ) -> Unsubscribe:
        """Escucha una consulta; entrega el snapshot inicial antes de retornar."""
        listener = _Listener(
            collection=collection,
            on_change=on_change,
            on_error=on_error,
            filters=tuple(filters),
            order=order,
        )
        return await self._register(listener)

    async def subscribe_document(
        self,
        collection: str,
        doc_id: str,
        on_change: Callable[[Optional[Record]], None],
        on_error: Optional[ErrorCallback] = None,
    ) -> Unsubscribe:
        """Escucha un documento; `on_change(None)` si no existe."""
        listener = _Listener(collection=collection, on_change=on_change, on_error=on_error, doc_id=doc_id)
        return await self._register(listener)

    async def _register(self, listener: _Listener) -> Unsubscribe:
        self._listeners.append(listener)
        await self._deliver(listener)

        def unsubscribe() -> None:
            listener.active = False
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _publish(self, collection: str, doc_id: str) -> None:
        for listener in list(self._listeners):
            if listener.collection != collection:
                continue
            if listener.doc_id is not None and listener.doc_id != doc_id:
                continue
            await self._deliver(listener)

    async def _deliver(self, listener: _Listener) -> None:
        if not listener.active:
            return
        try:
            if listener.doc_id is not None:
                snapshot: Any = await self.get(listener.collection, listener.doc_id)
            else:
                snapshot = await self.query(listener.collection, listener.filters, listener.order)
        except Exception as exc:
            logger.exception("snapshot_failed collection=%s", listener.collection)
            if listener.on_error is not None:
                listener.on_error(exc)
            return
        if not listener.active:
            return
        try:
            listener.on_change(snapshot)
        except Exception:
            # Un listener defectuoso no debe romper la escritura que lo notificó
            logger.exception("listener_callback_failed collection=%s", listener.collection)


__all__ = [
    "ArrayUnion",
    "DocumentAlreadyExists",
    "DocumentNotFound",
    "DocumentStore",
    "FieldFilter",
    "OrderBy",
    "Record",
    "SERVER_TIMESTAMP",
    "Unsubscribe",
    "apply_query",
    "resolve_write",
    "utcnow",
]
# Fin del archivo app/shared/database/document_store.py
