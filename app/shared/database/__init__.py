# -*- coding: utf-8 -*-
"""
app/shared/database/__init__.py

Almacén de documentos: contrato, backends y construcción por configuración.
"""

from .document_store import (
    SERVER_TIMESTAMP,
    ArrayUnion,
    DocumentAlreadyExists,
    DocumentNotFound,
    DocumentStore,
    FieldFilter,
    OrderBy,
    Record,
    Unsubscribe,
)
from .memory_store import InMemoryDocumentStore
from .sql_store import SqlDocumentStore
from .database import build_document_store, get_document_store

__all__ = [
    "SERVER_TIMESTAMP",
    "ArrayUnion",
    "DocumentAlreadyExists",
    "DocumentNotFound",
    "DocumentStore",
    "FieldFilter",
    "InMemoryDocumentStore",
    "OrderBy",
    "Record",
    "SqlDocumentStore",
    "Unsubscribe",
    "build_document_store",
    "get_document_store",
]
