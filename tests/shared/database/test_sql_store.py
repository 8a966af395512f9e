# -*- coding: utf-8 -*-
"""
tests/shared/database/test_sql_store.py

Backend SQLAlchemy (aiosqlite en archivo temporal): persistencia JSON,
tipos no-JSON y suscripciones compartidas con el backend en memoria.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from app.shared.database import (
    SERVER_TIMESTAMP,
    ArrayUnion,
    DocumentAlreadyExists,
    DocumentNotFound,
    FieldFilter,
    OrderBy,
    SqlDocumentStore,
    build_document_store,
)
from app.shared.database.sql_store import decode_value, encode_value


@pytest.fixture
async def sql_store(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}")
    store = SqlDocumentStore(engine)
    await store.create_schema()
    yield store
    await store.close()


def test_encode_decode_non_json_types():
    when = datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc)
    encoded = encode_value({"createdAt": when, "amount": Decimal("4.99"), "items": [when]})

    assert encoded["amount"] == "4.99"
    assert encoded["createdAt"] == {"$datetime": when.isoformat()}
    assert decode_value(encoded) == {"createdAt": when, "amount": "4.99", "items": [when]}


async def test_create_get_roundtrip_with_timestamps(sql_store):
    doc_id = await sql_store.create(
        "transactions",
        {"userId": "u1", "amount": Decimal("250.00"), "createdAt": SERVER_TIMESTAMP, "metadata": {"a": 1}},
    )

    record = await sql_store.get("transactions", doc_id)
    assert record["id"] == doc_id
    assert record["amount"] == "250.00"
    assert isinstance(record["createdAt"], datetime)
    assert record["metadata"] == {"a": 1}
    assert await sql_store.get("transactions", "missing") is None


async def test_duplicate_and_missing_documents(sql_store):
    await sql_store.create("users", {"email": "a@example.com"}, doc_id="u1")
    with pytest.raises(DocumentAlreadyExists):
        await sql_store.create("users", {}, doc_id="u1")
    with pytest.raises(DocumentNotFound):
        await sql_store.update("users", "ghost", {"subscription": "premium"})


async def test_update_applies_array_union_and_merge(sql_store):
    await sql_store.set("users", "u1", {"subscription": "free", "purchasedContent": []})
    await sql_store.update("users", "u1", {"purchasedContent": ArrayUnion(["jaipur"])})
    await sql_store.update("users", "u1", {"purchasedContent": ArrayUnion(["jaipur", "goa"])})
    await sql_store.set("users", "u1", {"email": "a@example.com"}, merge=True)

    record = await sql_store.get("users", "u1")
    assert record["purchasedContent"] == ["jaipur", "goa"]
    assert record["subscription"] == "free"
    assert record["email"] == "a@example.com"


async def test_query_filters_in_python(sql_store):
    await sql_store.create("transactions", {"userId": "u1", "n": 1})
    await sql_store.create("transactions", {"userId": "u2", "n": 2})
    await sql_store.create("transactions", {"userId": "u1", "n": 3})
    await sql_store.create("users", {"userId": "u1"})

    records = await sql_store.query(
        "transactions", [FieldFilter("userId", "==", "u1")], OrderBy("n", descending=True)
    )
    assert [r["n"] for r in records] == [3, 1]


async def test_document_subscription(sql_store):
    seen = []
    unsubscribe = await sql_store.subscribe_document("users", "u1", seen.append)
    await sql_store.set("users", "u1", {"subscription": "premium"})
    unsubscribe()

    assert seen[0] is None
    assert seen[1]["subscription"] == "premium"


async def test_build_document_store_selects_backend(tmp_path, monkeypatch):
    from app.shared.config.settings_testing import EnvTestingSettings

    memory = await build_document_store(EnvTestingSettings())
    assert type(memory).__name__ == "InMemoryDocumentStore"

    monkeypatch.setenv("DOCUMENT_STORE_BACKEND", "sql")
    monkeypatch.setenv("DB_URL", f"sqlite+aiosqlite:///{tmp_path / 'built.db'}")
    sql_settings = EnvTestingSettings()
    sql = await build_document_store(sql_settings)
    try:
        assert isinstance(sql, SqlDocumentStore)
        await sql.set("config", "paymentGateways", {"paytm": {"isActive": False}})
        assert (await sql.get("config", "paymentGateways"))["paytm"] == {"isActive": False}
    finally:
        await sql.close()
