# -*- coding: utf-8 -*-
"""
tests/shared/database/test_memory_store.py

Contrato del almacén de documentos sobre el backend en memoria:
centinelas, consultas y suscripciones.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.shared.database import (
    SERVER_TIMESTAMP,
    ArrayUnion,
    DocumentAlreadyExists,
    DocumentNotFound,
    FieldFilter,
    InMemoryDocumentStore,
    OrderBy,
)


class SteppingClock:
    """Reloj determinista: avanza un segundo por lectura."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def clock():
    return SteppingClock(datetime(2026, 3, 1, tzinfo=timezone.utc))


@pytest.fixture
def mem_store(clock):
    return InMemoryDocumentStore(clock=clock)


async def test_create_assigns_id_and_resolves_server_timestamp(mem_store):
    doc_id = await mem_store.create("transactions", {"amount": "4.99", "createdAt": SERVER_TIMESTAMP})

    record = await mem_store.get("transactions", doc_id)
    assert record["id"] == doc_id
    assert record["amount"] == "4.99"
    assert record["createdAt"] == datetime(2026, 3, 1, 0, 0, 1, tzinfo=timezone.utc)


async def test_create_with_existing_id_fails(mem_store):
    await mem_store.create("users", {"email": "a@example.com"}, doc_id="u1")
    with pytest.raises(DocumentAlreadyExists):
        await mem_store.create("users", {"email": "b@example.com"}, doc_id="u1")


async def test_update_missing_document_raises(mem_store):
    with pytest.raises(DocumentNotFound) as exc:
        await mem_store.update("users", "ghost", {"subscription": "premium"})
    assert exc.value.collection == "users"
    assert exc.value.doc_id == "ghost"


async def test_set_merge_keeps_other_fields(mem_store):
    await mem_store.set("config", "paymentGateways", {"razorpay": {"isActive": True}, "updatedBy": "a"})
    await mem_store.set("config", "paymentGateways", {"updatedBy": "b"}, merge=True)

    record = await mem_store.get("config", "paymentGateways")
    assert record["razorpay"] == {"isActive": True}
    assert record["updatedBy"] == "b"


async def test_set_without_merge_replaces(mem_store):
    await mem_store.set("config", "paymentGateways", {"razorpay": {"isActive": True}})
    await mem_store.set("config", "paymentGateways", {"updatedBy": "b"})

    record = await mem_store.get("config", "paymentGateways")
    assert "razorpay" not in record


async def test_array_union_never_duplicates(mem_store):
    await mem_store.create("users", {"purchasedContent": ["taj-mahal"]}, doc_id="u1")
    await mem_store.update("users", "u1", {"purchasedContent": ArrayUnion(["taj-mahal", "varanasi"])})
    await mem_store.update("users", "u1", {"purchasedContent": ArrayUnion(["varanasi"])})

    record = await mem_store.get("users", "u1")
    assert record["purchasedContent"] == ["taj-mahal", "varanasi"]


async def test_reads_are_copies(mem_store):
    await mem_store.create("users", {"purchasedContent": []}, doc_id="u1")
    record = await mem_store.get("users", "u1")
    record["purchasedContent"].append("hack")

    assert (await mem_store.get("users", "u1"))["purchasedContent"] == []


async def test_query_filters_and_orders_newest_first(mem_store):
    for user in ("u1", "u2", "u1"):
        await mem_store.create("transactions", {"userId": user, "createdAt": SERVER_TIMESTAMP})
    await mem_store.create("transactions", {"userId": "u1"})  # sin createdAt

    records = await mem_store.query(
        "transactions",
        [FieldFilter("userId", "==", "u1")],
        OrderBy("createdAt", descending=True),
    )
    assert len(records) == 3
    assert records[0]["createdAt"] > records[1]["createdAt"]
    assert "createdAt" not in records[-1]


async def test_query_operators(mem_store):
    await mem_store.create("users", {"tier": "free", "tags": ["a"]}, doc_id="1")
    await mem_store.create("users", {"tier": "premium", "tags": ["b"]}, doc_id="2")

    assert [r["id"] for r in await mem_store.query("users", [FieldFilter("tier", "!=", "free")])] == ["2"]
    assert len(await mem_store.query("users", [FieldFilter("tier", "in", ["free", "premium"])])) == 2
    assert [r["id"] for r in await mem_store.query("users", [FieldFilter("tags", "array-contains", "a")])] == ["1"]
    with pytest.raises(ValueError):
        await mem_store.query("users", [FieldFilter("tier", ">", "x")])


async def test_subscribe_document_delivers_initial_snapshot_and_updates(mem_store):
    seen = []
    unsubscribe = await mem_store.subscribe_document("users", "u1", seen.append)
    assert seen == [None]

    await mem_store.set("users", "u1", {"subscription": "free"})
    await mem_store.update("users", "u1", {"subscription": "premium"})
    await mem_store.create("users", {"subscription": "free"}, doc_id="u2")  # otro documento

    assert [s["subscription"] for s in seen[1:]] == ["free", "premium"]

    unsubscribe()
    await mem_store.update("users", "u1", {"subscription": "free"})
    assert len(seen) == 3


async def test_subscribe_query_receives_filtered_lists(mem_store):
    seen = []
    await mem_store.subscribe("transactions", seen.append, filters=[FieldFilter("userId", "==", "u1")])
    await mem_store.create("transactions", {"userId": "u1"})
    await mem_store.create("transactions", {"userId": "u2"})

    assert [len(snapshot) for snapshot in seen] == [0, 1, 1]


async def test_failing_listener_does_not_break_writes(mem_store):
    def boom(_snapshot):
        raise RuntimeError("listener roto")

    await mem_store.subscribe_document("users", "u1", lambda s: None)
    await mem_store.subscribe_document("users", "u1", boom)  # falla también en el snapshot inicial
    await mem_store.set("users", "u1", {"email": "a@example.com"})

    assert (await mem_store.get("users", "u1"))["email"] == "a@example.com"


async def test_close_drops_listeners(mem_store):
    seen = []
    await mem_store.subscribe_document("users", "u1", seen.append)
    await mem_store.close()
    await mem_store.set("users", "u1", {"email": "a@example.com"})
    assert seen == [None]
