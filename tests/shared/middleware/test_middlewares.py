# -*- coding: utf-8 -*-
"""
tests/shared/middleware/test_middlewares.py

JSON 500 con request_id y log de requests con id de transacción.
"""

import logging

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.shared.middleware import JSONExceptionMiddleware, RequestLoggingMiddleware
from app.shared.middleware.request_logging import transaction_id_from_path


@pytest.fixture
def mini_app():
    application = FastAPI()
    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(JSONExceptionMiddleware)

    @application.get("/boom")
    async def boom():
        raise RuntimeError("kaput")

    @application.get("/payments/transactions/{tx_id}")
    async def tx(tx_id: str):
        return {"id": tx_id}

    @application.get("/health")
    async def health():
        return {"status": "ok"}

    return application


@pytest.fixture
async def client(mini_app):
    transport = ASGITransport(app=mini_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


async def test_unhandled_exception_is_json(client):
    resp = await client.get("/boom", headers={"X-Request-ID": "req-123"})

    assert resp.status_code == 500
    assert resp.headers["x-request-id"] == "req-123"
    assert resp.json() == {
        "detail": {"error_code": "INTERNAL_SERVER_ERROR", "message": "Internal server error", "request_id": "req-123"}
    }


async def test_request_log_carries_transaction_id(client, caplog):
    caplog.set_level(logging.INFO, logger="app.shared.middleware.request_logging")

    await client.get("/payments/transactions/tx-42")
    await client.get("/health")

    messages = [r.getMessage() for r in caplog.records if r.name == "app.shared.middleware.request_logging"]
    assert len(messages) == 1
    assert "path=/payments/transactions/tx-42 status=200" in messages[0]
    assert messages[0].endswith("tx=tx-42")


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/payments/transactions/abc", "abc"),
        ("/payments/transactions/abc/process", "abc"),
        ("/payments/admin/transactions/xyz/refund", "xyz"),
        ("/payments/transactions", None),
        ("/profile/me", None),
    ],
)
def test_transaction_id_from_path(path, expected):
    assert transaction_id_from_path(path) == expected
