# -*- coding: utf-8 -*-
"""
tests/conftest.py

Config global de tests del backend de la tienda VR.

- PYTHON_ENV=test ANTES de importar la app (settings cacheados)
- Reinicio de singletons de configuración entre tests
- App FastAPI con transporte HTTP simulado para las pasarelas
- Cliente httpx con ciclo de vida (asgi-lifespan)
- Helpers de tokens JWT y documento de pasarelas
"""

import copy
import hashlib
import hmac
import os
import time
from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import httpx
import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

# -----------------------------------------------------------------------------
# 0) Entorno mínimo antes de cualquier import de app.*
# -----------------------------------------------------------------------------
os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("DOCUMENT_STORE_BACKEND", "memory")

from app.shared.config import get_settings, reset_payments_settings  # noqa: E402
from app.shared.database import InMemoryDocumentStore  # noqa: E402
from app.modules.auth import create_access_token  # noqa: E402

_ENV_PREFIXES = ("PAYMENTS_", "PREVIEW_", "JWT_", "LOG_", "CORS_")


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Cada test ve settings recién construidos desde su propio entorno."""
    for key in list(os.environ):
        if key.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PYTHON_ENV", "test")
    get_settings.cache_clear()
    reset_payments_settings()
    yield
    get_settings.cache_clear()
    reset_payments_settings()


# -----------------------------------------------------------------------------
# 1) Datos de ejemplo
# -----------------------------------------------------------------------------
GATEWAYS_DOC: dict[str, Any] = {
    "razorpay": {"isActive": True, "keyId": "rzp_test_key", "keySecret": "rzp_test_secret"},
    "cashfree": {"isActive": True, "clientId": "test", "clientSecret": "cf_test_secret"},
    "paytm": {"isActive": True, "merchantId": "test", "merchantKey": "paytm_key_16char"},
    "stripe": {
        "isActive": True,
        "publishableKey": "pk_test_123",
        "secretKey": "sk_test_123",
        "webhookSecret": "whsec_test_secret",
    },
}


@pytest.fixture
def gateways_doc() -> dict[str, Any]:
    return copy.deepcopy(GATEWAYS_DOC)


class IncreasingClock:
    """Hora real UTC, estrictamente creciente (orden estable por createdAt)."""

    def __init__(self) -> None:
        self._last: Optional[datetime] = None

    def __call__(self) -> datetime:
        now = datetime.now(timezone.utc)
        if self._last is not None and now <= self._last:
            now = self._last + timedelta(microseconds=1)
        self._last = now
        return now


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(clock=IncreasingClock())


# -----------------------------------------------------------------------------
# 2) Proveedores HTTP simulados (Razorpay / Cashfree)
# -----------------------------------------------------------------------------
class ProviderStub:
    """Router mínimo para httpx.MockTransport: respuesta por sufijo de ruta."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, tuple[int, Any]] = {}
        self.raise_error: Optional[Exception] = None

    def respond(self, path_suffix: str, status_code: int = 200, json: Any = None) -> None:
        self._routes[path_suffix] = (status_code, json)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        for suffix, (status_code, body) in self._routes.items():
            if request.url.path.endswith(suffix):
                return httpx.Response(status_code, json=body)
        return httpx.Response(404, json={"message": "not stubbed"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def provider() -> ProviderStub:
    return ProviderStub()


@pytest.fixture
async def http_client(provider) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=provider.transport()) as client:
        yield client


# -----------------------------------------------------------------------------
# 2b) Firma de webhooks de Stripe (esquema t=...,v1=...)
# -----------------------------------------------------------------------------
@pytest.fixture
def sign_stripe() -> Callable[..., str]:
    def _sign(payload: str, secret: str = "whsec_test_secret", timestamp: Optional[int] = None) -> str:
        ts = int(time.time()) if timestamp is None else timestamp
        digest = hmac.new(secret.encode(), f"{ts}.{payload}".encode(), hashlib.sha256).hexdigest()
        return f"t={ts},v1={digest}"

    return _sign


# -----------------------------------------------------------------------------
# 3) Tokens
# -----------------------------------------------------------------------------
@pytest.fixture
def auth_headers() -> Callable[..., dict[str, str]]:
    def _make(user_id: str = "user-1", *, email: str = "viajero@example.com", admin: bool = False) -> dict[str, str]:
        token = create_access_token(user_id, email=email, admin=admin)
        return {"Authorization": f"Bearer {token}"}

    return _make


# -----------------------------------------------------------------------------
# 4) App FastAPI y cliente httpx (con ciclo de vida)
# -----------------------------------------------------------------------------
@pytest.fixture
def app(provider):
    """App nueva por test; las llamadas salientes van al ProviderStub."""
    from app.main import create_app

    return create_app(http_transport=provider.transport())


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client


@pytest.fixture
def seed_gateways(app, gateways_doc):
    """Escribe config/paymentGateways en el almacén de la app ya iniciada."""

    async def _seed(doc: Optional[dict[str, Any]] = None) -> None:
        await app.state.document_store.set("config", "paymentGateways", doc if doc is not None else gateways_doc)

    return _seed
