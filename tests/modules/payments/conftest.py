# -*- coding: utf-8 -*-
"""
tests/modules/payments/conftest.py

Dobles de prueba del módulo Payments:
- FakeBridge: navegador scriptado (overlay, formulario, tarjeta)
- FakeFunctions: funciones de backend con respuesta fija
- Repositorios sobre el almacén en memoria
"""

from decimal import Decimal
from typing import Any, Optional

import pytest

from app.modules.payments.enums import ContentKind, Currency, PaymentGateway
from app.modules.payments.exceptions import BackendFunctionError
from app.modules.payments.gateways import (
    CardConfirmation,
    CheckoutOverlay,
    GatewayRequest,
    HostedForm,
    OverlayOutcome,
)
from app.modules.payments.models import GatewayConfig
from app.modules.payments.repositories import GatewayConfigRepository, TransactionRepository
from app.modules.payments.schemas import CreateTransactionData
from app.modules.user_profile.repositories import ProfileRepository


class FakeBridge:
    def __init__(self) -> None:
        self.overlay_outcome = OverlayOutcome()
        self.card_error: Optional[str] = None
        self.overlays: list[tuple[str, CheckoutOverlay]] = []
        self.forms: list[tuple[str, HostedForm]] = []
        self.cards: list[tuple[str, CardConfirmation]] = []

    async def open_overlay(self, transaction_ref: str, overlay: CheckoutOverlay) -> OverlayOutcome:
        self.overlays.append((transaction_ref, overlay))
        return self.overlay_outcome

    async def submit_form(self, transaction_ref: str, form: HostedForm) -> None:
        self.forms.append((transaction_ref, form))

    async def confirm_card_payment(self, transaction_ref: str, confirmation: CardConfirmation) -> Optional[str]:
        self.cards.append((transaction_ref, confirmation))
        return self.card_error


class FakeFunctions:
    def __init__(self) -> None:
        self.response: dict[str, Any] = {
            "success": True,
            "clientSecret": "pi_123_secret_abc",
            "paymentIntentId": "pi_123",
        }
        self.error: Optional[BackendFunctionError] = None
        self.calls: list[tuple[str, dict[str, Any], Optional[str]]] = []

    async def call(self, name: str, payload, *, caller_id: Optional[str] = None) -> dict[str, Any]:
        self.calls.append((name, dict(payload), caller_id))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def bridge() -> FakeBridge:
    return FakeBridge()


@pytest.fixture
def functions() -> FakeFunctions:
    return FakeFunctions()


@pytest.fixture
def gateway_config(gateways_doc) -> GatewayConfig:
    return GatewayConfig.model_validate(gateways_doc)


@pytest.fixture
def gateway_request() -> GatewayRequest:
    return GatewayRequest(
        amount=Decimal("499.00"),
        currency="INR",
        transaction_ref="tx-001",
        customer_id="user-1",
        customer_email="viajero@example.com",
    )


@pytest.fixture
def transactions(store) -> TransactionRepository:
    return TransactionRepository(store)


@pytest.fixture
def config_repo(store) -> GatewayConfigRepository:
    return GatewayConfigRepository(store)


@pytest.fixture
def profiles(store) -> ProfileRepository:
    return ProfileRepository(store)


@pytest.fixture
def make_transaction_data():
    def _make(**overrides: Any) -> CreateTransactionData:
        data: dict[str, Any] = {
            "user_id": "user-1",
            "user_email": "viajero@example.com",
            "amount": Decimal("499.00"),
            "currency": Currency.INR,
            "content_id": "taj-mahal-360",
            "content_type": ContentKind.DESTINATION,
            "content_title": "Taj Mahal al amanecer",
            "payment_method": PaymentGateway.RAZORPAY,
        }
        data.update(overrides)
        return CreateTransactionData(**data)

    return _make
