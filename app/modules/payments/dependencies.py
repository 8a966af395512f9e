# -*- coding: utf-8 -*-
"""
app/modules/payments/dependencies.py

Ensamblado del runtime de pagos y dependencias FastAPI.

El runtime se construye una vez en el lifespan (app.state.payments) y
comparte el almacén, el cliente HTTP y el puente con el navegador.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx
from fastapi import Request

from app.shared.config.settings_payments import PaymentsSettings
from app.shared.database import DocumentStore
from app.modules.user_profile.repositories import ProfileRepository
from .gateways import CallbackClientBridge, build_backend_functions, build_gateway_registry
from .gateways.backend_functions import LocalBackendFunctions
from .repositories import GatewayConfigRepository, TransactionRepository
from .schemas import PaymentResult
from .services.entitlement_service import EntitlementService
from .services.payment_coordinator import PaymentCoordinator

logger = logging.getLogger(__name__)


@dataclass
class PaymentsRuntime:
    store: DocumentStore
    transactions: TransactionRepository
    gateway_config: GatewayConfigRepository
    profiles: ProfileRepository
    bridge: CallbackClientBridge
    functions: LocalBackendFunctions
    coordinator: PaymentCoordinator
    # Intentos que esperan al navegador (overlay / tarjeta), por transacción
    pending: dict[str, "asyncio.Task[PaymentResult]"] = field(default_factory=dict)

    def track(self, transaction_id: str, task: "asyncio.Task[PaymentResult]") -> None:
        self.pending[transaction_id] = task
        task.add_done_callback(lambda _t: self.pending.pop(transaction_id, None))

    async def aclose(self) -> None:
        tasks = list(self.pending.values())
        for transaction_id in list(self.pending):
            self.bridge.discard(transaction_id)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("payments_runtime_closed cancelled=%d", len(tasks))


def build_payments_runtime(
    store: DocumentStore,
    http_client: httpx.AsyncClient,
    settings: Optional[PaymentsSettings] = None,
) -> PaymentsRuntime:
    transactions = TransactionRepository(store)
    gateway_config = GatewayConfigRepository(store)
    profiles = ProfileRepository(store)
    bridge = CallbackClientBridge()
    functions = build_backend_functions(gateway_config)
    registry = build_gateway_registry(
        http_client=http_client,
        bridge=bridge,
        functions=functions,
        settings=settings,
    )
    coordinator = PaymentCoordinator(transactions, registry, EntitlementService(profiles))
    return PaymentsRuntime(
        store=store,
        transactions=transactions,
        gateway_config=gateway_config,
        profiles=profiles,
        bridge=bridge,
        functions=functions,
        coordinator=coordinator,
    )


# ---------------------------------------------------------------------------- #
# Dependencias
# ---------------------------------------------------------------------------- #
def get_payments_runtime(request: Request) -> PaymentsRuntime:
    return request.app.state.payments


def get_transaction_repository(request: Request) -> TransactionRepository:
    return get_payments_runtime(request).transactions


def get_gateway_config_repository(request: Request) -> GatewayConfigRepository:
    return get_payments_runtime(request).gateway_config


def get_coordinator(request: Request) -> PaymentCoordinator:
    return get_payments_runtime(request).coordinator


__all__ = [
    "PaymentsRuntime",
    "build_payments_runtime",
    "get_coordinator",
    "get_gateway_config_repository",
    "get_payments_runtime",
    "get_transaction_repository",
]
