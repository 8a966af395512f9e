# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/admin_routes.py

Rutas administrativas del módulo Payments (requieren claim admin).

Endpoints:
- GET  /payments/admin/transactions
- GET  /payments/admin/stats
- POST /payments/admin/transactions/{id}/refund
- POST /payments/admin/transactions/{id}/grant-entitlement
- GET  /payments/admin/gateways        → secretos enmascarados
- PUT  /payments/admin/gateways        → fusión por bloque
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.modules.auth import CurrentUser, require_admin
from app.modules.payments.dependencies import PaymentsRuntime, get_payments_runtime
from app.modules.payments.exceptions import (
    EntitlementGrantError,
    InvalidStatusTransition,
    TransactionNotFound,
)
from app.modules.payments.models import GatewayConfig
from app.modules.payments.schemas import PaymentResult, PaymentStats, TransactionOut
from .errors import to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["payments:admin"], dependencies=[Depends(require_admin)])


@router.get("/transactions", response_model=list[TransactionOut])
async def list_all_transactions(runtime: PaymentsRuntime = Depends(get_payments_runtime)):
    transactions = await runtime.transactions.list_all()
    return [TransactionOut.from_model(t) for t in transactions]


@router.get("/stats", response_model=PaymentStats)
async def payment_stats(runtime: PaymentsRuntime = Depends(get_payments_runtime)):
    return await runtime.transactions.aggregate_stats()


@router.post("/transactions/{transaction_id}/refund", response_model=TransactionOut)
async def refund_transaction(
    transaction_id: str,
    admin: CurrentUser = Depends(require_admin),
    runtime: PaymentsRuntime = Depends(get_payments_runtime),
):
    """completed -> refunded. El acceso otorgado se conserva."""
    try:
        updated = await runtime.coordinator.refund(transaction_id)
    except (TransactionNotFound, InvalidStatusTransition) as e:
        raise to_http_exception(e)
    logger.info("admin_refund tx=%s by=%s", transaction_id, admin.user_id)
    return TransactionOut.from_model(updated)


@router.post("/transactions/{transaction_id}/grant-entitlement", response_model=PaymentResult)
async def regrant_entitlement(
    transaction_id: str,
    admin: CurrentUser = Depends(require_admin),
    runtime: PaymentsRuntime = Depends(get_payments_runtime),
):
    """Reconciliación de un completed cuyo otorgamiento de acceso falló."""
    try:
        result = await runtime.coordinator.regrant_entitlement(transaction_id)
    except (TransactionNotFound, EntitlementGrantError) as e:
        raise to_http_exception(e)
    logger.info(
        "admin_regrant tx=%s by=%s granted=%s", transaction_id, admin.user_id, result.entitlement_granted
    )
    return result


@router.get("/gateways", response_model=GatewayConfig)
async def get_gateway_config(runtime: PaymentsRuntime = Depends(get_payments_runtime)):
    config = await runtime.gateway_config.load()
    return (config or GatewayConfig()).masked()


@router.put("/gateways", response_model=GatewayConfig)
async def update_gateway_config(
    payload: GatewayConfig,
    admin: CurrentUser = Depends(require_admin),
    runtime: PaymentsRuntime = Depends(get_payments_runtime),
):
    saved = await runtime.gateway_config.save(payload, updated_by=admin.user_id)
    return saved.masked()


# Fin del archivo app/modules/payments/routes/admin_routes.py
