# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/transactions_routes.py

Rutas del comprador para transacciones.

Endpoints:
- POST /payments/transactions                         → crea (pending)
- GET  /payments/transactions                         → mis transacciones
- GET  /payments/transactions/{id}                    → detalle
- POST /payments/transactions/{id}/process            → intento de pago
- POST /payments/transactions/{id}/client-result      → resultado del navegador

El intento corre como tarea. Si la pasarela necesita al navegador
(overlay / tarjeta), la respuesta es `awaiting_client` con la acción a
ejecutar y el resultado final llega en la respuesta de client-result.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.modules.auth import CurrentUser, get_current_user
from app.modules.payments.dependencies import PaymentsRuntime, get_payments_runtime
from app.modules.payments.exceptions import TransactionValidationError
from app.modules.payments.facades.process_payment import process_payment
from app.modules.payments.gateways import ClientAction
from app.modules.payments.models import Transaction
from app.modules.payments.schemas import (
    ClientResultRequest,
    CreateTransactionData,
    CreateTransactionRequest,
    CreateTransactionResponse,
    PaymentResult,
    ProcessPaymentRequest,
    ProcessPaymentResponse,
    TransactionOut,
)
from .errors import to_http_exception, transaction_not_found

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["payments:transactions"])


async def _owned_transaction(
    runtime: PaymentsRuntime,
    transaction_id: str,
    user: CurrentUser,
) -> Transaction:
    transaction = await runtime.transactions.get(transaction_id)
    # Transacciones ajenas se reportan como inexistentes
    if transaction is None or (transaction.user_id != user.user_id and not user.is_admin):
        raise transaction_not_found(transaction_id)
    return transaction


def _response(transaction_id: str, result: PaymentResult, action: Optional[ClientAction] = None) -> ProcessPaymentResponse:
    return ProcessPaymentResponse(
        transaction_id=transaction_id,
        status="completed" if result.success else "failed",
        result=result,
        client_action=action.to_dict() if action is not None else None,
    )


@router.post("", response_model=CreateTransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: CreateTransactionRequest,
    user: CurrentUser = Depends(get_current_user),
    runtime: PaymentsRuntime = Depends(get_payments_runtime),
):
    """Crea la transacción en pending para el usuario autenticado."""
    data = CreateTransactionData(**payload.model_dump(), user_id=user.user_id, user_email=user.email)
    await runtime.profiles.ensure_profile(user.user_id, user.email)
    try:
        transaction_id = await runtime.coordinator.create_transaction(data)
    except TransactionValidationError as e:
        raise to_http_exception(e)
    return CreateTransactionResponse(transaction_id=transaction_id)


@router.get("", response_model=list[TransactionOut])
async def list_my_transactions(
    user: CurrentUser = Depends(get_current_user),
    runtime: PaymentsRuntime = Depends(get_payments_runtime),
):
    transactions = await runtime.transactions.list_by_user(user.user_id)
    return [TransactionOut.from_model(t) for t in transactions]


@router.get("/{transaction_id}", response_model=TransactionOut)
async def get_transaction(
    transaction_id: str,
    user: CurrentUser = Depends(get_current_user),
    runtime: PaymentsRuntime = Depends(get_payments_runtime),
):
    transaction = await _owned_transaction(runtime, transaction_id, user)
    return TransactionOut.from_model(transaction)


@router.post("/{transaction_id}/process", response_model=ProcessPaymentResponse)
async def process_transaction(
    transaction_id: str,
    payload: Optional[ProcessPaymentRequest] = None,
    user: CurrentUser = Depends(get_current_user),
    runtime: PaymentsRuntime = Depends(get_payments_runtime),
):
    """
    Ejecuta un intento de pago.

    - completed / failed: el intento terminó (formularios incluidos en client_action)
    - awaiting_client: el navegador debe ejecutar client_action y reportar
      el resultado en /client-result
    """
    transaction = await _owned_transaction(runtime, transaction_id, user)
    if transaction_id in runtime.pending:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "attempt_in_progress", "message": "A payment attempt is already awaiting the client"},
        )

    method = (payload.payment_method if payload else None) or transaction.payment_method.value
    attempt = asyncio.create_task(
        process_payment(
            transaction,
            method,
            coordinator=runtime.coordinator,
            config_repo=runtime.gateway_config,
        )
    )
    waiter = asyncio.create_task(runtime.bridge.wait_for_action(transaction_id))
    await asyncio.wait({attempt, waiter}, return_when=asyncio.FIRST_COMPLETED)

    if attempt.done():
        waiter.cancel()
        action = runtime.bridge.claim(transaction_id)
        runtime.bridge.discard(transaction_id)
        return _response(transaction_id, attempt.result(), action)

    action = runtime.bridge.claim(transaction_id)
    if action is None or not action.awaits_result:
        # Formulario publicado: el adaptador resuelve sin esperar al navegador
        return _response(transaction_id, await attempt, action)

    runtime.track(transaction_id, attempt)
    logger.info("payment_awaiting_client tx=%s kind=%s", transaction_id, action.kind.value)
    return ProcessPaymentResponse(
        transaction_id=transaction_id,
        status="awaiting_client",
        client_action=action.to_dict(),
    )


@router.post("/{transaction_id}/client-result", response_model=ProcessPaymentResponse)
async def report_client_result(
    transaction_id: str,
    payload: ClientResultRequest,
    user: CurrentUser = Depends(get_current_user),
    runtime: PaymentsRuntime = Depends(get_payments_runtime),
):
    """Entrega el resultado del overlay / confirmación y devuelve el desenlace."""
    await _owned_transaction(runtime, transaction_id, user)
    attempt = runtime.pending.get(transaction_id)
    if attempt is None or not runtime.bridge.resolve(transaction_id, payload.model_dump()):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "no_client_action", "message": "No client action is awaiting a result"},
        )
    result = await attempt
    return _response(transaction_id, result)


# Fin del archivo app/modules/payments/routes/transactions_routes.py
