# -*- coding: utf-8 -*-
"""
app/modules/payments/services/stripe_intent_service.py

Función de backend `createStripePaymentIntent`.

Corre del lado de confianza: lee la secret key del documento de
configuración, crea el PaymentIntent con el SDK de Stripe y devuelve
solo el client secret al navegador.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

import stripe
from fastapi.concurrency import run_in_threadpool

from app.shared.config.settings_payments import get_payments_settings
from app.modules.payments.exceptions import BackendFunctionError
from app.modules.payments.repositories import GatewayConfigRepository
from app.modules.payments.utils.money import to_minor_units

logger = logging.getLogger(__name__)

CREATE_STRIPE_PAYMENT_INTENT = "createStripePaymentIntent"


def _parse_amount(raw: Any) -> Decimal:
    try:
        amount = Decimal(str(raw))
    except (InvalidOperation, ValueError) as exc:
        raise BackendFunctionError("invalid-argument", "Invalid amount") from exc
    if not amount.is_finite() or amount <= 0:
        raise BackendFunctionError("invalid-argument", "Invalid amount")
    return amount


async def create_stripe_payment_intent(
    payload: Mapping[str, Any],
    caller_id: Optional[str],
    *,
    config_repo: GatewayConfigRepository,
) -> dict[str, Any]:
    """
    Crea un PaymentIntent para la transacción indicada.

    Payload: {amount, currency, transactionId}
    Returns: {success, clientSecret, paymentIntentId}

    Raises:
        BackendFunctionError: unauthenticated | invalid-argument | failed-precondition | internal
    """
    if not caller_id:
        raise BackendFunctionError("unauthenticated", "User must be authenticated")

    amount_raw = payload.get("amount")
    currency = payload.get("currency")
    transaction_id = payload.get("transactionId")
    if amount_raw in (None, "") or not currency or not transaction_id:
        raise BackendFunctionError(
            "invalid-argument",
            "Missing required fields: amount, currency, transactionId",
        )
    amount = _parse_amount(amount_raw)

    config = await config_repo.load()
    stripe_block = config.stripe if config is not None else None
    if stripe_block is None or not stripe_block.is_active:
        raise BackendFunctionError("failed-precondition", "Stripe is not configured or enabled")
    if not stripe_block.secret_key:
        raise BackendFunctionError("failed-precondition", "Stripe secret key is not configured")

    settings = get_payments_settings()
    try:
        intent = await run_in_threadpool(
            stripe.PaymentIntent.create,
            api_key=stripe_block.secret_key,
            amount=to_minor_units(amount, str(currency)),
            currency=str(currency).lower(),
            metadata={"transactionId": str(transaction_id), "userId": caller_id},
            payment_method_types=list(settings.stripe_payment_method_types),
        )
    except stripe.AuthenticationError as exc:
        logger.error("stripe_auth_failed tx=%s", transaction_id)
        raise BackendFunctionError(
            "invalid-argument",
            "Invalid Stripe secret key. Please check your configuration.",
        ) from exc
    except stripe.StripeError as exc:
        logger.exception("stripe_intent_failed tx=%s", transaction_id)
        message = getattr(exc, "user_message", None) or str(exc)
        raise BackendFunctionError("internal", f"Failed to create payment intent: {message}") from exc

    logger.info("stripe_intent_created tx=%s intent=%s", transaction_id, intent.id)
    return {
        "success": True,
        "clientSecret": intent.client_secret,
        "paymentIntentId": intent.id,
    }


__all__ = ["CREATE_STRIPE_PAYMENT_INTENT", "create_stripe_payment_intent"]
