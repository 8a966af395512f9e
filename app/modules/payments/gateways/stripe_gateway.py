# -*- coding: utf-8 -*-
"""
app/modules/payments/gateways/stripe_gateway.py

Stripe: PaymentIntent creado por función de backend + confirmación de
tarjeta en el navegador (Stripe.js con la publishable key).
"""

from __future__ import annotations

import logging

from app.modules.payments.enums import PaymentGateway
from app.modules.payments.exceptions import BackendFunctionError
from app.modules.payments.models import StripeCredentials
from app.modules.payments.services.stripe_intent_service import CREATE_STRIPE_PAYMENT_INTENT
from app.modules.payments.utils.money import format_amount
from .backend_functions import BackendFunctions
from .base import GatewayAdapter, GatewayRequest, GatewayResult
from .client_bridge import CardConfirmation, ClientBridge

logger = logging.getLogger(__name__)


class StripeGateway(GatewayAdapter):
    gateway = PaymentGateway.STRIPE

    def __init__(self, functions: BackendFunctions, bridge: ClientBridge) -> None:
        self._functions = functions
        self._bridge = bridge

    async def _attempt(self, request: GatewayRequest, credentials: StripeCredentials) -> GatewayResult:
        if not credentials.publishable_key or not credentials.secret_key:
            return GatewayResult.failure("Stripe configuration is incomplete")

        try:
            data = await self._functions.call(
                CREATE_STRIPE_PAYMENT_INTENT,
                {
                    "amount": format_amount(request.amount),
                    "currency": request.currency,
                    "transactionId": request.transaction_ref,
                },
                caller_id=request.customer_id,
            )
        except BackendFunctionError as exc:
            logger.warning("stripe_intent_error ref=%s code=%s", request.transaction_ref, exc.code)
            return GatewayResult.failure(exc.message or "Stripe payment failed")

        client_secret = data.get("clientSecret")
        if not data.get("success") or not client_secret:
            return GatewayResult.failure("Failed to create payment intent")

        error = await self._bridge.confirm_card_payment(
            request.transaction_ref,
            CardConfirmation(publishable_key=credentials.publishable_key, client_secret=client_secret),
        )
        if error:
            return GatewayResult.failure(error)
        return GatewayResult.ok(data.get("paymentIntentId"))


__all__ = ["StripeGateway"]
