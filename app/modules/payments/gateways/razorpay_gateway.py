# -*- coding: utf-8 -*-
"""
app/modules/payments/gateways/razorpay_gateway.py

Razorpay: orden creada en servidor + overlay de checkout en el navegador.

Flujo:
    1. POST /v1/orders (basic auth keyId:keySecret, monto en unidades mínimas)
    2. Overlay con checkout.js (opciones keyed por keyId y order_id)
    3. Resultado del callback: payment id + firma HMAC-SHA256(order|payment)
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Any, Optional

import httpx

from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings
from app.modules.payments.enums import PaymentGateway
from app.modules.payments.exceptions import GatewayRequestError
from app.modules.payments.models import RazorpayCredentials
from app.modules.payments.utils.money import to_minor_units
from .base import GatewayAdapter, GatewayRequest, GatewayResult
from .client_bridge import CheckoutOverlay, ClientBridge

logger = logging.getLogger(__name__)


def razorpay_signature(order_id: str, payment_id: str, key_secret: str) -> str:
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(key_secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class RazorpayGateway(GatewayAdapter):
    gateway = PaymentGateway.RAZORPAY

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        bridge: ClientBridge,
        settings: Optional[PaymentsSettings] = None,
    ) -> None:
        self._http = http_client
        self._bridge = bridge
        self._settings = settings or get_payments_settings()

    async def _attempt(self, request: GatewayRequest, credentials: RazorpayCredentials) -> GatewayResult:
        amount_minor = to_minor_units(request.amount, request.currency)
        try:
            order_id = await self._create_order(credentials, request, amount_minor)
        except (httpx.HTTPError, GatewayRequestError):
            logger.exception("razorpay_order_failed ref=%s", request.transaction_ref)
            return GatewayResult.failure("Failed to create Razorpay order")

        overlay = CheckoutOverlay(
            script_url=self._settings.razorpay_checkout_script_url,
            options=self._checkout_options(credentials, request, amount_minor, order_id),
        )
        outcome = await self._bridge.open_overlay(request.transaction_ref, overlay)

        if not outcome.payment_id:
            return GatewayResult.failure(outcome.error or "Payment failed")

        expected = razorpay_signature(order_id, outcome.payment_id, credentials.key_secret)
        if not outcome.signature or not hmac.compare_digest(expected, outcome.signature):
            logger.warning(
                "razorpay_signature_mismatch ref=%s payment=%s",
                request.transaction_ref,
                outcome.payment_id,
            )
            return GatewayResult.failure("Razorpay payment signature verification failed")

        return GatewayResult.ok(outcome.payment_id)

    async def _create_order(
        self,
        credentials: RazorpayCredentials,
        request: GatewayRequest,
        amount_minor: int,
    ) -> str:
        response = await self._http.post(
            f"{self._settings.razorpay_api_base_url}/orders",
            auth=(credentials.key_id, credentials.key_secret),
            json={
                "amount": amount_minor,
                "currency": request.currency,
                "receipt": request.transaction_ref,
                "notes": {"transactionId": request.transaction_ref},
            },
        )
        response.raise_for_status()
        order_id = response.json().get("id")
        if not order_id:
            raise GatewayRequestError("Razorpay did not return an order id")
        return order_id

    def _checkout_options(
        self,
        credentials: RazorpayCredentials,
        request: GatewayRequest,
        amount_minor: int,
        order_id: str,
    ) -> dict[str, Any]:
        options: dict[str, Any] = {
            "key": credentials.key_id,
            "amount": amount_minor,
            "currency": request.currency,
            "name": self._settings.razorpay_merchant_name,
            "description": self._settings.razorpay_description,
            "order_id": order_id,
            "notes": {"transactionId": request.transaction_ref},
            "theme": {"color": self._settings.razorpay_theme_color},
        }
        if request.customer_email:
            options["prefill"] = {"email": request.customer_email}
        return options


__all__ = ["RazorpayGateway", "razorpay_signature"]
