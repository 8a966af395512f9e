# -*- coding: utf-8 -*-
"""
app/modules/payments/gateways/cashfree_gateway.py

Cashfree: sesión de pago hospedada + formulario POST auto-enviado.

El éxito es optimista: se reporta al publicar el formulario, sin
confirmación del proveedor. clientId == "test" usa el sandbox.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings
from app.modules.payments.enums import ConfirmationMode, PaymentGateway
from app.modules.payments.exceptions import GatewayRequestError
from app.modules.payments.models import CashfreeCredentials
from .base import GatewayAdapter, GatewayRequest, GatewayResult
from .client_bridge import ClientBridge, HostedForm

logger = logging.getLogger(__name__)


class CashfreeGateway(GatewayAdapter):
    gateway = PaymentGateway.CASHFREE

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        bridge: ClientBridge,
        settings: Optional[PaymentsSettings] = None,
    ) -> None:
        self._http = http_client
        self._bridge = bridge
        self._settings = settings or get_payments_settings()

    def base_url(self, credentials: CashfreeCredentials) -> str:
        if credentials.client_id == self._settings.sandbox_account_id:
            return self._settings.cashfree_sandbox_base_url
        return self._settings.cashfree_production_base_url

    async def _attempt(self, request: GatewayRequest, credentials: CashfreeCredentials) -> GatewayResult:
        base_url = self.base_url(credentials)
        try:
            session_id = await self._create_session(base_url, credentials, request)
        except GatewayRequestError as exc:
            logger.warning("cashfree_session_rejected ref=%s error=%s", request.transaction_ref, exc)
            return GatewayResult.failure(str(exc) or "Cashfree payment failed")
        except httpx.HTTPError:
            logger.exception("cashfree_session_failed ref=%s", request.transaction_ref)
            return GatewayResult.failure("Cashfree payment failed")

        form = HostedForm(
            action=f"{base_url}/orders/sessions",
            fields={"payment_session_id": session_id},
        )
        await self._bridge.submit_form(request.transaction_ref, form)
        return GatewayResult.ok(session_id, confirmation=ConfirmationMode.OPTIMISTIC)

    async def _create_session(
        self,
        base_url: str,
        credentials: CashfreeCredentials,
        request: GatewayRequest,
    ) -> str:
        customer_id = request.customer_id or f"customer_{request.transaction_ref}"
        body = {
            "order_id": request.transaction_ref,
            "order_amount": float(request.amount),
            "order_currency": request.currency,
            "customer_details": {
                "customer_id": customer_id,
                "customer_email": request.customer_email or "",
                "customer_phone": self._settings.cashfree_default_customer_phone,
            },
        }
        response = await self._http.post(
            f"{base_url}/orders",
            json=body,
            headers={
                "x-client-id": credentials.client_id,
                "x-client-secret": credentials.client_secret,
                "x-api-version": self._settings.cashfree_api_version,
            },
        )
        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = {}
        if response.is_error:
            raise GatewayRequestError(data.get("message") or "Cashfree payment failed")
        session_id = data.get("payment_session_id")
        if not session_id:
            raise GatewayRequestError("Cashfree did not return a payment session")
        return session_id


__all__ = ["CashfreeGateway"]
