# -*- coding: utf-8 -*-
"""
app/modules/payments/gateways/paytm_gateway.py

Paytm: cuerpo canónico firmado + formulario POST (data, checksum).

Se firma el mapping del cuerpo (valores unidos con "|"); el campo `data`
lleva el mismo cuerpo como JSON compacto.
merchantId == "test" publica al endpoint de staging.
El éxito es optimista; el id del proveedor es la referencia de la transacción.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings
from app.modules.payments.enums import ConfirmationMode, PaymentGateway
from app.modules.payments.exceptions import SigningError
from app.modules.payments.models import PaytmCredentials
from app.modules.payments.utils.money import format_amount
from app.modules.payments.utils.paytm_checksum import generate_signature
from .base import GatewayAdapter, GatewayRequest, GatewayResult
from .client_bridge import ClientBridge, HostedForm

logger = logging.getLogger(__name__)


class PaytmGateway(GatewayAdapter):
    gateway = PaymentGateway.PAYTM

    def __init__(self, bridge: ClientBridge, settings: Optional[PaymentsSettings] = None) -> None:
        self._bridge = bridge
        self._settings = settings or get_payments_settings()

    def process_url(self, credentials: PaytmCredentials) -> str:
        if credentials.merchant_id == self._settings.sandbox_account_id:
            return self._settings.paytm_staging_url
        return self._settings.paytm_production_url

    def build_body(self, request: GatewayRequest, credentials: PaytmCredentials) -> dict[str, Any]:
        return {
            "requestType": "Payment",
            "mid": credentials.merchant_id,
            "websiteName": self._settings.paytm_website_name,
            "orderId": request.transaction_ref,
            "callbackUrl": self._settings.paytm_callback_url,
            "txnAmount": {
                "value": format_amount(request.amount),
                "currency": request.currency,
            },
            "userInfo": {"custId": request.customer_id or f"customer_{request.transaction_ref}"},
        }

    async def _attempt(self, request: GatewayRequest, credentials: PaytmCredentials) -> GatewayResult:
        body = self.build_body(request, credentials)
        data = json.dumps(body, separators=(",", ":"))
        try:
            checksum = generate_signature(body, credentials.merchant_key)
        except SigningError:
            logger.exception("paytm_signing_failed ref=%s", request.transaction_ref)
            return GatewayResult.failure("Paytm payment failed")

        form = HostedForm(action=self.process_url(credentials), fields={"data": data, "checksum": checksum})
        await self._bridge.submit_form(request.transaction_ref, form)
        return GatewayResult.ok(request.transaction_ref, confirmation=ConfirmationMode.OPTIMISTIC)


__all__ = ["PaytmGateway"]
