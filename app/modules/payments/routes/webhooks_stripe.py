# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/webhooks_stripe.py

POST /payments/webhooks/stripe

- Lee el cuerpo crudo (la firma se calcula sobre los bytes recibidos)
- Verifica Stripe-Signature con el webhookSecret configurado
- 200 para eventos aplicados o ignorados; 400 firma inválida
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from app.modules.payments.dependencies import PaymentsRuntime, get_payments_runtime
from app.modules.payments.exceptions import WebhookConfigurationError, WebhookSignatureError
from app.modules.payments.facades.webhooks import handle_stripe_webhook
from .errors import to_http_exception

router = APIRouter(prefix="/webhooks", tags=["payments:webhooks"])


@router.post("/stripe")
async def stripe_webhook(
    request: Request,
    runtime: PaymentsRuntime = Depends(get_payments_runtime),
):
    raw_body = await request.body()
    try:
        outcome = await handle_stripe_webhook(
            raw_body,
            request.headers.get("stripe-signature"),
            config_repo=runtime.gateway_config,
            coordinator=runtime.coordinator,
        )
    except (WebhookSignatureError, WebhookConfigurationError) as e:
        raise to_http_exception(e)
    return {"received": True, "outcome": outcome.value}


# Fin del archivo app/modules/payments/routes/webhooks_stripe.py
