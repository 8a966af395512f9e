# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/stripe_webhook.py

Webhook de Stripe: confirmación fuera de banda de PaymentIntents.

- Requiere bloque stripe activo con secretKey y webhookSecret
- Firma verificada con el SDK de Stripe (header Stripe-Signature)
- payment_intent.succeeded      -> completed + acceso
- payment_intent.payment_failed -> failed
- Otros eventos / sin transactionId -> ignorados
"""

from __future__ import annotations

import json
import logging
from enum import StrEnum
from typing import Any, Optional

import stripe

from app.shared.config.settings_payments import get_payments_settings
from app.modules.payments.exceptions import (
    TransactionNotFound,
    WebhookConfigurationError,
    WebhookSignatureError,
)
from app.modules.payments.metrics.exporters.prometheus_exporter import observe_webhook_outcome
from app.modules.payments.repositories import GatewayConfigRepository
from app.modules.payments.services.payment_coordinator import PaymentCoordinator

logger = logging.getLogger(__name__)

PROVIDER = "stripe"
EVENT_SUCCEEDED = "payment_intent.succeeded"
EVENT_FAILED = "payment_intent.payment_failed"


class WebhookOutcome(StrEnum):
    SETTLED = "settled"
    IGNORED = "ignored"


async def _webhook_secret(config_repo: GatewayConfigRepository) -> str:
    config = await config_repo.load()
    block = config.stripe if config is not None else None
    if block is None or not block.is_active or not block.secret_key or not block.webhook_secret:
        raise WebhookConfigurationError()
    return block.webhook_secret


def verify_event(raw_body: bytes, signature_header: Optional[str], secret: str) -> dict[str, Any]:
    """
    Verifica la firma y devuelve el evento como dict.

    Raises:
        WebhookSignatureError
    """
    if not signature_header:
        raise WebhookSignatureError("Missing Stripe-Signature header")
    try:
        payload = raw_body.decode("utf-8")
        stripe.WebhookSignature.verify_header(
            payload,
            signature_header,
            secret,
            tolerance=get_payments_settings().stripe_webhook_tolerance_seconds,
        )
        return json.loads(payload)
    except stripe.SignatureVerificationError as exc:
        raise WebhookSignatureError("Invalid Stripe signature") from exc
    except (UnicodeDecodeError, ValueError) as exc:
        raise WebhookSignatureError("Invalid webhook payload") from exc


async def handle_stripe_webhook(
    raw_body: bytes,
    signature_header: Optional[str],
    *,
    config_repo: GatewayConfigRepository,
    coordinator: PaymentCoordinator,
) -> WebhookOutcome:
    """
    Raises:
        WebhookConfigurationError: Stripe sin secretos en la configuración
        WebhookSignatureError: firma ausente o inválida
    """
    secret = await _webhook_secret(config_repo)
    try:
        event = verify_event(raw_body, signature_header, secret)
    except WebhookSignatureError:
        observe_webhook_outcome(PROVIDER, "rejected")
        logger.warning("stripe_webhook_rejected")
        raise

    event_type = event.get("type")
    intent = (event.get("data") or {}).get("object") or {}
    transaction_id = (intent.get("metadata") or {}).get("transactionId")

    if event_type not in (EVENT_SUCCEEDED, EVENT_FAILED) or not transaction_id:
        logger.info("stripe_webhook_ignored type=%s", event_type)
        observe_webhook_outcome(PROVIDER, WebhookOutcome.IGNORED.value)
        return WebhookOutcome.IGNORED

    succeeded = event_type == EVENT_SUCCEEDED
    error = None
    if not succeeded:
        error = (intent.get("last_payment_error") or {}).get("message") or "Stripe payment failed"

    try:
        result = await coordinator.confirm_from_webhook(
            transaction_id,
            succeeded=succeeded,
            provider_payment_id=intent.get("id"),
            error=error,
        )
    except TransactionNotFound:
        logger.warning("stripe_webhook_unknown_transaction tx=%s", transaction_id)
        observe_webhook_outcome(PROVIDER, WebhookOutcome.IGNORED.value)
        return WebhookOutcome.IGNORED

    outcome = WebhookOutcome.IGNORED if result is None else WebhookOutcome.SETTLED
    observe_webhook_outcome(PROVIDER, outcome.value)
    logger.info("stripe_webhook_%s type=%s tx=%s", outcome.value, event_type, transaction_id)
    return outcome


__all__ = ["WebhookOutcome", "handle_stripe_webhook", "verify_event"]
