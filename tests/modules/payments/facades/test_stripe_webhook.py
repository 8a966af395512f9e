# -*- coding: utf-8 -*-
"""
tests/modules/payments/facades/test_stripe_webhook.py

Webhook de Stripe: firma, eventos y liquidación de transacciones pending.
"""

import json
import time

import pytest

from app.modules.payments.enums import PaymentGateway, TransactionStatus
from app.modules.payments.exceptions import WebhookConfigurationError, WebhookSignatureError
from app.modules.payments.facades.webhooks import WebhookOutcome, handle_stripe_webhook
from app.modules.payments.gateways import build_gateway_registry
from app.modules.payments.metrics.exporters.prometheus_exporter import registry as metrics_registry
from app.modules.payments.services.entitlement_service import EntitlementService
from app.modules.payments.services.payment_coordinator import PaymentCoordinator


def _event(event_type, transaction_id, *, intent_id="pi_777", error=None):
    intent = {"id": intent_id, "object": "payment_intent", "metadata": {"transactionId": transaction_id}}
    if error:
        intent["last_payment_error"] = {"message": error}
    return json.dumps({"id": "evt_1", "type": event_type, "data": {"object": intent}})


@pytest.fixture
def coordinator(transactions, profiles, http_client, bridge, functions):
    registry = build_gateway_registry(http_client=http_client, bridge=bridge, functions=functions)
    return PaymentCoordinator(transactions, registry, EntitlementService(profiles))


@pytest.fixture
async def configured(store, gateways_doc):
    await store.set("config", "paymentGateways", gateways_doc)


@pytest.fixture
async def stripe_tx(transactions, profiles, make_transaction_data):
    await profiles.ensure_profile("user-1")
    return await transactions.create_transaction(make_transaction_data(payment_method=PaymentGateway.STRIPE))


@pytest.fixture
def deliver(config_repo, coordinator):
    async def _deliver(payload, header):
        return await handle_stripe_webhook(
            payload.encode(), header, config_repo=config_repo, coordinator=coordinator
        )

    return _deliver


async def test_succeeded_event_completes_and_grants(configured, stripe_tx, deliver, sign_stripe, transactions, profiles):
    payload = _event("payment_intent.succeeded", stripe_tx)
    before = metrics_registry.get_sample_value(
        "payments_webhook_outcome_total", {"provider": "stripe", "outcome": "settled"}
    ) or 0.0

    assert await deliver(payload, sign_stripe(payload)) == WebhookOutcome.SETTLED

    tx = await transactions.get(stripe_tx)
    assert tx.payment_status == TransactionStatus.COMPLETED
    assert tx.payment_id == "pi_777"
    assert (await profiles.get("user-1")).has_access_to("taj-mahal-360")
    assert metrics_registry.get_sample_value(
        "payments_webhook_outcome_total", {"provider": "stripe", "outcome": "settled"}
    ) == before + 1


async def test_repeated_delivery_is_ignored(configured, stripe_tx, deliver, sign_stripe):
    payload = _event("payment_intent.succeeded", stripe_tx)
    await deliver(payload, sign_stripe(payload))
    assert await deliver(payload, sign_stripe(payload)) == WebhookOutcome.IGNORED


async def test_failed_event_records_reason(configured, stripe_tx, deliver, sign_stripe, transactions):
    payload = _event("payment_intent.payment_failed", stripe_tx, error="Your card has insufficient funds.")
    assert await deliver(payload, sign_stripe(payload)) == WebhookOutcome.SETTLED

    tx = await transactions.get(stripe_tx)
    assert tx.payment_status == TransactionStatus.FAILED
    assert tx.metadata["failureReason"] == "Your card has insufficient funds."


@pytest.mark.parametrize(
    "payload",
    [
        _event("charge.refunded", "tx-x"),
        json.dumps({"type": "payment_intent.succeeded", "data": {"object": {"id": "pi_1", "metadata": {}}}}),
        _event("payment_intent.succeeded", "unknown-tx"),
    ],
)
async def test_unrelated_events_are_ignored(configured, deliver, sign_stripe, payload):
    assert await deliver(payload, sign_stripe(payload)) == WebhookOutcome.IGNORED


async def test_signature_checks(configured, stripe_tx, deliver, sign_stripe, transactions):
    payload = _event("payment_intent.succeeded", stripe_tx)

    with pytest.raises(WebhookSignatureError, match="Missing Stripe-Signature header"):
        await deliver(payload, None)
    with pytest.raises(WebhookSignatureError, match="Invalid Stripe signature"):
        await deliver(payload, sign_stripe(payload, secret="whsec_other"))
    with pytest.raises(WebhookSignatureError, match="Invalid Stripe signature"):
        await deliver(payload, sign_stripe(payload, timestamp=int(time.time()) - 3600))
    with pytest.raises(WebhookSignatureError, match="Invalid Stripe signature"):
        await deliver(payload, sign_stripe(payload.replace("pi_777", "pi_888")))

    assert (await transactions.get(stripe_tx)).payment_status == TransactionStatus.PENDING


async def test_signed_non_json_body(configured, deliver, sign_stripe):
    with pytest.raises(WebhookSignatureError, match="Invalid webhook payload"):
        await deliver("not-json", sign_stripe("not-json"))


@pytest.mark.parametrize("field", ["webhookSecret", "secretKey", "isActive"])
async def test_requires_configured_stripe(store, gateways_doc, deliver, sign_stripe, field):
    gateways_doc["stripe"][field] = False if field == "isActive" else ""
    await store.set("config", "paymentGateways", gateways_doc)

    with pytest.raises(WebhookConfigurationError):
        await deliver("{}", sign_stripe("{}"))


async def test_missing_config_document(deliver, sign_stripe):
    with pytest.raises(WebhookConfigurationError):
        await deliver("{}", sign_stripe("{}"))
