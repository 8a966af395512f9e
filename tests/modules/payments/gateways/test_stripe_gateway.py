# -*- coding: utf-8 -*-
"""
tests/modules/payments/gateways/test_stripe_gateway.py

Stripe: intent vía función de backend y confirmación de tarjeta en el cliente.
"""

import pytest

from app.modules.payments.exceptions import BackendFunctionError
from app.modules.payments.gateways.stripe_gateway import StripeGateway
from app.modules.payments.services.stripe_intent_service import CREATE_STRIPE_PAYMENT_INTENT


@pytest.fixture
def gateway(functions, bridge):
    return StripeGateway(functions, bridge)


async def test_success(gateway, functions, bridge, gateway_request, gateway_config):
    result = await gateway.attempt(gateway_request, gateway_config)

    assert result.success
    assert result.provider_payment_id == "pi_123"
    assert functions.calls == [
        (
            CREATE_STRIPE_PAYMENT_INTENT,
            {"amount": "499", "currency": "INR", "transactionId": "tx-001"},
            "user-1",
        )
    ]
    ref, confirmation = bridge.cards[0]
    assert ref == "tx-001"
    assert confirmation.publishable_key == "pk_test_123"
    assert confirmation.client_secret == "pi_123_secret_abc"


async def test_card_declined(gateway, bridge, gateway_request, gateway_config):
    bridge.card_error = "Your card was declined."
    result = await gateway.attempt(gateway_request, gateway_config)
    assert not result.success
    assert result.error == "Your card was declined."


async def test_backend_function_error_message(gateway, functions, bridge, gateway_request, gateway_config):
    functions.error = BackendFunctionError("failed-precondition", "Stripe secret key is not configured")
    result = await gateway.attempt(gateway_request, gateway_config)
    assert result.error == "Stripe secret key is not configured"
    assert bridge.cards == []


async def test_missing_client_secret(gateway, functions, bridge, gateway_request, gateway_config):
    functions.response = {"success": True}
    result = await gateway.attempt(gateway_request, gateway_config)
    assert result.error == "Failed to create payment intent"
    assert bridge.cards == []


@pytest.mark.parametrize("field", ["publishable_key", "secret_key"])
async def test_incomplete_configuration(gateway, functions, gateway_request, gateway_config, field):
    setattr(gateway_config.stripe, field, "")
    result = await gateway.attempt(gateway_request, gateway_config)
    assert result.error == "Stripe configuration is incomplete"
    assert functions.calls == []


async def test_inactive_stripe(gateway, functions, gateway_request, gateway_config):
    gateway_config.stripe.is_active = False
    result = await gateway.attempt(gateway_request, gateway_config)
    assert result.error == "Stripe is not configured or enabled"
    assert functions.calls == []
