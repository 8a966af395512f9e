# -*- coding: utf-8 -*-
"""
app/modules/payments/gateways/registry.py

Despacho cerrado: PaymentGateway -> adaptador.
"""

from __future__ import annotations

from typing import Mapping, Optional

import httpx

from app.shared.config.settings_payments import PaymentsSettings
from app.modules.payments.enums import PaymentGateway
from .backend_functions import BackendFunctions
from .base import GatewayAdapter
from .cashfree_gateway import CashfreeGateway
from .client_bridge import ClientBridge
from .paytm_gateway import PaytmGateway
from .razorpay_gateway import RazorpayGateway
from .stripe_gateway import StripeGateway


class GatewayRegistry:
    def __init__(self, adapters: Mapping[PaymentGateway, GatewayAdapter]) -> None:
        missing = set(PaymentGateway) - set(adapters)
        if missing:
            raise ValueError(f"Missing gateway adapters: {sorted(g.value for g in missing)}")
        self._adapters = dict(adapters)

    def get(self, gateway: PaymentGateway) -> GatewayAdapter:
        return self._adapters[gateway]


def build_gateway_registry(
    *,
    http_client: httpx.AsyncClient,
    bridge: ClientBridge,
    functions: BackendFunctions,
    settings: Optional[PaymentsSettings] = None,
) -> GatewayRegistry:
    return GatewayRegistry(
        {
            PaymentGateway.RAZORPAY: RazorpayGateway(http_client, bridge, settings),
            PaymentGateway.CASHFREE: CashfreeGateway(http_client, bridge, settings),
            PaymentGateway.PAYTM: PaytmGateway(bridge, settings),
            PaymentGateway.STRIPE: StripeGateway(functions, bridge),
        }
    )


__all__ = ["GatewayRegistry", "build_gateway_registry"]
