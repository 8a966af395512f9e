# -*- coding: utf-8 -*-
"""
app/modules/payments/models/__init__.py

Modelos de documentos del módulo Payments.
"""

from .gateway_config_models import (
    CONFIG_COLLECTION,
    GATEWAY_CONFIG_DOC_ID,
    MASK,
    CashfreeCredentials,
    GatewayConfig,
    GatewayCredentials,
    PaytmCredentials,
    RazorpayCredentials,
    StripeCredentials,
)
from .transaction_models import TRANSACTIONS_COLLECTION, Transaction

__all__ = [
    "CONFIG_COLLECTION",
    "GATEWAY_CONFIG_DOC_ID",
    "MASK",
    "TRANSACTIONS_COLLECTION",
    "CashfreeCredentials",
    "GatewayConfig",
    "GatewayCredentials",
    "PaytmCredentials",
    "RazorpayCredentials",
    "StripeCredentials",
    "Transaction",
]
