# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/__init__.py
"""

from .payment_schemas import (
    ENTITLEMENT_GRANT_FAILED_MESSAGE,
    AvailableGatewaysOut,
    ClientResultRequest,
    PaymentResult,
    ProcessPaymentRequest,
    ProcessPaymentResponse,
)
from .stats_schemas import PaymentStats, TopContentEntry
from .transaction_schemas import (
    CreateTransactionData,
    CreateTransactionRequest,
    CreateTransactionResponse,
    TransactionOut,
)

__all__ = [
    "ENTITLEMENT_GRANT_FAILED_MESSAGE",
    "AvailableGatewaysOut",
    "ClientResultRequest",
    "CreateTransactionData",
    "CreateTransactionRequest",
    "CreateTransactionResponse",
    "PaymentResult",
    "PaymentStats",
    "ProcessPaymentRequest",
    "ProcessPaymentResponse",
    "TopContentEntry",
    "TransactionOut",
]
