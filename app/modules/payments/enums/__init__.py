# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/__init__.py

Superficie de exportación de enums del módulo Payments.

Incluye:
- ConfirmationMode
- ContentKind
- Currency
- PaymentGateway
- TransactionStatus
"""

from .confirmation_mode_enum import ConfirmationMode
from .content_kind_enum import ContentKind
from .currency_enum import Currency, ZERO_DECIMAL_CURRENCIES
from .payment_gateway_enum import PaymentGateway
from .transaction_status_enum import ALLOWED_TRANSITIONS, TransactionStatus

__all__ = [
    "ALLOWED_TRANSITIONS",
    "ConfirmationMode",
    "ContentKind",
    "Currency",
    "PaymentGateway",
    "TransactionStatus",
    "ZERO_DECIMAL_CURRENCIES",
]

# Fin del archivo app/modules/payments/enums/__init__.py
