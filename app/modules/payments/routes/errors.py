# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/errors.py

Traducción de excepciones del dominio a HTTPException.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from app.modules.payments.exceptions import (
    EntitlementGrantError,
    InvalidStatusTransition,
    PaymentsError,
    TransactionNotFound,
    TransactionValidationError,
    WebhookConfigurationError,
    WebhookSignatureError,
)

_STATUS_BY_ERROR: list[tuple[type[PaymentsError], int, str]] = [
    (TransactionNotFound, status.HTTP_404_NOT_FOUND, "transaction_not_found"),
    (InvalidStatusTransition, status.HTTP_409_CONFLICT, "invalid_status_transition"),
    (EntitlementGrantError, status.HTTP_409_CONFLICT, "entitlement_not_grantable"),
    (TransactionValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY, "invalid_transaction"),
    (WebhookSignatureError, status.HTTP_400_BAD_REQUEST, "invalid_signature"),
    (WebhookConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR, "webhook_not_configured"),
]


def to_http_exception(exc: PaymentsError) -> HTTPException:
    for error_type, status_code, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail={"error": code, "message": str(exc)})
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "payments_error", "message": str(exc)},
    )


def transaction_not_found(transaction_id: str) -> HTTPException:
    return to_http_exception(TransactionNotFound(transaction_id))


__all__ = ["to_http_exception", "transaction_not_found"]
