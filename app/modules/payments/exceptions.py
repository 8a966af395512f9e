# -*- coding: utf-8 -*-
"""
app/modules/payments/exceptions.py

Excepciones del dominio de pagos.

Las rutas las traducen a HTTP (404/409/422/400/500); el coordinador de pagos
las convierte en resultados de fallo sin propagarlas.
"""

from __future__ import annotations

from typing import Optional


class PaymentsError(Exception):
    """Raíz de errores del módulo Payments."""


class TransactionNotFound(PaymentsError):
    def __init__(self, transaction_id: str):
        super().__init__(f"Transaction {transaction_id} not found")
        self.transaction_id = transaction_id


class InvalidStatusTransition(PaymentsError):
    def __init__(self, transaction_id: str, current: str, target: str):
        super().__init__(f"Transaction {transaction_id} cannot move from {current} to {target}")
        self.transaction_id = transaction_id
        self.current = current
        self.target = target


class TransactionValidationError(PaymentsError, ValueError):
    """Datos de creación de transacción inválidos."""


class SigningError(PaymentsError):
    """Fallo de una primitiva criptográfica al firmar un payload."""


class GatewayRequestError(PaymentsError):
    """Respuesta inválida o error HTTP de un proveedor de pago."""


class BackendFunctionError(PaymentsError):
    """
    Error de una función de backend de confianza.

    `code` sigue la taxonomía de funciones callable:
    unauthenticated | invalid-argument | failed-precondition | not-found | internal
    """

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class EntitlementGrantError(PaymentsError):
    """No fue posible otorgar el acceso tras un pago completado."""


class WebhookSignatureError(PaymentsError):
    """Firma de webhook ausente o inválida."""


class WebhookConfigurationError(PaymentsError):
    """Proveedor sin secretos suficientes para verificar webhooks."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Stripe is not properly configured")


__all__ = [
    "BackendFunctionError",
    "EntitlementGrantError",
    "GatewayRequestError",
    "InvalidStatusTransition",
    "PaymentsError",
    "SigningError",
    "TransactionNotFound",
    "TransactionValidationError",
    "WebhookConfigurationError",
    "WebhookSignatureError",
]
