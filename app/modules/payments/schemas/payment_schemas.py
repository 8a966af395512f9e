# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/payment_schemas.py

Resultado de un intento de pago y mensajes del puente con el cliente.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, computed_field

from app.modules.payments.enums import ConfirmationMode

ENTITLEMENT_GRANT_FAILED_MESSAGE = "Payment succeeded but account update failed. Please contact support."


class PaymentResult(BaseModel):
    """
    Resultado devuelto por el coordinador. Nunca se lanza: los errores
    viajan en `error`.

    - success=True, entitlement_granted=False => requiere reconciliación
    """

    success: bool
    provider_payment_id: Optional[str] = None
    error: Optional[str] = None
    confirmation: Optional[ConfirmationMode] = None
    entitlement_granted: bool = False

    @computed_field  # type: ignore[misc]
    @property
    def requires_reconciliation(self) -> bool:
        return self.success and not self.entitlement_granted

    @classmethod
    def failure(cls, error: str) -> "PaymentResult":
        return cls(success=False, error=error)


class ProcessPaymentRequest(BaseModel):
    """Si no se indica, se usa la pasarela elegida al crear la transacción."""

    payment_method: Optional[str] = None


class ClientResultRequest(BaseModel):
    """Resultado que el navegador reporta tras overlay / confirmación de tarjeta."""

    payment_id: Optional[str] = None
    order_id: Optional[str] = None
    signature: Optional[str] = None
    error: Optional[str] = None


class ProcessPaymentResponse(BaseModel):
    transaction_id: str
    status: Literal["completed", "failed", "awaiting_client"]
    result: Optional[PaymentResult] = None
    client_action: Optional[dict[str, Any]] = None


class AvailableGatewaysOut(BaseModel):
    gateways: list[str] = Field(default_factory=list)


__all__ = [
    "ENTITLEMENT_GRANT_FAILED_MESSAGE",
    "AvailableGatewaysOut",
    "ClientResultRequest",
    "PaymentResult",
    "ProcessPaymentRequest",
    "ProcessPaymentResponse",
]
