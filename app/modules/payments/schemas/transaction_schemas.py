# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/transaction_schemas.py

Esquemas de entrada/salida para transacciones.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from app.modules.payments.enums import ContentKind, Currency, PaymentGateway, TransactionStatus
from app.modules.payments.models import Transaction


class CreateTransactionRequest(BaseModel):
    """Cuerpo de POST /payments/transactions (el pagador sale del token)."""

    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    currency: Currency
    content_id: str = Field(min_length=1, max_length=128)
    content_type: ContentKind
    content_title: str = Field(default="", max_length=256)
    payment_method: PaymentGateway
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("currency", mode="before")
    @classmethod
    def _upper_currency(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class CreateTransactionData(CreateTransactionRequest):
    """Datos completos para crear una transacción (incluye al pagador)."""

    user_id: str = Field(min_length=1)
    user_email: Optional[str] = None

    def to_record(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "userEmail": self.user_email,
            "amount": str(self.amount),
            "currency": self.currency.value,
            "contentId": self.content_id,
            "contentType": self.content_type.value,
            "contentTitle": self.content_title,
            "paymentMethod": self.payment_method.value,
            "metadata": dict(self.metadata),
        }


class CreateTransactionResponse(BaseModel):
    transaction_id: str


class TransactionOut(BaseModel):
    id: str
    user_id: str
    user_email: Optional[str] = None
    amount: Decimal
    currency: str
    content_id: str
    content_type: ContentKind
    content_title: str
    payment_method: PaymentGateway
    payment_status: TransactionStatus
    payment_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_model(cls, transaction: Transaction) -> "TransactionOut":
        return cls.model_validate(transaction.model_dump())


__all__ = [
    "CreateTransactionData",
    "CreateTransactionRequest",
    "CreateTransactionResponse",
    "TransactionOut",
]
