# -*- coding: utf-8 -*-
"""
app/modules/payments/models/transaction_models.py

Modelo de la transacción tal como vive en la colección `transactions`.

Los campos se persisten en camelCase (userId, paymentStatus, ...);
el modelo expone snake_case en Python.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.modules.payments.enums import ContentKind, PaymentGateway, TransactionStatus

TRANSACTIONS_COLLECTION = "transactions"


class Transaction(BaseModel):
    """Intento de pago de un usuario por un contenido."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    user_id: str
    user_email: Optional[str] = None
    amount: Decimal
    currency: str
    content_id: str
    content_type: ContentKind
    content_title: str = ""
    payment_method: PaymentGateway
    payment_status: TransactionStatus
    payment_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def status(self) -> TransactionStatus:
        return self.payment_status

    @property
    def is_pending(self) -> bool:
        return self.payment_status == TransactionStatus.PENDING


__all__ = ["TRANSACTIONS_COLLECTION", "Transaction"]
