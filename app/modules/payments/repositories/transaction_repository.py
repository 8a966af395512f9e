# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/transaction_repository.py

Repositorio de la colección `transactions`.

Responsabilidades:
- Alta en estado pending con timestamps del servidor
- Cambios de estado validados contra las transiciones permitidas
- Listados por usuario / globales (más reciente primero)
- Agregados para el panel de administración
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from app.shared.database import SERVER_TIMESTAMP, DocumentStore, FieldFilter, OrderBy
from app.shared.database.repository import BaseRepository
from app.modules.payments.enums import TransactionStatus
from app.modules.payments.exceptions import InvalidStatusTransition, TransactionNotFound
from app.modules.payments.models import TRANSACTIONS_COLLECTION, Transaction
from app.modules.payments.schemas import CreateTransactionData, PaymentStats
from app.modules.payments.services.stats_service import compute_payment_stats

logger = logging.getLogger(__name__)

NEWEST_FIRST = OrderBy("createdAt", descending=True)


class TransactionRepository(BaseRepository[Transaction]):
    collection = TRANSACTIONS_COLLECTION

    def __init__(self, store: DocumentStore) -> None:
        super().__init__(store, Transaction)

    # -----------------------------------------------------------
    # Alta
    # -----------------------------------------------------------
    async def create_transaction(self, data: CreateTransactionData) -> str:
        """Siempre nace pending y sin paymentId."""
        record = data.to_record()
        record.update(
            {
                "paymentStatus": TransactionStatus.PENDING.value,
                "createdAt": SERVER_TIMESTAMP,
                "updatedAt": SERVER_TIMESTAMP,
            }
        )
        transaction_id = await self.create(record)
        logger.info(
            "transaction_created id=%s user=%s method=%s amount=%s %s",
            transaction_id,
            data.user_id,
            data.payment_method.value,
            data.amount,
            data.currency.value,
        )
        return transaction_id

    # -----------------------------------------------------------
    # Cambios de estado
    # -----------------------------------------------------------
    async def update_status(
        self,
        transaction_id: str,
        status: TransactionStatus,
        provider_payment_id: Optional[str] = None,
        *,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> Transaction:
        """
        Aplica una transición de estado.

        Raises:
            TransactionNotFound: id inexistente
            InvalidStatusTransition: transición fuera de pending->completed|failed, completed->refunded
        """
        current = await self.get(transaction_id)
        if current is None:
            raise TransactionNotFound(transaction_id)
        if not current.payment_status.can_transition_to(status):
            raise InvalidStatusTransition(transaction_id, current.payment_status.value, status.value)

        patch: dict[str, Any] = {
            "paymentStatus": status.value,
            "updatedAt": SERVER_TIMESTAMP,
        }
        if provider_payment_id:
            patch["paymentId"] = provider_payment_id
        if metadata:
            patch["metadata"] = {**current.metadata, **metadata}

        await self.store.update(self.collection, transaction_id, patch)
        logger.info(
            "transaction_status id=%s %s->%s",
            transaction_id,
            current.payment_status.value,
            status.value,
        )
        updated = await self.get(transaction_id)
        if updated is None:
            raise TransactionNotFound(transaction_id)
        return updated

    # -----------------------------------------------------------
    # Listados
    # -----------------------------------------------------------
    async def list_by_user(self, user_id: str) -> list[Transaction]:
        return await self.list(filters=[FieldFilter("userId", "==", user_id)], order=NEWEST_FIRST)

    async def list_all(self) -> list[Transaction]:
        return await self.list(order=NEWEST_FIRST)

    async def aggregate_stats(self, *, now: Optional[datetime] = None) -> PaymentStats:
        return compute_payment_stats(await self.list_all(), now=now)


__all__ = ["TransactionRepository"]

# Fin del archivo app/modules/payments/repositories/transaction_repository.py
