# -*- coding: utf-8 -*-
"""
app/modules/payments/services/entitlement_service.py

Otorga acceso al contenido comprado. Solo se invoca con la transacción
ya escrita como completed.

- Siempre: purchasedContent ∪= {contentId}
- contentType premium: además subscription = premium
"""

from __future__ import annotations

import logging

from app.modules.payments.enums import ContentKind, TransactionStatus
from app.modules.payments.exceptions import EntitlementGrantError
from app.modules.payments.models import Transaction
from app.modules.user_profile.repositories import ProfileRepository

logger = logging.getLogger(__name__)


class EntitlementService:
    def __init__(self, profiles: ProfileRepository) -> None:
        self.profiles = profiles

    async def grant(self, transaction: Transaction) -> None:
        """
        Idempotente: repetirlo con la misma transacción no cambia el perfil.

        Raises:
            EntitlementGrantError: la transacción no está completed
            DocumentNotFound: el perfil del pagador no existe
        """
        if transaction.payment_status != TransactionStatus.COMPLETED:
            raise EntitlementGrantError(
                f"Transaction {transaction.id} is {transaction.payment_status.value}, not completed"
            )

        await self.profiles.add_purchased_content(transaction.user_id, transaction.content_id)
        if transaction.content_type == ContentKind.PREMIUM:
            await self.profiles.upgrade_to_premium(transaction.user_id)

        logger.info(
            "entitlement_granted tx=%s user=%s content=%s kind=%s",
            transaction.id,
            transaction.user_id,
            transaction.content_id,
            transaction.content_type.value,
        )


__all__ = ["EntitlementService"]
