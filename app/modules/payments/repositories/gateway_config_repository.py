# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/gateway_config_repository.py

Acceso al documento único `config/paymentGateways`.
Se lee en cada intento de pago; no se cachea.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from app.shared.database import SERVER_TIMESTAMP, DocumentStore, Record, Unsubscribe
from app.modules.payments.enums import PaymentGateway
from app.modules.payments.models import CONFIG_COLLECTION, GATEWAY_CONFIG_DOC_ID, MASK, GatewayConfig

logger = logging.getLogger(__name__)


class GatewayConfigRepository:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def load(self) -> Optional[GatewayConfig]:
        record = await self.store.get(CONFIG_COLLECTION, GATEWAY_CONFIG_DOC_ID)
        if record is None:
            return None
        return GatewayConfig.model_validate(record)

    async def save(self, config: GatewayConfig, *, updated_by: str) -> GatewayConfig:
        """
        Fusiona campo a campo los bloques enviados con el documento existente.
        Los secretos enmascarados (respuesta de admin reenviada) se ignoran.
        """
        existing = await self.store.get(CONFIG_COLLECTION, GATEWAY_CONFIG_DOC_ID) or {}
        data: dict = {}
        for gateway in PaymentGateway:
            block = config.block_for(gateway)
            if block is None:
                continue
            sent = block.model_dump(by_alias=True, exclude_unset=True)
            sent = {k: v for k, v in sent.items() if v != MASK}
            data[gateway.value] = {**(existing.get(gateway.value) or {}), **sent}
        data.update({"updatedAt": SERVER_TIMESTAMP, "updatedBy": updated_by})
        await self.store.set(CONFIG_COLLECTION, GATEWAY_CONFIG_DOC_ID, data, merge=True)
        logger.info(
            "gateway_config_saved by=%s blocks=%s",
            updated_by,
            sorted(k for k in data if k not in ("updatedAt", "updatedBy")),
        )
        saved = await self.load()
        return saved if saved is not None else config

    async def subscribe(
        self,
        on_change: Callable[[Optional[GatewayConfig]], None],
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> Unsubscribe:
        def _forward(record: Optional[Record]) -> None:
            on_change(GatewayConfig.model_validate(record) if record is not None else None)

        return await self.store.subscribe_document(
            CONFIG_COLLECTION, GATEWAY_CONFIG_DOC_ID, _forward, on_error
        )


__all__ = ["GatewayConfigRepository"]
