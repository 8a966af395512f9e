# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/process_payment.py

Procesa un pago leyendo la configuración de pasarelas para ESTE intento.
"""

from __future__ import annotations

import logging
from typing import Optional

from app.modules.payments.models import GatewayConfig, Transaction
from app.modules.payments.repositories import GatewayConfigRepository
from app.modules.payments.schemas import PaymentResult
from app.modules.payments.services.payment_coordinator import PaymentCoordinator

logger = logging.getLogger(__name__)


async def process_payment(
    transaction: Transaction,
    method: str,
    *,
    coordinator: PaymentCoordinator,
    config_repo: GatewayConfigRepository,
) -> PaymentResult:
    """
    Lee config/paymentGateways y delega en el coordinador.
    Si la lectura falla, el intento se resuelve como configuración ausente.
    """
    config: Optional[GatewayConfig]
    try:
        config = await config_repo.load()
    except Exception:
        logger.exception("gateway_config_load_failed tx=%s", transaction.id)
        config = None

    return await coordinator.process(
        transaction.id,
        method,
        transaction.amount,
        transaction.currency,
        config,
    )


__all__ = ["process_payment"]
