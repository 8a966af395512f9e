# -*- coding: utf-8 -*-
"""
app/modules/payments/gateways/base.py

Contrato común de los adaptadores de pasarela.

Cada adaptador recibe el monto, la moneda y la referencia de la transacción,
junto con la configuración leída para ESTE intento, y devuelve un
GatewayResult. Si el bloque de la pasarela falta o está inactivo, no se
realiza ninguna llamada de red ni acción en el cliente.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, Optional

from app.modules.payments.enums import ConfirmationMode, PaymentGateway
from app.modules.payments.metrics.exporters.prometheus_exporter import observe_gateway_latency
from app.modules.payments.models import GatewayConfig, GatewayCredentials

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayRequest:
    amount: Decimal
    currency: str
    transaction_ref: str
    customer_id: Optional[str] = None
    customer_email: Optional[str] = None


@dataclass(frozen=True)
class GatewayResult:
    success: bool
    provider_payment_id: Optional[str] = None
    error: Optional[str] = None
    confirmation: ConfirmationMode = ConfirmationMode.CONFIRMED

    @classmethod
    def ok(
        cls,
        provider_payment_id: Optional[str],
        confirmation: ConfirmationMode = ConfirmationMode.CONFIRMED,
    ) -> "GatewayResult":
        return cls(success=True, provider_payment_id=provider_payment_id, confirmation=confirmation)

    @classmethod
    def failure(cls, error: str) -> "GatewayResult":
        return cls(success=False, error=error)


def not_configured_message(gateway: PaymentGateway) -> str:
    return f"{gateway.display_name} is not configured or enabled"


class GatewayAdapter(ABC):
    """Adaptador de una pasarela concreta."""

    gateway: ClassVar[PaymentGateway]

    async def attempt(self, request: GatewayRequest, config: GatewayConfig) -> GatewayResult:
        block = config.block_for(self.gateway)
        if block is None or not block.is_active:
            logger.info("gateway_disabled gateway=%s ref=%s", self.gateway.value, request.transaction_ref)
            return GatewayResult.failure(not_configured_message(self.gateway))

        started = time.perf_counter()
        try:
            return await self._attempt(request, block)
        finally:
            observe_gateway_latency(self.gateway.value, time.perf_counter() - started)

    @abstractmethod
    async def _attempt(self, request: GatewayRequest, credentials: GatewayCredentials) -> GatewayResult:
        ...


__all__ = [
    "GatewayAdapter",
    "GatewayRequest",
    "GatewayResult",
    "not_configured_message",
]
