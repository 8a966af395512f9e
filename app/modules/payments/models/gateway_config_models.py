# -*- coding: utf-8 -*-
"""
app/modules/payments/models/gateway_config_models.py

Credenciales por pasarela (documento único `config/paymentGateways`).

Un bloque ausente o con isActive=false deshabilita su adaptador.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.modules.payments.enums import PaymentGateway

CONFIG_COLLECTION = "config"
GATEWAY_CONFIG_DOC_ID = "paymentGateways"

MASK = "********"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GatewayCredentials(_CamelModel):
    is_active: bool = False

    secret_fields: ClassVar[tuple[str, ...]] = ()

    def masked(self) -> "GatewayCredentials":
        hidden = {name: MASK for name in self.secret_fields if getattr(self, name)}
        return self.model_copy(update=hidden)


class RazorpayCredentials(GatewayCredentials):
    key_id: str = ""
    key_secret: str = ""

    secret_fields: ClassVar[tuple[str, ...]] = ("key_secret",)


class CashfreeCredentials(GatewayCredentials):
    client_id: str = ""
    client_secret: str = ""

    secret_fields: ClassVar[tuple[str, ...]] = ("client_secret",)


class PaytmCredentials(GatewayCredentials):
    merchant_id: str = ""
    merchant_key: str = ""

    secret_fields: ClassVar[tuple[str, ...]] = ("merchant_key",)


class StripeCredentials(GatewayCredentials):
    publishable_key: str = ""
    secret_key: str = ""
    webhook_secret: str = ""

    secret_fields: ClassVar[tuple[str, ...]] = ("secret_key", "webhook_secret")


class GatewayConfig(_CamelModel):
    razorpay: Optional[RazorpayCredentials] = None
    cashfree: Optional[CashfreeCredentials] = None
    paytm: Optional[PaytmCredentials] = None
    stripe: Optional[StripeCredentials] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None

    def block_for(self, gateway: PaymentGateway) -> Optional[GatewayCredentials]:
        return getattr(self, gateway.value)

    def is_enabled(self, gateway: PaymentGateway) -> bool:
        block = self.block_for(gateway)
        return block is not None and block.is_active

    def enabled_gateways(self) -> list[PaymentGateway]:
        return [g for g in PaymentGateway if self.is_enabled(g)]

    def masked(self) -> "GatewayConfig":
        """Copia con secretos ocultos (respuestas de admin)."""
        update = {}
        for gateway in PaymentGateway:
            block = self.block_for(gateway)
            if block is not None:
                update[gateway.value] = block.masked()
        return self.model_copy(update=update)


__all__ = [
    "CONFIG_COLLECTION",
    "GATEWAY_CONFIG_DOC_ID",
    "MASK",
    "CashfreeCredentials",
    "GatewayConfig",
    "GatewayCredentials",
    "PaytmCredentials",
    "RazorpayCredentials",
    "StripeCredentials",
]
