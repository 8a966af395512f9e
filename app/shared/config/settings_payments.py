# -*- coding: utf-8 -*-
"""
app/shared/config/settings_payments.py

Configuración de pasarelas de pago para la tienda VR.

Descripción:
    Centraliza endpoints de proveedores, textos del checkout y parámetros
    de firma/redirect. Las credenciales NO viven aquí: se leen del
    documento `config/paymentGateways` en cada intento de pago.

Fecha: 06/10/2026
"""

from __future__ import annotations

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaymentsSettings(BaseSettings):
    """Configuración del sistema de pagos."""

    # =========================================================================
    # FRONTEND / CALLBACKS
    # =========================================================================

    public_base_url: str = Field(
        default="http://localhost:5173",
        validation_alias="PUBLIC_BASE_URL",
        description="Origen público del frontend (callbacks de redirect)",
    )

    # =========================================================================
    # RAZORPAY
    # =========================================================================

    razorpay_api_base_url: str = Field(default="https://api.razorpay.com/v1")
    razorpay_checkout_script_url: str = Field(default="https://checkout.razorpay.com/v1/checkout.js")
    razorpay_merchant_name: str = Field(default="Incredible India VR")
    razorpay_description: str = Field(default="VR Experience Access")
    razorpay_theme_color: str = Field(default="#F37254")

    # =========================================================================
    # CASHFREE
    # =========================================================================

    cashfree_sandbox_base_url: str = Field(default="https://sandbox.cashfree.com/pg")
    cashfree_production_base_url: str = Field(default="https://api.cashfree.com/pg")
    cashfree_api_version: str = Field(default="2023-08-01")
    cashfree_default_customer_phone: str = Field(
        default="9999999999",
        description="Teléfono usado cuando el perfil no tiene uno (campo obligatorio en Cashfree)",
    )

    # =========================================================================
    # PAYTM
    # =========================================================================

    paytm_staging_url: str = Field(default="https://securegw-stage.paytm.in/order/process")
    paytm_production_url: str = Field(default="https://securegw.paytm.in/order/process")
    paytm_website_name: str = Field(default="DEFAULT")
    paytm_callback_path: str = Field(default="/paytm/callback")

    # =========================================================================
    # STRIPE
    # =========================================================================

    stripe_payment_method_types: list[str] = Field(default_factory=lambda: ["card"])
    stripe_webhook_tolerance_seconds: int = Field(default=300)

    # Identificador de merchant "test" que activa endpoints sandbox
    sandbox_account_id: str = Field(default="test")

    @field_validator("public_base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @property
    def paytm_callback_url(self) -> str:
        return f"{self.public_base_url}{self.paytm_callback_path}"

    # =========================================================================
    # CONFIGURACIÓN DE PYDANTIC
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_payments_settings: Optional[PaymentsSettings] = None


def get_payments_settings() -> PaymentsSettings:
    """
    Obtiene la instancia global de configuración de pagos.

    Returns:
        PaymentsSettings: Configuración de pagos
    """
    global _payments_settings
    if _payments_settings is None:
        _payments_settings = PaymentsSettings()
    return _payments_settings


def reset_payments_settings() -> None:
    """Descarta el singleton (tests que cambian variables de entorno)."""
    global _payments_settings
    _payments_settings = None


__all__ = [
    "PaymentsSettings",
    "get_payments_settings",
    "reset_payments_settings",
]
# Fin del archivo app/shared/config/settings_payments.py
