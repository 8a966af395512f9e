# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/payment_gateway_enum.py

Pasarelas de pago soportadas (conjunto cerrado).
"""

from enum import StrEnum


class PaymentGateway(StrEnum):
    RAZORPAY = "razorpay"
    CASHFREE = "cashfree"
    PAYTM = "paytm"
    STRIPE = "stripe"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


__all__ = ["PaymentGateway"]
