# -*- coding: utf-8 -*-
"""
app/modules/payments/utils/money.py

Conversión de montos decimales a unidades mínimas de cada moneda.
"""

from decimal import ROUND_HALF_UP, Decimal

from app.modules.payments.enums import ZERO_DECIMAL_CURRENCIES


def to_minor_units(amount: Decimal, currency: str) -> int:
    """
    4.99 USD -> 499; 500 JPY -> 500.

    Examples:
        >>> to_minor_units(Decimal("4.995"), "INR")
        500
    """
    exponent = 0 if currency.upper() in ZERO_DECIMAL_CURRENCIES else 2
    scaled = Decimal(amount) * (Decimal(10) ** exponent)
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_amount(amount: Decimal) -> str:
    """Representación decimal sin notación científica ("4.99", "100")."""
    text = format(Decimal(amount), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


__all__ = ["format_amount", "to_minor_units"]
