# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/currency_enum.py

Monedas aceptadas en el checkout y su número de decimales
para convertir a unidades mínimas (paise, centavos, ...).
"""

from enum import StrEnum


class Currency(StrEnum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    INR = "INR"

    @property
    def minor_unit_exponent(self) -> int:
        return 0 if self in ZERO_DECIMAL_CURRENCIES else 2


ZERO_DECIMAL_CURRENCIES = frozenset({Currency.JPY})


__all__ = ["Currency", "ZERO_DECIMAL_CURRENCIES"]

# Fin del archivo app/modules/payments/enums/currency_enum.py
