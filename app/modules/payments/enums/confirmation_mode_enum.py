# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/confirmation_mode_enum.py

Cómo se confirmó el éxito de un intento de pago.
- confirmed: el proveedor devolvió confirmación (callback, intent confirmado, webhook)
- optimistic: se asumió éxito al publicar el redirect (Cashfree, Paytm)
"""

from enum import StrEnum


class ConfirmationMode(StrEnum):
    CONFIRMED = "confirmed"
    OPTIMISTIC = "optimistic"


__all__ = ["ConfirmationMode"]
