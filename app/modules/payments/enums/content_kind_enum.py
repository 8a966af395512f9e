# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/content_kind_enum.py

Tipo de contenido que se compra en una transacción.
- destination: acceso a un destino VR
- video: acceso a un video 360°
- premium: suscripción premium (acceso a todo)
"""

from enum import StrEnum


class ContentKind(StrEnum):
    DESTINATION = "destination"
    PREMIUM = "premium"
    VIDEO = "video"


__all__ = ["ContentKind"]
