# -*- coding: utf-8 -*-
"""
app/modules/user_profile/enums/subscription_tier_enum.py

Nivel de suscripción del usuario. premium da acceso a todo el contenido.
"""

from enum import StrEnum


class SubscriptionTier(StrEnum):
    FREE = "free"
    PREMIUM = "premium"


__all__ = ["SubscriptionTier"]
