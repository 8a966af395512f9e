# -*- coding: utf-8 -*-
"""
app/modules/user_profile/enums/__init__.py
"""

from .subscription_tier_enum import SubscriptionTier

__all__ = ["SubscriptionTier"]
