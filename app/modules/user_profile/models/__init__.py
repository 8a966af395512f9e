# -*- coding: utf-8 -*-
"""
app/modules/user_profile/models/__init__.py
"""

from .user_profile import USERS_COLLECTION, UserProfile

__all__ = ["USERS_COLLECTION", "UserProfile"]
