# -*- coding: utf-8 -*-
"""
app/modules/user_profile/repositories/__init__.py
"""

from .profile_repository import ProfileRepository

__all__ = ["ProfileRepository"]
