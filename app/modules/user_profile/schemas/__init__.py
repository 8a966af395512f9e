# -*- coding: utf-8 -*-
"""
app/modules/user_profile/schemas/__init__.py
"""

from .profile_schemas import UserProfileResponse

__all__ = ["UserProfileResponse"]
