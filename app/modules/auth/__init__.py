# -*- coding: utf-8 -*-
"""
app/modules/auth/__init__.py

Identidad del usuario a partir de JWT (python-jose).
"""

from .dependencies import CurrentUser, get_current_user, require_admin, user_from_token
from .security import TokenDecodeError, create_access_token, decode_access_token

__all__ = [
    "CurrentUser",
    "TokenDecodeError",
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "require_admin",
    "user_from_token",
]
