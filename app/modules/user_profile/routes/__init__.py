# -*- coding: utf-8 -*-
"""
app/modules/user_profile/routes/__init__.py

Rutas del módulo de perfil de usuario.
"""

from .profile_routes import router as user_profile_router

__all__ = ["user_profile_router"]
